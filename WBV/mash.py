#
# Copyright (c) 2018, 2021 Antti Kantee <pooka@iki.fi>
#
# Permission to use, copy, modify, and distribute this software for any
# purpose with or without fee is hereby granted, provided that the above
# copyright notice and this permission notice appear in all copies.
#
# THE SOFTWARE IS PROVIDED "AS IS" AND THE AUTHOR DISCLAIMS ALL WARRANTIES
# WITH REGARD TO THIS SOFTWARE INCLUDING ALL IMPLIED WARRANTIES OF
# MERCHANTABILITY AND FITNESS. IN NO EVENT SHALL THE AUTHOR BE LIABLE FOR
# ANY SPECIAL, DIRECT, INDIRECT, OR CONSEQUENTIAL DAMAGES OR ANY DAMAGES
# WHATSOEVER RESULTING FROM LOSS OF USE, DATA OR PROFITS, WHETHER IN AN
# ACTION OF CONTRACT, NEGLIGENCE OR OTHER TORTIOUS ACTION, ARISING OUT OF
# OR IN CONNECTION WITH THE USE OR PERFORMANCE OF THIS SOFTWARE.
#


#
# Infusion mash helpers.  The classic homebrewing infusion equations
# work in quarts, pounds and degrees Fahrenheit, with the grain's heat
# capacity taken as 0.2 of the equivalent mass of water:
#
#	strike:		Tw = (0.2 / R) * (T2 - T1) + T2
#	infusion:	Wa = (T2 - T1) * (0.2 G + Wm) / (Tw - T2)
#	reverse:	W1 = (W2 * (T2 - Tw) + 0.2 G * (T2 - T1)) / (T1 - Tw)
#
# where R = water-to-grist ratio (qt/lb), G = grain mass (lb),
# Wm = water in the mash (qt), Wa = water added (qt), T1 = temperature
# before, T2 = temperature after and Tw = temperature of the water.
#
# The results can be fed into ProcessParameters as infusions.
#

from WBV import constants
from WBV import pipeline
from WBV import stages
from WBV.params import RecipeParameters
from WBV.units import Mass, Temperature, Volume, _Volume
from WBV.utils import checktype, checktypes, ComputationError

def _F(t):
	return t.valueas(Temperature.degF)

def _qt(v):
	return v.valueas(Volume.QUART)

def _lb(m):
	return m.valueas(Mass.LB)

def strike_temperature(strike_volume, grain_mass, grain_temp, target_temp):
	checktypes([(strike_volume, Volume), (grain_mass, Mass),
	    (grain_temp, Temperature), (target_temp, Temperature)])
	if strike_volume <= 0 or grain_mass <= 0:
		raise ComputationError('strike needs both water and grain',
		    stage = stages.STRIKE, quantity = 'strike_volume',
		    value = float(strike_volume))

	r = _qt(strike_volume) / _lb(grain_mass)
	t2 = _F(target_temp)
	tw = (constants.grain_relativecapa / r) * (t2 - _F(grain_temp)) + t2

	rv = Temperature(tw, Temperature.degF)
	if rv > 100:
		raise ComputationError('could not satisfy mashin temperature '
		    + 'with available water. check mash parameters.',
		    stage = stages.STRIKE, quantity = 'strike_temperature',
		    value = float(rv))
	return rv

def infusion_volume(grain_mass, mash_water, from_temp, to_temp, water_temp):
	checktypes([(grain_mass, Mass), (mash_water, Volume),
	    (from_temp, Temperature), (to_temp, Temperature),
	    (water_temp, Temperature)])
	if water_temp <= to_temp:
		raise ComputationError('infusion water must be hotter than '
		    + 'the target rest', quantity = 'infusion_temp',
		    value = float(water_temp))

	t1 = _F(from_temp)
	t2 = _F(to_temp)
	wa = (t2 - t1) \
	    * (constants.grain_relativecapa * _lb(grain_mass) + _qt(mash_water)) \
	    / (_F(water_temp) - t2)
	return _Volume(Volume(wa, Volume.QUART))

# how much was in the mash before an infusion that brought it from
# from_temp to to_temp, given what is in there after.  returns the
# infused volume.
def reverse_infusion_volume(grain_mass, final_water, from_temp, to_temp,
    water_temp):
	checktypes([(grain_mass, Mass), (final_water, Volume),
	    (from_temp, Temperature), (to_temp, Temperature),
	    (water_temp, Temperature)])
	if water_temp <= to_temp:
		raise ComputationError('infusion water must be hotter than '
		    + 'the target rest', quantity = 'infusion_temp',
		    value = float(water_temp))

	t1 = _F(from_temp)
	t2 = _F(to_temp)
	tw = _F(water_temp)
	w2 = _qt(final_water)
	w1 = (w2 * (t2 - tw)
	    + constants.grain_relativecapa * _lb(grain_mass) * (t2 - t1)) \
	    / (t1 - tw)
	return _Volume(Volume(w2 - w1, Volume.QUART))

# infusion volumes for a list of rest temperatures, the first of which
# is reached by the strike water.  the volumes go into mash_water,
# i.e. the first element is the water added to go from rest 1 to rest 2.
def infusions(grain_mass, strike_volume, rests, water_temp):
	checktypes([(grain_mass, Mass), (strike_volume, Volume)])
	rv = []
	water = strike_volume
	for prev, nxt in zip(rests, rests[1:]):
		checktype(nxt, Temperature)
		if nxt < prev:
			raise ComputationError('infusions cannot cool the mash',
			    quantity = 'rest', value = float(nxt))
		inf = infusion_volume(grain_mass, water, prev, nxt, water_temp)
		rv.append(inf)
		water = _Volume(water + inf)
	return tuple(rv)

# the other way around: the strike volume needed so that after all
# infusions there is final_water in the mash
def strike_for(grain_mass, final_water, rests, water_temp):
	checktypes([(grain_mass, Mass), (final_water, Volume)])
	water = final_water
	for prev, nxt in reversed(list(zip(rests, rests[1:]))):
		inf = reverse_infusion_volume(grain_mass, water, prev, nxt,
		    water_temp)
		water = _Volume(water - inf)
		if water <= 0:
			raise ComputationError('no room for strike water',
			    stage = stages.STRIKE, quantity = 'strike_volume',
			    value = float(water))
	return water

# compute with the infusions given by mash rest temperatures instead of
# volumes.  the infusions depend on the strike water, which in turn
# comes out of the pipeline, so run it once without infusions to get
# the water and grain figures, derive the infusions from those and
# run again.
#
# calculating backwards, the total mash water is fixed by the package
# volume regardless of how it is split, so the first split is exact.
# calculating forwards, the infusions grow the batch, which grows the
# grain bill and the strike water, which changes the infusions.  so
# keep going until the infusions no longer move.
_maxpasses = 100

def _moved(a, b):
	return max([abs(x - y) for x, y in zip(a, b)]) \
	    > constants.volume_epsilon

def compute_withrests(process, recipe, rests, water_temp):
	checktypes([(water_temp, Temperature)])
	for r in rests:
		checktype(r, Temperature)
	if len(process.infusions) > 0:
		raise ComputationError('give either infusion volumes or '
		    + 'mash rests, not both')

	res = pipeline.compute(process, recipe)
	if len(rests) < 2:
		return res
	if res.grain_mass() <= 0:
		raise ComputationError('mash rests without grain',
		    quantity = 'grain_mass', value = 0.0)

	if res.direction == RecipeParameters.BACKWARD:
		strike = strike_for(res.grain_mass(), res.mash_volume(),
		    rests, water_temp)
	else:
		strike = res.strike_volume()
	infs = infusions(res.grain_mass(), strike, rests, water_temp)

	for i in range(_maxpasses):
		res = pipeline.compute(process._replace(infusions = infs),
		    recipe)
		nxt = infusions(res.grain_mass(), res.strike_volume(),
		    rests, water_temp)
		if not _moved(infs, nxt):
			break
		infs = nxt
	else:
		raise ComputationError('infusions for the mash rests failed '
		    + 'to converge in ' + str(_maxpasses) + ' tries',
		    stage = stages.mashstep(1), quantity = 'infusions',
		    value = float(sum(infs)))
	return res
