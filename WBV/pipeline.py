#
# Copyright (c) 2021 Antti Kantee <pooka@iki.fi>
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
# The stage pipeline: volumes and gravities from strike water to
# package.
#
# If the recipe is anchored on package volume, we calculate backwards
# from the package through the inverse of every stage to find the
# strike volume.  If the recipe is anchored on original gravity, the
# mash volume is an input and the grain bill is scaled so that the
# fermentor gravity hits the target.  Either way, once the strike
# volume is known, we calculate forwards through the very same stages
# to get the volumes and gravities we report.
#

from collections import namedtuple

from WBV import constants
from WBV import fermentables
from WBV import stages
from WBV.params import ProcessParameters, RecipeParameters
from WBV.units import Volume, Strength, _Volume
from WBV.utils import checktype, ComputationError, notice, warn

Checkpoint = namedtuple('Checkpoint', ['name', 'volume', 'gravity', 'change'])

class _Context(namedtuple('_Context', ['process', 'recipe', 'grainbill',
    'absorption', 'extract_points', 'evaporation', 'sparge_volume',
    'strike_volume'])):
	__slots__ = ()

	def final_gravity(self, og):
		r = self.recipe
		if not r.ferments():
			return None
		if r.final_gravity is not None:
			return r.final_gravity
		return og.attenuate_bypercent(r.attenuation)['ae']

def _mkcontext(process, recipe, grainbill, sparge, strike):
	return _Context(process, recipe, grainbill,
	    process.grain_absorption(grainbill),
	    fermentables.extract_points(grainbill, recipe.efficiency),
	    process.evaporation(),
	    sparge, strike)

class StageResult:
	def __init__(self, direction, grainbill, grain_scale, efficiency,
	    name = None):
		self.direction = direction
		self.grainbill = grainbill
		self.grain_scale = grain_scale
		self.efficiency = efficiency
		self.name = name
		self._checkpoints = []

	def _append(self, cp):
		if cp.name in self.names():
			raise ComputationError('duplicate checkpoint',
			    stage = cp.name)
		self._checkpoints.append(cp)

	@property
	def checkpoints(self):
		return tuple(self._checkpoints)

	def names(self):
		return [cp.name for cp in self._checkpoints]

	def __iter__(self):
		return iter(self.checkpoints)

	def __len__(self):
		return len(self._checkpoints)

	def __getitem__(self, name):
		for cp in self._checkpoints:
			if cp.name == name:
				return cp
		raise KeyError(name)

	def volume(self, name):
		return self[name].volume

	def gravity(self, name):
		return self[name].gravity

	# the mash after all infusions
	def mash(self):
		cp = self[stages.STRIKE]
		for x in self._checkpoints:
			if x.name.startswith(stages.MASH):
				cp = x
		return cp

	def mash_volume(self):
		return self.mash().volume

	def strike_volume(self):
		return self.volume(stages.STRIKE)

	def original_gravity(self):
		return self.gravity(stages.FERMENTOR)

	def final_gravity(self):
		return self.gravity(stages.POSTFERMENT)

	def package_volume(self):
		return self.volume(stages.PACKAGE)

	# water going in, be it strike, infusion, sparge or dilution
	def total_water(self):
		v = sum([cp.change for cp in self._checkpoints
		    if cp.change > 0], 0.0)
		return _Volume(v)

	def grain_mass(self):
		return fermentables.grain_mass(self.grainbill)

	def _attenuation(self):
		og = self.original_gravity()
		fg = self.final_gravity()
		# water ferments to nothing
		if og.valueas(Strength.SG_PTS) <= 0 \
		    or abs(og - fg) < 0.0000001:
			return None
		return og.attenuate_bystrength(fg)

	def apparent_attenuation(self):
		a = self._attenuation()
		if a is None:
			return 0.0
		return a['aa']

	# ABV of the fermented beer, before post-ferment dilution
	def abv(self):
		a = self._attenuation()
		if a is None:
			return 0.0
		return a['abv']

	# dilution after fermentation lowers the ABV with the volume
	def product_abv(self):
		return self.abv() * self.volume(stages.POSTFERMENT) \
		    / self.package_volume()

	def __str__(self):
		return '\n'.join(['{:18}{:>10}{:>8}'.format(cp.name,
		    cp.volume.stras(Volume.LITER),
		    cp.gravity.stras(Strength.SG)) for cp in self])

def _checkstate(name, w):
	v = w.volume()
	if v <= constants.volume_epsilon:
		raise ComputationError('non-positive volume', stage = name,
		    quantity = 'volume', value = float(v))
	s = w.strength()
	if s < 1.0 - 0.000001:
		raise ComputationError('gravity below 1.000', stage = name,
		    quantity = 'gravity', value = float(s))

def _find(cps, name):
	return [cp for cp in cps if cp.name == name][0]

def _stagerr(e, name):
	if e.stage is None:
		e.stage = name
	return e

def _forward(table, ctx):
	res = []
	w = None
	for s in table:
		try:
			w = s.forward(w, ctx)
		except ComputationError as e:
			raise _stagerr(e, s.name)
		_checkstate(s.name, w)
		res.append(Checkpoint(s.name, w.volume(), w.strength(),
		    _Volume(s.amount(ctx))))
	return res

# walk the stages in reverse from the package volume.  the strike
# stage is the identity, so what comes out is the strike volume.
def _backward(table, volume, ctx):
	v = volume
	for s in reversed(table):
		v = s.backward(v, ctx)
		if v <= constants.volume_epsilon:
			raise ComputationError('non-positive volume '
			    + 'calculating backwards', stage = s.name,
			    quantity = 'volume', value = float(v))
	return v

def _solve_backward(process, recipe, table):
	if process.sparge_to_target():
		raise ComputationError('package volume anchor requires '
		    + 'a fixed sparge volume', quantity = 'preboil_volume',
		    value = process.preboil_volume)
	if process.mash_volume is not None:
		warn('mash volume is derived from the package volume, '
		    + 'ignoring given value\n')

	grainbill = recipe.grainbill
	ctx = _mkcontext(process, recipe, grainbill,
	    process.sparge_volume, None)
	strike = _backward(table, recipe.target_package_volume, ctx)
	return ctx._replace(strike_volume = strike), 1.0

def _solve_forward(process, recipe, table):
	if process.mash_volume is None:
		raise ComputationError('original gravity anchor requires '
		    + 'a mash volume', quantity = 'mash_volume', value = None)

	# the strike stage knows the strike volume from the mash volume,
	# so with strike_volume unset the table runs forward from the top
	def ctxfor(grainbill, sparge):
		return _mkcontext(process, recipe, grainbill, sparge, None)

	sparge = process.sparge_volume
	if process.sparge_to_target():
		mashtab = stages.upto(table, stages.PRESPARGE)
		presparge = _forward(mashtab,
		    ctxfor(recipe.grainbill, None))[-1].volume
		sparge = _Volume(process.preboil_volume - presparge)
		if sparge < 0:
			raise ComputationError('preboil volume target below '
			    + 'presparge volume', stage = stages.PREBOIL,
			    quantity = 'sparge_volume', value = float(sparge))

	# volumes after lautering do not depend on the grain mass,
	# so the fermentor gravity points are linear in the grain bill
	# and we can scale it in one go
	og = _forward(stages.upto(table, stages.FERMENTOR),
	    ctxfor(recipe.grainbill, sparge))[-1].gravity
	pts = og.valueas(Strength.SG_PTS)
	if pts <= 0:
		raise ComputationError('grain bill produces no extract',
		    stage = stages.FERMENTOR, quantity = 'gravity',
		    value = float(og))
	scale = recipe.target_original_gravity.valueas(Strength.SG_PTS) / pts
	if abs(scale - 1.0) > .0001:
		notice('Scaling grain bill by a factor of '
		    + '{:.4f}'.format(scale) + '\n')

	grainbill = fermentables.scale_grainbill(recipe.grainbill, scale)
	return ctxfor(grainbill, sparge), scale

def compute(process, recipe):
	checktype(process, ProcessParameters)
	checktype(recipe, RecipeParameters)

	table = stages.stagetable(len(process.infusions))
	if recipe.direction() == RecipeParameters.BACKWARD:
		ctx, scale = _solve_backward(process, recipe, table)
	else:
		ctx, scale = _solve_forward(process, recipe, table)

	cps = _forward(table, ctx)

	if process.boilvol_max is not None:
		pb = _find(cps, stages.PREBOIL)
		if pb.volume > process.boilvol_max:
			warn('preboil volume ' + str(pb.volume)
			    + ' exceeds kettle capacity '
			    + str(process.boilvol_max) + '\n')

	res = StageResult(recipe.direction(), ctx.grainbill, scale,
	    recipe.efficiency, recipe.name)
	for cp in cps:
		res._append(cp)
	return res
