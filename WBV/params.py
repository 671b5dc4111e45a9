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
# Process and recipe parameters for the stage pipeline.  Both are
# immutable once constructed, and construction either validates all
# of the inputs or fails with InvalidParameter.
#

from collections import namedtuple

from WBV.fermentables import Fermentable, grain_mass
from WBV.units import Volume, Strength, Duration, _Volume, _Duration
from WBV.utils import checktype, checknonneg, InvalidParameter

_processfields = [
	'absorption_rate',
	'mash_volume',
	'infusions',
	'sparge_volume',
	'preboil_volume',
	'boiloff_perhour',
	'boil_time',
	'kettle_loss',
	'postboil_dilution',
	'fermentor_loss',
	'postferment_dilution',
	'boilvol_max',
]

class ProcessParameters(namedtuple('ProcessParameters', _processfields)):
	__slots__ = ()

	def __new__(cls, absorption_rate,
	    mash_volume = None,
	    infusions = (),
	    sparge_volume = None,
	    preboil_volume = None,
	    boiloff_perhour = _Volume(0),
	    boil_time = _Duration(0),
	    kettle_loss = _Volume(0),
	    postboil_dilution = _Volume(0),
	    fermentor_loss = _Volume(0),
	    postferment_dilution = _Volume(0),
	    boilvol_max = None):

		if isinstance(absorption_rate, bool) \
		    or not isinstance(absorption_rate, (int, float)):
			raise InvalidParameter('absorption rate must be '
			    + 'a number (liters per kilogram)',
			    quantity = 'absorption_rate',
			    value = absorption_rate)
		checknonneg(absorption_rate, 'absorption_rate')
		absorption_rate = float(absorption_rate)

		optvols = [
			('mash_volume', mash_volume),
			('sparge_volume', sparge_volume),
			('preboil_volume', preboil_volume),
			('boilvol_max', boilvol_max),
		]
		vols = [
			('boiloff_perhour', boiloff_perhour),
			('kettle_loss', kettle_loss),
			('postboil_dilution', postboil_dilution),
			('fermentor_loss', fermentor_loss),
			('postferment_dilution', postferment_dilution),
		]
		vols += [x for x in optvols if x[1] is not None]

		infusions = tuple(infusions)
		for i, inf in enumerate(infusions):
			vols.append(('infusion ' + str(i+1), inf))

		for name, v in vols:
			checktype(v, Volume)
			checknonneg(v, name)
		checktype(boil_time, Duration)
		checknonneg(boil_time, 'boil_time')

		if (sparge_volume is None) == (preboil_volume is None):
			raise InvalidParameter('exactly one of sparge volume '
			    + 'or preboil volume target must be given')

		return super(ProcessParameters, cls).__new__(cls,
		    absorption_rate, mash_volume, infusions,
		    sparge_volume, preboil_volume,
		    boiloff_perhour, boil_time, kettle_loss,
		    postboil_dilution, fermentor_loss, postferment_dilution,
		    boilvol_max)

	def sparge_to_target(self):
		return self.sparge_volume is None

	def evaporation(self):
		return _Volume(self.boiloff_perhour
		    * self.boil_time.valueas(Duration.HOUR))

	def grain_absorption(self, grainbill):
		return _Volume(grain_mass(grainbill) * self.absorption_rate)

	def total_infusions(self):
		return _Volume(sum(self.infusions, 0.0))

_recipefields = [
	'grainbill',
	'efficiency',
	'target_original_gravity',
	'target_package_volume',
	'final_gravity',
	'attenuation',
	'name',
]

def _checknumber(value, name):
	if isinstance(value, bool) or not isinstance(value, (int, float)):
		raise InvalidParameter(name + ' must be a number',
		    quantity = name, value = value)

class RecipeParameters(namedtuple('RecipeParameters', _recipefields)):
	__slots__ = ()

	# computation direction, decided by the anchor
	FORWARD=	'forward'
	BACKWARD=	'backward'

	def __new__(cls, grainbill, efficiency,
	    target_original_gravity = None,
	    target_package_volume = None,
	    final_gravity = None,
	    attenuation = None,
	    name = None):

		grainbill = tuple(grainbill)
		for f in grainbill:
			checktype(f, Fermentable)

		_checknumber(efficiency, 'efficiency')
		if efficiency <= 0 or efficiency > 1:
			raise InvalidParameter('efficiency must be in (0, 1]',
			    quantity = 'efficiency', value = efficiency)

		if (target_original_gravity is None) \
		    == (target_package_volume is None):
			raise InvalidParameter('exactly one of target original '
			    + 'gravity or target package volume must be given')

		if target_original_gravity is not None:
			checktype(target_original_gravity, Strength)
			if target_original_gravity <= 1.0:
				raise InvalidParameter('target original gravity '
				    + 'must be above 1.000',
				    quantity = 'target_original_gravity',
				    value = float(target_original_gravity))
			if len(grainbill) == 0 \
			    or grain_mass(grainbill) <= 0:
				raise InvalidParameter('gravity target requires '
				    + 'a grain bill')
		else:
			checktype(target_package_volume, Volume)
			if target_package_volume <= 0:
				raise InvalidParameter('target package volume '
				    + 'must be positive',
				    quantity = 'target_package_volume',
				    value = float(target_package_volume))

		if final_gravity is not None and attenuation is not None:
			raise InvalidParameter('give either final gravity or '
			    + 'attenuation, not both')
		if final_gravity is not None:
			checktype(final_gravity, Strength)
			if final_gravity < 1.0:
				raise InvalidParameter('final gravity below 1.000',
				    quantity = 'final_gravity',
				    value = float(final_gravity))
		if attenuation is not None:
			_checknumber(attenuation, 'attenuation')
			if attenuation < 0 or attenuation > 100:
				raise InvalidParameter('attenuation must be a '
				    + 'percentage',
				    quantity = 'attenuation', value = attenuation)

		return super(RecipeParameters, cls).__new__(cls,
		    grainbill, float(efficiency),
		    target_original_gravity, target_package_volume,
		    final_gravity, attenuation, name)

	def direction(self):
		if self.target_package_volume is not None:
			return self.BACKWARD
		return self.FORWARD

	def ferments(self):
		return self.final_gravity is not None \
		    or self.attenuation is not None
