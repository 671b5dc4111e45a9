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
# Quantities are floats in a fixed internal unit (liters, kilograms,
# degrees Celsius, specific gravity, minutes) which remember the unit
# they were given in.  Linear units are described by a table of
# (factor, format) per unit, where factor converts to the internal unit.
#

import math

from WBV.utils import checktype, PilotError, InvalidParameter

from WBV import constants

from WBV.getparam import getparam

def _checksystem(system):
	if system not in ('metric', 'us'):
		raise PilotError('invalid unit system: ' + str(system))

class WBVUnit(float):
	def __new__(cls, value, unit):
		rv = super(WBVUnit, cls).__new__(cls, value)
		rv.inputunit = unit
		return rv

	def __init__(self, value, unit):
		super(WBVUnit, self).__init__()

class _Linear(WBVUnit):
	_units = {}

	def __new__(cls, value, unit):
		if unit not in cls._units:
			raise InvalidParameter('invalid ' + cls._kind + ' unit')
		factor = cls._units[unit][0]
		return super(_Linear, cls).__new__(cls, value * factor, unit)

	def valueas(self, unit):
		if unit not in self._units:
			raise PilotError('invalid ' + self._kind + ' unit')
		return float(self) / self._units[unit][0]

	def stras(self, unit):
		if unit not in self._units:
			raise PilotError('invalid ' + self._kind + ' unit')
		return self._units[unit][1].format(self.valueas(unit))

	# the largest unit of the system in which the value is at least one
	def stras_system(self, system):
		_checksystem(system)
		for unit in self._systems[system]:
			if abs(self.valueas(unit)) >= 1:
				break
		return self.stras(unit)

	def __str__(self):
		return self.stras_system(getparam('units_output'))

class Volume(_Linear):
	LITER		= object()
	MILLILITER	= object()
	QUART		= object()
	GALLON		= object()
	BARREL		= object()

	_kind = 'Volume'
	_units = {
		LITER		: (1.0, '{:.1f}l'),
		MILLILITER	: (1/1000.0, '{:.0f}ml'),
		QUART		: (constants.litersperquart, '{:.1f}qt'),
		GALLON		: (constants.literspergallon, '{:.1f}gal'),
		BARREL		: (constants.literspergallon
				    * constants.gallonsperbarrel, '{:.1f}bbl'),
	}
	_systems = {
		'metric'	: [LITER],
		'us'		: [BARREL, GALLON, QUART],
	}

class Mass(_Linear):
	G	= object()
	KG	= object()
	OZ	= object()
	LB	= object()

	_kind = 'Mass'
	_units = {
		G	: (1/1000.0, '{:.0f} g'),
		KG	: (1.0, '{:.2f} kg'),
		OZ	: (constants.gramsperounce/1000.0, '{:.2f} oz'),
		LB	: (constants.gramsperpound/1000.0, '{:.2f} lb'),
	}
	_systems = {
		'metric'	: [KG, G],
		'us'		: [LB, OZ],
	}

class Temperature(WBVUnit):
	degC	= object()
	degF	= object()
	K	= object()

	def __new__(cls, value, unit):
		if unit is Temperature.degF:
			value = Temperature.FtoC(value)
		elif unit is Temperature.K:
			value = value + constants.absolute_zero_c
		elif unit is not Temperature.degC:
			raise InvalidParameter('invalid Temperature unit')
		return super(Temperature, cls).__new__(cls, value, unit)

	@staticmethod
	def FtoC(temp):
		return (temp - 32) / 1.8

	@staticmethod
	def CtoF(temp):
		return 1.8*temp + 32

	def valueas(self, unit):
		if unit is Temperature.degC:
			return float(self)
		elif unit is Temperature.degF:
			return Temperature.CtoF(float(self))
		elif unit is Temperature.K:
			return float(self) - constants.absolute_zero_c
		raise PilotError('invalid Temperature unit')

	def stras(self, unit):
		sym = { self.degC: 'C', self.degF: 'F' }
		if unit not in sym:
			raise PilotError('invalid temperature unit')
		return '{:.1f}'.format(self.valueas(unit)) + chr(0x00b0) \
		    + sym[unit]

	def stras_system(self, system):
		_checksystem(system)
		return self.stras(self.degC if system == 'metric' else self.degF)

	def __str__(self):
		return self.stras_system(getparam('units_output'))

def _poly(coeffs, x):
	return sum([c * math.pow(x, i) for i, c in enumerate(coeffs)])

class Strength(WBVUnit):
	PLATO	= object()
	SG	= object()
	SG_PTS	= object()

	def __new__(cls, value, unit):
		if unit is Strength.SG_PTS:
			value = cls.from_points(value)
		elif unit is Strength.PLATO:
			value = cls.plato_to_sg(value)
		elif unit is not Strength.SG:
			raise InvalidParameter('invalid Strength unit')
		return super(Strength, cls).__new__(cls, value, unit)

	# "Specific Gravity Measurement Methods and Applications in Brewing"
	_platopoly = (1.0000131, 0.00386777, 1.27447e-5, 6.34964e-8)

	# sg -> plato, the most accurate polynomial for each range.  the
	# first one is constrained to 1.000 = 0degP, the middle one is ASBC
	_sgpolys = [
		(1.0020, (2737.9302, -11754.5873, 17868.5255,
		    -11682.9897, 2831.1213)),
		(1.088, (-616.868, 1111.14, -630.272, 135.997)),
		(None, (-585.23918, 1038.82303, -577.93337, 124.3964)),
	]

	# plato_to_sg and sg_to_plato are not exact inverses, the
	# difference is below what a homebrewery can measure
	@staticmethod
	def plato_to_sg(plato):
		return _poly(Strength._platopoly, plato)

	@staticmethod
	def sg_to_plato(sg):
		for limit, coeffs in Strength._sgpolys:
			if limit is None or sg < limit:
				return _poly(coeffs, sg)

	@staticmethod
	def to_points(sg):
		return (sg - 1) * 1000

	@staticmethod
	def from_points(points):
		return points / 1000.0 + 1

	def valueas(self, unit):
		if unit is Strength.SG:
			return float(self)
		elif unit is Strength.SG_PTS:
			return self.to_points(float(self))
		elif unit is Strength.PLATO:
			return self.sg_to_plato(float(self))
		raise PilotError('invalid Strength unit')

	# Cutaia, Reid and Speers: "Examination of the Relationships
	# Between Original, Real and Apparent Extracts, and Alcohol in
	# Pilot Plant and Commercially Produced Beers".  extracts in Plato:
	#
	#	ABW = 0.38726*(OE-AE) + 0.00307*(OE-AE)^2
	#	ABV = ABW * SG(AE) / 0.7907
	def _attenuate(self, to, aa):
		diff = self.valueas(self.PLATO) - to.valueas(self.PLATO)
		abw = 0.38726*diff + 0.00307*diff*diff
		if aa is None:
			aa = 100 * (1 - to.valueas(self.SG_PTS)
			    / self.valueas(self.SG_PTS))
		return {
			'ae'	: to,
			'aa'	: aa,
			'abv'	: abw * float(to) / 0.7907,
			'abw'	: abw,
		}

	# apparent attenuation is on gravity points, not Plato
	def attenuate_bypercent(self, aa):
		pts = self.valueas(self.SG_PTS) * (1 - aa/100.0)
		return self._attenuate(Strength(pts, self.SG_PTS), aa)

	def attenuate_bystrength(self, strength):
		checktype(strength, Strength)
		return self._attenuate(strength, None)

	def stras(self, unit):
		if unit is self.PLATO:
			return '{:.1f}'.format(self.valueas(unit)) \
			    + chr(0x00b0) + 'P'
		elif unit is self.SG:
			return '{:.3f}'.format(self)
		elif unit is self.SG_PTS:
			return '{:.1f} pts'.format(self.valueas(unit))
		raise PilotError('invalid Strength string unit')

	def __str__(self):
		if getparam('strength_output') == 'plato':
			return self.stras(self.PLATO)
		return self.stras(self.SG)

class Duration(WBVUnit):
	MINUTE	= 'min'
	HOUR	= 'h'

	_minutes = { MINUTE: 1, HOUR: 60 }

	def __new__(cls, value, unit):
		if unit not in cls._minutes:
			raise InvalidParameter('invalid Duration unit')
		return super(Duration, cls).__new__(cls,
		    value * cls._minutes[unit], unit)

	def valueas(self, unit):
		if unit not in self._minutes:
			raise PilotError('invalid Duration unit')
		return float(self) / self._minutes[unit]

	def __str__(self):
		return '{:.0f} min'.format(self)

# shorthands for recipe programs
class M(Mass):
	pass
class S(Strength):
	pass
class T(Temperature):
	pass
class V(Volume):
	pass

# internal units, for results of arithmetic
class _Volume(Volume):
	def __new__(cls, value):
		return super(_Volume, cls).__new__(cls, value, Volume.LITER)
	def __init__(self, value):
		super(_Volume, self).__init__(value, Volume.LITER)

class _Temperature(Temperature):
	def __new__(cls, value):
		return super(_Temperature, cls).__new__(cls,
		    value, Temperature.degC)
	def __init__(self, value):
		super(_Temperature, self).__init__(value, Temperature.degC)

class _Mass(Mass):
	def __new__(cls, value):
		return super(_Mass, cls).__new__(cls, value, Mass.KG)
	def __init__(self, value):
		super(_Mass, self).__init__(value, Mass.KG)

class _Strength(Strength):
	def __new__(cls, value):
		return super(_Strength, cls).__new__(cls, value, Strength.SG)
	def __init__(self, value):
		super(_Strength, self).__init__(value, Strength.SG)

class _Duration(Duration):
	def __new__(cls, value):
		return super(_Duration, cls).__new__(cls,
		    value, Duration.MINUTE)
	def __init__(self, value):
		super(_Duration, self).__init__(value, Duration.MINUTE)
