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

from WBV import units
from WBV.utils import PilotError

import re

# "<number><suffix>", whitespace allowed in between.  a missing number
# means one, so that "1.0L/kg" can be parsed as "1.0L" / "kg"
_quantity = re.compile(r'^\s*(-?[0-9]*\.?[0-9]*)\s*(.*?)\s*$')

def _unit(cls, sfxmap, input, name = None):
	m = _quantity.match(str(input))
	numstr, sfx = m.group(1), m.group(2)
	if numstr in ('', '-'):
		numstr += '1'
	if sfx not in sfxmap:
		raise ValueError('invalid suffix in: ' + str(input).strip()
		    + ' (for ' + (name or cls.__name__) + ')')
	if sfxmap[sfx] is None:
		return cls(float(numstr))
	return cls(float(numstr), sfxmap[sfx])

_deg = chr(0x00b0)

_masses = {
	'g'	: units.Mass.G,
	'kg'	: units.Mass.KG,
	'oz'	: units.Mass.OZ,
	'lb'	: units.Mass.LB,
}
_volumes = {
	'ml'	: units.Volume.MILLILITER,
	'mL'	: units.Volume.MILLILITER,
	'l'	: units.Volume.LITER,
	'L'	: units.Volume.LITER,
	'qt'	: units.Volume.QUART,
	'gal'	: units.Volume.GALLON,
	'bbl'	: units.Volume.BARREL,
}
_temperatures = {
	'degC'		: units.Temperature.degC,
	_deg + 'C'	: units.Temperature.degC,
	'degF'		: units.Temperature.degF,
	_deg + 'F'	: units.Temperature.degF,
	'K'		: units.Temperature.K,
}
_durations = {
	units.Duration.MINUTE	: units.Duration.MINUTE,
	units.Duration.HOUR	: units.Duration.HOUR,
}
_strengths = {
	'degP'		: units.Strength.PLATO,
	_deg + 'P'	: units.Strength.PLATO,
	'SG'		: units.Strength.SG,
	'pts'		: units.Strength.SG_PTS,
}

def mass(input):
	return _unit(units.Mass, _masses, input)

def volume(input):
	return _unit(units.Volume, _volumes, input)

def temperature(input):
	return _unit(units.Temperature, _temperatures, input)

def duration(input):
	return _unit(units.Duration, _durations, input, name = 'duration')

def percent(input):
	return _unit(float, { '%': None }, input, name = 'percentage')

# a bare 1.xxx is a specific gravity
def strength(input):
	if re.match(r'^\s*1\.[01][0-9][0-9]\s*$', str(input)):
		return units.Strength(float(input), units.Strength.SG)
	return _unit(units.Strength, _strengths, input)

def split(input, splitter, i1, i2):
	parts = str(input).split(splitter)
	if len(parts) != 2:
		raise ValueError('input must contain exactly one "' + splitter
		    + '", you gave: ' + str(input))
	return (i1(parts[0]), i2(parts[1]))

def ratio(input, r1, r2):
	return split(input, '/', r1, r2)

def _list(parser, input):
	s = str(input).strip()
	if s == '':
		return ()
	return tuple([parser(x) for x in s.split(',')])

def volumelist(input):
	return _list(volume, input)

def temperaturelist(input):
	return _list(temperature, input)

# name:mass:potential
def fermentable(input):
	from WBV.fermentables import Fermentable

	v = str(input).split(':')
	if len(v) != 3:
		raise PilotError('invalid fermentable spec: ' + str(input))
	try:
		return Fermentable(v[0].strip(), mass(v[1]), strength(v[2]))
	except ValueError as e:
		raise PilotError('invalid fermentable spec: ' + str(input)
		    + ': ' + str(e))
