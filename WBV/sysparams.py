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
# System parameters, i.e. the properties of the brewhouse as opposed
# to those of a recipe.  These are used to build ProcessParameters and
# to decide how results are printed.  The stage pipeline itself never
# looks here.
#
# The textual form of a parameter is "name=value", where name is the
# long or the short name.  A brewhouse is serialized as short names
# joined by "|", which is why neither "|" nor ":" may appear in values.
#

from collections import namedtuple
import os

from WBV.utils import PilotError, InvalidParameter, notice
from WBV.units import _Duration, _Volume

from WBV import parse
from WBV.params import ProcessParameters

_Param = namedtuple('_Param', ['name', 'shortname', 'parse', 'optional',
    'descr'])

wbvparams = {}			# longname  -> parsed value
paraminputs = {}		# longname  -> text the value was parsed from
paramparsers = {}		# longname  -> _Param
paramshorts = {}		# shortname -> longname

_defaultfiles = ['~/.wbvsysparams', './.wbvsysparams']

def _getparam(what):
	return wbvparams[what]

def _lookup(what):
	what = paramshorts.get(what, what)
	if what not in paramparsers:
		raise PilotError('invalid parameter: ' + what)
	return paramparsers[what]

def setparam(what, value):
	p = _lookup(what)
	if '|' in value or ':' in value:
		raise InvalidParameter('invalid character in value "'
		    + value + '" for "' + p.name + '"')
	try:
		wbvparams[p.name] = p.parse(value)
	except (PilotError, ValueError):
		raise InvalidParameter('invalid value "' + value
		    + '" for "' + p.name + '"')
	paraminputs[p.name] = value

def processparam(paramstr):
	what, sep, value = paramstr.partition('=')
	if sep == '' or '=' in value:
		raise PilotError('invalid sysparam: ' + paramstr)
	setparam(what.strip(), value.strip())

def _comment(line):
	return len(line) == 0 or line.startswith('#')

def processline(line):
	line = line.strip()
	if _comment(line):
		raise PilotError('empty parameter line')
	processparam(line)

def processfile(filename):
	notice('Using "' + filename + '" for WBV system parameters\n')
	with open(filename, 'r') as f:
		for n, line in enumerate(f, 1):
			line = line.strip()
			if _comment(line):
				continue
			try:
				processparam(line)
			except PilotError as e:
				raise PilotError(filename + ':' + str(n)
				    + ': ' + str(e))

def processdefaults():
	for pf in [os.path.expanduser(x) for x in _defaultfiles]:
		if os.path.isfile(pf):
			processfile(pf)

def checkset():
	missing = [p for p in paramparsers
	    if not paramparsers[p].optional and p not in wbvparams]
	if len(missing) > 0:
		raise PilotError('missing system parameter(s): '
		    + ', '.join(missing))

def _register(name, shortname, parser, descr, optional = False):
	assert(shortname not in paramshorts)
	paramparsers[name] = _Param(name, shortname, parser, optional, descr)
	paramshorts[shortname] = name
	if optional:
		wbvparams[name] = None

def _oneof(*choices):
	def x(input):
		if input not in choices:
			raise PilotError('expected one of: ' + ', '.join(choices))
		return input
	return x

def _nonneg(parser):
	def x(input):
		rv = parser(input)
		if rv < 0:
			raise PilotError('negative value')
		return rv
	return x

def _perkilo(input):
	return parse.ratio(input, parse.volume, parse.mass)

_register('units_output', 'uo', _oneof('metric', 'us'),
    'Unit system for printed volumes, masses and temperatures.  '
    'Values: metric, us')
_register('strength_output', 'so', _oneof('sg', 'plato'),
    'Unit for printed gravities.  Values: sg, plato')

_register('mash_efficiency', 'me', _nonneg(parse.percent),
    'Share of the grain bill\'s potential extract found in the '
    'preboil wort.  Tune this when the preboil gravity misses.  '
    'Value: percentage, typically 65-85%')
_register('boiloff_perhour', 'bo', _nonneg(parse.volume),
    'Water evaporated in one hour of boiling.  Tune this when the '
    'postboil volume misses.  Value: volume, e.g. 3.5L or 1gal')
_register('grain_absorption', 'ga', _perkilo,
    'Liquid held back by the spent grain, per unit of grain.  Lower '
    'it if you squeeze the grain bag.  Value: volume/mass, e.g. 1.0L/kg')
_register('kettle_loss', 'kl', _nonneg(parse.volume),
    'Wort left behind in the kettle (trub, hops, dead space).  '
    'Value: volume')
_register('fermentor_loss', 'fl', _nonneg(parse.volume),
    'Beer left behind in the fermentor (yeast cake, dead space).  '
    'Value: volume')

_register('ambient_temp', 'Ta', parse.temperature,
    'Temperature of the grain at mash in, for the strike water '
    'temperature.  Value: temperature')
_register('infusion_temp', 'Ti', parse.temperature,
    'Temperature of the water used for step infusions.  '
    'Value: temperature')

_register('boilvol_max', 'bM', _nonneg(parse.volume),
    'Capacity of the boil kettle.  A preboil volume above it is '
    'warned about.  Value: volume', optional = True)

# printing units are set so that str() works even if the program never
# processes sysparams
for _p, _v in [
	('units_output',	'metric'),
	('strength_output',	'sg'),
	('grain_absorption',	'1.0L/kg'),
	('ambient_temp',	'20degC'),
	('infusion_temp',	'100degC'),
]:
	setparam(_p, _v)

def grain_absorption():
	v, m = _getparam('grain_absorption')
	if m <= 0:
		raise InvalidParameter('grain absorption per zero mass')
	return v / m

def efficiency():
	checkset()
	return _getparam('mash_efficiency') / 100.0

# the process for a brewday on this system.  the per-brew volumes
# come from the caller, the rest from the system parameters.
def process_parameters(mash_volume = None, infusions = (),
    sparge_volume = None, preboil_volume = None,
    boil_time = _Duration(60),
    postboil_dilution = _Volume(0), postferment_dilution = _Volume(0)):
	checkset()

	return ProcessParameters(grain_absorption(),
	    mash_volume = mash_volume,
	    infusions = infusions,
	    sparge_volume = sparge_volume,
	    preboil_volume = preboil_volume,
	    boiloff_perhour = _getparam('boiloff_perhour'),
	    boil_time = boil_time,
	    kettle_loss = _getparam('kettle_loss'),
	    postboil_dilution = postboil_dilution,
	    fermentor_loss = _getparam('fermentor_loss'),
	    postferment_dilution = postferment_dilution,
	    boilvol_max = _getparam('boilvol_max'))

# a string rather than a list of tuples, so that the format stays
# in one place along with decodeparamshorts()
def getparamshorts():
	return '|'.join([sn + '=' + paraminputs[paramshorts[sn]]
	    for sn in sorted(paramshorts) if paramshorts[sn] in paraminputs])

def decodeparamshorts(pstr):
	res = []
	for x in pstr.split('|'):
		sn, sep, value = x.partition('=')
		if sep == '' or sn not in paramshorts:
			raise PilotError('invalid sysparam spec: ' + x)
		res.append((paramshorts[sn], value))
	return res

if __name__ == '__main__':
	for x in paramparsers:
		p = paramparsers[x]
		print(p.name + ' (' + p.shortname + '): ' + p.descr)
		print('')
