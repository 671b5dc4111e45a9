#!/usr/bin/env python3

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

from WBV.fermentables import Fermentable
from WBV.params import RecipeParameters
from WBV.getparam import getparam
from WBV.units import Duration, _Volume
from WBV.utils import PilotError
from WBV import mash
from WBV import output_text
from WBV import parse
from WBV import sysparams

import getopt
import io
import sys

def _field(parser, what, value):
	try:
		return parser(value)
	except ValueError as e:
		raise PilotError('invalid value for "' + what + '": '
		    + str(value) + ': ' + str(e))

# yaml turns 1.050 into a float, which prints as 1.05
def _strength(value):
	if isinstance(value, float):
		value = '{:.3f}'.format(value)
	return parse.strength(value)

def _percent(value):
	if isinstance(value, (int, float)):
		return float(value)
	return parse.percent(value)

def _duration(value):
	if isinstance(value, int):
		value = str(value) + Duration.MINUTE
	return parse.duration(value)

def dofermentable(name, spec):
	v = str(spec).split('@')
	if len(v) != 2:
		raise PilotError('fermentable "' + str(name) + '" must be '
		    + 'given as "mass @ potential"')
	m = _field(parse.mass, name, v[0])
	pot = v[1].strip()
	if pot.endswith('%'):
		return Fermentable.byextract(str(name), m,
		    _field(parse.percent, name, pot))
	return Fermentable(str(name), m, _field(_strength, name, pot))

def dofermentables(ferms):
	if not isinstance(ferms, dict):
		raise PilotError('fermentables must be a mapping of '
		    + 'name to "mass @ potential"')
	return [dofermentable(f, ferms[f]) for f in ferms]

def _volumes(value):
	if not isinstance(value, list):
		value = [value]
	return tuple(_field(parse.volume, 'infusions', x) for x in value)

def _temperatures(value):
	if not isinstance(value, list):
		value = [value]
	return tuple(_field(parse.temperature, 'mash_temperatures', x)
	    for x in value)

def processyaml(odict, data):
	# importing yaml is unfathomably slow, so do it only if we need it
	import yaml

	try:
		d = yaml.safe_load(data.read())
	except yaml.YAMLError as e:
		raise PilotError('failed to parse yaml recipe: ' + str(e))
	if not isinstance(d, dict):
		raise PilotError('recipe must be a yaml mapping')

	def getdef(x, parser, default = None):
		if x not in d:
			return default
		return _field(parser, x, d.pop(x))

	name = d.pop('name', None)
	grainbill = dofermentables(d.pop('fermentables', {}))

	og = getdef('original_gravity', _strength)
	pv = getdef('package_volume', parse.volume)
	if 'volume' in odict:
		og, pv = None, odict['volume']
	if 'strength' in odict:
		og, pv = odict['strength'], None

	fg = getdef('final_gravity', _strength)
	aa = getdef('attenuation', _percent)

	if 'infusions' in d:
		infusions = _volumes(d.pop('infusions'))
	else:
		infusions = ()
	if 'mash_temperatures' in d:
		rests = _temperatures(d.pop('mash_temperatures'))
	else:
		rests = ()

	process = sysparams.process_parameters(
	    mash_volume = getdef('mash_volume', parse.volume),
	    infusions = infusions,
	    sparge_volume = getdef('sparge_volume', parse.volume),
	    preboil_volume = getdef('preboil_volume', parse.volume),
	    boil_time = getdef('boil', _duration, _duration(60)),
	    postboil_dilution = getdef('postboil_dilution', parse.volume,
		_Volume(0)),
	    postferment_dilution = getdef('postferment_dilution',
		parse.volume, _Volume(0)))

	if len(d) > 0:
		raise PilotError('invalid recipe field(s): '
		    + ', '.join(sorted([str(x) for x in d])))

	recipe = RecipeParameters(grainbill, sysparams.efficiency(),
	    target_original_gravity = og,
	    target_package_volume = pv,
	    final_gravity = fg,
	    attenuation = aa,
	    name = name)

	return process, recipe, rests

def usage():
	sys.stderr.write('usage: ' + sys.argv[0]
	    + ' [-c] [-s strength] [-v package volume] [-t mash temperature]\n'
	    + '\t[-p paramsfile] [-P param=value] recipefile\n')
	sys.exit(1)

def processopts(opts):
	odict = {}
	for o, a in opts:
		if o == '-h':
			usage()

		elif o == '-c':
			odict['csv'] = True

		elif o == '-p':
			odict.setdefault('wbvparamfiles', []).append(a)

		elif o == '-P':
			odict.setdefault('wbvparams', []).append(a)

		elif o == '-s':
			if 'volume' in odict:
				raise PilotError('can give max one of -s/-v')
			odict['strength'] = _field(_strength, '-s', a)

		elif o == '-t':
			odict['mashtemp'] = _field(parse.temperature, '-t', a)

		elif o == '-v':
			if 'strength' in odict:
				raise PilotError('can give max one of -s/-v')
			odict['volume'] = _field(parse.volume, '-v', a)

	return odict

def applyparams(odict):
	sysparams.processdefaults()
	for f in odict.get('wbvparamfiles', []):
		sysparams.processfile(f)
	for pl in odict.get('wbvparams', []):
		sysparams.processline(pl)

def run(argv, out = print):
	opts, args = getopt.getopt(argv[1:], 'chp:P:s:t:v:')
	if len(args) > 1:
		usage()

	odict = processopts(opts)
	applyparams(odict)
	with io.open(args[0], "r", encoding='utf-8') \
	    if (len(args) > 0 and args[0] != "-") \
	    else sys.stdin as data:
		if data is sys.stdin:
			sys.stderr.write('>> Reading recipe from stdin ...\n')
		process, recipe, rests = processyaml(odict, data)

	res = mash.compute_withrests(process, recipe, rests,
	    getparam('infusion_temp'))
	if odict.get('csv', False):
		output_text.printcsv(res, out)
	else:
		output_text.printresult(res, odict.get('mashtemp', None), out)
	return res

if __name__ == '__main__':
	try:
		run(sys.argv)
	except PilotError as pe:
		print('Pilot Error: ' + str(pe))
		sys.exit(1)
	except IOError as e:
		print(e)
		sys.exit(1)
	sys.exit(0)
