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

from WBV.getparam import getparam

from WBV import mash
from WBV import stages
from WBV.units import _Volume
from WBV.utils import pluszero

# what was done to get from the previous stage to this one
_stagetitles = {
	stages.STRIKE		: 'Strike water',
	stages.PRESPARGE	: 'Grain absorption',
	stages.PREBOIL		: 'Sparge',
	stages.POSTBOIL_PRELOSS	: 'Boil off',
	stages.POSTBOIL		: 'Kettle loss',
	stages.FERMENTOR	: 'Postboil dilution',
	stages.POSTFERMENT	: 'Fermentor loss',
	stages.PACKAGE		: 'Package dilution',
}

def stagetitle(name):
	if name in _stagetitles:
		return _stagetitles[name]
	if name.startswith(stages.MASH):
		return 'Infusion ' + name[len(stages.MASH):]
	return name

def stras_unsystem(obj):
	uo = getparam('units_output')
	return obj.stras_system({'metric':'us','us':'metric'}[uo])

def _prtsep(char='=', out=print):
	out(char * 79)

def _signed(v):
	v = pluszero(v)
	sign = '+'
	if v < 0:
		sign = '-'
	return sign + str(_Volume(abs(v)))

def _printheader(result, out):
	title = 'Stage volumes'
	if result.name is not None:
		title = result.name + ': ' + title.lower()
	out(title)
	_prtsep('=', out)

def _printgrainbill(result, out):
	if len(result.grainbill) == 0:
		return

	fmtstr = '{:40}{:>18}{:>12}'
	out(fmtstr.format('Grain bill', 'amount', 'potential'))
	_prtsep('-', out)
	for f in result.grainbill:
		out(fmtstr.format(f.name, str(f.mass), str(f.potential)))
	_prtsep('-', out)
	out(fmtstr.format('', str(result.grain_mass()),
	    '{:.0f}%'.format(100 * result.efficiency)))
	if abs(result.grain_scale - 1.0) > .0001:
		out('(grain bill scaled by {:.4f} to hit original gravity)'
		    .format(result.grain_scale))
	out('')

def _printhistory(result, out):
	fmtstr = '{:24}{:>12}{:>18}{:>12}'
	out(fmtstr.format('Stage', 'change', 'volume', 'strength'))
	_prtsep('-', out)
	for cp in result:
		out(fmtstr.format(stagetitle(cp.name), _signed(cp.change),
		    str(cp.volume) + ' / ' + stras_unsystem(cp.volume),
		    str(cp.gravity)))
	_prtsep('-', out)

def _printsummary(result, mashtemp, out):
	twofmt = '{:24}{:>30}'
	out(twofmt.format('Total water:', str(result.total_water())
	    + ' / ' + stras_unsystem(result.total_water())))

	if mashtemp is not None and result.grain_mass() > 0:
		t = mash.strike_temperature(result.strike_volume(),
		    result.grain_mass(), getparam('ambient_temp'), mashtemp)
		out(twofmt.format('Strike temperature:', str(t)))

	out(twofmt.format('Original gravity:', str(result.original_gravity())))
	if result.abv() > 0:
		out(twofmt.format('Final gravity:', str(result.final_gravity())))
		out(twofmt.format('Apparent attenuation:',
		    '{:.1f}%'.format(result.apparent_attenuation())))
		out(twofmt.format('ABV (fermentor):',
		    '{:.1f}%'.format(result.abv())))
		out(twofmt.format('ABV (package):',
		    '{:.1f}%'.format(result.product_abv())))
	out(twofmt.format('Package volume:', str(result.package_volume())
	    + ' / ' + stras_unsystem(result.package_volume())))

# print the results.  "out" is anything that prints one line per call.
def printresult(result, mashtemp = None, out = print):
	_printheader(result, out)
	_printgrainbill(result, out)
	_printhistory(result, out)
	_printsummary(result, mashtemp, out)

def printcsv(result, out = print):
	out('stage|volume|gravity')
	for cp in result:
		out('{}|{:.3f}|{:.4f}'.format(cp.name, float(cp.volume),
		    float(cp.gravity)))
