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
# Grain bill entries.  A fermentable is a mass with a potential, the
# potential being the conventional "points per pound per gallon" figure
# given as a specific gravity, i.e. 1.037 means 37 points from one pound
# in one US gallon.
#

from collections import namedtuple

from WBV import constants
from WBV.units import Mass, Strength, _Mass
from WBV.utils import checktypes, checknonneg, InvalidParameter

class Fermentable(namedtuple('Fermentable', ['name', 'mass', 'potential'])):
	__slots__ = ()

	def __new__(cls, name, mass, potential):
		checktypes([(mass, Mass), (potential, Strength)])
		checknonneg(mass, 'mass of ' + str(name))
		if potential < 1.0:
			raise InvalidParameter('potential below 1.000',
			    quantity = 'potential of ' + str(name),
			    value = float(potential))
		return super(Fermentable, cls).__new__(cls,
		    name, mass, potential)

	# construct from a maltster's laboratory extract figure (as-is),
	# sucrose being 100%
	@classmethod
	def byextract(cls, name, mass, percent):
		if percent <= 0 or percent > 100:
			raise InvalidParameter('extract percentage out of range',
			    quantity = 'extract of ' + str(name),
			    value = percent)
		ppg = constants.sucrose_ppg * percent/100.0
		return cls(name, mass, Strength(ppg, Strength.SG_PTS))

	def ppg(self):
		return self.potential.valueas(Strength.SG_PTS)

	# liter-points available from this fermentable at 100% efficiency
	def extract_points(self):
		return self.mass * self.ppg() * constants.pkl_per_ppg

	def scaled(self, factor):
		return self._replace(mass = _Mass(self.mass * factor))

	def __str__(self):
		return '{} {} ({})'.format(str(self.mass), self.name,
		    self.potential.stras(Strength.SG))

def grain_mass(grainbill):
	return _Mass(sum([f.mass for f in grainbill], 0.0))

def extract_points(grainbill, efficiency):
	return sum([f.extract_points() for f in grainbill], 0.0) * efficiency

def scale_grainbill(grainbill, factor):
	return tuple(f.scaled(factor) for f in grainbill)
