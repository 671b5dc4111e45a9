#
# Copyright (c) 2020, 2021 Antti Kantee <pooka@iki.fi>
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
# Wort: extract-points representation of wort (works for plain water
# too, which is just wort with no extract).  We track the volume and
# the extract as liter-points, i.e. liters times gravity points.
# Extract points are what is conserved when water is added or boiled
# off, so the gravity always follows from the two.
#

from WBV.units import Volume, Strength, _Volume, _Strength
from WBV.utils import checktype, ComputationError

class Wort:
	def __init__(self, volume = _Volume(0), extract = 0.0):
		checktype(volume, Volume)

		self._volume = float(volume)
		self._extract = float(extract)

	def adjust_extract(self, pts):
		self._extract += pts

	# add (or boil off) water.  extract stays, strength changes.
	def adjust_water(self, v_adj):
		checktype(v_adj, Volume)
		if -v_adj > self._volume:
			raise ComputationError("wort cannot lose more water "
			    + "than its total volume", quantity = 'volume',
			    value = self._volume + v_adj)
		self._volume += v_adj

	# adjust volume, lose/gain water and extract uniformly.  IOW, the
	# strength of the wort doesn't change
	#
	# the actual physical act is "loss", but can be used to add volume
	# in case calculating backwards from final wort to initial wort
	def adjust_volume(self, v_adj):
		checktype(v_adj, Volume)
		if -v_adj > self._volume:
			raise ComputationError("wort cannot lose more than its "
			    + "total volume", quantity = 'volume',
			    value = self._volume + v_adj)
		if self._volume > 0:
			self._extract *= (self._volume + v_adj) / self._volume
		self._volume += v_adj

	# set strength without changing volume.  that's what yeast does,
	# as far as a hydrometer can tell.
	def set_strength(self, s):
		checktype(s, Strength)
		self._extract = self._volume * s.valueas(Strength.SG_PTS)

	def volume(self):
		return _Volume(self._volume)

	def extract(self):
		return self._extract

	def strength(self):
		if self._volume <= 0:
			return _Strength(1.0)
		return Strength(self._extract / self._volume, Strength.SG_PTS)

	def copy(self):
		return Wort(self.volume(), self._extract)

	def __str__(self):
		return 'Wort {} ({}): extract {:.1f} l*pts'.format(
		    str(self.volume()),
		    str(self.strength()),
		    self._extract)
