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
# The stage table.  Each stage is one transform over the wort, given
# as a forward function (previous wort -> this stage's wort) and a
# backward function (this stage's volume -> previous stage's volume).
# The backward functions are the algebraic inverses of the forward
# volume arithmetic: what was added is subtracted and what was removed
# is added back.  Gravity is only ever solved forward.
#
# A stage also reports the amount of liquid it adds (positive) or
# removes (negative), for the benefit of whoever prints the results.
#

from collections import namedtuple

from WBV.units import _Volume
from WBV.utils import ComputationError
from WBV.wort import Wort

STRIKE=			'strike'
PRESPARGE=		'presparge'
PREBOIL=		'preboil'
POSTBOIL_PRELOSS=	'postboil_preloss'
POSTBOIL=		'postboil'
FERMENTOR=		'fermentor'
POSTFERMENT=		'postferment'
PACKAGE=		'package'

MASH=			'mash'

def mashstep(i):
	return MASH + str(i)

Stage = namedtuple('Stage', ['name', 'forward', 'backward', 'amount'])

# water in, extract stays
def _addwater(name, amount):
	def fwd(w, ctx):
		w = w.copy()
		w.adjust_water(amount(ctx))
		return w
	def bwd(v, ctx):
		return _Volume(v - amount(ctx))
	return Stage(name, fwd, bwd, amount)

# water out, extract stays
def _boiloff(name, amount):
	def fwd(w, ctx):
		w = w.copy()
		w.adjust_water(_Volume(-amount(ctx)))
		return w
	def bwd(v, ctx):
		return _Volume(v + amount(ctx))
	return Stage(name, fwd, bwd, lambda ctx: _Volume(-amount(ctx)))

# wort out, strength stays
def _loss(name, amount):
	def fwd(w, ctx):
		w = w.copy()
		w.adjust_volume(_Volume(-amount(ctx)))
		return w
	def bwd(v, ctx):
		return _Volume(v + amount(ctx))
	return Stage(name, fwd, bwd, lambda ctx: _Volume(-amount(ctx)))

# the strike water is the first rest's free liquid plus what the grain
# soaks up, unless it was already solved backwards from the package
def _strike():
	def volume(ctx):
		if ctx.strike_volume is not None:
			return ctx.strike_volume
		return _Volume(ctx.process.mash_volume + ctx.absorption)
	def fwd(w, ctx):
		return Wort(volume(ctx))
	def bwd(v, ctx):
		return v
	return Stage(STRIKE, fwd, bwd, volume)

# lautering: the grains keep their absorption, and the extract the
# mash produced is now dissolved in what runs off
def _presparge():
	def fwd(w, ctx):
		w = w.copy()
		w.adjust_water(_Volume(-ctx.absorption))
		w.adjust_extract(ctx.extract_points)
		return w
	def bwd(v, ctx):
		return _Volume(v + ctx.absorption)
	return Stage(PRESPARGE, fwd, bwd, lambda ctx: _Volume(-ctx.absorption))

# fermentor loss, after which the yeast has its say.  the attenuation
# is an input, not something we model.
def _postferment():
	loss = _loss(POSTFERMENT, lambda ctx: ctx.process.fermentor_loss)
	def fwd(w, ctx):
		og = w.strength()
		w = loss.forward(w, ctx)
		fg = ctx.final_gravity(og)
		if fg is None:
			return w
		if fg > og:
			raise ComputationError('final gravity above original '
			    + 'gravity', stage = POSTFERMENT,
			    quantity = 'final_gravity', value = float(fg))
		w.set_strength(fg)
		return w
	return loss._replace(forward = fwd)

def _infusion(i):
	return _addwater(mashstep(i+1), lambda ctx: ctx.process.infusions[i])

# the fixed chain, strike to package.  "ninfusions" mash steps follow
# the strike.
def stagetable(ninfusions):
	tab = [ _strike() ]
	tab += [ _infusion(i) for i in range(ninfusions) ]
	tab += [
		_presparge(),
		_addwater(PREBOIL, lambda ctx: ctx.sparge_volume),
		_boiloff(POSTBOIL_PRELOSS, lambda ctx: ctx.evaporation),
		_loss(POSTBOIL, lambda ctx: ctx.process.kettle_loss),
		_addwater(FERMENTOR,
		    lambda ctx: ctx.process.postboil_dilution),
		_postferment(),
		_addwater(PACKAGE,
		    lambda ctx: ctx.process.postferment_dilution),
	]
	return tab

def stagenames(ninfusions):
	return [s.name for s in stagetable(ninfusions)]

# the table up to and including the named stage
def upto(table, name):
	for i, s in enumerate(table):
		if s.name == name:
			return table[:i+1]
	raise KeyError(name)
