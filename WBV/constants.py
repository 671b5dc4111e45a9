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

gramsperounce	= 28.349523
gramsperpound	= 16 * gramsperounce
litersperquart	= 0.94635295
literspergallon	= 4 * litersperquart
gallonsperbarrel= 42

absolute_zero_c	= -273.15

# Extract yield.  Potentials are quoted as "points per pound per
# gallon" (PPG), i.e. the gravity points one pound of fermentable
# gives when dissolved into one US gallon.  We keep extract as
# liter-points (liters times gravity points), so one PPG is worth
# this many liter-points per kilogram.
pkl_per_ppg	= literspergallon / (gramsperpound / 1000.0)

# PPG of sucrose, i.e. 100% extract.  Used to turn a maltster's
# laboratory extract percentage into a potential.
sucrose_ppg	= 46.214

# water absortion for 1kg of grain.  the net figure, i.e. the
# difference between water in and wort out of the mash.
grain_absorption = 1.0

# specific heat of grain relative to water, used by the quarts-per-pound
# infusion equations
grain_relativecapa = 0.2

# tolerance for "this volume is zero" decisions, in liters
volume_epsilon	= 1.0 / (1000*1000)
