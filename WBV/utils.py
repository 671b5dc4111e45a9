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

import sys

# the user did something wrong.  the subclasses say what and where.
class PilotError(Exception):
	def __init__(self, msg, stage = None, quantity = None, value = None):
		super(PilotError, self).__init__(msg)
		self.stage = stage
		self.quantity = quantity
		self.value = value

	def __str__(self):
		msg = super(PilotError, self).__str__()
		ctx = []
		if self.stage is not None:
			ctx.append('stage ' + str(self.stage))
		if self.quantity is not None:
			ctx.append(str(self.quantity) + ' = '
			    + _fmtvalue(self.value))
		if len(ctx) > 0:
			msg += ' (' + ', '.join(ctx) + ')'
		return msg

# raised when constructing parameters from out-of-domain input
class InvalidParameter(PilotError):
	pass

# raised when a stage would produce a physically impossible state
class ComputationError(PilotError):
	pass

def _fmtvalue(v):
	if isinstance(v, float):
		return '{:.4f}'.format(v)
	return str(v)

def checktype(type, cls):
	if not isinstance(type, cls):
		raise InvalidParameter('invalid input type for '
		    + cls.__name__ + ': ' + repr(type))

def checktypes(lst):
	for chk in lst:
		checktype(*chk)

def checknonneg(value, name):
	if value < 0:
		raise InvalidParameter('negative value', quantity = name,
		    value = value)

def warn(msg, prepend=''):
	sys.stderr.write(prepend + 'WARNING: ' + msg)

def notice(msg, prepend=''):
	sys.stderr.write(prepend + '>> ' + msg)

# used to avoid "-0" prints
def pluszero(v):
	if abs(v) < 0.000001: v = 0.000001
	return v
