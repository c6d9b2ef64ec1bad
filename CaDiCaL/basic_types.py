#
# This file is part of CaDiCaL4Py (CaDiCaL Python API).
#
# CaDiCaL, an incremental solver for propositional satisfiability (SAT).
#
# CaDiCaL4Py is free software: you can redistribute it and/or modify it
# under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.  CaDiCaL4Py is distributed in the
# hope that it will be useful, but WITHOUT ANY WARRANTY; without even
# the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR
# PURPOSE.  See the GNU General Public License for more details.  You
# should have received a copy of the GNU General Public License along
# with CaDiCaL4Py.  If not, see <http://www.gnu.org/licenses/>.

from ctypes import *
from enum import IntEnum

from CaDiCaL.errors import InvalidLiteral


class CCaDiCaL(Structure):
    pass

CCaDiCaL_P = POINTER(CCaDiCaL)

(CADICAL_RESULT_UNKNOWN, CADICAL_RESULT_SAT, CADICAL_RESULT_UNSAT) = (0, 10, 20)

LitID = c_int
LitID_P = POINTER(LitID)

# INT_MIN is excluded, its negation does not fit into a C int
LIT_MAX = 2 ** (8 * sizeof(LitID) - 1) - 1
LIT_MIN = -LIT_MAX


class Status(IntEnum):
    """Outcome of the most recent solve. The values are the result codes
    of the engine, hence 'Status.SATISFIABLE == 10' holds."""
    UNKNOWN = CADICAL_RESULT_UNKNOWN
    SATISFIABLE = CADICAL_RESULT_SAT
    UNSATISFIABLE = CADICAL_RESULT_UNSAT


def status2str(s):
    """
    >>> status2str(10)
    'sat'
    >>> status2str(Status.UNKNOWN)
    'unknown'
    >>> status2str(3)
    Traceback (most recent call last):
    ...
    TypeError: not a solver status: 3
    """
    if s == CADICAL_RESULT_UNKNOWN:
        return 'unknown'
    elif s == CADICAL_RESULT_SAT:
        return 'sat'
    elif s == CADICAL_RESULT_UNSAT:
        return 'unsat'
    else:
        raise TypeError('not a solver status: %r' % (s,))


def validate_literal(lit):
    """Return 'lit' if it is a valid DIMACS literal, i.e. a non-zero int
    whose magnitude is a variable index representable by the engine.
    Raise InvalidLiteral otherwise.

    >>> validate_literal(-3)
    -3
    >>> validate_literal(0)
    Traceback (most recent call last):
    ...
    CaDiCaL.errors.InvalidLiteral: zero is not a literal
    >>> validate_literal(True)
    Traceback (most recent call last):
    ...
    CaDiCaL.errors.InvalidLiteral: literal must be an int: True
    >>> validate_literal(-2 ** 31)
    Traceback (most recent call last):
    ...
    CaDiCaL.errors.InvalidLiteral: literal out of range: -2147483648
    """
    if isinstance(lit, bool) or not isinstance(lit, int):
        raise InvalidLiteral('literal must be an int: %r' % (lit,))
    if lit == 0:
        raise InvalidLiteral('zero is not a literal')
    if lit < LIT_MIN or lit > LIT_MAX:
        raise InvalidLiteral('literal out of range: %i' % lit)
    return lit


def validate_clause(literals):
    """Validate all literals of a finite iterable before any of them is
    used and return them as list. The empty clause is valid.

    >>> validate_clause(x for x in (1, -2))
    [1, -2]
    >>> validate_clause([])
    []
    >>> validate_clause([1, 0, 2])
    Traceback (most recent call last):
    ...
    CaDiCaL.errors.InvalidLiteral: zero is not a literal
    """
    return [validate_literal(lit) for lit in literals]


def variable(lit):
    """
    >>> variable(-7)
    7
    """
    return abs(lit)
