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

__all__ = ['CaDiCaLError', 'InvalidLiteral', 'InvalidQuery', 'UnknownOption',
           'CallbackFailed', 'EngineFailure', 'DimacsError']


class CaDiCaLError(Exception):
    """Base class of every error raised by the solver API."""


class InvalidLiteral(CaDiCaLError, ValueError):
    """A literal is zero, not an integer or outside the range of a C int.
    Invalid literals are detected before anything is passed to the
    engine."""


class InvalidQuery(CaDiCaLError):
    """An operation is not permitted in the current solver state, e.g.
    'failed' after a satisfiable result or any call into the solver from
    inside one of its own callbacks."""


class UnknownOption(CaDiCaLError, ValueError):
    """The engine rejected an option, limit or configuration name."""


class CallbackFailed(CaDiCaLError):
    """A registered terminator or learn callback raised. The exception
    raised by the callback is available as '__cause__'."""


class EngineFailure(CaDiCaLError):
    """The engine returned something unexpected, could not be loaded, does
    not export a required function, or the solver has been released."""


class DimacsError(EngineFailure):
    """The engine reported an error while reading or writing DIMACS."""
