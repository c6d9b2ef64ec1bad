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

import logging

from CaDiCaL.basic_types import Status, variable
from CaDiCaL.errors import EngineFailure, InvalidQuery

__all__ = ['SolverState']


class SolverState(object):
    """Bookkeeping of the incremental solving protocol.

    The status reverts to UNKNOWN whenever the formula changes and at the
    start of every solve, so no query can observe a stale result.
    Assumptions and the constraint clause belong to exactly one solve and
    are forgotten as soon as the formula changes or the next solve starts.

    >>> state = SolverState()
    >>> state.status
    <Status.UNKNOWN: 0>
    >>> state.solve_started([-1], None)
    >>> state.solve_finished(20)
    <Status.UNSATISFIABLE: 20>
    >>> state.check_failed_query(-1)
    >>> state.clause_added([2])
    >>> state.status
    <Status.UNKNOWN: 0>
    >>> state.check_failed_query(-1)
    Traceback (most recent call last):
    ...
    CaDiCaL.errors.InvalidQuery: 'failed' requires an unsatisfiable result, status is unknown
    """

    def __init__(self):
        self.status = Status.UNKNOWN
        self.assumptions = frozenset()
        self.constrained = False
        self.max_var = 0
        self.solving = False

    def __track(self, literals):
        for lit in literals:
            if variable(lit) > self.max_var:
                self.max_var = variable(lit)

    def check_ready(self):
        if self.solving:
            raise InvalidQuery('solver is busy, callbacks must not call into the solver')

    def clause_added(self, clause):
        self.__track(clause)
        self.status = Status.UNKNOWN
        self.assumptions = frozenset()
        self.constrained = False

    def dimacs_loaded(self, max_var):
        if max_var > self.max_var:
            self.max_var = max_var
        self.status = Status.UNKNOWN
        self.assumptions = frozenset()
        self.constrained = False

    def solve_started(self, assumptions, constraint):
        self.__track(assumptions)
        if constraint:
            self.__track(constraint)
        self.status = Status.UNKNOWN
        self.assumptions = frozenset(assumptions)
        self.constrained = bool(constraint)
        self.solving = True

    def solve_finished(self, result):
        self.solving = False
        try:
            self.status = Status(result)
        except ValueError:
            self.status = Status.UNKNOWN
            raise EngineFailure('unexpected solver result: %r' % (result,))
        logging.debug('State: status is %s', self.status.name)
        return self.status

    def solve_aborted(self):
        self.solving = False
        self.status = Status.UNKNOWN

    @property
    def satisfied(self):
        return self.status == Status.SATISFIABLE

    def __require_unsat(self, query):
        if self.status != Status.UNSATISFIABLE:
            raise InvalidQuery("'%s' requires an unsatisfiable result, status is %s"
                               % (query, self.status.name.lower()))

    def check_failed_query(self, lit):
        self.__require_unsat('failed')
        if lit not in self.assumptions:
            raise InvalidQuery('literal %i was not assumed in the last solve' % lit)

    def check_constraint_query(self):
        self.__require_unsat('constraint_failed')
        if not self.constrained:
            raise InvalidQuery('no constraint was given to the last solve')
