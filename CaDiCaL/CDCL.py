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
import logging

from CaDiCaL.basic_types import *
from CaDiCaL.callbacks import CallbackBridge
from CaDiCaL.config import load_config, apply_logging
from CaDiCaL.errors import *
from CaDiCaL.file_helper import c_path, wopen
from CaDiCaL.library import load_library
from CaDiCaL.resources import *
from CaDiCaL.state import SolverState
from CaDiCaL.stdout_helper import captured_stdout

__all__ = ['Solver']


def _c_name(name, what):
    if not isinstance(name, str) or '\0' in name:
        raise UnknownOption('invalid %s name: %r' % (what, name))
    return name.encode('utf-8')


class Solver(object):
    """The CaDiCaL incremental SAT solver. Literals are non-zero integers
    as in DIMACS, negative integers denote negated variables.

    A solver owns one engine instance, which is released exactly once by
    'release', by leaving a 'with' block or when the solver is garbage
    collected. A solver must not be used by several threads at once.

    >>> sat = Solver()
    >>> sat.add_clause([1, 2])
    >>> sat.add_clause([-1, 2])
    >>> sat.solve()
    <Status.SATISFIABLE: 10>
    >>> sat.value(2)
    True
    """

    def __init__(self, lib_path=None, library=None, configured_path=None):
        logging.debug('CDCL: Initializing...')
        self.__handle = None
        if library is None:
            library = load_library(lib_path, configured_path=configured_path)
        self.__lib = library
        handle = self.__lib.ccadical_init()
        if not handle:
            raise EngineFailure('ccadical_init failed')
        self.__handle = handle
        self.__state = SolverState()
        self.__bridge = CallbackBridge(self.__lib, self.__handle)
        self.__real_time = absolute_real_time()
        self.__process_time = absolute_process_time()
        logging.debug('CDCL: Initialized')

    @classmethod
    def with_config(cls, config, lib_path=None, library=None):
        """Create a solver with one of the predefined configurations of
        advanced internal options: 'default', 'plain' (no preprocessing),
        'sat' (target satisfiable instances) or 'unsat' (target
        unsatisfiable instances).

        >>> Solver.with_config('bogus')
        Traceback (most recent call last):
        ...
        CaDiCaL.errors.UnknownOption: invalid configuration: bogus
        """
        sat = cls(lib_path, library)
        try:
            sat.configure(config)
        except CaDiCaLError:
            sat.release()
            raise
        return sat

    @classmethod
    def from_config(cls, config_file=None, lib_path=None, library=None):
        """Create a solver as described by a YAML configuration file, see
        'CaDiCaL/config.yaml' for the available keys."""
        config = load_config(config_file)
        apply_logging(config)
        if library is None:
            library = load_library(lib_path, config['lib_name'], config['lib_path'])
        sat = cls(lib_path, library)
        try:
            if config.get('configuration'):
                sat.configure(config['configuration'])
            for name, value in sorted(config['options'].items()):
                sat.set_option(name, value)
        except CaDiCaLError:
            sat.release()
            raise
        return sat

    def __del__(self):
        if getattr(self, '_Solver__handle', None) is not None:
            self.release()

    def __enter__(self):
        self.__check()
        return self

    def __exit__(self, *_):
        self.release()

    def release(self):
        """Clear the callbacks and release the engine. Further calls of
        'release' do nothing, any other operation fails."""
        if self.__handle is None:
            return
        self.__state.check_ready()
        logging.debug('CDCL: Deleting...')
        self.__bridge.clear()
        handle, self.__handle = self.__handle, None
        self.__lib.ccadical_release(handle)
        logging.debug('CDCL: Deleted')

    @property
    def released(self):
        return self.__handle is None

    def __check(self):
        if self.__handle is None:
            raise EngineFailure('solver has been released')
        self.__state.check_ready()

    def __function(self, name):
        func = getattr(self.__lib, name, None)
        if func is None:
            raise EngineFailure('engine does not provide %s' % name)
        return func

    def signature(self):
        """Return name and version of the engine."""
        sig = self.__lib.ccadical_signature()
        return sig.decode('utf-8', 'replace') if sig else 'invalid'

    @property
    def status(self):
        """Status of the most recent 'solve', 'solve_with' or 'simplify'.
        It becomes Status.UNKNOWN whenever a clause is added.

        >>> sat = Solver()
        >>> sat.add_clause([1])
        >>> sat.solve()
        <Status.SATISFIABLE: 10>
        >>> sat.add_clause([-1])
        >>> sat.status
        <Status.UNKNOWN: 0>
        """
        return self.__state.status

    def add_clause(self, literals):
        """Add the clause given by an iterable of literals. The terminating
        zero is added here and must not be part of 'literals'. The empty
        clause is allowed and makes the formula unsatisfiable.
        """
        self.__check()
        clause = validate_clause(literals)
        logging.debug('CDCL: add_clause=%s', clause)
        add = self.__lib.ccadical_add
        for lit in clause:
            add(self.__handle, lit)
        add(self.__handle, 0)
        self.__state.clause_added(clause)

    def add_clauses(self, clauses):
        for clause in clauses:
            self.add_clause(clause)

    def solve(self):
        """Solve the formula. Returns Status.SATISFIABLE,
        Status.UNSATISFIABLE or Status.UNKNOWN if the terminator stopped
        the search or a limit was reached.

        >>> sat = Solver()
        >>> sat.add_clause([1])
        >>> sat.add_clause([-1])
        >>> sat.solve()
        <Status.UNSATISFIABLE: 20>
        """
        return self.solve_with(())

    def solve_with(self, assumptions, constraint=None):
        """Solve the formula under the given assumptions and, optionally,
        the temporary clause 'constraint'. Both only hold during this call.

        >>> sat = Solver()
        >>> sat.add_clause([1])
        >>> sat.solve_with([-1])
        <Status.UNSATISFIABLE: 20>
        >>> sat.failed(-1)
        True
        >>> sat.solve()
        <Status.SATISFIABLE: 10>
        """
        self.__check()
        assumptions = validate_clause(assumptions)
        if constraint is not None:
            constraint = validate_clause(constraint)
        constrain = self.__function('ccadical_constrain') if constraint else None
        logging.debug('CDCL: solve assumptions=%s constraint=%s', assumptions, constraint)
        self.__start(assumptions, constraint)
        start = absolute_real_time()
        try:
            for lit in assumptions:
                self.__lib.ccadical_assume(self.__handle, lit)
            if constraint:
                for lit in constraint:
                    constrain(self.__handle, lit)
                constrain(self.__handle, 0)
            res = self.__lib.ccadical_solve(self.__handle)
        except BaseException:
            self.__state.solve_aborted()
            raise
        logging.debug('CDCL: solve returned %s after %.3fs', res, absolute_real_time() - start)
        if self.__bridge.failed:
            self.__state.solve_aborted()
            self.__bridge.finished()
        return self.__state.solve_finished(res)

    def __start(self, assumptions, constraint):
        # nothing reaches the engine if the terminator's start hook fails
        self.__state.solve_started(assumptions, constraint)
        self.__bridge.started()
        if self.__bridge.failed:
            self.__state.solve_aborted()
            self.__bridge.finished()

    def simplify(self):
        """Run preprocessing only, without search. Resets assumptions and
        limits like 'solve' and returns the same kind of status."""
        self.__check()
        simplify = self.__function('ccadical_simplify')
        self.__start((), None)
        try:
            res = simplify(self.__handle)
        except BaseException:
            self.__state.solve_aborted()
            raise
        if self.__bridge.failed:
            self.__state.solve_aborted()
            self.__bridge.finished()
        return self.__state.solve_finished(res)

    def value(self, lit):
        """Value of 'lit' in the last solution: True, False, or None if the
        literal is not determined. Always None unless the status is
        Status.SATISFIABLE. The engine must follow the IPASIR convention:
        ccadical_val(lit) is lit if lit is true and -lit if it is false,
        for negative literals too. Engines that report the value of the
        variable instead give inverted answers for negative literals.

        >>> sat = Solver()
        >>> sat.add_clause([1, 2])
        >>> sat.value(1) is None
        True
        """
        self.__check()
        validate_literal(lit)
        if not self.__state.satisfied:
            return None
        val = self.__lib.ccadical_val(self.__handle, lit)
        if val == lit:
            return True
        elif val == -lit:
            return False
        return None

    def model(self):
        """The last solution as list of literals over the variables
        1..max_variable(), or None unless the status is SATISFIABLE.
        Undetermined variables are reported positive."""
        self.__check()
        if not self.__state.satisfied:
            return None
        val = self.__lib.ccadical_val
        model = []
        for var in range(1, self.max_variable() + 1):
            value = val(self.__handle, var)
            model.append(-var if value == -var else var)
        return model

    def failed(self, lit):
        """Whether the assumption 'lit' of the last 'solve_with' was used
        to prove unsatisfiability. Raises InvalidQuery unless the status
        is Status.UNSATISFIABLE and 'lit' was assumed."""
        self.__check()
        validate_literal(lit)
        self.__state.check_failed_query(lit)
        return self.__lib.ccadical_failed(self.__handle, lit) == 1

    def constraint_failed(self):
        """Whether the constraint clause of the last 'solve_with' was used
        to prove unsatisfiability."""
        self.__check()
        self.__state.check_constraint_query()
        return self.__function('ccadical_constraint_failed')(self.__handle) == 1

    def freeze(self, lit):
        """Keep the variable of 'lit' from being eliminated by inprocessing,
        needed only by code that does not rely on clause restoring. Every
        freeze has to be matched by a 'melt'."""
        self.__check()
        self.__function('ccadical_freeze')(self.__handle, validate_literal(lit))

    def melt(self, lit):
        self.__check()
        self.__function('ccadical_melt')(self.__handle, validate_literal(lit))

    def frozen(self, lit):
        self.__check()
        return bool(self.__function('ccadical_frozen')(self.__handle, validate_literal(lit)))

    def max_variable(self):
        """Largest variable index used so far.

        >>> sat = Solver()
        >>> sat.add_clause([1, -3])
        >>> sat.max_variable()
        3
        """
        self.__check()
        vars_func = getattr(self.__lib, 'ccadical_vars', None)
        if vars_func is None:
            return self.__state.max_var
        return vars_func(self.__handle)

    def num_variables(self):
        """Number of active variables. Variables become inactive when they
        are eliminated or fixed at the root level."""
        self.__check()
        return int(self.__function('ccadical_active')(self.__handle))

    def num_clauses(self):
        """Number of active irredundant clauses."""
        self.__check()
        return int(self.__function('ccadical_irredundant')(self.__handle))

    def configure(self, name):
        """Select a predefined configuration, see 'with_config'. Only valid
        before clauses are added."""
        self.__check()
        logging.info('Configuration "%s"', name)
        ret = self.__function('ccadical_configure')(self.__handle, _c_name(name, 'configuration'))
        if not ret:
            raise UnknownOption('invalid configuration: %s' % name)

    def set_option(self, name, value):
        """Set the engine option 'name' to the integer 'value'."""
        self.__check()
        logging.info('Option "%s"=%s', name, value)
        ret = self.__function('ccadical_set_option')(self.__handle, _c_name(name, 'option'), int(value))
        if not ret:
            raise UnknownOption('unknown option: %s' % name)

    def get_option(self, name):
        self.__check()
        return self.__function('ccadical_get_option')(self.__handle, _c_name(name, 'option'))

    def set_limit(self, name, value):
        """Set a limit for the next solve only, e.g. 'conflicts' or
        'decisions' (negative values disable them), 'preprocessing' or
        'localsearch' rounds, or 'terminate'.

        >>> sat = Solver()
        >>> sat.set_limit('bad', 0)
        Traceback (most recent call last):
        ...
        CaDiCaL.errors.UnknownOption: unknown limit: bad
        """
        self.__check()
        c_name = _c_name(name, 'limit')
        logging.debug('CDCL: limit "%s"=%s', name, value)
        limit2 = getattr(self.__lib, 'ccadical_limit2', None)
        if limit2 is None:
            self.__function('ccadical_limit')(self.__handle, c_name, int(value))
            return
        if not limit2(self.__handle, c_name, int(value)):
            raise UnknownOption('unknown limit: %s' % name)

    def set_terminator(self, terminator):
        """Register a callable polled during search; a truthy result stops
        the search and 'solve' returns Status.UNKNOWN. The callable must
        not call into this solver. Returns a Registration that clears the
        terminator when released.

        >>> sat = Solver()
        >>> sat.add_clause([1, 2])
        >>> with sat.set_terminator(lambda: True):
        ...     sat.solve() in (Status.UNKNOWN, Status.SATISFIABLE)
        True
        """
        self.__check()
        return self.__bridge.set_terminator(terminator)

    def clear_terminator(self):
        self.__check()
        self.__bridge.clear_terminator()

    def set_learn_callback(self, learner, max_length=None):
        """Register a callable receiving each learned clause with at most
        'max_length' literals (all by default) as list of literals. The
        callable must not call into this solver. Returns a Registration.
        """
        self.__check()
        return self.__bridge.set_learner(learner, max_length)

    def clear_learn_callback(self):
        self.__check()
        self.__bridge.clear_learner()

    def read_dimacs(self, file_name, strict=False):
        """Read a formula in DIMACS format. Only allowed before any clause
        has been added. Returns the number of variables reported by the
        engine's parser."""
        self.__check()
        if self.max_variable() != 0:
            raise InvalidQuery('read_dimacs requires an empty solver')
        num_vars = c_int(0)
        logging.debug('CDCL: reading DIMACS from %s', file_name)
        err = self.__function('ccadical_read_dimacs')(
            self.__handle, c_path(file_name), pointer(num_vars), 1 if strict else 0)
        if err:
            raise DimacsError(err.decode('utf-8', 'replace'))
        self.__state.dimacs_loaded(num_vars.value)
        return num_vars.value

    def write_dimacs(self, file_name, min_max_var=0):
        """Write the irredundant clauses in DIMACS format to 'file_name'."""
        self.__check()
        logging.debug('CDCL: writing DIMACS to %s', file_name)
        err = self.__function('ccadical_write_dimacs')(
            self.__handle, c_path(file_name), min_max_var)
        if err:
            raise DimacsError(err.decode('utf-8', 'replace'))

    def print_dimacs(self, output=None):
        """Write the formula in DIMACS format to a file name, a file
        object, or to stdout if 'output' is None or '-'."""
        with wopen(output) as file_name:
            self.write_dimacs(file_name)

    def statistics(self):
        """The statistics report of the engine as text."""
        self.__check()
        print_statistics = self.__function('ccadical_print_statistics')
        with captured_stdout() as out:
            print_statistics(self.__handle)
        return out.text

    def resources(self):
        """Wall and process time in seconds since this solver was created
        and resident set size of the process in bytes."""
        return {
            'real_time': absolute_real_time() - self.__real_time,
            'process_time': absolute_process_time() - self.__process_time,
            'resident_set_size': current_resident_set_size(),
        }
