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

from itertools import count
import logging
from weakref import WeakValueDictionary

from CaDiCaL.basic_types import LIT_MAX
from CaDiCaL.errors import CallbackFailed
from CaDiCaL.library import TERMINATE_FUNC, LEARN_FUNC
from CaDiCaL.resources import absolute_real_time

__all__ = ['CallbackBridge', 'Registration', 'Timeout',
           'terminate_trampoline', 'learn_trampoline']

# The engine only hands back the opaque 'state' value it was given. We
# pass a context id and resolve it here, so one native function per kind
# serves every solver. Entries vanish with their solver.
_bridges = WeakValueDictionary()
_contexts = count(1)

# NULL function pointers, they detach a hook
NO_TERMINATE = TERMINATE_FUNC(0)
NO_LEARN = LEARN_FUNC(0)


@TERMINATE_FUNC
def terminate_trampoline(state):
    bridge = _bridges.get(state)
    if bridge is None:
        return 0
    return bridge.terminate()


@LEARN_FUNC
def learn_trampoline(state, clause):
    bridge = _bridges.get(state)
    if bridge is not None:
        bridge.learn(clause)


class Registration(object):
    """Handle of a registered callback. Releasing it, explicitly or by
    leaving a 'with' block, clears the callback unless it has been
    replaced or cleared in the meantime.

    >>> r = Registration(lambda r: None)
    >>> r.active
    True
    >>> with r:
    ...     pass
    >>> r.active
    False
    """

    def __init__(self, clear):
        self.__clear = clear
        self.active = True

    def release(self):
        if self.active:
            self.active = False
            self.__clear(self)

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.release()


class CallbackBridge(object):
    """Connects a terminator and a learn callback of one solver to the
    engine's 'set_terminate' and 'set_learn' hooks.

    The bridge only references the callables. Callers have to keep
    whatever the callables use alive until the callback is replaced,
    cleared or the solver is released. Callbacks are invoked on the
    thread that called 'solve' and must not call back into the solver.

    An exception raised by a callback never reaches the engine. It is
    stored, the engine is asked to terminate, and 'finished' raises
    CallbackFailed once the engine has returned.
    """

    def __init__(self, lib, handle):
        self.__lib = lib
        self.__handle = handle
        self.__context = next(_contexts)
        self.__terminator = None
        self.__terminator_registration = None
        self.__learner = None
        self.__learner_registration = None
        self.__terminate_installed = False
        self.__failure = None
        _bridges[self.__context] = self

    @property
    def context(self):
        return self.__context

    @property
    def terminator(self):
        return self.__terminator

    @property
    def learner(self):
        return self.__learner

    def __install_terminate(self, on):
        if on == self.__terminate_installed:
            return
        if on:
            self.__lib.ccadical_set_terminate(self.__handle, self.__context,
                                              terminate_trampoline)
        else:
            self.__lib.ccadical_set_terminate(self.__handle, None, NO_TERMINATE)
        self.__terminate_installed = on

    def set_terminator(self, terminator):
        """Register 'terminator', a callable polled by the engine during
        'solve'. A truthy result asks the engine to stop, in which case
        'solve' returns Status.UNKNOWN. Replaces any previous terminator.
        """
        if not callable(terminator):
            raise TypeError('terminator must be callable: %r' % (terminator,))
        self.__deactivate(self.__terminator_registration)
        logging.debug('Callbacks: set terminator %r', terminator)
        self.__terminator = terminator
        self.__terminator_registration = Registration(self.__release_terminator)
        self.__install_terminate(True)
        return self.__terminator_registration

    def clear_terminator(self):
        self.__deactivate(self.__terminator_registration)
        self.__terminator_registration = None
        self.__terminator = None
        # a learn callback still needs the terminate hook to abort on failure
        self.__install_terminate(self.__learner is not None)

    def set_learner(self, learner, max_length=None):
        """Register 'learner', called with every learned clause of at most
        'max_length' literals as a list without the terminating zero.
        Longer clauses are filtered by the engine. Replaces any previous
        learn callback.
        """
        if not callable(learner):
            raise TypeError('learn callback must be callable: %r' % (learner,))
        if max_length is None:
            max_length = LIT_MAX
        if max_length < 0:
            raise ValueError('max_length must not be negative: %i' % max_length)
        self.__deactivate(self.__learner_registration)
        logging.debug('Callbacks: set learner %r max_length=%i', learner, max_length)
        self.__learner = learner
        self.__learner_registration = Registration(self.__release_learner)
        self.__lib.ccadical_set_learn(self.__handle, self.__context, max_length,
                                      learn_trampoline)
        self.__install_terminate(True)
        return self.__learner_registration

    def clear_learner(self):
        self.__deactivate(self.__learner_registration)
        self.__learner_registration = None
        if self.__learner is not None:
            self.__lib.ccadical_set_learn(self.__handle, None, 0, NO_LEARN)
        self.__learner = None
        self.__install_terminate(self.__terminator is not None)

    def clear(self):
        """Detach both callbacks from the engine and forget the context.
        The bridge is unusable afterwards."""
        if self.__handle is None:
            return
        logging.debug('Callbacks: clearing context %i', self.__context)
        self.clear_terminator()
        self.clear_learner()
        _bridges.pop(self.__context, None)
        self.__handle = None

    def __deactivate(self, registration):
        if registration is not None:
            registration.active = False

    def __release_terminator(self, registration):
        if registration is self.__terminator_registration:
            self.clear_terminator()

    def __release_learner(self, registration):
        if registration is self.__learner_registration:
            self.clear_learner()

    def started(self):
        """Reset the per-call state before the engine is entered."""
        self.__failure = None
        started = getattr(self.__terminator, 'started', None)
        if started is not None:
            try:
                started()
            except BaseException as e:
                self.__record(e)

    def finished(self):
        """Raise the failure of a callback during the last call, if any."""
        failure, self.__failure = self.__failure, None
        if failure is None:
            return
        if not isinstance(failure, Exception):
            raise failure
        raise CallbackFailed('callback raised %s: %s'
                             % (type(failure).__name__, failure)) from failure

    @property
    def failed(self):
        return self.__failure is not None

    def __record(self, failure):
        logging.debug('Callbacks: callback raised %r, terminating', failure)
        if self.__failure is None:
            self.__failure = failure

    def terminate(self):
        if self.__failure is not None:
            return 1
        if self.__terminator is None:
            return 0
        try:
            return 1 if self.__terminator() else 0
        except BaseException as e:
            self.__record(e)
            return 1

    def learn(self, clause):
        if self.__failure is not None or self.__learner is None:
            return
        try:
            lits = []
            i = 0
            while clause[i]:
                lits.append(clause[i])
                i += 1
            self.__learner(lits)
        except BaseException as e:
            self.__record(e)


class Timeout(object):
    """Terminator that fires once 'timeout' seconds of wall time have
    passed since the start of the current 'solve'.

    >>> t = Timeout(0.0)
    >>> t()
    True
    >>> Timeout(3600)()
    False
    """

    def __init__(self, timeout):
        self.timeout = timeout
        self.started_at = absolute_real_time()

    def started(self):
        self.started_at = absolute_real_time()

    def elapsed(self):
        return absolute_real_time() - self.started_at

    def __call__(self):
        return self.elapsed() >= self.timeout
