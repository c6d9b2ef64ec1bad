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

# Process-wide clocks and memory usage. These are plain queries without
# any state of their own.

import time

from memory_profiler import memory_usage

__all__ = ['absolute_real_time', 'absolute_process_time',
           'current_resident_set_size']


def absolute_real_time():
    """Wall clock time in seconds."""
    return time.time()


def absolute_process_time():
    """CPU time of the current process in seconds."""
    return time.process_time()


def current_resident_set_size():
    """Resident set size of the current process in bytes."""
    mib = memory_usage(-1, interval=.01, timeout=None)[0]
    return int(mib * 1024 * 1024)
