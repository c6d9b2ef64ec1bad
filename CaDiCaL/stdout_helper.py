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

from ctypes import CDLL
from contextlib import contextmanager
from tempfile import TemporaryFile
import os
import sys

__all__ = ['CapturedOutput', 'captured_stdout']


class CapturedOutput(object):
    text = ''


def _flush_c_stdout():
    # native output is buffered by libc, not by sys.stdout
    CDLL(None).fflush(None)


@contextmanager
def captured_stdout():
    """Capture everything written to file descriptor 1, including output
    of native code that bypasses sys.stdout. The text is available in the
    yielded object once the block is left."""
    captured = CapturedOutput()
    sys.stdout.flush()
    _flush_c_stdout()
    stdout = os.dup(1)
    with TemporaryFile() as tmp:
        os.dup2(tmp.fileno(), 1)
        try:
            yield captured
        finally:
            _flush_c_stdout()
            os.dup2(stdout, 1)
            os.close(stdout)
            tmp.seek(0)
            captured.text = tmp.read().decode('utf-8', 'replace')
