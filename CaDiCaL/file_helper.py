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

from contextlib import contextmanager
from tempfile import mkstemp
import os
import shutil
import sys

__all__ = ['c_path', 'wopen']


def c_path(file_name):
    """Encode a path for the engine. Paths containing NUL cannot be passed
    through the C interface.

    >>> c_path('pigeon.cnf')
    b'pigeon.cnf'
    >>> c_path('a\\0b')
    Traceback (most recent call last):
    ...
    ValueError: invalid path: 'a\\x00b'
    """
    encoded = os.fsencode(file_name)
    if b'\0' in encoded:
        raise ValueError('invalid path: %r' % (file_name,))
    return encoded


@contextmanager
def wopen(output=None):
    """Yield a file name the engine can write to and deliver the result to
    'output': a path is written directly, a file object or stdout ('-' or
    None) receive the content of a temporary file afterwards."""
    if isinstance(output, (str, bytes, os.PathLike)) and output != '-':
        yield output
        return
    fd, tmp = mkstemp(suffix='.cnf')
    os.close(fd)
    try:
        yield tmp
        target = sys.stdout if output is None or output == '-' else output
        with open(tmp, 'r') as f:
            shutil.copyfileobj(f, target)
        target.flush()
    finally:
        os.remove(tmp)
