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
from ctypes.util import find_library as find_system_library
from glob import glob
import logging
import os
from os import path

from CaDiCaL.basic_types import CCaDiCaL_P, LitID, LitID_P
from CaDiCaL.errors import EngineFailure

__all__ = ['TERMINATE_FUNC', 'LEARN_FUNC', 'LIB_NAME', 'LIB_PATH_ENV',
           'find_library', 'load_library', 'declare_symbols']

# int (*terminate) (void *state)
TERMINATE_FUNC = CFUNCTYPE(c_int, c_void_p)
# void (*learn) (void *state, int *clause)
LEARN_FUNC = CFUNCTYPE(None, c_void_p, LitID_P)

LIB_NAME = 'libcadical.so*'
LIB_PATH_ENV = 'CADICAL_LIB_PATH'

# (symbol, argtypes, restype, required)
SYMBOLS = [
    ('ccadical_signature', [], c_char_p, True),
    ('ccadical_init', [], CCaDiCaL_P, True),
    ('ccadical_release', [CCaDiCaL_P], None, True),
    ('ccadical_add', [CCaDiCaL_P, LitID], None, True),
    ('ccadical_assume', [CCaDiCaL_P, LitID], None, True),
    ('ccadical_solve', [CCaDiCaL_P], c_int, True),
    ('ccadical_val', [CCaDiCaL_P, LitID], LitID, True),
    ('ccadical_failed', [CCaDiCaL_P, LitID], c_int, True),
    ('ccadical_set_terminate', [CCaDiCaL_P, c_void_p, TERMINATE_FUNC], None, True),
    ('ccadical_set_learn', [CCaDiCaL_P, c_void_p, c_int, LEARN_FUNC], None, True),
    ('ccadical_constrain', [CCaDiCaL_P, LitID], None, False),
    ('ccadical_constraint_failed', [CCaDiCaL_P], c_int, False),
    ('ccadical_set_option', [CCaDiCaL_P, c_char_p, c_int], c_int, False),
    ('ccadical_get_option', [CCaDiCaL_P, c_char_p], c_int, False),
    ('ccadical_limit2', [CCaDiCaL_P, c_char_p, c_int], c_int, False),
    ('ccadical_limit', [CCaDiCaL_P, c_char_p, c_int], None, False),
    ('ccadical_configure', [CCaDiCaL_P, c_char_p], c_int, False),
    ('ccadical_active', [CCaDiCaL_P], c_int64, False),
    ('ccadical_irredundant', [CCaDiCaL_P], c_int64, False),
    ('ccadical_vars', [CCaDiCaL_P], c_int, False),
    ('ccadical_freeze', [CCaDiCaL_P, LitID], None, False),
    ('ccadical_melt', [CCaDiCaL_P, LitID], None, False),
    ('ccadical_frozen', [CCaDiCaL_P, LitID], c_int, False),
    ('ccadical_simplify', [CCaDiCaL_P], c_int, False),
    ('ccadical_read_dimacs', [CCaDiCaL_P, c_char_p, POINTER(c_int), c_int], c_char_p, False),
    ('ccadical_write_dimacs', [CCaDiCaL_P, c_char_p, c_int], c_char_p, False),
    ('ccadical_print_statistics', [CCaDiCaL_P], None, False),
]


def _candidates(lib_path, lib_name):
    if lib_path is None:
        return []
    if not path.isabs(lib_path):
        lib_path = path.realpath('%s/%s' % (path.dirname(__file__), lib_path))
    if path.isdir(lib_path):
        return sorted(glob('%s/%s' % (lib_path, lib_name)))
    return sorted(glob(lib_path))


def find_library(lib_path=None, lib_name=LIB_NAME, configured_path=None):
    """Return the file name of the engine library or None.

    Search order: 'lib_path', the environment variable CADICAL_LIB_PATH,
    'configured_path' (usually taken from config.yaml) and finally the
    system library search path. Paths may name a file, a glob pattern or
    a directory which is searched for 'lib_name'. Relative paths are
    interpreted relative to this package.
    """
    for candidate in (lib_path, os.environ.get(LIB_PATH_ENV), configured_path):
        libs = _candidates(candidate, lib_name)
        if libs:
            if len(libs) > 1:
                logging.debug('Shared Lib: several candidates %s, using first', libs)
            return libs[0]
        if candidate:
            logging.debug('Shared Lib: nothing found at "%s"', candidate)
    return find_system_library('cadical')


def declare_symbols(lib):
    """Set argtypes and restype of every engine function 'lib' exports.
    Raise EngineFailure if a required function is missing."""
    for name, argtypes, restype, required in SYMBOLS:
        try:
            func = getattr(lib, name)
        except AttributeError:
            if required:
                raise EngineFailure('engine library does not export %s' % name)
            logging.debug('Shared Lib: optional function %s not available', name)
            continue
        func.argtypes = argtypes
        func.restype = restype
    return lib


def load_library(lib_path=None, lib_name=LIB_NAME, configured_path=None):
    """Load the engine library and declare its C interface."""
    lib_file = find_library(lib_path, lib_name, configured_path)
    if not lib_file:
        raise EngineFailure('could not find the CaDiCaL library (%s); set %s'
                            % (lib_name, LIB_PATH_ENV))
    logging.info('Loading library from path=%s', lib_file)
    try:
        lib = cdll.LoadLibrary(lib_file)
    except OSError as e:
        raise EngineFailure('could not load %s: %s' % (lib_file, e)) from e
    logging.debug('Shared Lib: %s loaded', lib_file)
    return declare_symbols(lib)
