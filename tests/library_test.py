from ctypes import c_int
import os
from os import path
import shutil
import tempfile
from types import SimpleNamespace
import unittest
from unittest import mock

from CaDiCaL import *
from CaDiCaL import library
from CaDiCaL.library import LIB_PATH_ENV, SYMBOLS, declare_symbols


def fake_library(skip=()):
    lib = SimpleNamespace()
    for name, _, _, _ in SYMBOLS:
        if name not in skip:
            setattr(lib, name, SimpleNamespace())
    return lib


class TestFindLibrary(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.mkdtemp()
        self.other = tempfile.mkdtemp()
        for name in ('libcadical.so.1', 'libcadical.so', 'libother.so'):
            open(path.join(self.tmp, name), 'w').close()
        open(path.join(self.other, 'libcadical.so'), 'w').close()
        env = dict(os.environ)
        env.pop(LIB_PATH_ENV, None)
        self.env = mock.patch.dict(os.environ, env, clear=True)
        self.env.start()
        self.system = mock.patch.object(library, 'find_system_library', return_value=None)
        self.system.start()

    def tearDown(self):
        self.system.stop()
        self.env.stop()
        shutil.rmtree(self.tmp)
        shutil.rmtree(self.other)

    def test_directory(self):
        self.assertEqual(find_library(self.tmp), path.join(self.tmp, 'libcadical.so'))

    def test_file(self):
        lib_file = path.join(self.tmp, 'libcadical.so.1')
        self.assertEqual(find_library(lib_file), lib_file)

    def test_glob(self):
        self.assertEqual(find_library(path.join(self.tmp, 'libother*')),
                         path.join(self.tmp, 'libother.so'))

    def test_lib_name(self):
        self.assertEqual(find_library(self.tmp, 'libother.so'),
                         path.join(self.tmp, 'libother.so'))

    def test_environment(self):
        os.environ[LIB_PATH_ENV] = self.other
        self.assertEqual(find_library(), path.join(self.other, 'libcadical.so'))
        self.assertEqual(find_library(self.tmp), path.join(self.tmp, 'libcadical.so'))

    def test_configured_path(self):
        self.assertEqual(find_library(configured_path=self.other),
                         path.join(self.other, 'libcadical.so'))
        os.environ[LIB_PATH_ENV] = self.tmp
        self.assertEqual(find_library(configured_path=self.other),
                         path.join(self.tmp, 'libcadical.so'))

    def test_fall_through(self):
        missing = path.join(self.tmp, 'nothing-here')
        self.assertEqual(find_library(missing, configured_path=self.other),
                         path.join(self.other, 'libcadical.so'))

    def test_not_found(self):
        self.assertIsNone(find_library(path.join(self.tmp, 'nothing-here')))
        self.assertRaises(EngineFailure, load_library, path.join(self.tmp, 'nothing-here'))

    def test_system_library(self):
        with mock.patch.object(library, 'find_system_library', return_value='libcadical.so.2'):
            self.assertEqual(find_library(), 'libcadical.so.2')

    def test_not_loadable(self):
        self.assertRaises(EngineFailure, load_library, self.tmp)


class TestDeclareSymbols(unittest.TestCase):

    def test_declared(self):
        lib = declare_symbols(fake_library())
        self.assertEqual(lib.ccadical_solve.restype, c_int)
        self.assertEqual(len(lib.ccadical_set_learn.argtypes), 4)
        self.assertEqual(lib.ccadical_val.restype, LitID)

    def test_optional_missing(self):
        lib = declare_symbols(fake_library(skip=('ccadical_limit2', 'ccadical_vars')))
        assert not hasattr(lib, 'ccadical_limit2')
        self.assertEqual(lib.ccadical_limit.restype, None)

    def test_required_missing(self):
        self.assertRaises(EngineFailure, declare_symbols, fake_library(skip=('ccadical_val',)))


if __name__ == '__main__':
    unittest.main()
