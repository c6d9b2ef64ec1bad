import doctest
from os import path
import shutil
import tempfile
import threading
import time
import unittest

from CaDiCaL import *

LIB_FILE = find_library()
EXTENSIONS = ('ccadical_configure', 'ccadical_limit2', 'ccadical_vars',
              'ccadical_read_dimacs', 'ccadical_write_dimacs')

requires_library = unittest.skipIf(LIB_FILE is None, 'CaDiCaL library not found, set CADICAL_LIB_PATH')


def exports(*names):
    if LIB_FILE is None:
        return False
    lib = load_library(LIB_FILE)
    return all(hasattr(lib, name) for name in names)


def requires(*names):
    return unittest.skipUnless(exports(*names), 'library lacks %s' % ', '.join(names))


def pigeon_hole(num):
    sat = Solver()
    for i in range(num + 1):
        sat.add_clause([1 + i * num + j for j in range(num)])
    for i1 in range(num + 1):
        for i2 in range(num + 1):
            if i1 == i2:
                continue
            for j in range(num):
                sat.add_clause([-(1 + i1 * num + j), -(1 + i2 * num + j)])
    return sat


@requires_library
@requires(*EXTENSIONS)
class TestDocTest(unittest.TestCase):
    def test_doctest(self):
        suite = unittest.TestSuite()
        suite.addTest(doctest.DocTestSuite('CaDiCaL.CDCL'))
        result = unittest.TextTestRunner(verbosity=1).run(suite)
        assert result.wasSuccessful()


@requires_library
class TestSolver(unittest.TestCase):

    def test_solver(self):
        with Solver() as sat:
            assert sat.signature().startswith('cadical-')
            self.assertEqual(sat.status, Status.UNKNOWN)
            sat.add_clause([1, 2])
            self.assertEqual(sat.max_variable(), 2)
            self.assertEqual(sat.num_variables(), 2)
            self.assertEqual(sat.num_clauses(), 1)
            self.assertEqual(sat.solve(), Status.SATISFIABLE)
            self.assertEqual(sat.solve_with([-1]), Status.SATISFIABLE)
            self.assertEqual(sat.value(1), False)
            self.assertEqual(sat.value(-1), True)
            self.assertEqual(sat.value(2), True)
            self.assertEqual(sat.value(-2), False)
            self.assertEqual(sat.solve_with([-2]), Status.SATISFIABLE)
            self.assertEqual(sat.value(1), True)
            self.assertEqual(sat.value(2), False)
            self.assertEqual(sat.solve_with([-1, -2]), Status.UNSATISFIABLE)
            assert sat.failed(-1)
            assert sat.failed(-2)
            self.assertEqual(sat.status, Status.UNSATISFIABLE)
            sat.add_clause([4, 5])
            self.assertEqual(sat.status, Status.UNKNOWN)
            self.assertEqual(sat.max_variable(), 5)
            self.assertEqual(sat.num_variables(), 4)
            self.assertEqual(sat.num_clauses(), 2)
            self.assertEqual(sat.solve_with([-1, -2, -4]), Status.UNSATISFIABLE)
            assert sat.failed(-1)
            assert sat.failed(-2)
            assert not sat.failed(-4)

    def test_temporary_constraint(self):
        with Solver() as sat:
            sat.add_clause([1, 2])
            self.assertEqual(sat.solve(), Status.SATISFIABLE)
            self.assertEqual(sat.solve_with([1], [-1, -2]), Status.SATISFIABLE)
            self.assertEqual(sat.value(1), True)
            self.assertEqual(sat.value(2), False)
            self.assertEqual(sat.solve_with([1, 2], [-1, -2]), Status.UNSATISFIABLE)
            assert sat.constraint_failed()
            self.assertEqual(sat.solve(), Status.SATISFIABLE)

    def test_timeout(self):
        sat = pigeon_hole(9)
        for timeout in (0.2, 0.5):
            started = time.time()
            sat.set_terminator(Timeout(timeout))
            result = sat.solve()
            elapsed = time.time() - started
            if result == Status.UNKNOWN:
                assert timeout - 0.1 < elapsed < timeout + 1.0
            else:
                self.assertEqual(result, Status.UNSATISFIABLE)
        sat.clear_terminator()
        sat.release()

    def test_raising_terminator(self):
        def terminator():
            raise RuntimeError('stop')
        with pigeon_hole(9) as sat:
            sat.set_terminator(terminator)
            self.assertRaises(CallbackFailed, sat.solve)
            self.assertEqual(sat.status, Status.UNKNOWN)
            sat.clear_terminator()
            sat.add_clause([1])
            self.assertEqual(sat.status, Status.UNKNOWN)

    def test_learn_callback(self):
        learned = []
        with pigeon_hole(5) as sat:
            sat.set_learn_callback(learned.append, 2)
            self.assertEqual(sat.solve(), Status.UNSATISFIABLE)
        for clause in learned:
            assert len(clause) <= 2
            self.assertNotIn(0, clause)

    def test_moving(self):
        sat = pigeon_hole(5)
        results = []
        worker = threading.Thread(target=lambda: results.append(sat.solve()))
        worker.start()
        worker.join()
        self.assertEqual(results, [Status.UNSATISFIABLE])
        sat.release()


@requires_library
@requires('ccadical_limit2')
class TestLimits(unittest.TestCase):

    def test_decision_limit(self):
        with pigeon_hole(5) as sat:
            sat.set_limit('decisions', 100)
            self.assertEqual(sat.solve(), Status.UNKNOWN)
            sat.set_limit('decisions', -1)
            self.assertEqual(sat.solve(), Status.UNSATISFIABLE)

    def test_conflict_limit(self):
        with pigeon_hole(5) as sat:
            sat.set_limit('conflicts', 100)
            self.assertEqual(sat.solve(), Status.UNKNOWN)
            sat.set_limit('conflicts', -1)
            self.assertEqual(sat.solve(), Status.UNSATISFIABLE)

    def test_bad_limit(self):
        with pigeon_hole(5) as sat:
            self.assertRaises(UnknownOption, sat.set_limit, '\0', 0)
            self.assertRaises(UnknownOption, sat.set_limit, 'bad', 0)


@requires_library
@requires('ccadical_read_dimacs', 'ccadical_write_dimacs', 'ccadical_vars')
class TestFileIO(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp)

    def test_fileio(self):
        file_name = path.join(self.tmp, 'pigeon5.cnf')
        with pigeon_hole(5) as sat:
            sat.write_dimacs(file_name)
            num_vars = sat.max_variable()
        assert path.isfile(file_name)
        with Solver() as sat:
            self.assertEqual(sat.read_dimacs(file_name), num_vars)
            self.assertEqual(sat.solve(), Status.UNSATISFIABLE)
        with Solver() as sat:
            self.assertRaises(DimacsError, sat.read_dimacs, path.join(self.tmp, 'MISSINGFILE'))


if __name__ == '__main__':
    unittest.main()
