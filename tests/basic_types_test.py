import doctest
import unittest

from CaDiCaL import *
from CaDiCaL.basic_types import variable


class TestDocTest(unittest.TestCase):
    def test_doctest(self):
        suite = unittest.TestSuite()
        for module in ('CaDiCaL.basic_types', 'CaDiCaL.state', 'CaDiCaL.callbacks',
                       'CaDiCaL.config', 'CaDiCaL.file_helper'):
            suite.addTest(doctest.DocTestSuite(module))
        result = unittest.TextTestRunner(verbosity=1).run(suite)
        assert result.wasSuccessful()


class TestLiterals(unittest.TestCase):

    def test_range(self):
        self.assertEqual(LIT_MAX, 2 ** 31 - 1)
        self.assertEqual(LIT_MIN, -LIT_MAX)
        self.assertEqual(validate_literal(LIT_MAX), LIT_MAX)
        self.assertEqual(validate_literal(LIT_MIN), LIT_MIN)
        self.assertRaises(InvalidLiteral, validate_literal, LIT_MAX + 1)
        self.assertRaises(InvalidLiteral, validate_literal, LIT_MIN - 1)

    def test_types(self):
        for bad in (1.0, '1', None, False, [1]):
            self.assertRaises(InvalidLiteral, validate_literal, bad)

    def test_value_error(self):
        # callers catching ValueError see invalid literals as well
        self.assertRaises(ValueError, validate_literal, 0)

    def test_clause_checked_before_use(self):
        seen = []

        def lits():
            for lit in (1, 2, 0, 3):
                seen.append(lit)
                yield lit
        self.assertRaises(InvalidLiteral, validate_clause, lits())
        self.assertEqual(seen, [1, 2, 0])

    def test_variable(self):
        self.assertEqual(variable(5), 5)
        self.assertEqual(variable(-5), 5)


class TestStatus(unittest.TestCase):

    def test_codes(self):
        self.assertEqual(Status.UNKNOWN, CADICAL_RESULT_UNKNOWN)
        self.assertEqual(Status.SATISFIABLE, 10)
        self.assertEqual(Status.UNSATISFIABLE, 20)
        self.assertEqual(Status(20), Status.UNSATISFIABLE)

    def test_names(self):
        self.assertEqual([status2str(s) for s in Status], ['unknown', 'sat', 'unsat'])


if __name__ == '__main__':
    unittest.main()
