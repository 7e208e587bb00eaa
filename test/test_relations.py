from fractions import Fraction
from math import pi, sqrt
from unittest import TestCase

import numpy as np

from latred.relations import algebraic_dependence, find_integer_relation, integer_relation, relation_lattice


class TestRelations(TestCase):
    def test_relation_lattice(self):
        basis = relation_lattice([0.5, Fraction(3, 4), 2], 10)
        self.assertEqual(basis.shape, (4, 3))
        self.assertTrue(np.all(basis[:3, :] == np.eye(3, dtype=int)))
        # 5 exactly, 7.5 rounds to even, 20 exactly
        self.assertEqual(list(basis[3, :]), [5, 8, 20])

    def test_sqrt_relation(self):
        relation = find_integer_relation([sqrt(2), sqrt(8)], 10**6)
        self.assertIn(tuple(int(x) for x in relation), ((2, -1), (-2, 1)))

        basis = integer_relation([sqrt(2), sqrt(8)], 10**6)
        self.assertEqual(basis.shape, (3, 2))
        self.assertEqual(abs(int(basis[2, 0])), 1)

    def test_algebraic_dependence(self):
        coefficients = algebraic_dependence(sqrt(2), 2, 10**8)
        self.assertIn(tuple(int(x) for x in coefficients), ((-2, 0, 1), (2, 0, -1)))

        # 1 + √2 is a root of t² − 2t − 1
        coefficients = algebraic_dependence(1 + sqrt(2), 2, 10**8)
        self.assertIn(tuple(int(x) for x in coefficients), ((-1, -2, 1), (1, 2, -1)))

    def test_no_small_relation(self):
        relation = find_integer_relation([1.0, pi], 10**6)
        x, y = (int(v) for v in relation)
        self.assertGreater(abs(x) + abs(y), 10)

    def test_degenerate(self):
        self.assertIsNone(integer_relation([], 10))
        self.assertIsNone(find_integer_relation([], 10))
        with self.assertRaises(ValueError):
            algebraic_dependence(2.0, 0, 10)
