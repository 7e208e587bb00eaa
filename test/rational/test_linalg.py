from unittest import TestCase

import numpy as np
from fractions import Fraction

from latred.errors import InexactDivisionError, SingularMatrixError
from latred.rational.linalg import *


class TestLinAlg(TestCase):
    def test_pLU_decomposition_and_related(self):
        """Test PLU decomposition, solve and inverse on square matrices."""
        a = (
            (2, 0, 2),
            (0, 2, 1),
            (2, 1, 3),
        )
        a = as_fraction_array(a)
        n = a.shape[0]

        P, L, U, det_P = pLU_decomposition(a)
        self.assertTrue(np.all(P @ L @ U == a), "PLU decomposition failed")

        ai = inverse(a)
        self.assertTrue(np.all(ai @ a == np.eye(n, dtype=int)), "Inverse failed")

        # Needs a row swap at the first column
        b = (
            ( 0, -1, 1),
            ( 1, -1, 0),
            (-4,  0, 9),
        )
        b = as_fraction_array(b)

        P, L, U, det_P = pLU_decomposition(b)
        self.assertTrue(np.all(P @ L @ U == b), "PLU decomposition failed")
        self.assertEqual(det_P, -1)

        # Single right-hand side
        rhs = as_fraction_array([[1], [2], [3]])
        x = solve(b, rhs)
        self.assertTrue(np.all(b @ x == rhs), "Solve failed for single right-hand side")

        # Vector right-hand side
        rhs_vector = as_fraction_array([1, 2, 3])
        x = solve(b, rhs_vector)
        self.assertEqual(x.shape, (3,))
        self.assertTrue(np.all(b @ x == rhs_vector), "Solve failed for vector right-hand side")

        # Multiple right-hand sides
        rhs_multiple = as_fraction_array([[1, 4], [2, 5], [3, 6]])
        x_multiple = solve(b, rhs_multiple)
        self.assertTrue(np.all(b @ x_multiple == rhs_multiple), "Solve failed for multiple right-hand sides")

        bi = inverse(b)
        self.assertTrue(np.all(bi @ b == np.eye(n, dtype=int)), "Inverse failed")

    def test_gram_inverse(self):
        """Inverse of a Gram matrix with non-integral inverse."""
        k = np.array([[2, 3], [-1, 0], [0, -1]], dtype=object)
        gram = k.T @ k
        gi = inverse(gram)
        self.assertTrue(np.all(gi @ gram == np.eye(2, dtype=int)))
        self.assertEqual(gi[0, 0], Fraction(5, 7))

    def test_singular(self):
        a = (
            (1, 2),
            (2, 4),
        )
        with self.assertRaises(SingularMatrixError):
            pLU_decomposition(a)
        with self.assertRaises(SingularMatrixError):
            inverse(a)
        with self.assertRaises(ValueError):
            inverse(((1, 2, 3), (4, 5, 6)))

    def test_determinant(self):
        """Test the determinant function."""
        a = np.array([
            [1, 2],
            [3, 4]
        ], dtype=int)
        self.assertEqual(determinant(a), -2)

        b = np.array([
            [1, 2, 3],
            [4, 5, 6],
            [7, 8, 9]
        ], dtype=int)
        self.assertEqual(determinant(b), 0)  # This matrix is singular

        c = np.array([
            [2, 0, 2],
            [0, 2, 1],
            [2, 1, 3]
        ], dtype=int)
        det = determinant(c)
        self.assertEqual(det, 2)
        self.assertIsInstance(det, int)

        d = np.array([
            [0, 1, 0],
            [1, 0, 0],
            [0, 0, 1],
        ], dtype=int)
        self.assertEqual(determinant(d), -1)

        e = as_fraction_array([[Fraction(1, 2), 1], [1, 4]])
        self.assertEqual(determinant(e), 1)

        big = np.array([[10**20, 1], [10**20 + 1, 1]], dtype=object)
        self.assertEqual(determinant(big), -1)

    def test_rank(self):
        self.assertEqual(rank(((2, 0, 2), (0, 2, 1), (2, 1, 3))), 3)
        self.assertEqual(rank(((1, 0, 2, 3), (2, 0, 4, 6))), 1)
        self.assertEqual(rank(((1, 1, 1, 1), (1, 1, 1, 1), (1, 1, 2, 1))), 2)
        self.assertEqual(rank(((1, 2), (2, 4), (4, 8), (6, 12))), 1)
        self.assertEqual(rank(np.zeros((3, 4), dtype=int)), 0)

    def test_is_unimodular(self):
        self.assertTrue(is_unimodular(((2, 1), (1, 1))))
        self.assertTrue(is_unimodular(np.eye(4, dtype=np.int64)))
        self.assertFalse(is_unimodular(((2, 0), (0, 1))))
        self.assertFalse(is_unimodular(((1, 2, 3), (4, 5, 6))))
        self.assertFalse(is_unimodular(as_fraction_array(((1, 0), (0, 1)))))

    def test_exact_division(self):
        from latred.arith import exact_div, round_div
        self.assertEqual(exact_div(12, -4), -3)
        with self.assertRaises(InexactDivisionError):
            exact_div(7, 2)
        with self.assertRaises(InexactDivisionError):
            exact_div(7, 0)
        self.assertEqual([round_div(n, 2) for n in (-3, -1, 1, 3, 5)], [-2, 0, 0, 2, 2])
        self.assertEqual(round_div(7, -2), -4)

if __name__ == '__main__':
    import unittest
    unittest.main()
