from unittest import TestCase

import numpy as np

from latred.enumeration.cholesky import cholesky_decomposition, quadratic_form_value


class TestCholesky(TestCase):
    def test_decomposition(self):
        a = np.array([
            [4, 2],
            [2, 3],
        ])
        Q, R = cholesky_decomposition(a)
        np.testing.assert_allclose(R, [[2, 1], [0, np.sqrt(2)]])
        np.testing.assert_allclose(R.T @ R, a)
        np.testing.assert_allclose(Q, [[4, 0.5], [0, 2]])

    def test_quadratic_form_value(self):
        a = np.array([
            [4, 2, 1],
            [2, 3, 0],
            [1, 0, 5],
        ])
        Q, _ = cholesky_decomposition(a)
        rng = np.random.default_rng(19)
        for _ in range(20):
            x = rng.integers(-5, 6, size=3)
            self.assertAlmostEqual(quadratic_form_value(Q, x), float(x @ a @ x), places=8)
        with self.assertRaises(ValueError):
            quadratic_form_value(Q, [1, 2])

    def test_not_positive_definite(self):
        self.assertIsNone(cholesky_decomposition([[1, 2], [2, 1]]))
        self.assertIsNone(cholesky_decomposition([[0, 0], [0, 1]]))
        self.assertIsNone(cholesky_decomposition([[-1]]))

    def test_malformed(self):
        self.assertIsNone(cholesky_decomposition([[1, 0, 0], [0, 1, 0]]))
        self.assertIsNone(cholesky_decomposition([[2, 1], [0, 2]]))
        self.assertIsNone(cholesky_decomposition(np.zeros((0, 0))))
        self.assertIsNone(cholesky_decomposition([[np.nan, 0], [0, 1]]))
