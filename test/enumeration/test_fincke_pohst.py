from itertools import product
from unittest import TestCase

import numpy as np

from latred.enumeration.cholesky import cholesky_decomposition
from latred.enumeration.fincke_pohst import fincke_pohst, short_vectors, shortest_vectors
from latred.util.profiler import Profiler


def as_set(vectors) -> set[tuple[int, ...]]:
    return {tuple(int(v) for v in x) for x, _ in vectors}

def brute_force(a: np.ndarray, bound: float, box: int) -> set[tuple[int, ...]]:
    n = a.shape[0]
    found = set()
    for x in product(range(-box, box + 1), repeat=n):
        x = np.array(x)
        if np.any(x) and x @ a @ x <= bound:
            found.add(tuple(int(v) for v in x))
    return found


class TestShortVectors(TestCase):
    def test_identity(self):
        Q, _ = cholesky_decomposition(np.eye(2))
        vectors = short_vectors(Q, 2)
        self.assertEqual(len(vectors), 8)
        self.assertEqual(as_set(vectors), {
            (1, 0), (-1, 0), (0, 1), (0, -1),
            (1, 1), (1, -1), (-1, 1), (-1, -1),
        })
        for x, value in vectors:
            self.assertAlmostEqual(value, float(x @ x))

    def test_hexagonal(self):
        a = np.array([[2, 1], [1, 2]])
        Q, _ = cholesky_decomposition(a)
        vectors = short_vectors(Q, 2)
        self.assertEqual(as_set(vectors), {(1, 0), (-1, 0), (0, 1), (0, -1), (1, -1), (-1, 1)})
        for x, value in vectors:
            self.assertAlmostEqual(value, 2)

    def test_one_dimensional(self):
        self.assertEqual(as_set(short_vectors([[2.0]], 8)), {(1,), (-1,), (2,), (-2,)})
        self.assertEqual(short_vectors([[2.0]], 1), [])

    def test_nothing_below_bound(self):
        Q, _ = cholesky_decomposition(np.eye(3) * 5)
        self.assertEqual(short_vectors(Q, 4.5), [])
        self.assertEqual(short_vectors(Q, 0), [])

    def test_malformed(self):
        self.assertEqual(short_vectors([[1, 2, 3]], 1), [])
        self.assertEqual(short_vectors([[0, 0], [0, 1]], 1), [])
        self.assertEqual(short_vectors([[1, 0], [0, -1]], 1), [])
        self.assertEqual(short_vectors([[1, 0], [0, 1]], -1), [])
        self.assertEqual(short_vectors([[1, 0], [2]], 1), [])
        with self.assertWarns(RuntimeWarning):
            self.assertEqual(short_vectors([[1, np.nan], [0, 1]], 1), [])

    def test_random_forms(self):
        rng = np.random.default_rng(23)
        for _ in range(6):
            b = rng.integers(-2, 3, size=(3, 3))
            a = b.T @ b + np.eye(3, dtype=int)
            # Integer form values, so a half-integer bound has no borderline vectors
            bound = 10.5
            expected = brute_force(a, bound, 4)
            with self.subTest(a=a.tolist()):
                Q, _ = cholesky_decomposition(a)
                self.assertEqual(as_set(short_vectors(Q, bound)), expected)
                self.assertEqual(as_set(fincke_pohst(a, bound)), expected)


class TestFinckePohst(TestCase):
    def test_identity(self):
        vectors = fincke_pohst(np.eye(2), 2)
        self.assertEqual(len(vectors), 8)
        for x, value in vectors:
            self.assertAlmostEqual(value, float(x @ x))

    def test_skewed_form(self):
        b = np.array([[1, 100], [0, 1]])
        a = b.T @ b
        vectors = fincke_pohst(a, 1)
        self.assertEqual(as_set(vectors), {(1, 0), (-1, 0), (-100, 1), (100, -1)})
        for x, value in vectors:
            self.assertAlmostEqual(value, 1)

        Q, _ = cholesky_decomposition(a)
        self.assertEqual(as_set(short_vectors(Q, 1)), as_set(vectors))

    def test_not_positive_definite(self):
        self.assertIsNone(fincke_pohst([[1, 2], [2, 1]], 3))
        self.assertIsNone(fincke_pohst([[1, 2, 3]], 3))

    def test_profiler(self):
        profiler = Profiler()
        fincke_pohst(np.eye(3), 1, profiler=profiler)
        self.assertIn('fincke_pohst', profiler.timings)
        self.assertEqual(profiler.counters['short_vector'], 6)

    def test_shortest_vectors(self):
        vectors = shortest_vectors([[2, 1], [1, 2]])
        self.assertEqual(len(vectors), 6)

        vectors = shortest_vectors(np.diag([3, 1, 2]))
        self.assertEqual(as_set(vectors), {(0, 1, 0), (0, -1, 0)})
        for _, value in vectors:
            self.assertAlmostEqual(value, 1)

        self.assertIsNone(shortest_vectors([[1, 2], [2, 1]]))
