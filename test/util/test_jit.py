import os
from unittest import TestCase
from unittest.mock import patch

from latred.util.jit import _env_flag, njit


@njit
def increment(x):
    return x + 1

@njit(cache=False)
def double(x):
    return x * 2


class TestJit(TestCase):
    def test_env_flag(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertTrue(_env_flag('LATRED_NUMBA_CACHE', True))
            self.assertFalse(_env_flag('LATRED_NUMBA_CACHE', False))
        for value in ('0', 'false', 'No', ' off '):
            with patch.dict(os.environ, {'LATRED_NUMBA_CACHE': value}):
                self.assertFalse(_env_flag('LATRED_NUMBA_CACHE', True))
        with patch.dict(os.environ, {'LATRED_NUMBA_CACHE': '1'}):
            self.assertTrue(_env_flag('LATRED_NUMBA_CACHE', False))

    def test_njit_forms(self):
        self.assertEqual(increment(1), 2)
        self.assertEqual(double(3), 6)
