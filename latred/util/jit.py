"""
This module exposes `numba.njit` with on-disk caching of compiled kernels
enabled by default.

Caching can be disabled by setting the `LATRED_NUMBA_CACHE` environment
variable to `0`, `false` or `no` (e.g., on read-only installations).
JIT compilation itself can be disabled with numba's own `NUMBA_DISABLE_JIT=1`.
"""

import os

from numba import njit as _numba_njit


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() not in ('0', 'false', 'no', 'off', '')


NUMBA_CACHE_ENABLED = _env_flag('LATRED_NUMBA_CACHE', True)


def njit(*args, **kwargs):
    """
    `numba.njit` filling the `cache` parameter with `NUMBA_CACHE_ENABLED`.
    Usable both bare (`@njit`) and with arguments (`@njit(...)`).
    """
    if args and callable(args[0]):
        return _numba_njit(cache=NUMBA_CACHE_ENABLED)(*args)
    return _numba_njit(*args, **({
        'cache': NUMBA_CACHE_ENABLED,
    } | kwargs))


__all__ = [
    'njit',
    'NUMBA_CACHE_ENABLED',
]
