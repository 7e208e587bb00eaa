from .profiler import Profiler, NoopProfiler

__all__ = [
    'Profiler',
    'NoopProfiler',
]
