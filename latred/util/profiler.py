from __future__ import annotations

import time
from collections import OrderedDict, defaultdict
from typing import Any

from tqdm import tqdm


class Profiler:
    """
    Lightweight instrumentation for reduction and enumeration routines.

    Two kinds of statistics are kept:
    - Timed sections, entered with a labelled `with` statement.
      Repeated sections keep an exponentially decaying average of their duration.
    - Event counters, incremented with `count(label)`.
      Reduction engines count `size_reduction`, `swap` and `insertion` events.

    ## Usage
    ```python
    profiler = Profiler()
    with profiler['lll']:
        lll_reduction(basis, profiler=profiler)
    print(profiler.counters['swap'], profiler.timings['lll'])
    ```

    A tqdm progress bar may be attached to display the statistics live:
    ```python
    with tqdm(bases, desc="Reducing") as pbar:
        profiler = Profiler(pbar)
        for basis in pbar:
            lll_reduction(basis, profiler=profiler)
    ```

    Code that should run at full speed can be given `Profiler.noop`, whose
    sections and counters do nothing.
    """
    noop: Profiler = None

    def __init__(self, tqdm_instance: tqdm | None = None, *, decay: float = 0.95, time_format: str = '{value:.5f}s'):
        self.timings: dict[str, float] = OrderedDict()
        self.counters: dict[str, int] = defaultdict(int)
        self.values: dict[str, Any] = OrderedDict()
        self.decay = decay
        self.time_format = time_format
        self.tqdm_instance = tqdm_instance
        self._section_counts: dict[str, int] = defaultdict(int)
        self._start_times: dict[str, float] = {}

    def attach_tqdm(self, tqdm_instance: tqdm) -> None:
        self.tqdm_instance = tqdm_instance

    def count(self, label: str, increment: int = 1) -> None:
        """
        Increment the event counter `label`.
        """
        self.counters[label] += increment

    def record(self, label: str, value: Any) -> None:
        """
        Record a custom statistic, replacing any previous value.
        Passing `None` removes the statistic.
        """
        if value is not None:
            self.values[label] = value
        else:
            self.values.pop(label, None)

    def start(self, label: str) -> None:
        self._start_times[label] = time.perf_counter()

    def stop(self, label: str) -> float:
        if label not in self._start_times:
            raise ValueError(f"No timer started for label '{label}'")
        elapsed = time.perf_counter() - self._start_times.pop(label)

        if self._section_counts[label] == 0:
            self.timings[label] = elapsed
        else:
            self.timings[label] = self.timings[label] * self.decay + elapsed * (1 - self.decay)
        self._section_counts[label] += 1

        if self.tqdm_instance is not None:
            self._update_tqdm()
        return elapsed

    def _update_tqdm(self) -> None:
        postfix = OrderedDict(
            [(label, self.time_format.format(value=value)) for label, value in self.timings.items()]
            + [(label, value) for label, value in self.counters.items()]
            + [(label, value) for label, value in self.values.items()]
        )
        self.tqdm_instance.set_postfix(postfix)

    def __getitem__(self, label: str) -> ProfilerSection:
        return ProfilerSection(self, label)


class ProfilerSection:
    """
    Context manager timing the body of a `with` statement.
    """
    def __init__(self, profiler: Profiler, label: str):
        self.profiler = profiler
        self.label = label

    def __enter__(self):
        self.profiler.start(self.label)
        return None

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.profiler.stop(self.label)
        return False


class _NoopSection:
    def __enter__(self):
        return None

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False


class NoopProfiler(Profiler):
    """
    Profiler that records nothing.
    """
    def __init__(self):
        super().__init__()
        self._section = _NoopSection()

    def attach_tqdm(self, tqdm_instance) -> None:
        pass

    def count(self, label: str, increment: int = 1) -> None:
        pass

    def record(self, label: str, value: Any) -> None:
        pass

    def start(self, label: str) -> None:
        pass

    def stop(self, label: str) -> float:
        return 0.0

    def __getitem__(self, label: str):
        return self._section


Profiler.noop = NoopProfiler()


__all__ = [
    'Profiler',
    'ProfilerSection',
    'NoopProfiler',
]
