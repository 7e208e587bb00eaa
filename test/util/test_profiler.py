from unittest import TestCase

from tqdm import tqdm

from latred.util.profiler import NoopProfiler, Profiler


class TestProfiler(TestCase):
    def test_sections(self):
        profiler = Profiler(decay=0.5)
        with profiler['section']:
            pass
        first = profiler.timings['section']
        self.assertGreaterEqual(first, 0)
        with profiler['section']:
            pass
        self.assertIn('section', profiler.timings)

        with self.assertRaises(ValueError):
            profiler.stop('missing')

    def test_section_propagates_exceptions(self):
        profiler = Profiler()
        with self.assertRaises(KeyError):
            with profiler['failing']:
                raise KeyError('x')
        self.assertIn('failing', profiler.timings)

    def test_counters_and_values(self):
        profiler = Profiler()
        profiler.count('swap')
        profiler.count('swap', 2)
        self.assertEqual(profiler.counters['swap'], 3)
        self.assertEqual(profiler.counters['insertion'], 0)

        profiler.record('rank', 2)
        self.assertEqual(profiler.values['rank'], 2)
        profiler.record('rank', None)
        self.assertNotIn('rank', profiler.values)

    def test_tqdm(self):
        with tqdm(range(2), disable=True) as pbar:
            profiler = Profiler(pbar)
            for _ in pbar:
                with profiler['step']:
                    profiler.count('swap')
        self.assertEqual(profiler.counters['swap'], 2)

    def test_noop(self):
        self.assertIsInstance(Profiler.noop, NoopProfiler)
        with Profiler.noop['section']:
            Profiler.noop.count('swap')
        self.assertEqual(len(Profiler.noop.timings), 0)
        self.assertEqual(len(Profiler.noop.counters), 0)
