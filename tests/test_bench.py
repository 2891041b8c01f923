import io
import json
import os
import shutil
import tempfile
import unittest
from contextlib import redirect_stdout, redirect_stderr
from unittest import mock

import numpy as np
import pandas as pd

from jarowinkler.algorithms import jaro_winkler_distance
from jarowinkler.bench import RESULT_COLUMNS, BenchmarkRunner, _summary_path, _time_batches, main
from jarowinkler.config_validator import default_config
from jarowinkler.output_writer import write_results, write_summary


HEAVY_BENCH_TESTS = os.getenv("RUN_HEAVY_BENCH_TESTS", "").lower() in ("1", "true", "yes")

FIXTURE_CONFIG = os.path.join(os.path.dirname(__file__), 'fixtures', 'bench_config.json')

SMALL_CASES = [
    {'name': 'names', 'query': 'martha', 'target': 'marhta'},
    {'name': 'empty', 'query': '', 'target': 'helloworld'},
]


class TestBenchmarkRunner(unittest.TestCase):
    """Test the timing harness."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.output_path = os.path.join(self.temp_dir, 'bench.csv')

    def tearDown(self):
        """Clean up test files."""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _config(self, **overrides):
        config = {
            'output': self.output_path,
            'sample_size': 3,
            'iterations': 4,
            'warmup': 0,
            'cases': SMALL_CASES,
        }
        config.update(overrides)
        return config

    def test_result_shape(self):
        """Test one row per case with every column."""
        results = BenchmarkRunner(self._config(), show_progress=False).run()

        self.assertIsInstance(results, pd.DataFrame)
        self.assertEqual(list(results.columns), RESULT_COLUMNS)
        self.assertEqual(list(results['name']), ['names', 'empty'])

    def test_scores_match_engine(self):
        """Test that recorded scores come from jaro_winkler_distance."""
        results = BenchmarkRunner(self._config(), show_progress=False).run()

        self.assertEqual(results.loc[0, 'score'], jaro_winkler_distance('martha', 'marhta'))
        self.assertEqual(results.loc[1, 'score'], 0.0)
        self.assertEqual(results.loc[0, 'query_length'], 6)
        self.assertEqual(results.loc[1, 'target_length'], 10)

    def test_timing_statistics(self):
        """Test that timing columns are positive and ordered."""
        results = BenchmarkRunner(self._config(), show_progress=False).run()

        for _, row in results.iterrows():
            self.assertGreater(row['mean_ns'], 0)
            self.assertLessEqual(row['min_ns'], row['median_ns'])
            self.assertLessEqual(row['median_ns'], row['max_ns'])
            self.assertLessEqual(row['p95_ns'], row['max_ns'])
            self.assertGreaterEqual(row['std_ns'], 0)

    def test_rapidfuzz_baseline(self):
        """Test the rapidfuzz columns."""
        results = BenchmarkRunner(self._config(), show_progress=False).run()

        self.assertAlmostEqual(results.loc[0, 'rapidfuzz_score'], 0.9611111111111111, places=6)
        self.assertGreater(results.loc[0, 'rapidfuzz_mean_ns'], 0)
        self.assertGreater(results.loc[0, 'speed_ratio'], 0)

    def test_without_rapidfuzz(self):
        """Test that baseline columns stay empty when disabled."""
        results = BenchmarkRunner(self._config(compare_rapidfuzz=False), show_progress=False).run()

        self.assertTrue(results['rapidfuzz_score'].isna().all())
        self.assertTrue(results['speed_ratio'].isna().all())

    def test_prefix_length_applied(self):
        """Test that the configured prefix bound is used."""
        config = self._config(prefix_length=1, cases=[{'name': 'p', 'query': 'abcdefghijk', 'target': 'abcdzxywvut'}])
        results = BenchmarkRunner(config, show_progress=False).run()

        self.assertEqual(results.loc[0, 'prefix_length'], 1)
        self.assertEqual(results.loc[0, 'score'], 0.6181818181818182)

    def test_invalid_config(self):
        """Test that the runner validates its config."""
        with self.assertRaises(ValueError):
            BenchmarkRunner(self._config(sample_size=0))

    def test_time_batches(self):
        """Test the batch timer."""
        calls = []
        samples = _time_batches(lambda: calls.append(1), iterations=3, sample_size=4, warmup=2)

        self.assertEqual(len(samples), 4)
        self.assertEqual(len(calls), 3 * (4 + 2))
        self.assertTrue(np.all(samples >= 0))

    @unittest.skipUnless(HEAVY_BENCH_TESTS, "set RUN_HEAVY_BENCH_TESTS=1 to run the full benchmark")
    def test_full_default_benchmark(self):
        """Test the default corpus with the default sample size."""
        config = default_config(self.output_path)
        results = BenchmarkRunner(config, show_progress=False).run()

        self.assertEqual(len(results), 9)
        self.assertTrue((results['score'] > 0).all())
        self.assertTrue((results['score'] <= 1).all())


class TestOutputWriter(unittest.TestCase):
    """Test result and summary files."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        config = {
            'output': os.path.join(self.temp_dir, 'bench.csv'),
            'sample_size': 2,
            'iterations': 2,
            'warmup': 0,
            'cases': SMALL_CASES,
        }
        self.results = BenchmarkRunner(config, show_progress=False).run()

    def tearDown(self):
        """Clean up test files."""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_write_csv(self):
        """Test CSV output in a new directory."""
        path = os.path.join(self.temp_dir, 'nested', 'bench.csv')
        write_results(self.results, path)

        df = pd.read_csv(path)
        self.assertEqual(list(df.columns), RESULT_COLUMNS)
        self.assertEqual(len(df), 2)

    def test_write_json(self):
        """Test JSON records output."""
        path = os.path.join(self.temp_dir, 'bench.json')
        write_results(self.results, path)

        with open(path, 'r', encoding='utf-8') as f:
            records = json.load(f)
        self.assertEqual(len(records), 2)
        self.assertEqual(records[0]['name'], 'names')

    def test_write_summary(self):
        """Test the text summary report."""
        path = os.path.join(self.temp_dir, 'summary.txt')
        write_summary(self.results, path)

        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
        self.assertIn('JARO-WINKLER BENCHMARK SUMMARY', content)
        self.assertIn('Cases: 2', content)
        self.assertIn('names', content)
        self.assertIn('6/6', content)

    def test_summary_requires_columns(self):
        """Test that incomplete frames are rejected."""
        with self.assertRaises(ValueError):
            write_summary(pd.DataFrame({'name': ['x']}), os.path.join(self.temp_dir, 'summary.txt'))


class TestBenchMain(unittest.TestCase):
    """Test the benchmark command line."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        """Clean up test files."""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _run(self, argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            code = main(argv)
        return code, stdout.getvalue(), stderr.getvalue()

    def test_config_file_with_summary(self):
        """Test a run from the fixture config with overrides."""
        output = os.path.join(self.temp_dir, 'results.csv')
        with mock.patch.dict(os.environ, {'BENCH_OUTPUT': os.path.join(self.temp_dir, 'fixture.csv')}):
            code, stdout, _ = self._run([
                '--config', FIXTURE_CONFIG, '--output', output,
                '--iterations', '2', '--sample-size', '2', '--no-rapidfuzz', '--summary', '--quiet'
            ])

        self.assertEqual(code, 0)
        self.assertIn('Done!', stdout)
        self.assertEqual(len(pd.read_csv(output)), 3)
        self.assertTrue(os.path.exists(os.path.join(self.temp_dir, 'results_summary.txt')))

    def test_default_corpus(self):
        """Test a run without a config file."""
        output = os.path.join(self.temp_dir, 'default.json')
        code, stdout, _ = self._run([
            '--output', output, '--iterations', '1', '--sample-size', '1', '--no-rapidfuzz', '--quiet'
        ])

        self.assertEqual(code, 0)
        self.assertIn('Cases: 9', stdout)
        with open(output, 'r', encoding='utf-8') as f:
            self.assertEqual(len(json.load(f)), 9)

    def test_missing_config_file(self):
        """Test the error path for a missing config."""
        code, _, stderr = self._run(['--config', os.path.join(self.temp_dir, 'missing.json')])

        self.assertEqual(code, 1)
        self.assertIn('Error:', stderr)

    def test_invalid_override(self):
        """Test the error path for an invalid override."""
        code, _, stderr = self._run([
            '--output', os.path.join(self.temp_dir, 'x.csv'), '--prefix-length', '0', '--quiet'
        ])

        self.assertEqual(code, 1)
        self.assertIn('prefix_length', stderr)

    def test_summary_path(self):
        """Test summary file naming."""
        self.assertEqual(_summary_path('results/bench.csv'), 'results/bench_summary.txt')
        self.assertEqual(_summary_path('results/bench.json'), 'results/bench_summary.txt')
        self.assertEqual(_summary_path('results/bench'), 'results/bench_summary.txt')


if __name__ == '__main__':
    unittest.main()
