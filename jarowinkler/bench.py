import argparse
import sys
import time
from typing import Dict, Any, Callable, List, Optional

import numpy as np
import pandas as pd
from rapidfuzz.distance import JaroWinkler
from tqdm import tqdm

from .algorithms import PREFIX_SCALE, jaro_winkler_distance
from .config_validator import DEFAULT_OUTPUT, validate_config, validate_config_dict
from .output_writer import write_results, write_summary


RESULT_COLUMNS = [
    'name', 'query', 'target', 'query_length', 'target_length', 'prefix_length',
    'score', 'mean_ns', 'median_ns', 'std_ns', 'min_ns', 'max_ns', 'p95_ns',
    'rapidfuzz_score', 'rapidfuzz_mean_ns', 'speed_ratio',
]


def _time_batches(func: Callable[[], Any], iterations: int, sample_size: int, warmup: int) -> np.ndarray:
    """
    Time func in batches and return the per-call time of each batch in nanoseconds.
    """
    for _ in range(warmup):
        for _ in range(iterations):
            func()

    samples = np.empty(sample_size, dtype=np.float64)
    for sample in range(sample_size):
        start = time.perf_counter_ns()
        for _ in range(iterations):
            func()
        samples[sample] = (time.perf_counter_ns() - start) / iterations

    return samples


class BenchmarkRunner:
    """Times jaro_winkler_distance over a corpus of query/target pairs."""

    def __init__(self, config: Dict[str, Any], show_progress: bool = True):
        """
        Initialize BenchmarkRunner.

        Args:
            config: Benchmark configuration (validated again here, defaults applied)
            show_progress: Display a tqdm progress bar over the cases
        """
        self.config = validate_config_dict(config)
        self.cases = self.config['cases']
        self.prefix_length = self.config['prefix_length']
        self.sample_size = self.config['sample_size']
        self.iterations = self.config['iterations']
        self.warmup = self.config['warmup']
        self.compare_rapidfuzz = self.config['compare_rapidfuzz']
        self.show_progress = show_progress

    def run(self) -> pd.DataFrame:
        """Run every case and return one row of timing statistics per case."""
        rows = []
        disable = not self.show_progress or len(self.cases) < 2
        for case in tqdm(self.cases, desc="Benchmarking cases", disable=disable):
            rows.append(self._run_case(case))
        return pd.DataFrame(rows, columns=RESULT_COLUMNS)

    def _run_case(self, case: Dict[str, str]) -> Dict[str, Any]:
        query = case['query']
        target = case['target']
        prefix_length = self.prefix_length

        samples = _time_batches(
            lambda: jaro_winkler_distance(query, target, prefix_length),
            self.iterations, self.sample_size, self.warmup
        )

        row = {
            'name': case['name'],
            'query': query,
            'target': target,
            'query_length': len(query),
            'target_length': len(target),
            'prefix_length': prefix_length,
            'score': jaro_winkler_distance(query, target, prefix_length),
            'mean_ns': float(np.mean(samples)),
            'median_ns': float(np.median(samples)),
            'std_ns': float(np.std(samples)),
            'min_ns': float(np.min(samples)),
            'max_ns': float(np.max(samples)),
            'p95_ns': float(np.percentile(samples, 95)),
            'rapidfuzz_score': np.nan,
            'rapidfuzz_mean_ns': np.nan,
            'speed_ratio': np.nan,
        }

        if self.compare_rapidfuzz:
            row.update(self._run_baseline(query, target, row['mean_ns']))

        return row

    def _run_baseline(self, query: str, target: str, mean_ns: float) -> Dict[str, float]:
        """Time rapidfuzz's Jaro-Winkler on the same pair for reference."""
        samples = _time_batches(
            lambda: JaroWinkler.similarity(query, target, prefix_weight=PREFIX_SCALE),
            self.iterations, self.sample_size, self.warmup
        )
        baseline_mean = float(np.mean(samples))
        return {
            'rapidfuzz_score': JaroWinkler.similarity(query, target, prefix_weight=PREFIX_SCALE),
            'rapidfuzz_mean_ns': baseline_mean,
            'speed_ratio': mean_ns / baseline_mean if baseline_mean > 0 else np.nan,
        }


def _summary_path(output_path: str) -> str:
    for extension in ('.csv', '.json'):
        if output_path.endswith(extension):
            return output_path[:-len(extension)] + '_summary.txt'
    return output_path + '_summary.txt'


def _build_config(args: argparse.Namespace) -> Dict[str, Any]:
    """Merge a config file (if any) with command-line overrides."""
    if args.config:
        config = validate_config(args.config)
    else:
        config = {'output': DEFAULT_OUTPUT}

    overrides = {
        'output': args.output,
        'sample_size': args.sample_size,
        'iterations': args.iterations,
        'prefix_length': args.prefix_length,
    }
    for key, value in overrides.items():
        if value is not None:
            config[key] = value
    if args.no_rapidfuzz:
        config['compare_rapidfuzz'] = False
    if args.summary:
        config['generate_summary'] = True

    return validate_config_dict(config)


def main(argv: Optional[List[str]] = None) -> int:
    """Benchmark CLI entry point."""
    parser = argparse.ArgumentParser(
        description='Benchmark jaro_winkler_distance against a corpus of misspelled names'
    )
    parser.add_argument(
        '--config',
        type=str,
        help='Path to JSON benchmark configuration file'
    )
    parser.add_argument(
        '--output',
        type=str,
        help=f'Results file (.csv or .json), default {DEFAULT_OUTPUT}'
    )
    parser.add_argument(
        '--sample-size',
        type=int,
        help='Number of timed batches per case'
    )
    parser.add_argument(
        '--iterations',
        type=int,
        help='Calls per timed batch'
    )
    parser.add_argument(
        '--prefix-length',
        type=int,
        help='Winkler prefix bound (1-4 conventional)'
    )
    parser.add_argument(
        '--no-rapidfuzz',
        action='store_true',
        help='Skip the rapidfuzz baseline'
    )
    parser.add_argument(
        '--summary',
        action='store_true',
        help='Also write a text summary next to the results file'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Disable the progress bar'
    )

    args = parser.parse_args(argv)

    try:
        if args.config:
            print(f"Loading configuration from {args.config}...")
        config = _build_config(args)

        runner = BenchmarkRunner(config, show_progress=not args.quiet)
        print(f"Cases: {len(runner.cases)}")
        print(f"Prefix length: {runner.prefix_length}")
        print(f"Sample size: {runner.sample_size} x {runner.iterations} calls")

        print("\nRunning benchmark...")
        results = runner.run()

        print()
        print(results[['name', 'score', 'mean_ns', 'speed_ratio']].to_string(index=False))

        print(f"\nWriting results to {config['output']}...")
        write_results(results, config['output'])

        if config['generate_summary']:
            summary_path = _summary_path(config['output'])
            print(f"Generating summary report to {summary_path}...")
            write_summary(results, summary_path)

        print("Done!")
        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
