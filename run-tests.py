#!/usr/bin/env python3
"""
Test runner for the jarowinkler project.
Runs the unittest suite (all of it or one file), optionally including the
full benchmark run and a coverage report for the jarowinkler package.
"""

import sys
import os
import subprocess
import argparse


def build_command(test_file=None, verbose=False, coverage=False):
    """Build the unittest command line, wrapped in coverage if requested."""
    if test_file:
        test_name = test_file.replace('.py', '')
        cmd = ['-m', 'unittest', f"tests.{test_name}"]
    else:
        cmd = ['-m', 'unittest', 'discover', '-s', 'tests', '-p', 'test_*.py']

    if verbose:
        cmd.append('-v')

    if coverage:
        cmd = ['-m', 'coverage', 'run', '--source', 'jarowinkler'] + cmd

    return [sys.executable] + cmd


def coverage_available():
    """Check whether the coverage module can be run."""
    result = subprocess.run(
        [sys.executable, '-m', 'coverage', '--version'],
        capture_output=True
    )
    return result.returncode == 0


def run_tests(test_file=None, verbose=False, heavy_tests=False, coverage=False):
    """Run the tests and return the exit code."""
    env = os.environ.copy()
    if heavy_tests:
        env['RUN_HEAVY_BENCH_TESTS'] = '1'
        print("⚠ Heavy benchmark tests enabled (this may take longer)")
        print()

    if coverage and not coverage_available():
        print("⚠ coverage is not installed (pip install -e '.[test]'). Running without coverage...")
        coverage = False

    if test_file:
        print(f"Running specific test: {test_file}")
    else:
        print("Running all tests...")
    print()

    result = subprocess.run(build_command(test_file, verbose, coverage), env=env)

    if coverage and result.returncode == 0:
        print()
        print("Coverage Report:")
        print()
        subprocess.run([sys.executable, '-m', 'coverage', 'report', '-m'])

    return result.returncode


def main():
    parser = argparse.ArgumentParser(
        description='Run tests for the jarowinkler project',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # Run all tests
  %(prog)s -v                       # Run all tests with verbose output
  %(prog)s -t test_algorithms       # Run specific test file
  %(prog)s --heavy                  # Include the full default benchmark run
  %(prog)s --coverage               # Run tests with coverage report
        """
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Run tests with verbose output'
    )

    parser.add_argument(
        '-t', '--test',
        metavar='FILE',
        help='Run a specific test file (e.g., test_algorithms)'
    )

    parser.add_argument(
        '--heavy',
        action='store_true',
        help='Run heavy benchmark tests (sets RUN_HEAVY_BENCH_TESTS=1)'
    )

    parser.add_argument(
        '--coverage',
        action='store_true',
        help='Run tests with coverage report'
    )

    args = parser.parse_args()

    print("========================================")
    print("jarowinkler Test Runner")
    print("========================================")
    print()

    exit_code = run_tests(
        test_file=args.test,
        verbose=args.verbose,
        heavy_tests=args.heavy,
        coverage=args.coverage
    )

    print()
    print("========================================")
    print("All tests passed!" if exit_code == 0 else "Some tests failed!")
    print("========================================")

    sys.exit(exit_code)


if __name__ == '__main__':
    main()
