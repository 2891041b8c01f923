#!/usr/bin/env python3
"""
Run the Jaro-Winkler benchmark against the built-in corpus or a JSON config.

Examples:
  python run-bench.py --output results/bench.csv --summary
  python run-bench.py --config bench_config.json
"""
import sys
from jarowinkler.bench import main

if __name__ == '__main__':
    sys.exit(main())
