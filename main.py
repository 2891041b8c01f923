#!/usr/bin/env python3
"""
Print the Jaro-Winkler distance between two strings.

Usage: python main.py <lhs> <rhs>
"""
import sys
from jarowinkler.cli import main

if __name__ == '__main__':
    sys.exit(main())
