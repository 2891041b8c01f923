import sys
from typing import List, Optional

import numpy as np

from .algorithms import DEFAULT_PREFIX_LENGTH, jaro_winkler_distance


USAGE = "Usage: jarowinkler <lhs> <rhs>"


def format_score(score: float) -> str:
    """
    Shortest round-trip decimal without exponent or trailing '.0'
    (1.0 -> '1', 0.9611111111111111 -> '0.9611111111111111').
    """
    return np.format_float_positional(score, trim='-')


def main(argv: Optional[List[str]] = None) -> int:
    """
    Print the Jaro-Winkler distance between two strings.

    Arguments are taken verbatim, so values starting with '-' are compared
    rather than parsed as flags. Any argument count other than two prints
    the usage line and still exits successfully.
    """
    args = sys.argv[1:] if argv is None else argv

    if len(args) != 2:
        print(USAGE)
        return 0

    lhs, rhs = args
    score = jaro_winkler_distance(lhs, rhs, DEFAULT_PREFIX_LENGTH)
    print(f"jaro winkler distance: {format_score(score)}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
