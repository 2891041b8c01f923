import warnings
from enum import IntEnum
from typing import List, Sequence, Tuple, Union


class PrefixLength(IntEnum):
    """
    Number of leading characters counted for the Winkler prefix bonus.

    FOUR is the usual choice for Latin-script text, TWO for languages such
    as Japanese where short prefixes already carry a lot of information.
    """
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4


DEFAULT_PREFIX_LENGTH = PrefixLength.FOUR

# bound * PREFIX_SCALE must stay <= 1.0 or the bonus can push scores above 1.0
MAX_PREFIX_LENGTH = 10

PREFIX_SCALE = 0.1

JARO_WEIGHT = 1.0 / 3.0


def _match_window_limit(len1: int, len2: int) -> int:
    """Half-width of the matching window, never negative."""
    return max(max(len1, len2) // 2 - 1, 0)


def _scan_matches(source: Sequence, other: Sequence, limit: int) -> List:
    """
    Collect the characters of source that have an unconsumed equal
    character in other within the matching window.

    Each position of other is consumed at most once, so repeated characters
    in source cannot match the same position twice.
    """
    consumed = [False] * len(other)
    matched = []

    for i, char in enumerate(source):
        left = max(0, i - limit)
        right = min(i + limit + 1, len(other))
        for j in range(left, right):
            if not consumed[j] and other[j] == char:
                consumed[j] = True
                matched.append(char)
                break

    return matched


def _count_transpositions(matched1: Sequence, matched2: Sequence) -> int:
    """Half the number of index-paired positions whose characters differ."""
    return sum(1 for c1, c2 in zip(matched1, matched2) if c1 != c2) // 2


def _matching_characters(str1: Sequence, str2: Sequence) -> Tuple[List, List]:
    """Run the window scan in both directions."""
    limit = _match_window_limit(len(str1), len(str2))
    return _scan_matches(str1, str2, limit), _scan_matches(str2, str1, limit)


def jaro_distance(str1: Sequence, str2: Sequence) -> float:
    """
    Calculate the Jaro similarity between two strings (0-1 scale).

    1.0 means the strings are identical, 0.0 means they share no character
    within the matching window. Empty input always scores 0.0.

    Args:
        str1: First string (or any sequence of comparable characters)
        str2: Second string

    Returns:
        Jaro score as a float
    """
    if not str1 or not str2:
        return 0.0

    matched1, matched2 = _matching_characters(str1, str2)
    count = len(matched1)

    if count == 0:
        return 0.0

    transpositions = float(_count_transpositions(matched1, matched2))
    count = float(count)

    return (JARO_WEIGHT * (count / len(str1))
            + JARO_WEIGHT * (count / len(str2))
            + JARO_WEIGHT * ((count - transpositions) / count))


def _validate_prefix_length(prefix_length: Union[PrefixLength, int]) -> int:
    """Check the prefix bound and return it as a plain int."""
    if isinstance(prefix_length, bool) or not isinstance(prefix_length, int):
        raise TypeError(
            f"prefix_length must be a PrefixLength or an int, got {type(prefix_length).__name__}"
        )

    bound = int(prefix_length)
    if bound < 1 or bound > MAX_PREFIX_LENGTH:
        raise ValueError(
            f"prefix_length must be between 1 and {MAX_PREFIX_LENGTH}, got {bound}"
        )

    if bound > PrefixLength.FOUR:
        warnings.warn(
            f"prefix_length {bound} is above the conventional Winkler maximum of 4"
        )

    return bound


def _common_prefix_length(str1: Sequence, str2: Sequence, bound: int) -> int:
    """Count equal leading characters, stopping at the first mismatch or at bound."""
    prefix = 0
    for c1, c2 in zip(str1, str2):
        if c1 != c2:
            break
        prefix += 1
        if prefix >= bound:
            break
    return prefix


def jaro_winkler_distance(str1: Sequence, str2: Sequence,
                          prefix_length: Union[PrefixLength, int] = DEFAULT_PREFIX_LENGTH) -> float:
    """
    Calculate the Jaro-Winkler similarity between two strings (0-1 scale).

    The Jaro score is raised by 0.1 * (1 - jaro) for every leading character
    the strings share, counting at most prefix_length characters.

    Args:
        str1: First string
        str2: Second string
        prefix_length: Maximum prefix considered, a PrefixLength or an int
            between 1 and MAX_PREFIX_LENGTH

    Returns:
        Jaro-Winkler score as a float

    Raises:
        TypeError: If prefix_length is not an integer
        ValueError: If prefix_length is out of range
    """
    bound = _validate_prefix_length(prefix_length)
    jaro = jaro_distance(str1, str2)

    prefix = float(_common_prefix_length(str1, str2, bound))

    return jaro + prefix * PREFIX_SCALE * (1.0 - jaro)
