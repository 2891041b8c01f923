from .algorithms import (
    PrefixLength,
    DEFAULT_PREFIX_LENGTH,
    MAX_PREFIX_LENGTH,
    jaro_distance,
    jaro_winkler_distance
)

__version__ = '0.1.0'

__all__ = [
    'PrefixLength',
    'DEFAULT_PREFIX_LENGTH',
    'MAX_PREFIX_LENGTH',
    'jaro_distance',
    'jaro_winkler_distance'
]
