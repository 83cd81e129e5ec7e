"""
Utility functions and helpers.
"""

from .data_utils import (
    safe_string_conversion,
    is_null_or_empty,
    most_common,
    strip_digits,
    extract_digits
)

__all__ = [
    'safe_string_conversion',
    'is_null_or_empty',
    'most_common',
    'strip_digits',
    'extract_digits'
]
