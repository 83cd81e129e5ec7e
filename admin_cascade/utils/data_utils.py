"""
Data utility functions for cell conversions and frequency heuristics.

This module provides helpers for turning raw spreadsheet cell values into
clean text, picking the most frequent value out of a sequence, and pulling
digits in and out of sheet names and headers.
"""

import re
from collections import Counter
from typing import Any, Hashable, Iterable, Optional

import pandas as pd


def safe_string_conversion(value: Any) -> str:
    """
    Safely convert a cell value to string, handling nulls and cleaning whitespace.

    Integral floats (as produced by spreadsheet engines for numeric codes)
    are rendered without a trailing ``.0``.

    Args:
        value: Value to convert to string

    Returns:
        Cleaned string value or empty string if null
    """
    if value is None:
        return ""

    if not isinstance(value, str) and pd.isna(value):
        return ""

    if isinstance(value, float) and value.is_integer():
        return str(int(value))

    return str(value).strip()


def is_null_or_empty(value: Any) -> bool:
    """
    Check if a value is null, empty, or contains only whitespace.

    Args:
        value: Value to check

    Returns:
        True if value is null/empty, False otherwise
    """
    return safe_string_conversion(value) == ""


def most_common(values: Iterable[Hashable]) -> Optional[Hashable]:
    """
    Return the most frequent value, breaking ties by first-seen order.

    Args:
        values: Sequence of values to count

    Returns:
        The most frequent value, or None if the sequence is empty
    """
    counts = Counter()
    first_seen = {}
    for index, value in enumerate(values):
        counts[value] += 1
        first_seen.setdefault(value, index)

    if not counts:
        return None

    return max(counts, key=lambda value: (counts[value], -first_seen[value]))


def strip_digits(text: str) -> str:
    """Remove every digit character from text."""
    return re.sub(r"\d", "", text)


def extract_digits(text: str) -> Optional[int]:
    """
    Parse the first run of digits in text as an integer.

    Digits after the first run are ignored (``adm2_v10`` gives 2).

    Args:
        text: Text such as a sheet name (``Admin2``, ``eth_pop_adm3``)

    Returns:
        Integer value of the digits, or None if text holds no digits
    """
    match = re.search(r"\d+", text)
    if match is None:
        return None
    return int(match.group())
