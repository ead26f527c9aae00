"""
Column key helpers: collision-free keys within a row and schema ordering.
"""

from typing import Iterable, List, Mapping


def unique_key(base: str, row: Mapping[str, object]) -> str:
    """
    Return a key not present in ``row``.

    ``base`` is returned unchanged when unused; otherwise the first free key
    among ``"base (2)"``, ``"base (3)"``, ... is returned.

    Args:
        base: Candidate column name
        row: Row mapping already built for the current element

    Returns:
        Column name absent from row
    """
    if base not in row:
        return base
    suffix = 2
    while f"{base} ({suffix})" in row:
        suffix += 1
    return f"{base} ({suffix})"


def column_key(category: str, path: Iterable[str]) -> str:
    """Join a category name and property path into a column name."""
    return '.'.join([category, *path])


def sort_columns(columns: Iterable[str]) -> List[str]:
    """Sort column names by plain codepoint order (case-sensitive)."""
    return sorted(columns)
