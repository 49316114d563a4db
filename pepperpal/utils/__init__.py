"""Utility functions for pepperpal."""

from pepperpal.utils.helpers import (
    collapse_whitespace,
    normalize_for_hash,
    normalize_query,
    preview,
    rolling_hash,
)

__all__ = [
    "collapse_whitespace",
    "normalize_for_hash",
    "normalize_query",
    "preview",
    "rolling_hash",
]
