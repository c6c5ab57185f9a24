"""Argument checks shared by endpoint functions."""

from __future__ import annotations


def require_non_empty(value: str, name: str) -> str:
    """Reject empty or whitespace-only identifiers before a request is built."""
    if not value or not value.strip():
        raise ValueError(f"'{name}' must not be empty")
    return value


def require_range(value: int, name: str, low: int, high: int) -> int:
    """Reject ``value`` outside ``[low, high]``."""
    if value < low or value > high:
        raise ValueError(
            f"'{name}' must be between {low} and {high}; {name}: {value}"
        )
    return value
