"""
Formatting utilities for GNSS observation data.

Provides two-digit year expansion and epoch time formatting used by
the RINEX readers and writers.
"""

from __future__ import annotations


def year_2c_to_4c(year_2c: int, pivot: int = 80) -> int:
    """Convert 2-digit year to 4-digit year.

    Uses the RINEX 2 pivot: years at or above ``pivot`` belong to the
    1900s, the rest to the 2000s. Values that are already four digits
    are returned unchanged.

    Args:
        year_2c: 2-digit year (0-99)
        pivot: First 2-digit year mapped to the 1900s

    Returns:
        4-digit year
    """
    if year_2c >= 100:
        return year_2c
    if year_2c >= pivot:
        return 1900 + year_2c
    return 2000 + year_2c


def format_epoch_time(
    year: int,
    month: int,
    day: int,
    hour: int,
    minute: int,
    second: float,
) -> str:
    """Format epoch fields as an ISO-like timestamp.

    Seconds keep seven decimals, the RINEX epoch resolution.

    Example:
        >>> format_epoch_time(2024, 1, 15, 0, 0, 30.0)
        '2024-01-15T00:00:30.0000000'
    """
    return (
        f"{year:04d}-{month:02d}-{day:02d}T"
        f"{hour:02d}:{minute:02d}:{second:010.7f}"
    )
