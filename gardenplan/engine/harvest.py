"""
Planting and harvest date helpers
"""

from datetime import date, datetime, timedelta
from typing import Optional, Union


def planted_date(
    direct_sowed: Optional[date],
    transplanted: Optional[date],
    seeds_started: Optional[date],
) -> Optional[date]:
    """The date a planting counts as planted: direct sow, then transplant, then seed start."""
    for candidate in (direct_sowed, transplanted, seeds_started):
        if candidate is not None:
            return candidate
    return None


def maturity_days(days_min: Optional[int], days_max: Optional[int]) -> Optional[int]:
    """Days to maturity used for estimates; the upper bound is preferred."""
    return days_max if days_max is not None else days_min


def estimate_harvest_date(
    anchor: Union[date, datetime],
    days_to_maturity: Optional[int],
) -> Optional[date]:
    """
    Expected harvest date for a planting made on *anchor*

    Returns None unless *days_to_maturity* is a positive integer.
    """
    if isinstance(days_to_maturity, bool) or not isinstance(days_to_maturity, int):
        return None
    if days_to_maturity <= 0:
        return None
    if isinstance(anchor, datetime):
        anchor = anchor.date()
    return anchor + timedelta(days=days_to_maturity)
