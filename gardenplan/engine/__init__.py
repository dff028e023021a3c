"""
Placement and succession scheduling engine for Garden Plan

This package is pure: no database, no clock, no I/O.
- Rectangle geometry (overlap and bounds tests)
- Position finder (adjacent offsets, then raster scan)
- Harvest date estimation
- Succession due scheduling

Author: Garden Plan Development Team
"""

from .geometry import Point, Rect, overlaps, within_bounds, is_free

from .position_finder import (
    find_position,
    PositionResult,
    SearchStrategy
)

from .harvest import estimate_harvest_date, maturity_days, planted_date

from .scheduler import (
    list_upcoming_successions,
    next_succession,
    summarize,
    PlantingRecord,
    SuccessionPlant,
    SuccessionDue,
    LatestPlacement
)

__all__ = [
    # Geometry
    'Point',
    'Rect',
    'overlaps',
    'within_bounds',
    'is_free',

    # Position search
    'find_position',
    'PositionResult',
    'SearchStrategy',

    # Dates
    'estimate_harvest_date',
    'maturity_days',
    'planted_date',

    # Scheduling
    'list_upcoming_successions',
    'next_succession',
    'summarize',
    'PlantingRecord',
    'SuccessionPlant',
    'SuccessionDue',
    'LatestPlacement'
]
