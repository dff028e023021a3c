from pydantic import BaseModel, StrictInt
from typing import Optional


class SuccessionCreate(BaseModel):
    """Schema for creating the next succession from an existing placement"""
    source_placement_id: StrictInt
    target_bed_id: Optional[StrictInt] = None
    x: Optional[int] = None
    y: Optional[int] = None


class LatestPlacementResponse(BaseModel):
    id: int
    bed_name: str
    planted_date: Optional[str]


class SuccessionDueResponse(BaseModel):
    """One entry of the succession worklist"""
    plant_id: int
    plant_name: str
    next_succession_number: int
    due_date: Optional[str]
    days_until_due: Optional[int]
    is_overdue: bool
    current_count: int
    max_count: Optional[int]
    interval_days: Optional[int]
    latest_placement: Optional[LatestPlacementResponse]


class SuccessionSchedule(BaseModel):
    """Schema for the upcoming succession worklist"""
    upcoming: list[SuccessionDueResponse]
    total: int
    overdue: int
