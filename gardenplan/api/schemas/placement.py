from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime


class PlacementCreate(BaseModel):
    """Schema for placing a plant directly into a bed"""
    bed_id: int
    plant_id: int
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)
    w: int = Field(..., ge=1)
    h: int = Field(..., ge=1)
    count: int = Field(default=1, ge=1)
    seeds_started_date: Optional[date] = None
    transplanted_date: Optional[date] = None
    direct_sowed_date: Optional[date] = None
    notes: Optional[str] = None


class BedSummary(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class PlantSummary(BaseModel):
    id: int
    name: str
    days_to_maturity_min: Optional[int]
    days_to_maturity_max: Optional[int]
    succession_enabled: bool
    succession_interval_days: Optional[int]
    succession_max_count: Optional[int]

    class Config:
        from_attributes = True


class PlacementResponse(BaseModel):
    """Schema for placement response, with bed and plant context"""
    id: int
    bed_id: int
    plant_id: int
    x: int
    y: int
    w: int
    h: int
    count: int
    succession_group_id: Optional[str]
    succession_number: Optional[int]
    seeds_started_date: Optional[date]
    transplanted_date: Optional[date]
    direct_sowed_date: Optional[date]
    expected_harvest_date: Optional[date]
    notes: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    bed: BedSummary
    plant: PlantSummary

    class Config:
        from_attributes = True
