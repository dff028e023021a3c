"""
Succession Due Scheduler

Builds the forward-looking worklist of succession plantings:
- For each succession-enabled plant, counts the plantings that carry a
  planted date (direct sow, transplant or seed start)
- Skips plants that have reached their maximum number of successions
- Computes when the next generation is due from the most recent planting
  and the plant's succession interval
- Orders the worklist by due date, undated entries last

The scheduler is read-only and deterministic: it works on plain records
and takes "today" as an argument.

Author: Garden Plan Development Team
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional

from gardenplan.engine.harvest import planted_date


DEFAULT_SCHEDULE_MAX_COUNT = 6


@dataclass
class PlantingRecord:
    """
    Planting dates of one placement as seen by the scheduler

    Attributes:
        id: Placement identifier
        bed_name: Name of the bed holding the placement
        direct_sowed_date: Date seeds were sown in place
        transplanted_date: Date seedlings were transplanted
        seeds_started_date: Date seeds were started indoors
    """
    id: int
    bed_name: str
    direct_sowed_date: Optional[date] = None
    transplanted_date: Optional[date] = None
    seeds_started_date: Optional[date] = None

    @property
    def planted_date(self) -> Optional[date]:
        return planted_date(
            self.direct_sowed_date,
            self.transplanted_date,
            self.seeds_started_date,
        )


@dataclass
class SuccessionPlant:
    """A catalog plant with its succession settings and placements"""
    id: int
    name: str
    succession_enabled: bool = False
    succession_interval_days: Optional[int] = None
    succession_max_count: Optional[int] = None
    plantings: List[PlantingRecord] = field(default_factory=list)


@dataclass
class LatestPlacement:
    id: int
    bed_name: str
    planted_date: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "bed_name": self.bed_name,
            "planted_date": self.planted_date,
        }


@dataclass
class SuccessionDue:
    """
    The next succession planting due for one plant

    Attributes:
        plant_id: Plant identifier
        plant_name: Plant display name
        next_succession_number: Generation number the next planting would get
        due_date: ISO date the next planting is due, or None if unknown
        days_until_due: Whole days from today to the due date (negative when late)
        is_overdue: True when the due date has passed
        current_count: Number of dated plantings of this plant
        max_count: Maximum successions considered for scheduling
        interval_days: Days between successive plantings
        latest_placement: Most recently planted placement, if any
    """
    plant_id: int
    plant_name: str
    next_succession_number: int
    due_date: Optional[str]
    days_until_due: Optional[int]
    is_overdue: bool
    current_count: int
    max_count: Optional[int]
    interval_days: Optional[int]
    latest_placement: Optional[LatestPlacement] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "plant_id": self.plant_id,
            "plant_name": self.plant_name,
            "next_succession_number": self.next_succession_number,
            "due_date": self.due_date,
            "days_until_due": self.days_until_due,
            "is_overdue": self.is_overdue,
            "current_count": self.current_count,
            "max_count": self.max_count,
            "interval_days": self.interval_days,
            "latest_placement": self.latest_placement.to_dict() if self.latest_placement else None,
        }


def _latest_planting(plantings: Iterable[PlantingRecord]) -> Optional[PlantingRecord]:
    # Strictly greater: on ties the earlier record in input order wins
    latest: Optional[PlantingRecord] = None
    for planting in plantings:
        planted = planting.planted_date
        if planted is None:
            continue
        if latest is None or planted > latest.planted_date:
            latest = planting
    return latest


def next_succession(
    plant: SuccessionPlant,
    today: date,
    default_max_count: int = DEFAULT_SCHEDULE_MAX_COUNT,
) -> Optional[SuccessionDue]:
    """
    Compute the next due succession for a single plant

    Returns None when the plant is not succession-enabled or has already
    reached its maximum number of dated plantings.
    """
    if not plant.succession_enabled:
        return None

    dated = [p for p in plant.plantings if p.planted_date is not None]
    current_count = len(dated)
    max_count = plant.succession_max_count if plant.succession_max_count is not None else default_max_count

    if current_count >= max_count:
        return None

    latest = _latest_planting(dated)

    due_date: Optional[date] = None
    days_until_due: Optional[int] = None
    is_overdue = False

    if latest is not None and plant.succession_interval_days:
        due_date = latest.planted_date + timedelta(days=plant.succession_interval_days)
        days_until_due = (due_date - today).days
        is_overdue = days_until_due < 0

    latest_placement = None
    if latest is not None:
        latest_placement = LatestPlacement(
            id=latest.id,
            bed_name=latest.bed_name,
            planted_date=latest.planted_date.isoformat(),
        )

    return SuccessionDue(
        plant_id=plant.id,
        plant_name=plant.name,
        next_succession_number=current_count + 1,
        due_date=due_date.isoformat() if due_date else None,
        days_until_due=days_until_due,
        is_overdue=is_overdue,
        current_count=current_count,
        max_count=max_count,
        interval_days=plant.succession_interval_days,
        latest_placement=latest_placement,
    )


def list_upcoming_successions(
    plants: Iterable[SuccessionPlant],
    today: date,
    default_max_count: int = DEFAULT_SCHEDULE_MAX_COUNT,
) -> List[SuccessionDue]:
    """
    Build the succession worklist for a set of plants

    Args:
        plants: Plants with their placements
        today: Reference date for due-date arithmetic
        default_max_count: Scheduling horizon for plants without their own maximum

    Returns:
        One SuccessionDue per qualifying plant, sorted by due date
        (ISO string order), entries without a due date last
    """
    upcoming = []
    for plant in plants:
        due = next_succession(plant, today, default_max_count)
        if due is not None:
            upcoming.append(due)

    # Stable sort keeps input order among equal due dates
    upcoming.sort(key=lambda d: (d.due_date is None, d.due_date or ""))
    return upcoming


def summarize(upcoming: List[SuccessionDue]) -> Dict[str, int]:
    """Summary counts for a worklist"""
    return {
        "total": len(upcoming),
        "overdue": sum(1 for d in upcoming if d.is_overdue),
    }
