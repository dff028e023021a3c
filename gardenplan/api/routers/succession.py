from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_
from sqlalchemy.orm import selectinload
from uuid import UUID
import logging

from gardenplan.api.core.clock import Clock, get_clock
from gardenplan.api.core.database import get_db
from gardenplan.api.core.security import get_current_user_id
from gardenplan.api.models import BedPlacement, Plant
from gardenplan.api.schemas.placement import PlacementResponse
from gardenplan.api.schemas.succession import SuccessionCreate, SuccessionSchedule
from gardenplan.api.config import settings
from gardenplan.engine import (
    PlantingRecord,
    SuccessionPlant,
    list_upcoming_successions,
    summarize,
)
from gardenplan.services import create_succession_planting

router = APIRouter()
logger = logging.getLogger(__name__)


def _to_succession_plant(plant: Plant) -> SuccessionPlant:
    # Newest placements first; the scheduler keeps the first of equally dated ones
    placements = sorted(
        plant.placements,
        key=lambda p: (p.created_at is not None, p.created_at, p.id),
        reverse=True
    )
    return SuccessionPlant(
        id=plant.id,
        name=plant.name,
        succession_enabled=plant.succession_enabled,
        succession_interval_days=plant.succession_interval_days,
        succession_max_count=plant.succession_max_count,
        plantings=[
            PlantingRecord(
                id=p.id,
                bed_name=p.bed.name,
                direct_sowed_date=p.direct_sowed_date,
                transplanted_date=p.transplanted_date,
                seeds_started_date=p.seeds_started_date,
            )
            for p in placements
        ]
    )


@router.get("/", response_model=SuccessionSchedule)
async def list_upcoming(
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock)
):
    """
    Upcoming succession plantings for the authenticated user

    One entry per succession-enabled plant that has not reached its
    maximum, ordered by due date (plants without a due date last)
    """
    result = await db.execute(
        select(Plant)
        .where(
            and_(
                Plant.user_id == user_id,
                Plant.succession_enabled.is_(True)
            )
        )
        .options(selectinload(Plant.placements).selectinload(BedPlacement.bed))
        .order_by(Plant.id)
    )
    plants = result.scalars().all()

    today = clock().date()
    upcoming = list_upcoming_successions(
        [_to_succession_plant(p) for p in plants],
        today,
        default_max_count=settings.SUCCESSION_SCHEDULE_MAX_COUNT
    )

    return {
        "upcoming": [u.to_dict() for u in upcoming],
        **summarize(upcoming)
    }


@router.post("/", response_model=PlacementResponse, status_code=status.HTTP_201_CREATED)
async def create_succession(
    succession_data: SuccessionCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock)
):
    """
    Create the next succession planting from an existing placement

    Position is found automatically unless both x and y are given.
    """
    placement = await create_succession_planting(
        db,
        user_id,
        succession_data.source_placement_id,
        clock(),
        target_bed_id=succession_data.target_bed_id,
        x=succession_data.x,
        y=succession_data.y,
    )

    return placement
