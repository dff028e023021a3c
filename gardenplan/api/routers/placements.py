from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, and_
from uuid import UUID
import logging

from gardenplan.api.core.database import get_db
from gardenplan.api.core.errors import ConstraintViolationError, NotFoundError
from gardenplan.api.core.security import get_current_user_id
from gardenplan.api.models import Bed, BedPlacement, Plant
from gardenplan.api.schemas.placement import PlacementCreate, PlacementResponse
from gardenplan.engine import Rect, estimate_harvest_date, is_free, maturity_days, planted_date
from gardenplan.services import load_placement

router = APIRouter()
logger = logging.getLogger(__name__)


async def _get_owned_placement(db: AsyncSession, placement_id: int, user_id: UUID) -> BedPlacement:
    result = await db.execute(
        select(BedPlacement)
        .join(Bed, BedPlacement.bed_id == Bed.id)
        .where(
            and_(
                BedPlacement.id == placement_id,
                Bed.user_id == user_id
            )
        )
    )
    placement = result.scalar_one_or_none()

    if not placement:
        raise NotFoundError("Placement not found")

    return placement


@router.post("/", response_model=PlacementResponse, status_code=status.HTTP_201_CREATED)
async def create_placement(
    placement_data: PlacementCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Place a plant directly into a bed

    The rectangle must lie inside the bed and must not overlap any
    existing placement.
    """
    bed_result = await db.execute(
        select(Bed).where(
            and_(
                Bed.id == placement_data.bed_id,
                Bed.user_id == user_id
            )
        )
    )
    bed = bed_result.scalar_one_or_none()
    if not bed:
        raise NotFoundError("Bed not found")

    plant_result = await db.execute(
        select(Plant).where(
            and_(
                Plant.id == placement_data.plant_id,
                Plant.user_id == user_id
            )
        )
    )
    plant = plant_result.scalar_one_or_none()
    if not plant:
        raise NotFoundError("Plant not found")

    occupied_result = await db.execute(
        select(BedPlacement.x, BedPlacement.y, BedPlacement.w, BedPlacement.h)
        .where(BedPlacement.bed_id == bed.id)
    )
    occupied = [Rect(r.x, r.y, r.w, r.h) for r in occupied_result.all()]

    rect = Rect(placement_data.x, placement_data.y, placement_data.w, placement_data.h)
    if not is_free(rect, occupied, bed.width_inches, bed.height_inches):
        raise ConstraintViolationError(
            "Position is outside the bed or overlaps an existing placement"
        )

    planted = planted_date(
        placement_data.direct_sowed_date,
        placement_data.transplanted_date,
        placement_data.seeds_started_date
    )
    expected_harvest = None
    if planted is not None:
        expected_harvest = estimate_harvest_date(
            planted,
            maturity_days(plant.days_to_maturity_min, plant.days_to_maturity_max)
        )

    placement = BedPlacement(
        **placement_data.model_dump(),
        expected_harvest_date=expected_harvest
    )
    db.add(placement)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConstraintViolationError()

    return await load_placement(db, placement.id)


@router.get("/{placement_id}", response_model=PlacementResponse)
async def get_placement(
    placement_id: int,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Get placement details with bed and plant

    Only returns the placement if its bed belongs to the authenticated user
    """
    placement = await _get_owned_placement(db, placement_id, user_id)
    return await load_placement(db, placement.id)


@router.delete("/{placement_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_placement(
    placement_id: int,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Delete a placement

    Succession numbers are never reused after a deletion.
    """
    placement = await _get_owned_placement(db, placement_id, user_id)

    await db.delete(placement)
    await db.commit()
    logger.info(f"Deleted placement {placement_id}")
