"""
Succession Group Manager

Creates the next generation of a succession planting from an existing
placement:
- Starts a succession group the first time a second generation is
  requested (the source placement becomes number 1)
- Claims the next succession number in the group, bounded by the plant's
  maximum (or the configured hard cap)
- Finds free space in the target bed unless coordinates are supplied
- Stamps the new placement with a sow date and an expected harvest date

The whole operation is one transaction. Any failure rolls back, including
the stamp on the source placement. Concurrent claims of the same number
are rejected by the (succession_group_id, succession_number) unique
constraint and retried with a fresh maximum.

Author: Garden Plan Development Team
"""

import uuid
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, func, and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gardenplan.api.config import Settings, settings as app_settings
from gardenplan.api.core.errors import (
    ConstraintViolationError,
    MaxSuccessionsReachedError,
    NoSpaceAvailableError,
    NotFoundError,
    SuccessionNotEnabledError,
)
from gardenplan.api.models import Bed, BedPlacement
from gardenplan.engine import (
    Rect,
    estimate_harvest_date,
    find_position,
    is_free,
    maturity_days,
)
from gardenplan.utils.logger import get_logger

logger = get_logger(__name__)

SUCCESSION_CONSTRAINT = "uq_bed_placements_succession"


def _is_succession_conflict(error: IntegrityError) -> bool:
    """True when *error* comes from the (group, number) unique constraint"""
    # Postgres names the constraint; SQLite lists the columns
    message = str(error.orig)
    return SUCCESSION_CONSTRAINT in message or "succession_number" in message


async def load_placement(db: AsyncSession, placement_id: int) -> BedPlacement:
    """Fetch a placement with its bed and plant loaded"""
    result = await db.execute(
        select(BedPlacement)
        .where(BedPlacement.id == placement_id)
        .options(selectinload(BedPlacement.bed), selectinload(BedPlacement.plant))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


async def _load_source(db: AsyncSession, user_id: UUID, placement_id: int) -> BedPlacement:
    result = await db.execute(
        select(BedPlacement)
        .join(Bed, BedPlacement.bed_id == Bed.id)
        .where(
            and_(
                BedPlacement.id == placement_id,
                Bed.user_id == user_id
            )
        )
        .options(selectinload(BedPlacement.bed), selectinload(BedPlacement.plant))
        .with_for_update(of=BedPlacement)
        .execution_options(populate_existing=True)
    )
    source = result.scalar_one_or_none()
    if source is None:
        raise NotFoundError("Placement not found")
    return source


async def _claim_succession_number(db: AsyncSession, source: BedPlacement) -> Tuple[str, int]:
    """Resolve the group of *source* and the number its next generation gets"""
    if source.succession_group_id:
        result = await db.execute(
            select(func.max(BedPlacement.succession_number))
            .where(BedPlacement.succession_group_id == source.succession_group_id)
        )
        return source.succession_group_id, (result.scalar() or 0) + 1

    group_id = str(uuid.uuid4())
    source.succession_group_id = group_id
    source.succession_number = 1
    logger.info(f"Started succession group {group_id} from placement {source.id}")
    return group_id, 2


async def _resolve_target_bed(
    db: AsyncSession,
    user_id: UUID,
    source: BedPlacement,
    target_bed_id: Optional[int],
    config: Settings,
) -> Tuple[int, int, int]:
    """Return (bed_id, width, height) of the bed the new generation goes into"""
    bed_id = target_bed_id if target_bed_id is not None else source.bed_id

    if bed_id != source.bed_id:
        result = await db.execute(
            select(Bed).where(
                and_(
                    Bed.id == bed_id,
                    Bed.user_id == user_id
                )
            )
        )
        target = result.scalar_one_or_none()
        if target is None:
            raise NotFoundError("Target bed not found")
        return bed_id, target.width_inches, target.height_inches

    bed = source.bed
    width = bed.width_inches if bed is not None and bed.width_inches is not None else config.DEFAULT_BED_WIDTH_INCHES
    height = bed.height_inches if bed is not None and bed.height_inches is not None else config.DEFAULT_BED_HEIGHT_INCHES
    return bed_id, width, height


async def _occupied_rects(db: AsyncSession, bed_id: int) -> List[Rect]:
    result = await db.execute(
        select(BedPlacement.x, BedPlacement.y, BedPlacement.w, BedPlacement.h)
        .where(BedPlacement.bed_id == bed_id)
    )
    return [Rect(row.x, row.y, row.w, row.h) for row in result.all()]


async def _resolve_position(
    db: AsyncSession,
    source: BedPlacement,
    bed_id: int,
    width: int,
    height: int,
    x: Optional[int],
    y: Optional[int],
    config: Settings,
) -> Tuple[int, int]:
    if x is not None and y is not None:
        # Explicit coordinates are trusted unless validation is switched on
        if config.VALIDATE_EXPLICIT_POSITIONS:
            occupied = await _occupied_rects(db, bed_id)
            if not is_free(Rect(x, y, source.w, source.h), occupied, width, height):
                raise ConstraintViolationError(
                    "Position is outside the bed or overlaps an existing placement"
                )
        return x, y

    occupied = await _occupied_rects(db, bed_id)
    origin = Rect(source.x, source.y, source.w, source.h)
    result = find_position(origin, occupied, width, height)

    if not result.found:
        logger.info(
            f"No space for a {source.w}x{source.h} placement in bed {bed_id} "
            f"({width}x{height}, {len(occupied)} placements)"
        )
        raise NoSpaceAvailableError()

    logger.debug(f"Placed succession at ({result.position.x}, {result.position.y}) via {result.strategy.value}")
    return result.position.x, result.position.y


async def _create_once(
    db: AsyncSession,
    user_id: UUID,
    source_placement_id: int,
    now: datetime,
    target_bed_id: Optional[int],
    x: Optional[int],
    y: Optional[int],
    config: Settings,
) -> int:
    source = await _load_source(db, user_id, source_placement_id)
    plant = source.plant

    if not plant.succession_enabled:
        raise SuccessionNotEnabledError()

    group_id, next_number = await _claim_succession_number(db, source)

    max_count = plant.succession_max_count if plant.succession_max_count is not None else config.SUCCESSION_MAX_COUNT_CAP
    if next_number > max_count:
        raise MaxSuccessionsReachedError(max_count)

    bed_id, width, height = await _resolve_target_bed(db, user_id, source, target_bed_id, config)
    new_x, new_y = await _resolve_position(db, source, bed_id, width, height, x, y, config)

    expected_harvest = estimate_harvest_date(
        now,
        maturity_days(plant.days_to_maturity_min, plant.days_to_maturity_max)
    )

    placement = BedPlacement(
        bed_id=bed_id,
        plant_id=source.plant_id,
        x=new_x,
        y=new_y,
        w=source.w,
        h=source.h,
        count=source.count,
        succession_group_id=group_id,
        succession_number=next_number,
        expected_harvest_date=expected_harvest,
        # New generations count as sown today
        direct_sowed_date=now.date(),
    )
    db.add(placement)
    await db.flush()

    logger.info(
        f"Created succession #{next_number} of group {group_id} "
        f"in bed {bed_id} at ({new_x}, {new_y})"
    )
    return placement.id


async def create_succession_planting(
    db: AsyncSession,
    user_id: UUID,
    source_placement_id: int,
    now: datetime,
    target_bed_id: Optional[int] = None,
    x: Optional[int] = None,
    y: Optional[int] = None,
    config: Optional[Settings] = None,
) -> BedPlacement:
    """
    Create the next succession planting from an existing placement

    Args:
        db: Database session; committed on success, rolled back on failure
        user_id: Caller's user ID (ownership scope)
        source_placement_id: Placement the new generation repeats
        now: Current time; anchors the sow date and harvest estimate
        target_bed_id: Bed for the new generation (defaults to the source's bed)
        x: Explicit x position (used only together with y)
        y: Explicit y position (used only together with x)
        config: Settings override

    Returns:
        The new placement with bed and plant loaded

    Raises:
        NotFoundError, SuccessionNotEnabledError, MaxSuccessionsReachedError,
        NoSpaceAvailableError, ConstraintViolationError
    """
    config = config or app_settings
    attempts = max(1, config.SUCCESSION_CLAIM_RETRIES)

    for attempt in range(1, attempts + 1):
        try:
            placement_id = await _create_once(
                db, user_id, source_placement_id, now, target_bed_id, x, y, config
            )
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            if not _is_succession_conflict(e):
                logger.info(f"Placement from {source_placement_id} collides with an existing position: {e.orig}")
                raise ConstraintViolationError() from e
            logger.warning(
                f"Succession claim conflict for placement {source_placement_id} "
                f"(attempt {attempt}/{attempts}): {e.orig}"
            )
            continue
        except Exception:
            await db.rollback()
            raise

        return await load_placement(db, placement_id)

    raise ConstraintViolationError()
