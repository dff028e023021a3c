"""
Shared fixtures for the Garden Plan test suite

Each test gets its own SQLite database file. Rows are seeded through a
synchronous SQLAlchemy session; the API reads and writes the same file
through aiosqlite.
"""

import os
import tempfile

# Must be set before the application settings are first imported
os.environ.setdefault(
    "DATABASE_URL_OVERRIDE",
    f"sqlite+aiosqlite:///{os.path.join(tempfile.mkdtemp(prefix='gardenplan-'), 'app.db')}"
)

import uuid
from datetime import datetime, timezone
from typing import List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool

from gardenplan.api.main import app
from gardenplan.api.core.clock import get_clock
from gardenplan.api.core.database import Base, get_db
from gardenplan.api.core.security import create_access_token
from gardenplan.api.models import Bed, BedPlacement, Plant

FIXED_NOW = datetime(2025, 5, 1, 9, 30, tzinfo=timezone.utc)


class GardenFactory:
    """Seeds and inspects rows for one user"""

    def __init__(self, engine, user_id: uuid.UUID):
        self.engine = engine
        self.user_id = user_id

    def _add(self, obj) -> int:
        with Session(self.engine, expire_on_commit=False) as session:
            session.add(obj)
            session.commit()
            return obj.id

    def bed(self, name: str = "Bed A", width: int = 48, height: int = 48, user_id=None) -> int:
        return self._add(Bed(
            user_id=user_id or self.user_id,
            name=name,
            width_inches=width,
            height_inches=height
        ))

    def plant(self, name: str = "Lettuce", user_id=None, **fields) -> int:
        fields.setdefault("succession_enabled", True)
        return self._add(Plant(user_id=user_id or self.user_id, name=name, **fields))

    def placement(self, bed_id: int, plant_id: int, x: int, y: int, w: int = 12, h: int = 12, **fields) -> int:
        fields.setdefault("count", 1)
        return self._add(BedPlacement(
            bed_id=bed_id, plant_id=plant_id, x=x, y=y, w=w, h=h, **fields
        ))

    def get_placement(self, placement_id: int):
        with Session(self.engine, expire_on_commit=False) as session:
            return session.get(BedPlacement, placement_id)

    def placements_in(self, bed_id: int) -> List[BedPlacement]:
        with Session(self.engine, expire_on_commit=False) as session:
            result = session.execute(
                select(BedPlacement)
                .where(BedPlacement.bed_id == bed_id)
                .order_by(BedPlacement.id)
            )
            return list(result.scalars().all())


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "garden.db"


@pytest.fixture
def sync_engine(db_path):
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def user_id():
    return uuid.uuid4()


@pytest.fixture
def garden(sync_engine, user_id):
    return GardenFactory(sync_engine, user_id)


@pytest.fixture
def auth_headers(user_id):
    """Create valid JWT token for the test user"""
    token = create_access_token(data={"sub": str(user_id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(sync_engine, db_path):
    """Test client bound to the per-test database and a fixed clock"""
    async_engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    session_factory = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW)

    yield TestClient(app, raise_server_exceptions=False)

    app.dependency_overrides.clear()
