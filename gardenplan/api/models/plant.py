from sqlalchemy import Column, String, Integer, Boolean, DateTime, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from gardenplan.api.core.database import Base


class Plant(Base):
    __tablename__ = "plants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    days_to_maturity_min = Column(Integer)
    days_to_maturity_max = Column(Integer)
    succession_enabled = Column(Boolean, nullable=False, default=False)
    succession_interval_days = Column(Integer)
    succession_max_count = Column(Integer)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    placements = relationship("BedPlacement", back_populates="plant")

    def __repr__(self):
        return f"<Plant {self.name}>"
