from sqlalchemy import Column, String, Integer, DateTime, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from gardenplan.api.core.database import Base


class Bed(Base):
    __tablename__ = "beds"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    width_inches = Column(Integer, nullable=False)
    height_inches = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    placements = relationship("BedPlacement", back_populates="bed", passive_deletes=True)

    def __repr__(self):
        return f"<Bed {self.name}>"
