from sqlalchemy import Column, String, Integer, Date, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from gardenplan.api.core.database import Base


class BedPlacement(Base):
    __tablename__ = "bed_placements"
    __table_args__ = (
        UniqueConstraint("bed_id", "x", "y", name="uq_bed_placements_position"),
        UniqueConstraint("succession_group_id", "succession_number", name="uq_bed_placements_succession"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    bed_id = Column(Integer, ForeignKey("beds.id", ondelete="CASCADE"), nullable=False, index=True)
    plant_id = Column(Integer, ForeignKey("plants.id", ondelete="RESTRICT"), nullable=False, index=True)
    x = Column(Integer, nullable=False)
    y = Column(Integer, nullable=False)
    w = Column(Integer, nullable=False, default=1)
    h = Column(Integer, nullable=False, default=1)
    count = Column(Integer, nullable=False, default=1)
    succession_group_id = Column(String(36), index=True)
    succession_number = Column(Integer)
    seeds_started_date = Column(Date)
    transplanted_date = Column(Date)
    direct_sowed_date = Column(Date)
    expected_harvest_date = Column(Date)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    bed = relationship("Bed", back_populates="placements")
    plant = relationship("Plant", back_populates="placements")

    def __repr__(self):
        return f"<BedPlacement {self.id}>"
