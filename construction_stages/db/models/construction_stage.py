"""ConstructionStage model — scheduled project phases, soft-deleted via status."""

from sqlalchemy import Column, DateTime, Float, Integer, String

from construction_stages.db.base import Base


class ConstructionStage(Base):
    __tablename__ = "construction_stages"

    id = Column(Integer, primary_key=True, autoincrement=True)

    name = Column(String(255), nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=True)

    duration = Column(Float, nullable=True)  # derived on create, raw on update
    duration_unit = Column(String(10), nullable=True)  # HOURS, DAYS, WEEKS

    color = Column(String(7), nullable=True)  # "#abc" or "#aabbcc"
    external_id = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default="NEW", index=True)  # NEW, PLANNED, DELETED
