"""
HealthTracker — Run SQLAlchemy Model
======================================

What:  ORM model for the `runs` table.

Column layout (SQLite):
    id            INTEGER PRIMARY KEY AUTOINCREMENT
    date          TEXT NOT NULL          ISO-8601 YYYY-MM-DD
    distance      FLOAT NOT NULL         > 0, in distanceUnit
    distanceUnit  TEXT NOT NULL          free label ("mi", "km", ...)
    time          INTEGER NOT NULL       duration in seconds, >= 0
"""

from sqlalchemy import CheckConstraint, Float, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from healthtracker.database import Base

CHECK_CONSTRAINTS = {
    "ck_runs_distance": ("distance", "distance must be greater than 0"),
    "ck_runs_time": ("time", "time must be zero or more seconds"),
}


class Run(Base):
    """A single dated running activity. Immutable once written."""

    __tablename__ = "runs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[str] = mapped_column(Text, nullable=False)
    distance: Mapped[float] = mapped_column(Float, nullable=False)
    distance_unit: Mapped[str] = mapped_column("distanceUnit", Text, nullable=False)
    time: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint("distance > 0", name="ck_runs_distance"),
        CheckConstraint("time >= 0", name="ck_runs_time"),
        Index("idx_runs_date", date.desc()),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return (
            f"<Run(id={self.id}, date='{self.date}', "
            f"distance={self.distance} {self.distance_unit})>"
        )
