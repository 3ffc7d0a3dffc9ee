"""
HealthTracker — WeighIn SQLAlchemy Model
==========================================

What:  ORM model for the `weighins` table.
How:   Range rules live in named CHECK constraints so SQLite enforces them on
       every insert. The record store maps a failing constraint name back to
       the field (see CHECK_CONSTRAINTS below).

Column layout (SQLite):
    id            INTEGER PRIMARY KEY AUTOINCREMENT
    date          TEXT NOT NULL          ISO-8601 YYYY-MM-DD
    weight        FLOAT NOT NULL         pounds, 100..300
    bmi           FLOAT NOT NULL         stored as given
    fat           FLOAT                  percent, 0..100
    muscle        FLOAT                  percent, 0..100
    restingMetab  INTEGER                kcal, > 1000
    visceralFat   INTEGER                level, 10..30

    ISO date text sorts in calendar order, so ORDER BY date is chronological.
"""

from typing import Optional

from sqlalchemy import CheckConstraint, Float, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from healthtracker.database import Base

# constraint name → (field, client-facing message)
CHECK_CONSTRAINTS = {
    "ck_weighins_weight": ("weight", "weight must be between 100 and 300 pounds"),
    "ck_weighins_fat": ("fat", "fat must be between 0 and 100 percent"),
    "ck_weighins_muscle": ("muscle", "muscle must be between 0 and 100 percent"),
    "ck_weighins_resting_metab": ("restingMetab", "restingMetab must be greater than 1000 kcal"),
    "ck_weighins_visceral_fat": ("visceralFat", "visceralFat must be between 10 and 30"),
}


class WeighIn(Base):
    """
    A single dated body-measurement record.

    weight and bmi are always present. The four body-composition fields are
    independently optional; SQLite skips a CHECK whose column is NULL.
    Rows are immutable once written.
    """

    __tablename__ = "weighins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[str] = mapped_column(Text, nullable=False)
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    bmi: Mapped[float] = mapped_column(Float, nullable=False)
    fat: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    muscle: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    resting_metab: Mapped[Optional[int]] = mapped_column("restingMetab", Integer, nullable=True)
    visceral_fat: Mapped[Optional[int]] = mapped_column("visceralFat", Integer, nullable=True)

    __table_args__ = (
        CheckConstraint("weight BETWEEN 100 AND 300", name="ck_weighins_weight"),
        CheckConstraint("fat BETWEEN 0 AND 100", name="ck_weighins_fat"),
        CheckConstraint("muscle BETWEEN 0 AND 100", name="ck_weighins_muscle"),
        CheckConstraint('"restingMetab" > 1000', name="ck_weighins_resting_metab"),
        CheckConstraint('"visceralFat" BETWEEN 10 AND 30', name="ck_weighins_visceral_fat"),
        # "last N" and "last date" queries read newest-first
        Index("idx_weighins_date", date.desc()),
        # AUTOINCREMENT: ids are never reused, so they only ever increase
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<WeighIn(id={self.id}, date='{self.date}', weight={self.weight})>"
