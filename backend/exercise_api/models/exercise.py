"""
Exercise API Backend: Exercise SQLAlchemy Model
================================================

What:  ORM model for the `exercises` table.
Who:   Used by SqlAlchemyExerciseStore for CRUD and by Alembic for the schema.

Column notes:
    - id: UUID generated in Python on insert, so the store can return it
      without a round trip. Uuid is the dialect-neutral type (native UUID on
      PostgreSQL, CHAR(32) on SQLite).
    - unit: "lbs" or "kgs"; enforced by the validation layer, not the DB.
    - date: the client's MM-DD-YY string, stored verbatim.
"""

import uuid

from sqlalchemy import Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from exercise_api.database import Base


class Exercise(Base):
    """
    One logged exercise.

    Lifecycle:
        1. Inserted by create (id assigned here)
        2. Fully replaced by replace (all five fields rewritten)
        3. Deleted by delete-by-id
    """

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    weight: Mapped[int] = mapped_column(Integer, nullable=False)
    unit: Mapped[str] = mapped_column(String(3), nullable=False)
    date: Mapped[str] = mapped_column(String(8), nullable=False)

    def __repr__(self) -> str:
        return f"<Exercise(id={self.id}, name='{self.name}', date='{self.date}')>"
