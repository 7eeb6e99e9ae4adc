"""
Exercise API Backend: SQLAlchemy Record Store
==============================================

What:  ExerciseStore backed by an AsyncSession.
How:   One store per request, wrapping the request's session. Each write
       commits before returning, so a create/replace/delete is durable the
       moment the service sees its result.

Id handling:
    Path ids arrive as strings. uuid.UUID() raises ValueError for a
    malformed id, which propagates to the service as a store failure
    (400 on lookup), never as "not found".
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from exercise_api.models.exercise import Exercise
from exercise_api.services.store_base import ExerciseStore

logger = logging.getLogger(__name__)

# Columns a find() filter may reference
FILTERABLE_FIELDS = ("name", "reps", "weight", "unit", "date")


def _parse_id(exercise_id: str) -> uuid.UUID:
    return uuid.UUID(str(exercise_id))


class SqlAlchemyExerciseStore(ExerciseStore):
    """Record Store over the `exercises` table."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(
        self, name: str, reps: int, weight: int, unit: str, date: str
    ) -> Exercise:
        exercise = Exercise(
            id=uuid.uuid4(),
            name=name,
            reps=reps,
            weight=weight,
            unit=unit,
            date=date,
        )
        self._session.add(exercise)
        await self._commit()
        logger.debug("Inserted exercise %s", exercise.id)
        return exercise

    async def find_by_id(self, exercise_id: str) -> Optional[Exercise]:
        result = await self._session.execute(
            select(Exercise).where(Exercise.id == _parse_id(exercise_id))
        )
        return result.scalar_one_or_none()

    async def find(
        self, filters: Optional[Dict[str, Any]] = None, limit: int = 0
    ) -> List[Exercise]:
        query = select(Exercise)
        for field, value in (filters or {}).items():
            if field not in FILTERABLE_FIELDS:
                raise ValueError(f"Cannot filter exercises on '{field}'")
            query = query.where(getattr(Exercise, field) == value)
        if limit:
            query = query.limit(limit)

        result = await self._session.execute(query)
        return list(result.scalars().all())

    async def replace(
        self,
        exercise_id: str,
        name: str,
        reps: int,
        weight: int,
        unit: str,
        date: str,
    ) -> int:
        result = await self._session.execute(
            update(Exercise)
            .where(Exercise.id == _parse_id(exercise_id))
            .values(name=name, reps=reps, weight=weight, unit=unit, date=date)
        )
        await self._commit()
        return result.rowcount

    async def delete_by_id(self, exercise_id: str) -> int:
        result = await self._session.execute(
            delete(Exercise).where(Exercise.id == _parse_id(exercise_id))
        )
        await self._commit()
        return result.rowcount

    async def _commit(self) -> None:
        try:
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise
