"""
Exercise API Backend: Abstract Record Store Interface
======================================================

What:  Abstract base class defining the contract for exercise persistence.
How:   Concrete stores inherit from ExerciseStore and implement every
       coroutine. The exercise service only ever sees this interface.
Who:   Called by ExerciseService; provided to routes by get_exercise_store.

Implementations:
    - SqlAlchemyExerciseStore: async SQLAlchemy (PostgreSQL, SQLite)
    - FakeExerciseStore (tests): in-memory dict
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from exercise_api.models.exercise import Exercise


class ExerciseStore(ABC):
    """
    Persistence contract for exercise records.

    Contract:
        - Ids are strings on the way in. A string that cannot be an id makes
          the call raise (it does NOT count as "not found").
        - Writes are durable when the coroutine returns.
        - Any failure is raised as-is; the service decides how it renders.
    """

    @abstractmethod
    async def create(
        self, name: str, reps: int, weight: int, unit: str, date: str
    ) -> Exercise:
        """Insert a record and return it with its assigned id."""
        ...

    @abstractmethod
    async def find_by_id(self, exercise_id: str) -> Optional[Exercise]:
        """Return the record, or None if no record has this id."""
        ...

    @abstractmethod
    async def find(
        self, filters: Optional[Dict[str, Any]] = None, limit: int = 0
    ) -> List[Exercise]:
        """
        Return records matching every `filters` key by equality.

        An empty filter returns all records. limit=0 means no limit.
        """
        ...

    @abstractmethod
    async def replace(
        self,
        exercise_id: str,
        name: str,
        reps: int,
        weight: int,
        unit: str,
        date: str,
    ) -> int:
        """Overwrite all five fields; return the number of records matched (0 or 1)."""
        ...

    @abstractmethod
    async def delete_by_id(self, exercise_id: str) -> int:
        """Delete the record; return the number deleted (0 or 1)."""
        ...
