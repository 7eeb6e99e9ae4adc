"""
Exercise API Backend: Exercise Service (Request Handling Rules)
================================================================

What:  The per-operation rules of the REST layer: validate, call the store,
       decide the outcome.
How:   Each method receives the Record Store for the current request,
       returns a response model on success, and raises ValidationError,
       NotFoundError or StoreError otherwise. Routes stay thin and the global
       exception handlers render the errors.
Who:   Called by routes/exercises.py.

Outcome table:
    ┌──────────┬────────────────┬───────────────┬──────────────────────────┐
    │ Op       │ Invalid input  │ Missing id    │ Store failure            │
    ├──────────┼────────────────┼───────────────┼──────────────────────────┤
    │ create   │ 400 Invalid    │ -             │ 400 Invalid request      │
    │ get      │ -              │ 404 Not found │ 400 Request failed       │
    │ list     │ -              │ -             │ 200 Request failed (*)   │
    │ replace  │ 400 Invalid    │ 404 Not found │ 400 Invalid request      │
    │ delete   │ -              │ 404 Not found │ 200 Request failed (*)   │
    └──────────┴────────────────┴───────────────┴──────────────────────────┘
    (*) 500 when settings.legacy_error_status is False.

Store failures are logged here with the original exception and never
surfaced in the response body.
"""

import logging
from typing import Any, List

from exercise_api.config import settings
from exercise_api.exceptions import (
    INVALID_REQUEST,
    REQUEST_FAILED,
    NotFoundError,
    StoreError,
    ValidationError,
)
from exercise_api.models.exercise import Exercise
from exercise_api.schemas.exercise import ExerciseEchoResponse, ExerciseResponse
from exercise_api.services.store_base import ExerciseStore
from exercise_api.validation import coerce_int, is_date_valid, validate_exercise_payload

logger = logging.getLogger(__name__)


def to_response(exercise: Exercise) -> ExerciseResponse:
    return ExerciseResponse(
        id=str(exercise.id),
        name=exercise.name,
        reps=exercise.reps,
        weight=exercise.weight,
        unit=exercise.unit,
        date=exercise.date,
    )


class ExerciseService:
    """
    Business rules for exercise CRUD.

    Stateless: the store is passed into every call, so one instance serves
    all requests and tests can hand in any ExerciseStore.
    """

    @staticmethod
    def _failure_status() -> int:
        """Status for list/delete store failures."""
        return 200 if settings.legacy_error_status else 500

    @staticmethod
    def _check_payload(payload: Any, require_date: bool) -> None:
        violations = validate_exercise_payload(payload, require_date=require_date)
        if violations:
            raise ValidationError(
                fields=violations,
                message=f"Invalid exercise fields: {', '.join(violations)}",
            )
        # Field rules passed, so payload is a dict
        if not is_date_valid(payload.get("date")):
            raise ValidationError(
                fields=["date"],
                message="Date must be formatted MM-DD-YY",
                context={"date": payload.get("date")},
            )

    async def create_exercise(self, store: ExerciseStore, payload: Any) -> ExerciseResponse:
        """
        Validate and insert a new exercise.

        Returns:
            The stored record with its assigned id (route answers 201).

        Raises:
            ValidationError: field rule or date shape violated (→ 400)
            StoreError: insert rejected (→ 400 "Invalid request")
        """
        self._check_payload(payload, require_date=False)

        try:
            exercise = await store.create(
                name=payload["name"],
                reps=coerce_int(payload["reps"]),
                weight=coerce_int(payload["weight"]),
                unit=payload["unit"],
                date=payload["date"],
            )
        except Exception as e:
            logger.error("Failed to create exercise: %s", str(e), exc_info=True)
            raise StoreError(
                message="Could not create exercise",
                status_code=400,
                public_message=INVALID_REQUEST,
                context={"error_type": type(e).__name__},
            )

        logger.info("Created exercise %s", exercise.id)
        return to_response(exercise)

    async def get_exercise(self, store: ExerciseStore, exercise_id: str) -> ExerciseResponse:
        """
        Fetch one exercise.

        Raises:
            NotFoundError: no record with this id (→ 404)
            StoreError: lookup failed, e.g. malformed id (→ 400 "Request failed")
        """
        try:
            exercise = await store.find_by_id(exercise_id)
        except Exception as e:
            logger.error("Failed to fetch exercise %s: %s", exercise_id, str(e))
            raise StoreError(
                message="Could not retrieve exercise",
                status_code=400,
                public_message=REQUEST_FAILED,
                context={"exercise_id": exercise_id, "error_type": type(e).__name__},
            )

        if exercise is None:
            raise NotFoundError(resource="exercise", resource_id=exercise_id)
        return to_response(exercise)

    async def list_exercises(self, store: ExerciseStore) -> List[ExerciseResponse]:
        """
        Return every exercise.

        The filter is always empty: a `year` query parameter, if sent, is
        not applied.

        Raises:
            StoreError: query failed (→ 200 "Request failed" in legacy mode)
        """
        try:
            exercises = await store.find({}, limit=0)
        except Exception as e:
            logger.error("Failed to list exercises: %s", str(e), exc_info=True)
            raise StoreError(
                message="Could not list exercises",
                status_code=self._failure_status(),
                public_message=REQUEST_FAILED,
                context={"error_type": type(e).__name__},
            )
        return [to_response(exercise) for exercise in exercises]

    async def replace_exercise(
        self, store: ExerciseStore, exercise_id: str, payload: Any
    ) -> ExerciseEchoResponse:
        """
        Overwrite all fields of an existing exercise.

        Returns:
            The request's own field values plus the id, not a re-read of
            the stored record.

        Raises:
            ValidationError: field rule, date presence or date shape (→ 400)
            NotFoundError: nothing matched the id (→ 404)
            StoreError: update rejected (→ 400 "Invalid request")
        """
        self._check_payload(payload, require_date=True)

        try:
            matched = await store.replace(
                exercise_id,
                name=payload["name"],
                reps=coerce_int(payload["reps"]),
                weight=coerce_int(payload["weight"]),
                unit=payload["unit"],
                date=payload["date"],
            )
        except Exception as e:
            logger.error("Failed to replace exercise %s: %s", exercise_id, str(e), exc_info=True)
            raise StoreError(
                message="Could not replace exercise",
                status_code=400,
                public_message=INVALID_REQUEST,
                context={"exercise_id": exercise_id, "error_type": type(e).__name__},
            )

        if matched != 1:
            raise NotFoundError(resource="exercise", resource_id=exercise_id)

        logger.info("Replaced exercise %s", exercise_id)
        return ExerciseEchoResponse(
            id=exercise_id,
            name=payload["name"],
            reps=payload["reps"],
            weight=payload["weight"],
            unit=payload["unit"],
            date=payload["date"],
        )

    async def delete_exercise(self, store: ExerciseStore, exercise_id: str) -> None:
        """
        Delete an exercise (route answers 204).

        Raises:
            NotFoundError: nothing deleted (→ 404)
            StoreError: delete failed (→ 200 "Request failed" in legacy mode)
        """
        try:
            deleted = await store.delete_by_id(exercise_id)
        except Exception as e:
            logger.error("Failed to delete exercise %s: %s", exercise_id, str(e), exc_info=True)
            raise StoreError(
                message="Could not delete exercise",
                status_code=self._failure_status(),
                public_message=REQUEST_FAILED,
                context={"exercise_id": exercise_id, "error_type": type(e).__name__},
            )

        if deleted != 1:
            raise NotFoundError(resource="exercise", resource_id=exercise_id)
        logger.info("Deleted exercise %s", exercise_id)


exercise_service = ExerciseService()
