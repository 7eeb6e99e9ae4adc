"""
Exercise API Backend: Exercise Route Handlers
==============================================

What:  POST/GET/PUT/DELETE handlers for /exercises.
How:   Read the raw JSON body, resolve the Record Store for this request,
       delegate to ExerciseService. Failures propagate as application
       exceptions and are rendered by the handlers in main.py.
Who:   Called by the React front end (list page, add/edit forms, delete button).
"""

import logging
from typing import Any, List

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from exercise_api.database import get_db_session
from exercise_api.schemas.exercise import (
    ErrorResponse,
    ExerciseEchoResponse,
    ExerciseResponse,
)
from exercise_api.services.exercise_service import exercise_service
from exercise_api.services.sql_store import SqlAlchemyExerciseStore
from exercise_api.services.store_base import ExerciseStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/exercises", tags=["Exercises"])


def get_exercise_store(db: AsyncSession = Depends(get_db_session)) -> ExerciseStore:
    """
    FastAPI dependency providing the Record Store for the current request.

    Tests replace it through app.dependency_overrides[get_exercise_store].
    """
    return SqlAlchemyExerciseStore(db)


async def read_payload(request: Request) -> Any:
    """
    Decode the JSON body, or return {} if it is missing or not JSON.

    An empty payload fails every field rule, so a garbled body ends up as
    400 "Invalid request" rather than a framework error.
    """
    body = await request.body()
    if not body:
        return {}
    try:
        return await request.json()
    except ValueError:
        logger.debug("Request body is not valid JSON")
        return {}


@router.post(
    "",
    status_code=201,
    response_model=ExerciseResponse,
    responses={400: {"description": "Invalid request", "model": ErrorResponse}},
    summary="Create an exercise",
)
async def create_exercise(
    request: Request,
    store: ExerciseStore = Depends(get_exercise_store),
) -> ExerciseResponse:
    payload = await read_payload(request)
    return await exercise_service.create_exercise(store, payload)


@router.get(
    "",
    response_model=List[ExerciseResponse],
    responses={200: {"description": "All exercises, or an error body if the query failed"}},
    summary="List all exercises",
)
async def list_exercises(
    store: ExerciseStore = Depends(get_exercise_store),
) -> List[ExerciseResponse]:
    return await exercise_service.list_exercises(store)


@router.get(
    "/{exercise_id}",
    response_model=ExerciseResponse,
    responses={
        400: {"description": "Lookup failed", "model": ErrorResponse},
        404: {"description": "Not found", "model": ErrorResponse},
    },
    summary="Get one exercise",
)
async def get_exercise(
    exercise_id: str,
    store: ExerciseStore = Depends(get_exercise_store),
) -> ExerciseResponse:
    return await exercise_service.get_exercise(store, exercise_id)


@router.put(
    "/{exercise_id}",
    response_model=ExerciseEchoResponse,
    responses={
        400: {"description": "Invalid request", "model": ErrorResponse},
        404: {"description": "Not found", "model": ErrorResponse},
    },
    summary="Replace an exercise",
)
async def replace_exercise(
    exercise_id: str,
    request: Request,
    store: ExerciseStore = Depends(get_exercise_store),
) -> ExerciseEchoResponse:
    payload = await read_payload(request)
    return await exercise_service.replace_exercise(store, exercise_id, payload)


@router.delete(
    "/{exercise_id}",
    status_code=204,
    response_class=Response,
    responses={404: {"description": "Not found", "model": ErrorResponse}},
    summary="Delete an exercise",
)
async def delete_exercise(
    exercise_id: str,
    store: ExerciseStore = Depends(get_exercise_store),
) -> Response:
    await exercise_service.delete_exercise(store, exercise_id)
    return Response(status_code=204)
