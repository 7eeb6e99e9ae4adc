"""
Exercise API Backend: Pydantic Request/Response Schemas
========================================================

What:  Pydantic models defining the API contract with the front end.
How:   Routes declare these as response models; FastAPI serializes them by
       alias, so the record id goes out as `_id` and errors as `Error`,
       the keys the React client reads.

Request bodies are deliberately NOT modelled here. Field rules live in
exercise_api.validation so a bad body yields the 400 `{"Error": "Invalid
request"}` contract instead of FastAPI's automatic 422.
"""

from typing import Any

from pydantic import BaseModel, Field


class ExerciseResponse(BaseModel):
    """A stored exercise as returned by create, read-one and list."""

    id: str = Field(alias="_id", description="Store-assigned identifier")
    name: str = Field(description="Exercise name")
    reps: int = Field(description="Repetitions, > 0")
    weight: int = Field(description="Weight lifted, > 0")
    unit: str = Field(description="'lbs' or 'kgs'")
    date: str = Field(description="MM-DD-YY")

    model_config = {"populate_by_name": True}


class ExerciseEchoResponse(BaseModel):
    """
    Replace response: the request's own field values plus the path id.

    Values are echoed exactly as sent (a reps of "5" comes back as "5"), so
    the field types are left open.
    """

    id: str = Field(alias="_id")
    name: Any = None
    reps: Any = None
    weight: Any = None
    unit: Any = None
    date: Any = None

    model_config = {"populate_by_name": True}


class ErrorResponse(BaseModel):
    """
    Error body for every failure path.

    Example:
        {"Error": "Not found"}
    """

    error: str = Field(alias="Error", description="Generic error message")

    model_config = {"populate_by_name": True}


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
