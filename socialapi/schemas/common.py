"""
SocialAPI Backend: Shared Schemas
=================================

What:  Base model for the camelCase API contract, the timestamp format, and
       the response shapes shared by both resources (deletion, error, health).
Who:   Imported by schemas/user.py, schemas/thought.py and the route modules.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_timestamp(value: datetime) -> str:
    """
    Render a stored datetime as e.g. '3:07pm on 5 Jan 2024' (UTC).

    Naive datetimes are taken to be UTC, which is what the driver returns
    when the client is not tz-aware.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    hour = value.hour % 12 or 12
    meridiem = "am" if value.hour < 12 else "pm"
    return (
        f"{hour}:{value.minute:02d}{meridiem} "
        f"on {value.day} {_MONTHS[value.month - 1]} {value.year}"
    )


class CamelModel(BaseModel):
    """
    Base for every request/response body of the users and thoughts resources.

    Python attributes are snake_case; the JSON keys are camelCase
    (thoughtText, reactionBody, userId, friendCount). Both spellings are
    accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class DeletionResponse(CamelModel):
    """
    What:  Outcome of DELETE /users/{id} and DELETE /thoughts/{id}.

    The primary delete is final once this is returned. cleanup_complete is
    False when a follow-up write (cascade, id scrub) failed, in which case
    message says what was left behind.
    """
    message: str = Field(description="Human-readable outcome")
    deleted_id: str = Field(description="Id of the deleted user or thought")
    cleanup_complete: bool = Field(
        default=True,
        description="False when dependent records could not all be cleaned up",
    )
    deleted_thought_count: Optional[int] = Field(
        default=None,
        description="Thoughts removed by a user-delete cascade",
    )


class ErrorResponse(BaseModel):
    """
    What:  Standardized error envelope for all API errors.

    Example:
        {
            "error": "conflict",
            "message": "A user with username 'lernantino' already exists",
            "details": {"field": "username"},
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
