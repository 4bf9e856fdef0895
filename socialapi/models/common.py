"""
SocialAPI Backend: Shared Document Helpers
==========================================

What:  Identifier parsing and timestamp helpers shared by the document models.
Who:   Used by the services when turning path/body ids into ObjectIds and by
       the document factories when stamping createdAt.
"""

from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId

from socialapi.exceptions import ValidationError


def to_object_id(value: str, field: str) -> ObjectId:
    """
    Parse a client-supplied id into an ObjectId.

    Raises:
        ValidationError: value is not a 24-character hex string (→ 400)
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise ValidationError(
            message=f"'{value}' is not a valid {field}",
            field=field,
        )


def utcnow() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)
