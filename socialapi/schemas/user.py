"""
SocialAPI Backend: User Schemas
===============================

What:  Request bodies for creating/updating users and the User response shape.
How:   FastAPI validates bodies against UserCreate/UserUpdate; services build
       UserResponse from raw documents with UserResponse.from_document.
"""

from typing import Any, List, Mapping, Optional

from pydantic import ConfigDict, Field, computed_field, model_validator

from socialapi.models.user import EMAIL_PATTERN
from socialapi.schemas.common import CamelModel


class UserCreate(CamelModel):
    """Body of POST /users."""
    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(min_length=1, max_length=64, description="Unique username")
    email: str = Field(pattern=EMAIL_PATTERN, description="Unique email address")


class UserUpdate(CamelModel):
    """Body of PUT /users/{userId}. Fields left out are not touched."""
    model_config = ConfigDict(str_strip_whitespace=True)

    username: Optional[str] = Field(default=None, min_length=1, max_length=64)
    email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)

    @model_validator(mode="after")
    def require_a_field(self) -> "UserUpdate":
        if self.username is None and self.email is None:
            raise ValueError("Provide at least one of: username, email")
        return self

    def changes(self) -> dict:
        """The fields to $set, keyed by their document names."""
        return self.model_dump(exclude_none=True)


class UserResponse(CamelModel):
    """
    What:  Public representation of a user.
    Who:   Returned by every /users endpoint except DELETE.

    friendCount is derived from friends and never stored. warning is only
    present when a rename could not be copied onto the user's thoughts.
    """
    id: str = Field(alias="_id", description="User id (24-hex ObjectId)")
    username: str
    email: str
    thoughts: List[str] = Field(default_factory=list, description="Ids of authored thoughts")
    friends: List[str] = Field(default_factory=list, description="Ids of friended users")
    warning: Optional[str] = Field(default=None)

    @computed_field(alias="friendCount")
    @property
    def friend_count(self) -> int:
        return len(self.friends)

    @classmethod
    def from_document(
        cls, doc: Mapping[str, Any], warning: Optional[str] = None
    ) -> "UserResponse":
        return cls(
            id=str(doc["_id"]),
            username=doc["username"],
            email=doc["email"],
            thoughts=[str(t) for t in doc.get("thoughts", [])],
            friends=[str(f) for f in doc.get("friends", [])],
            warning=warning,
        )
