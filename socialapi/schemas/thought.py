"""
SocialAPI Backend: Thought and Reaction Schemas
===============================================

What:  Request bodies for thoughts and reactions and the Thought response.
How:   Text limits mirror the document model (MAX_TEXT_LENGTH). Timestamps
       are pre-formatted strings by the time they reach a response model.
"""

from typing import Any, List, Mapping, Optional

from pydantic import Field, computed_field

from socialapi.models.thought import MAX_TEXT_LENGTH
from socialapi.schemas.common import CamelModel, format_timestamp


class ThoughtCreate(CamelModel):
    """
    Body of POST /thoughts.

    Example:
        {
            "thoughtText": "Here's a cool thought...",
            "username": "lernantino",
            "userId": "5edff358a0fcb779aa7b118b"
        }
    """
    thought_text: str = Field(min_length=1, max_length=MAX_TEXT_LENGTH)
    username: str = Field(min_length=1)
    user_id: str = Field(description="Id of the authoring user")


class ThoughtUpdate(CamelModel):
    """Body of PUT /thoughts/{thoughtId}. Only the text can change."""
    thought_text: str = Field(min_length=1, max_length=MAX_TEXT_LENGTH)


class ReactionCreate(CamelModel):
    """Body of POST /thoughts/{thoughtId}/reactions."""
    reaction_body: str = Field(min_length=1, max_length=MAX_TEXT_LENGTH)
    username: str = Field(min_length=1, description="Must name an existing user")


class ReactionResponse(CamelModel):
    reaction_id: str
    reaction_body: str
    username: str
    created_at: str

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "ReactionResponse":
        return cls(
            reaction_id=str(doc["reactionId"]),
            reaction_body=doc["reactionBody"],
            username=doc["username"],
            created_at=format_timestamp(doc["createdAt"]),
        )


class ThoughtResponse(CamelModel):
    """
    What:  Public representation of a thought with its embedded reactions.

    reactionCount is derived. warning is set on creation when the thought
    could not be appended to its author's thoughts list.
    """
    id: str = Field(alias="_id")
    thought_text: str
    username: str
    created_at: str
    reactions: List[ReactionResponse] = Field(default_factory=list)
    warning: Optional[str] = Field(default=None)

    @computed_field(alias="reactionCount")
    @property
    def reaction_count(self) -> int:
        return len(self.reactions)

    @classmethod
    def from_document(
        cls, doc: Mapping[str, Any], warning: Optional[str] = None
    ) -> "ThoughtResponse":
        return cls(
            id=str(doc["_id"]),
            thought_text=doc["thoughtText"],
            username=doc["username"],
            created_at=format_timestamp(doc["createdAt"]),
            reactions=[ReactionResponse.from_document(r) for r in doc.get("reactions", [])],
            warning=warning,
        )
