"""
SocialAPI Backend: Thought and Reaction Document Models
=======================================================

What:  Shape, collection name and indexes of documents in `thoughts`, and of
       the reactions embedded inside them.
Who:   Used by ThoughtService for inserts and reaction pushes, and by
       database.ensure_indexes.

Document layout:
    {
        "_id":         ObjectId,
        "thoughtText": str,          1..280 chars
        "username":    str,          author name, copied at write time
        "createdAt":   datetime,     UTC
        "reactions": [
            {
                "reactionId":   ObjectId,   generated per reaction
                "reactionBody": str,        1..280 chars
                "username":     str,
                "createdAt":    datetime,
            },
        ],
    }

Reactions have no collection of their own: they are created by $push and
removed by $pull on the owning thought.
"""

from typing import Any, Dict

from bson import ObjectId
from pymongo import ASCENDING, IndexModel

from socialapi.models.common import utcnow

THOUGHTS_COLLECTION = "thoughts"

MAX_TEXT_LENGTH = 280

# Username lookups drive rename propagation onto thoughts and reactions.
THOUGHT_INDEXES = [
    IndexModel([("username", ASCENDING)], name="username"),
    IndexModel([("reactions.username", ASCENDING)], name="reactions_username"),
]


def new_thought_document(thought_text: str, username: str) -> Dict[str, Any]:
    """Build a thought document with no reactions, stamped with the current time."""
    return {
        "thoughtText": thought_text,
        "username": username,
        "createdAt": utcnow(),
        "reactions": [],
    }


def new_reaction_document(reaction_body: str, username: str) -> Dict[str, Any]:
    """
    Build an embedded reaction.

    The reactionId is generated here on every call and never taken from the
    request, so two reactions on the same thought can never share an id.
    """
    return {
        "reactionId": ObjectId(),
        "reactionBody": reaction_body,
        "username": username,
        "createdAt": utcnow(),
    }
