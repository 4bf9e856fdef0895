"""
SocialAPI Backend: User Document Model
======================================

What:  Shape, collection name and indexes of documents in `users`.
How:   A plain dict factory; Motor stores whatever dict it is given, so the
       document layout is fixed here and nowhere else.
Who:   Used by UserService for inserts and by database.ensure_indexes.

Document layout:
    {
        "_id":      ObjectId,
        "username": str,            unique
        "email":    str,            unique
        "thoughts": [ObjectId],     ids of thoughts this user authored, in order
        "friends":  [ObjectId],     ids of other users; maintained as a set
    }

Friendship is stored on one side only. Adding B to A's friends does not add
A to B's friends.
"""

from typing import Any, Dict

from pymongo import ASCENDING, IndexModel

USERS_COLLECTION = "users"

# Unique indexes back the 409 Conflict on duplicate signup or rename.
# The index names are what DuplicateKeyError reports when keyValue is absent.
USER_INDEXES = [
    IndexModel([("username", ASCENDING)], unique=True, name="username_unique"),
    IndexModel([("email", ASCENDING)], unique=True, name="email_unique"),
]

# Email rule applied at the API boundary.
EMAIL_PATTERN = r"^[\w.-]+@([\w-]+\.)+[\w-]{2,4}$"


def new_user_document(username: str, email: str) -> Dict[str, Any]:
    """Build a fresh user document with empty thought and friend lists."""
    return {
        "username": username,
        "email": email,
        "thoughts": [],
        "friends": [],
    }
