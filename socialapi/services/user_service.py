"""
SocialAPI Backend: User Service
===============================

What:  Business logic for the users resource: CRUD, friend links, and the
       referential-integrity steps that follow a rename or a delete.
How:   Each method issues one or more Motor calls and converts None results
       and pymongo errors into application exceptions.
Who:   Called by routes/users.py.

Integrity rules handled here:
    ┌───────────────┬────────────────────────────────────────────────────┐
    │ rename        │ copy the new username onto thoughts and reactions  │
    │ delete        │ delete the user's thoughts, unfriend the user      │
    │ add friend    │ friend id must exist, $addToSet keeps it a set     │
    │ remove friend │ $pull, no error when absent                        │
    └───────────────┴────────────────────────────────────────────────────┘

None of the multi-step operations are atomic. When a follow-up step fails
the primary write stands and the response says what was left behind.
"""

import logging
from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from socialapi.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from socialapi.models.common import to_object_id
from socialapi.models.thought import THOUGHTS_COLLECTION
from socialapi.models.user import USERS_COLLECTION, new_user_document
from socialapi.schemas.common import DeletionResponse
from socialapi.schemas.user import UserCreate, UserResponse, UserUpdate

logger = logging.getLogger(__name__)


def conflict_from_duplicate_key(exc: DuplicateKeyError) -> ConflictError:
    """
    Work out which unique field a DuplicateKeyError collided on.

    MongoDB 4.2+ reports keyValue/keyPattern in the error details; older
    servers only name the index in the message, so fall back to that.
    """
    details = exc.details or {}
    key_value = details.get("keyValue") or {}
    key_pattern = details.get("keyPattern") or {}
    keys = list(key_value) or list(key_pattern)
    if keys:
        field = keys[0]
        return ConflictError(field=field, value=key_value.get(field))

    field = "email" if "email" in str(exc) else "username"
    return ConflictError(field=field)


class UserService:
    """
    Business logic layer for user operations.

    Stateless: the database handle is passed into every call.
    """

    def _store_failure(self, action: str, exc: PyMongoError, **context) -> DatabaseError:
        logger.error("Database error while %s: %s", action, str(exc), exc_info=True)
        context["error_type"] = type(exc).__name__
        return DatabaseError(
            message=f"Could not complete the request while {action}. Please try again.",
            context=context,
        )

    async def list_users(self, db: AsyncIOMotorDatabase) -> List[UserResponse]:
        try:
            docs = await db[USERS_COLLECTION].find({}).to_list(length=None)
        except PyMongoError as e:
            raise self._store_failure("listing users", e)
        return [UserResponse.from_document(doc) for doc in docs]

    async def create_user(self, db: AsyncIOMotorDatabase, payload: UserCreate) -> UserResponse:
        """
        Insert a new user.

        Raises:
            ConflictError: username or email already taken (→ 409)
            DatabaseError: any other store failure (→ 500)
        """
        doc = new_user_document(payload.username, payload.email)
        try:
            result = await db[USERS_COLLECTION].insert_one(doc)
        except DuplicateKeyError as e:
            conflict = conflict_from_duplicate_key(e)
            logger.info("Signup rejected: %s already in use", conflict.field)
            raise conflict
        except PyMongoError as e:
            raise self._store_failure("creating a user", e)

        doc["_id"] = result.inserted_id
        logger.info("User created: %s (%s)", result.inserted_id, payload.username)
        return UserResponse.from_document(doc)

    async def get_user(self, db: AsyncIOMotorDatabase, user_id: str) -> UserResponse:
        oid = to_object_id(user_id, "userId")
        try:
            doc = await db[USERS_COLLECTION].find_one({"_id": oid})
        except PyMongoError as e:
            raise self._store_failure("fetching a user", e, user_id=user_id)
        if doc is None:
            raise NotFoundError(resource="user", resource_id=user_id)
        return UserResponse.from_document(doc)

    async def update_user(
        self, db: AsyncIOMotorDatabase, user_id: str, payload: UserUpdate
    ) -> UserResponse:
        """
        Apply a partial update of username and/or email.

        When the username changes, thoughts and reactions stored under the
        old name are rewritten to the new one. If that rewrite fails the
        user update is kept and the response carries a warning.

        Raises:
            NotFoundError: no user with that id (→ 404)
            ConflictError: new username or email already taken (→ 409)
        """
        oid = to_object_id(user_id, "userId")
        changes = payload.changes()
        try:
            before = await db[USERS_COLLECTION].find_one_and_update(
                {"_id": oid},
                {"$set": changes},
                return_document=ReturnDocument.BEFORE,
            )
        except DuplicateKeyError as e:
            raise conflict_from_duplicate_key(e)
        except PyMongoError as e:
            raise self._store_failure("updating a user", e, user_id=user_id)

        if before is None:
            raise NotFoundError(resource="user", resource_id=user_id)

        logger.info("User %s updated: %s", user_id, ", ".join(sorted(changes)))

        warning = None
        new_name = changes.get("username")
        if new_name is not None and new_name != before["username"]:
            warning = await self._propagate_rename(db, before["username"], new_name)

        return UserResponse.from_document({**before, **changes}, warning=warning)

    async def _propagate_rename(
        self, db: AsyncIOMotorDatabase, old_name: str, new_name: str
    ) -> Optional[str]:
        """Rewrite the denormalized username on thoughts and reactions. Returns a warning on failure."""
        thoughts = db[THOUGHTS_COLLECTION]
        try:
            authored = await thoughts.update_many(
                {"username": old_name},
                {"$set": {"username": new_name}},
            )
            reacted = await thoughts.update_many(
                {"reactions.username": old_name},
                {"$set": {"reactions.$[r].username": new_name}},
                array_filters=[{"r.username": old_name}],
            )
        except PyMongoError as e:
            logger.error(
                "Rename %s -> %s not propagated to thoughts: %s",
                old_name, new_name, str(e),
            )
            return (
                "Username updated, but existing thoughts and reactions "
                "still show the previous username"
            )

        logger.info(
            "Rename %s -> %s propagated: %d thoughts, %d with reactions",
            old_name, new_name, authored.modified_count, reacted.modified_count,
        )
        return None

    async def delete_user(self, db: AsyncIOMotorDatabase, user_id: str) -> DeletionResponse:
        """
        Delete a user, then cascade.

        Cascade steps, in order:
            1. delete every thought whose id is in the user's thoughts list
            2. pull the user's id from every other user's friends list

        Raises:
            NotFoundError: no user with that id (→ 404)
        """
        oid = to_object_id(user_id, "userId")
        users = db[USERS_COLLECTION]
        try:
            user = await users.find_one_and_delete({"_id": oid})
        except PyMongoError as e:
            raise self._store_failure("deleting a user", e, user_id=user_id)

        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)

        thought_ids = user.get("thoughts", [])
        try:
            removed = await db[THOUGHTS_COLLECTION].delete_many({"_id": {"$in": thought_ids}})
            await users.update_many({"friends": oid}, {"$pull": {"friends": oid}})
        except PyMongoError as e:
            logger.error(
                "User %s deleted but cascade failed (%d thoughts pending): %s",
                user_id, len(thought_ids), str(e),
            )
            return DeletionResponse(
                message=(
                    "User deleted, but associated thoughts or friend links "
                    "could not all be removed"
                ),
                deleted_id=user_id,
                cleanup_complete=False,
            )

        logger.info("User %s deleted with %d thoughts", user_id, removed.deleted_count)
        return DeletionResponse(
            message="User and associated thoughts deleted!",
            deleted_id=user_id,
            deleted_thought_count=removed.deleted_count,
        )

    async def add_friend(
        self, db: AsyncIOMotorDatabase, user_id: str, friend_id: str
    ) -> UserResponse:
        """
        Add friend_id to the user's friends set.

        Adding an existing friend again is a no-op success.

        Raises:
            ValidationError: friend_id equals user_id (→ 400)
            NotFoundError: the user, or the friend, does not exist (→ 404)
        """
        oid = to_object_id(user_id, "userId")
        fid = to_object_id(friend_id, "friendId")
        if oid == fid:
            raise ValidationError(message="A user cannot befriend themselves", field="friendId")

        users = db[USERS_COLLECTION]
        try:
            if await users.find_one({"_id": oid}, {"_id": 1}) is None:
                raise NotFoundError(resource="user", resource_id=user_id)
            if await users.find_one({"_id": fid}, {"_id": 1}) is None:
                raise NotFoundError(resource="friend", resource_id=friend_id)
            user = await users.find_one_and_update(
                {"_id": oid},
                {"$addToSet": {"friends": fid}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise self._store_failure("adding a friend", e, user_id=user_id, friend_id=friend_id)

        # The user can disappear between the existence check and the update.
        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)
        return UserResponse.from_document(user)

    async def remove_friend(
        self, db: AsyncIOMotorDatabase, user_id: str, friend_id: str
    ) -> UserResponse:
        """Pull friend_id from the user's friends. Removing a non-friend is a no-op success."""
        oid = to_object_id(user_id, "userId")
        fid = to_object_id(friend_id, "friendId")
        try:
            user = await db[USERS_COLLECTION].find_one_and_update(
                {"_id": oid},
                {"$pull": {"friends": fid}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise self._store_failure("removing a friend", e, user_id=user_id, friend_id=friend_id)

        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)
        return UserResponse.from_document(user)


user_service = UserService()
