"""
SocialAPI Backend: Thought Service
==================================

What:  Business logic for thoughts and their embedded reactions.
Who:   Called by routes/thoughts.py.

Cross-collection steps:
    create → insert thought, then $push its id onto the author's thoughts list
             (matched on userId AND username). If no author matches, the
             thought is kept and returned with a warning.
    delete → delete thought, then $pull its id from every user. The scrub
             runs even when nothing was deleted, to clear stale references.
"""

import logging
from typing import List

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from socialapi.exceptions import DatabaseError, NotFoundError
from socialapi.models.common import to_object_id
from socialapi.models.thought import (
    THOUGHTS_COLLECTION,
    new_reaction_document,
    new_thought_document,
)
from socialapi.models.user import USERS_COLLECTION
from socialapi.schemas.common import DeletionResponse
from socialapi.schemas.thought import (
    ReactionCreate,
    ThoughtCreate,
    ThoughtResponse,
    ThoughtUpdate,
)

logger = logging.getLogger(__name__)

UNLINKED_WARNING = (
    "Thought created, but no user matched the given userId and username; "
    "it is not listed under any user"
)


class ThoughtService:
    """Business logic layer for thought and reaction operations."""

    def _store_failure(self, action: str, exc: PyMongoError, **context) -> DatabaseError:
        logger.error("Database error while %s: %s", action, str(exc), exc_info=True)
        context["error_type"] = type(exc).__name__
        return DatabaseError(
            message=f"Could not complete the request while {action}. Please try again.",
            context=context,
        )

    async def list_thoughts(self, db: AsyncIOMotorDatabase) -> List[ThoughtResponse]:
        try:
            docs = await db[THOUGHTS_COLLECTION].find({}).to_list(length=None)
        except PyMongoError as e:
            raise self._store_failure("listing thoughts", e)
        return [ThoughtResponse.from_document(doc) for doc in docs]

    async def create_thought(
        self, db: AsyncIOMotorDatabase, payload: ThoughtCreate
    ) -> ThoughtResponse:
        """
        Insert a thought and link it to its author.

        Returns:
            ThoughtResponse; warning is set when the link step did not apply.

        Raises:
            ValidationError: userId is not an ObjectId (→ 400), checked before
                             anything is written
            DatabaseError: the insert itself failed (→ 500)
        """
        author_id = to_object_id(payload.user_id, "userId")
        doc = new_thought_document(payload.thought_text, payload.username)
        try:
            result = await db[THOUGHTS_COLLECTION].insert_one(doc)
        except PyMongoError as e:
            raise self._store_failure("creating a thought", e)
        doc["_id"] = result.inserted_id
        logger.info("Thought created: %s by %s", result.inserted_id, payload.username)

        warning = None
        try:
            author = await db[USERS_COLLECTION].find_one_and_update(
                {"_id": author_id, "username": payload.username},
                {"$push": {"thoughts": result.inserted_id}},
            )
        except PyMongoError as e:
            logger.error("Thought %s not linked to user %s: %s", result.inserted_id, author_id, str(e))
            author = None
        if author is None:
            logger.warning(
                "Thought %s left unlinked: no user %s named %s",
                result.inserted_id, author_id, payload.username,
            )
            warning = UNLINKED_WARNING

        return ThoughtResponse.from_document(doc, warning=warning)

    async def get_thought(self, db: AsyncIOMotorDatabase, thought_id: str) -> ThoughtResponse:
        oid = to_object_id(thought_id, "thoughtId")
        try:
            doc = await db[THOUGHTS_COLLECTION].find_one({"_id": oid})
        except PyMongoError as e:
            raise self._store_failure("fetching a thought", e, thought_id=thought_id)
        if doc is None:
            raise NotFoundError(resource="thought", resource_id=thought_id)
        return ThoughtResponse.from_document(doc)

    async def update_thought(
        self, db: AsyncIOMotorDatabase, thought_id: str, payload: ThoughtUpdate
    ) -> ThoughtResponse:
        """Replace thoughtText only. Unknown ids raise NotFoundError and write nothing."""
        oid = to_object_id(thought_id, "thoughtId")
        try:
            doc = await db[THOUGHTS_COLLECTION].find_one_and_update(
                {"_id": oid},
                {"$set": {"thoughtText": payload.thought_text}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise self._store_failure("updating a thought", e, thought_id=thought_id)
        if doc is None:
            raise NotFoundError(resource="thought", resource_id=thought_id)
        logger.info("Thought %s text updated", thought_id)
        return ThoughtResponse.from_document(doc)

    async def delete_thought(self, db: AsyncIOMotorDatabase, thought_id: str) -> DeletionResponse:
        """
        Delete a thought and scrub its id from every user.

        Raises:
            NotFoundError: nothing was deleted (the scrub has still run) (→ 404)
        """
        oid = to_object_id(thought_id, "thoughtId")
        try:
            thought = await db[THOUGHTS_COLLECTION].find_one_and_delete({"_id": oid})
        except PyMongoError as e:
            raise self._store_failure("deleting a thought", e, thought_id=thought_id)

        scrubbed = await self._scrub_thought_id(db, oid)

        if thought is None:
            raise NotFoundError(resource="thought", resource_id=thought_id)

        if not scrubbed:
            return DeletionResponse(
                message="Thought deleted, but its id could not be removed from every user",
                deleted_id=thought_id,
                cleanup_complete=False,
            )
        logger.info("Thought %s deleted", thought_id)
        return DeletionResponse(message="Thought deleted!", deleted_id=thought_id)

    async def _scrub_thought_id(self, db: AsyncIOMotorDatabase, oid: ObjectId) -> bool:
        """$pull the id from all users' thoughts lists. Returns False if the write failed."""
        try:
            result = await db[USERS_COLLECTION].update_many(
                {"thoughts": oid},
                {"$pull": {"thoughts": oid}},
            )
        except PyMongoError as e:
            logger.error("Could not scrub thought %s from users: %s", oid, str(e))
            return False
        if result.modified_count:
            logger.info("Scrubbed thought %s from %d users", oid, result.modified_count)
        return True

    async def add_reaction(
        self, db: AsyncIOMotorDatabase, thought_id: str, payload: ReactionCreate
    ) -> ThoughtResponse:
        """
        Append a reaction with a freshly generated reactionId.

        Raises:
            NotFoundError: the thought does not exist, or no user has the
                           reacting username (→ 404)
        """
        oid = to_object_id(thought_id, "thoughtId")
        thoughts = db[THOUGHTS_COLLECTION]
        try:
            if await thoughts.find_one({"_id": oid}, {"_id": 1}) is None:
                raise NotFoundError(resource="thought", resource_id=thought_id)
            if await db[USERS_COLLECTION].find_one({"username": payload.username}, {"_id": 1}) is None:
                raise NotFoundError(resource="user", context={"username": payload.username})
            reaction = new_reaction_document(payload.reaction_body, payload.username)
            doc = await thoughts.find_one_and_update(
                {"_id": oid},
                {"$push": {"reactions": reaction}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise self._store_failure("adding a reaction", e, thought_id=thought_id)

        if doc is None:
            raise NotFoundError(resource="thought", resource_id=thought_id)
        logger.info("Reaction %s added to thought %s", reaction["reactionId"], thought_id)
        return ThoughtResponse.from_document(doc)

    async def remove_reaction(
        self, db: AsyncIOMotorDatabase, thought_id: str, reaction_id: str
    ) -> ThoughtResponse:
        """Pull the reaction with this reactionId. An unknown reactionId is a no-op success."""
        oid = to_object_id(thought_id, "thoughtId")
        rid = to_object_id(reaction_id, "reactionId")
        try:
            doc = await db[THOUGHTS_COLLECTION].find_one_and_update(
                {"_id": oid},
                {"$pull": {"reactions": {"reactionId": rid}}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise self._store_failure("removing a reaction", e, thought_id=thought_id)
        if doc is None:
            raise NotFoundError(resource="thought", resource_id=thought_id)
        return ThoughtResponse.from_document(doc)


thought_service = ThoughtService()
