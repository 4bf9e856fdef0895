"""
SocialAPI Backend: Thought Route Handlers
=========================================

What:  /thoughts CRUD plus /thoughts/{thoughtId}/reactions.
How:   Thin handlers over ThoughtService.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from socialapi.database import get_database
from socialapi.schemas.common import DeletionResponse, ErrorResponse
from socialapi.schemas.thought import (
    ReactionCreate,
    ThoughtCreate,
    ThoughtResponse,
    ThoughtUpdate,
)
from socialapi.services.thought_service import thought_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/thoughts", tags=["Thoughts"])

_BAD_ID = {400: {"description": "Malformed id or body", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Thought not found", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[ThoughtResponse],
    response_model_exclude_none=True,
    summary="List all thoughts",
)
async def list_thoughts(db: AsyncIOMotorDatabase = Depends(get_database)) -> List[ThoughtResponse]:
    return await thought_service.list_thoughts(db)


@router.post(
    "",
    status_code=201,
    response_model=ThoughtResponse,
    response_model_exclude_none=True,
    responses=_BAD_ID,
    summary="Create a thought",
    description=(
        "Creates the thought and appends its id to the user matching both userId "
        "and username. When no user matches, the thought is still created and the "
        "response includes a warning."
    ),
)
async def create_thought(
    payload: ThoughtCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> ThoughtResponse:
    return await thought_service.create_thought(db, payload)


@router.get(
    "/{thought_id}",
    response_model=ThoughtResponse,
    response_model_exclude_none=True,
    responses={**_BAD_ID, **_NOT_FOUND},
    summary="Get a thought by id",
)
async def get_thought(
    thought_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> ThoughtResponse:
    return await thought_service.get_thought(db, thought_id)


@router.put(
    "/{thought_id}",
    response_model=ThoughtResponse,
    response_model_exclude_none=True,
    responses={**_BAD_ID, **_NOT_FOUND},
    summary="Replace a thought's text",
)
async def update_thought(
    thought_id: str,
    payload: ThoughtUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> ThoughtResponse:
    return await thought_service.update_thought(db, thought_id, payload)


@router.delete(
    "/{thought_id}",
    response_model=DeletionResponse,
    response_model_exclude_none=True,
    responses={**_BAD_ID, **_NOT_FOUND},
    summary="Delete a thought and remove it from every user",
)
async def delete_thought(
    thought_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> DeletionResponse:
    return await thought_service.delete_thought(db, thought_id)


@router.post(
    "/{thought_id}/reactions",
    status_code=201,
    response_model=ThoughtResponse,
    response_model_exclude_none=True,
    responses={**_BAD_ID, 404: {"description": "Thought or user not found", "model": ErrorResponse}},
    summary="Add a reaction to a thought",
)
async def add_reaction(
    thought_id: str,
    payload: ReactionCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> ThoughtResponse:
    return await thought_service.add_reaction(db, thought_id, payload)


@router.delete(
    "/{thought_id}/reactions/{reaction_id}",
    response_model=ThoughtResponse,
    response_model_exclude_none=True,
    responses={**_BAD_ID, **_NOT_FOUND},
    summary="Remove a reaction from a thought",
)
async def remove_reaction(
    thought_id: str,
    reaction_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> ThoughtResponse:
    return await thought_service.remove_reaction(db, thought_id, reaction_id)
