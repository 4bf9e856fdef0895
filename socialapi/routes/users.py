"""
SocialAPI Backend: User Route Handlers
======================================

What:  /users CRUD plus /users/{userId}/friends/{friendId}.
How:   Each handler pulls path/body values, delegates to UserService and
       returns its schema. Errors surface as exceptions handled in main.py.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from socialapi.database import get_database
from socialapi.schemas.common import DeletionResponse, ErrorResponse
from socialapi.schemas.user import UserCreate, UserResponse, UserUpdate
from socialapi.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])

_BAD_ID = {400: {"description": "Malformed id or body", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "User not found", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[UserResponse],
    response_model_exclude_none=True,
    summary="List all users",
)
async def list_users(db: AsyncIOMotorDatabase = Depends(get_database)) -> List[UserResponse]:
    return await user_service.list_users(db)


@router.post(
    "",
    status_code=201,
    response_model=UserResponse,
    response_model_exclude_none=True,
    responses={
        **_BAD_ID,
        409: {"description": "Username or email already in use", "model": ErrorResponse},
    },
    summary="Create a user",
)
async def create_user(
    payload: UserCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> UserResponse:
    return await user_service.create_user(db, payload)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    response_model_exclude_none=True,
    responses={**_BAD_ID, **_NOT_FOUND},
    summary="Get a user by id",
)
async def get_user(
    user_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> UserResponse:
    return await user_service.get_user(db, user_id)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    response_model_exclude_none=True,
    responses={
        **_BAD_ID,
        **_NOT_FOUND,
        409: {"description": "Username or email already in use", "model": ErrorResponse},
    },
    summary="Update a user's username and/or email",
    description=(
        "Partial update. A username change is copied onto the user's existing "
        "thoughts and reactions; if that copy fails the response carries a warning."
    ),
)
async def update_user(
    user_id: str,
    payload: UserUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> UserResponse:
    return await user_service.update_user(db, user_id, payload)


@router.delete(
    "/{user_id}",
    response_model=DeletionResponse,
    response_model_exclude_none=True,
    responses={**_BAD_ID, **_NOT_FOUND},
    summary="Delete a user and their thoughts",
)
async def delete_user(
    user_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> DeletionResponse:
    return await user_service.delete_user(db, user_id)


@router.post(
    "/{user_id}/friends/{friend_id}",
    response_model=UserResponse,
    response_model_exclude_none=True,
    responses={**_BAD_ID, 404: {"description": "User or friend not found", "model": ErrorResponse}},
    summary="Add a friend",
)
async def add_friend(
    user_id: str,
    friend_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> UserResponse:
    return await user_service.add_friend(db, user_id, friend_id)


@router.delete(
    "/{user_id}/friends/{friend_id}",
    response_model=UserResponse,
    response_model_exclude_none=True,
    responses={**_BAD_ID, **_NOT_FOUND},
    summary="Remove a friend",
)
async def remove_friend(
    user_id: str,
    friend_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> UserResponse:
    return await user_service.remove_friend(db, user_id, friend_id)
