"""
ProFast Backend - User Routes
==============================

POST /users is called by the front end after each sign-in. It answers 200
both when the user is created and when they already exist.
"""

import logging
from typing import Union

from fastapi import APIRouter, Depends
from pymongo.asynchronous.database import AsyncDatabase

from profast.database import get_database
from profast.schemas.common import ErrorResponse, InsertResult, MessageResponse
from profast.schemas.user import UserCreate
from profast.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


@router.post(
    "/users",
    response_model=Union[MessageResponse, InsertResult],
    responses={
        200: {"description": "User created, or already registered"},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Register a user on first sign-in",
)
async def register_user(
    user: UserCreate,
    db: AsyncDatabase = Depends(get_database),
) -> Union[MessageResponse, InsertResult]:
    return await user_service.register_user(db, user.model_dump())
