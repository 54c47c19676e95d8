"""
ProFast Backend - User Service
===============================

What:  Registers users on first sign-in.
Why:   The front end calls POST /users after every successful login; the
       first call creates the profile, later calls are acknowledged no-ops.
How:   Look up by email, insert when absent.

Race handling:
    Check-then-insert is not atomic. When the unique index on users.email
    exists (created at startup), a concurrent duplicate insert fails with
    DuplicateKeyError and is answered the same way as "already exists".
"""

import logging
from typing import Any, Dict, Union

from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from profast.database import USERS
from profast.exceptions import DatabaseError
from profast.schemas.common import InsertResult, MessageResponse

logger = logging.getLogger(__name__)

USER_EXISTS_MESSAGE = "User already exists"


class UserService:
    """Business logic for the users collection."""

    async def register_user(
        self, db: AsyncDatabase, user: Dict[str, Any]
    ) -> Union[MessageResponse, InsertResult]:
        """
        Insert `user` unless a user with the same email is already stored.

        Returns:
            MessageResponse("User already exists") when the email is taken,
            otherwise the InsertResult of the new document.

        Raises:
            DatabaseError: lookup or insert failed (→ 500)
        """
        email = user.get("email")
        collection = db[USERS]

        try:
            existing = await collection.find_one({"email": email})
            if existing:
                logger.debug("User %s already registered", email)
                return MessageResponse(message=USER_EXISTS_MESSAGE)

            result = await collection.insert_one(user)
        except DuplicateKeyError:
            logger.info("Concurrent registration for %s resolved by unique index", email)
            return MessageResponse(message=USER_EXISTS_MESSAGE)
        except PyMongoError as e:
            logger.error("Database error registering user %s: %s", email, str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to register user",
                context={"error_type": type(e).__name__},
            )

        logger.info("Registered user %s as %s", email, result.inserted_id)
        return InsertResult.from_result(result)


user_service = UserService()
