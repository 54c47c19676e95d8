"""Request schema for user registration."""

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """
    Body of POST /users.

    Only `email` is required; name, photo URL, role and any other profile
    fields are stored exactly as sent.
    """
    email: str = Field(description="Email address; identifies the user")

    model_config = {"extra": "allow"}
