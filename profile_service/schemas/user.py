"""
User schema definitions for request/response handling.
"""

from typing import Optional

from pydantic import EmailStr, Field

from profile_service.schemas.base import (
    BaseSchema, BaseDBSchema, BaseCreateSchema, BaseUpdateSchema
)


class UserCreate(BaseCreateSchema):
    """Schema for registering a new user."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=100)
    is_admin: bool = Field(False, alias="isAdmin")
    is_public: bool = Field(True, alias="isPublic")


class UserUpdate(BaseUpdateSchema):
    """
    Schema for a self-service profile update.

    Only these fields can be changed; anything else in the body is rejected.
    """

    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=1, max_length=255)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    is_public: Optional[bool] = Field(None, alias="isPublic")


class VisibilityUpdate(BaseUpdateSchema):
    """Schema for the visibility toggle."""

    is_public: bool = Field(..., alias="isPublic")


class UserResponse(BaseDBSchema):
    """Schema for user data in responses. The password hash is never included."""

    email: str
    name: str
    is_public: bool
    is_admin: bool
    image_url: Optional[str] = None


class LoginRequest(BaseSchema):
    """Credentials presented at login."""

    email: str
    password: str


class TokenResponse(BaseSchema):
    token: str


class MessageResponse(BaseSchema):
    message: str


class LogoutResponse(BaseSchema):
    description: str


class ImageUploadResponse(BaseSchema):
    message: str
    image_url: str = Field(..., alias="imageUrl")
