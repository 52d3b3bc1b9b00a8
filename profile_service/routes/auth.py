"""
Registration, login and logout endpoints.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from profile_service.core.config import settings
from profile_service.core.database import get_db
from profile_service.core.errors import AuthenticationFailure, ValidationFailure
from profile_service.core.tokens import create_access_token
from profile_service.services import user as user_service
from profile_service.schemas.user import (
    LoginRequest, LogoutResponse, MessageResponse, TokenResponse, UserCreate
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=MessageResponse, status_code=201)
def register(
    user_data: UserCreate,
    db: Session = Depends(get_db)
) -> MessageResponse:
    """Register a new user."""
    try:
        user_service.create_user(db, user_data, allow_admin=settings.ALLOW_ADMIN_REGISTRATION)
    except ValueError as e:
        raise ValidationFailure(str(e))
    except SQLAlchemyError:
        logger.exception("Registration failed")
        raise ValidationFailure("Registration failed")
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=TokenResponse)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db)
) -> TokenResponse:
    """Exchange email and password for a bearer token."""
    try:
        db_user = user_service.authenticate_user(db, credentials.email, credentials.password)
    except SQLAlchemyError:
        logger.exception("Login lookup failed")
        raise AuthenticationFailure()
    if db_user is None:
        raise AuthenticationFailure()
    logger.info(f"User {db_user.id} logged in")
    return TokenResponse(token=create_access_token(db_user.id))


@router.post("/logout", response_model=LogoutResponse)
def logout() -> LogoutResponse:
    """
    Acknowledge a logout.

    Tokens are not tracked server side; the client is expected to discard
    its token.
    """
    return LogoutResponse(description="client is expected to delete access-token at their end")
