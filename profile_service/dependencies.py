"""
Access control dependencies.

``get_current_user`` resolves the caller from the bearer token and
``require_admin`` adds the role check on top of it. Each stage stops the
request on failure.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from profile_service.core.database import get_db
from profile_service.core.errors import AuthenticationFailure, AuthorizationFailure
from profile_service.core.tokens import InvalidToken, verify_access_token
from profile_service.models.user import User
from profile_service.services import user as user_service

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False, description="Token returned by /login")


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the user presenting the bearer token.

    Raises:
        AuthenticationFailure: If the header is missing or malformed, the
            token does not verify, or its user no longer exists
    """
    if credentials is None or not credentials.credentials:
        logger.info("Authentication failed: missing bearer token")
        raise AuthenticationFailure()

    try:
        user_id = verify_access_token(credentials.credentials)
    except InvalidToken as e:
        logger.info(f"Authentication failed: {e}")
        raise AuthenticationFailure() from e

    db_user = user_service.get_user(db, user_id)
    if db_user is None:
        logger.warning(f"Authentication failed: token user {user_id} not found")
        raise AuthenticationFailure()
    return db_user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """
    Require the resolved user to be an admin.

    Raises:
        AuthorizationFailure: If the user is not an admin
    """
    if not current_user.is_admin:
        logger.warning(f"Admin access denied for user {current_user.id}")
        raise AuthorizationFailure()
    return current_user
