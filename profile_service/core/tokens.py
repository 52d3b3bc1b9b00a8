"""
Bearer token issuing and verification.

Tokens are HS256 JWTs carrying the user id and an absolute expiry. They are
always signed with ``SECRET_KEY``; ``SECRET_KEY_FALLBACKS`` are accepted on
verification only, so a key can be rotated without logging everybody out.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from .config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

USER_ID_CLAIM = "user_id"


class InvalidToken(Exception):
    """Raised when a bearer token cannot be trusted."""


# PUBLIC_INTERFACE
def create_access_token(
    user_id: int,
    issued_at: Optional[datetime] = None,
    settings: Settings = default_settings,
) -> str:
    """
    Issue a signed access token for a user.

    Args:
        user_id: Identifier of the authenticated user
        issued_at: Issue time, defaults to now (UTC)
        settings: Settings providing the key, algorithm and lifetime

    Returns:
        str: Encoded JWT
    """
    issued_at = issued_at or datetime.now(timezone.utc)
    expire = issued_at + timedelta(seconds=settings.ACCESS_TOKEN_EXPIRE_SECONDS)
    payload = {USER_ID_CLAIM: user_id, "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


# PUBLIC_INTERFACE
def verify_access_token(token: str, settings: Settings = default_settings) -> int:
    """
    Verify a token and return the user id it was issued for.

    Args:
        token: Encoded JWT
        settings: Settings providing the accepted keys and algorithm

    Returns:
        int: The embedded user id

    Raises:
        InvalidToken: If the token is malformed, expired, signed with an
            unknown key or does not carry a user id
    """
    payload = None
    for key in [settings.SECRET_KEY, *settings.SECRET_KEY_FALLBACKS]:
        try:
            payload = jwt.decode(token, key, algorithms=[settings.ALGORITHM])
            break
        except ExpiredSignatureError as e:
            raise InvalidToken("Token has expired") from e
        except JWTError as e:
            logger.debug(f"Token rejected by one of the signing keys: {e}")
    if payload is None:
        raise InvalidToken("Token signature or format is invalid")

    user_id = payload.get(USER_ID_CLAIM)
    # bool is an int subclass and must not pass as a user id
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise InvalidToken("Token does not identify a user")
    return user_id
