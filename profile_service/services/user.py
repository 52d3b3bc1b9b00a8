"""
User service for account and profile operations.
"""

import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from profile_service.core.database import transaction
from profile_service.core.security import (
    DUMMY_PASSWORD_HASH, get_password_hash, verify_password
)
from profile_service.models.user import User
from profile_service.schemas.user import UserCreate, UserUpdate

# Configure logging
logger = logging.getLogger(__name__)

# Fields a user may change on their own profile
UPDATABLE_FIELDS = frozenset({"email", "name", "password", "is_public"})


def _email_taken(db: Session, email: str, exclude_user_id: Optional[int] = None) -> bool:
    query = db.query(User).filter(func.lower(User.email) == email.lower())
    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)
    return query.first() is not None


# PUBLIC_INTERFACE
def create_user(db: Session, user_data: UserCreate, allow_admin: bool = False) -> User:
    """
    Register a new user.

    Args:
        db: Database session
        user_data: Registration data
        allow_admin: Whether the registration may create an admin

    Returns:
        User: Created user object

    Raises:
        ValueError: If the email address is already registered, or an admin
            is requested while admin registration is disabled
    """
    if user_data.is_admin and not allow_admin:
        raise ValueError("Admin registration is disabled")

    try:
        with transaction(db):
            if _email_taken(db, user_data.email):
                raise ValueError(f"Email address '{user_data.email}' is already registered")

            db_user = User(
                email=user_data.email.lower(),  # Store email in lowercase for consistency
                hashed_password=get_password_hash(user_data.password),
                name=user_data.name,
                is_admin=user_data.is_admin,
                is_public=user_data.is_public,
            )
            db.add(db_user)
            db.flush()
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email
        raise ValueError(f"Email address '{user_data.email}' is already registered")

    logger.info(f"Registered user {db_user.id}")
    return db_user


# PUBLIC_INTERFACE
def get_user(db: Session, user_id: int) -> Optional[User]:
    """
    Get user by ID.

    Args:
        db: Database session
        user_id: User ID

    Returns:
        Optional[User]: User object if found, None otherwise
    """
    return db.query(User).filter(User.id == user_id).first()


# PUBLIC_INTERFACE
def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """
    Get user by email, ignoring case.

    Args:
        db: Database session
        email: User email

    Returns:
        Optional[User]: User object if found, None otherwise
    """
    return db.query(User).filter(func.lower(User.email) == email.lower()).first()


# PUBLIC_INTERFACE
def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    """
    Check login credentials.

    A password hash is verified even when the email is unknown, so the
    response time does not reveal which emails are registered.

    Args:
        db: Database session
        email: Login email
        password: Plaintext password

    Returns:
        Optional[User]: The user on success, None otherwise
    """
    db_user = get_user_by_email(db, email)
    if db_user is None:
        verify_password(password, DUMMY_PASSWORD_HASH)
        logger.info("Login failed: unknown email")
        return None
    if not verify_password(password, db_user.hashed_password):
        logger.info(f"Login failed: wrong password for user {db_user.id}")
        return None
    return db_user


# PUBLIC_INTERFACE
def get_all_users(db: Session) -> List[User]:
    """Get every user, public or not."""
    return db.query(User).order_by(User.id).all()


# PUBLIC_INTERFACE
def get_public_users(db: Session) -> List[User]:
    """Get the users whose profile is public."""
    return db.query(User).filter(User.is_public.is_(True)).order_by(User.id).all()


# PUBLIC_INTERFACE
def update_profile(db: Session, db_user: User, user_data: UserUpdate) -> User:
    """
    Apply a self-service update to a user's profile.

    Only ``UPDATABLE_FIELDS`` are written. Fields that are unset or null are
    left unchanged.

    Args:
        db: Database session
        db_user: User being updated
        user_data: Fields to change

    Returns:
        User: Updated user object

    Raises:
        ValueError: If the new email belongs to another user
    """
    update_data = {
        field: value
        for field, value in user_data.model_dump(exclude_unset=True, exclude_none=True).items()
        if field in UPDATABLE_FIELDS
    }
    if "password" in update_data:
        update_data["hashed_password"] = get_password_hash(update_data.pop("password"))
    if "email" in update_data:
        update_data["email"] = update_data["email"].lower()

    try:
        with transaction(db):
            if "email" in update_data and _email_taken(db, update_data["email"], db_user.id):
                raise ValueError(f"Email {update_data['email']} is already in use")
            for field, value in update_data.items():
                setattr(db_user, field, value)
            db.add(db_user)
    except IntegrityError:
        if "email" not in update_data:
            raise
        raise ValueError(f"Email {update_data['email']} is already in use")

    logger.info(f"Updated profile of user {db_user.id}: {sorted(update_data)}")
    return db_user


# PUBLIC_INTERFACE
def set_visibility(db: Session, db_user: User, is_public: bool) -> User:
    """
    Change whether a user appears in the public listing.

    Args:
        db: Database session
        db_user: User being updated
        is_public: New visibility

    Returns:
        User: Updated user object
    """
    if db_user.is_public == is_public:
        return db_user
    with transaction(db):
        db_user.is_public = is_public
        db.add(db_user)
    logger.info(f"User {db_user.id} visibility set to {'public' if is_public else 'private'}")
    return db_user


# PUBLIC_INTERFACE
def set_image_url(db: Session, db_user: User, image_url: str) -> User:
    """
    Record the location of a user's uploaded image.

    Args:
        db: Database session
        db_user: User being updated
        image_url: URL returned by the object storage

    Returns:
        User: Updated user object
    """
    with transaction(db):
        db_user.image_url = image_url
        db.add(db_user)
    return db_user
