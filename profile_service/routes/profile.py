"""
Profile endpoints: own profile, visibility, listings and image upload.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from profile_service.core.config import settings
from profile_service.core.database import get_db
from profile_service.core.errors import InternalFailure, ValidationFailure
from profile_service.core.storage import (
    ObjectStorage, build_object_key, detect_image_type, get_storage
)
from profile_service.dependencies import get_current_user, require_admin
from profile_service.models.user import User
from profile_service.services import user as user_service
from profile_service.schemas.user import (
    ImageUploadResponse, UserResponse, UserUpdate, VisibilityUpdate
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["profiles"])


@router.get("/profile", response_model=UserResponse)
def get_profile(current_user: User = Depends(get_current_user)) -> UserResponse:
    """Get the caller's own profile."""
    return current_user


@router.put("/profile", response_model=UserResponse)
def update_profile(
    user_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> UserResponse:
    """Update the caller's email, name, password or visibility."""
    try:
        return user_service.update_profile(db, current_user, user_data)
    except ValueError as e:
        raise ValidationFailure(str(e))
    except SQLAlchemyError:
        logger.exception(f"Profile update failed for user {current_user.id}")
        raise ValidationFailure("Profile update failed")


@router.put("/profile/visibility", response_model=UserResponse)
def update_visibility(
    visibility: VisibilityUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> UserResponse:
    """Make the caller's profile public or private."""
    try:
        return user_service.set_visibility(db, current_user, visibility.is_public)
    except SQLAlchemyError:
        logger.exception(f"Visibility update failed for user {current_user.id}")
        raise ValidationFailure("Failed to update profile visibility")


@router.get("/admin/profiles", response_model=List[UserResponse])
def list_all_profiles(
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db)
) -> List[UserResponse]:
    """List every profile, public and private. Admin only."""
    try:
        return user_service.get_all_users(db)
    except SQLAlchemyError:
        logger.exception("Failed to fetch user profiles")
        raise InternalFailure("Failed to fetch user profiles")


@router.get("/profiles", response_model=List[UserResponse])
def list_public_profiles(db: Session = Depends(get_db)) -> List[UserResponse]:
    """List public profiles."""
    try:
        return user_service.get_public_users(db)
    except SQLAlchemyError:
        logger.exception("Failed to fetch public user profiles")
        raise InternalFailure("Failed to fetch public user profiles")


@router.post("/user/image", response_model=ImageUploadResponse)
async def upload_image(
    image: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
) -> ImageUploadResponse:
    """Upload a profile image and store its URL on the caller's profile."""
    if image.content_type not in settings.ALLOWED_IMAGE_TYPES:
        raise ValidationFailure(
            f"Unsupported image type. Allowed: {', '.join(settings.ALLOWED_IMAGE_TYPES)}"
        )
    content = await image.read(settings.MAX_UPLOAD_SIZE + 1)
    if not content:
        raise ValidationFailure("Uploaded image is empty")
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise ValidationFailure(
            f"Image too large. Maximum size: {settings.MAX_UPLOAD_SIZE // (1024 * 1024)}MB"
        )
    detected_type = detect_image_type(content)
    if detected_type is None or detected_type not in settings.ALLOWED_IMAGE_TYPES:
        raise ValidationFailure("Uploaded file is not a valid image")

    key = build_object_key(image.filename)
    try:
        image_url = await storage.save(key, content, detected_type)
    except OSError:
        logger.exception(f"Storing image failed for user {current_user.id}")
        raise InternalFailure("Failed to upload image")

    try:
        await run_in_threadpool(user_service.set_image_url, db, current_user, image_url)
    except SQLAlchemyError:
        logger.exception(f"Saving image URL failed for user {current_user.id}")
        try:
            await storage.delete(key)
        except OSError:
            logger.exception(f"Could not remove orphaned image {key}")
        raise InternalFailure("Failed to upload image")

    logger.info(f"User {current_user.id} uploaded image {key}")
    return ImageUploadResponse(message="Image uploaded successfully", image_url=image_url)
