"""
User model definition.
"""

from sqlalchemy import Column, String, Boolean, Integer

from profile_service.models.base import BaseModel


class User(BaseModel):
    """User account with its profile fields."""

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    name = Column(String(100), nullable=False)
    is_public = Column(Boolean, default=True, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
    image_url = Column(String(1024))

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
