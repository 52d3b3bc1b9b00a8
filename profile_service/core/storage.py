"""
Object storage for uploaded profile images.

Routes only see the ``ObjectStorage`` interface returned by ``get_storage``;
the bundled backend writes to a local directory that the application serves
as static files.
"""

import logging
import re
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os

from .config import settings

logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")

# Leading bytes identifying each accepted image format
IMAGE_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


def build_object_key(filename: Optional[str], now: Optional[float] = None) -> str:
    """
    Build the storage key for an upload from its time and original filename.

    Args:
        filename: Filename supplied by the client
        now: Upload time as a UNIX timestamp, defaults to the current time

    Returns:
        str: ``<epoch milliseconds>-<sanitized filename>``
    """
    timestamp = int((time.time() if now is None else now) * 1000)
    # Drop any directory part a client may send, including Windows separators
    name = Path((filename or "").replace("\\", "/")).name
    name = _UNSAFE_KEY_CHARS.sub("_", name).lstrip(".") or "upload"
    return f"{timestamp}-{name}"


def detect_image_type(content: bytes) -> Optional[str]:
    """Return the image MIME type ``content`` starts with, or None if it is not a known image."""
    for signature, content_type in IMAGE_SIGNATURES:
        if content.startswith(signature):
            return content_type
    if content[:4] == b"RIFF" and content[8:12] == b"WEBP":
        return "image/webp"
    return None


class ObjectStorage(ABC):
    """Interface for backends storing uploaded bytes under a key."""

    @abstractmethod
    async def save(self, key: str, content: bytes, content_type: Optional[str] = None) -> str:
        """Store ``content`` under ``key`` and return the URL it is reachable at."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove the object stored under ``key``; a missing object is not an error."""


class LocalObjectStorage(ObjectStorage):
    """Stores objects as files below ``root`` and exposes them under ``base_url``."""

    def __init__(self, root: str, base_url: str):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def url_for(self, key: str) -> str:
        return f"{self.base_url}/{key}"

    async def save(self, key: str, content: bytes, content_type: Optional[str] = None) -> str:
        self.root.mkdir(parents=True, exist_ok=True)
        path = self.root / key
        async with aiofiles.open(path, "wb") as f:
            await f.write(content)
        logger.info(f"Stored object {key} ({len(content)} bytes, {content_type or 'unknown type'})")
        return self.url_for(key)

    async def delete(self, key: str) -> None:
        try:
            await aiofiles.os.remove(self.root / key)
        except FileNotFoundError:
            return
        logger.info(f"Deleted object {key}")


_storage = LocalObjectStorage(settings.STORAGE_DIR, settings.STORAGE_BASE_URL)


def get_storage() -> ObjectStorage:
    """
    Get the configured object storage backend.

    Note:
        This function should be used as a FastAPI dependency so tests can
        override it.
    """
    return _storage
