"""
Tests for object keys and the local storage backend.
"""

import pytest

from profile_service.core.storage import (
    LocalObjectStorage, ObjectStorage, build_object_key, detect_image_type
)


@pytest.mark.parametrize("filename,expected", [
    ("avatar.png", "1700000000500-avatar.png"),
    ("my photo.jpg", "1700000000500-my_photo.jpg"),
    ("../../etc/passwd", "1700000000500-passwd"),
    ("C:\\Users\\me\\face.gif", "1700000000500-face.gif"),
    (".hidden", "1700000000500-hidden"),
    ("", "1700000000500-upload"),
    (None, "1700000000500-upload"),
])
def test_build_object_key(filename, expected):
    """Keys combine the upload time in milliseconds with a safe base name."""
    assert build_object_key(filename, now=1700000000.5) == expected


def test_build_object_key_uses_current_time():
    first = build_object_key("a.png")
    timestamp, name = first.split("-", 1)
    assert timestamp.isdigit()
    assert name == "a.png"


@pytest.mark.asyncio
async def test_local_storage_writes_file(tmp_path):
    storage = LocalObjectStorage(str(tmp_path / "media"), "http://cdn.example.com/media/")

    url = await storage.save("1-avatar.png", b"image-bytes", "image/png")

    assert url == "http://cdn.example.com/media/1-avatar.png"
    assert (tmp_path / "media" / "1-avatar.png").read_bytes() == b"image-bytes"


@pytest.mark.asyncio
async def test_local_storage_deletes_file(tmp_path):
    storage = LocalObjectStorage(str(tmp_path / "media"), "/media")
    await storage.save("1-avatar.png", b"image-bytes")

    await storage.delete("1-avatar.png")

    assert not (tmp_path / "media" / "1-avatar.png").exists()


@pytest.mark.asyncio
async def test_local_storage_delete_missing_key(tmp_path):
    storage = LocalObjectStorage(str(tmp_path / "media"), "/media")
    await storage.delete("never-stored.png")


def test_base_storage_is_abstract():
    with pytest.raises(TypeError):
        ObjectStorage()


def test_storage_without_delete_cannot_be_created():
    class SaveOnlyStorage(ObjectStorage):
        async def save(self, key, content, content_type=None):
            return key

    with pytest.raises(TypeError):
        SaveOnlyStorage()


@pytest.mark.parametrize("content,expected", [
    (b"\x89PNG\r\n\x1a\n" + b"\x00" * 8, "image/png"),
    (b"\xff\xd8\xff\xe0" + b"\x00" * 8, "image/jpeg"),
    (b"GIF87a" + b"\x00" * 8, "image/gif"),
    (b"GIF89a" + b"\x00" * 8, "image/gif"),
    (b"RIFF\x24\x00\x00\x00WEBPVP8 ", "image/webp"),
    (b"RIFF\x24\x00\x00\x00WAVEfmt ", None),
    (b"#!/bin/sh\nrm -rf /\n", None),
    (b"<svg xmlns='http://www.w3.org/2000/svg'/>", None),
    (b"", None),
])
def test_detect_image_type(content, expected):
    assert detect_image_type(content) == expected
