"""Persisting uploaded files under the configured upload root."""

from __future__ import annotations

import logging
import secrets
import time
from pathlib import Path

import aiofiles
from fastapi import UploadFile

from ..config import get_settings
from ..errors import ValidationError

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads"


def _storage_name(filename: str | None) -> str:
    suffix = Path(filename or "upload").suffix or ".bin"
    return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}{suffix.lower()}"


async def save_logo(file: UploadFile) -> str:
    """Store an image upload and return its public path (``/uploads/<name>``)."""

    settings = get_settings()
    if not (file.content_type or "").startswith("image/"):
        raise ValidationError("Only image files allowed for logo", f"Got content type {file.content_type!r}")

    content = await file.read(settings.max_logo_bytes + 1)
    if len(content) > settings.max_logo_bytes:
        raise ValidationError("Logo file too large", f"Limit is {settings.max_logo_bytes} bytes")

    target_dir = settings.upload_root
    target_dir.mkdir(parents=True, exist_ok=True)
    name = _storage_name(file.filename)
    async with aiofiles.open(target_dir / name, "wb") as handle:
        await handle.write(content)
    logger.info("Stored logo upload %s (%d bytes)", name, len(content))
    return f"{PUBLIC_PREFIX}/{name}"


async def read_json_upload(file: UploadFile, limit: int) -> bytes:
    """Read an uploaded settings file fully into memory, bounded by ``limit``."""

    content = await file.read(limit + 1)
    if len(content) > limit:
        raise ValidationError("Settings file too large", f"Limit is {limit} bytes")
    return content
