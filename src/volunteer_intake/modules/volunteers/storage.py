"""
Temporary Photo Storage

Passport photos are written to the upload directory only for as long as
it takes to email them to the administrator.
"""

import asyncio
import logging
import os
import re
import secrets
import time
from pathlib import Path

from fastapi import UploadFile

from volunteer_intake.core.errors import PhotoTooLargeError, ValidationError
from volunteer_intake.modules.volunteers.schemas import PhotoUpload

logger = logging.getLogger(__name__)

MISSING_PHOTO_MESSAGE = "No passport photo uploaded."

_SAFE_EXTENSION = re.compile(r"^\.[a-z0-9]{1,10}$")


def _photo_extension(filename: str) -> str:
    ext = os.path.splitext(filename)[1].lower()
    return ext if _SAFE_EXTENSION.match(ext) else ""


def temp_photo_name(filename: str) -> str:
    """Timestamped, collision-resistant name for a stored photo."""
    return f"volunteer-{int(time.time() * 1000)}-{secrets.token_hex(4)}{_photo_extension(filename)}"


async def save_photo(upload: UploadFile | None, upload_dir: Path, max_bytes: int) -> PhotoUpload:
    """
    Validate an uploaded photo and write it to temporary storage.

    Nothing is written unless the photo is present, non-empty, and within
    the size cap.

    Args:
        upload: The multipart file field, or None if it was omitted
        upload_dir: Directory for temporary files
        max_bytes: Maximum accepted photo size

    Returns:
        Metadata of the stored photo

    Raises:
        ValidationError: If no photo was uploaded or it is empty
        PhotoTooLargeError: If the photo exceeds max_bytes
    """
    if upload is None or not upload.filename:
        raise ValidationError(MISSING_PHOTO_MESSAGE)

    contents = await upload.read(max_bytes + 1)
    if not contents:
        raise ValidationError(MISSING_PHOTO_MESSAGE)
    if len(contents) > max_bytes:
        raise PhotoTooLargeError(max_bytes)

    upload_dir.mkdir(parents=True, exist_ok=True)
    path = upload_dir / temp_photo_name(upload.filename)
    await asyncio.to_thread(path.write_bytes, contents)
    logger.info(f"Stored temp photo {path} ({len(contents)} bytes)")

    return PhotoUpload(
        path=str(path),
        filename=upload.filename,
        content_type=upload.content_type,
        size=len(contents),
    )


async def read_photo(photo: PhotoUpload) -> bytes:
    return await asyncio.to_thread(Path(photo.path).read_bytes)


def discard_photo(photo: PhotoUpload) -> bool:
    """
    Delete a stored photo, logging instead of raising on failure.

    Returns:
        True if the file was removed
    """
    try:
        Path(photo.path).unlink()
    except FileNotFoundError:
        logger.warning(f"Temp photo already gone: {photo.path}")
        return False
    except OSError as e:
        logger.error(f"Error deleting temp photo {photo.path}: {e}")
        return False

    logger.info(f"Deleted temp photo: {photo.path}")
    return True
