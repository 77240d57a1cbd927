"""Local disk storage for images attached to posts, events and programs."""

from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path
from typing import Iterable

from flask import current_app
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..errors import UploadError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}
ALLOWED_IMAGE_MIME_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}
PUBLIC_PREFIX = "/uploads/"


def has_upload(file_storage: FileStorage | None) -> bool:
    return bool(file_storage and file_storage.filename)


def validate_image(
    file_storage: FileStorage | None,
    *,
    max_bytes: int,
    allowed_extensions: Iterable[str] = ALLOWED_IMAGE_EXTENSIONS,
    allowed_mime_types: Iterable[str] = ALLOWED_IMAGE_MIME_TYPES,
) -> tuple[int, str]:
    """Validate the uploaded image and return ``(size, extension)``."""

    if not has_upload(file_storage):
        raise UploadError("Please choose an image file to upload.")

    filename = secure_filename(file_storage.filename)
    if not filename:
        raise UploadError("Invalid file name.")

    extension = Path(filename).suffix.lower()
    if extension not in set(allowed_extensions):
        raise UploadError("Only image files are allowed (JPG, PNG, GIF or WEBP).")

    mimetype = (file_storage.mimetype or "").lower()
    if mimetype not in set(allowed_mime_types):
        raise UploadError("Only image files are allowed (JPG, PNG, GIF or WEBP).")

    file_storage.stream.seek(0, 2)
    size = file_storage.stream.tell()
    file_storage.stream.seek(0)

    if size > max_bytes:
        max_mb = max_bytes / (1024 * 1024)
        raise UploadError(f"Image is too large. Limit: {max_mb:.0f}MB.")

    return size, extension


def upload_folder() -> Path:
    folder = Path(current_app.config["UPLOAD_FOLDER"])
    folder.mkdir(parents=True, exist_ok=True)
    return folder


def save_image(file_storage: FileStorage) -> str:
    """Store the image under a random name and return its public path."""

    _, extension = validate_image(
        file_storage, max_bytes=int(current_app.config.get("MAX_IMAGE_BYTES", 5 * 1024 * 1024))
    )
    stored_name = f"{uuid.uuid4().hex}{extension}"
    destination = upload_folder() / stored_name
    try:
        file_storage.save(destination)
    except OSError as exc:
        logger.exception("[UPLOAD] could not write %s", destination)
        raise UploadError("Could not store the uploaded image.") from exc
    logger.info("[UPLOAD] stored %s", stored_name)
    return f"{PUBLIC_PREFIX}{stored_name}"


def resolve_upload(public_path: str | None) -> Path | None:
    """Map ``/uploads/<name>`` to its file on disk; anything else is ignored."""

    if not public_path or not public_path.startswith(PUBLIC_PREFIX):
        return None
    name = secure_filename(public_path[len(PUBLIC_PREFIX):])
    if not name:
        return None
    return Path(current_app.config["UPLOAD_FOLDER"]) / name


def delete_upload(public_path: str | None) -> bool:
    """Remove a stored image. Never raises; returns whether a file was removed."""

    target = resolve_upload(public_path)
    if target is None:
        return False
    try:
        os.remove(target)
    except FileNotFoundError:
        logger.info("[UPLOAD] %s already gone", target.name)
        return False
    except OSError:
        logger.warning("[UPLOAD] could not delete %s", target, exc_info=True)
        return False
    logger.info("[UPLOAD] deleted %s", target.name)
    return True


__all__ = [
    "ALLOWED_IMAGE_EXTENSIONS",
    "ALLOWED_IMAGE_MIME_TYPES",
    "has_upload",
    "validate_image",
    "save_image",
    "resolve_upload",
    "delete_upload",
]
