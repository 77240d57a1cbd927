"""Create, update and delete blog posts, events and programs.

Images are written to disk before the database write and removed again when
that write fails, so a rejected request never leaves an orphaned upload.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from werkzeug.datastructures import FileStorage

from ..errors import DuplicateKeyError, MelbaError
from ..models import Post, Program
from ..models.blog import TITLE_MAX_LENGTH
from ..models.program import PROGRAM_STATUSES
from ..utils.validation import DATETIME, FieldSpec, validate_payload
from .records import (
    create_record,
    delete_record,
    get_record,
    list_records,
    slug_taken,
    update_record,
)
from .uploads import delete_upload, has_upload, save_image

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentKind:
    name: str
    model: Any
    label: str
    slug_label: str
    response_key: str
    fields: tuple[FieldSpec, ...]
    post_type: str | None = None
    order_by: str = "-created_at"

    @property
    def scope(self) -> dict:
        return {"type": self.post_type} if self.post_type else {}

    @property
    def slug_message(self) -> str:
        return f"{self.slug_label} URL (slug) already exists. Please choose a different one."

    @property
    def not_found_message(self) -> str:
        return f"{self.label} not found."


_TITLE = FieldSpec("title", "title", required=True, max_length=TITLE_MAX_LENGTH)
_SLUG = FieldSpec("slug", "slug")

BLOG = ContentKind(
    name="blog",
    model=Post,
    label="Blog post",
    slug_label="Blog",
    response_key="post",
    post_type="blog",
    fields=(_TITLE, _SLUG, FieldSpec("content", "content", required=True)),
)

EVENT = ContentKind(
    name="event",
    model=Post,
    label="Event",
    slug_label="Event",
    response_key="event",
    post_type="event",
    order_by="event_date",
    fields=(
        _TITLE,
        _SLUG,
        FieldSpec("eventDate", "event date", type=DATETIME, required=True),
        FieldSpec("location", "location", required=True, max_length=100),
        FieldSpec("content", "content"),
    ),
)

PROGRAM = ContentKind(
    name="program",
    model=Program,
    label="Program",
    slug_label="Program",
    response_key="program",
    fields=(
        FieldSpec("title", "title", required=True, max_length=150),
        _SLUG,
        FieldSpec("shortDescription", "short description", required=True),
        FieldSpec("fullDescription", "full description"),
        FieldSpec("ageRange", "age range", max_length=60),
        FieldSpec("status", "status", choices=PROGRAM_STATUSES),
    ),
)


def _is_checked(value: Any) -> bool:
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}


def _unique_slug(kind: ContentKind, base: str, exclude_id: str | None = None) -> str:
    candidate = base
    suffix = 1
    while slug_taken(kind.model, candidate, exclude_id=exclude_id, **kind.scope):
        suffix += 1
        candidate = f"{base}-{suffix}"[: kind.model.SLUG_MAX_LENGTH + 10]
    return candidate


def _resolve_new_slug(kind: ContentKind, requested: str | None, title: str) -> str:
    slug = kind.model.build_slug(requested)
    if slug:
        if slug_taken(kind.model, slug, **kind.scope):
            raise DuplicateKeyError(kind.slug_message)
        return slug
    return _unique_slug(kind, kind.model.build_slug(title) or kind.name)


def _store_image(image_file: FileStorage | None) -> str | None:
    if not has_upload(image_file):
        return None
    return save_image(image_file)


def list_content(kind: ContentKind) -> list:
    return list_records(kind.model, kind.order_by, **kind.scope)


def get_content(kind: ContentKind, raw_id: Any):
    return get_record(kind.model, raw_id, kind.not_found_message, **kind.scope)


def create_content(
    kind: ContentKind,
    form: Mapping[str, Any] | None,
    image_file: FileStorage | None = None,
):
    result = validate_payload(kind.fields, form)
    result.raise_for_errors()

    values = dict(result.values)
    values.update(kind.scope)
    values["slug"] = _resolve_new_slug(kind, values.get("slug"), values["title"])
    if "status" in values and not values["status"]:
        values.pop("status")

    image_path = _store_image(image_file)
    if image_path:
        values["image"] = image_path

    try:
        record = create_record(kind.model, values)
    except MelbaError as exc:
        if image_path:
            delete_upload(image_path)
        if isinstance(exc, DuplicateKeyError):
            raise DuplicateKeyError(kind.slug_message) from exc
        raise
    logger.info("[CONTENT] %s %s created (slug=%s)", kind.name, record.id, record.slug)
    return record


def update_content(
    kind: ContentKind,
    raw_id: Any,
    form: Mapping[str, Any] | None,
    image_file: FileStorage | None = None,
):
    """Apply a partial update; blank fields keep their stored value."""

    form = form if form is not None else {}
    record = get_content(kind, raw_id)
    record_id = record.id
    old_image = record.image

    result = validate_payload(kind.fields, form, partial=True)
    result.raise_for_errors()
    values = dict(result.values)

    if "slug" in values:
        slug = kind.model.build_slug(values["slug"])
        if not slug or slug == record.slug:
            values.pop("slug")
        elif slug_taken(kind.model, slug, exclude_id=record_id, **kind.scope):
            raise DuplicateKeyError(kind.slug_message)
        else:
            values["slug"] = slug

    new_image = _store_image(image_file)
    clear_image = _is_checked(form.get("deleteExistingImage"))
    if new_image:
        values["image"] = new_image
    elif clear_image:
        values["image"] = None

    try:
        record = update_record(kind.model, record_id, values, kind.not_found_message, **kind.scope)
    except MelbaError as exc:
        if new_image:
            delete_upload(new_image)
        if isinstance(exc, DuplicateKeyError):
            raise DuplicateKeyError(kind.slug_message) from exc
        raise

    if (new_image or clear_image) and old_image:
        delete_upload(old_image)
    logger.info("[CONTENT] %s %s updated", kind.name, record_id)
    return record


def delete_content(kind: ContentKind, raw_id: Any):
    record = delete_record(kind.model, raw_id, kind.not_found_message, **kind.scope)
    if record.image:
        delete_upload(record.image)
    return record


__all__ = [
    "ContentKind",
    "BLOG",
    "EVENT",
    "PROGRAM",
    "list_content",
    "get_content",
    "create_content",
    "update_content",
    "delete_content",
]
