"""Columns and helpers shared by every persisted record."""

from __future__ import annotations

import uuid
from datetime import date, datetime

from slugify import slugify

from . import db


def new_record_id() -> str:
    """Return an opaque, unique record identifier (32 lowercase hex chars)."""

    return uuid.uuid4().hex


def camelize(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.capitalize() for part in tail)


class RecordMixin:
    """Server-assigned identity and creation timestamp."""

    id = db.Column(db.String(32), primary_key=True, default=new_record_id)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    def to_dict(self) -> dict:
        """Serialize using the camelCase keys the public forms submit."""

        payload = {}
        for column in self.__table__.columns:
            value = getattr(self, column.key)
            if isinstance(value, (datetime, date)):
                value = value.isoformat()
            payload[camelize(column.key)] = value
        return payload

    def __repr__(self) -> str:  # pragma: no cover - string helper
        return f"<{type(self).__name__} {self.id}>"


class TimestampedMixin(RecordMixin):
    """Records whose content can change after creation."""

    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()


class SluggedMixin:
    """Records reachable through a human readable URL segment."""

    SLUG_MAX_LENGTH = 190

    @classmethod
    def build_slug(cls, text: str | None) -> str:
        """Return a normalized slug for ``text`` (empty when nothing survives)."""

        return slugify(text or "")[: cls.SLUG_MAX_LENGTH].strip("-")
