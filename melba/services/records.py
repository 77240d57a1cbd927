"""Persistence gateway shared by the submission pipeline and the admin API.

Every commit in the application goes through this module so that database
failures are translated into the :mod:`melba.errors` taxonomy in one place.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Iterable, Mapping

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import (
    DuplicateKeyError,
    MalformedIdentityError,
    NotFoundError,
    PersistenceFault,
)
from ..models import db

logger = logging.getLogger(__name__)


def _is_unique_violation(exc: IntegrityError) -> bool:
    original = getattr(exc, "orig", None)
    if getattr(original, "pgcode", None) == "23505":
        return True
    text = str(original or exc).lower()
    return "unique" in text or "duplicate" in text


def _commit(action: str, model) -> None:
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        if _is_unique_violation(exc):
            logger.info("[DB] %s on %s rejected: duplicate key", action, model.__tablename__)
            raise DuplicateKeyError() from exc
        logger.exception("[DB] %s on %s violated a constraint", action, model.__tablename__)
        raise PersistenceFault() from exc
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("[DB] %s on %s failed", action, model.__tablename__)
        raise PersistenceFault() from exc


def parse_record_id(raw: Any) -> str:
    """Return the canonical 32-hex form of ``raw`` or raise ``MalformedIdentityError``."""

    if raw is None or isinstance(raw, bool):
        raise MalformedIdentityError()
    try:
        return uuid.UUID(str(raw).strip()).hex
    except ValueError as exc:
        raise MalformedIdentityError() from exc


def create_record(model, values: Mapping[str, Any]):
    record = model(**dict(values))
    db.session.add(record)
    _commit("insert", model)
    logger.info("[DB] %s %s created", model.__tablename__, record.id)
    return record


def find_record(model, **filters):
    try:
        return model.query.filter_by(**filters).first()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("[DB] lookup on %s failed", model.__tablename__)
        raise PersistenceFault() from exc


def get_record(model, raw_id: Any, not_found_message: str | None = None, **scope):
    record_id = parse_record_id(raw_id)
    record = find_record(model, id=record_id, **scope)
    if record is None:
        raise NotFoundError(not_found_message)
    return record


def _order_clause(model, key: str):
    """``"-created_at"`` sorts newest first, ``"event_date"`` oldest first."""

    column = getattr(model, key.lstrip("-"))
    return column.desc() if key.startswith("-") else column.asc()


def list_records(model, order_by: str | Iterable[str] = "-created_at", **filters) -> list:
    keys = (order_by,) if isinstance(order_by, str) else tuple(order_by)
    try:
        query = model.query.filter_by(**filters)
        return query.order_by(*(_order_clause(model, key) for key in keys)).all()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("[DB] listing %s failed", model.__tablename__)
        raise PersistenceFault() from exc


def count_records(model, **filters) -> int:
    try:
        return model.query.filter_by(**filters).count()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("[DB] counting %s failed", model.__tablename__)
        raise PersistenceFault() from exc


def update_record(
    model,
    raw_id: Any,
    patch: Mapping[str, Any],
    not_found_message: str | None = None,
    **scope,
):
    record = get_record(model, raw_id, not_found_message, **scope)
    for key, value in patch.items():
        setattr(record, key, value)
    if hasattr(record, "touch"):
        record.touch()
    _commit("update", model)
    return record


def delete_record(model, raw_id: Any, not_found_message: str | None = None, **scope):
    """Delete and return the record so callers can clean up attached files."""

    record = get_record(model, raw_id, not_found_message, **scope)
    record_id = record.id
    db.session.delete(record)
    _commit("delete", model)
    logger.info("[DB] %s %s deleted", model.__tablename__, record_id)
    return record


def slug_taken(model, slug: str, exclude_id: str | None = None, **scope) -> bool:
    try:
        query = model.query.filter_by(slug=slug, **scope)
        if exclude_id is not None:
            query = query.filter(model.id != exclude_id)
        return db.session.query(query.exists()).scalar()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("[DB] slug lookup on %s failed", model.__tablename__)
        raise PersistenceFault() from exc


__all__ = [
    "parse_record_id",
    "create_record",
    "find_record",
    "get_record",
    "list_records",
    "count_records",
    "update_record",
    "delete_record",
    "slug_taken",
]
