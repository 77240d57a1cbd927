"""Generic pipeline shared by every public form.

``received -> validated -> persisted -> notification_attempted -> responded``

Validation failures and persistence faults exit early as ``rejected``. The
response only ever reflects the outcome of the database write; emails are
dispatched after the record is stored and cannot change the response.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from flask import current_app

from ..errors import DuplicateKeyError, PersistenceFault
from ..utils.validation import validate_payload
from .email_service import EmailRequest, dispatch, notification_address
from .records import create_record, find_record
from .submission_kinds import SubmissionKind

logger = logging.getLogger(__name__)

RECEIVED = "received"
VALIDATED = "validated"
PERSISTED = "persisted"
NOTIFICATION_ATTEMPTED = "notification_attempted"
RESPONDED = "responded"
REJECTED = "rejected"


@dataclass
class SubmissionOutcome:
    status: int
    body: dict
    state: str
    record: Any = None
    history: list[str] = field(default_factory=list)


def _success_body(kind: SubmissionKind, record) -> dict:
    organization = current_app.config.get("ORGANIZATION_NAME", "")
    body = {
        "success": True,
        "message": kind.success_message.format(organization=organization),
    }
    # Unique kinds answer identically for new and repeated submissions.
    if kind.unique_field is None:
        body["id"] = record.id
    return body


def _notification_requests(kind: SubmissionKind, record, values: Mapping[str, Any]) -> list[EmailRequest]:
    organization = current_app.config.get("ORGANIZATION_NAME", "")
    submitter = values.get("email")
    display_name = kind.display_name(values)
    context = {
        "kind_title": kind.title,
        "display_name": display_name,
        "rows": kind.labelled_values(values),
        "record_id": record.id,
        "submitted_at": record.created_at,
        "organization": organization,
    }
    return [
        EmailRequest(
            subject=f"New {kind.title.lower()} from {display_name}",
            recipients=(notification_address(),),
            template_prefix=kind.admin_template,
            context=context,
            reply_to=submitter,
        ),
        EmailRequest(
            subject=kind.receipt_subject.format(
                title=kind.title.lower(), organization=organization
            ),
            recipients=(submitter,),
            template_prefix=kind.receipt_template,
            context=context,
        ),
    ]


def _find_existing(kind: SubmissionKind, values: Mapping[str, Any]):
    return find_record(kind.model, **{kind.unique_field: values[kind.unique_field]})


def _notify(kind: SubmissionKind, record, values: Mapping[str, Any]) -> None:
    try:
        dispatch(_notification_requests(kind, record, values))
    except Exception:
        logger.exception("[SUBMIT] %s %s: notification dispatch failed", kind.name, record.id)


def process_submission(kind: SubmissionKind, payload: Mapping[str, Any] | None) -> SubmissionOutcome:
    """Run ``payload`` through validation, persistence and notification."""

    history = [RECEIVED]

    result = validate_payload(kind.fields, payload)
    if not result.ok:
        logger.info("[SUBMIT] %s rejected: %s", kind.name, result.message)
        history.append(REJECTED)
        return SubmissionOutcome(
            400,
            {"success": False, "message": result.message, "errors": result.errors},
            REJECTED,
            history=history,
        )
    history.append(VALIDATED)
    values = result.values

    try:
        if kind.unique_field is not None:
            existing = _find_existing(kind, values)
            if existing is not None:
                logger.info("[SUBMIT] %s: repeat submission ignored", kind.name)
                history.append(RESPONDED)
                return SubmissionOutcome(200, _success_body(kind, existing), RESPONDED, existing, history)

        try:
            record = create_record(kind.model, values)
        except DuplicateKeyError as exc:
            if kind.unique_field is None:
                history.append(REJECTED)
                return SubmissionOutcome(400, exc.to_dict(), REJECTED, history=history)
            existing = _find_existing(kind, values)
            logger.info("[SUBMIT] %s: concurrent repeat submission ignored", kind.name)
            history.append(RESPONDED)
            return SubmissionOutcome(200, _success_body(kind, existing), RESPONDED, existing, history)
    except PersistenceFault as exc:
        logger.error("[SUBMIT] %s could not be stored or looked up", kind.name)
        history.append(REJECTED)
        return SubmissionOutcome(500, exc.to_dict(), REJECTED, history=history)
    history.append(PERSISTED)

    _notify(kind, record, values)
    history.append(NOTIFICATION_ATTEMPTED)

    body = _success_body(kind, record)
    history.append(RESPONDED)
    logger.info("[SUBMIT] %s %s stored", kind.name, record.id)
    return SubmissionOutcome(200, body, RESPONDED, record, history)


__all__ = [
    "SubmissionOutcome",
    "process_submission",
    "RECEIVED",
    "VALIDATED",
    "PERSISTED",
    "NOTIFICATION_ATTEMPTED",
    "RESPONDED",
    "REJECTED",
]
