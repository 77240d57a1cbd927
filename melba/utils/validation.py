"""Field-level acceptance rules applied to raw request input.

Every public form and every admin content form is described by a tuple of
:class:`FieldSpec`. :func:`validate_payload` turns the raw mapping (JSON body
or ``request.form``) into normalized column values or field-level messages.
It never touches the database.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from ..errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")

TEXT = "text"
EMAIL = "email"
INTEGER = "integer"
LIST = "list"
DATETIME = "datetime"
BOOLEAN = "boolean"


def snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def _sentence(label: str) -> str:
    return label[:1].upper() + label[1:]


def join_labels(labels: list[str]) -> str:
    """``["first name", "email"]`` -> ``"First name and email"``."""

    if not labels:
        return ""
    if len(labels) == 1:
        text = labels[0]
    elif len(labels) == 2:
        text = f"{labels[0]} and {labels[1]}"
    else:
        text = f"{', '.join(labels[:-1])}, and {labels[-1]}"
    return _sentence(text)


@dataclass(frozen=True)
class FieldSpec:
    """Declarative description of one submitted field."""

    name: str
    label: str
    type: str = TEXT
    required: bool = False
    column: str | None = None
    min_value: int | None = None
    max_value: int | None = None
    choices: tuple[str, ...] = ()
    max_length: int | None = None
    empty_message: str | None = None

    @property
    def attribute(self) -> str:
        return self.column or snake_case(self.name)


@dataclass
class ValidationResult:
    values: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)
    message: str = ""

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        if self.errors:
            raise ValidationError(self.message, self.errors)


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and bool(EMAIL_PATTERN.match(value))


def _read(raw: Mapping[str, Any], spec: FieldSpec) -> Any:
    if spec.type == LIST and hasattr(raw, "getlist"):
        values = raw.getlist(spec.name) or raw.getlist(f"{spec.name}[]")
        if values:
            return values
        return None
    value = raw.get(spec.name)
    if value is None and spec.type == LIST:
        value = raw.get(f"{spec.name}[]")
    return value


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item).strip() for item in value if str(item).strip())
    return str(value).strip()


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    elif not isinstance(value, (list, tuple)):
        value = [value]
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (list, tuple)):
        return not _as_list(value)
    if isinstance(value, str):
        return not value.strip()
    return False


def _parse_integer(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("booleans are not numbers")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("not a whole number")
        return int(value)
    return int(str(value).strip())


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _parse_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _empty_value(spec: FieldSpec) -> Any:
    if spec.type == LIST:
        return []
    if spec.type in {INTEGER, DATETIME}:
        return None
    if spec.type == BOOLEAN:
        return False
    return ""


def _check(spec: FieldSpec, value: Any) -> tuple[Any, str | None]:
    label = _sentence(spec.label)

    if spec.type == LIST:
        items = _as_list(value)
        if spec.required and not items:
            return items, spec.empty_message or f"Please select at least one {spec.label}."
        return items, None

    if spec.type == EMAIL:
        # The raw value is matched so surrounding whitespace is rejected too.
        if not is_valid_email(value):
            return value, "Please enter a valid email address."
        return value.lower(), None

    if spec.type == INTEGER:
        try:
            number = _parse_integer(value)
        except (TypeError, ValueError):
            return value, f"{label} must be a whole number."
        if spec.min_value is not None and spec.max_value is not None:
            if not spec.min_value <= number <= spec.max_value:
                return number, f"{label} must be between {spec.min_value} and {spec.max_value}."
        elif spec.min_value is not None and number < spec.min_value:
            return number, f"{label} must be at least {spec.min_value}."
        elif spec.max_value is not None and number > spec.max_value:
            return number, f"{label} cannot exceed {spec.max_value}."
        return number, None

    if spec.type == DATETIME:
        try:
            return _parse_datetime(value), None
        except (TypeError, ValueError):
            return value, f"Invalid {spec.label} format."

    if spec.type == BOOLEAN:
        return _parse_boolean(value), None

    text = _as_text(value)
    if spec.max_length is not None and len(text) > spec.max_length:
        return text, f"{label} cannot exceed {spec.max_length} characters."
    if spec.choices and text not in spec.choices:
        return text, f"{label} must be one of: {', '.join(spec.choices)}."
    return text, None


def validate_payload(
    fields: Iterable[FieldSpec],
    raw: Mapping[str, Any] | None,
    *,
    partial: bool = False,
) -> ValidationResult:
    """Validate ``raw`` against ``fields``.

    Missing required fields short-circuit with a single combined message.
    With ``partial=True`` (content updates) blank fields are left out of
    ``values`` so the stored value is kept.
    """

    raw = raw if raw is not None else {}
    fields = tuple(fields)
    result = ValidationResult()

    if not partial:
        missing = [
            spec
            for spec in fields
            if spec.required and spec.type != LIST and _is_blank(_read(raw, spec))
        ]
        if missing:
            labels = [spec.label for spec in missing]
            verb = "is" if len(labels) == 1 else "are"
            result.message = f"{join_labels(labels)} {verb} required."
            result.errors = {spec.name: f"{_sentence(spec.label)} is required." for spec in missing}
            return result

    messages: list[str] = []
    for spec in fields:
        value = _read(raw, spec)
        if _is_blank(value) and not (spec.type == LIST and spec.required and not partial):
            if not partial:
                result.values[spec.attribute] = _empty_value(spec)
            continue

        normalized, error = _check(spec, value)
        if error:
            result.errors[spec.name] = error
            messages.append(error)
            continue
        result.values[spec.attribute] = normalized

    result.message = " ".join(messages)
    return result


__all__ = [
    "FieldSpec",
    "ValidationResult",
    "validate_payload",
    "is_valid_email",
    "join_labels",
    "snake_case",
    "TEXT",
    "EMAIL",
    "INTEGER",
    "LIST",
    "DATETIME",
    "BOOLEAN",
]
