"""Domain helpers for bug reports: entity, status values, payload validation."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

STATUS_OPEN = "open"
STATUS_IN_PROGRESS = "in-progress"
STATUS_RESOLVED = "resolved"
BUG_STATUSES = (STATUS_OPEN, STATUS_IN_PROGRESS, STATUS_RESOLVED)
DEFAULT_STATUS = STATUS_OPEN

EDITABLE_FIELDS = ("title", "description", "status")


class BugError(Exception):
    """Base exception for bug workflow."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationGap(BugError):
    """Raised when a payload is malformed or misses a required field."""


class StoreFailure(BugError):
    """Raised when the record store is unreachable or rejects an operation."""


@dataclass(frozen=True)
class BugReport:
    id: str
    title: str
    description: str
    status: str
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


def is_valid_status(value: Any) -> bool:
    return isinstance(value, str) and value in BUG_STATUSES


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops the offset)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _require_mapping(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationGap("Request body must be a JSON object")
    return payload


def _check_text(payload: Mapping[str, Any], field: str) -> str:
    value = payload[field]
    if not isinstance(value, str):
        raise ValidationGap(f"Field '{field}' must be a string")
    return value


def clean_create_payload(payload: Any) -> dict:
    """
    Reduce a create payload to the fields a new bug accepts.

    `status` and `id` are ignored: new bugs always start as open and the
    store assigns identity.
    """
    data = _require_mapping(payload)
    if data.get("title") is None:
        raise ValidationGap("Field 'title' is required")
    title = _check_text(data, "title")
    if not title.strip():
        raise ValidationGap("Field 'title' is required")
    description = ""
    if data.get("description") is not None:
        description = _check_text(data, "description")
    return {"title": title, "description": description, "status": DEFAULT_STATUS}


def clean_update_patch(payload: Any) -> dict:
    """Reduce an update payload to the editable fields it carries; no body means no changes."""
    data = _require_mapping({} if payload is None else payload)
    patch: dict = {}
    for field in EDITABLE_FIELDS:
        if field not in data:
            continue
        if field == "description" and data[field] is None:
            patch[field] = ""
            continue
        if data[field] is None:
            raise ValidationGap(f"Field '{field}' cannot be null")
        patch[field] = _check_text(data, field)
    if "title" in patch and not patch["title"].strip():
        raise ValidationGap("Field 'title' cannot be empty")
    if "status" in patch and not is_valid_status(patch["status"]):
        allowed = ", ".join(BUG_STATUSES)
        raise ValidationGap(f"Invalid status '{patch['status']}' (expected one of: {allowed})")
    return patch
