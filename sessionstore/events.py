"""Structured session lifecycle events.

Events are logged to the ``sessionstore.events`` logger as one JSON document
per line. Consumers attach their own handlers (CloudWatch JSON formatter,
Firehose, structlog, etc.).

Usage::

    from . import events
    events.session_event(
        activity_id=events.Activity.CREATE,
        status_id=events.Status.SUCCESS,
        session_name="session",
        session_id=session.id,
        message="Session created",
    )
"""

from __future__ import annotations

import hashlib
import json
import logging
import time
from typing import Any

logger = logging.getLogger("sessionstore.events")


class Activity:
    CREATE = 1
    UPDATE = 2
    DELETE = 3
    LOAD = 4


class Status:
    SUCCESS = 1
    FAILURE = 2


class Severity:
    INFORMATIONAL = 1
    LOW = 2
    MEDIUM = 3
    HIGH = 4


_ACTIVITY_NAMES = {
    Activity.CREATE: "Create",
    Activity.UPDATE: "Update",
    Activity.DELETE: "Delete",
    Activity.LOAD: "Load",
}

_SEVERITY_NAMES = {
    Severity.INFORMATIONAL: "Informational",
    Severity.LOW: "Low",
    Severity.MEDIUM: "Medium",
    Severity.HIGH: "High",
}

_PRODUCT = {
    "name": "sessionstore",
    "version": "0.1.0",
}


def fingerprint(session_id: str) -> str:
    """Short, non-reversible tag for a session id, safe to log."""
    if not session_id:
        return ""
    return hashlib.sha256(session_id.encode()).hexdigest()[:12]


def emit(event: dict[str, Any]) -> None:
    """Log an event as JSON."""
    try:
        payload = json.dumps(event, default=str)
    except ValueError:
        logger.warning("Dropped unserializable session event: %r", event.get("message"))
        return
    logger.info(payload)


def session_event(
    *,
    activity_id: int,
    status_id: int,
    session_name: str,
    session_id: str = "",
    severity_id: int = Severity.INFORMATIONAL,
    message: str = "",
    error: BaseException | None = None,
) -> None:
    """Emit a session lifecycle event."""
    event: dict[str, Any] = {
        "activity_id": activity_id,
        "activity_name": _ACTIVITY_NAMES.get(activity_id, "Other"),
        "severity_id": severity_id,
        "severity": _SEVERITY_NAMES.get(severity_id, "Unknown"),
        "status_id": status_id,
        "status": "Success" if status_id == Status.SUCCESS else "Failure",
        "time": int(time.time() * 1000),
        "metadata": {"product": _PRODUCT},
        "session": {
            "name": session_name,
            "uid": fingerprint(session_id),
        },
        "message": message,
    }
    if error is not None:
        event["error"] = {"type": type(error).__name__, "message": str(error)}
    emit(event)
