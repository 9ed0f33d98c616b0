"""Tests for structured session lifecycle events."""

import json
import logging

import pytest
from starlette.datastructures import MutableHeaders

from sessionstore import events
from sessionstore.events import Activity, Severity, Status, emit, fingerprint, session_event

from helpers import SESSION_NAME, make_request


def _events(caplog) -> list[dict]:
    return [json.loads(r.getMessage()) for r in caplog.records if r.name == "sessionstore.events"]


def test_fingerprint_hides_id():
    tag = fingerprint("7f0c3a52-8b0e-4c55-9a39-36c8c1f3f0d2")

    assert len(tag) == 12
    assert "7f0c3a52" not in tag
    assert fingerprint("") == ""


def test_session_event_shape(caplog):
    with caplog.at_level(logging.INFO, logger="sessionstore.events"):
        session_event(
            activity_id=Activity.DELETE,
            status_id=Status.FAILURE,
            severity_id=Severity.MEDIUM,
            session_name="session",
            session_id="abc",
            message="Session could not be deleted",
            error=RuntimeError("boom"),
        )

    [event] = _events(caplog)
    assert event["activity_name"] == "Delete"
    assert event["status"] == "Failure"
    assert event["severity"] == "Medium"
    assert event["session"] == {"name": "session", "uid": fingerprint("abc")}
    assert event["error"] == {"type": "RuntimeError", "message": "boom"}
    assert event["metadata"]["product"]["name"] == "sessionstore"


def test_emit_falls_back_to_str(caplog):
    with caplog.at_level(logging.INFO, logger="sessionstore.events"):
        emit({"message": "x", "obj": object()})

    [event] = _events(caplog)
    assert event["obj"].startswith("<object object")


@pytest.mark.asyncio
async def test_store_emits_create_then_update(store, caplog):
    with caplog.at_level(logging.INFO, logger="sessionstore.events"):
        session = await store.new(make_request(), SESSION_NAME)
        await store.save(make_request(), MutableHeaders(), session)
        session.values["a"] = 1
        await store.save(make_request(), MutableHeaders(), session)

    names = [e["activity_name"] for e in _events(caplog)]
    assert names == ["Create", "Update"]


@pytest.mark.asyncio
async def test_store_never_logs_raw_ids(store, caplog):
    with caplog.at_level(logging.DEBUG):
        session = await store.new(make_request(), SESSION_NAME)
        await store.save(make_request(), MutableHeaders(), session)
        session.invalidate()
        await store.save(make_request(), MutableHeaders(), session)

    assert session.id not in caplog.text
    assert events.fingerprint(session.id) in caplog.text
