"""Shared fixtures for the sessionstore test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from sessionstore.codec import SignedCookieCodec
from sessionstore.config import Settings, override_settings
from sessionstore.session import SessionOptions
from sessionstore.storage import InMemoryStorage
from sessionstore.store import SessionStore


# ── Settings ──────────────────────────────────────────────────────────────


@pytest.fixture
def test_settings() -> Iterator[Settings]:
    s = Settings(secret="test-secret-key-for-sessions", backend="memory")
    override_settings(s)
    yield s
    override_settings(None)


# ── Store ─────────────────────────────────────────────────────────────────


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def options() -> SessionOptions:
    return SessionOptions(max_age=3600)


@pytest.fixture
def store(storage, options) -> SessionStore:
    return SessionStore(storage, options=options)


@pytest.fixture
def signed_store(storage, options) -> SessionStore:
    return SessionStore(
        storage,
        options=options,
        codec=SignedCookieCodec(["test-secret"]),
    )
