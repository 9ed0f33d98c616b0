"""Tests for settings and store construction."""

import logging

import pytest

from sessionstore.codec import SignedCookieCodec
from sessionstore.config import Settings, get_settings, override_settings
from sessionstore.factory import create_storage, create_store
from sessionstore.storage import DynamoDBStorage, InMemoryStorage, S3Storage


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("SESSION_COOKIE_NAME", "sid")
    monkeypatch.setenv("SESSION_SECRET", "new-secret")
    monkeypatch.setenv("SESSION_PREVIOUS_SECRETS", '["old-secret"]')
    monkeypatch.setenv("SESSION_HTTPS_ONLY", "true")
    monkeypatch.setenv("SESSION_BACKEND", "s3")
    monkeypatch.setenv("SESSION_S3_BUCKET", "my-bucket")

    s = Settings()

    assert s.cookie_name == "sid"
    assert s.secrets == ["new-secret", "old-secret"]
    assert s.https_only is True
    assert s.backend == "s3"
    assert s.s3_bucket == "my-bucket"


def test_session_options_from_settings():
    s = Settings(max_age=600, path="/app", domain="example.com", https_only=True, same_site="strict")
    options = s.session_options()

    assert options.max_age == 600
    assert options.path == "/app"
    assert options.domain == "example.com"
    assert options.secure is True
    assert options.same_site == "strict"


def test_get_settings_uses_override(test_settings):
    assert get_settings() is test_settings


def test_override_none_resets():
    override_settings(Settings(secret="a"))
    override_settings(None)
    assert get_settings().secret == "change-me-in-production"
    override_settings(None)


@pytest.mark.parametrize(
    "backend,kwargs,expected",
    [
        ("memory", {}, InMemoryStorage),
        ("s3", {"s3_bucket": "bucket"}, S3Storage),
        ("dynamodb", {}, DynamoDBStorage),
    ],
)
def test_create_storage_selects_backend(backend, kwargs, expected):
    assert isinstance(create_storage(Settings(backend=backend, **kwargs)), expected)


def test_s3_backend_requires_bucket():
    with pytest.raises(ValueError, match="SESSION_S3_BUCKET"):
        create_storage(Settings(backend="s3"))


def test_create_store_signs_cookies(test_settings):
    store = create_store()

    assert isinstance(store.codec, SignedCookieCodec)
    assert isinstance(store.storage, InMemoryStorage)
    assert store.options.max_age == test_settings.max_age


def test_create_store_warns_on_default_secret(caplog):
    with caplog.at_level(logging.WARNING, logger="sessionstore.factory"):
        create_store(Settings())
    assert "SESSION_SECRET is not set" in caplog.text
