"""Build a configured SessionStore from Settings.

Environment variables (recommended for production):
    SESSION_SECRET=<random string>
    SESSION_HTTPS_ONLY=true
    SESSION_BACKEND=dynamodb      # or s3
    SESSION_DYNAMODB_TABLE=sessions
"""

from __future__ import annotations

import logging

from .codec import SignedCookieCodec
from .config import Settings, get_settings
from .storage import DynamoDBStorage, InMemoryStorage, S3Storage, SessionStorage
from .store import SessionStore

logger = logging.getLogger(__name__)


def create_storage(settings: Settings) -> SessionStorage:
    """Choose the storage backend named by ``settings.backend``."""
    if settings.backend == "s3":
        if not settings.s3_bucket:
            raise ValueError("SESSION_S3_BUCKET is required for the s3 backend")
        return S3Storage(
            bucket=settings.s3_bucket,
            prefix=settings.s3_prefix,
            endpoint_url=settings.s3_endpoint,
            region_name=settings.region,
        )
    if settings.backend == "dynamodb":
        return DynamoDBStorage(
            table_name=settings.dynamodb_table,
            max_age=settings.max_age,
            endpoint_url=settings.dynamodb_endpoint,
            region_name=settings.region,
        )
    return InMemoryStorage()


def create_store(settings: Settings | None = None) -> SessionStore:
    s = settings or get_settings()
    if s.secret == "change-me-in-production":
        logger.warning("SESSION_SECRET is not set; session cookies are signed with the default secret")
    logger.info("Session storage backend: %s", s.backend)
    return SessionStore(
        create_storage(s),
        options=s.session_options(),
        codec=SignedCookieCodec(s.secrets, max_age=s.signature_max_age),
    )
