"""Session id generators."""

from __future__ import annotations

import secrets
import uuid
from collections.abc import Callable

IdentifierGenerator = Callable[[], str]


def uuid_id_generator() -> str:
    """Random UUID4 in canonical form. The default generator."""
    return str(uuid.uuid4())


def token_id_generator() -> str:
    """256 bits of URL-safe randomness."""
    return secrets.token_urlsafe(32)
