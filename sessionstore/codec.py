"""Cookie codecs: how a session id is represented in the cookie value."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from itsdangerous import BadData, URLSafeTimedSerializer

from .errors import CodecError


@runtime_checkable
class IdentifierCodec(Protocol):
    """Transforms a session id to and from its cookie value."""

    def encode(self, name: str, session_id: str) -> str:
        ...

    def decode(self, name: str, value: str) -> str:
        ...


class PassthroughCodec:
    """Stores the session id in the cookie unaltered."""

    def encode(self, name: str, session_id: str) -> str:
        return session_id

    def decode(self, name: str, value: str) -> str:
        return value


class SignedCookieCodec:
    """Signs session ids with one or more rotating secrets.

    ``secrets`` is ordered newest first. New cookies are always signed with
    the newest secret; every secret is accepted on decode, so an old secret
    can stay in the list until the sessions it signed have expired.

    The cookie name is used as the signing salt, so a value signed for one
    cookie is rejected under another name.
    """

    def __init__(self, secrets: Sequence[str | bytes], max_age: int | None = None) -> None:
        if not secrets:
            raise ValueError("SignedCookieCodec requires at least one secret")
        # itsdangerous expects the newest key last.
        self._keys = list(reversed(secrets))
        self.max_age = max_age

    def _serializer(self, name: str) -> URLSafeTimedSerializer:
        return URLSafeTimedSerializer(self._keys, salt=name)

    def encode(self, name: str, session_id: str) -> str:
        return self._serializer(name).dumps(session_id)

    def decode(self, name: str, value: str) -> str:
        try:
            decoded = self._serializer(name).loads(value, max_age=self.max_age)
        except BadData as e:
            raise CodecError(f"invalid signed cookie {name!r}: {e}") from e
        if not isinstance(decoded, str):
            raise CodecError(f"invalid signed cookie {name!r}: payload is not a string")
        return decoded
