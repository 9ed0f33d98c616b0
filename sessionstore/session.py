"""Session state and the cookie that carries its id."""

from __future__ import annotations

import time
from email.utils import formatdate
from typing import Any, Literal

from pydantic import BaseModel

MAX_AGE = 30 * 24 * 3600  # 30 days


class SessionOptions(BaseModel):
    """Attributes of the cookie a session id travels in.

    ``max_age < 0`` marks the session for deletion. ``max_age == 0`` gives
    a browser-session cookie with no Max-Age attribute.
    """

    path: str = "/"
    domain: str = ""
    max_age: int = MAX_AGE
    secure: bool = False
    http_only: bool = True
    same_site: Literal["lax", "strict", "none"] | None = "lax"

    def cookie_header(self, name: str, value: str) -> str:
        """Render a Set-Cookie header value for ``name=value``."""
        parts = [f"{name}={value}"]
        if self.path:
            parts.append(f"Path={self.path}")
        if self.domain:
            parts.append(f"Domain={self.domain}")
        if self.max_age < 0:
            parts.append("Max-Age=0")
            parts.append(f"Expires={formatdate(1, usegmt=True)}")
        elif self.max_age > 0:
            parts.append(f"Max-Age={self.max_age}")
            parts.append(f"Expires={formatdate(time.time() + self.max_age, usegmt=True)}")
        if self.secure:
            parts.append("Secure")
        if self.http_only:
            parts.append("HttpOnly")
        if self.same_site:
            parts.append(f"SameSite={self.same_site}")
        return "; ".join(parts)


class Session:
    """The state of one client across requests.

    Attributes:
        name: Cookie name the session id is carried under.
        values: Session data. Keys must be strings for byte-oriented storage.
        options: Cookie options, copied from the store defaults.
        is_new: ``True`` until values are loaded from storage or saved.
    """

    def __init__(
        self,
        name: str,
        *,
        options: SessionOptions | None = None,
        values: dict[Any, Any] | None = None,
        is_new: bool = True,
    ) -> None:
        self.name = name
        self.options = options if options is not None else SessionOptions()
        self.values: dict[Any, Any] = values if values is not None else {}
        self.is_new = is_new
        self._id = ""

    @property
    def id(self) -> str:
        return self._id

    @id.setter
    def id(self, value: str) -> None:
        if self._id and value != self._id:
            raise ValueError("session id cannot change once assigned")
        self._id = value

    @property
    def invalidated(self) -> bool:
        return self.options.max_age < 0

    def invalidate(self) -> None:
        """Mark the session for deletion on the next save."""
        self.values.clear()
        self.options.max_age = -1

    def __repr__(self) -> str:
        return f"Session(name={self.name!r}, is_new={self.is_new}, keys={len(self.values)})"
