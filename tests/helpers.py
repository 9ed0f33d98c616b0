"""Request and Set-Cookie helpers shared by the test modules."""

from __future__ import annotations

from starlette.datastructures import MutableHeaders
from starlette.requests import Request

SESSION_NAME = "session"


def make_request(cookies: dict[str, str] | None = None) -> Request:
    """Build a bare Starlette request carrying the given cookies."""
    headers = []
    if cookies:
        cookie = "; ".join(f"{k}={v}" for k, v in cookies.items())
        headers.append((b"cookie", cookie.encode()))
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "query_string": b"",
        "headers": headers,
    }
    return Request(scope)


def set_cookies(headers: MutableHeaders) -> list[str]:
    return headers.getlist("set-cookie")


def cookie_value(header: str) -> str:
    """Value part of a Set-Cookie header."""
    first = header.split(";", 1)[0]
    return first.split("=", 1)[1]
