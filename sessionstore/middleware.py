"""ASGI server-side session middleware.

Starlette's built-in SessionMiddleware stores all data in signed cookies.
This middleware keeps only the session id in a cookie and delegates data
storage to a SessionStore.
"""

from __future__ import annotations

import copy
import logging

from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .errors import SessionError, SessionLoadError
from .storage import InMemoryStorage
from .store import SessionStore

logger = logging.getLogger(__name__)

COOKIE_NAME = "session"


def _snapshot(values: dict) -> dict:
    """Copy of the values to detect changes made while handling the request.

    Values that cannot be deep-copied fall back to a shallow copy, which
    still detects top-level changes.
    """
    try:
        return copy.deepcopy(values)
    except (TypeError, copy.Error):
        logger.debug("Session values cannot be deep-copied; comparing top-level keys only")
        return dict(values)


class SessionMiddleware:
    """ASGI middleware for server-side sessions.

    Loads the session named by the cookie and attaches it to
    ``request.state.session``. On response, saves it back when its values
    changed, or deletes it when it was invalidated.
    """

    def __init__(
        self,
        app: ASGIApp,
        store: SessionStore | None = None,
        cookie_name: str = COOKIE_NAME,
    ) -> None:
        self.app = app
        self.store = store or SessionStore(InMemoryStorage())
        self.cookie_name = cookie_name

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        conn = HTTPConnection(scope)
        stale_cookie = False
        try:
            session = await self.store.get(conn, self.cookie_name)
        except SessionLoadError as e:
            # Expired, missing or tampered: continue with a fresh session.
            logger.warning("Starting a new session: %s", e)
            session = e.session
            stale_cookie = True

        had_cookie = bool(conn.cookies.get(self.cookie_name))
        initial_values = _snapshot(session.values)

        scope["state"] = scope.get("state", {})
        scope["state"]["session"] = session

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                if session.invalidated:
                    should_save = bool(session.id) or had_cookie
                elif session.values != initial_values:
                    should_save = True
                elif stale_cookie and had_cookie:
                    # Nothing to store: expire the cookie that no longer loads.
                    session.options.max_age = -1
                    should_save = True
                else:
                    should_save = False

                if should_save:
                    headers = MutableHeaders(scope=message)
                    try:
                        await self.store.save(conn, headers, session)
                    except SessionError:
                        logger.exception("Failed to save session %r", self.cookie_name)
                        raise

            await send(message)

        await self.app(scope, receive, send_wrapper)
