"""Session lifecycle: recover a session from its cookie, persist it on response.

Storage is always written before the cookie. If encoding the id fails after
a successful storage write, the stored entry is orphaned but no cookie ever
points at values that do not exist.
"""

from __future__ import annotations

import logging

from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection

from . import events
from .codec import IdentifierCodec, PassthroughCodec
from .errors import (
    IdentifierEncodeError,
    IdentifierError,
    IdentifierGenerationError,
    SessionLoadError,
    StorageDeleteError,
    StorageSaveError,
    ValuesError,
)
from .ids import IdentifierGenerator, uuid_id_generator
from .session import Session, SessionOptions
from .storage import SessionStorage

logger = logging.getLogger(__name__)

_REGISTRY_KEY = "sessionstore_registry"


class SessionStore:
    """Keeps a session id in a cookie and the session values in storage.

    Args:
        storage: Backend holding session values, keyed by session id.
        options: Default cookie options, copied into every new session.
        codec: Transforms ids to and from cookie values (default: unaltered).
        id_generator: Produces ids for new sessions (default: UUID4).
    """

    def __init__(
        self,
        storage: SessionStorage,
        *,
        options: SessionOptions | None = None,
        codec: IdentifierCodec | None = None,
        id_generator: IdentifierGenerator | None = None,
    ) -> None:
        self.storage = storage
        self.options = options or SessionOptions()
        self.codec = codec or PassthroughCodec()
        self.id_generator = id_generator or uuid_id_generator

    async def get(self, request: HTTPConnection, name: str) -> Session:
        """Return the request's session, loading it once per request.

        A load error is cached with its session and raised on every call.
        """
        registry = getattr(request.state, _REGISTRY_KEY, None)
        if registry is None:
            registry = {}
            setattr(request.state, _REGISTRY_KEY, registry)

        if name not in registry:
            try:
                registry[name] = (await self.new(request, name), None)
            except SessionLoadError as e:
                registry[name] = (e.session, e)

        session, error = registry[name]
        if error is not None:
            raise error
        return session

    async def new(self, request: HTTPConnection, name: str) -> Session:
        """Load the session named by the request cookie, or start a new one.

        Raises IdentifierError or ValuesError if an existing session cannot
        be recovered; both carry a fresh, usable session as ``.session``.
        """
        session = Session(name, options=self.options.model_copy(), is_new=True)

        raw = request.cookies.get(name)
        if not raw:
            return session

        try:
            session_id = self.codec.decode(name, raw)
        except Exception as e:
            logger.warning("Session cookie %r could not be decoded: %s", name, e)
            raise IdentifierError(e, session) from e
        if not session_id:
            return session

        try:
            values = await self.storage.load(session_id)
        except Exception as e:
            logger.warning(
                "Session %s values could not be loaded: %s", events.fingerprint(session_id), e
            )
            events.session_event(
                activity_id=events.Activity.LOAD,
                status_id=events.Status.FAILURE,
                severity_id=events.Severity.LOW,
                session_name=name,
                session_id=session_id,
                message="Session values could not be loaded",
                error=e,
            )
            raise ValuesError(e, session) from e

        session.id = session_id
        session.values = values
        session.is_new = False
        return session

    async def save(
        self,
        request: HTTPConnection,
        response_headers: MutableHeaders,
        session: Session,
    ) -> None:
        """Persist the session and write its cookie to the response headers.

        A negative ``max_age`` deletes the stored values and expires the
        cookie instead.
        """
        if session.invalidated:
            await self._delete(response_headers, session)
            return

        created = not session.id
        if created:
            try:
                session_id = self.id_generator()
            except Exception as e:
                raise IdentifierGenerationError(e) from e
            if not session_id:
                raise IdentifierGenerationError("generated id was blank")
            session.id = session_id

        try:
            await self.storage.save(session.id, session.values)
        except Exception as e:
            logger.error("Session %s could not be saved: %s", events.fingerprint(session.id), e)
            events.session_event(
                activity_id=events.Activity.CREATE if created else events.Activity.UPDATE,
                status_id=events.Status.FAILURE,
                severity_id=events.Severity.MEDIUM,
                session_name=session.name,
                session_id=session.id,
                message="Session values could not be saved",
                error=e,
            )
            raise StorageSaveError(e) from e
        session.is_new = False

        try:
            value = self.codec.encode(session.name, session.id)
        except Exception as e:
            logger.error(
                "Session %s id could not be encoded, stored values are orphaned: %s",
                events.fingerprint(session.id),
                e,
            )
            raise IdentifierEncodeError(e) from e

        response_headers.append("set-cookie", session.options.cookie_header(session.name, value))
        events.session_event(
            activity_id=events.Activity.CREATE if created else events.Activity.UPDATE,
            status_id=events.Status.SUCCESS,
            session_name=session.name,
            session_id=session.id,
            message="Session created" if created else "Session updated",
        )

    async def _delete(self, response_headers: MutableHeaders, session: Session) -> None:
        error: Exception | None = None
        if session.id:
            try:
                await self.storage.delete(session.id)
            except Exception as e:
                logger.error(
                    "Session %s could not be deleted: %s", events.fingerprint(session.id), e
                )
                error = e

        # The expired cookie is written even when the delete failed.
        response_headers.append("set-cookie", session.options.cookie_header(session.name, ""))

        events.session_event(
            activity_id=events.Activity.DELETE,
            status_id=events.Status.FAILURE if error else events.Status.SUCCESS,
            severity_id=events.Severity.MEDIUM if error else events.Severity.INFORMATIONAL,
            session_name=session.name,
            session_id=session.id,
            message="Session could not be deleted" if error else "Session deleted",
            error=error,
        )
        if error is not None:
            raise StorageDeleteError(error) from error
