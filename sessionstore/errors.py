"""Exception hierarchy for session loading, saving and storage."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .session import Session


class SessionError(Exception):
    """Base class for every error raised by sessionstore."""


class _WrappedError(SessionError):
    """An error raised at a stage boundary, wrapping the underlying cause."""

    stage = ""

    def __init__(self, cause: BaseException | str) -> None:
        self.cause = cause if isinstance(cause, BaseException) else None
        super().__init__(f"{self.stage}: {cause}" if self.stage else str(cause))


# ── Load path (session remains usable as a fresh session) ─────────────────


class SessionLoadError(_WrappedError):
    """Recovering an existing session failed.

    ``session`` is the fresh session the caller can continue with.
    """

    def __init__(self, cause: BaseException | str, session: Session) -> None:
        super().__init__(cause)
        self.session = session


class IdentifierError(SessionLoadError):
    stage = "failed to read session id"


class ValuesError(SessionLoadError):
    stage = "failed to read session values"


# ── Save path ─────────────────────────────────────────────────────────────


class IdentifierGenerationError(_WrappedError):
    stage = "id generator"


class StorageSaveError(_WrappedError):
    stage = "storage.save"


class StorageDeleteError(_WrappedError):
    stage = "storage.delete"


class IdentifierEncodeError(_WrappedError):
    stage = "codec.encode"


# ── Collaborator errors ───────────────────────────────────────────────────


class SessionNotFoundError(SessionError, KeyError):
    """No stored values exist for the requested id."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"no value found for id: {session_id}")
        self.session_id = session_id

    def __str__(self) -> str:
        return self.args[0]


class StorageBackendError(SessionError):
    """The storage service failed; the message names the operation."""


class MarshalError(SessionError, ValueError):
    """Values could not be converted to or from bytes."""


class CodecError(SessionError, ValueError):
    """A cookie value could not be encoded or authenticated."""
