"""Session storage protocol and the in-memory backend."""

from __future__ import annotations

import copy
from typing import Any, Protocol, runtime_checkable

from ..errors import SessionNotFoundError


@runtime_checkable
class SessionStorage(Protocol):
    """Protocol for server-side session value storage.

    Implementations must tolerate concurrent calls for different ids.
    Concurrent writes to the same id are last-writer-wins.
    """

    async def save(self, session_id: str, values: dict[Any, Any]) -> None:
        """Store values under the id, overwriting anything already there."""
        ...

    async def load(self, session_id: str) -> dict[Any, Any]:
        """Load values by id. Raises SessionNotFoundError if absent."""
        ...

    async def delete(self, session_id: str) -> None:
        """Delete values by id. Deleting a missing id is not an error."""
        ...


class InMemoryStorage:
    """In-memory storage for development/testing.

    Not suitable for production: sessions are lost on restart and not
    shared across processes. Values are deep-copied on save and load, so
    entries only change when ``save`` is called.
    """

    def __init__(self) -> None:
        self._store: dict[str, dict[Any, Any]] = {}

    async def save(self, session_id: str, values: dict[Any, Any]) -> None:
        self._store[session_id] = copy.deepcopy(values)

    async def load(self, session_id: str) -> dict[Any, Any]:
        values = self._store.get(session_id)
        if values is None:
            raise SessionNotFoundError(session_id)
        return copy.deepcopy(values)

    async def delete(self, session_id: str) -> None:
        self._store.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._store
