"""Value marshalers for byte-oriented storage backends."""

from __future__ import annotations

import json
from typing import Any, Protocol, runtime_checkable

from .errors import MarshalError


@runtime_checkable
class Marshaler(Protocol):
    """Converts a session values mapping to and from bytes."""

    content_type: str

    def marshal(self, values: dict[Any, Any]) -> bytes:
        ...

    def unmarshal(self, data: bytes) -> dict[Any, Any]:
        ...


class JSONMarshaler:
    """JSON marshaler. Only string keys are supported."""

    content_type = "application/json"

    def marshal(self, values: dict[Any, Any]) -> bytes:
        for key in values:
            if not isinstance(key, str):
                raise MarshalError(
                    f"JSONMarshaler: only string keys supported: {type(key).__name__} ({key!r})"
                )
        try:
            return json.dumps(values, separators=(",", ":")).encode()
        except (TypeError, ValueError) as e:
            raise MarshalError(f"JSONMarshaler: {e}") from e

    def unmarshal(self, data: bytes) -> dict[Any, Any]:
        try:
            values = json.loads(data)
        except (UnicodeDecodeError, ValueError) as e:
            raise MarshalError(f"JSONMarshaler: invalid payload: {e}") from e
        if not isinstance(values, dict):
            raise MarshalError(
                f"JSONMarshaler: expected an object, got {type(values).__name__}"
            )
        return values
