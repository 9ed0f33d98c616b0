"""Server-side HTTP sessions: an id in a cookie, values in pluggable storage."""

from .codec import IdentifierCodec, PassthroughCodec, SignedCookieCodec
from .errors import (
    CodecError,
    IdentifierEncodeError,
    IdentifierError,
    IdentifierGenerationError,
    MarshalError,
    SessionError,
    SessionLoadError,
    SessionNotFoundError,
    StorageBackendError,
    StorageDeleteError,
    StorageSaveError,
    ValuesError,
)
from .ids import token_id_generator, uuid_id_generator
from .marshal import JSONMarshaler, Marshaler
from .middleware import SessionMiddleware
from .session import Session, SessionOptions
from .storage import DynamoDBStorage, InMemoryStorage, S3Storage, SessionStorage
from .store import SessionStore

__all__ = [
    "CodecError",
    "DynamoDBStorage",
    "IdentifierCodec",
    "IdentifierEncodeError",
    "IdentifierError",
    "IdentifierGenerationError",
    "InMemoryStorage",
    "JSONMarshaler",
    "MarshalError",
    "Marshaler",
    "PassthroughCodec",
    "S3Storage",
    "Session",
    "SessionError",
    "SessionLoadError",
    "SessionMiddleware",
    "SessionNotFoundError",
    "SessionOptions",
    "SessionStorage",
    "SessionStore",
    "SignedCookieCodec",
    "StorageBackendError",
    "StorageDeleteError",
    "StorageSaveError",
    "ValuesError",
    "token_id_generator",
    "uuid_id_generator",
]
