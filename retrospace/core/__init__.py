from retrospace.core.errors import (
    RetrospaceError, Unreachable, Conflict, NotFound, Malformed, Forbidden
)
from retrospace.core.store import KeyValueStore, FileStore
from retrospace.core.redis import RedisStore

__all__ = [
    "RetrospaceError", "Unreachable", "Conflict", "NotFound", "Malformed",
    "Forbidden", "KeyValueStore", "FileStore", "RedisStore",
]
