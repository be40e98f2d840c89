from retrospace.backends.base import Backend
from retrospace.backends.local import LocalBackend
from retrospace.backends.remote import RemoteBackend

__all__ = ["Backend", "LocalBackend", "RemoteBackend"]
