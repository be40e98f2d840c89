class RetrospaceError(Exception):
    """Base class for persistence and visibility errors."""


class Unreachable(RetrospaceError):
    """The remote data service could not be reached."""


class Conflict(RetrospaceError):
    """A record collides with an existing one (duplicate username)."""


class NotFound(RetrospaceError):
    """The record targeted by an update or lookup does not exist."""


class Malformed(RetrospaceError):
    """Persisted or received JSON could not be decoded."""


class Forbidden(RetrospaceError):
    """The acting user is not allowed to perform the action."""
