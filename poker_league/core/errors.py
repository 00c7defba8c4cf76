class LeagueError(Exception):
    pass


class ValidationError(LeagueError):
    """Missing or invalid input."""


class NotFoundError(LeagueError):
    pass


class ForbiddenError(LeagueError):
    """A non-admin caller invoked an admin operation."""


class ConflictError(LeagueError):
    """The operation would break a tournament or registration invariant."""


class StorageError(LeagueError):
    """The data file could not be read or written."""


class ConcurrentModificationError(StorageError):
    """The persisted document changed between load and save."""
