"""
Exceptions raised by the song service layer.

Validation failures are reported to clients as HTTP 400; conflicts
are fatal and surface as HTTP 500.  A missing record is never an
exception: services return ``None`` or ``False`` instead.
"""


class SongLibraryError(Exception):
    """Base class for errors raised by the song library."""
    pass


class SongValidationError(SongLibraryError, ValueError):
    """Input was rejected before any persistence attempt."""
    pass


class SongConflictError(SongLibraryError, RuntimeError):
    """A concurrent write prevented an update of an existing song."""
    pass
