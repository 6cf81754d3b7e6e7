"""Exception types raised by the editor and the problem store."""


class SprayWallError(Exception):
    """Base class for all spraywall errors."""


class ValidationError(SprayWallError):
    """User input rejected before anything is written (empty name, no image)."""


class PersistenceError(SprayWallError):
    """The problem store could not save, update, list or delete a record."""
