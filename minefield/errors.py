"""Exceptions raised by the minefield generator and solver."""


class MinefieldError(Exception):
    """Base class for all minefield errors."""


class ConfigurationError(MinefieldError, ValueError):
    """Invalid dimensions, density or clue values, rejected before any work."""


class DimensionMismatchError(MinefieldError, ValueError):
    """A grid's shape disagrees with the geometry it is used with."""


class UnsatisfiableError(MinefieldError, RuntimeError):
    """The search exhausted every placement without matching the clue grid."""
