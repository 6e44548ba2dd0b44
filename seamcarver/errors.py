"""
Exceptions raised by the seam carving engine and its I/O helpers.
"""


class SeamCarvingError(Exception):
    """Base class for all seam carving errors."""


class DimensionError(SeamCarvingError, ValueError):
    """Seam length does not match the grid, or a seam index is out of range.

    Always a contract violation by the caller, never a recoverable condition.
    """


class UnsupportedOperationError(SeamCarvingError):
    """Target size is larger than the current image (enlargement)."""


class InvalidTargetError(SeamCarvingError, ValueError):
    """Target width or height is not a positive integer."""


class LoadError(SeamCarvingError):
    """Image file could not be read or decoded."""
