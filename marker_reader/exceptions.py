"""Exceptions raised by the marker reader package."""


class MarkerReaderError(Exception):
    """Base exception for all marker reader errors."""
    pass


class MalformedInputError(MarkerReaderError, ValueError):
    """Raised when an image cannot be decoded into a raster."""
    pass


class InvalidArgumentError(MarkerReaderError, ValueError):
    """Raised for unknown options or unusable parameter values."""
    pass
