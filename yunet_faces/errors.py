"""
Exception types raised by the face detection layer.

All errors derive from DetectionError so callers can catch the whole
family in one place. Only MalformedDetectionError is recoverable inside
a detection pass: the orchestrator drops the offending record and keeps
going. Every other error aborts the call that raised it.
"""

from typing import Optional


class DetectionError(Exception):
    """Base class for all face detection errors."""


class InvalidInputFileError(DetectionError):
    """The given path does not resolve to a readable image file."""


class ImageDecodeError(DetectionError):
    """The image file was read but could not be decoded.

    The underlying decoder error, if any, is chained as __cause__.
    """


class InvalidImageError(DetectionError, ValueError):
    """The in-memory image cannot be handed to the detector.

    Raised for empty buffers, unsupported shapes, and images whose width
    or height does not fit in 16 bits.
    """


class DetectionFailedError(DetectionError):
    """The inference backend failed. Fatal for the current call."""


class MalformedDetectionError(DetectionError):
    """A raw detection carries geometry that is not a valid pixel value.

    Attributes:
        field: Name of the first offending field (e.g. "w", "landmarks[3]").
        value: The offending value.
    """

    def __init__(self, field: str, value, message: Optional[str] = None) -> None:
        if message is None:
            message = (
                f"Malformed detection: field '{field}' has value {value}, "
                f"which is not an unsigned 16-bit pixel coordinate."
            )
        super().__init__(message)
        self.field = field
        self.value = value
