"""Exception taxonomy for the drawing canvas.

Configuration and argument errors are raised at the offending call before
any state changes. Resource and format errors are raised by the low-level
loaders/encoders and degraded to a logged warning by :class:`DrawCanvas`.
"""

from __future__ import annotations

__all__ = [
    "AlgDrawError",
    "ConfigurationError",
    "InvalidArgument",
    "UnsupportedFormat",
    "ResourceUnavailable",
    "NoKeyTyped",
]


class AlgDrawError(Exception):
    """Base class for all algdraw errors."""


class ConfigurationError(AlgDrawError, ValueError):
    """Degenerate viewport or non-positive canvas size."""


class InvalidArgument(AlgDrawError, ValueError):
    """Negative radius/width/height, out-of-range color component, or None."""


class UnsupportedFormat(AlgDrawError):
    """Image destination with an extension other than png/jpg."""

    def __init__(self, path: str, suffix: str) -> None:
        super().__init__(f"Invalid image file type: {suffix!r} ({path})")
        self.path = path
        self.suffix = suffix


class ResourceUnavailable(AlgDrawError):
    """Image file missing, unreadable or not writable."""

    def __init__(self, path: str, reason: str = "") -> None:
        msg = f"image {path} is unavailable"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.path = path


class NoKeyTyped(AlgDrawError, LookupError):
    """Raised when polling for a typed key while none is queued."""
