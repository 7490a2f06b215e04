from __future__ import annotations


class Dn2PySdkError(Exception):
    """Base exception for dn2-py-sdk."""


class FormatError(Dn2PySdkError, ValueError):
    """Raised when a packed asset is malformed, truncated or inconsistent."""


class NotFoundError(Dn2PySdkError, KeyError):
    """Raised when a named asset exists neither as an override nor in the archive."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class BoundsError(Dn2PySdkError, IndexError):
    """Raised when an index or coordinate is out of range."""
