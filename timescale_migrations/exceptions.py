"""Exceptions raised while compiling and running hypertable migrations."""

from __future__ import annotations

__all__ = ["HypertableError", "HypertableOptionError"]


class HypertableError(RuntimeError):
    """Base class for hypertable migration failures."""


class HypertableOptionError(HypertableError, TypeError):
    """Raised when an option value has a type the compiler cannot render."""
