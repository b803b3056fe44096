"""Shared exception classes and expected-error tuple for services/core."""

from __future__ import annotations

from typing import TypeAlias


class AppError(Exception):
    """Base class for expected application-layer failures."""


class CollapseSpecError(ValueError, AppError):
    """Raised when a collapse specification is neither bool, finite number, nor callable."""


class PathLookupError(KeyError, AppError):
    """Raised when a path tuple does not resolve inside the current root."""

    def __init__(self, path, reason=""):
        self.path = tuple(path or ())
        self.reason = str(reason or "")
        super().__init__(self.path)

    def __str__(self):
        if self.reason:
            return f"path {self.path!r} not found: {self.reason}"
        return f"path {self.path!r} not found"


EXPECTED_ERRORS: TypeAlias = (
    OSError,
    ValueError,
    TypeError,
    RuntimeError,
    AttributeError,
    KeyError,
    IndexError,
)
