"""Support domain package exports."""

from __future__ import annotations

from . import clipboard_service

__all__ = ["clipboard_service"]
