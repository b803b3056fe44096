"""Infra domain package exports."""

from __future__ import annotations

from . import settings_service

__all__ = ["settings_service"]
