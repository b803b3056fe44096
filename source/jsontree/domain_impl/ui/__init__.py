"""Tree UI-decision package exports."""

from __future__ import annotations

from . import tree_chunk_service
from . import tree_engine_service
from . import tree_policy_service

__all__ = [
    "tree_chunk_service",
    "tree_engine_service",
    "tree_policy_service",
]
