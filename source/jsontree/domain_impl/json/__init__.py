"""JSON domain package exports."""

from __future__ import annotations

from . import json_copy_service
from . import json_mutation_service
from . import json_path_service
from . import json_value_core

__all__ = [
    "json_copy_service",
    "json_mutation_service",
    "json_path_service",
    "json_value_core",
]
