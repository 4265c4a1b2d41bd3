"""
Shared components: errors and helpers used by every IR module.
"""

from .errors import (
    QueryIRError, IRConstructionError, IRDeserializationError, require_non_null,
)

__all__ = [
    "QueryIRError", "IRConstructionError", "IRDeserializationError", "require_non_null",
]
