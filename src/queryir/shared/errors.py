"""
Error Reporting

Exception hierarchy shared by IR construction and serialization.
"""

from typing import Any, Optional


class QueryIRError(Exception):
    """Base exception for all queryir errors"""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class IRConstructionError(QueryIRError, ValueError):
    """
    A required field was missing when building an IR node.

    Raised by node constructors before any attribute is assigned, so a
    partially built node is never observable.
    """


class IRDeserializationError(QueryIRError):
    """
    Serialized IR could not be turned back into nodes.

    `fragment` holds the offending S-expression piece when one is known.
    """
    def __init__(self, message: str, fragment: Optional[Any] = None):
        super().__init__(message)
        self.fragment = fragment

    def __str__(self):
        if self.fragment is not None:
            return f"{self.message}: {self.fragment!r}"
        return self.message


def require_non_null(value: Any, message: str) -> Any:
    """Return value unchanged, or raise IRConstructionError if it is None."""
    if value is None:
        raise IRConstructionError(message)
    return value
