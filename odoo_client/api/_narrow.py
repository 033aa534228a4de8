"""
Narrowing of untyped XML-RPC results.

Every result is classified into one shape; each operation accepts exactly
one shape and substitutes its documented default for anything else.
"""

import logging
from enum import Enum
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResponseKind(Enum):
    """Shape of an unmarshalled XML-RPC value."""

    MAPPING = "mapping"
    SEQUENCE = "sequence"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    STRING = "string"
    NULL = "null"
    OTHER = "other"


def classify(value: Any) -> ResponseKind:
    """Classify a value. Booleans are never integers."""
    if value is None:
        return ResponseKind.NULL
    if isinstance(value, bool):
        return ResponseKind.BOOLEAN
    if isinstance(value, int):
        return ResponseKind.INTEGER
    if isinstance(value, str):
        return ResponseKind.STRING
    if isinstance(value, dict):
        return ResponseKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ResponseKind.SEQUENCE
    return ResponseKind.OTHER


def narrow(value: Any, expected: ResponseKind, default: T, operation: str = "call") -> T:
    """
    Return value if it has the expected shape, otherwise default.

    Args:
        value: Unmarshalled result
        expected: Accepted shape
        default: Substitute for any other shape
        operation: Operation name for logging
    """
    kind = classify(value)
    if kind is expected:
        if kind is ResponseKind.SEQUENCE:
            return list(value)  # type: ignore[return-value]
        return value

    logger.debug(f"Unexpected {kind.value} result for {operation}, expected {expected.value}")
    return default
