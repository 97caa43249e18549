"""Exception types raised by cspf.

Specific errors also derive from the matching builtin (``ValueError``) where
the failure is caused by bad input, so callers may catch either.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "CspfError",
    "NilGraphError",
    "DuplicateTagKeyError",
    "InvalidCostError",
    "ExpressionError",
    "ExpressionParseError",
    "ExpressionEvaluationError",
    "ComputationCancelledError",
]


class CspfError(Exception):
    """Base class for all cspf errors."""


class NilGraphError(CspfError):
    """An operation was invoked without a graph instance."""

    def __init__(self, message: str = "NilGraph") -> None:
        super().__init__(message)


class DuplicateTagKeyError(CspfError, ValueError):
    """Two tags supplied for one edge share the same key.

    Attributes:
        key: The offending tag key.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"DuplicateTagKey: {key}")


class InvalidCostError(CspfError, ValueError):
    """Edge cost is not a non-negative integer."""


class ExpressionError(CspfError):
    """Base class for constraint expression failures."""


class ExpressionParseError(ExpressionError, ValueError):
    """Constraint expression is syntactically malformed.

    Attributes:
        expression: The full expression text.
        position: Character offset where parsing failed, if known.
    """

    def __init__(
        self, message: str, expression: str = "", position: Optional[int] = None
    ) -> None:
        self.expression = expression
        self.position = position
        if position is not None:
            message = f"{message} at position {position} in {expression!r}"
        super().__init__(message)


class ExpressionEvaluationError(ExpressionError):
    """A compiled expression failed while evaluating edge attributes."""


class ComputationCancelledError(CspfError):
    """A path computation observed its cancellation signal."""
