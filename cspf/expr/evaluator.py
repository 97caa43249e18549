"""Constraint evaluator capability and its default implementation.

The SPF engine only relies on the two protocols below. Any engine that can
compile an expression string into an object with an ``evaluate(attrs)``
method returning a bool can be plugged in through the ``evaluator`` argument
of ``cspf.algorithms.cspf``.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from cspf.errors import ExpressionEvaluationError
from cspf.expr.nodes import EvalContext, Node
from cspf.expr.parser import parse
from cspf.logging import get_logger

__all__ = [
    "Predicate",
    "Evaluator",
    "CompiledExpression",
    "ExpressionEvaluator",
    "compile_expression",
]

_logger = get_logger(__name__)


@runtime_checkable
class Predicate(Protocol):
    """A compiled boolean test over an edge's attribute mapping."""

    def evaluate(self, attrs: Mapping[str, Any]) -> bool:
        """Return whether ``attrs`` satisfy the predicate.

        Raises:
            ExpressionEvaluationError: If evaluation fails.
        """
        ...


@runtime_checkable
class Evaluator(Protocol):
    """Compiles expression strings into predicates."""

    def compile(self, expression: str) -> Predicate:
        """Compile ``expression``.

        Raises:
            ExpressionParseError: If the expression is malformed.
        """
        ...


class CompiledExpression:
    """Predicate produced by ``ExpressionEvaluator``.

    Instances are immutable and may be reused across computations.
    """

    __slots__ = ("expression", "_root", "_missing_is_null")

    def __init__(self, expression: str, root: Node, missing_is_null: bool = True):
        self.expression = expression
        self._root = root
        self._missing_is_null = missing_is_null

    def __repr__(self) -> str:
        return f"CompiledExpression({self.expression!r})"

    def evaluate(self, attrs: Mapping[str, Any]) -> bool:
        result = self._root.evaluate(EvalContext(attrs, self._missing_is_null))
        if not isinstance(result, bool):
            raise ExpressionEvaluationError(
                f"Expression {self.expression!r} produced "
                f"{type(result).__name__}, expected bool"
            )
        return result

    __call__ = evaluate


class ExpressionEvaluator:
    """Default expression engine.

    Args:
        missing_attribute_is_null: If True, keys absent from an edge's tags
            evaluate to null; otherwise looking them up raises
            ``ExpressionEvaluationError``.
    """

    def __init__(self, missing_attribute_is_null: bool = True) -> None:
        self.missing_attribute_is_null = missing_attribute_is_null

    def compile(self, expression: str) -> CompiledExpression:
        root = parse(expression)
        _logger.debug("Compiled constraint expression %r", expression)
        return CompiledExpression(expression, root, self.missing_attribute_is_null)


def compile_expression(
    expression: str, evaluator: Optional[Evaluator] = None
) -> Predicate:
    """Compile ``expression`` with ``evaluator`` (the default engine if None)."""
    if evaluator is None:
        evaluator = ExpressionEvaluator()
    return evaluator.compile(expression)
