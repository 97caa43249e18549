"""Syntax tree of a compiled constraint expression.

Every node evaluates itself against an ``EvalContext`` holding the edge's
attribute mapping. Type errors surface as ``ExpressionEvaluationError``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Pattern, Tuple

from cspf.errors import ExpressionEvaluationError


@dataclass(frozen=True)
class EvalContext:
    """Per-evaluation state.

    Attributes:
        attrs: Attribute mapping of the edge under test.
        missing_is_null: If False, unknown attribute keys raise.
    """

    attrs: Mapping[str, Any]
    missing_is_null: bool = True


def _type_name(value: Any) -> str:
    return "null" if value is None else type(value).__name__


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _equals(left: Any, right: Any) -> bool:
    # true == 1 must not hold
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


def _require_bool(value: Any, op: str) -> bool:
    if not isinstance(value, bool):
        raise ExpressionEvaluationError(
            f"Operator '{op}' expects boolean operands, got {_type_name(value)}"
        )
    return value


class Node:
    """Base class for expression nodes."""

    def evaluate(self, ctx: EvalContext) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class Literal(Node):
    value: Any

    def evaluate(self, ctx: EvalContext) -> Any:
        return self.value


@dataclass(frozen=True)
class Field(Node):
    """Attribute lookup; ``path`` has more than one part for dotted access."""

    path: Tuple[str, ...]

    def evaluate(self, ctx: EvalContext) -> Any:
        current: Any = ctx.attrs
        for depth, key in enumerate(self.path):
            if current is None and depth > 0 and ctx.missing_is_null:
                return None
            if not isinstance(current, Mapping):
                raise ExpressionEvaluationError(
                    f"Cannot look up '{key}' in {_type_name(current)} "
                    f"(field '{'.'.join(self.path)}')"
                )
            if key not in current:
                if ctx.missing_is_null:
                    return None
                raise ExpressionEvaluationError(
                    f"Unknown attribute '{'.'.join(self.path[: depth + 1])}'"
                )
            current = current[key]
        return current


@dataclass(frozen=True)
class Array(Node):
    items: Tuple[Node, ...]

    def evaluate(self, ctx: EvalContext) -> Any:
        return tuple(item.evaluate(ctx) for item in self.items)


@dataclass(frozen=True)
class Not(Node):
    operand: Node

    def evaluate(self, ctx: EvalContext) -> Any:
        return not _require_bool(self.operand.evaluate(ctx), "!")


@dataclass(frozen=True)
class Negate(Node):
    operand: Node

    def evaluate(self, ctx: EvalContext) -> Any:
        value = self.operand.evaluate(ctx)
        if not _is_number(value):
            raise ExpressionEvaluationError(
                f"Unary '-' expects a number, got {_type_name(value)}"
            )
        return -value


@dataclass(frozen=True)
class Logical(Node):
    """Short-circuit ``&&`` / ``||`` over two or more operands.

    A chain ``a || b || c`` is a single node, so evaluation depth does not
    grow with the number of terms.
    """

    op: str
    operands: Tuple[Node, ...]

    def evaluate(self, ctx: EvalContext) -> Any:
        stop = self.op == "||"
        for operand in self.operands:
            if _require_bool(operand.evaluate(ctx), self.op) is stop:
                return stop
        return not stop


@dataclass(frozen=True)
class Compare(Node):
    op: str
    left: Node
    right: Node

    def evaluate(self, ctx: EvalContext) -> Any:
        left = self.left.evaluate(ctx)
        right = self.right.evaluate(ctx)
        op = self.op

        if op == "==":
            return _equals(left, right)
        if op == "!=":
            return not _equals(left, right)

        comparable = (_is_number(left) and _is_number(right)) or (
            isinstance(left, str) and isinstance(right, str)
        )
        if not comparable:
            raise ExpressionEvaluationError(
                f"Cannot compare {_type_name(left)} and {_type_name(right)} with '{op}'"
            )
        if op == "<":
            return left < right
        if op == "<=":
            return left <= right
        if op == ">":
            return left > right
        if op == ">=":
            return left >= right
        raise ExpressionEvaluationError(f"Unknown operator: {op}")


@dataclass(frozen=True)
class Membership(Node):
    """``value in [a, b, ...]``."""

    left: Node
    right: Node

    def evaluate(self, ctx: EvalContext) -> Any:
        needle = self.left.evaluate(ctx)
        haystack = self.right.evaluate(ctx)
        if not isinstance(haystack, (list, tuple)):
            raise ExpressionEvaluationError(
                f"Operator 'in' expects an array, got {_type_name(haystack)}"
            )
        return any(_equals(needle, item) for item in haystack)


@dataclass(frozen=True)
class RegexMatch(Node):
    """``=~`` / ``!~``; ``pattern`` is precompiled when the right side is a literal."""

    negate: bool
    left: Node
    right: Node
    pattern: Optional[Pattern[str]] = None

    def evaluate(self, ctx: EvalContext) -> Any:
        op = "!~" if self.negate else "=~"
        subject = self.left.evaluate(ctx)
        if not isinstance(subject, str):
            raise ExpressionEvaluationError(
                f"Operator '{op}' expects a string, got {_type_name(subject)}"
            )

        pattern = self.pattern
        if pattern is None:
            raw = self.right.evaluate(ctx)
            if not isinstance(raw, str):
                raise ExpressionEvaluationError(
                    f"Operator '{op}' expects a string pattern, got {_type_name(raw)}"
                )
            try:
                pattern = re.compile(raw)
            except re.error as exc:
                raise ExpressionEvaluationError(
                    f"Invalid regular expression {raw!r}: {exc}"
                ) from exc

        matched = pattern.search(subject) is not None
        return not matched if self.negate else matched
