"""Recursive-descent parser for constraint expressions.

Grammar, lowest precedence first::

    expression := or_expr EOF
    or_expr    := and_expr ("||" and_expr)*
    and_expr   := compare ("&&" compare)*
    compare    := unary [("==" | "!=" | "<" | "<=" | ">" | ">=" | "=~" | "!~" | "in") unary]
    unary      := ("!" | "-") unary | postfix
    postfix    := primary ("." IDENT)*
    primary    := NUMBER | STRING | KEYWORD | IDENT
                | "(" or_expr ")" | "[" [or_expr ("," or_expr)*] "]"

Comparisons do not chain: ``a == b == c`` is rejected. Parentheses, array
brackets and prefix operators may nest at most ``MAX_NESTING_DEPTH`` levels.
"""

from __future__ import annotations

import re
from typing import List

from cspf.errors import ExpressionParseError
from cspf.expr.lexer import Token, tokenize
from cspf.expr.nodes import (
    Array,
    Compare,
    Field,
    Literal,
    Logical,
    Membership,
    Negate,
    Node,
    Not,
    RegexMatch,
)

__all__ = ["MAX_NESTING_DEPTH", "parse"]

#: Deepest allowed nesting of "(", "[", "!" and unary "-".
MAX_NESTING_DEPTH = 100

_COMPARE_OPS = {"==", "!=", "<", "<=", ">", ">="}
_REGEX_OPS = {"=~", "!~"}


class _Parser:
    def __init__(self, expression: str) -> None:
        self.expression = expression
        self.tokens: List[Token] = tokenize(expression)
        self.index = 0
        self.depth = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        if token.kind != "EOF":
            self.index += 1
        return token

    def _at_op(self, *ops: str) -> bool:
        return self.current.kind == "OP" and self.current.text in ops

    def _error(self, message: str, token: Token) -> ExpressionParseError:
        return ExpressionParseError(message, self.expression, token.pos)

    def _enter(self) -> Token:
        """Consume an opening token, one nesting level deeper."""
        token = self.current
        if self.depth >= MAX_NESTING_DEPTH:
            raise self._error(
                f"Expression nested too deeply (limit {MAX_NESTING_DEPTH})", token
            )
        self.depth += 1
        return self._advance()

    def _expect(self, kind: str, what: str) -> Token:
        token = self.current
        if token.kind != kind:
            raise self._error(f"Expected {what}, found {_describe(token)}", token)
        return self._advance()

    def parse(self) -> Node:
        if self.current.kind == "EOF":
            raise self._error("Empty expression", self.current)
        node = self._or_expr()
        if self.current.kind != "EOF":
            raise self._error(f"Unexpected {_describe(self.current)}", self.current)
        return node

    def _or_expr(self) -> Node:
        operands = [self._and_expr()]
        while self._at_op("||"):
            self._advance()
            operands.append(self._and_expr())
        if len(operands) == 1:
            return operands[0]
        return Logical("||", tuple(operands))

    def _and_expr(self) -> Node:
        operands = [self._compare()]
        while self._at_op("&&"):
            self._advance()
            operands.append(self._compare())
        if len(operands) == 1:
            return operands[0]
        return Logical("&&", tuple(operands))

    def _compare(self) -> Node:
        left = self._unary()
        if not self._at_op(*_COMPARE_OPS, *_REGEX_OPS, "in"):
            return left

        op_token = self._advance()
        right = self._unary()
        op = op_token.text

        if self._at_op(*_COMPARE_OPS, *_REGEX_OPS, "in"):
            raise self._error(
                f"Comparison operators cannot be chained ('{self.current.text}')",
                self.current,
            )

        if op == "in":
            return Membership(left, right)
        if op in _REGEX_OPS:
            pattern = None
            if isinstance(right, Literal) and isinstance(right.value, str):
                try:
                    pattern = re.compile(right.value)
                except re.error as exc:
                    raise self._error(
                        f"Invalid regular expression {right.value!r}: {exc}", op_token
                    ) from exc
            return RegexMatch(op == "!~", left, right, pattern)
        return Compare(op, left, right)

    def _unary(self) -> Node:
        if self._at_op("!"):
            self._enter()
            node: Node = Not(self._unary())
            self.depth -= 1
            return node
        if self._at_op("-"):
            self._enter()
            operand = self._unary()
            self.depth -= 1
            # Fold negative numeric literals
            value = getattr(operand, "value", None)
            if isinstance(operand, Literal) and type(value) in (int, float):
                return Literal(-value)
            return Negate(operand)
        return self._postfix()

    def _postfix(self) -> Node:
        node = self._primary()
        while self.current.kind == "DOT":
            dot = self._advance()
            if not isinstance(node, Field):
                raise self._error("Field access is only allowed on attributes", dot)
            name = self._expect("IDENT", "attribute name after '.'")
            node = Field(node.path + (name.text,))
        return node

    def _primary(self) -> Node:
        token = self.current
        kind = token.kind

        if kind in ("NUMBER", "STRING", "KEYWORD"):
            self._advance()
            return Literal(token.value)
        if kind == "IDENT":
            self._advance()
            return Field((token.text,))
        if kind == "LPAREN":
            self._enter()
            node = self._or_expr()
            self._expect("RPAREN", "')'")
            self.depth -= 1
            return node
        if kind == "LBRACKET":
            self._enter()
            items: List[Node] = []
            if self.current.kind != "RBRACKET":
                items.append(self._or_expr())
                while self.current.kind == "COMMA":
                    self._advance()
                    items.append(self._or_expr())
            self._expect("RBRACKET", "']'")
            self.depth -= 1
            return Array(tuple(items))

        if kind == "EOF":
            raise self._error("Unexpected end of expression", token)
        raise self._error(f"Unexpected {_describe(token)}", token)


def _describe(token: Token) -> str:
    if token.kind == "EOF":
        return "end of expression"
    return f"token '{token.text}'"


def parse(expression: str) -> Node:
    """Parse an expression into its syntax tree.

    Args:
        expression: Constraint expression text.

    Returns:
        Root node of the syntax tree.

    Raises:
        ExpressionParseError: If the expression is malformed.
    """
    if not isinstance(expression, str):
        raise ExpressionParseError(
            f"Expression must be a string, got {type(expression).__name__}"
        )
    return _Parser(expression).parse()
