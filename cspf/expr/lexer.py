"""Tokenizer for constraint expressions."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List

from cspf.errors import ExpressionParseError

__all__ = ["Token", "tokenize", "KEYWORDS"]

#: Identifiers with a reserved meaning; everything else is a field lookup.
KEYWORDS = {
    "true": True,
    "false": False,
    "nil": None,
    "null": None,
}

_TOKEN_SPEC = [
    ("WS", r"\s+"),
    ("NUMBER", r"\d+\.\d+(?:[eE][+-]?\d+)?|\d+(?:[eE][+-]?\d+)?"),
    ("STRING", r'"(?:[^"\\]|\\.)*"|\'(?:[^\'\\]|\\.)*\''),
    ("IDENT", r"[A-Za-z_][A-Za-z0-9_]*"),
    ("OP", r"==|!=|<=|>=|=~|!~|&&|\|\||[<>!\-]"),
    ("LPAREN", r"\("),
    ("RPAREN", r"\)"),
    ("LBRACKET", r"\["),
    ("RBRACKET", r"\]"),
    ("COMMA", r","),
    ("DOT", r"\."),
]
_TOKEN_REGEX = re.compile("|".join(f"(?P<{name}>{rx})" for name, rx in _TOKEN_SPEC))

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0"}
_ESCAPE_REGEX = re.compile(r"\\(.)", re.DOTALL)


@dataclass(frozen=True)
class Token:
    """A lexical token.

    Attributes:
        kind: Token category (NUMBER, STRING, IDENT, KEYWORD, OP, ..., EOF).
        text: Raw source text of the token.
        value: Decoded literal value for NUMBER, STRING and KEYWORD tokens.
        pos: Character offset of the token in the expression.
    """

    kind: str
    text: str
    value: Any
    pos: int


def _unquote(text: str) -> str:
    body = text[1:-1]
    return _ESCAPE_REGEX.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), body)


def _number(text: str) -> Any:
    if "." in text or "e" in text or "E" in text:
        return float(text)
    return int(text)


def tokenize(expression: str) -> List[Token]:
    """Split an expression into tokens, terminated by an EOF token.

    Raises:
        ExpressionParseError: On an unknown character or unterminated string.
    """
    tokens: List[Token] = []
    pos = 0
    end = len(expression)
    while pos < end:
        match = _TOKEN_REGEX.match(expression, pos)
        if match is None:
            char = expression[pos]
            if char in "\"'":
                raise ExpressionParseError(
                    "Unterminated string literal", expression, pos
                )
            raise ExpressionParseError(
                f"Unexpected character {char!r}", expression, pos
            )

        kind = match.lastgroup or ""
        text = match.group()
        if kind == "NUMBER":
            tokens.append(Token(kind, text, _number(text), pos))
        elif kind == "STRING":
            tokens.append(Token(kind, text, _unquote(text), pos))
        elif kind == "IDENT":
            if text in KEYWORDS:
                tokens.append(Token("KEYWORD", text, KEYWORDS[text], pos))
            elif text == "in":
                tokens.append(Token("OP", text, None, pos))
            else:
                tokens.append(Token(kind, text, text, pos))
        elif kind != "WS":
            tokens.append(Token(kind, text, None, pos))
        pos = match.end()

    tokens.append(Token("EOF", "", None, end))
    return tokens
