"""Boolean constraint expressions over edge tags.

Example:
    >>> pred = compile_expression('link == "blue" || link == "redblue"')
    >>> pred.evaluate({"link": "blue"})
    True
"""

from cspf.expr.evaluator import (
    CompiledExpression,
    Evaluator,
    ExpressionEvaluator,
    Predicate,
    compile_expression,
)
from cspf.expr.parser import parse

__all__ = [
    "CompiledExpression",
    "Evaluator",
    "ExpressionEvaluator",
    "Predicate",
    "compile_expression",
    "parse",
]
