"""Expression capability: protocols, the default evaluator, and the per-node cache."""

from imprint.expressions.cache import (
    ESCAPED_START,
    EXPRESSION_END,
    EXPRESSION_START,
    ExpressionCache,
    extract_expression,
)
from imprint.expressions.evaluator import (
    SAFE_BUILTINS,
    CompiledExpression,
    PythonExpressionParser,
)
from imprint.expressions.protocol import Expression, ExpressionParser

__all__ = [
    "ESCAPED_START",
    "EXPRESSION_END",
    "EXPRESSION_START",
    "SAFE_BUILTINS",
    "CompiledExpression",
    "Expression",
    "ExpressionCache",
    "ExpressionParser",
    "PythonExpressionParser",
    "extract_expression",
]
