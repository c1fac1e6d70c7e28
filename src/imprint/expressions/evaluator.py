"""Default expression capability: a safe subset of Python expression syntax.

Placeholder text is parsed once with the stdlib ``ast`` module
(``mode="eval"``) and evaluated by walking the tree against a model. Nothing
is compiled or ``exec``-ed.

Supported:
    literals            1, 2.5, 'text', True, None (plus true / false / null)
    names               user, item, index
    member access       user.name, items[0], items[1:3], row['key']
    operators           + - * / // % ** @, unary - + not ~, and / or
    comparisons         == != < <= > >= in, not in, is, is not (chainable)
    conditional         a if cond else b
    displays            [a, b], (a, b), {k: v}, {a, b}
    calls               f(x, key=y), item.format(), len(items)

Rejected at parse time: lambdas, comprehensions, f-strings, walrus,
starred arguments.

Lookup:
    Bare names resolve through the layered model (see ``imprint.scope``),
    then the literal aliases, then a few safe builtins. ``a.b`` on a mapping
    reads the key ``b`` before the attribute ``b``.

Dispatch:
    Evaluation is an O(1) dict lookup from AST node type to handler.

"""

from __future__ import annotations

import ast
import operator
from collections.abc import Callable
from typing import Any

from imprint.environment.exceptions import (
    ErrorCode,
    ExpressionSyntaxError,
    TemplateRuntimeError,
    UndefinedError,
)
from imprint.scope import MISSING, lookup_member, lookup_name, visible_names

_LITERAL_NAMES: dict[str, Any] = {"true": True, "false": False, "null": None}

SAFE_BUILTINS: dict[str, Callable[..., Any]] = {
    "abs": abs,
    "bool": bool,
    "dict": dict,
    "float": float,
    "int": int,
    "len": len,
    "list": list,
    "max": max,
    "min": min,
    "range": range,
    "round": round,
    "sorted": sorted,
    "str": str,
    "sum": sum,
}

_BINARY_OPERATORS: dict[type[ast.operator], Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
    ast.MatMult: operator.matmul,
    ast.LShift: operator.lshift,
    ast.RShift: operator.rshift,
    ast.BitOr: operator.or_,
    ast.BitAnd: operator.and_,
    ast.BitXor: operator.xor,
}

_UNARY_OPERATORS: dict[type[ast.unaryop], Callable[[Any], Any]] = {
    ast.USub: operator.neg,
    ast.UAdd: operator.pos,
    ast.Not: operator.not_,
    ast.Invert: operator.invert,
}

_COMPARISONS: dict[type[ast.cmpop], Callable[[Any, Any], bool]] = {
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
    ast.Is: operator.is_,
    ast.IsNot: operator.is_not,
    ast.In: lambda left, right: left in right,
    ast.NotIn: lambda left, right: left not in right,
}

_Evaluator = Callable[[Any, Any, str], Any]


def _evaluate(node: ast.expr, model: Any, source: str) -> Any:
    return _EVALUATORS[type(node)](node, model, source)


def _eval_constant(node: ast.Constant, model: Any, source: str) -> Any:
    return node.value


def _eval_name(node: ast.Name, model: Any, source: str) -> Any:
    value = lookup_name(model, node.id)
    if value is not MISSING:
        return value
    if node.id in _LITERAL_NAMES:
        return _LITERAL_NAMES[node.id]
    if node.id in SAFE_BUILTINS:
        return SAFE_BUILTINS[node.id]
    raise UndefinedError(node.id, source, available_names=visible_names(model))


def _eval_attribute(node: ast.Attribute, model: Any, source: str) -> Any:
    value = lookup_member(_evaluate(node.value, model, source), node.attr)
    if value is MISSING:
        raise UndefinedError(ast.unparse(node), source)
    return value


def _eval_subscript(node: ast.Subscript, model: Any, source: str) -> Any:
    container = _evaluate(node.value, model, source)
    key = _evaluate(node.slice, model, source)
    try:
        return container[key]
    except (KeyError, IndexError):
        raise UndefinedError(ast.unparse(node), source) from None


def _eval_slice(node: ast.Slice, model: Any, source: str) -> slice:
    return slice(
        _evaluate(node.lower, model, source) if node.lower else None,
        _evaluate(node.upper, model, source) if node.upper else None,
        _evaluate(node.step, model, source) if node.step else None,
    )


def _eval_binop(node: ast.BinOp, model: Any, source: str) -> Any:
    op = _BINARY_OPERATORS[type(node.op)]
    return op(_evaluate(node.left, model, source), _evaluate(node.right, model, source))


def _eval_unaryop(node: ast.UnaryOp, model: Any, source: str) -> Any:
    return _UNARY_OPERATORS[type(node.op)](_evaluate(node.operand, model, source))


def _eval_boolop(node: ast.BoolOp, model: Any, source: str) -> Any:
    # Short-circuit, returning the deciding operand like Python does
    value: Any = None
    if isinstance(node.op, ast.And):
        for operand in node.values:
            value = _evaluate(operand, model, source)
            if not value:
                return value
        return value
    for operand in node.values:
        value = _evaluate(operand, model, source)
        if value:
            return value
    return value


def _eval_compare(node: ast.Compare, model: Any, source: str) -> bool:
    left = _evaluate(node.left, model, source)
    for op, comparator in zip(node.ops, node.comparators, strict=True):
        right = _evaluate(comparator, model, source)
        if not _COMPARISONS[type(op)](left, right):
            return False
        left = right
    return True


def _eval_ifexp(node: ast.IfExp, model: Any, source: str) -> Any:
    if _evaluate(node.test, model, source):
        return _evaluate(node.body, model, source)
    return _evaluate(node.orelse, model, source)


def _eval_list(node: ast.List, model: Any, source: str) -> list[Any]:
    return [_evaluate(elt, model, source) for elt in node.elts]


def _eval_tuple(node: ast.Tuple, model: Any, source: str) -> tuple[Any, ...]:
    return tuple(_evaluate(elt, model, source) for elt in node.elts)


def _eval_set(node: ast.Set, model: Any, source: str) -> set[Any]:
    return {_evaluate(elt, model, source) for elt in node.elts}


def _eval_dict(node: ast.Dict, model: Any, source: str) -> dict[Any, Any]:
    result: dict[Any, Any] = {}
    for key, value in zip(node.keys, node.values, strict=True):
        if key is None:
            result.update(_evaluate(value, model, source))
        else:
            result[_evaluate(key, model, source)] = _evaluate(value, model, source)
    return result


def _eval_call(node: ast.Call, model: Any, source: str) -> Any:
    func = _evaluate(node.func, model, source)
    if not callable(func):
        raise TemplateRuntimeError(
            f"'{ast.unparse(node.func)}' is not callable ({type(func).__name__})",
            expression=source,
        )
    args = [_evaluate(arg, model, source) for arg in node.args]
    kwargs: dict[str, Any] = {}
    for keyword in node.keywords:
        value = _evaluate(keyword.value, model, source)
        if keyword.arg is None:
            kwargs.update(value)
        else:
            kwargs[keyword.arg] = value
    return func(*args, **kwargs)


_EVALUATORS: dict[type[ast.expr], _Evaluator] = {
    ast.Constant: _eval_constant,
    ast.Name: _eval_name,
    ast.Attribute: _eval_attribute,
    ast.Subscript: _eval_subscript,
    ast.Slice: _eval_slice,
    ast.BinOp: _eval_binop,
    ast.UnaryOp: _eval_unaryop,
    ast.BoolOp: _eval_boolop,
    ast.Compare: _eval_compare,
    ast.IfExp: _eval_ifexp,
    ast.List: _eval_list,
    ast.Tuple: _eval_tuple,
    ast.Set: _eval_set,
    ast.Dict: _eval_dict,
    ast.Call: _eval_call,
}


class CompiledExpression:
    """A parsed placeholder. Immutable; evaluate it against any model."""

    __slots__ = ("_body", "source")

    def __init__(self, source: str, body: ast.expr):
        self.source = source
        self._body = body

    def evaluate(self, model: Any) -> Any:
        return _evaluate(self._body, model, self.source)

    def __repr__(self) -> str:
        return f"CompiledExpression({self.source!r})"


class PythonExpressionParser:
    """Parse placeholder text into ``CompiledExpression`` objects.

    Example:
        >>> expr = PythonExpressionParser().parse("item.price * 2")
        >>> expr.evaluate({"item": {"price": 21}})
        42

    Raises:
        ExpressionSyntaxError: For invalid syntax or an unsupported construct
    """

    __slots__ = ()

    def parse(self, text: str) -> CompiledExpression:
        try:
            tree = ast.parse(text, mode="eval")
        except SyntaxError as e:
            col = e.offset - 1 if e.offset else None
            raise ExpressionSyntaxError(e.msg, text, col) from None

        for node in ast.walk(tree.body):
            if isinstance(node, ast.expr) and type(node) not in _EVALUATORS:
                raise ExpressionSyntaxError(
                    f"unsupported construct '{type(node).__name__}'",
                    text,
                    node.col_offset,
                    code=ErrorCode.UNSUPPORTED_EXPRESSION,
                )
        return CompiledExpression(text, tree.body)
