"""Default expression evaluator (safe Python expression subset)."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from imprint import (
    ErrorCode,
    ExpressionSyntaxError,
    Scope,
    TemplateRuntimeError,
    UndefinedError,
)
from imprint.expressions import PythonExpressionParser

_parser = PythonExpressionParser()


def evaluate(source: str, model: object = None) -> object:
    return _parser.parse(source).evaluate(model)


@dataclass
class User:
    name: str
    tags: list[str]

    def greet(self, greeting: str = "hi") -> str:
        return f"{greeting} {self.name}"


class TestLiterals:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("1", 1),
            ("2.5", 2.5),
            ("'s'", "s"),
            ("True", True),
            ("None", None),
            ("true", True),
            ("false", False),
            ("null", None),
            ("[1, 2]", [1, 2]),
            ("(1,)", (1,)),
            ("{'a': 1}", {"a": 1}),
            ("{1, 1}", {1}),
        ],
    )
    def test_literal(self, source: str, expected: object) -> None:
        assert evaluate(source) == expected

    def test_model_shadows_literal_aliases(self) -> None:
        assert evaluate("true", {"true": "model"}) == "model"


class TestOperators:
    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("a + b * 2", 7),
            ("(a + b) * 2", 10),
            ("b / 2", 1.5),
            ("b // 2", 1),
            ("b % 2", 1),
            ("a ** 3", 8),
            ("-a", -2),
            ("not a", False),
            ("a < b <= 3", True),
            ("a < b > 5", False),
            ("a in [1, 2]", True),
            ("a not in [1, 2]", False),
            ("a is None", False),
            ("'x' if a else 'y'", "x"),
        ],
    )
    def test_arithmetic_and_comparisons(self, source: str, expected: object) -> None:
        assert evaluate(source, {"a": 2, "b": 3}) == expected

    def test_boolean_operators_return_operand(self) -> None:
        assert evaluate("a or 'default'", {"a": ""}) == "default"
        assert evaluate("a and b", {"a": 1, "b": "last"}) == "last"
        assert evaluate("a and missing", {"a": 0}) == 0

    def test_or_short_circuits(self) -> None:
        assert evaluate("a or missing", {"a": 1}) == 1


class TestMemberAccess:
    def test_mapping_key_before_attribute(self) -> None:
        assert evaluate("d.items", {"d": {"items": [1]}}) == [1]

    def test_object_attribute_and_method(self) -> None:
        user = User("ada", ["x", "y"])
        assert evaluate("user.name", {"user": user}) == "ada"
        assert evaluate("user.greet()", {"user": user}) == "hi ada"
        assert evaluate("user.greet(greeting='yo')", {"user": user}) == "yo ada"

    def test_subscript_and_slice(self) -> None:
        model = {"xs": [1, 2, 3, 4], "row": {"k": "v"}}
        assert evaluate("xs[0]", model) == 1
        assert evaluate("xs[-1]", model) == 4
        assert evaluate("xs[1:3]", model) == [2, 3]
        assert evaluate("xs[::2]", model) == [1, 3]
        assert evaluate("row['k']", model) == "v"

    def test_builtins(self) -> None:
        assert evaluate("len(xs)", {"xs": [1, 2]}) == 2
        assert evaluate("sorted(xs, reverse=True)", {"xs": [1, 2]}) == [2, 1]
        assert evaluate("len", {"len": 5}) == 5

    def test_root_object_model(self) -> None:
        assert evaluate("name", User("ada", [])) == "ada"

    def test_scope_chain(self) -> None:
        scope = Scope({"item": 1}, parent={"item": 0, "outer": "o"})
        assert evaluate("item", scope) == 1
        assert evaluate("outer", scope) == "o"


class TestErrors:
    def test_undefined_name_suggests(self) -> None:
        with pytest.raises(UndefinedError) as exc_info:
            evaluate("usr.name", {"user": 1})
        message = str(exc_info.value)
        assert "Undefined name 'usr'" in message
        assert "Did you mean 'user'?" in message
        assert exc_info.value.code is ErrorCode.UNDEFINED_VARIABLE

    def test_missing_attribute(self) -> None:
        with pytest.raises(UndefinedError, match="user.email"):
            evaluate("user.email", {"user": User("ada", [])})

    def test_missing_key_and_index(self) -> None:
        with pytest.raises(UndefinedError):
            evaluate("row['nope']", {"row": {}})
        with pytest.raises(UndefinedError):
            evaluate("xs[5]", {"xs": []})

    def test_attribute_of_none(self) -> None:
        with pytest.raises(UndefinedError):
            evaluate("user.name", {"user": None})

    def test_not_callable(self) -> None:
        with pytest.raises(TemplateRuntimeError, match="not callable"):
            evaluate("name()", {"name": "x"})

    def test_invalid_syntax(self) -> None:
        with pytest.raises(ExpressionSyntaxError) as exc_info:
            _parser.parse("a +")
        assert exc_info.value.code is ErrorCode.INVALID_EXPRESSION
        assert exc_info.value.expression == "a +"

    @pytest.mark.parametrize(
        "source",
        ["lambda: 1", "[x for x in xs]", "(y := 1)", "f'{x}'", "f(*xs)"],
    )
    def test_unsupported_constructs_rejected_at_parse_time(self, source: str) -> None:
        with pytest.raises(ExpressionSyntaxError) as exc_info:
            _parser.parse(source)
        assert exc_info.value.code is ErrorCode.UNSUPPORTED_EXPRESSION

    def test_parse_does_not_evaluate(self) -> None:
        expression = _parser.parse("missing.attr")
        assert expression.source == "missing.attr"
