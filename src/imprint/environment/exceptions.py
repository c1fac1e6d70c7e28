"""Exceptions for the imprint template engine.

Exception Hierarchy:
TemplateError (base)
├── TemplateConfigError       # Missing / non-template input at prepare time
├── TemplateNotFoundError     # Template not found by loader
├── ExpressionSyntaxError     # Placeholder text is not a valid expression
├── TemplateRuntimeError      # Evaluation fault during render
│   └── BuilderError          # Unbalanced open/close calls on a builder
└── UndefinedError            # Undefined name or attribute in an expression

Only configuration errors are raised by the engine itself. Expression
errors come from the evaluator and propagate through ``render`` untouched;
the engine performs no recovery.

Example:
    ```
    IMP-RUN-001: Undefined name 'titel' in expression 'titel.upper()'. Did you mean 'title'?
      Hint: Pass 'titel' in the model, or bind it in an enclosing repeat
    ```

"""

from __future__ import annotations

from enum import Enum

from imprint.environment import terminal


class ErrorCode(Enum):
    """Searchable error codes for imprint errors.

    Format: IMP-{CATEGORY}-{NUMBER}
    Categories: CFG (configuration), EXP (expression), RUN (runtime),
    TPL (template loading)
    """

    # Configuration errors (IMP-CFG-xxx)
    MISSING_TEMPLATE = "IMP-CFG-001"
    NOT_A_TEMPLATE = "IMP-CFG-002"

    # Expression errors (IMP-EXP-xxx)
    INVALID_EXPRESSION = "IMP-EXP-001"
    UNSUPPORTED_EXPRESSION = "IMP-EXP-002"

    # Runtime errors (IMP-RUN-xxx)
    UNDEFINED_VARIABLE = "IMP-RUN-001"
    RUNTIME_ERROR = "IMP-RUN-002"
    UNBALANCED_BUILDER = "IMP-RUN-003"

    # Template loading errors (IMP-TPL-xxx)
    TEMPLATE_NOT_FOUND = "IMP-TPL-001"

    @property
    def category(self) -> str:
        """Error category (e.g., 'runtime', 'expression', 'configuration')."""
        prefix = self.value.split("-")[1]
        return {
            "CFG": "configuration",
            "EXP": "expression",
            "RUN": "runtime",
            "TPL": "template",
        }.get(prefix, "unknown")


class TemplateError(Exception):
    """Base exception for all imprint errors.

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a short diagnostic without traceback noise."""
        header = str(self)
        if self.code and self.code.value not in header:
            header = terminal.format_error_header(self.code.value, header)
        return header


class TemplateConfigError(TemplateError):
    """A required template was missing or unusable when preparing a render.

    Raised immediately by ``prepare_template`` for a ``None`` template, an
    element that is not a ``<template>``, or a ``None`` entry in the
    ``extends`` chain. Never silently defaulted.
    """

    code: ErrorCode | None = ErrorCode.MISSING_TEMPLATE

    def __init__(self, message: str, *, code: ErrorCode | None = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)


class TemplateNotFoundError(TemplateError):
    """Template not found by any configured loader.

    Example:
            >>> env.get_template("missing.html")
        TemplateNotFoundError: Template 'missing.html' not found in: templates/

    """

    code: ErrorCode | None = ErrorCode.TEMPLATE_NOT_FOUND


class ExpressionSyntaxError(TemplateError):
    """Placeholder text could not be parsed as an expression.

    When ``col_offset`` is known the message points a caret at it:

        Expression Error: invalid syntax
           |
           | user. name
           |      ^
    """

    code: ErrorCode | None = ErrorCode.INVALID_EXPRESSION

    def __init__(
        self,
        message: str,
        expression: str,
        col_offset: int | None = None,
        *,
        code: ErrorCode | None = None,
    ):
        self.message = message
        self.expression = expression
        self.col_offset = col_offset
        if code is not None:
            self.code = code
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [f"Expression Error: {self.message}", terminal.dim_text("   |")]
        parts.append(f"{terminal.dim_text('   |')} {self.expression}")
        if self.col_offset is not None:
            parts.append(terminal.caret_line(self.col_offset))
        return "\n".join(parts)


class TemplateRuntimeError(TemplateError):
    """Evaluation fault raised while rendering.

    Attributes:
        message: Error description
        expression: Expression source that failed, if any
        suggestion: Actionable fix suggestion
    """

    code: ErrorCode | None = ErrorCode.RUNTIME_ERROR

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        suggestion: str | None = None,
    ):
        self.message = message
        self.expression = expression
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [f"Runtime Error: {self.message}"]
        if self.expression:
            parts.append(f"  Expression: {self.expression}")
        if self.suggestion:
            parts.append(f"  {terminal.hint('Suggestion:')} {self.suggestion}")
        return "\n".join(parts)


class BuilderError(TemplateRuntimeError):
    """A builder received a close() that does not match the open element."""

    code: ErrorCode | None = ErrorCode.UNBALANCED_BUILDER


class UndefinedError(TemplateError):
    """Raised when an expression references a name the model does not bind.

    If ``available_names`` is provided, a "Did you mean?" suggestion is
    included when a close match is found.

    Example:
            >>> PythonExpressionParser().parse("usr").evaluate({"user": 1})
        UndefinedError: Undefined name 'usr'. Did you mean 'user'?
    """

    code: ErrorCode | None = ErrorCode.UNDEFINED_VARIABLE

    def __init__(
        self,
        name: str,
        expression: str | None = None,
        available_names: frozenset[str] | None = None,
    ):
        self.name = name
        self.expression = expression
        self._available_names = available_names
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Undefined name '{self.name}'"
        if self.expression and self.expression != self.name:
            msg += f" in expression '{self.expression}'"

        if self._available_names:
            from difflib import get_close_matches

            matches = get_close_matches(self.name, self._available_names, n=1, cutoff=0.6)
            if matches:
                msg += f". Did you mean '{terminal.suggestion(matches[0])}'?"

        root = self.name.split(".", 1)[0]
        msg += (
            f"\n  {terminal.hint('Hint:')} Pass '{root}' in the model, "
            f"or bind it in an enclosing repeat"
        )
        return msg
