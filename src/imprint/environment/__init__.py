"""imprint environment — configuration, loaders and exceptions.

``Environment`` is imported lazily: the exception module is needed by
low-level packages (builders, expressions) that the Environment itself
depends on.
"""

from imprint.environment.exceptions import (
    BuilderError,
    ErrorCode,
    ExpressionSyntaxError,
    TemplateConfigError,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    UndefinedError,
)
from imprint.environment.loaders import (
    ChoiceLoader,
    DictLoader,
    FileSystemLoader,
    FunctionLoader,
    Loader,
)

__all__ = [
    "BuilderError",
    "ChoiceLoader",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "ExpressionSyntaxError",
    "FileSystemLoader",
    "FunctionLoader",
    "Loader",
    "TemplateConfigError",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "UndefinedError",
]


def __getattr__(name: str) -> object:
    if name == "Environment":
        from imprint.environment.core import Environment

        globals()["Environment"] = Environment
        return Environment
    raise AttributeError(f"module 'imprint.environment' has no attribute {name!r}")
