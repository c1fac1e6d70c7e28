"""imprint — declarative template rendering over a builder interface.

Templates are plain HTML ``<template>`` markup. Placeholders are Python
expressions in ``{{ }}``, control flow is ``<template type="if|repeat">``,
and named ``<template name="...">`` holes can be filled by a subtemplate or
by the caller. Rendering emits ``open`` / ``text`` / ``close`` calls on a
builder; imprint never produces strings itself.

Quickstart:
    >>> from imprint import parse_template, prepare_template
    >>> card = prepare_template(parse_template("<h1>{{ title }}</h1>"))
    >>> card.render_to_string({"title": "Hi"})
    '<h1>Hi</h1>'

Inheritance:
    >>> base = parse_template("<main><template name='body'>empty</template></main>")
    >>> page = parse_template("<template name='body'><p>{{ text }}</p></template>")
    >>> prepare_template(page, extends=base).render_to_string({"text": "full"})
    '<main><p>full</p></main>'

Architecture:
    markup → parser → node tree ─┐
                                 ├─ prepare_template (inheritance resolved once)
    options (handlers, blocks) ──┘          │
                                            ▼
                          PreparedTemplate(builder, model) → walker → builder

Diagnostics:
    Unknown directives and unresolved blocks never raise. They are reported
    through a ``DiagnosticSink`` (logging by default). Configuration errors
    raise ``TemplateConfigError``; expression errors propagate as they are.

"""

from imprint.attributes import (
    AttributeHandler,
    PrefixAttributeHandler,
    assign_attribute,
    to_camel_case,
)
from imprint.builders import (
    Builder,
    ElementHandle,
    OutputElement,
    OutputFragment,
    RecordingBuilder,
    TreeBuilder,
)
from imprint.diagnostics import (
    CollectingDiagnostics,
    Diagnostic,
    DiagnosticCode,
    DiagnosticSink,
    LoggingDiagnostics,
    Severity,
)
from imprint.environment import (
    BuilderError,
    ChoiceLoader,
    DictLoader,
    Environment,
    ErrorCode,
    ExpressionSyntaxError,
    FileSystemLoader,
    FunctionLoader,
    TemplateConfigError,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    UndefinedError,
)
from imprint.expressions import ExpressionCache, PythonExpressionParser
from imprint.handlers import DEFAULT_HANDLERS, if_handler, repeat_handler
from imprint.nodes import Attribute, Comment, Element, Fragment, Text
from imprint.parser import find_template, parse_markup, parse_template
from imprint.registry import Registry
from imprint.render_context import RenderContext
from imprint.scope import MISSING, Scope
from imprint.template import PreparedTemplate, RenderOptions, prepare_template, render
from imprint.walker import render_content, render_node

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_HANDLERS",
    "MISSING",
    "Attribute",
    "AttributeHandler",
    "Builder",
    "BuilderError",
    "ChoiceLoader",
    "CollectingDiagnostics",
    "Comment",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticSink",
    "DictLoader",
    "Element",
    "ElementHandle",
    "Environment",
    "ErrorCode",
    "ExpressionCache",
    "ExpressionSyntaxError",
    "FileSystemLoader",
    "Fragment",
    "FunctionLoader",
    "LoggingDiagnostics",
    "OutputElement",
    "OutputFragment",
    "PrefixAttributeHandler",
    "PreparedTemplate",
    "PythonExpressionParser",
    "RecordingBuilder",
    "Registry",
    "RenderContext",
    "RenderOptions",
    "Scope",
    "Severity",
    "TemplateConfigError",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "Text",
    "TreeBuilder",
    "UndefinedError",
    "__version__",
    "assign_attribute",
    "find_template",
    "if_handler",
    "parse_markup",
    "parse_template",
    "prepare_template",
    "render",
    "render_content",
    "render_node",
    "repeat_handler",
    "to_camel_case",
]
