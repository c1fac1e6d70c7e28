"""imprint PreparedTemplate — a template resolved once, rendered many times.

``prepare_template`` validates its input, resolves the inheritance chain and
builds the expression cache. The result is a callable:

    ```
    PreparedTemplate
    ├── _render: Renderer           # composed inheritance chain
    ├── _expressions: ExpressionCache
    ├── _renderers / _handlers      # caller registries (immutable)
    └── _attribute_*, _diagnostics   # from RenderOptions
    ```

Each call creates a fresh RenderContext around the caller's builder and
model. Nothing else is created per call: the composed renderer and the
parsed expressions are reused.

Thread-Safety:
    A prepared template holds no per-render state. The expression cache is
    append-only; two renders seeing the same unparsed node parse it twice at
    worst and store equivalent results.

Example:
    >>> page = prepare_template(parse_template("<p>{{ greeting }}</p>"))
    >>> page.render_to_string({"greeting": "hi"})
    '<p>hi</p>'

"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from imprint.attributes import assign_attribute
from imprint.builders.tree import TreeBuilder
from imprint.diagnostics import LoggingDiagnostics
from imprint.environment.exceptions import ErrorCode, TemplateConfigError
from imprint.expressions.cache import ExpressionCache
from imprint.handlers import DEFAULT_HANDLERS
from imprint.inheritance import collect_blocks, compose, find_super
from imprint.nodes import Element
from imprint.registry import Registry, as_registry
from imprint.render_context import RenderContext

if TYPE_CHECKING:
    from imprint.attributes import AttributeHandler, AttributePolicy
    from imprint.builders.base import Builder
    from imprint.builders.tree import OutputFragment
    from imprint.diagnostics import DiagnosticSink
    from imprint.expressions.protocol import ExpressionParser
    from imprint.render_context import Handler, Renderer

TemplateChain = Element | Sequence[Element | None] | None


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Configuration accepted by ``prepare_template`` and ``render``.

    Attributes:
        attribute_handler: Optional interceptor for claimed attribute names
        renderers: Caller-supplied block renderers (name → Renderer)
        handlers: Directive handlers; replaces ``DEFAULT_HANDLERS`` when given
        extends: Parent template, or ancestors nearest first
        attribute_policy: Assignment for unclaimed attributes
        expression_parser: Parser used for ``{{ }}`` placeholders
        diagnostics: Sink for non-fatal diagnostics
    """

    attribute_handler: AttributeHandler | None = None
    renderers: Mapping[str, Renderer] | None = None
    handlers: Mapping[str, Handler] | None = None
    extends: TemplateChain = None
    attribute_policy: AttributePolicy | None = None
    expression_parser: ExpressionParser | None = None
    diagnostics: DiagnosticSink | None = None


def _require_template(value: Any, role: str) -> Element:
    if value is None:
        raise TemplateConfigError(f"{role} is required, got None")
    if not isinstance(value, Element) or not value.is_template:
        raise TemplateConfigError(
            f"{role} must be a <template> element, got {value!r}",
            code=ErrorCode.NOT_A_TEMPLATE,
        )
    return value


def _ancestors(extends: TemplateChain) -> tuple[Element, ...]:
    if extends is None:
        return ()
    if isinstance(extends, Element):
        return (_require_template(extends, "Parent template"),)
    return tuple(
        _require_template(parent, f"Ancestor template #{i}") for i, parent in enumerate(extends)
    )


class PreparedTemplate:
    """Reusable render function produced by ``prepare_template``.

    Methods:
        __call__(builder, model): Render into ``builder``
        render_to_tree(model): Render into a new TreeBuilder, return its root
        render_to_string(model): Render and serialize to HTML
        list_blocks(): Block names this template exports to its parent

    """

    __slots__ = (
        "_ancestors",
        "_attribute_handler",
        "_attribute_policy",
        "_diagnostics",
        "_expressions",
        "_handlers",
        "_render",
        "_renderers",
        "_template",
        "name",
    )

    def __init__(
        self,
        template: Element,
        options: RenderOptions,
        name: str | None = None,
    ):
        self._template = template
        self._ancestors = _ancestors(options.extends)
        self.name = name
        self._renderers: Registry[Renderer] = as_registry(options.renderers)
        self._handlers: Registry[Handler] = (
            DEFAULT_HANDLERS if options.handlers is None else as_registry(options.handlers)
        )
        self._attribute_handler = options.attribute_handler
        self._attribute_policy = options.attribute_policy or assign_attribute
        self._diagnostics = (
            LoggingDiagnostics() if options.diagnostics is None else options.diagnostics
        )
        self._expressions = ExpressionCache(options.expression_parser)
        self._render = compose(template, self._ancestors)

    @property
    def template(self) -> Element:
        return self._template

    @property
    def ancestors(self) -> tuple[Element, ...]:
        return self._ancestors

    @property
    def expressions(self) -> ExpressionCache:
        """Parsed-expression cache shared by every render of this template."""
        return self._expressions

    def __call__(self, builder: Builder, model: Any = None) -> None:
        context = RenderContext(
            model=model,
            renderers=self._renderers,
            handlers=self._handlers,
            builder=builder,
            expressions=self._expressions,
            attribute_handler=self._attribute_handler,
            attribute_policy=self._attribute_policy,
            diagnostics=self._diagnostics,
        )
        self._render(context)

    render = __call__

    def render_to_tree(self, model: Any = None) -> OutputFragment:
        builder = TreeBuilder()
        self(builder, model)
        return builder.root

    def render_to_string(self, model: Any = None) -> str:
        """Render into a TreeBuilder and serialize the result as HTML."""
        builder = TreeBuilder()
        self(builder, model)
        return builder.to_html()

    def list_blocks(self) -> list[str]:
        """Names of the blocks this template overrides, sorted.

        Includes blocks declared inside an explicit ``super`` node.
        """
        names = set(collect_blocks(self._template))
        super_node = find_super(self._template)
        if super_node is not None:
            names.update(collect_blocks(super_node))
        return sorted(names)

    def __repr__(self) -> str:
        return f"<PreparedTemplate {self.name or '(inline)'!s} extends={len(self._ancestors)}>"


def prepare_template(
    template: Element | None,
    options: RenderOptions | None = None,
    *,
    name: str | None = None,
    **overrides: Any,
) -> PreparedTemplate:
    """Resolve ``template`` and its ancestors into a reusable render function.

    Args:
        template: A ``<template>`` element
        options: Base configuration
        name: Label used in reprs and error messages
        **overrides: Individual ``RenderOptions`` fields, applied over ``options``

    Raises:
        TemplateConfigError: If the template or any ancestor is missing or
            is not a ``<template>`` element

    Example:
        >>> base = parse_template('<main><template name="body">empty</template></main>')
        >>> page = parse_template('<template name="body">full</template>')
        >>> prepare_template(page, extends=base).render_to_string()
        '<main>full</main>'
    """
    template = _require_template(template, "Template")
    options = options or RenderOptions()
    if overrides:
        options = replace(options, **overrides)
    return PreparedTemplate(template, options, name=name)


def render(
    template: Element | None,
    builder: Builder,
    model: Any = None,
    options: RenderOptions | None = None,
    **overrides: Any,
) -> None:
    """Prepare ``template`` and render it once into ``builder``."""
    prepare_template(template, options, **overrides)(builder, model)
