"""imprint Environment — shared configuration and template loading.

An Environment holds the defaults every prepared template receives
(directive handlers, caller renderers, attribute handling, the expression
parser and the diagnostic sink) and resolves template names through a
loader.

Template names:
    "layouts/base.html"            the document's template (see ``as_template``)
    "widgets.html#card"            the template with id (or name) "card" in it

Caching:
    Parsed documents, resolved templates and prepared templates are cached
    by name. Prepared templates are cached only when the template and every
    ancestor were given by name. ``clear_cache()`` drops all three.

Example:
    >>> env = Environment(loader=DictLoader({
    ...     "base.html": "<main><template name='body'>empty</template></main>",
    ...     "page.html": "<template name='body'>{{ who }}</template>",
    ... }))
    >>> env.render_to_string("page.html", {"who": "you"}, extends="base.html")
    '<main>you</main>'

"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from imprint.environment.exceptions import TemplateConfigError, TemplateNotFoundError
from imprint.nodes import Element
from imprint.parser import as_template, find_template, parse_markup, parse_template
from imprint.template import PreparedTemplate, RenderOptions, prepare_template

if TYPE_CHECKING:
    from imprint.attributes import AttributeHandler, AttributePolicy
    from imprint.builders.base import Builder
    from imprint.diagnostics import DiagnosticSink
    from imprint.environment.loaders import Loader
    from imprint.expressions.protocol import ExpressionParser
    from imprint.nodes import Fragment
    from imprint.render_context import Handler, Renderer

logger = logging.getLogger(__name__)

FRAGMENT_SEPARATOR = "#"

TemplateRef = str | Element
ExtendsRef = TemplateRef | Sequence[TemplateRef] | None


@dataclass
class Environment:
    """Configuration shared by every template it loads and prepares.

    Attributes:
        loader: Source of markup documents (``DictLoader``, ``FileSystemLoader``, ...)
        handlers: Directive handlers; ``None`` means ``DEFAULT_HANDLERS``
        renderers: Block renderers offered to every template
        attribute_handler: Interceptor for claimed attribute names
        attribute_policy: Assignment for unclaimed attributes
        expression_parser: Parser for ``{{ }}`` placeholders
        diagnostics: Sink for non-fatal diagnostics

    Thread-Safety:
        Cache writes are single dict assignments. Two threads loading the
        same name may both parse it; the last write wins and both results
        render identically.
    """

    loader: Loader | None = None
    handlers: Mapping[str, Handler] | None = None
    renderers: Mapping[str, Renderer] | None = None
    attribute_handler: AttributeHandler | None = None
    attribute_policy: AttributePolicy | None = None
    expression_parser: ExpressionParser | None = None
    diagnostics: DiagnosticSink | None = None

    _documents: dict[str, Fragment] = field(default_factory=dict, init=False, repr=False)
    _templates: dict[str, Element] = field(default_factory=dict, init=False, repr=False)
    _prepared: dict[tuple[str, tuple[str, ...]], PreparedTemplate] = field(
        default_factory=dict, init=False, repr=False
    )

    def options(self, **overrides: Any) -> RenderOptions:
        """``RenderOptions`` carrying this environment's defaults plus ``overrides``."""
        values: dict[str, Any] = {
            "attribute_handler": self.attribute_handler,
            "renderers": self.renderers,
            "handlers": self.handlers,
            "attribute_policy": self.attribute_policy,
            "expression_parser": self.expression_parser,
            "diagnostics": self.diagnostics,
        }
        values.update(overrides)
        return RenderOptions(**values)

    def load_document(self, name: str) -> Fragment:
        """Parse (once) and return the document called ``name``."""
        document = self._documents.get(name)
        if document is not None:
            return document
        if self.loader is None:
            raise TemplateNotFoundError(
                f"Template '{name}' requested but the environment has no loader"
            )
        source, filename = self.loader.get_source(name)
        logger.debug("Parsing %s from %s", name, filename or "<memory>")
        document = parse_markup(source)
        self._documents[name] = document
        return document

    def get_template(self, name: str) -> Element:
        """Resolve ``name`` (optionally ``"document#key"``) to a template element.

        Raises:
            TemplateNotFoundError: If the document or the keyed template is missing
        """
        template = self._templates.get(name)
        if template is not None:
            return template

        document_name, _, key = name.partition(FRAGMENT_SEPARATOR)
        document = self.load_document(document_name)
        if key:
            found = find_template(document, key)
            if found is None:
                raise TemplateNotFoundError(
                    f"No <template> with id or name '{key}' in '{document_name}'"
                )
            template = found
        else:
            template = as_template(document)

        self._templates[name] = template
        return template

    def from_string(self, source: str) -> Element:
        """Parse an inline template. Not cached."""
        return parse_template(source)

    def _resolve(self, ref: TemplateRef | None, role: str) -> Element:
        if ref is None:
            raise TemplateConfigError(f"{role} is required, got None")
        if isinstance(ref, str):
            return self.get_template(ref)
        return ref

    def prepare(
        self,
        template: TemplateRef | None,
        *,
        extends: ExtendsRef = None,
        **overrides: Any,
    ) -> PreparedTemplate:
        """Prepare ``template`` (a name or element) with this environment's defaults.

        Args:
            template: Template name or element
            extends: Parent name/element, or ancestors nearest first
            **overrides: ``RenderOptions`` fields that replace the environment's

        Raises:
            TemplateConfigError: For a ``None`` template or ancestor
            TemplateNotFoundError: If a named template cannot be loaded
        """
        if extends is None:
            chain: tuple[TemplateRef | None, ...] = ()
        elif isinstance(extends, (str, Element)):
            chain = (extends,)
        else:
            chain = tuple(extends)

        key = None
        if isinstance(template, str) and not overrides and all(isinstance(r, str) for r in chain):
            key = (template, tuple(chain))  # type: ignore[arg-type]
            cached = self._prepared.get(key)
            if cached is not None:
                return cached

        label = template if isinstance(template, str) else None
        element = self._resolve(template, "Template")
        ancestors = tuple(
            self._resolve(ref, f"Ancestor template #{i}") for i, ref in enumerate(chain)
        )
        prepared = prepare_template(element, self.options(extends=ancestors, **overrides), name=label)
        if key is not None:
            self._prepared[key] = prepared
        return prepared

    def render(
        self,
        template: TemplateRef,
        builder: Builder,
        model: Any = None,
        **kwargs: Any,
    ) -> None:
        """Prepare ``template`` and render it once into ``builder``."""
        self.prepare(template, **kwargs)(builder, model)

    def render_to_string(self, template: TemplateRef, model: Any = None, **kwargs: Any) -> str:
        return self.prepare(template, **kwargs).render_to_string(model)

    def list_templates(self) -> list[str]:
        if self.loader is None:
            return []
        list_templates = getattr(self.loader, "list_templates", None)
        return list_templates() if list_templates is not None else []

    def clear_cache(self) -> None:
        self._documents.clear()
        self._templates.clear()
        self._prepared.clear()
