"""Custom directives, attribute handlers and caller renderers.

- ``unless``: a directive handler added next to the built-in ``if``/``repeat``
- ``on-*`` attributes: claimed by a PrefixAttributeHandler and wired as
  event listeners instead of being assigned to the element
- ``toolbar``: a named block filled by the caller rather than a template

Run:
    python app.py
"""

from imprint import (
    DEFAULT_HANDLERS,
    CollectingDiagnostics,
    Element,
    PrefixAttributeHandler,
    RenderContext,
    TreeBuilder,
    parse_template,
    prepare_template,
    render_content,
)


def unless_handler(template: Element, context: RenderContext) -> None:
    """Render content once when the ``unless`` attribute is falsy."""
    attr = template.get_attribute_node("unless")
    if attr is not None and not context.get_value(attr):
        render_content(template, context)


# (tag, event, handler name) for every claimed on-* attribute
listeners: list[tuple[str, str, str | None]] = []


def bind_event(element, name, value, model) -> None:
    listeners.append((element.tag, name.removeprefix("on-"), value))


def render_toolbar(context: RenderContext) -> None:
    button = context.builder.open("button")
    button.set_attribute("type", "button")
    context.builder.text("Save")
    context.builder.close("button")


template = parse_template("""\
<form on-submit="save">
    <template name="toolbar"></template>
    <template type="unless" unless="{{ user.admin }}"><p>Read-only</p></template>
    <template type="repeat" repeat="{{ fields }}">
        <input name$="{{ item }}" on-change="validate">
    </template>
    <template type="mystery">ignored</template>
</form>""")

diagnostics = CollectingDiagnostics()

prepared = prepare_template(
    template,
    handlers={**DEFAULT_HANDLERS, "unless": unless_handler},
    attribute_handler=PrefixAttributeHandler("on-", bind_event),
    renderers={"toolbar": render_toolbar},
    diagnostics=diagnostics,
)

builder = TreeBuilder()
prepared(builder, {"user": {"admin": False}, "fields": ["title", "body"]})
output = builder.to_html()


def main() -> None:
    print(output)
    print("Listeners:", listeners)
    for diagnostic in diagnostics:
        print("Diagnostic:", diagnostic)


if __name__ == "__main__":
    main()
