"""prepare_template / render configuration and error handling."""

from __future__ import annotations

import logging

import pytest

from imprint import (
    DEFAULT_HANDLERS,
    Element,
    ErrorCode,
    LoggingDiagnostics,
    PreparedTemplate,
    RenderOptions,
    TemplateConfigError,
    Text,
    parse_template,
    prepare_template,
    render,
)


class TestConfigurationErrors:
    def test_none_template(self, recorder) -> None:
        with pytest.raises(TemplateConfigError) as exc_info:
            prepare_template(None)
        assert exc_info.value.code is ErrorCode.MISSING_TEMPLATE
        assert recorder.calls == []

    def test_render_none_template_raises_before_output(self, recorder) -> None:
        with pytest.raises(TemplateConfigError):
            render(None, recorder, {})
        assert recorder.calls == []

    @pytest.mark.parametrize("value", [Element("div"), Text("x"), "<template></template>"])
    def test_not_a_template(self, value) -> None:
        with pytest.raises(TemplateConfigError) as exc_info:
            prepare_template(value)
        assert exc_info.value.code is ErrorCode.NOT_A_TEMPLATE

    def test_none_ancestor(self) -> None:
        parent = parse_template("p")
        with pytest.raises(TemplateConfigError, match="#1"):
            prepare_template(parse_template("c"), extends=[parent, None])

    def test_non_template_ancestor(self) -> None:
        with pytest.raises(TemplateConfigError) as exc_info:
            prepare_template(parse_template("c"), extends=Element("div"))
        assert exc_info.value.code is ErrorCode.NOT_A_TEMPLATE

    def test_format_compact_includes_code(self) -> None:
        with pytest.raises(TemplateConfigError) as exc_info:
            prepare_template(None)
        assert exc_info.value.format_compact().startswith("IMP-CFG-001: ")


class TestOptions:
    def test_keyword_overrides_apply_over_options(self, diagnostics) -> None:
        options = RenderOptions(diagnostics=diagnostics)
        prepared = prepare_template(parse_template("{{ 1 }}"), options, handlers={})
        assert prepared.render_to_string() == "1"

    def test_options_are_immutable(self) -> None:
        options = RenderOptions()
        with pytest.raises(AttributeError):
            options.handlers = {}  # type: ignore[misc]

    def test_default_handlers_used_when_none_given(self, render_html) -> None:
        assert render_html('<template type="if" if="{{ 1 }}">x</template>', handlers=None) == "x"
        assert "if" in DEFAULT_HANDLERS

    def test_custom_expression_parser(self, render_html) -> None:
        class Upper:
            def __init__(self, text: str) -> None:
                self.text = text

            def evaluate(self, model: object) -> str:
                return self.text.upper()

        class UpperParser:
            def parse(self, text: str) -> Upper:
                return Upper(text)

        assert render_html("<p>{{ shout }}</p>", expression_parser=UpperParser()) == "<p>SHOUT</p>"

    def test_logging_diagnostics_default(self, recorder, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="imprint.diagnostics"):
            render(parse_template('<template type="nope"></template>'), recorder)
        assert "IMP-DIA-001" in caplog.text
        assert "nope" in caplog.text

    def test_logging_diagnostics_custom_logger(self, recorder, caplog) -> None:
        log = logging.getLogger("myapp.templates")
        with caplog.at_level(logging.DEBUG, logger="myapp.templates"):
            render(
                parse_template('<template name="hole">d</template>'),
                recorder,
                diagnostics=LoggingDiagnostics(log),
            )
        [record] = caplog.records
        assert record.name == "myapp.templates"
        assert record.levelno == logging.DEBUG
        assert "IMP-DIA-002" in record.getMessage()


class TestPreparedTemplate:
    def test_callable_with_builder(self, recorder) -> None:
        prepared = prepare_template(parse_template("<p>{{ x }}</p>"))
        prepared(recorder, {"x": 1})
        prepared.render(recorder, {"x": 2})
        assert [call for call in recorder.calls if call[0] == "text"] == [("text", 1), ("text", 2)]

    def test_render_to_tree(self) -> None:
        prepared = prepare_template(parse_template("<ul><li>{{ a }}</li></ul>"))
        root = prepared.render_to_tree({"a": "x"})
        assert [li.text_content for li in root.find_all("li")] == ["x"]

    def test_accessors(self) -> None:
        parent = parse_template("p")
        template = parse_template("c")
        prepared = prepare_template(template, extends=parent, name="page")
        assert isinstance(prepared, PreparedTemplate)
        assert prepared.template is template
        assert prepared.ancestors == (parent,)
        assert prepared.name == "page"
        assert repr(prepared) == "<PreparedTemplate page extends=1>"

    def test_expression_cache_belongs_to_prepared_template(self) -> None:
        template = parse_template("<p>{{ x }}</p>")
        first = prepare_template(template)
        second = prepare_template(template)
        first.render_to_string({"x": 1})
        assert first.expressions.parses == 1
        assert second.expressions.parses == 0

    def test_parse_once_across_renders(self) -> None:
        prepared = prepare_template(parse_template('<p title$="{{ t }}">{{ x }}</p>'))
        for n in range(5):
            prepared.render_to_string({"x": n, "t": n})
        assert prepared.expressions.parses == 2
        assert prepared.expressions.hits == 8
        assert prepared.expressions.stats() == {"entries": 2, "parses": 2, "hits": 8}
