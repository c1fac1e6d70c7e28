"""Markup parser: node shapes, template detection and lookup."""

from __future__ import annotations

import pytest

from imprint import Comment, Element, Text, find_template, parse_markup, parse_template
from imprint.parser import as_template


def only_child(source: str) -> Element:
    [node] = parse_markup(source).children
    assert isinstance(node, Element)
    return node


class TestParseMarkup:
    def test_elements_and_text(self) -> None:
        p = only_child("<p>a<br>b</p>")
        assert [type(n).__name__ for n in p.children] == ["Text", "Element", "Text"]
        assert p.children[1].tag == "br"
        assert p.children[1].children == ()

    def test_template_children_live_in_content(self) -> None:
        template = only_child('<template id="t"><b>x</b></template>')
        assert template.is_template
        assert template.children == ()
        assert template.content is not None
        assert template.content.children[0].tag == "b"

    def test_attributes(self) -> None:
        element = only_child('<input Value$="{{ v }}" disabled>')
        assert [(a.name, a.value) for a in element.attributes] == [
            ("value$", "{{ v }}"),
            ("disabled", ""),
        ]

    def test_character_references_decoded_and_text_merged(self) -> None:
        p = only_child("<p>a &amp; b&#33;</p>")
        assert len(p.children) == 1
        assert p.children[0].text == "a & b!"

    def test_comments(self) -> None:
        p = only_child("<p><!-- note --></p>")
        [comment] = p.children
        assert isinstance(comment, Comment)
        assert comment.text == " note "

    def test_doctype_dropped(self) -> None:
        assert [n.tag for n in parse_markup("<!DOCTYPE html><p>x</p>").children] == ["p"]

    def test_stray_end_tag_ignored(self) -> None:
        p = only_child("<p>a</span>b</p>")
        assert [n.text for n in p.children] == ["ab"]

    def test_unclosed_elements_closed_at_end(self) -> None:
        div = only_child("<div><span>x")
        assert div.children[0].tag == "span"
        assert div.children[0].children[0].text == "x"

    def test_end_tag_closes_inner_elements(self) -> None:
        fragment = parse_markup("<div><p>a</div>b")
        div, text = fragment.children
        assert div.children[0].tag == "p"
        assert isinstance(text, Text)
        assert text.text == "b"

    def test_positions(self) -> None:
        div = only_child("<div>\n  <span>x</span>\n</div>")
        span = div.children[1]
        assert (div.lineno, div.col_offset) == (1, 0)
        assert (span.lineno, span.col_offset) == (2, 2)
        assert span.attributes == ()

    def test_text_takes_preceding_element_position(self) -> None:
        div = only_child("<div>\n  <span>x</span>tail</div>")
        lead, span, tail = div.children
        assert (lead.lineno, lead.col_offset) == (1, 0)
        assert (tail.lineno, tail.col_offset) == (2, 2)

    def test_whitespace_only_text_collapsed(self) -> None:
        div = only_child("<div>\n    <b>x</b>   <i>y</i></div>")
        assert [n.text for n in div.children if isinstance(n, Text)] == ["\n", " "]

    def test_class_value_kept_as_written(self) -> None:
        element = only_child('<p class$="a  b" class="c d">x</p>')
        assert [(a.name, a.value) for a in element.attributes] == [
            ("class$", "a  b"),
            ("class", "c d"),
        ]

    def test_processing_instruction_dropped(self) -> None:
        assert [n.tag for n in parse_markup('<?xml version="1.0"?><p>x</p>').children] == ["p"]


class TestParseTemplate:
    @pytest.mark.parametrize(
        "source",
        ['<template id="t">x</template>', '\n  <template id="t">x</template>\n<!-- c -->'],
    )
    def test_plain_template_returned_as_is(self, source: str) -> None:
        template = parse_template(source)
        assert template.get_attribute("id") == "t"

    @pytest.mark.parametrize(
        "source",
        [
            "<div>x</div>",
            "text",
            '<template name="body">x</template>',
            '<template type="if" if="{{ a }}">x</template>',
            "<template></template><template></template>",
            "",
        ],
    )
    def test_everything_else_is_wrapped(self, source: str) -> None:
        template = parse_template(source)
        assert template.is_template
        assert template.attributes == ()
        assert template.content is not None
        assert template.lineno == 1

    def test_wrapped_content_is_the_whole_fragment(self) -> None:
        fragment = parse_markup("a<b>c</b>")
        assert as_template(fragment).content is fragment


class TestFindTemplate:
    DOCUMENT = (
        '<template name="card">by name</template>'
        '<div><template id="card">by id</template></div>'
        '<template id="outer"><template id="inner">i</template></template>'
    )

    def test_id_before_name(self) -> None:
        found = find_template(parse_markup(self.DOCUMENT), "card")
        assert found is not None
        assert found.get_attribute("id") == "card"

    def test_name_fallback(self) -> None:
        doc = parse_markup('<template name="only">x</template>')
        assert find_template(doc, "only") is not None

    def test_descends_into_template_content(self) -> None:
        found = find_template(parse_markup(self.DOCUMENT), "inner")
        assert found is not None
        assert found.content.children[0].text == "i"

    def test_searches_template_root_content(self) -> None:
        root = parse_template(self.DOCUMENT)
        assert find_template(root, "outer") is not None

    def test_missing(self) -> None:
        assert find_template(parse_markup(self.DOCUMENT), "nope") is None
