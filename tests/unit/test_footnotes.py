"""Unit tests for footnote recognition, label normalization and capture."""

import pytest
from bs4 import BeautifulSoup

from editor2md.context import SerializerState
from editor2md.footnotes import (
    ANCHOR_LABEL_RECOGNIZERS,
    capture_definition,
    collect_footnote_section,
    footnote_item_label,
    is_backreference,
    is_definition_anchor,
    is_footnote_section,
    is_inside_footnote_definition,
    normalize_footnote_label,
    parse_roman_numeral,
    resolve_anchor_reference,
    resolve_reference,
    resolve_superscript_reference,
    strip_label_brackets,
)


def first(html: str, name: str):
    return BeautifulSoup(html, "html.parser").find(name)


@pytest.mark.unit
class TestLabelNormalization:
    @pytest.mark.parametrize(
        "numeral,expected",
        [("I", 1), ("iv", 4), ("IX", 9), ("xiv", 14), ("XL", 40), ("MCMXCIV", 1994)],
    )
    def test_canonical_roman_numerals(self, numeral, expected):
        assert parse_roman_numeral(numeral) == expected

    @pytest.mark.parametrize("value", ["", "IIII", "VV", "IC", "abc", "12"])
    def test_non_canonical_values_are_rejected(self, value):
        assert parse_roman_numeral(value) is None

    def test_roman_labels_become_decimal(self):
        assert normalize_footnote_label("II") == "2"
        assert normalize_footnote_label(" vi ") == "6"

    def test_other_labels_are_trimmed_verbatim(self):
        assert normalize_footnote_label(" 3 ") == "3"
        assert normalize_footnote_label("note") == "note"
        assert normalize_footnote_label("IIII") == "IIII"

    def test_empty_labels(self):
        assert normalize_footnote_label("") == ""
        assert normalize_footnote_label(None) == ""
        assert normalize_footnote_label("   ") == ""

    @pytest.mark.parametrize(
        "text,expected",
        [("[1]", "1"), ("(2).", "2"), (" [iv] ", "iv"), ("3", "3"), ("", "")],
    )
    def test_strip_label_brackets(self, text, expected):
        assert strip_label_brackets(text) == expected


@pytest.mark.unit
class TestDefinitionScope:
    def test_closest_id_is_definition(self):
        anchor = first('<p id="_ftn1"><a href="#x">x</a></p>', "a")
        assert is_inside_footnote_definition(anchor)

    def test_markdown_it_item_id(self):
        anchor = first('<ol><li id="fn1"><a href="#fnref1">back</a></li></ol>', "a")
        assert is_inside_footnote_definition(anchor)

    def test_plain_fn_prefixed_id_is_not_a_definition(self):
        anchor = first('<p id="fnc"><a href="#x">x</a></p>', "a")
        assert not is_inside_footnote_definition(anchor)

    def test_colon_roman_item_id(self):
        anchor = first('<ol><li id="fn:iv"><a href="#fnref:iv">back</a></li></ol>', "a")
        assert is_inside_footnote_definition(anchor)

    def test_closest_id_wins_over_outer_definition(self):
        anchor = first('<div id="_ftn1"><p id="intro"><a href="#x">x</a></p></div>', "a")
        assert not is_inside_footnote_definition(anchor)

    def test_reference_anchor_id_is_not_a_definition(self):
        anchor = first('<p><a href="#fn1" id="fnref1">1</a></p>', "a")
        assert not is_inside_footnote_definition(anchor)


@pytest.mark.unit
class TestAnchorReferences:
    def test_word_reference(self):
        anchor = first('<a href="#_ftn1" name="_ftnref1">[1]</a>', "a")
        assert resolve_anchor_reference(anchor) == "1"

    def test_visible_text_wins_over_href(self):
        anchor = first('<a href="#fn3">[1]</a>', "a")
        assert resolve_anchor_reference(anchor) == "1"

    def test_href_used_when_text_is_empty(self):
        assert resolve_anchor_reference(first('<a href="#fn2"></a>', "a")) == "2"
        assert resolve_anchor_reference(first('<a href="#fn:note"></a>', "a")) == "note"
        assert resolve_anchor_reference(first('<a href="#_ftnref4"></a>', "a")) == "4"

    def test_data_hint_wins(self):
        anchor = first('<a data-footnote-ref="7" href="#x">*</a>', "a")
        assert resolve_anchor_reference(anchor) == "7"

    def test_ordinary_link_is_not_a_reference(self):
        assert resolve_anchor_reference(first('<a href="https://example.com">1</a>', "a")) is None
        assert resolve_anchor_reference(first("<a>plain</a>", "a")) is None

    def test_not_resolved_inside_own_definition(self):
        anchor = first('<p id="_ftn1"><a href="#_ftnref1">[1]</a> Note</p>', "a")
        assert resolve_anchor_reference(anchor) is None
        assert resolve_anchor_reference(anchor, allow_definition=True) == "1"

    def test_recognizers_are_ordered(self):
        names = [recognizer.__name__ for recognizer in ANCHOR_LABEL_RECOGNIZERS]
        assert names.index("_label_from_data_hint") < names.index("_label_from_visible_text")
        assert names.index("_label_from_visible_text") < names.index("_label_from_href")


@pytest.mark.unit
class TestSuperscriptReferences:
    def test_anchor_inside_sup(self):
        assert resolve_superscript_reference(first('<sup><a href="#fn1">1</a></sup>', "sup")) == "1"

    def test_generic_marker(self):
        assert resolve_superscript_reference(first("<sup>3</sup>", "sup")) == "3"

    def test_data_hint(self):
        assert resolve_superscript_reference(first('<sup data-footnote-ref="a">*</sup>', "sup")) == "a"

    def test_prose_is_not_a_marker(self):
        assert resolve_superscript_reference(first("<sup>two words</sup>", "sup")) is None

    def test_not_resolved_inside_definition(self):
        sup = first('<p id="_ftn1"><sup>1</sup> text</p>', "sup")
        assert resolve_superscript_reference(sup) is None

    def test_resolve_reference_normalizes(self):
        assert resolve_reference(first("<sup>[iv]</sup>", "sup")) == "4"
        assert resolve_reference(first('<a href="#fnII">II</a>', "a")) == "2"

    def test_resolve_reference_ignores_other_tags(self):
        assert resolve_reference(first("<span>1</span>", "span")) == ""


@pytest.mark.unit
class TestDefinitionAnchors:
    def test_word_definition_anchor(self):
        assert is_definition_anchor(first('<a name="_ftn1" href="#_ftnref1">[1]</a>', "a"))

    def test_word_reference_anchor_is_not_a_definition(self):
        assert not is_definition_anchor(first('<a href="#_ftn1" name="_ftnref1">[1]</a>', "a"))

    def test_class_role_anchor(self):
        anchor = first('<a class="MsoFootnoteReference" href="#_ftnref1">[1]</a>', "a")
        assert is_definition_anchor(anchor)

    def test_class_role_anchor_pointing_at_definition_is_a_reference(self):
        anchor = first('<a class="MsoFootnoteReference" href="#_ftn1">[1]</a>', "a")
        assert not is_definition_anchor(anchor)

    def test_backref_class_is_not_a_definition(self):
        assert not is_definition_anchor(first('<a class="footnote-backref" href="#fnref1">x</a>', "a"))

    @pytest.mark.parametrize(
        "html",
        [
            '<a class="footnote-backref" href="#x">back</a>',
            '<a href="#fnref2">2</a>',
            '<a href="#_ednref1">1</a>',
            '<a href="#top">&#8617;</a>',
        ],
    )
    def test_backreferences(self, html):
        assert is_backreference(first(html, "a"))


@pytest.mark.unit
class TestCaptureDefinition:
    def test_word_paragraph(self, serializer, state, ctx):
        node = first('<p><a name="_ftn1" href="#_ftnref1">[1]</a> The note.</p>', "p")
        assert capture_definition(node, ctx, state, serializer.serialize_children)
        assert state.footnote_definitions == ["[^1]: The note."]

    def test_definition_id(self, serializer, state, ctx):
        node = first('<p id="_ftnII">Roman note.</p>', "p")
        assert capture_definition(node, ctx, state, serializer.serialize_children)
        assert state.footnote_definitions == ["[^2]: Roman note."]

    def test_source_tree_is_not_mutated(self, serializer, state, ctx):
        soup = BeautifulSoup('<p id="_ftn1">Note <a href="#_ftnref1">back</a></p>', "html.parser")
        node = soup.find("p")
        capture_definition(node, ctx, state, serializer.serialize_children)
        assert node.get("id") == "_ftn1"
        assert node.find("a") is not None
        assert state.footnote_definitions == ["[^1]: Note"]

    def test_self_reference_is_removed(self, serializer, state, ctx):
        node = first('<p id="_ftn3"><a href="#_ftn3">3</a> Self note.</p>', "p")
        capture_definition(node, ctx, state, serializer.serialize_children)
        assert state.footnote_definitions == ["[^3]: Self note."]

    def test_empty_definition_is_consumed_but_not_registered(self, serializer, state, ctx):
        node = first('<p><a name="_ftn1" href="#_ftnref1">[1]</a></p>', "p")
        assert capture_definition(node, ctx, state, serializer.serialize_children)
        assert state.footnote_definitions == []

    def test_plain_paragraph_is_not_captured(self, serializer, state, ctx):
        node = first('<p>Text<a href="#_ftn1" name="_ftnref1">[1]</a></p>', "p")
        assert not capture_definition(node, ctx, state, serializer.serialize_children)
        assert state.footnote_definitions == []

    def test_fn_prefixed_word_id_is_not_captured(self, serializer, state, ctx):
        node = first('<p id="fnc">hello</p>', "p")
        assert not capture_definition(node, ctx, state, serializer.serialize_children)
        assert state.footnote_definitions == []

    def test_anchor_owned_by_nested_paragraph_is_left_to_it(self, serializer, state, ctx):
        node = first('<div><p><a name="_ftn1" href="#_ftnref1">[1]</a> Note</p></div>', "div")
        assert not capture_definition(node, ctx, state, serializer.serialize_children)

    def test_anchors_are_never_captured(self, serializer, state, ctx):
        node = first('<a name="_ftn1" href="#_ftnref1">[1]</a>', "a")
        assert not capture_definition(node, ctx, state, serializer.serialize_children)

    def test_first_registration_wins(self, serializer, state, ctx):
        soup = BeautifulSoup('<p id="_ftn1">First.</p><p id="_ftn1">Second.</p>', "html.parser")
        for node in soup.find_all("p"):
            capture_definition(node, ctx, state, serializer.serialize_children)
        assert state.footnote_definitions == ["[^1]: First."]


@pytest.mark.unit
class TestFootnoteSections:
    @pytest.mark.parametrize(
        "html",
        [
            '<section class="footnotes"></section>',
            "<section data-footnotes></section>",
            '<div role="doc-endnotes"></div>',
        ],
    )
    def test_section_markers(self, html):
        assert is_footnote_section(BeautifulSoup(html, "html.parser").find(True))

    def test_plain_section(self):
        assert not is_footnote_section(first('<section class="notes"></section>', "section"))

    @pytest.mark.parametrize(
        "html,expected",
        [
            ('<li id="fn1">x</li>', "1"),
            ('<li id="fn:note">x</li>', "note"),
            ('<li id="user-content-fn-2">x</li>', "2"),
            ('<li data-footnote-label="9">x</li>', "9"),
            ('<li><a href="#fnref3">[3]</a> x</li>', "3"),
        ],
    )
    def test_item_labels(self, html, expected):
        assert footnote_item_label(first(html, "li")) == expected

    def test_collect_section(self, serializer, ctx):
        state = SerializerState()
        section = first(
            '<section class="footnotes"><ol>'
            '<li id="fn1"><p>One. <a href="#fnref1" class="footnote-backref">&#8617;</a></p></li>'
            '<li id="fn2"><p>Two</p><ul><li>nested</li></ul></li>'
            "</ol></section>",
            "section",
        )
        assert collect_footnote_section(section, ctx, state, serializer.serialize_children) == 2
        assert state.footnote_definitions == ["[^1]: One.", "[^2]: Two\n    \n    - nested"]
