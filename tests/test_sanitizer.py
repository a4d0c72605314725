"""Tests for reanchor.sanitizer module."""
from __future__ import annotations

import pytest

from reanchor.sanitizer import (
    collapse_whitespace,
    decode_entities,
    sanitize,
    strip_attribute_residue,
    strip_tags,
)


class TestStripTags:
    def test_simple_tags(self) -> None:
        assert strip_tags("<b>bold</b>") == "bold"

    def test_attribute_bearing_tag(self) -> None:
        html = '<span class="ai-flag severity-high" data-flag-id="flag-0">x</span>'
        assert strip_tags(html) == "x"

    def test_self_closing(self) -> None:
        assert strip_tags("line <br/> next") == "line  next"

    def test_unclosed_angle_bracket_kept(self) -> None:
        assert strip_tags("a < b") == "a < b"


class TestDecodeEntities:
    def test_all_entities(self) -> None:
        text = "&quot;hi&quot; &apos;x&apos; &lt;tag&gt; &amp;"
        assert decode_entities(text) == "\"hi\" 'x' <tag> &"

    def test_no_double_decode(self) -> None:
        assert decode_entities("&amp;lt;") == "&lt;"
        assert decode_entities("&amp;quot;") == "&quot;"

    def test_unknown_entities_untouched(self) -> None:
        assert decode_entities("a&nbsp;b") == "a&nbsp;b"


class TestStripAttributeResidue:
    def test_data_attribute(self) -> None:
        assert strip_attribute_residue('flag data-flag-id="flag-0" text') == "flag text"

    def test_class_attribute(self) -> None:
        assert strip_attribute_residue('a class="severity-low" b') == "a b"

    def test_plain_text_untouched(self) -> None:
        assert strip_attribute_residue("the class of 2025") == "the class of 2025"


class TestCollapseWhitespace:
    def test_runs_and_newlines(self) -> None:
        assert collapse_whitespace("  a\n\n\tb   c  ") == "a b c"

    def test_only_whitespace(self) -> None:
        assert collapse_whitespace(" \n\t ") == ""


class TestSanitize:
    def test_html_and_entities(self) -> None:
        assert sanitize("<b>Hello</b> &amp; <i>world</i>") == "Hello & world"

    def test_entity_decoded_after_tag_strip(self) -> None:
        # Encoded tags survive as literal text rather than being stripped.
        assert sanitize("&lt;b&gt;bold&lt;/b&gt;") == "<b>bold</b>"

    def test_highlight_markup_removed(self) -> None:
        html = (
            'We will <span class="ai-flag severity-high" data-flag-id="flag-0" '
            'data-severity="high">unlock opportunities</span> together.'
        )
        assert sanitize(html) == "We will unlock opportunities together."

    def test_malformed_residue_removed(self) -> None:
        text = 'broken span class="ai-flag" data-severity="low">quoted'
        # "span" survives; only the attribute residue is stripped.
        assert sanitize(text) == "broken span>quoted"

    def test_paragraphs_collapse(self) -> None:
        assert sanitize("Dear Team,\n\nIn today's world") == "Dear Team, In today's world"

    @pytest.mark.parametrize("value", ["", "   ", "\n\t", None, 42, ["a"], b"bytes"])
    def test_empty_or_non_string(self, value: object) -> None:
        assert sanitize(value) == ""

    @pytest.mark.parametrize(
        "text",
        [
            "<b>Hello</b> &amp; <i>world</i>",
            "  Dear   Valued\nTeam  ",
            '<p class="x">quote &quot;this&quot;</p>',
            "plain sanitized text",
            "",
        ],
    )
    def test_idempotent(self, text: str) -> None:
        once = sanitize(text)
        assert sanitize(once) == once

    def test_idempotent_on_memo(self, memo: str) -> None:
        once = sanitize(memo)
        assert sanitize(once) == once
        assert "\n" not in once
        assert "  " not in once
