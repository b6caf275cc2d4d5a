#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_options.py
"""Unit tests for renderer options and their use through the API."""

import dataclasses
import logging

import pytest
from utils import doc, para, text

from adf2md import extract_plain_text, render
from adf2md.exceptions import InvalidOptionsError
from adf2md.options import MarkdownRendererOptions, PlainTextOptions


@pytest.mark.unit
class TestMarkdownRendererOptions:
    """Tests for MarkdownRendererOptions validation."""

    def test_defaults(self):
        options = MarkdownRendererOptions()
        assert options.escape_special is True
        assert options.underline_mode == "html"
        assert options.hard_break_style == "spaces"
        assert options.bullet_symbols == "-"
        assert options.list_indent_width is None
        assert options.max_depth == 64
        assert options.depth_placeholder == "…"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"underline_mode": "bold"},
            {"subsup_mode": "latex"},
            {"hard_break_style": "br"},
            {"table_mode": "grid"},
            {"code_fence_char": "#"},
            {"bullet_symbols": ""},
            {"bullet_symbols": "-x"},
            {"list_indent_width": 0},
            {"list_indent_width": 9},
            {"code_fence_min": 2},
            {"link_label_max_length": 3},
            {"max_depth": 0},
            {"max_depth": 129},
            {"max_depth": True},
            {"max_depth": "10"},
        ],
    )
    def test_invalid_values_rejected(self, overrides):
        with pytest.raises(ValueError):
            MarkdownRendererOptions(**overrides)

    def test_max_depth_bounds_accepted(self):
        assert MarkdownRendererOptions(max_depth=1).max_depth == 1
        assert MarkdownRendererOptions(max_depth=128).max_depth == 128

    def test_frozen(self):
        options = MarkdownRendererOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.underline_mode = "ignore"

    def test_create_updated(self):
        options = MarkdownRendererOptions()
        updated = options.create_updated(underline_mode="ignore")
        assert updated.underline_mode == "ignore"
        assert options.underline_mode == "html"

    def test_create_updated_validates(self):
        with pytest.raises(ValueError):
            MarkdownRendererOptions().create_updated(table_mode="grid")


@pytest.mark.unit
class TestPlainTextOptions:
    """Tests for PlainTextOptions."""

    def test_defaults(self):
        options = PlainTextOptions()
        assert options.paragraph_separator == "\n\n"
        assert options.table_cell_separator == " | "

    def test_base_validation_applies(self):
        with pytest.raises(ValueError):
            PlainTextOptions(max_depth=500)


@pytest.mark.unit
class TestApiOptions:
    """Tests for option handling in the API functions."""

    def test_keyword_override(self):
        document = doc(para(text("u", "underline")))
        assert render(document) == "<u>u</u>\n\n"
        assert render(document, underline_mode="ignore") == "u\n\n"

    def test_keyword_override_on_options_instance(self):
        options = MarkdownRendererOptions(hard_break_style="backslash")
        document = doc(para(text("u", "underline"), {"type": "hardBreak"}, "x"))
        assert render(document, options, underline_mode="ignore") == "u\\\nx\n\n"
        assert options.underline_mode == "html"

    def test_unknown_keyword_ignored_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert render(doc(para("x")), bogus_option=1) == "x\n\n"
        assert "bogus_option" in caplog.text

    def test_invalid_keyword_value(self):
        with pytest.raises(ValueError):
            render(doc(para("x")), max_depth=0)

    def test_wrong_options_class(self):
        with pytest.raises(InvalidOptionsError):
            render(doc(para("x")), PlainTextOptions())

    def test_plain_text_keyword_override(self):
        assert extract_plain_text(doc(para("a"), para("b")), paragraph_separator="\n") == "a\nb"

    def test_escape_special_disabled(self):
        assert render(doc(para("a*b_c")), escape_special=False) == "a*b_c\n\n"
