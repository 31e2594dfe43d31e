"""Tests for the html_to_markdown entry point and its input handling."""

from io import BytesIO, StringIO
from pathlib import Path

import pytest
from utils import (
    EDITOR_HTML,
    EDITOR_MARKDOWN,
    MARKDOWN_IT_HTML,
    MARKDOWN_IT_MARKDOWN,
    WORD_EXPORT_HTML,
    WORD_EXPORT_MARKDOWN,
    assert_markdown_normalized,
)

from editor2md import html_to_markdown
from editor2md._input_utils import is_file_like, is_path_like, read_html_input
from editor2md.exceptions import (
    ConversionError,
    InputError,
    MalformedInputError,
    RecursionLimitExceededError,
)
from editor2md.options import ConversionOptions
from editor2md.serializer import MarkdownSerializer


@pytest.mark.unit
class TestInputTypes:
    def test_string_is_markup(self):
        assert html_to_markdown("<p>Hi</p>") == "Hi\n"

    def test_string_is_never_a_path(self, tmp_path):
        (tmp_path / "doc.html").write_text("<p>File</p>", encoding="utf-8")
        assert html_to_markdown(str(tmp_path / "doc.html")) == f"{tmp_path / 'doc.html'}\n"

    def test_bytes(self):
        assert html_to_markdown(b"<p>Hi</p>") == "Hi\n"

    def test_bytes_with_bom(self):
        assert html_to_markdown(b"\xef\xbb\xbf<p>Hi</p>") == "Hi\n"

    def test_path(self, tmp_path):
        path = tmp_path / "doc.html"
        path.write_text("<p>Café</p>", encoding="utf-8")
        assert html_to_markdown(path) == "Café\n"

    def test_text_file_object(self):
        assert html_to_markdown(StringIO("<p>Hi</p>")) == "Hi\n"

    def test_binary_file_object(self):
        assert html_to_markdown(BytesIO(b"<p>Hi</p>")) == "Hi\n"

    def test_missing_path(self, tmp_path):
        with pytest.raises(InputError) as exc_info:
            html_to_markdown(tmp_path / "missing.html")
        assert exc_info.value.input_type == "path"

    def test_invalid_utf8(self):
        with pytest.raises(MalformedInputError):
            html_to_markdown(b"\xff\xfe<p>x</p>")

    def test_unsupported_type(self):
        with pytest.raises(InputError) as exc_info:
            html_to_markdown(42)
        assert exc_info.value.input_type == "int"

    def test_helpers(self):
        assert is_path_like(Path("a.html"))
        assert not is_path_like("a.html")
        assert is_file_like(StringIO(""))
        assert not is_file_like(b"")
        assert read_html_input(bytearray(b"<p>x</p>")) == "<p>x</p>"


@pytest.mark.unit
class TestErrorHandling:
    def test_library_errors_pass_through(self):
        options = ConversionOptions(max_depth=1, strict=True)
        with pytest.raises(RecursionLimitExceededError):
            html_to_markdown("<div><p>x</p></div>", options=options)

    def test_unexpected_errors_are_wrapped(self, monkeypatch):
        def boom(self, html):
            raise ValueError("broken")

        monkeypatch.setattr(MarkdownSerializer, "convert", boom)
        with pytest.raises(ConversionError) as exc_info:
            html_to_markdown("<p>x</p>")
        assert exc_info.value.conversion_stage == "serialization"
        assert isinstance(exc_info.value.original_error, ValueError)

    def test_interpreter_recursion_limit_is_wrapped(self, monkeypatch):
        def overflow(self, html):
            raise RecursionError("maximum recursion depth exceeded")

        monkeypatch.setattr(MarkdownSerializer, "convert", overflow)
        with pytest.raises(ConversionError, match="max_depth"):
            html_to_markdown("<p>x</p>")


@pytest.mark.integration
class TestRealisticDocuments:
    @pytest.mark.parametrize(
        "html,expected",
        [
            (WORD_EXPORT_HTML, WORD_EXPORT_MARKDOWN),
            (MARKDOWN_IT_HTML, MARKDOWN_IT_MARKDOWN),
            (EDITOR_HTML, EDITOR_MARKDOWN),
        ],
        ids=["word-export", "markdown-it", "editor"],
    )
    def test_documents(self, html, expected):
        markdown = html_to_markdown(html)
        assert markdown == expected
        assert_markdown_normalized(markdown)

    def test_combined_conventions_share_one_registry(self):
        html = WORD_EXPORT_HTML + MARKDOWN_IT_HTML
        markdown = html_to_markdown(html)
        assert markdown.count("[^1]:") == 1
        assert markdown.endswith("[^1]: Word note text.\n[^2]: Second note.\n")
