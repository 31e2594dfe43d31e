#  Copyright (c) 2025 Tom Villani, Ph.D.
"""HTML tree to Markdown serializer.

:class:`MarkdownSerializer` walks a BeautifulSoup tree once, depth-first and
left to right. Every element is first offered to the footnote definition
recognizer; elements it does not consume are dispatched by
:class:`~editor2md.constants.ElementKind` to one handler each. After the walk
the body is normalized and the collected footnote definitions are appended.

Examples
--------
    >>> from editor2md.serializer import MarkdownSerializer
    >>> MarkdownSerializer().convert("<ul><li>One<ul><li>Two</li></ul></li></ul>")
    '- One\\n  - Two\\n'
"""

from __future__ import annotations

import logging
from typing import Callable

from bs4 import BeautifulSoup, FeatureNotFound, NavigableString, PageElement, Tag
from bs4.builder import ParserRejectedMarkup
from bs4.element import PreformattedString

from editor2md.constants import (
    BLOCK_ELEMENTS,
    BOUNDARY_KINDS,
    CODE_LANGUAGE_ATTRIBUTES,
    CODE_LANGUAGE_CLASS_PATTERN,
    EDITOR_CODE_CONTAINER_CLASS,
    EDITOR_CODE_LINE_CLASS,
    FOOTNOTE_SEPARATOR_CLASS,
    PLAIN_CODE_LANGUAGE,
    TAG_KINDS,
    ElementKind,
)
from editor2md.context import SerializationContext, SerializerState
from editor2md.exceptions import MalformedInputError, RecursionLimitExceededError, ValidationError
from editor2md.footnotes import (
    capture_definition,
    class_string,
    collect_footnote_section,
    is_footnote_section,
    resolve_reference,
)
from editor2md.lists import render_list
from editor2md.options import ConversionOptions
from editor2md.tables import render_table
from editor2md.text import (
    code_fence,
    collapse_whitespace,
    ensure_footnote_definition_syntax,
    longest_backtick_run,
    normalize_line_endings,
    normalize_markdown,
)

logger = logging.getLogger(__name__)

Handler = Callable[[Tag, SerializationContext, SerializerState], str]


def escape_link_text(text: str) -> str:
    return text.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")


def escape_title(title: str) -> str:
    return title.replace('"', '\\"')


def extract_language_hint(node: Tag | None) -> str:
    """Extract a code language from ``data-language``/``lang`` or a ``language-xxx`` class."""
    if node is None:
        return ""
    for attribute in CODE_LANGUAGE_ATTRIBUTES:
        value = (node.get(attribute) or "").strip()
        if value:
            return value
    if match := CODE_LANGUAGE_CLASS_PATTERN.search(class_string(node)):
        return match.group(1)
    return ""


def fenced_code_block(content: str, language: str = "") -> str:
    fence = code_fence(content)
    return f"{fence}{language}\n{content}\n{fence}\n\n"


def _content_sibling(node: PageElement, forward: bool) -> PageElement | None:
    """Nearest sibling that renders, skipping comments and whitespace-only strings."""
    sibling = node.next_sibling if forward else node.previous_sibling
    while sibling is not None:
        if isinstance(sibling, Tag):
            return sibling
        if not isinstance(sibling, PreformattedString) and str(sibling).strip():
            return sibling
        sibling = sibling.next_sibling if forward else sibling.previous_sibling
    return None


def is_block_boundary(node: PageElement | None) -> bool:
    if node is None:
        return True
    if not isinstance(node, Tag):
        return False
    return TAG_KINDS.get(node.name, ElementKind.OTHER) in BOUNDARY_KINDS or node.name in BLOCK_ELEMENTS


def is_insignificant_whitespace(node: NavigableString) -> bool:
    """Whether a whitespace-only string sits at a block boundary.

    Such strings are markup indentation. Whitespace between two inline
    siblings (``<b>A</b> <i>B</i>``) separates words and is kept.
    """
    return is_block_boundary(_content_sibling(node, forward=False)) or is_block_boundary(
        _content_sibling(node, forward=True)
    )


class MarkdownSerializer:
    """Convert rich-text editor HTML into Markdown.

    Parameters
    ----------
    options : ConversionOptions, optional
        Conversion options; defaults are used when omitted.

    Notes
    -----
    The serializer itself holds no per-conversion state. Each call to
    :meth:`convert` creates a fresh :class:`SerializerState`, so one instance
    can be reused for any number of conversions.

    """

    def __init__(self, options: ConversionOptions | None = None):
        self.options = options or ConversionOptions()
        self._handlers: dict[ElementKind, Handler] = {
            ElementKind.HEADING: self._render_heading,
            ElementKind.PARAGRAPH: self._render_paragraph,
            ElementKind.LINE_BREAK: self._render_line_break,
            ElementKind.STRONG: self._render_strong,
            ElementKind.EMPHASIS: self._render_emphasis,
            ElementKind.STRIKETHROUGH: self._render_strikethrough,
            ElementKind.INLINE_CODE: self._render_inline_code,
            ElementKind.PREFORMATTED: self._render_preformatted,
            ElementKind.BLOCKQUOTE: self._render_blockquote,
            ElementKind.HORIZONTAL_RULE: self._render_horizontal_rule,
            ElementKind.SUPERSCRIPT: self._render_superscript,
            ElementKind.LINK: self._render_link,
            ElementKind.IMAGE: self._render_image,
            ElementKind.LIST: self._render_list,
            ElementKind.LIST_ITEM: self._render_list_item,
            ElementKind.TABLE: self._render_table,
            ElementKind.TABLE_PART: self._render_table_part,
            ElementKind.CONTAINER: self._render_container,
            ElementKind.OTHER: self._render_other,
        }

    # Orchestration

    def parse(self, html: str) -> BeautifulSoup:
        """Parse ``html`` and remove the configured non-content elements.

        Raises
        ------
        ValidationError
            If the configured parser is not installed.
        MalformedInputError
            If the parser rejects the markup.

        """
        try:
            soup = BeautifulSoup(html, self.options.parser)
        except FeatureNotFound as e:
            raise ValidationError(
                f"HTML parser {self.options.parser!r} is not available",
                parameter_name="parser",
                parameter_value=self.options.parser,
                original_error=e,
            ) from e
        except ParserRejectedMarkup as e:
            raise MalformedInputError("The HTML parser rejected the input markup", original_error=e) from e

        for name in self.options.strip_elements:
            for element in soup.find_all(name):
                element.decompose()
        return soup

    def convert(self, html: str) -> str:
        """Convert an HTML fragment or document to Markdown.

        Parameters
        ----------
        html : str
            HTML produced by the editor

        Returns
        -------
        str
            Markdown ending with exactly one newline.

        """
        soup = self.parse(html)
        root: Tag = soup.body if soup.body is not None else soup
        state = SerializerState(footnote_indent=self.options.footnote_indent)

        body = self.serialize_children(root, SerializationContext(), state).strip()
        return self.assemble(body, state)

    @staticmethod
    def assemble(body: str, state: SerializerState) -> str:
        """Join the normalized body and the footnote definitions."""
        definitions = state.format_definitions()
        combined = "\n\n".join(part for part in (normalize_markdown(body), definitions) if part)
        combined = normalize_markdown(ensure_footnote_definition_syntax(combined))
        return combined.strip() + "\n"

    # Dispatch

    def serialize_children(self, parent: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        child_ctx = ctx.descend()
        return "".join(self.serialize_node(child, child_ctx, state) for child in parent.children)

    def serialize_node(self, node: PageElement, ctx: SerializationContext, state: SerializerState) -> str:
        """Serialize a single node.

        Parameters
        ----------
        node : PageElement
            Element or string from the parse tree
        ctx : SerializationContext
            Context for this call
        state : SerializerState
            Per-conversion state, shared by reference

        Returns
        -------
        str
            The Markdown fragment for ``node``.

        Raises
        ------
        RecursionLimitExceededError
            If the node is nested deeper than ``max_depth`` in strict mode.

        """
        if isinstance(node, NavigableString):
            if isinstance(node, PreformattedString):
                return ""
            text = str(node)
            if not ctx.inline and not text.strip() and is_insignificant_whitespace(node):
                return ""
            return collapse_whitespace(text)

        if not isinstance(node, Tag):
            return ""

        if ctx.nesting > self.options.max_depth:
            return self._depth_exceeded(node, ctx)

        if self._capture(node, ctx, state):
            return ""

        kind = TAG_KINDS.get(node.name, ElementKind.OTHER)
        return self._handlers[kind](node, ctx, state)

    def _capture(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> bool:
        if ctx.skip_footnote_capture:
            return False
        return capture_definition(node, ctx, state, self.serialize_children)

    def _depth_exceeded(self, node: Tag, ctx: SerializationContext) -> str:
        if self.options.strict:
            raise RecursionLimitExceededError(ctx.nesting, self.options.max_depth, node.name)
        logger.warning(
            "Nesting depth %d exceeds limit of %d at <%s>; rendering as plain text",
            ctx.nesting,
            self.options.max_depth,
            node.name,
        )
        return collapse_whitespace(node.get_text())

    def _inline(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        return self.serialize_children(node, ctx.with_inline(), state)

    def _block(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        return self.serialize_children(node, ctx.with_inline(False), state)

    # Block handlers

    def _render_heading(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        level = int(node.name[1])
        text = self._inline(node, ctx, state).strip()
        if not text:
            return ""
        return f"{'#' * level} {text}\n\n"

    def _render_paragraph(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        text = self._inline(node, ctx, state).strip()
        return f"{text}\n\n" if text else ""

    def _render_line_break(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        return "  \n" if ctx.inline else "\n"

    def _render_preformatted(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        code = node.find("code")
        raw = normalize_line_endings((code if code is not None else node).get_text())
        # Browsers drop one newline right after <pre>
        if raw.startswith("\n"):
            raw = raw[1:]
        content = raw.rstrip()
        if not content:
            return ""
        language = extract_language_hint(code) or extract_language_hint(node)
        return fenced_code_block(content, language)

    def _render_editor_code_block(self, node: Tag) -> str:
        lines = [line for line in node.find_all("div", recursive=False) if EDITOR_CODE_LINE_CLASS in class_string(line)]
        content = "\n".join(normalize_line_endings(line.get_text()) for line in lines).rstrip()
        if not content:
            return ""
        language = (lines[0].get("data-language") or "").strip()
        if language == PLAIN_CODE_LANGUAGE:
            language = ""
        return fenced_code_block(content, language)

    def _render_blockquote(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        inner = self._block(node, ctx, state).strip()
        if not inner:
            return ""
        quoted = "\n".join(f"> {line}" if line else ">" for line in inner.split("\n"))
        return f"{quoted}\n\n"

    def _render_horizontal_rule(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        if FOOTNOTE_SEPARATOR_CLASS in class_string(node).split():
            return ""
        return "---\n\n"

    def _render_list(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        return render_list(node, ctx, state, self.serialize_node, ordered=node.name == "ol", capture=self._capture)

    def _render_list_item(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        return self._inline(node, ctx, state)

    def _render_table(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        table = render_table(node, ctx, state, self.serialize_children, self.options.escape_table_pipes)
        return f"{table}\n\n" if table else ""

    def _render_table_part(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        # Rows and cells are only rendered through their table
        return ""

    def _render_container(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        if not ctx.skip_footnote_capture and is_footnote_section(node):
            collect_footnote_section(node, ctx, state, self.serialize_children)
            return ""
        if EDITOR_CODE_CONTAINER_CLASS in class_string(node).split():
            return self._render_editor_code_block(node)
        inner = self._block(node, ctx, state)
        return f"{inner}\n" if inner else ""

    def _render_other(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        if node.name in BLOCK_ELEMENTS:
            inner = self._block(node, ctx, state)
            return f"{inner}\n" if inner else ""
        return self.serialize_children(node, ctx, state)

    # Inline handlers

    def _wrap(self, marker: str, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        text = self._inline(node, ctx, state)
        core = text.strip()
        if not core:
            return text
        leading = text[: len(text) - len(text.lstrip())]
        trailing = text[len(text.rstrip()) :]
        return f"{leading}{marker}{core}{marker}{trailing}"

    def _render_strong(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        return self._wrap("**", node, ctx, state)

    def _render_emphasis(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        return self._wrap("*", node, ctx, state)

    def _render_strikethrough(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        return self._wrap("~~", node, ctx, state)

    def _render_inline_code(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        content = normalize_line_endings(node.get_text())
        if not content:
            return ""
        fence = "`" * (longest_backtick_run(content) + 1)
        if content.startswith("`") or content.endswith("`"):
            content = f" {content} "
        return f"{fence}{content}{fence}"

    def _render_superscript(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        key = resolve_reference(node)
        if key:
            return f"[^{key}]"
        text = self._inline(node, ctx, state).strip()
        return f"^{text}^" if text else ""

    def _render_link(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        key = resolve_reference(node)
        if key:
            return f"[^{key}]"

        href = (node.get("href") or "").strip()
        title = (node.get("title") or "").strip()
        text = self._inline(node, ctx, state).strip() or href
        if not href:
            return text
        title_part = f' "{escape_title(title)}"' if title else ""
        return f"[{escape_link_text(text)}]({href}{title_part})"

    def _render_image(self, node: Tag, ctx: SerializationContext, state: SerializerState) -> str:
        src = (node.get("src") or "").strip()
        if not src:
            return ""
        alt = node.get("alt") or ""
        title = node.get("title")
        title_part = f' "{escape_title(title)}"' if title else ""
        return f"![{alt}]({src}{title_part})"
