#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants shared across the editor2md serializer.

Tag groupings used by the dispatcher, defaults for
:class:`editor2md.options.ConversionOptions` and the patterns behind the
footnote heuristics live here.
"""

from __future__ import annotations

import re
from enum import Enum


class ElementKind(Enum):
    """Recognized element kinds, each bound to one serializer handler."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LINE_BREAK = "line_break"
    STRONG = "strong"
    EMPHASIS = "emphasis"
    STRIKETHROUGH = "strikethrough"
    INLINE_CODE = "inline_code"
    PREFORMATTED = "preformatted"
    BLOCKQUOTE = "blockquote"
    HORIZONTAL_RULE = "horizontal_rule"
    SUPERSCRIPT = "superscript"
    LINK = "link"
    IMAGE = "image"
    LIST = "list"
    LIST_ITEM = "list_item"
    TABLE = "table"
    TABLE_PART = "table_part"
    CONTAINER = "container"
    OTHER = "other"


TAG_KINDS: dict[str, ElementKind] = {
    "h1": ElementKind.HEADING,
    "h2": ElementKind.HEADING,
    "h3": ElementKind.HEADING,
    "h4": ElementKind.HEADING,
    "h5": ElementKind.HEADING,
    "h6": ElementKind.HEADING,
    "p": ElementKind.PARAGRAPH,
    "br": ElementKind.LINE_BREAK,
    "strong": ElementKind.STRONG,
    "b": ElementKind.STRONG,
    "em": ElementKind.EMPHASIS,
    "i": ElementKind.EMPHASIS,
    "del": ElementKind.STRIKETHROUGH,
    "s": ElementKind.STRIKETHROUGH,
    "strike": ElementKind.STRIKETHROUGH,
    "code": ElementKind.INLINE_CODE,
    "pre": ElementKind.PREFORMATTED,
    "blockquote": ElementKind.BLOCKQUOTE,
    "hr": ElementKind.HORIZONTAL_RULE,
    "sup": ElementKind.SUPERSCRIPT,
    "a": ElementKind.LINK,
    "img": ElementKind.IMAGE,
    "ul": ElementKind.LIST,
    "ol": ElementKind.LIST,
    "li": ElementKind.LIST_ITEM,
    "table": ElementKind.TABLE,
    "thead": ElementKind.TABLE_PART,
    "tbody": ElementKind.TABLE_PART,
    "tfoot": ElementKind.TABLE_PART,
    "tr": ElementKind.TABLE_PART,
    "th": ElementKind.TABLE_PART,
    "td": ElementKind.TABLE_PART,
    "div": ElementKind.CONTAINER,
    "section": ElementKind.CONTAINER,
    "aside": ElementKind.CONTAINER,
}

# Kinds that start and end their own Markdown block; line breaks end a line
BOUNDARY_KINDS = frozenset(
    {
        ElementKind.HEADING,
        ElementKind.PARAGRAPH,
        ElementKind.LINE_BREAK,
        ElementKind.PREFORMATTED,
        ElementKind.BLOCKQUOTE,
        ElementKind.HORIZONTAL_RULE,
        ElementKind.LIST,
        ElementKind.LIST_ITEM,
        ElementKind.TABLE,
        ElementKind.TABLE_PART,
        ElementKind.CONTAINER,
    }
)

BLOCK_ELEMENTS = frozenset(
    {
        "address",
        "article",
        "aside",
        "blockquote",
        "canvas",
        "dd",
        "div",
        "dl",
        "dt",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "header",
        "hr",
        "li",
        "main",
        "nav",
        "noscript",
        "ol",
        "p",
        "pre",
        "section",
        "table",
        "tfoot",
        "ul",
    }
)

# Conversion defaults
DEFAULT_MAX_DEPTH = 100
DEFAULT_FOOTNOTE_INDENT = 4
DEFAULT_PARSER = "html.parser"
DEFAULT_STRIP_ELEMENTS = ("script", "style", "template")

# Lists
LIST_INDENT = "  "
LIST_TYPE_ATTRIBUTE = "data-list"
LIST_TYPES = frozenset({"bullet", "ordered", "checked", "unchecked"})
TASK_MARKERS = {"checked": "[x]", "unchecked": "[ ]"}
EDITOR_INDENT_PATTERN = re.compile(r"^ql-indent-(\d+)$")

# Tables
MIN_TABLE_COLUMN_WIDTH = 3

# Code
MIN_CODE_FENCE_LENGTH = 3
CODE_LANGUAGE_ATTRIBUTES = ("data-language", "lang")
CODE_LANGUAGE_CLASS_PATTERN = re.compile(r"language-([\w-]+)")
EDITOR_CODE_CONTAINER_CLASS = "ql-code-block-container"
EDITOR_CODE_LINE_CLASS = "ql-code-block"
PLAIN_CODE_LANGUAGE = "plain"

# Footnotes: tags that may hold a single definition
FOOTNOTE_NODE_TAGS = ("p", "li", "dd", "dt")

# Word-processor definition ids (_ftn1, _ednIV) and markdown-it item ids (fn1, fn:1, fn:iv).
# A Roman label after "fn" needs the colon, so ordinary ids such as "fnc" do not qualify.
FOOTNOTE_DEFINITION_ID_PATTERN = re.compile(
    r"^(?:_(?:edn|ftn)(?:\d+|[ivxlcdm]+(?!\w))|fn:?\d+|fn:[ivxlcdm]+(?!\w))", re.IGNORECASE
)
FOOTNOTE_ID_LABEL_PATTERN = re.compile(r"(?:_(?:edn|ftn)|fn:?)([\w-]+)", re.IGNORECASE)

# Definition-side anchors in word-processor exports (<a name="_ftn1">)
FOOTNOTE_ANCHOR_NAME_PATTERN = re.compile(r"^_(?:edn|ftn)(?:\d+|[ivxlcdm]+(?!\w))", re.IGNORECASE)
FOOTNOTE_ROLE_CLASS_PATTERN = re.compile(r"footnote|endnote", re.IGNORECASE)

# In-text references: href shapes and word-processor back-anchor names
FOOTNOTE_HREF_PATTERNS = (
    re.compile(r"^#_(?:edn|ftn)(?:ref)?([\w-]+)", re.IGNORECASE),
    re.compile(r"^#fn(?:ref)?[:_-]?([\w-]+)", re.IGNORECASE),
)
FOOTNOTE_BACKREF_NAME_PATTERN = re.compile(r"^_(?:edn|ftn)ref([\w-]+)", re.IGNORECASE)
FOOTNOTE_DEFINITION_HREF_PATTERN = re.compile(r"^#(?:_(?:edn|ftn)(?!ref)|fn(?!ref))", re.IGNORECASE)
FOOTNOTE_DATA_ATTRIBUTES = ("data-footnote-ref", "data-footnote-id")
FOOTNOTE_LABEL_ATTRIBUTE = "data-footnote-label"

# Backreferences stripped from definition content
BACKREF_CLASS_PATTERN = re.compile(r"backlink|backref|footnote-return", re.IGNORECASE)
BACKREF_HREF_PREFIXES = ("#_ftnref", "#_ednref", "#fnref")
SELF_REFERENCE_HREF_PREFIXES = ("#_ftn", "#_edn", "#fn")
RETURN_GLYPHS = frozenset({"\u21a9\ufe0e", "\u21a9\ufe0f", "\u21a9", "\u2191", "return"})

# Footnote sections
FOOTNOTE_SECTION_CLASS = "footnotes"
FOOTNOTE_SECTION_ROLE = "doc-endnotes"
FOOTNOTE_SECTION_ATTRIBUTE = "data-footnotes"
FOOTNOTE_SEPARATOR_CLASS = "footnotes-sep"

# Label cleanup around in-text markers like "[1]", "(ii).", " 3 "
LABEL_PREFIX_PATTERN = re.compile(r"^[\[(\s]+")
LABEL_SUFFIX_PATTERN = re.compile(r"[\])\s.]+$")

ROMAN_NUMERAL_PATTERN = re.compile(r"^(?=[MDCLXVI])M{0,4}(CM|CD|D?C{0,3})(XC|XL|L?X{0,3})(IX|IV|V?I{0,3})$")
ROMAN_NUMERAL_VALUES = {"I": 1, "V": 5, "X": 10, "L": 50, "C": 100, "D": 500, "M": 1000}
