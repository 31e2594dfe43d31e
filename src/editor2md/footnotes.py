#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Footnote recognition across the HTML conventions editors receive.

Three conventions are understood:

- Word-processor exports, where a definition is a paragraph holding an anchor
  named ``_ftn1`` / ``_edn1`` (or a block whose own id has that shape) and the
  in-text reference links to ``#_ftn1``.
- markdown-it / GitHub style output, where definitions are the items of a
  ``<section class="footnotes">`` list and references are ``<sup><a href="#fn1">``.
- Generic superscript markers such as ``<sup>3</sup>``.

Definitions and references agree on keys through
:func:`normalize_footnote_label`, which maps Roman numerals to their decimal
value so that ``II`` and ``2`` name the same footnote.

Both the anchor label lookup and the definition label lookup are ordered
tuples of recognizers, each returning a label or ``None``; the first match
wins.
"""

from __future__ import annotations

import copy
import logging
import re
from typing import Callable, Optional

from bs4 import Tag

from editor2md.constants import (
    BACKREF_CLASS_PATTERN,
    BACKREF_HREF_PREFIXES,
    FOOTNOTE_ANCHOR_NAME_PATTERN,
    FOOTNOTE_BACKREF_NAME_PATTERN,
    FOOTNOTE_DATA_ATTRIBUTES,
    FOOTNOTE_DEFINITION_HREF_PATTERN,
    FOOTNOTE_DEFINITION_ID_PATTERN,
    FOOTNOTE_HREF_PATTERNS,
    FOOTNOTE_ID_LABEL_PATTERN,
    FOOTNOTE_LABEL_ATTRIBUTE,
    FOOTNOTE_NODE_TAGS,
    FOOTNOTE_ROLE_CLASS_PATTERN,
    FOOTNOTE_SECTION_ATTRIBUTE,
    FOOTNOTE_SECTION_CLASS,
    FOOTNOTE_SECTION_ROLE,
    LABEL_PREFIX_PATTERN,
    LABEL_SUFFIX_PATTERN,
    RETURN_GLYPHS,
    ROMAN_NUMERAL_PATTERN,
    ROMAN_NUMERAL_VALUES,
    SELF_REFERENCE_HREF_PREFIXES,
)
from editor2md.context import SerializationContext, SerializerState

logger = logging.getLogger(__name__)

ChildSerializer = Callable[[Tag, SerializationContext, SerializerState], str]
LabelRecognizer = Callable[[Tag], Optional[str]]

_FOOTNOTE_ITEM_ID_PATTERN = re.compile(r"fn[:_-]?([\w-]+)", re.IGNORECASE)
_GENERIC_MARKER_PATTERN = re.compile(r"^[^\s\[\]]+$")


def class_string(node: Tag) -> str:
    """Return the element's class attribute as one space-separated string."""
    classes = node.get("class") or []
    if isinstance(classes, str):
        return classes
    return " ".join(classes)


def strip_label_brackets(text: str | None) -> str:
    """Strip surrounding brackets, parentheses, spaces and trailing periods."""
    if not text:
        return ""
    return LABEL_SUFFIX_PATTERN.sub("", LABEL_PREFIX_PATTERN.sub("", text))


def parse_roman_numeral(value: str) -> int | None:
    """Decode a Roman numeral written in canonical subtractive notation.

    Parameters
    ----------
    value : str
        Candidate numeral, case-insensitive

    Returns
    -------
    int or None
        Decimal value, or None if ``value`` is not a canonical numeral.

    Examples
    --------
    >>> parse_roman_numeral("xiv")
    14
    >>> parse_roman_numeral("IIII") is None
    True

    """
    numeral = (value or "").strip().upper()
    if not numeral or not ROMAN_NUMERAL_PATTERN.match(numeral):
        return None

    total = 0
    previous = 0
    for char in reversed(numeral):
        current = ROMAN_NUMERAL_VALUES[char]
        if current < previous:
            total -= current
        else:
            total += current
            previous = current
    return total


def normalize_footnote_label(label: str | None) -> str:
    """Normalize a footnote label into its registry key.

    Roman numerals become their decimal value; any other label is kept
    verbatim after trimming.
    """
    trimmed = (label or "").strip()
    if not trimmed:
        return ""
    roman_value = parse_roman_numeral(trimmed)
    if roman_value is not None:
        return str(roman_value)
    return trimmed


def is_inside_footnote_definition(node: Tag) -> bool:
    """Check whether the closest element carrying an id is a footnote definition."""
    for element in (node, *node.parents):
        element_id = element.get("id") if isinstance(element, Tag) else None
        if element_id:
            return bool(FOOTNOTE_DEFINITION_ID_PATTERN.match(element_id))
    return False


# Anchor label recognizers, in priority order


def _label_from_data_hint(anchor: Tag) -> str | None:
    for attribute in FOOTNOTE_DATA_ATTRIBUTES:
        value = anchor.get(attribute)
        if value:
            return strip_label_brackets(value) or None
    return None


def _label_from_visible_text(anchor: Tag) -> str | None:
    return strip_label_brackets(anchor.get_text().strip()) or None


def _label_from_href(anchor: Tag) -> str | None:
    href = (anchor.get("href") or "").strip()
    for pattern in FOOTNOTE_HREF_PATTERNS:
        if match := pattern.match(href):
            return match.group(1)
    return None


def _label_from_backref_name(anchor: Tag) -> str | None:
    name = (anchor.get("name") or "").strip()
    if match := FOOTNOTE_BACKREF_NAME_PATTERN.match(name):
        return match.group(1)
    return None


def _label_from_anchor_name(anchor: Tag) -> str | None:
    for attribute in ("name", "id"):
        value = (anchor.get(attribute) or "").strip()
        if FOOTNOTE_ANCHOR_NAME_PATTERN.match(value) and (match := FOOTNOTE_ID_LABEL_PATTERN.search(value)):
            return match.group(1)
    return None


ANCHOR_LABEL_RECOGNIZERS: tuple[LabelRecognizer, ...] = (
    _label_from_data_hint,
    _label_from_visible_text,
    _label_from_href,
    _label_from_backref_name,
    _label_from_anchor_name,
)


def anchor_label(anchor: Tag) -> str | None:
    """Return the first label any anchor recognizer derives."""
    for recognizer in ANCHOR_LABEL_RECOGNIZERS:
        label = recognizer(anchor)
        if label:
            return label
    return None


def looks_like_footnote_reference(anchor: Tag) -> bool:
    """Check for a footnote data hint, a footnote-shaped href or a back-anchor name."""
    if any(anchor.has_attr(attribute) for attribute in FOOTNOTE_DATA_ATTRIBUTES):
        return True
    if _label_from_href(anchor) is not None:
        return True
    return _label_from_backref_name(anchor) is not None


def resolve_anchor_reference(anchor: Tag, allow_definition: bool = False) -> str | None:
    """Resolve an anchor to its raw footnote label.

    Parameters
    ----------
    anchor : Tag
        The ``<a>`` element
    allow_definition : bool, default False
        Resolve even when the anchor sits inside a footnote definition.

    Returns
    -------
    str or None
        The raw label, or None if the anchor is an ordinary link.

    Notes
    -----
    Visible text wins over the href, so ``<a href="#fn3">[1]</a>`` resolves
    to ``1``.

    """
    if not allow_definition and is_inside_footnote_definition(anchor):
        return None
    if not looks_like_footnote_reference(anchor):
        return None
    return anchor_label(anchor)


def resolve_superscript_reference(sup: Tag) -> str | None:
    """Resolve a ``<sup>`` marker to its raw footnote label."""
    first_child = next((child for child in sup.children if isinstance(child, Tag)), None)
    if first_child is not None and first_child.name == "a":
        label = resolve_anchor_reference(first_child)
        if label:
            return label

    if is_inside_footnote_definition(sup):
        return None

    data = sup.get("data-footnote-ref")
    if data:
        return data

    text = strip_label_brackets(sup.get_text().strip())
    if text and _GENERIC_MARKER_PATTERN.match(text):
        return text
    return None


def resolve_reference(node: Tag) -> str:
    """Return the normalized footnote key ``node`` refers to, or ``""``."""
    if node.name == "a":
        label = resolve_anchor_reference(node)
    elif node.name == "sup":
        label = resolve_superscript_reference(node)
    else:
        label = None
    return normalize_footnote_label(label)


# Definition capture


def is_definition_anchor(anchor: Tag) -> bool:
    """Check whether an anchor marks the start of a footnote definition.

    Word-processor exports name the definition-side anchor ``_ftn1``. An anchor
    whose class signals a footnote role also qualifies, unless it is a
    backreference or points at a definition (which makes it a reference).
    """
    for attribute in ("name", "id"):
        if FOOTNOTE_ANCHOR_NAME_PATTERN.match((anchor.get(attribute) or "").strip()):
            return True

    classes = class_string(anchor)
    if not FOOTNOTE_ROLE_CLASS_PATTERN.search(classes) or BACKREF_CLASS_PATTERN.search(classes):
        return False
    return not FOOTNOTE_DEFINITION_HREF_PATTERN.match((anchor.get("href") or "").strip())


def find_definition_anchor(node: Tag) -> Tag | None:
    for anchor in node.find_all("a"):
        if is_definition_anchor(anchor):
            return anchor
    return None


def _owner(anchor: Tag) -> Tag | None:
    return anchor.find_parent(FOOTNOTE_NODE_TAGS) or anchor.parent


def derive_definition_label(node: Tag, anchor: Tag | None) -> str | None:
    """Derive a definition label from its anchor, else from the node's own id."""
    if anchor is not None:
        label = anchor_label(anchor)
        if label:
            return label

    node_id = node.get("id") or ""
    if match := FOOTNOTE_ID_LABEL_PATTERN.search(node_id):
        return match.group(1)
    return None


def is_backreference(anchor: Tag) -> bool:
    """Check whether an anchor inside a definition links back to the text."""
    if BACKREF_CLASS_PATTERN.search(class_string(anchor)):
        return True
    href = (anchor.get("href") or "").strip().lower()
    if href.startswith(BACKREF_HREF_PREFIXES):
        return True
    return anchor.get_text().strip() in RETURN_GLYPHS


def is_self_reference(anchor: Tag, label: str) -> bool:
    """Check for an anchor that only repeats the definition's own label."""
    href = (anchor.get("href") or "").strip().lower()
    if not href.startswith(SELF_REFERENCE_HREF_PREFIXES):
        return False
    return strip_label_brackets(anchor.get_text().strip()) == label


def _strip_anchors(clone: Tag, predicate: Callable[[Tag], bool]) -> None:
    for anchor in clone.find_all("a"):
        if not anchor.decomposed and predicate(anchor):
            anchor.decompose()


def _definition_context(ctx: SerializationContext) -> SerializationContext:
    return ctx.create_updated(inline=False, depth=0, skip_footnote_capture=True)


def capture_definition(
    node: Tag,
    ctx: SerializationContext,
    state: SerializerState,
    serialize_children: ChildSerializer,
) -> bool:
    """Try to consume ``node`` as a footnote definition.

    A node qualifies when its id has the word-processor definition shape, or
    when it is a paragraph, list item, term or description that owns a
    definition anchor. The definition is serialized from a detached copy with
    backreferences removed and capture disabled.

    Parameters
    ----------
    node : Tag
        Candidate element
    ctx : SerializationContext
        Context of the current call
    state : SerializerState
        Registry receiving the definition
    serialize_children : ChildSerializer
        Serializer used for the cleaned copy

    Returns
    -------
    bool
        True if the node was consumed, even when its content was empty.

    """
    if node.name == "a":
        return False

    has_definition_id = bool(FOOTNOTE_DEFINITION_ID_PATTERN.match(node.get("id") or ""))
    if not has_definition_id and node.name not in FOOTNOTE_NODE_TAGS:
        return False

    anchor = find_definition_anchor(node)
    if not has_definition_id and (anchor is None or _owner(anchor) is not node):
        return False

    label = derive_definition_label(node, anchor)
    if not label:
        return False

    clone = copy.copy(node)
    clone.attrs.pop("id", None)
    _strip_anchors(clone, lambda a: is_backreference(a) or is_self_reference(a, label))

    content = serialize_children(clone, _definition_context(ctx), state).strip()
    if content:
        state.register(normalize_footnote_label(label), content)
    else:
        logger.debug("Footnote definition %r has no content", label)
    return True


# Footnote sections


def is_footnote_section(node: Tag) -> bool:
    """Check whether a container holds a list of footnote definitions."""
    classes = node.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    if FOOTNOTE_SECTION_CLASS in classes:
        return True
    if node.has_attr(FOOTNOTE_SECTION_ATTRIBUTE):
        return True
    return (node.get("role") or "").strip().lower() == FOOTNOTE_SECTION_ROLE


def footnote_item_label(item: Tag) -> str | None:
    """Derive the raw label of a footnote-section list item.

    The item's id is tried first (``fn1``, ``fn:note``, ``user-content-fn-2``),
    then a ``data-footnote-label`` hint, then the first anchor's reference text.
    """
    item_id = item.get("id") or ""
    if item_id:
        for pattern in (_FOOTNOTE_ITEM_ID_PATTERN, FOOTNOTE_ID_LABEL_PATTERN):
            if match := pattern.search(item_id):
                return match.group(1)

    data_label = item.get(FOOTNOTE_LABEL_ATTRIBUTE)
    if data_label:
        return data_label

    anchor = item.find("a")
    if anchor is not None:
        text = anchor.get("data-footnote-ref") or anchor.get_text()
        return strip_label_brackets(text.strip()) or None
    return None


def _is_nested_in_item(element: Tag, container: Tag) -> bool:
    for parent in element.parents:
        if parent is container:
            return False
        if parent.name == "li":
            return True
    return False


def collect_footnote_section(
    container: Tag,
    ctx: SerializationContext,
    state: SerializerState,
    serialize_children: ChildSerializer,
) -> int:
    """Register every list item of a footnote section as a definition.

    Returns
    -------
    int
        Number of definitions newly registered.

    """
    registered = 0
    for footnote_list in container.find_all(["ol", "ul"]):
        if _is_nested_in_item(footnote_list, container):
            continue
        for item in footnote_list.find_all("li", recursive=False):
            label = normalize_footnote_label(footnote_item_label(item))
            if not label:
                continue
            clone = copy.copy(item)
            _strip_anchors(clone, is_backreference)
            content = serialize_children(clone, _definition_context(ctx), state).strip()
            if state.register(label, content):
                registered += 1

    logger.debug("Collected %d footnote definition(s) from footnote section", registered)
    return registered
