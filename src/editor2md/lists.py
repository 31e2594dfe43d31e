#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Rendering of bullet, ordered and task lists."""

from __future__ import annotations

from typing import Callable

from bs4 import PageElement, Tag

from editor2md.constants import (
    EDITOR_INDENT_PATTERN,
    LIST_INDENT,
    LIST_TYPE_ATTRIBUTE,
    LIST_TYPES,
    TASK_MARKERS,
)
from editor2md.context import SerializationContext, SerializerState

NodeSerializer = Callable[[PageElement, SerializationContext, SerializerState], str]
ItemCapture = Callable[[Tag, SerializationContext, SerializerState], bool]


def detect_list_type(list_node: Tag, item: Tag, default_ordered: bool) -> str:
    """Classify a list item as ``bullet``, ``ordered``, ``checked`` or ``unchecked``.

    The editor marks each item with a ``data-list`` attribute; without it the
    list's tag decides.
    """
    hint = (item.get(LIST_TYPE_ATTRIBUTE) or "").strip().lower()
    if hint in LIST_TYPES:
        return hint
    if list_node.name == "ul":
        return "bullet"
    return "ordered" if default_ordered else "bullet"


def editor_indent(item: Tag) -> int:
    """Return the extra nesting level the editor encodes as ``ql-indent-N``."""
    classes = item.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    for cls in classes:
        if match := EDITOR_INDENT_PATTERN.match(cls):
            return int(match.group(1))
    return 0


def render_list(
    list_node: Tag,
    ctx: SerializationContext,
    state: SerializerState,
    serialize_node: NodeSerializer,
    ordered: bool,
    capture: ItemCapture | None = None,
) -> str:
    """Render the direct ``<li>`` children of a list.

    Parameters
    ----------
    list_node : Tag
        The ``<ul>`` or ``<ol>`` element
    ctx : SerializationContext
        Context of the list; ``ctx.depth`` is the depth of the enclosing list
    state : SerializerState
        Per-conversion state
    serialize_node : NodeSerializer
        Dispatcher used for item content
    ordered : bool
        Default ordering implied by the tag
    capture : ItemCapture, optional
        Called first for every item; an item it consumes (a footnote
        definition) is not rendered.

    Returns
    -------
    str
        Rendered items followed by one blank line, or ``""`` if every item
        was empty.

    """
    item_ctx = ctx.descend()
    counters: dict[int, int] = {}
    rendered: list[str] = []

    for item in list_node.find_all("li", recursive=False):
        if capture is not None and capture(item, item_ctx, state):
            continue
        list_type = detect_list_type(list_node, item, ordered)
        level = editor_indent(item)
        for deeper in [lvl for lvl in counters if lvl > level]:
            del counters[deeper]

        index = counters.get(level, 0) + 1
        if list_type == "ordered":
            counters[level] = index

        rendered.append(
            render_list_item(item, item_ctx.with_depth(ctx.depth + 1 + level), state, serialize_node, list_type, index)
        )

    joined = "".join(rendered)
    return f"{joined}\n" if joined else ""


def render_list_item(
    item: Tag,
    ctx: SerializationContext,
    state: SerializerState,
    serialize_node: NodeSerializer,
    list_type: str,
    index: int,
) -> str:
    """Render one list item and any lists nested directly inside it.

    Continuation lines of multi-line content are aligned under the first
    character after the marker. Nested lists follow on their own lines at
    their own depth.
    """
    depth = ctx.depth or 1
    indent = LIST_INDENT * (depth - 1)
    marker = f"{index}." if list_type == "ordered" else "-"

    child_ctx = ctx.descend().with_inline()
    content_parts: list[str] = []
    nested_parts: list[str] = []
    for child in item.children:
        if isinstance(child, Tag) and child.name in ("ul", "ol"):
            nested = serialize_node(child, child_ctx, state).rstrip("\n")
            if nested.strip():
                nested_parts.append(nested)
        else:
            content_parts.append(serialize_node(child, child_ctx, state))

    content = "".join(content_parts).strip()
    if list_type in TASK_MARKERS:
        checkbox = TASK_MARKERS[list_type]
        content = f"{checkbox} {content}" if content else checkbox

    output = ""
    if content:
        first_line, *rest = content.split("\n")
        continuation = indent + " " * (len(marker) + 1)
        output = f"{indent}{marker} {first_line}"
        for line in rest:
            output += f"\n{continuation}{line}"
        output += "\n"

    for nested in nested_parts:
        output += f"{nested}\n"
    return output
