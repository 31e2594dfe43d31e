#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Text normalization passes applied to text nodes and to the final output.

The line-level passes (:func:`strip_trailing_whitespace`,
:func:`collapse_blank_lines`) are idempotent and commute with concatenation
of already normalized fragments.
"""

from __future__ import annotations

import re

from editor2md.constants import MIN_CODE_FENCE_LENGTH

_WHITESPACE_RUN = re.compile(r"\s+")
_BLANK_LINE_RUN = re.compile(r"\n{3,}")
_TRAILING_WHITESPACE = re.compile(r"[^\S\n]+$", re.MULTILINE)
_BACKTICK_RUN = re.compile(r"`+")
_LOOSE_FOOTNOTE_DEFINITION = re.compile(r"^(\[\^[^\]]+\])[ \t]+(?=[^\s:])", re.MULTILINE)


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace, including non-breaking spaces, to one space."""
    if not text:
        return ""
    return _WHITESPACE_RUN.sub(" ", text.replace("\u00a0", " "))


def strip_trailing_whitespace(text: str) -> str:
    """Strip trailing whitespace from every line independently."""
    return _TRAILING_WHITESPACE.sub("", text)


def collapse_blank_lines(text: str) -> str:
    """Collapse any run of three or more newlines to exactly two."""
    return _BLANK_LINE_RUN.sub("\n\n", text)


def normalize_markdown(text: str) -> str:
    """Apply both line-level passes.

    Parameters
    ----------
    text : str
        Markdown text

    Returns
    -------
    str
        Text with no trailing whitespace on any line and no run of three or
        more consecutive newlines.

    """
    return collapse_blank_lines(strip_trailing_whitespace(text))


def ensure_footnote_definition_syntax(markdown: str) -> str:
    """Rewrite ``[^label] text`` at line start into ``[^label]: text``."""
    return _LOOSE_FOOTNOTE_DEFINITION.sub(r"\1: ", markdown)


def normalize_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def longest_backtick_run(text: str) -> int:
    return max((len(run) for run in _BACKTICK_RUN.findall(text)), default=0)


def code_fence(content: str, minimum: int = MIN_CODE_FENCE_LENGTH) -> str:
    """Return a backtick fence longer than any backtick run in ``content``.

    Parameters
    ----------
    content : str
        Code that the fence must delimit unambiguously
    minimum : int
        Shortest fence to return

    Returns
    -------
    str
        Fence string such as ``"```"`` or ``"````"``

    """
    return "`" * max(minimum, longest_backtick_run(content) + 1)
