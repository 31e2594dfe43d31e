"""editor2md - convert a rich-text editor's HTML into canonical Markdown.

editor2md serializes the HTML content model of a browser rich-text editor
into Markdown: headings, emphasis, bullet/ordered/task lists, padded tables,
fenced code, links, images and footnotes gathered from word-processor
exports, markdown-it style footnote sections and superscript markers.

Requirements
------------
- Python 3.10+
- beautifulsoup4

Examples
--------
    >>> from editor2md import html_to_markdown
    >>> print(html_to_markdown("<h2>Notes</h2><ul><li>One</li></ul>"), end="")
    ## Notes
    <BLANKLINE>
    - One

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "editor2md requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from editor2md.exceptions import (
    ConversionError,
    Editor2MdError,
    InputError,
    MalformedInputError,
    RecursionLimitExceededError,
    ValidationError,
)
from editor2md.html2markdown import html_to_markdown
from editor2md.options import ConversionOptions
from editor2md.serializer import MarkdownSerializer

__all__ = [
    "__version__",
    "html_to_markdown",
    "MarkdownSerializer",
    "ConversionOptions",
    "Editor2MdError",
    "ValidationError",
    "InputError",
    "MalformedInputError",
    "RecursionLimitExceededError",
    "ConversionError",
]
