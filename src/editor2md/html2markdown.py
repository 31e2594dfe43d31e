"""Editor HTML to Markdown conversion module.

This module is the public entry point for converting the HTML content model
of a rich-text editor into canonical Markdown. It accepts HTML strings, UTF-8
bytes, paths and file-like objects, and delegates the tree walk to
:class:`editor2md.serializer.MarkdownSerializer`.

Supported HTML Elements
-----------------------
- Text formatting: bold, italic, strikethrough, inline code, superscript
- Structure: headings (h1-h6), paragraphs, line breaks, horizontal rules, blockquotes
- Lists: bullet, ordered and task lists (``data-list`` hints), with nesting
- Tables: header detection and padded columns
- Code blocks with language hints, including the editor's code-block containers
- Links and images
- Footnotes from word-processor exports, markdown-it style footnote sections
  and superscript markers

Examples
--------
Basic conversion:

    >>> from editor2md import html_to_markdown
    >>> html_to_markdown("<p>Content with <strong>bold</strong> text.</p>")
    'Content with **bold** text.\\n'

Footnotes:

    >>> html = '<p>Text<sup><a href="#fn1">1</a></sup></p><p id="fn1">A note.</p>'
    >>> print(html_to_markdown(html), end="")
    Text[^1]
    <BLANKLINE>
    [^1]: A note.

Custom options:

    >>> from editor2md.options import ConversionOptions
    >>> markdown = html_to_markdown("<p>Hi</p>", options=ConversionOptions(max_depth=50))
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
#  Permission is hereby granted, free of charge, to any person obtaining a copy of this software and associated
#  documentation files (the "Software"), to deal in the Software without restriction, including without limitation
#  the rights to use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies of the Software,
#  and to permit persons to whom the Software is furnished to do so, subject to the following conditions:
#
#  The above copyright notice and this permission notice shall be included in all copies or substantial
#  portions of the Software.
#
#  THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR IMPLIED, INCLUDING
#  BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
#  IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY,
#  WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE
#  SOFTWARE OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.

import logging

from ._input_utils import InputType, read_html_input
from .exceptions import ConversionError, Editor2MdError
from .options import ConversionOptions
from .serializer import MarkdownSerializer

logger = logging.getLogger(__name__)


def html_to_markdown(input_data: InputType, options: ConversionOptions | None = None) -> str:
    """Convert editor HTML to Markdown.

    Parameters
    ----------
    input_data : str, bytes, Path or file-like
        HTML content. Strings are always treated as markup; pass a
        ``pathlib.Path`` to read a file.
    options : ConversionOptions, optional
        Conversion options. Defaults are used when omitted.

    Returns
    -------
    str
        Markdown with no trailing whitespace on any line, no run of more than
        one blank line and exactly one trailing newline.

    Raises
    ------
    InputError
        If the input type is unsupported or the file cannot be read.
    MalformedInputError
        If the input cannot be decoded or parsed.
    RecursionLimitExceededError
        If ``options.strict`` is set and the tree nests deeper than
        ``options.max_depth``.
    ConversionError
        For any other failure during conversion.

    """
    if options is None:
        options = ConversionOptions()

    html_content = read_html_input(input_data)
    logger.debug("Converting %d characters of HTML", len(html_content))

    try:
        return MarkdownSerializer(options).convert(html_content)
    except Editor2MdError:
        raise
    except RecursionError as e:
        raise ConversionError(
            "HTML nesting exceeded the interpreter recursion limit; lower max_depth",
            conversion_stage="serialization",
            original_error=e,
        ) from e
    except Exception as e:
        raise ConversionError(
            f"Failed to convert HTML to Markdown: {e}", conversion_stage="serialization", original_error=e
        ) from e
