#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Utilities for uniform input handling.

Functions
---------
- is_path_like: Check if input is a pathlib.Path
- is_file_like: Check if input is a file-like object
- read_html_input: Turn any supported input into an HTML string
"""

from __future__ import annotations

from io import BytesIO, StringIO
from pathlib import Path
from typing import Any, BinaryIO, TextIO, Union

from .exceptions import InputError, MalformedInputError

FileLike = Union[BinaryIO, TextIO, BytesIO, StringIO]
InputType = Union[str, bytes, Path, FileLike]


def is_path_like(obj: Any) -> bool:
    """Check if an object is a filesystem path.

    Plain strings are always treated as HTML content, never as paths.

    Examples
    --------
    >>> is_path_like(Path("document.html"))
    True
    >>> is_path_like("<p>Hi</p>")
    False
    """
    return isinstance(obj, Path)


def is_file_like(obj: Any) -> bool:
    """Check if an object is file-like (has a callable ``read``)."""
    return hasattr(obj, "read") and callable(obj.read)


def decode_html_bytes(data: bytes) -> str:
    """Decode UTF-8 HTML bytes, tolerating a byte-order mark.

    Raises
    ------
    MalformedInputError
        If the bytes are not valid UTF-8.

    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise MalformedInputError("HTML input is not valid UTF-8", input_type="bytes", original_error=e) from e


def read_html_input(input_data: InputType) -> str:
    """Return the HTML text behind any supported input.

    Parameters
    ----------
    input_data : str, bytes, Path or file-like
        HTML string, UTF-8 bytes, path to an HTML file, or an open file

    Returns
    -------
    str
        The HTML markup

    Raises
    ------
    InputError
        If the input type is unsupported or the file cannot be read.
    MalformedInputError
        If the input bytes are not valid UTF-8.

    """
    if isinstance(input_data, str):
        return input_data

    if isinstance(input_data, (bytes, bytearray)):
        return decode_html_bytes(bytes(input_data))

    if is_path_like(input_data):
        try:
            data = Path(input_data).read_bytes()
        except OSError as e:
            raise InputError(f"Failed to read HTML file {input_data}: {e}", input_type="path", original_error=e) from e
        return decode_html_bytes(data)

    if is_file_like(input_data):
        try:
            content = input_data.read()
        except OSError as e:
            raise InputError(f"Failed to read HTML input: {e}", input_type="file", original_error=e) from e
        if isinstance(content, bytes):
            return decode_html_bytes(content)
        return str(content)

    raise InputError(
        f"Unsupported input type for HTML conversion: {type(input_data).__name__}",
        input_type=type(input_data).__name__,
    )
