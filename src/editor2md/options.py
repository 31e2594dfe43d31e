#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for HTML to Markdown conversion.

The options are immutable; derive variants with
:meth:`ConversionOptions.create_updated`.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from editor2md.constants import (
    DEFAULT_FOOTNOTE_INDENT,
    DEFAULT_MAX_DEPTH,
    DEFAULT_PARSER,
    DEFAULT_STRIP_ELEMENTS,
)
from editor2md.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing copy-with-override for frozen dataclasses."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class ConversionOptions(CloneFrozenMixin):
    """Options controlling a single HTML to Markdown conversion.

    Parameters
    ----------
    max_depth : int, default 100
        Maximum element nesting depth walked before the depth guard trips.
    strict : bool, default False
        Raise :class:`~editor2md.exceptions.RecursionLimitExceededError` when the
        depth guard trips instead of falling back to the node's plain text.
    footnote_indent : int, default 4
        Spaces used to indent continuation lines of footnote definitions.
    escape_table_pipes : bool, default True
        Escape ``|`` characters inside table cells.
    strip_elements : tuple[str, ...]
        Elements removed from the tree before serialization.
    parser : str, default "html.parser"
        BeautifulSoup tree builder used to parse the input.

    """

    max_depth: int = field(
        default=DEFAULT_MAX_DEPTH,
        metadata={"help": "Maximum element nesting depth before the depth guard trips", "type": int},
    )
    strict: bool = field(
        default=False,
        metadata={"help": "Raise on depth overflow instead of degrading to plain text"},
    )
    footnote_indent: int = field(
        default=DEFAULT_FOOTNOTE_INDENT,
        metadata={"help": "Indentation of continuation lines in footnote definitions", "type": int},
    )
    escape_table_pipes: bool = field(
        default=True,
        metadata={"help": "Escape pipe characters inside table cells"},
    )
    strip_elements: tuple[str, ...] = field(
        default=DEFAULT_STRIP_ELEMENTS,
        metadata={"help": "HTML elements removed before conversion"},
    )
    parser: str = field(
        default=DEFAULT_PARSER,
        metadata={"help": "BeautifulSoup parser backend"},
    )

    def __post_init__(self) -> None:
        """Validate field types and numeric ranges.

        Raises
        ------
        ValidationError
            If a field has the wrong type or is outside its valid range.

        """
        for name in ("max_depth", "footnote_indent"):
            value = getattr(self, name)
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(
                    f"{name} must be an integer, got {type(value).__name__}",
                    parameter_name=name,
                    parameter_value=value,
                )
        for name in ("strict", "escape_table_pipes"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValidationError(
                    f"{name} must be a boolean, got {type(value).__name__}",
                    parameter_name=name,
                    parameter_value=value,
                )
        if not isinstance(self.parser, str):
            raise ValidationError(
                f"parser must be a string, got {type(self.parser).__name__}",
                parameter_name="parser",
                parameter_value=self.parser,
            )
        if not isinstance(self.strip_elements, (list, tuple)) or not all(
            isinstance(name, str) for name in self.strip_elements
        ):
            raise ValidationError(
                "strip_elements must be a sequence of tag names",
                parameter_name="strip_elements",
                parameter_value=self.strip_elements,
            )
        if self.max_depth <= 0:
            raise ValidationError(
                f"max_depth must be positive, got {self.max_depth}",
                parameter_name="max_depth",
                parameter_value=self.max_depth,
            )
        if self.footnote_indent < 0:
            raise ValidationError(
                f"footnote_indent must be non-negative, got {self.footnote_indent}",
                parameter_name="footnote_indent",
                parameter_value=self.footnote_indent,
            )
        if isinstance(self.strip_elements, list):
            object.__setattr__(self, "strip_elements", tuple(self.strip_elements))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConversionOptions":
        """Build options from a plain mapping such as a parsed JSON file.

        Parameters
        ----------
        data : Mapping[str, Any]
            Option names and values

        Returns
        -------
        ConversionOptions
            The validated options

        Raises
        ------
        ValidationError
            If the mapping contains unknown option names.

        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValidationError(
                f"Unknown option(s): {', '.join(unknown)}",
                parameter_name=unknown[0],
                parameter_value=data[unknown[0]],
            )
        return cls(**dict(data))
