#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Per-call context and per-conversion state for the serializer.

:class:`SerializationContext` is rebuilt for every recursive call and never
mutated. :class:`SerializerState` is created once by the orchestrator and
threaded by reference through the whole walk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from editor2md.options import CloneFrozenMixin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SerializationContext(CloneFrozenMixin):
    """Immutable settings for one recursive serialization call.

    Parameters
    ----------
    inline : bool, default False
        Whether the node is rendered inside inline content.
    depth : int, default 0
        List nesting depth, used for list indentation.
    skip_footnote_capture : bool, default False
        Disable footnote definition capture and footnote section collection.
    nesting : int, default 0
        Element nesting depth from the root, checked by the depth guard.

    """

    inline: bool = False
    depth: int = 0
    skip_footnote_capture: bool = False
    nesting: int = 0

    def with_inline(self, inline: bool = True) -> SerializationContext:
        return self.create_updated(inline=inline)

    def with_depth(self, depth: int) -> SerializationContext:
        return self.create_updated(depth=depth)

    def with_capture_disabled(self) -> SerializationContext:
        return self.create_updated(skip_footnote_capture=True)

    def descend(self) -> SerializationContext:
        """Return the context for the children of the current element."""
        return self.create_updated(nesting=self.nesting + 1)


@dataclass
class SerializerState:
    """Footnote definitions accumulated during one conversion.

    Labels passed to :meth:`register` must already be normalized; the first
    definition registered for a label wins.
    """

    footnote_definitions: list[str] = field(default_factory=list)
    seen_labels: set[str] = field(default_factory=set)
    footnote_indent: int = 4

    def has_label(self, label: str) -> bool:
        return label in self.seen_labels

    def register(self, label: str, content: str) -> bool:
        """Record a footnote definition.

        Parameters
        ----------
        label : str
            Normalized footnote key
        content : str
            Serialized definition body

        Returns
        -------
        bool
            True if the definition was added, False if it was empty or the
            label was already registered.

        """
        if not label or not content:
            return False
        if self.has_label(label):
            logger.debug("Ignoring duplicate footnote definition for [^%s]", label)
            return False
        self.seen_labels.add(label)
        body = content.replace("\n", "\n" + " " * self.footnote_indent)
        self.footnote_definitions.append(f"[^{label}]: {body}")
        logger.debug("Registered footnote definition [^%s]", label)
        return True

    def format_definitions(self) -> str:
        """Join the registered definitions, one per line."""
        return "\n".join(self.footnote_definitions)
