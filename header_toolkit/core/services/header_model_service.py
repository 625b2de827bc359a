from __future__ import annotations

"""Flattening of a header tree into an indexed entry model (UI-agnostic).

The builder walks the displayed header forest depth-first, pre-order, and
emits one :class:`HeaderEntry` per leaf column and per meaningful group.
Padding groups are pass-through: they emit nothing and their children are
placed at the padding node's own depth.

Groups reserve a slot before their children are visited so that they always
precede their descendants; the slot is backfilled once the children's span is
known, or dropped again when no child survived.

Examples
--------
    model = build_header_model(forest)
    for entry in model.entries:
        print(entry.id, entry.leaf_start, entry.leaf_end, entry.depth_start, entry.depth_end)
"""

from dataclasses import dataclass, replace
import logging
from typing import List, Optional, Sequence

from header_toolkit.core.models import EntryKind, HeaderEntry, HeaderModel, HeaderNode

__all__ = ["Span", "build_header_model"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Span:
    """Leaf range covered by a subtree and the deepest row it reaches."""

    leaf_start: int
    leaf_end: int
    deepest: int

    def merge(self, other: Optional["Span"]) -> "Span":
        if other is None:
            return self
        return Span(
            min(self.leaf_start, other.leaf_start),
            max(self.leaf_end, other.leaf_end),
            max(self.deepest, other.deepest),
        )


class _Builder:
    """Single-use walker holding the entry arena and the leaf counter."""

    def __init__(self) -> None:
        self.entries: List[HeaderEntry] = []
        self.leaf_counter = 0

    def walk_forest(self, nodes: Sequence[HeaderNode], depth: int) -> Optional[Span]:
        span: Optional[Span] = None
        for node in nodes:
            child_span = self.walk(node, depth)
            if child_span is not None:
                span = child_span.merge(span)
        return span

    def walk(self, node: HeaderNode, depth: int) -> Optional[Span]:
        if node.kind is EntryKind.LEAF:
            index = self.leaf_counter
            self.leaf_counter += 1
            self.entries.append(
                HeaderEntry(node.id, node.instance_id, EntryKind.LEAF, index, index, depth, depth, node.label)
            )
            return Span(index, index, depth)

        if node.padding:
            return self.walk_forest(node.children, depth)

        slot = len(self.entries)
        self.entries.append(HeaderEntry(node.id, node.instance_id, EntryKind.GROUP, 0, 0, depth, depth, node.label))
        span = self.walk_forest(node.children, depth + 1)
        if span is None:
            # Nothing below survived, so nothing was appended after the slot
            del self.entries[slot]
            logger.debug("Discarded group without surviving children: %s", node.id)
            return None

        self.entries[slot] = replace(
            self.entries[slot],
            leaf_start=span.leaf_start,
            leaf_end=span.leaf_end,
            depth_end=span.deepest,
        )
        return Span(span.leaf_start, span.leaf_end, max(depth, span.deepest))


def build_header_model(forest: Sequence[HeaderNode]) -> HeaderModel:
    """Flatten ``forest`` into a :class:`HeaderModel`.

    The input is not mutated. After the walk a normalization pass extends
    every leaf down to the deepest row of the whole header and collapses
    every group to its own single row.
    """
    builder = _Builder()
    builder.walk_forest(forest, 0)

    raw = builder.entries
    if not raw:
        return HeaderModel()

    max_depth = max(entry.depth_end for entry in raw)
    min_depth = min(entry.depth_start for entry in raw)
    entries = tuple(
        replace(entry, depth_end=max_depth if entry.kind is EntryKind.LEAF else entry.depth_start)
        for entry in raw
    )
    model = HeaderModel(entries, min_depth=min_depth, max_depth=max_depth, leaf_count=builder.leaf_counter)
    logger.debug(
        "Built header model: %d entries, %d leaves, depth %d..%d",
        len(entries),
        model.leaf_count,
        min_depth,
        max_depth,
    )
    return model
