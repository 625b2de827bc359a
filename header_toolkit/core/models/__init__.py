from __future__ import annotations

"""Shared data structures used across the header toolkit core.

This package exposes dataclasses and value objects used by services and other
core layers. It is intentionally free of UI / I/O code so that the contained
objects can be reused in any context (unit-tests, CLI, GUI, etc.).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple
import uuid

from header_toolkit.core.exceptions import ColumnDefinitionError

__all__ = [
    "EntryKind",
    "NodeRef",
    "HeaderNode",
    "Rect",
    "HeaderEntry",
    "HeaderModel",
]


class EntryKind(str, Enum):
    """Discriminator for header cells: atomic leaf column or merged group."""

    LEAF = "leaf"
    GROUP = "group"


def new_instance_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class NodeRef:
    """Identifies one clicked header cell of one tree build.

    ``id`` is the configured column/group identifier; ``instance_id`` tells two
    nodes with the same ``id`` apart and is only meaningful for the tree
    snapshot it was taken from.
    """

    id: str
    instance_id: str


@dataclass(frozen=True)
class HeaderNode:
    """One node of the displayed header tree.

    Leaves carry no children. Groups carry an ordered tuple of children and may
    be flagged as ``padding``: a structural wrapper inserted only to align
    depth across sibling branches, with no visual identity of its own.
    """

    id: str
    kind: EntryKind
    children: Tuple["HeaderNode", ...] = ()
    padding: bool = False
    instance_id: str = field(default_factory=new_instance_id)
    label: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind is EntryKind.LEAF and self.children:
            raise ColumnDefinitionError("Leaf columns cannot have children", node_id=self.id)
        if self.padding and self.kind is not EntryKind.GROUP:
            raise ColumnDefinitionError("Only groups can be padding wrappers", node_id=self.id)

    @classmethod
    def leaf(cls, node_id: str, *, label: Optional[str] = None, instance_id: Optional[str] = None) -> "HeaderNode":
        return cls(node_id, EntryKind.LEAF, label=label, instance_id=instance_id or new_instance_id())

    @classmethod
    def group(
        cls,
        node_id: str,
        children: "list[HeaderNode] | Tuple[HeaderNode, ...]",
        *,
        padding: bool = False,
        label: Optional[str] = None,
        instance_id: Optional[str] = None,
    ) -> "HeaderNode":
        return cls(
            node_id,
            EntryKind.GROUP,
            children=tuple(children),
            padding=padding,
            label=label,
            instance_id=instance_id or new_instance_id(),
        )

    @property
    def is_leaf(self) -> bool:
        return self.kind is EntryKind.LEAF

    @property
    def ref(self) -> NodeRef:
        return NodeRef(self.id, self.instance_id)


@dataclass(frozen=True)
class Rect:
    """Inclusive rectangle in ``(leaf index, depth row)`` space."""

    leaf_start: int
    leaf_end: int
    depth_start: int
    depth_end: int

    def overlaps(self, other: "Rect") -> bool:
        return not (
            other.leaf_end < self.leaf_start
            or other.leaf_start > self.leaf_end
            or other.depth_end < self.depth_start
            or other.depth_start > self.depth_end
        )

    def contains(self, other: "Rect") -> bool:
        return (
            self.leaf_start <= other.leaf_start
            and other.leaf_end <= self.leaf_end
            and self.depth_start <= other.depth_start
            and other.depth_end <= self.depth_end
        )

    def union(self, other: "Rect") -> "Rect":
        return Rect(
            min(self.leaf_start, other.leaf_start),
            max(self.leaf_end, other.leaf_end),
            min(self.depth_start, other.depth_start),
            max(self.depth_end, other.depth_end),
        )


@dataclass(frozen=True)
class HeaderEntry:
    """One row of the flattened header model.

    Attributes
    ----------
    id, instance_id
        Identity of the underlying node (see :class:`NodeRef`).
    kind
        Leaf column or header group.
    leaf_start, leaf_end
        Inclusive range in the zero-based, display-order leaf index space.
    depth_start, depth_end
        Inclusive header row interval. Groups occupy exactly one row; leaves
        extend down to the bottom row of the header.
    label
        Display text carried over from the column definition, if any.
    """

    id: str
    instance_id: str
    kind: EntryKind
    leaf_start: int
    leaf_end: int
    depth_start: int
    depth_end: int
    label: Optional[str] = None

    @property
    def ref(self) -> NodeRef:
        return NodeRef(self.id, self.instance_id)

    @property
    def rect(self) -> Rect:
        return Rect(self.leaf_start, self.leaf_end, self.depth_start, self.depth_end)

    @property
    def depth_band(self) -> Tuple[int, int]:
        return (self.depth_start, self.depth_end)

    def matches(self, ref: NodeRef) -> bool:
        return self.id == ref.id and self.instance_id == ref.instance_id


@dataclass(frozen=True)
class HeaderModel:
    """Ordered, pre-order flattening of one header tree build."""

    entries: Tuple[HeaderEntry, ...] = ()
    min_depth: int = 0
    max_depth: int = 0
    leaf_count: int = 0

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def index_of(self, ref: NodeRef) -> int:
        """Return the display position of ``ref`` or ``-1`` when absent."""
        for index, entry in enumerate(self.entries):
            if entry.matches(ref):
                return index
        return -1

    def find(self, ref: NodeRef) -> Optional[HeaderEntry]:
        index = self.index_of(ref)
        return self.entries[index] if index >= 0 else None

    def leaves(self) -> Tuple[HeaderEntry, ...]:
        return tuple(e for e in self.entries if e.kind is EntryKind.LEAF)

    def groups(self) -> Tuple[HeaderEntry, ...]:
        return tuple(e for e in self.entries if e.kind is EntryKind.GROUP)
