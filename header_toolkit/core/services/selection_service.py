from __future__ import annotations

"""Rectangular range selection over a flattened header model.

Given an anchor and a target cell, computes the header cells a shift-click
selects without ever cutting through a merged (group) cell.

Scope and guarantees:
- Pure function of ``(model, anchor, target)``: no state is kept between calls.
- Stale references never raise; they yield an empty :class:`SelectionResult`.
- Results are reported in model display order.

Strategies
----------
``same_row``
    Anchor and target share the same row band and no cell between them leaks
    above or below that band: the cells of that band between the two
    positions are selected.
``rectangle``
    The union of both cells is grown to a fixed point until every overlapping
    cell is fully inside, then every intersecting cell is collected.

In both cases groups sitting above the selection whose whole leaf span is
covered by the selection are added, and cells strictly contained by a
shallower selected cell are dropped (groups only).
"""

from dataclasses import dataclass
import logging
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from header_toolkit.core.models import EntryKind, HeaderEntry, HeaderModel, NodeRef, Rect

__all__ = [
    "SelectionResult",
    "select",
    "select_range",
    "same_row_entries",
    "expand_rectangle",
    "entries_in_rect",
    "remove_contained",
    "covering_groups",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of one range selection.

    Attributes
    ----------
    selected_ids
        Identifiers of the cells to highlight, in display order.
    strategy
        ``"same_row"``, ``"rectangle"`` or ``"none"`` when nothing was selected.
    rect
        Final rectangle of the rectangle strategy, ``None`` otherwise.
    reason
        Diagnostic for empty results (``"anchor_not_found"``/``"target_not_found"``).
    """
    selected_ids: Tuple[str, ...] = ()
    strategy: str = "none"
    rect: Optional[Rect] = None
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return bool(self.selected_ids)


def select(model: HeaderModel, anchor: NodeRef, target: NodeRef) -> List[str]:
    """Return the ids selected by a shift-click from ``anchor`` to ``target``."""
    return list(select_range(model, anchor, target).selected_ids)


def select_range(model: HeaderModel, anchor: NodeRef, target: NodeRef) -> SelectionResult:
    """Compute the merge-safe selection between ``anchor`` and ``target``."""
    anchor_index = model.index_of(anchor)
    if anchor_index < 0:
        logger.info("Selection noop: anchor_not_found id=%s", anchor.id)
        return SelectionResult(reason="anchor_not_found")
    target_index = model.index_of(target)
    if target_index < 0:
        logger.info("Selection noop: target_not_found id=%s", target.id)
        return SelectionResult(reason="target_not_found")

    entries = model.entries
    first = entries[anchor_index]
    second = entries[target_index]

    rect: Optional[Rect] = None
    picked = None
    strategy = "rectangle"
    if first.depth_band == second.depth_band:
        picked = same_row_entries(entries, anchor_index, target_index)
        if picked is not None:
            strategy = "same_row"
        else:
            logger.debug("Same-row selection rejected: a merged cell leaks out of band %s", first.depth_band)

    if picked is None:
        rect = expand_rectangle(model, first.rect.union(second.rect))
        picked = entries_in_rect(model, rect)

    picked = picked + covering_groups(model, picked)
    picked = remove_contained(picked)
    picked_keys = {entry.ref for entry in picked}
    selected = tuple(entry.id for entry in entries if entry.ref in picked_keys)

    logger.debug("Selection %s -> %s via %s: %s", anchor.id, target.id, strategy, selected)
    return SelectionResult(selected, strategy, rect)


def same_row_entries(
    entries: Sequence[HeaderEntry], anchor_index: int, target_index: int
) -> Optional[List[HeaderEntry]]:
    """Return the band's entries between two display positions, inclusive.

    Both positions must share the same depth band. Entries of other rows
    lying between them are skipped. Returns ``None`` when some entry in the
    range covers the band and reaches beyond it, i.e. a merged cell spans
    into the band from outside.
    """
    start, end = sorted((anchor_index, target_index))
    band = entries[anchor_index].depth_band
    between = entries[start:end + 1]

    for entry in between:
        if entry.depth_band != band and entry.depth_start <= band[0] and band[1] <= entry.depth_end:
            return None

    return [entry for entry in between if band[0] <= entry.depth_start and entry.depth_end <= band[1]]


def expand_rectangle(model: HeaderModel, rect: Rect) -> Rect:
    """Grow ``rect`` until no entry of ``model`` is only partially inside it.

    Bounds only ever grow and are limited by the model's extent, so the loop
    reaches a fixed point.
    """
    rounds = 0
    changed = True
    while changed:
        changed = False
        rounds += 1
        for entry in model.entries:
            cell = entry.rect
            if rect.overlaps(cell) and not rect.contains(cell):
                rect = rect.union(cell)
                changed = True
    logger.debug("Rectangle stabilised after %d rounds: %s", rounds, rect)
    return rect


def entries_in_rect(model: HeaderModel, rect: Rect) -> List[HeaderEntry]:
    """Return every entry intersecting ``rect`` in display order."""
    return [entry for entry in model.entries if rect.overlaps(entry.rect)]


def covering_groups(model: HeaderModel, picked: Sequence[HeaderEntry]) -> List[HeaderEntry]:
    """Return unpicked groups above ``picked`` whose leaf span is fully covered."""
    if not picked:
        return []
    covered: Set[int] = set()
    for entry in picked:
        covered.update(range(entry.leaf_start, entry.leaf_end + 1))
    top = min(entry.depth_start for entry in picked)
    already = {entry.ref for entry in picked}

    return [
        entry
        for entry in model.entries
        if entry.kind is EntryKind.GROUP
        and entry.depth_start < top
        and entry.ref not in already
        and all(index in covered for index in range(entry.leaf_start, entry.leaf_end + 1))
    ]


def remove_contained(entries: Iterable[HeaderEntry]) -> List[HeaderEntry]:
    """Drop groups strictly contained by a shallower entry of the same set.

    Leaves are always kept. Applying the function twice yields the same list
    as applying it once.
    """
    entries = list(entries)
    kept: List[HeaderEntry] = []
    for entry in entries:
        if entry.kind is EntryKind.GROUP and any(
            other.depth_start < entry.depth_start
            and other.rect.contains(entry.rect)
            and other.rect != entry.rect
            for other in entries
        ):
            continue
        kept.append(entry)
    return kept
