from __future__ import annotations

"""Click-sequence state for header selection.

This is the grid-side collaborator of the selection engine: it remembers the
last clicked header cell (the anchor) and whether the modifier key is held,
rebuilds the header model from the live tree on every click and decides
between a singleton and a range selection. The engine itself stays a pure
function; all carried-forward state lives here.

Examples
--------
    session = SelectionSession()
    session.click(c1.ref, forest)        # -> ["c1"]
    session.key_down("Shift")
    session.click(c3.ref, forest)        # -> ids of the merge-safe range
    session.key_up("Shift")
    session.header_class("c2")           # -> "excel-header-selected"
"""

from enum import Enum
import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from header_toolkit.config import ConfigManager
from header_toolkit.core.models import HeaderNode, NodeRef
from header_toolkit.core.services.header_model_service import build_header_model
from header_toolkit.core.services.selection_service import select_range

__all__ = ["SessionState", "SelectionSession"]

logger = logging.getLogger(__name__)

_DEFAULT_SELECTED_CLASS = "excel-header-selected"
_DEFAULT_MODIFIER_KEY = "Shift"


class SessionState(str, Enum):
    IDLE = "idle"
    ANCHORED = "anchored"


class SelectionSession:
    """Tracks anchor, modifier state and the current selection of one grid.

    Parameters
    ----------
    settings : mapping, optional
        Selection settings (``selected_class``, ``modifier_key``). Defaults to
        the ``selection`` section of :class:`ConfigManager`.
    """

    def __init__(self, settings: Optional[Mapping[str, Any]] = None) -> None:
        config: Dict[str, Any] = dict(settings) if settings is not None else ConfigManager().get_selection_config()
        self._selected_class = str(config.get("selected_class") or _DEFAULT_SELECTED_CLASS)
        self._modifier_key = str(config.get("modifier_key") or _DEFAULT_MODIFIER_KEY)
        self._anchor: Optional[NodeRef] = None
        self._shift_pressed = False
        self._selected: Tuple[str, ...] = ()

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return SessionState.IDLE if self._anchor is None else SessionState.ANCHORED

    @property
    def anchor(self) -> Optional[NodeRef]:
        return self._anchor

    @property
    def shift_pressed(self) -> bool:
        return self._shift_pressed

    @property
    def selected_ids(self) -> Tuple[str, ...]:
        return self._selected

    def reset(self) -> None:
        """Return to ``IDLE`` with nothing selected; modifier state is kept."""
        self._anchor = None
        self._selected = ()
        logger.debug("Session reset")

    # -------------------------------------------------------------------------
    # Modifier tracking
    # -------------------------------------------------------------------------

    def key_down(self, key: str) -> None:
        if key == self._modifier_key:
            self._shift_pressed = True

    def key_up(self, key: str) -> None:
        # Released whatever element had focus when the key went up
        if key == self._modifier_key:
            self._shift_pressed = False

    # -------------------------------------------------------------------------
    # Clicks
    # -------------------------------------------------------------------------

    def click(self, clicked: NodeRef, forest: Sequence[HeaderNode]) -> Tuple[str, ...]:
        """Handle a header click on ``clicked`` within the tree snapshot ``forest``.

        A plain click (or a modifier click without anchor) selects exactly the
        clicked cell. A modifier click with an anchor replaces the selection
        with the range from the anchor to ``clicked``; when the anchor no
        longer exists in ``forest`` the previous selection is kept. Either way
        ``clicked`` becomes the next anchor.
        """
        previous_anchor = self._anchor
        if self._shift_pressed and previous_anchor is not None:
            model = build_header_model(forest)
            result = select_range(model, previous_anchor, clicked)
            if result:
                self._selected = result.selected_ids
            else:
                logger.info("Range selection noop (%s); keeping previous selection", result.reason)
        else:
            self._selected = (clicked.id,)

        self._anchor = clicked
        logger.debug(
            "Click %s shift=%s anchor=%s -> %s",
            clicked.id,
            self._shift_pressed,
            previous_anchor.id if previous_anchor is not None else None,
            self._selected,
        )
        return self._selected

    def click_node(self, node: HeaderNode, forest: Sequence[HeaderNode]) -> Tuple[str, ...]:
        return self.click(node.ref, forest)

    # -------------------------------------------------------------------------
    # Style hook
    # -------------------------------------------------------------------------

    def is_selected(self, node_id: str) -> bool:
        return node_id in self._selected

    def header_class(self, node_id: Optional[str]) -> str:
        """Return the CSS class for a header cell, ``""`` when not selected."""
        if node_id and node_id in self._selected:
            return self._selected_class
        return ""
