from __future__ import annotations

"""Header model building, range selection and click-session services."""

from .header_model_service import Span, build_header_model  # noqa: F401
from .selection_service import SelectionResult, select, select_range  # noqa: F401
from .selection_session import SelectionSession, SessionState  # noqa: F401

__all__: list[str] = [
    "Span",
    "build_header_model",
    "SelectionResult",
    "select",
    "select_range",
    "SelectionSession",
    "SessionState",
]
