"""Spreadsheet-style range selection over hierarchical column headers.

Front-ends (grid widgets, tests) should only depend on the public API exposed
here rather than importing internal modules directly.
"""

from .core.columns import forest_from_definitions, pad_forest  # noqa: F401
from .core.exceptions import ColumnDefinitionError, ConfigurationError, HeaderToolkitError  # noqa: F401
from .core.models import EntryKind, HeaderEntry, HeaderModel, HeaderNode, NodeRef, Rect  # noqa: F401
from .core.services import (  # noqa: F401
    SelectionResult,
    SelectionSession,
    SessionState,
    build_header_model,
    select,
    select_range,
)

__all__: list[str] = [
    "EntryKind",
    "HeaderEntry",
    "HeaderModel",
    "HeaderNode",
    "NodeRef",
    "Rect",
    "HeaderToolkitError",
    "ColumnDefinitionError",
    "ConfigurationError",
    "forest_from_definitions",
    "pad_forest",
    "build_header_model",
    "select",
    "select_range",
    "SelectionResult",
    "SelectionSession",
    "SessionState",
]
