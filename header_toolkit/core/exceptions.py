from __future__ import annotations

"""Header toolkit exception classes.

Only precondition violations at the ingestion and configuration boundaries
raise. Expected outcomes of a selection (stale anchors, discarded groups) are
reported through return values instead.
"""

from typing import Optional

__all__ = [
    "HeaderToolkitError",
    "ColumnDefinitionError",
    "ConfigurationError",
]


class HeaderToolkitError(Exception):
    """Base exception for all header toolkit errors."""

    def __init__(self, message: str, node_id: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.node_id = node_id
        self.cause = cause

    def __str__(self) -> str:
        if self.node_id:
            return f"[Node: {self.node_id}] {super().__str__()}"
        return super().__str__()


class ColumnDefinitionError(HeaderToolkitError):
    """Raised when a column definition cannot be turned into a header node.

    This includes definitions without any usable identifier, ``children``
    values that are not lists, and leaves declared with children.
    """
    pass


class ConfigurationError(HeaderToolkitError):
    """Raised when an explicitly requested configuration file cannot be read."""

    def __init__(self, message: str, path: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        super().__init__(message, cause=cause)
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{super().__str__()} ({self.path})"
        return super().__str__()
