# -*- coding: utf-8 -*-
"""Package version detection.

Provides a single public function, ``get_app_version()``. Installed builds
report the distribution version; source checkouts report ``vdev``.
"""

from __future__ import annotations

from importlib import metadata
from typing import Optional

_CACHED_VERSION: Optional[str] = None


def get_app_version() -> str:
    """Return the version string (e.g., ``v0.1.0``)."""
    global _CACHED_VERSION
    if _CACHED_VERSION:
        return _CACHED_VERSION

    try:
        text = metadata.version("header-toolkit").strip()
    except metadata.PackageNotFoundError:
        text = ""

    if text:
        _CACHED_VERSION = text if text.startswith("v") else f"v{text}"
    else:
        _CACHED_VERSION = "vdev"
    return _CACHED_VERSION
