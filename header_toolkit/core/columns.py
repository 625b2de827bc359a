from __future__ import annotations

"""Column definition ingestion.

Turns nested column definitions (``headerName`` / ``colId`` / ``groupId`` /
``children`` mappings, as a grid configuration declares them) into an
immutable :class:`HeaderNode` forest. The leaf/group tag is assigned once,
here; downstream code switches on :attr:`HeaderNode.kind` only.

The module also reproduces the padding a grid inserts when it displays
branches of different depths, see :func:`pad_forest`.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Sequence, Union

import yaml

from header_toolkit.core.exceptions import ColumnDefinitionError, ConfigurationError
from header_toolkit.core.models import EntryKind, HeaderNode, new_instance_id

__all__ = [
    "node_from_definition",
    "forest_from_definitions",
    "load_column_definitions",
    "pad_forest",
    "iter_nodes",
    "tree_height",
]

logger = logging.getLogger(__name__)


def node_from_definition(definition: Mapping[str, Any]) -> HeaderNode:
    """Convert one column definition (recursively) into a :class:`HeaderNode`.

    A definition carrying a ``children`` list is a group; anything else is a
    leaf column. Groups are identified by ``groupId`` then ``colId``; leaves
    by ``colId`` then ``field``.

    Raises
    ------
    ColumnDefinitionError
        If the definition is not a mapping, has no identifier, or declares
        ``children`` that is not a list.
    """
    if not isinstance(definition, Mapping):
        raise ColumnDefinitionError(
            f"Column definition must be a mapping, got {type(definition).__name__}"
        )

    label = definition.get("headerName")
    children = definition.get("children")
    is_group = "children" in definition and children is not None

    if is_group:
        if not isinstance(children, list):
            raise ColumnDefinitionError(
                "Group 'children' must be a list",
                node_id=str(definition.get("groupId") or definition.get("colId") or label or ""),
            )
        node_id = definition.get("groupId") or definition.get("colId")
    else:
        node_id = definition.get("colId") or definition.get("field")

    if node_id is None or str(node_id) == "":
        raise ColumnDefinitionError(
            "Column definition has no identifier (expected groupId, colId or field)",
            node_id=str(label) if label else None,
        )

    instance_id = str(definition.get("instanceId") or new_instance_id())
    padding = bool(definition.get("padding", False))

    if not is_group:
        if padding:
            raise ColumnDefinitionError("Only groups can be padding wrappers", node_id=str(node_id))
        return HeaderNode(
            str(node_id),
            EntryKind.LEAF,
            instance_id=instance_id,
            label=str(label) if label is not None else None,
        )

    return HeaderNode(
        str(node_id),
        EntryKind.GROUP,
        children=tuple(node_from_definition(child) for child in children),
        padding=padding,
        instance_id=instance_id,
        label=str(label) if label is not None else None,
    )


def forest_from_definitions(definitions: Iterable[Mapping[str, Any]]) -> List[HeaderNode]:
    """Convert a root-level sequence of definitions into an ordered forest."""
    forest = [node_from_definition(definition) for definition in definitions]
    logger.debug("Ingested %d root column definitions", len(forest))
    return forest


def load_column_definitions(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Read column definitions from a YAML file.

    The document is either a list of definitions or a mapping holding that
    list under ``columns``.
    """
    source = Path(path)
    try:
        data = yaml.safe_load(source.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError("Could not read column definitions", path=str(source), cause=exc) from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError("Invalid YAML in column definitions", path=str(source), cause=exc) from exc

    if isinstance(data, Mapping):
        data = data.get("columns")
    if not isinstance(data, list):
        raise ColumnDefinitionError(
            f"Expected a list of column definitions in {source}, got {type(data).__name__}"
        )
    logger.info("Loaded %d column definitions from %s", len(data), source)
    return data


def tree_height(node: HeaderNode) -> int:
    """Return the number of header rows below ``node`` (0 for a leaf)."""
    if node.is_leaf or not node.children:
        return 0
    return 1 + max(tree_height(child) for child in node.children)


def pad_forest(forest: Sequence[HeaderNode]) -> List[HeaderNode]:
    """Return a copy of ``forest`` where every leaf ends on the bottom row.

    Each node whose subtree is shallower than the space available to it is
    wrapped in transparent padding groups (``<id>_pad_<n>``), the way a grid
    aligns sibling branches of different depths. Input nodes keep their
    ``instance_id``; the input is not mutated.
    """
    if not forest:
        return []
    target = max(tree_height(node) for node in forest)
    return [_pad_node(node, target) for node in forest]


def _pad_node(node: HeaderNode, target: int) -> HeaderNode:
    height = tree_height(node)
    if not node.is_leaf and node.children:
        node = replace(node, children=tuple(_pad_node(child, height - 1) for child in node.children))
    base_id = node.id
    for level in range(target - height):
        node = HeaderNode.group(f"{base_id}_pad_{level}", [node], padding=True)
    return node


def iter_nodes(forest: Iterable[HeaderNode]) -> Iterator[HeaderNode]:
    """Yield every node of ``forest`` in display (pre-order) order."""
    stack = list(reversed(list(forest)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))
