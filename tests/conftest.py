"""Test configuration and shared fixtures for the header toolkit tests.

Provides small hand-built header forests, the demo grid header loaded from
YAML, and isolation of the configuration singleton from the user's home.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from header_toolkit.config import ConfigManager
from header_toolkit.core.columns import forest_from_definitions, load_column_definitions
from header_toolkit.core.models import HeaderNode

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@pytest.fixture(scope="session")
def test_data_dir():
    """Provides path to test data directory."""
    return Path(__file__).parent / "fixtures" / "data"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point user overrides at an empty directory and reset the singleton."""
    config_dir = tmp_path / "user_config"
    config_dir.mkdir()
    monkeypatch.setenv("HEADER_TOOLKIT_CONFIG_DIR", str(config_dir))
    ConfigManager.reset()
    yield config_dir
    ConfigManager.reset()


@pytest.fixture
def make_forest():
    """Build a forest from compact ``(id, children)`` tuples.

    A string is a leaf, ``(id, [..])`` a group and ``("~", [..])`` a padding
    wrapper. Returns ``(forest, nodes_by_id)``.
    """
    def factory(layout):
        nodes = {}
        pad_counter = [0]

        def build(item):
            if isinstance(item, str):
                node = HeaderNode.leaf(item)
            else:
                node_id, children = item
                padding = node_id == "~"
                if padding:
                    pad_counter[0] += 1
                    node_id = f"pad{pad_counter[0]}"
                node = HeaderNode.group(node_id, [build(child) for child in children], padding=padding)
            nodes[node.id] = node
            return node

        forest = [build(item) for item in layout]
        return forest, nodes
    return factory


@pytest.fixture
def simple_header(make_forest):
    """``G1{c1, c2}`` followed by standalone leaf ``c3``."""
    return make_forest([("G1", ["c1", "c2"]), "c3"])


@pytest.fixture
def demo_definitions(test_data_dir):
    return load_column_definitions(test_data_dir / "demo_columns.yml")


@pytest.fixture
def demo_forest(demo_definitions):
    return forest_from_definitions(demo_definitions)


@pytest.fixture
def by_id():
    """Index ``HeaderNode`` objects of a forest by id."""
    from header_toolkit.core.columns import iter_nodes

    def finder(forest):
        return {node.id: node for node in iter_nodes(forest)}
    return finder
