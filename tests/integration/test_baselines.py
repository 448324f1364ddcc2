"""
End-to-end snapshot tests: load a fixture tree, dump it, compare with the
checked-in baseline.
"""

import pytest

from irsnap.api import dump_tree
from irsnap.components import COMPONENT_NODES
from irsnap.ir.sexpr_loader import CORE_NODES, load_tree_file

pytestmark = pytest.mark.integration

FIXTURES = ["counter", "tag_helpers"]


def load_fixture(fixtures_dir, name):
    return load_tree_file(fixtures_dir / f"{name}.sexp", CORE_NODES + COMPONENT_NODES)


@pytest.mark.parametrize("name", FIXTURES)
def test_dump_matches_baseline(name, fixtures_dir, assert_matches_baseline):
    """Dump of each fixture tree is byte-identical to its baseline"""
    assert_matches_baseline(dump_tree(load_fixture(fixtures_dir, name)), name)


@pytest.mark.parametrize("name", FIXTURES)
def test_dump_is_deterministic(name, fixtures_dir):
    """Independently loaded copies of a tree dump identically"""
    first = dump_tree(load_fixture(fixtures_dir, name))
    second = dump_tree(load_fixture(fixtures_dir, name))
    assert first == second


@pytest.mark.parametrize("name", FIXTURES)
def test_one_line_per_node(name, fixtures_dir):
    """Every node produces exactly one newline-terminated line"""
    root = load_fixture(fixtures_dir, name)

    def count(node):
        return 1 + sum(count(child) for child in node.children)

    dump = dump_tree(root)
    assert dump.endswith("\n")
    assert dump.count("\n") == count(root)
    assert "\r" not in dump
