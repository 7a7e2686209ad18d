"""
Canvas Kernel — Traversal Tests

Breadth-first lookups over a component tree.

Covers:
  - walk order is shallowest-first and skips the root
  - find_component by id, missing id
  - find_parent returns the direct parent and index, or (None, None)
  - find_child with None returns the root itself
  - child_type_exists searches the full descendant set
  - is_descendant
  - lookups never mutate
"""

import copy

from canvas.kernel.tests.helpers import bfs_child_ids
from canvas.kernel.traversal import (
    child_type_exists,
    count_nodes,
    find_child,
    find_component,
    find_parent,
    is_descendant,
    walk,
)
from canvas.kernel.types import CHILD_COMPONENT, CHILD_HTML, CHILD_ROUTE_LINK


class TestWalk:
    def test_breadth_first_order(self, project):
        app = project.components[0]
        names = [node.name for _, _, node in walk(app)]
        assert names == ["div", "About", "Card", "Card"]

    def test_root_not_yielded(self, project):
        app = project.components[0]
        assert all(node is not app for _, _, node in walk(app))

    def test_yields_parent_and_index(self, project):
        app = project.components[0]
        triples = list(walk(app))
        parent, index, node = triples[3]
        assert parent is app.children[0]
        assert index == 0
        assert node.child_id == 4

    def test_count_nodes(self, project):
        assert count_nodes(project.components[0]) == 4
        assert count_nodes(project.components[2]) == 0


class TestFindComponent:
    def test_finds_by_id(self, project):
        assert find_component(project.components, 2).name == "Card"

    def test_missing_id(self, project):
        assert find_component(project.components, 99) is None


class TestFindParent:
    def test_top_level_child_parent_is_component(self, project):
        app = project.components[0]
        parent, index = find_parent(app, 2)
        assert parent is app
        assert index == 1

    def test_nested_child_parent(self, project):
        app = project.components[0]
        parent, index = find_parent(app, 4)
        assert parent is app.children[0]
        assert index == 0

    def test_missing_child(self, project):
        assert find_parent(project.components[0], 42) == (None, None)


class TestFindChild:
    def test_none_returns_root(self, project):
        app = project.components[0]
        assert find_child(app, None) is app

    def test_finds_nested(self, project):
        card = project.components[1]
        node = find_child(card, 2)
        assert node.name == "p"

    def test_missing_returns_none(self, project):
        assert find_child(project.components[1], 3) is None


class TestChildTypeExists:
    def test_direct_and_nested(self, project):
        app = project.components[0]
        assert child_type_exists(CHILD_COMPONENT, 2, app)
        assert child_type_exists(CHILD_ROUTE_LINK, 3, app)
        assert child_type_exists(CHILD_HTML, 11, app)

    def test_absent(self, project):
        card = project.components[1]
        assert not child_type_exists(CHILD_COMPONENT, 1, card)
        assert not child_type_exists(CHILD_HTML, 1, card)

    def test_type_and_id_must_both_match(self, project):
        app = project.components[0]
        # type_id 2 exists only as a Component reference
        assert not child_type_exists(CHILD_ROUTE_LINK, 2, app)


class TestIsDescendant:
    def test_nested_is_descendant(self, project):
        app = project.components[0]
        assert is_descendant(app, 1, 4)

    def test_sibling_is_not(self, project):
        app = project.components[0]
        assert not is_descendant(app, 1, 2)

    def test_missing_ancestor(self, project):
        assert not is_descendant(project.components[0], 77, 1)


class TestPurity:
    def test_lookups_do_not_mutate(self, project):
        before = copy.deepcopy(project)
        app = project.components[0]
        find_parent(app, 4)
        find_child(app, 3)
        child_type_exists(CHILD_COMPONENT, 2, app)
        list(walk(app))
        assert project == before
        assert bfs_child_ids(app) == [1, 2, 3, 4]
