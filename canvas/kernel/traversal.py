"""
Canvas Kernel — Traversal

Breadth-first lookups over a component's child tree.
None of these mutate. All run in O(descendants).

Every lookup is built on one walk, `walk()`, which yields
(parent, index, node) triples in breadth-first order starting at the
root's immediate children. The root itself is never yielded.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator

from canvas.kernel.types import ChildElement, Component

Node = Component | ChildElement


def walk(root: Node) -> Iterator[tuple[Node, int, ChildElement]]:
    """Yield (parent, index_in_parent, node) for every descendant, shallowest first."""
    queue: deque[Node] = deque([root])
    while queue:
        parent = queue.popleft()
        for i, child in enumerate(parent.children):
            yield parent, i, child
            queue.append(child)


def iter_descendants(root: Node) -> Iterator[ChildElement]:
    for _, _, node in walk(root):
        yield node


def find_component(components: list[Component], component_id: int) -> Component | None:
    for comp in components:
        if comp.id == component_id:
            return comp
    return None


def find_parent(root: Node, child_id: int) -> tuple[Node | None, int | None]:
    """
    Locate the direct parent of the node with `child_id`.
    Returns (parent, index) or (None, None) when no such node exists.
    """
    for parent, i, node in walk(root):
        if node.child_id == child_id:
            return parent, i
    return None, None


def find_child(root: Node, child_id: int | None) -> Node | None:
    """
    Return the node with `child_id`, or the root itself when child_id is None.
    Returns None when no such node exists.
    """
    if child_id is None:
        return root
    for node in iter_descendants(root):
        if node.child_id == child_id:
            return node
    return None


def child_type_exists(type: str, type_id: int, root: Node) -> bool:
    """True if any descendant of root has this (type, type_id) pair."""
    return any(node.type == type and node.type_id == type_id for node in iter_descendants(root))


def is_descendant(root: Node, ancestor_child_id: int, child_id: int) -> bool:
    """True if `child_id` lives somewhere beneath the node `ancestor_child_id`."""
    ancestor = find_child(root, ancestor_child_id)
    if ancestor is None:
        return False
    return find_child(ancestor, child_id) is not None


def count_nodes(root: Node) -> int:
    return sum(1 for _ in walk(root))
