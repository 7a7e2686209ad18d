"""
Canvas Kernel — Cascading Deletion

Instances point back at their origin by name, so removing a component or an
HTML tag means removing every child carrying that name from every tree in
the project, at any depth. A removed child takes its whole subtree with it.
"""

from __future__ import annotations

from canvas.kernel.identity import update_ids
from canvas.kernel.traversal import Node
from canvas.kernel.types import Component


def purge_by_name(nodes: list[Node], name: str) -> int:
    """
    Drop every child named `name` beneath each node in `nodes`, recursively.
    Mutates in place. Returns how many children were dropped.
    """
    removed = 0
    for node in nodes:
        if not node.children:
            continue
        kept = [child for child in node.children if child.name != name]
        removed += len(node.children) - len(kept)
        node.children = kept
        removed += purge_by_name(kept, name)
    return removed


def delete_by_id(components: list[Component], component_id: int, name: str) -> list[Component]:
    """
    Remove component `component_id` plus every instance named `name`,
    then renumber. Returns the surviving components.
    """
    purge_by_name(components, name)
    survivors = [comp for comp in components if comp.id != component_id]
    return update_ids(survivors)


def delete_instances(components: list[Component], name: str) -> list[Component]:
    """Remove every instance named `name` without removing any component."""
    purge_by_name(components, name)
    return update_ids(components)
