"""
Canvas Kernel — Identity Maintenance

Re-derives every id after a structural edit:
- Component.id          = 1-based position in the component list
- ChildElement.child_id = 1-based breadth-first position in its component's tree
- reference type_id     = id of the component whose name the child carries

Run update_ids + update_roots after anything that can shift positions.
Running them twice is the same as running them once.
"""

from __future__ import annotations

from canvas.kernel.traversal import find_component, walk
from canvas.kernel.types import (
    CHILD_COMPONENT,
    REFERENCE_TYPES,
    Component,
)


def renumber_children(component: Component) -> None:
    """Assign child_id 1..N in breadth-first order within one component."""
    n = 0
    for _, _, node in walk(component):
        n += 1
        node.child_id = n
    component.next_child_id = n + 1


def name_taken(components: list[Component], name: str, exclude_id: int | None = None) -> bool:
    """True if a component other than `exclude_id` already carries `name`."""
    return any(comp.name == name and comp.id != exclude_id for comp in components)


def duplicate_names(components: list[Component]) -> list[str]:
    seen: set[str] = set()
    dupes: list[str] = []
    for comp in components:
        if comp.name in seen and comp.name not in dupes:
            dupes.append(comp.name)
        seen.add(comp.name)
    return dupes


def update_all_ids(components: list[Component]) -> None:
    """
    Renumber child_ids in every tree and point every reference's type_id
    back at the component carrying the same name. HTML elements keep their
    catalog type_id. Component names are unique, so the lookup is exact.

    References resolve against the project-level component names at every
    depth, not only at the first level below a component.
    """
    by_name = {comp.name: comp.id for comp in components}
    for comp in components:
        renumber_children(comp)
        for _, _, node in walk(comp):
            if node.type in REFERENCE_TYPES and node.name in by_name:
                node.type_id = by_name[node.name]


def broken_references(components: list[Component]) -> list[str]:
    """
    Describe every reference that names no component, disagrees with its
    target's name, or embeds the component that holds it.
    """
    problems: list[str] = []
    for comp in components:
        for _, _, node in walk(comp):
            if node.type not in REFERENCE_TYPES:
                continue
            target = find_component(components, node.type_id)
            if target is None or target.name != node.name:
                problems.append(f"{comp.name}/{node.child_id} references unknown component '{node.name}'")
            elif node.type == CHILD_COMPONENT and target.id == comp.id:
                problems.append(f"'{comp.name}' contains itself")
    return problems


def update_ids(components: list[Component]) -> list[Component]:
    """Component ids become index + 1, then every child id and back-reference follows."""
    for i, comp in enumerate(components):
        comp.id = i + 1
    update_all_ids(components)
    return components


def update_roots(components: list[Component]) -> list[int]:
    return [comp.id for comp in components if comp.is_page]


def rename_references(components: list[Component], component_id: int, new_name: str) -> None:
    """Rename a component and every Component / Route Link child pointing at it."""
    for comp in components:
        if comp.id == component_id:
            comp.name = new_name
        for _, _, node in walk(comp):
            if node.type in REFERENCE_TYPES and node.type_id == component_id:
                node.name = new_name


def sibling_next_child_id(component: Component) -> int:
    # advisory: top-level sibling count + 1
    return len(component.children) + 1
