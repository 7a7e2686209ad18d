"""
Canvas Kernel — Reducer

Pure function: (state, action) → ReduceResult
No IO. Deterministic given a deterministic code generator.

Every handler works on a deep copy of the input state, so a returned state
never shares mutable structure with the one passed in. Rejected actions
return the input state untouched. A code generator that raises propagates
out of reduce() and the input state is still the last good snapshot.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from typing import Any

from canvas.kernel.actions import validate_action
from canvas.kernel.cascade import delete_by_id, delete_instances
from canvas.kernel.catalog import default_catalog, find_html_type, restore_catalog
from canvas.kernel.codegen import generate_code
from canvas.kernel.config import settings
from canvas.kernel.identity import (
    broken_references,
    duplicate_names,
    name_taken,
    rename_references,
    sibling_next_child_id,
    update_all_ids,
    update_ids,
    update_roots,
)
from canvas.kernel.traversal import (
    child_type_exists,
    find_child,
    find_component,
    find_parent,
    is_descendant,
)
from canvas.kernel.types import (
    CHILD_COMPONENT,
    CHILD_HTML,
    EMPTY_CANVAS_CODE,
    ROOT_NAMES,
    Action,
    CanvasFocus,
    ChildElement,
    Component,
    HTMLType,
    ProjectState,
    ReduceResult,
)

logger = logging.getLogger(__name__)

CodeGenerator = Callable[[list[Component], int, list[int], str, list[HTMLType]], str]

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def empty_state(project_type: str | None = None, name: str | None = None) -> ProjectState:
    """
    A fresh project: one empty root page, the default catalog,
    focus on the root page.
    """
    ptype = project_type or settings.PROJECT_TYPE
    root = Component(
        id=1,
        name=ROOT_NAMES.get(ptype, "App"),
        is_page=True,
        code=EMPTY_CANVAS_CODE,
    )
    return ProjectState(
        components=[root],
        root_components=[1],
        html_types=default_catalog(),
        canvas_focus=CanvasFocus(component_id=1, child_id=None),
        next_component_id=2,
        next_child_id=1,
        project_type=ptype,
        name=settings.PROJECT_NAME if name is None else name,
    )


def reduce(state: ProjectState, action: Action, codegen: CodeGenerator = generate_code) -> ReduceResult:
    """
    Apply one action to the current state.
    Returns the next state + applied flag + error.

    The input state is never modified.
    """
    handler = _HANDLERS.get(action.type)
    if handler is None:
        logger.debug("reduce: unknown action %s", action.type)
        return ReduceResult(state=state, applied=False, error=f"UNKNOWN_ACTION: {action.type}")

    errors = validate_action(action.type, action.payload)
    if errors:
        logger.debug("reduce: %s rejected: %s", action.type, errors)
        return ReduceResult(state=state, applied=False, error=f"INVALID_PAYLOAD: {'; '.join(errors)}")

    draft = copy.deepcopy(state)
    result = handler(draft, action.payload, codegen)
    if not result.applied:
        logger.debug("reduce: %s rejected: %s", action.type, result.error)
        return ReduceResult(state=state, applied=False, error=result.error)
    return result


def replay(
    actions: list[Action],
    state: ProjectState | None = None,
    codegen: CodeGenerator = generate_code,
) -> ProjectState:
    """
    Fold reduce over actions, skipping rejected ones.
    replay([a1, a2]) == reduce(reduce(empty_state(), a1).state, a2).state
    """
    current = state if state is not None else empty_state()
    for action in actions:
        result = reduce(current, action, codegen)
        if result.applied:
            current = result.state
    return current


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _reject(state: ProjectState, code: str, msg: str) -> ReduceResult:
    return ReduceResult(state=state, applied=False, error=f"{code}: {msg}")


def _ok(state: ProjectState) -> ReduceResult:
    return ReduceResult(state=state, applied=True)


def _focused_component(state: ProjectState) -> Component | None:
    return find_component(state.components, state.canvas_focus.component_id)


def _regenerate(state: ProjectState, component: Component, codegen: CodeGenerator) -> None:
    component.code = codegen(
        state.components,
        component.id,
        list(state.root_components),
        state.project_type,
        state.html_types,
    )


def _regenerate_all(state: ProjectState, codegen: CodeGenerator) -> None:
    for comp in state.components:
        _regenerate(state, comp, codegen)


def _focus_is_valid(state: ProjectState) -> bool:
    comp = _focused_component(state)
    if comp is None:
        return False
    return find_child(comp, state.canvas_focus.child_id) is not None


# ---------------------------------------------------------------------------
# Structure handlers
# ---------------------------------------------------------------------------


def _handle_component_add(state: ProjectState, p: dict, codegen: CodeGenerator) -> ReduceResult:
    name = p["component_name"]
    if not name:
        return _reject(state, "EMPTY_NAME", "component name must be non-empty")
    if name_taken(state.components, name):
        return _reject(state, "DUPLICATE_NAME", f"a component named '{name}' already exists")

    is_page = p.get("root", False)
    component = Component(id=len(state.components) + 1, name=name, is_page=is_page)
    state.components.append(component)
    if is_page:
        state.root_components.append(component.id)

    _regenerate(state, component, codegen)
    state.canvas_focus = CanvasFocus(component_id=component.id, child_id=None)
    state.next_component_id = len(state.components) + 1
    return _ok(state)


def _handle_child_add(state: ProjectState, p: dict, codegen: CodeGenerator) -> ReduceResult:
    child_type = p["type"]
    type_id = p["type_id"]
    parent_child_id = p.get("child_id")

    # Renumber first so the parent lookup below can trust child_ids
    update_all_ids(state.components)

    parent = _focused_component(state)
    if parent is None:
        return _reject(state, "COMPONENT_NOT_FOUND", str(state.canvas_focus.component_id))

    if child_type == CHILD_HTML:
        entry = find_html_type(state.html_types, type_id)
        if entry is None:
            return _reject(state, "ELEMENT_NOT_FOUND", str(type_id))
        name = entry.tag
    else:
        target = find_component(state.components, type_id)
        if target is None:
            return _reject(state, "COMPONENT_NOT_FOUND", str(type_id))
        if child_type == CHILD_COMPONENT:
            if target.id == parent.id:
                return _reject(state, "CYCLE_DETECTED", f"'{parent.name}' cannot contain itself")
            # one hop only: does the inserted component already hold the parent?
            if child_type_exists(CHILD_COMPONENT, parent.id, target):
                return _reject(state, "CYCLE_DETECTED", f"'{target.name}' already contains '{parent.name}'")
        name = target.name

    host = find_child(parent, parent_child_id)
    if host is None:
        return _reject(state, "CHILD_NOT_FOUND", f"{parent.name}/{parent_child_id}")

    new_child = ChildElement(type=child_type, type_id=type_id, name=name, child_id=parent.next_child_id)
    host.children.append(new_child)
    update_all_ids(state.components)

    _regenerate(state, parent, codegen)
    state.canvas_focus = CanvasFocus(component_id=parent.id, child_id=new_child.child_id)
    state.next_child_id = sibling_next_child_id(parent)
    return _ok(state)


def _handle_child_move(state: ProjectState, p: dict, codegen: CodeGenerator) -> ReduceResult:
    current_id = p["current_child_id"]
    new_parent_id = p.get("new_parent_child_id")

    if current_id == new_parent_id:
        return _reject(state, "SELF_DROP", f"child {current_id} dropped onto itself")

    component = _focused_component(state)
    if component is None:
        return _reject(state, "COMPONENT_NOT_FOUND", str(state.canvas_focus.component_id))

    old_parent, index = find_parent(component, current_id)
    if old_parent is None:
        return _reject(state, "CHILD_NOT_FOUND", f"{component.name}/{current_id}")

    destination = find_child(component, new_parent_id)
    if destination is None:
        return _reject(state, "CHILD_NOT_FOUND", f"{component.name}/{new_parent_id}")
    if new_parent_id is not None and is_descendant(component, current_id, new_parent_id):
        return _reject(state, "INVALID_MOVE", f"child {current_id} cannot move beneath its own descendant")

    child = old_parent.children.pop(index)
    destination.children.append(child)

    update_all_ids(state.components)
    _regenerate(state, component, codegen)
    state.next_child_id = sibling_next_child_id(component)
    return _ok(state)


def _handle_child_delete(state: ProjectState, p: dict, codegen: CodeGenerator) -> ReduceResult:
    focus = state.canvas_focus
    if focus.child_id is None:
        return _reject(state, "NO_CHILD_FOCUSED", "focus is on a component root")

    component = _focused_component(state)
    if component is None:
        return _reject(state, "COMPONENT_NOT_FOUND", str(focus.component_id))

    parent, index = find_parent(component, focus.child_id)
    if parent is None:
        return _reject(state, "CHILD_NOT_FOUND", f"{component.name}/{focus.child_id}")

    parent.children.pop(index)
    previous = parent.children[index - 1] if index > 0 else None

    update_all_ids(state.components)
    _regenerate(state, component, codegen)
    state.canvas_focus = CanvasFocus(
        component_id=component.id,
        child_id=previous.child_id if previous is not None else None,
    )
    state.next_child_id = sibling_next_child_id(component)
    return _ok(state)


def _delete_focused_component(state: ProjectState, codegen: CodeGenerator) -> ReduceResult:
    component = _focused_component(state)
    if component is None:
        return _reject(state, "COMPONENT_NOT_FOUND", str(state.canvas_focus.component_id))
    if len(state.components) == 1:
        return _reject(state, "LAST_COMPONENT", f"'{component.name}' is the only component")

    state.components = delete_by_id(state.components, component.id, component.name)
    state.root_components = update_roots(state.components)
    _regenerate_all(state, codegen)

    state.canvas_focus = CanvasFocus(component_id=1, child_id=None)
    state.next_component_id = len(state.components) + 1
    return _ok(state)


def _handle_page_delete(state: ProjectState, p: dict, codegen: CodeGenerator) -> ReduceResult:
    return _delete_focused_component(state, codegen)


def _handle_component_delete(state: ProjectState, p: dict, codegen: CodeGenerator) -> ReduceResult:
    return _delete_focused_component(state, codegen)


# ---------------------------------------------------------------------------
# Focus / style handlers
# ---------------------------------------------------------------------------


def _handle_focus_change(state: ProjectState, p: dict, codegen: CodeGenerator) -> ReduceResult:
    component_id = p["component_id"]
    child_id = p.get("child_id")

    update_all_ids(state.components)

    component = find_component(state.components, component_id)
    if component is None:
        return _reject(state, "COMPONENT_NOT_FOUND", str(component_id))
    if find_child(component, child_id) is None:
        return _reject(state, "CHILD_NOT_FOUND", f"{component.name}/{child_id}")

    state.canvas_focus = CanvasFocus(component_id=component_id, child_id=child_id)
    return _ok(state)


def _handle_style_update(state: ProjectState, p: dict, codegen: CodeGenerator) -> ReduceResult:
    component = _focused_component(state)
    if component is None:
        return _reject(state, "COMPONENT_NOT_FOUND", str(state.canvas_focus.component_id))

    target = find_child(component, state.canvas_focus.child_id)
    if target is None:
        return _reject(state, "CHILD_NOT_FOUND", f"{component.name}/{state.canvas_focus.child_id}")

    target.style = dict(p["style"])
    _regenerate(state, component, codegen)
    return _ok(state)


# ---------------------------------------------------------------------------
# Project handlers
# ---------------------------------------------------------------------------


def _load_project(state: ProjectState, p: dict) -> ProjectState | ReduceResult:
    """Build a well-formed state from a serialised project, or a rejection."""
    try:
        loaded = ProjectState.from_dict(p)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        return _reject(state, "INVALID_PAYLOAD", f"malformed project: {e!r}")

    if not loaded.components:
        return _reject(state, "INVALID_PAYLOAD", "project has no components")
    dupes = duplicate_names(loaded.components)
    if dupes:
        return _reject(state, "INVALID_PAYLOAD", f"duplicate component names: {', '.join(dupes)}")

    loaded.html_types = restore_catalog(loaded.html_types) if loaded.html_types else default_catalog()
    update_ids(loaded.components)
    problems = broken_references(loaded.components)
    if problems:
        return _reject(state, "INVALID_PAYLOAD", "; ".join(problems))
    loaded.root_components = update_roots(loaded.components)
    loaded.next_component_id = len(loaded.components) + 1
    return loaded


def _handle_set_initial(state: ProjectState, p: dict, codegen: CodeGenerator) -> ReduceResult:
    loaded = _load_project(state, p)
    if isinstance(loaded, ReduceResult):
        return loaded
    loaded.canvas_focus = CanvasFocus(component_id=1, child_id=None)
    return _ok(loaded)


def _handle_project_open(state: ProjectState, p: dict, codegen: CodeGenerator) -> ReduceResult:
    loaded = _load_project(state, p)
    if isinstance(loaded, ReduceResult):
        return loaded
    if not _focus_is_valid(loaded):
        loaded.canvas_focus = CanvasFocus(component_id=1, child_id=None)
    return _ok(loaded)


def _handle_project_name(state: ProjectState, p: dict, codegen: CodeGenerator) -> ReduceResult:
    state.name = p["name"]
    return _ok(state)


def _handle_change_type(state: ProjectState, p: dict, codegen: CodeGenerator) -> ReduceResult:
    project_type = p["project_type"]
    root = state.components[0]
    root_name = ROOT_NAMES[project_type]
    if name_taken(state.components, root_name, exclude_id=root.id):
        return _reject(state, "DUPLICATE_NAME", f"a component named '{root_name}' already exists")
    state.project_type = project_type

    # the first component follows the target's naming convention
    rename_references(state.components, root.id, root_name)
    _regenerate_all(state, codegen)
    return _ok(state)


def _handle_reset(state: ProjectState, p: dict, codegen: CodeGenerator) -> ReduceResult:
    root = state.components[0]
    root.id = 1
    root.is_page = True
    root.children = []
    root.style = {}
    root.code = EMPTY_CANVAS_CODE
    root.next_child_id = 1

    state.components = [root]
    state.root_components = [1]
    state.next_component_id = 2
    state.next_child_id = 1
    state.canvas_focus = CanvasFocus(component_id=1, child_id=None)
    return _ok(state)


# ---------------------------------------------------------------------------
# HTML catalog handlers
# ---------------------------------------------------------------------------


def _handle_element_add(state: ProjectState, p: dict, codegen: CodeGenerator) -> ReduceResult:
    if find_html_type(state.html_types, p["id"]) is not None:
        return _reject(state, "ELEMENT_ALREADY_EXISTS", str(p["id"]))
    state.html_types.append(HTMLType.from_dict(p))
    return _ok(state)


def _handle_element_delete(state: ProjectState, p: dict, codegen: CodeGenerator) -> ReduceResult:
    entry = find_html_type(state.html_types, p["id"])
    if entry is None:
        return _reject(state, "ELEMENT_NOT_FOUND", str(p["id"]))

    state.html_types = [h for h in state.html_types if h.id != entry.id]
    state.components = delete_instances(state.components, entry.tag)
    state.root_components = update_roots(state.components)
    _regenerate_all(state, codegen)

    if not _focus_is_valid(state):
        state.canvas_focus = CanvasFocus(component_id=state.canvas_focus.component_id, child_id=None)
    return _ok(state)


# ---------------------------------------------------------------------------
# Handler dispatch table
# ---------------------------------------------------------------------------

_HANDLERS: dict[str, Any] = {
    "component.add": _handle_component_add,
    "child.add": _handle_child_add,
    "child.move": _handle_child_move,
    "child.delete": _handle_child_delete,
    "page.delete": _handle_page_delete,
    "component.delete": _handle_component_delete,
    "focus.change": _handle_focus_change,
    "style.update": _handle_style_update,
    "state.set_initial": _handle_set_initial,
    "state.reset": _handle_reset,
    "project.set_name": _handle_project_name,
    "project.update_name": _handle_project_name,
    "project.change_type": _handle_change_type,
    "project.open": _handle_project_open,
    "element.add": _handle_element_add,
    "element.delete": _handle_element_delete,
}
