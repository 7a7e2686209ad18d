"""
Canvas Kernel — Actions

Factory and structural validation for edit actions.

Validation is structural (well-formed?) not semantic (will it apply?).
The reducer handles semantic checks (does the focused component exist?
would this insert a cycle? etc.).
"""

from __future__ import annotations

from typing import Any

from canvas.kernel.types import ACTION_TYPES, CHILD_TYPES, PROJECT_TYPES, Action

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def make_action(action_type: str, payload: dict[str, Any] | None = None, **fields: Any) -> Action:
    """
    Build an Action from a type tag and payload.

    Keyword fields are merged into the payload, so tests can write
    make_action("child.add", type="HTML Element", type_id=11, child_id=None).
    """
    merged = dict(payload or {})
    merged.update(fields)
    return Action(type=action_type, payload=merged)


def validate_action(type: str, payload: Any) -> list[str]:
    """
    Validate an action's type and payload structure.
    Returns a list of error strings. Empty list = valid.

    It does NOT check whether referenced components or children exist.
    That's the reducer's job.
    """
    errors: list[str] = []

    if type not in ACTION_TYPES:
        errors.append(f"Unknown action type: {type}")
        return errors

    if not isinstance(payload, dict):
        errors.append("Payload must be a non-null object")
        return errors

    validator = _VALIDATORS.get(type)
    if validator:
        errors.extend(validator(payload))

    return errors


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _optional_int(p: dict, key: str) -> list[str]:
    # missing is the same as null
    if p.get(key) is not None and not _is_int(p[key]):
        return [f"'{key}' must be an int or null"]
    return []


def _required_int(p: dict, key: str, action: str) -> list[str]:
    if key not in p:
        return [f"{action} requires '{key}'"]
    if not _is_int(p[key]):
        return [f"'{key}' must be an int"]
    return []


# ---------------------------------------------------------------------------
# Per-action validators
# ---------------------------------------------------------------------------


def _validate_component_add(p: dict) -> list[str]:
    errors: list[str] = []
    if "component_name" not in p:
        errors.append("component.add requires 'component_name'")
    elif not isinstance(p["component_name"], str):
        errors.append("'component_name' must be a string")
    if "root" in p and not isinstance(p["root"], bool):
        errors.append("'root' must be a bool")
    return errors


def _validate_child_add(p: dict) -> list[str]:
    errors: list[str] = []
    if "type" not in p:
        errors.append("child.add requires 'type'")
    elif p["type"] not in CHILD_TYPES:
        errors.append(f"Unknown child type: {p['type']}")
    errors.extend(_required_int(p, "type_id", "child.add"))
    errors.extend(_optional_int(p, "child_id"))
    return errors


def _validate_child_move(p: dict) -> list[str]:
    errors = _required_int(p, "current_child_id", "child.move")
    errors.extend(_optional_int(p, "new_parent_child_id"))
    return errors


def _validate_focus_change(p: dict) -> list[str]:
    errors = _required_int(p, "component_id", "focus.change")
    errors.extend(_optional_int(p, "child_id"))
    return errors


def _validate_style_update(p: dict) -> list[str]:
    if "style" not in p:
        return ["style.update requires 'style'"]
    if not isinstance(p["style"], dict):
        return ["'style' must be an object"]
    return []


def _validate_project_state(p: dict) -> list[str]:
    errors: list[str] = []
    if not isinstance(p.get("components", []), list):
        errors.append("'components' must be a list")
    if not isinstance(p.get("html_types", []), list):
        errors.append("'html_types' must be a list")
    if "project_type" in p and p["project_type"] not in PROJECT_TYPES:
        errors.append(f"Unknown project type: {p['project_type']}")
    return errors


def _validate_project_name(p: dict) -> list[str]:
    if "name" not in p:
        return ["project name actions require 'name'"]
    if not isinstance(p["name"], str):
        return ["'name' must be a string"]
    return []


def _validate_change_type(p: dict) -> list[str]:
    if "project_type" not in p:
        return ["project.change_type requires 'project_type'"]
    if p["project_type"] not in PROJECT_TYPES:
        return [f"Unknown project type: {p['project_type']}"]
    return []


def _validate_element_add(p: dict) -> list[str]:
    errors = _required_int(p, "id", "element.add")
    if not isinstance(p.get("tag"), str) or not p.get("tag"):
        errors.append("element.add requires a non-empty 'tag'")
    if "name" in p and not isinstance(p["name"], str):
        errors.append("'name' must be a string")
    return errors


def _validate_element_delete(p: dict) -> list[str]:
    return _required_int(p, "id", "element.delete")


_VALIDATORS: dict[str, Any] = {
    "component.add": _validate_component_add,
    "child.add": _validate_child_add,
    "child.move": _validate_child_move,
    "focus.change": _validate_focus_change,
    "style.update": _validate_style_update,
    "state.set_initial": _validate_project_state,
    "project.open": _validate_project_state,
    "project.set_name": _validate_project_name,
    "project.update_name": _validate_project_name,
    "project.change_type": _validate_change_type,
    "element.add": _validate_element_add,
    "element.delete": _validate_element_delete,
}
