"""
Canvas Kernel — Shared Types

Data classes used across traversal, identity, cascade, reducer, and codegen.
These are the contracts that bind the kernel together.

Two numbering schemes live side by side:
- Component.id is the 1-based position in ProjectState.components
- ChildElement.child_id is the breadth-first position inside one component's tree

Both are re-derived by identity maintenance after every structural edit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Vocabulary
# ---------------------------------------------------------------------------

CHILD_HTML = "HTML Element"
CHILD_COMPONENT = "Component"
CHILD_ROUTE_LINK = "Route Link"

CHILD_TYPES: set[str] = {CHILD_HTML, CHILD_COMPONENT, CHILD_ROUTE_LINK}

# Child types whose type_id points at a Component rather than the HTML catalog
REFERENCE_TYPES: set[str] = {CHILD_COMPONENT, CHILD_ROUTE_LINK}

PROJECT_CLASSIC = "Classic React"
PROJECT_NEXT = "Next.js"

PROJECT_TYPES: set[str] = {PROJECT_CLASSIC, PROJECT_NEXT}

# Name the first component takes under each project type's conventions
ROOT_NAMES: dict[str, str] = {
    PROJECT_CLASSIC: "App",
    PROJECT_NEXT: "index",
}

EMPTY_CANVAS_CODE = "<div>Drag in a component or HTML element into the canvas!</div>"

ACTION_TYPES: set[str] = {
    # Structure
    "component.add",
    "child.add",
    "child.move",
    "child.delete",
    "page.delete",
    "component.delete",
    # Focus / style
    "focus.change",
    "style.update",
    # Project
    "state.set_initial",
    "state.reset",
    "project.set_name",
    "project.update_name",
    "project.change_type",
    "project.open",
    # HTML catalog
    "element.add",
    "element.delete",
}


# ---------------------------------------------------------------------------
# Tree records
# ---------------------------------------------------------------------------


@dataclass
class HTMLType:
    """One placeable tag in the HTML catalog. Looked up by id only."""

    id: int
    tag: str
    name: str
    style: dict[str, Any] = field(default_factory=dict)
    placeholder_short: str = ""
    placeholder_long: str = ""
    self_closing: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "tag": self.tag,
            "name": self.name,
            "style": self.style,
            "placeholder_short": self.placeholder_short,
            "placeholder_long": self.placeholder_long,
            "self_closing": self.self_closing,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> HTMLType:
        return cls(
            id=d["id"],
            tag=d["tag"],
            name=d.get("name", d["tag"]),
            style=d.get("style", {}),
            placeholder_short=d.get("placeholder_short", ""),
            placeholder_long=d.get("placeholder_long", ""),
            self_closing=d.get("self_closing", False),
        )


@dataclass
class ChildElement:
    """
    A node instantiated inside some component's tree.

    type_id is an index into the HTML catalog for HTML elements, or the id of
    the referenced component for Component and Route Link children. For
    references, name mirrors the referenced component's name.
    """

    type: str
    type_id: int
    name: str
    child_id: int
    style: dict[str, Any] = field(default_factory=dict)
    children: list[ChildElement] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "type_id": self.type_id,
            "name": self.name,
            "child_id": self.child_id,
            "style": self.style,
            "children": [c.to_dict() for c in self.children],
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ChildElement:
        return cls(
            type=d["type"],
            type_id=d["type_id"],
            name=d.get("name", ""),
            child_id=d.get("child_id", 0),
            style=d.get("style", {}),
            children=[cls.from_dict(c) for c in d.get("children", [])],
        )


@dataclass
class Component:
    """A page (is_page=True) or reusable component owning a tree of children."""

    id: int
    name: str
    is_page: bool = False
    style: dict[str, Any] = field(default_factory=dict)
    code: str = ""
    children: list[ChildElement] = field(default_factory=list)
    next_child_id: int = 1  # advisory only

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "is_page": self.is_page,
            "style": self.style,
            "code": self.code,
            "children": [c.to_dict() for c in self.children],
            "next_child_id": self.next_child_id,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Component:
        return cls(
            id=d["id"],
            name=d["name"],
            is_page=d.get("is_page", False),
            style=d.get("style", {}),
            code=d.get("code", ""),
            children=[ChildElement.from_dict(c) for c in d.get("children", [])],
            next_child_id=d.get("next_child_id", 1),
        )


@dataclass
class CanvasFocus:
    """Selected node. child_id=None means the component root itself."""

    component_id: int = 1
    child_id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"component_id": self.component_id, "child_id": self.child_id}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> CanvasFocus:
        return cls(component_id=d.get("component_id", 1), child_id=d.get("child_id"))


@dataclass
class ProjectState:
    """
    The whole tree container, and the dispatcher's state.

    root_components always equals the ids of components with is_page=True,
    in collection order.
    """

    components: list[Component] = field(default_factory=list)
    root_components: list[int] = field(default_factory=list)
    html_types: list[HTMLType] = field(default_factory=list)
    canvas_focus: CanvasFocus = field(default_factory=CanvasFocus)
    next_component_id: int = 1
    next_child_id: int = 1
    project_type: str = PROJECT_CLASSIC
    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "components": [c.to_dict() for c in self.components],
            "root_components": list(self.root_components),
            "html_types": [h.to_dict() for h in self.html_types],
            "canvas_focus": self.canvas_focus.to_dict(),
            "next_component_id": self.next_component_id,
            "next_child_id": self.next_child_id,
            "project_type": self.project_type,
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ProjectState:
        components = [Component.from_dict(c) for c in d.get("components", [])]
        return cls(
            components=components,
            root_components=list(d.get("root_components", [])),
            html_types=[HTMLType.from_dict(h) for h in d.get("html_types", [])],
            canvas_focus=CanvasFocus.from_dict(d.get("canvas_focus", {})),
            next_component_id=d.get("next_component_id", len(components) + 1),
            next_child_id=d.get("next_child_id", 1),
            project_type=d.get("project_type", PROJECT_CLASSIC),
            name=d.get("name", ""),
        )


# ---------------------------------------------------------------------------
# Actions and results
# ---------------------------------------------------------------------------


@dataclass
class Action:
    """
    One edit request. The reducer reads only `type` and `payload`.
    """

    type: str
    payload: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Action:
        return cls(type=d["type"], payload=d.get("payload", {}))


@dataclass
class ReduceResult:
    """
    Result of applying one action to a state.
    The reducer never throws for bad input. It always returns one of these.
    On rejection, `state` is the unchanged input.
    """

    state: ProjectState
    applied: bool
    error: str | None = None


@dataclass
class ApplyResult:
    """Result of applying a batch of actions through a session."""

    state: ProjectState
    applied: list[Action]
    rejected: list[tuple[Action, str]]  # (action, error_reason)
