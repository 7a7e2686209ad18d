"""
Shared builders and invariant checks for kernel tests.
"""

from canvas.kernel.actions import make_action
from canvas.kernel.catalog import DIV_ID
from canvas.kernel.reducer import empty_state, replay
from canvas.kernel.traversal import find_child, find_component, iter_descendants
from canvas.kernel.types import CHILD_COMPONENT, CHILD_HTML, CHILD_ROUTE_LINK, REFERENCE_TYPES

PARAGRAPH_ID = 5
IMAGE_ID = 1


def bfs_child_ids(component):
    return [node.child_id for node in iter_descendants(component)]


def assert_invariants(state):
    """Every invariant a completed transition must leave behind."""
    for i, comp in enumerate(state.components):
        assert comp.id == i + 1, f"component {comp.name} has id {comp.id}, expected {i + 1}"

        ids = bfs_child_ids(comp)
        assert ids == list(range(1, len(ids) + 1)), f"{comp.name}: child ids {ids}"

        for node in iter_descendants(comp):
            if node.type in REFERENCE_TYPES:
                target = find_component(state.components, node.type_id)
                assert target is not None, f"{comp.name}: dangling reference {node.name}"
                assert target.name == node.name
            if node.type == CHILD_COMPONENT:
                assert node.type_id != comp.id, f"{comp.name} contains itself"

    assert state.root_components == [c.id for c in state.components if c.is_page]

    focused = find_component(state.components, state.canvas_focus.component_id)
    assert focused is not None, f"focus on missing component {state.canvas_focus.component_id}"
    assert find_child(focused, state.canvas_focus.child_id) is not None


def add_html(type_id, child_id=None):
    return make_action("child.add", type=CHILD_HTML, type_id=type_id, child_id=child_id)


def add_ref(component_id, child_id=None):
    return make_action("child.add", type=CHILD_COMPONENT, type_id=component_id, child_id=child_id)


def add_link(component_id, child_id=None):
    return make_action("child.add", type=CHILD_ROUTE_LINK, type_id=component_id, child_id=child_id)


def focus(component_id, child_id=None):
    return make_action("focus.change", component_id=component_id, child_id=child_id)


def build_project():
    """
    Build:
      App (id 1, page)
        div            child 1
          Card         child 4
        About (link)   child 2
        Card           child 3
      Card (id 2, reusable)
        div            child 1
          p            child 2
      About (id 3, page)

    Focus ends on App/3 (the top-level Card).
    """
    actions = [
        make_action("component.add", component_name="Card", root=False),
        add_html(DIV_ID),
        add_html(PARAGRAPH_ID, child_id=1),
        make_action("component.add", component_name="About", root=True),
        focus(1),
        add_html(DIV_ID),
        add_ref(2, child_id=1),
        add_link(3),
        add_ref(2),
    ]
    return replay(actions, empty_state())
