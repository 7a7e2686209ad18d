"""
Canvas Kernel — HTML Catalog

The placeable HTML tags a project starts with. Children of type
"HTML Element" carry a catalog id as their type_id and the entry's tag as
their name.
"""

from __future__ import annotations

import copy
from typing import Any

from canvas.kernel.types import HTMLType

_DEFAULTS: list[dict[str, Any]] = [
    {"id": 1, "tag": "img", "name": "Image", "self_closing": True},
    {"id": 2, "tag": "form", "name": "Form", "placeholder_short": "form"},
    {"id": 3, "tag": "button", "name": "Button", "placeholder_short": "button"},
    {"id": 4, "tag": "a", "name": "Link", "placeholder_short": "link"},
    {"id": 5, "tag": "p", "name": "Paragraph", "placeholder_short": "paragraph"},
    {"id": 6, "tag": "h1", "name": "Header 1", "placeholder_short": "header 1"},
    {"id": 7, "tag": "h2", "name": "Header 2", "placeholder_short": "header 2"},
    {"id": 8, "tag": "span", "name": "Span", "placeholder_short": "span"},
    {"id": 9, "tag": "input", "name": "Input", "self_closing": True},
    {"id": 10, "tag": "label", "name": "Label", "placeholder_short": "label"},
    {"id": 11, "tag": "div", "name": "Div"},
    {"id": 12, "tag": "ol", "name": "Ordered List"},
    {"id": 13, "tag": "ul", "name": "Unordered List"},
    {"id": 14, "tag": "li", "name": "List Item", "placeholder_short": "item"},
    {"id": 15, "tag": "nav", "name": "Navigation"},
]

DIV_ID = 11


def default_catalog() -> list[HTMLType]:
    """A fresh copy of the built-in catalog."""
    return [HTMLType.from_dict(copy.deepcopy(d)) for d in _DEFAULTS]


def find_html_type(html_types: list[HTMLType], type_id: int) -> HTMLType | None:
    for entry in html_types:
        if entry.id == type_id:
            return entry
    return None


def restore_catalog(html_types: list[HTMLType]) -> list[HTMLType]:
    """
    Refresh display metadata of entries that match a built-in id.
    Saved projects lose non-serialised metadata; user-added entries pass through.
    """
    defaults = {d["id"]: d for d in _DEFAULTS}
    restored: list[HTMLType] = []
    for entry in html_types:
        base = defaults.get(entry.id)
        if base is None:
            restored.append(entry)
            continue
        fresh = HTMLType.from_dict(copy.deepcopy(base))
        fresh.style = entry.style or fresh.style
        restored.append(fresh)
    return restored
