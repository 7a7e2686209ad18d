"""
Canvas Kernel — Code Generator

Pure function: (components, component_id, roots, project_type, catalog) → source text
No IO. Deterministic: same input → same output, always.

The dispatcher treats this as an external collaborator and only relies on the
signature of generate_code(). Module skeletons are Mustache templates
rendered with chevron; the JSX body is assembled line by line.
"""

from __future__ import annotations

import json
import re
from html import escape as _html_escape
from typing import Any

import chevron

from canvas.kernel.catalog import find_html_type
from canvas.kernel.traversal import find_component, walk
from canvas.kernel.types import (
    CHILD_COMPONENT,
    CHILD_HTML,
    CHILD_ROUTE_LINK,
    PROJECT_NEXT,
    ChildElement,
    Component,
    HTMLType,
)


class CodegenError(Exception):
    """The requested component cannot be rendered."""
    pass


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

_CLASSIC_TEMPLATE = """import React from 'react';
{{#imports}}
{{{line}}}
{{/imports}}

const {{identifier}} = (props) => {
  return (
{{{body}}}
  );
};

export default {{identifier}};
"""

_NEXT_PAGE_TEMPLATE = """import React from 'react';
import Head from 'next/head';
{{#imports}}
{{{line}}}
{{/imports}}

const {{identifier}} = (props) => {
  return (
    <>
      <Head>
        <title>{{title}}</title>
      </Head>
{{{body}}}
    </>
  );
};

export default {{identifier}};
"""

_INDENT = "  "
_IDENT_RE = re.compile(r"\W")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def generate_code(
    components: list[Component],
    component_id: int,
    root_components: list[int],
    project_type: str,
    html_types: list[HTMLType],
) -> str:
    """
    Render the source module for one component.
    Raises CodegenError if component_id does not exist.
    """
    component = find_component(components, component_id)
    if component is None:
        raise CodegenError(f"component {component_id} not found")

    is_next = project_type == PROJECT_NEXT
    base_depth = 3 if is_next and component.id in root_components else 2
    body = "\n".join(_render_root(component, components, html_types, is_next, base_depth))

    context: dict[str, Any] = {
        "identifier": identifier(component.name),
        "title": component.name,
        "imports": [{"line": line} for line in _imports(component, components, is_next)],
        "body": body,
    }
    if is_next and component.id in root_components:
        return chevron.render(_NEXT_PAGE_TEMPLATE, context)
    return chevron.render(_CLASSIC_TEMPLATE, context)


def identifier(name: str) -> str:
    """JSX component identifier for a component name: 'nav bar' → 'Navbar'."""
    cleaned = _IDENT_RE.sub("", name) or "Component"
    if cleaned[0].isdigit():
        cleaned = "_" + cleaned
    return cleaned[0].upper() + cleaned[1:]


def route_path(name: str) -> str:
    if name.lower() == "index":
        return "/"
    return "/" + name


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------


def _imports(component: Component, components: list[Component], is_next: bool) -> list[str]:
    lines: list[str] = []
    seen: set[str] = set()
    has_link = False
    for _, _, node in walk(component):
        if node.type == CHILD_ROUTE_LINK:
            has_link = True
        elif node.type == CHILD_COMPONENT:
            target = find_component(components, node.type_id)
            name = target.name if target else node.name
            if name in seen:
                continue
            seen.add(name)
            source = f"../components/{name}" if is_next else f"./{name}"
            lines.append(f"import {identifier(name)} from '{source}';")
    if has_link:
        if is_next:
            lines.insert(0, "import Link from 'next/link';")
        else:
            lines.insert(0, "import { Link } from 'react-router-dom';")
    return lines


def _style_attr(style: dict[str, Any]) -> str:
    if not style:
        return ""
    return " style={" + json.dumps(style, sort_keys=True) + "}"


def _render_root(
    component: Component,
    components: list[Component],
    html_types: list[HTMLType],
    is_next: bool,
    depth: int,
) -> list[str]:
    pad = _INDENT * depth
    lines = [f'{pad}<div className="{_html_escape(component.name)}"{_style_attr(component.style)}>']
    for child in component.children:
        lines.extend(_render_child(child, components, html_types, is_next, depth + 1))
    lines.append(f"{pad}</div>")
    return lines


def _render_child(
    node: ChildElement,
    components: list[Component],
    html_types: list[HTMLType],
    is_next: bool,
    depth: int,
) -> list[str]:
    pad = _INDENT * depth
    style = _style_attr(node.style)

    if node.type == CHILD_COMPONENT:
        target = find_component(components, node.type_id)
        name = target.name if target else node.name
        return [f"{pad}<{identifier(name)}{style} />"]

    if node.type == CHILD_ROUTE_LINK:
        target = find_component(components, node.type_id)
        name = target.name if target else node.name
        text = _html_escape(name)
        if is_next:
            return [f'{pad}<Link href="{route_path(name)}"><a{style}>{text}</a></Link>']
        return [f'{pad}<Link to="{route_path(name)}"{style}>{text}</Link>']

    entry = find_html_type(html_types, node.type_id) if node.type == CHILD_HTML else None
    tag = entry.tag if entry else node.name
    if entry is not None and entry.self_closing:
        return [f"{pad}<{tag}{style} />"]

    text = _html_escape(entry.placeholder_short) if entry else ""
    if not node.children:
        return [f"{pad}<{tag}{style}>{text}</{tag}>"]

    lines = [f"{pad}<{tag}{style}>"]
    if text:
        lines.append(f"{pad}{_INDENT}{text}")
    for child in node.children:
        lines.extend(_render_child(child, components, html_types, is_next, depth + 1))
    lines.append(f"{pad}</{tag}>")
    return lines
