"""
Canvas Kernel — Code Generator Tests

The reference generator behind generate_code(). The reducer only depends on
its signature; these tests pin the emitted source so regressions show up.

Covers:
  - Classic React module: imports, component body, export
  - Next.js page module: Head, next/link, ../components imports
  - HTML elements from the catalog: placeholders, nesting, void tags
  - inline styles
  - identifier and route helpers
  - unknown component raises CodegenError
  - determinism
"""

import pytest

from canvas.kernel.catalog import default_catalog
from canvas.kernel.codegen import CodegenError, generate_code, identifier, route_path
from canvas.kernel.identity import rename_references
from canvas.kernel.types import (
    CHILD_HTML,
    PROJECT_CLASSIC,
    PROJECT_NEXT,
    ChildElement,
    Component,
)


def _code(state, component_id, project_type=PROJECT_CLASSIC):
    return generate_code(
        state.components,
        component_id,
        state.root_components,
        project_type,
        state.html_types,
    )


class TestClassic:
    def test_imports(self, project):
        code = _code(project, 1)
        assert "import React from 'react';" in code
        assert "import { Link } from 'react-router-dom';" in code
        assert "import Card from './Card';" in code

    def test_component_imported_once(self, project):
        code = _code(project, 1)
        assert code.count("import Card from") == 1

    def test_body(self, project):
        code = _code(project, 1)
        assert '<div className="App">' in code
        assert '<Link to="/About">About</Link>' in code
        assert code.count("<Card />") == 2

    def test_export(self, project):
        code = _code(project, 1)
        assert "const App = (props) => {" in code
        assert code.rstrip().endswith("export default App;")

    def test_nested_html_with_placeholder(self, project):
        code = _code(project, 2)
        assert "<p>paragraph</p>" in code
        lines = code.splitlines()
        div_line = next(i for i, line in enumerate(lines) if line.strip() == "<div>")
        assert lines[div_line + 1].strip() == "<p>paragraph</p>"
        assert lines[div_line + 2].strip() == "</div>"

    def test_no_link_import_without_links(self, project):
        code = _code(project, 2)
        assert "react-router-dom" not in code


class TestNext:
    def test_page_uses_head_and_next_link(self, project):
        rename_references(project.components, 1, "index")
        code = _code(project, 1, PROJECT_NEXT)
        assert "import Head from 'next/head';" in code
        assert "import Link from 'next/link';" in code
        assert "import Card from '../components/Card';" in code
        assert "<title>index</title>" in code
        assert "const Index = (props) => {" in code

    def test_next_link_markup(self, project):
        code = _code(project, 1, PROJECT_NEXT)
        assert '<Link href="/About"><a>About</a></Link>' in code

    def test_reusable_component_has_no_head(self, project):
        code = _code(project, 2, PROJECT_NEXT)
        assert "next/head" not in code
        assert "export default Card;" in code


class TestElements:
    def _single(self, child, style=None):
        comp = Component(id=1, name="App", is_page=True, style=style or {}, children=[child])
        return generate_code([comp], 1, [1], PROJECT_CLASSIC, default_catalog())

    def test_void_tag_self_closes(self):
        code = self._single(ChildElement(type=CHILD_HTML, type_id=1, name="img", child_id=1))
        assert "<img />" in code

    def test_inline_style(self):
        child = ChildElement(type=CHILD_HTML, type_id=3, name="button", child_id=1, style={"color": "red"})
        code = self._single(child)
        assert '<button style={{"color": "red"}}>button</button>' in code

    def test_component_style(self):
        child = ChildElement(type=CHILD_HTML, type_id=11, name="div", child_id=1)
        code = self._single(child, style={"width": "100%"})
        assert '<div className="App" style={{"width": "100%"}}>' in code

    def test_unknown_catalog_id_falls_back_to_name(self):
        code = self._single(ChildElement(type=CHILD_HTML, type_id=404, name="section", child_id=1))
        assert "<section></section>" in code


class TestHelpers:
    @pytest.mark.parametrize(
        "name,expected",
        [("Card", "Card"), ("nav bar", "Navbar"), ("index", "Index"), ("2col", "_2col"), ("", "Component")],
    )
    def test_identifier(self, name, expected):
        assert identifier(name) == expected

    def test_route_path(self):
        assert route_path("index") == "/"
        assert route_path("About") == "/About"


class TestErrors:
    def test_unknown_component(self, project):
        with pytest.raises(CodegenError):
            _code(project, 99)


class TestDeterminism:
    def test_same_input_same_output(self, project):
        assert _code(project, 1) == _code(project, 1)
        assert _code(project, 1, PROJECT_NEXT) == _code(project, 1, PROJECT_NEXT)
