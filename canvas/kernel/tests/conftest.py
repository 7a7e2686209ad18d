"""
Kernel test configuration.

Tests run against the reference code generator and the default catalog;
tests that need a failing or recording generator pass their own.
"""

import pytest

from canvas.kernel.reducer import empty_state
from canvas.kernel.tests.helpers import build_project


@pytest.fixture
def empty():
    return empty_state()


@pytest.fixture
def project():
    return build_project()


@pytest.fixture
def recording_codegen():
    """A code generator that records which component ids it was asked to render."""
    calls = []

    def codegen(components, component_id, root_components, project_type, html_types):
        calls.append(component_id)
        return f"// {project_type} {component_id}"

    codegen.calls = calls
    return codegen


@pytest.fixture
def failing_codegen():
    def codegen(components, component_id, root_components, project_type, html_types):
        raise RuntimeError("generator exploded")

    return codegen
