"""
Canvas Kernel — the tree-edit engine.

Components:
  traversal: breadth-first lookups over a component's child tree
  identity: renumbering of component ids, child ids, and back-references
  cascade: name-based removal of every instance of a deleted entity
  reducer: (state, action) → state  (pure, deep-copy-on-write)
  session: commits reducer output, batch apply, undo

The code generator (codegen) and the HTML catalog (catalog) are the
collaborators the reducer calls out to.
"""

from canvas.kernel.actions import make_action, validate_action
from canvas.kernel.codegen import generate_code
from canvas.kernel.reducer import empty_state, reduce, replay
from canvas.kernel.session import Session

__all__ = [
    "make_action",
    "validate_action",
    "reduce",
    "replay",
    "empty_state",
    "generate_code",
    "Session",
]
