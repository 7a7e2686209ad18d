"""
Canvas Kernel — Session

Holds the current snapshot for one editing session and is the only place a
new snapshot gets committed. The reducer stays pure; the session validates,
reduces, commits, and remembers previous snapshots for undo.

A transition is all-or-nothing: if the code generator raises, nothing is
committed and the previous snapshot stays current.
"""

from __future__ import annotations

import logging
from collections import deque

from canvas.kernel.codegen import generate_code
from canvas.kernel.config import settings
from canvas.kernel.reducer import CodeGenerator, empty_state, reduce
from canvas.kernel.types import Action, ApplyResult, ProjectState, ReduceResult

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class SessionError(Exception):
    """Base class for session failures."""
    pass


class ActionRejected(SessionError):
    """A strict session refused an action."""

    def __init__(self, action: Action, reason: str):
        super().__init__(f"{action.type}: {reason}")
        self.action = action
        self.reason = reason


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

class Session:
    """
    One editing session over a single project.

    strict=True turns rejections into ActionRejected; otherwise they come
    back as ReduceResult(applied=False) and the snapshot is left alone.
    """

    def __init__(
        self,
        state: ProjectState | None = None,
        *,
        strict: bool = False,
        history_limit: int | None = None,
        codegen: CodeGenerator = generate_code,
    ):
        self._state = state if state is not None else empty_state()
        self._strict = strict
        self._codegen = codegen
        limit = settings.HISTORY_LIMIT if history_limit is None else history_limit
        self._history: deque[ProjectState] = deque(maxlen=max(limit, 0))

    @property
    def state(self) -> ProjectState:
        return self._state

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    # -- dispatch --

    def dispatch(self, action: Action) -> ReduceResult:
        """Reduce one action against the current snapshot and commit it if applied."""
        try:
            result = reduce(self._state, action, self._codegen)
        except Exception:
            logger.exception("session: code generation failed for %s", action.type)
            raise

        if not result.applied:
            logger.info("session: rejected %s (%s)", action.type, result.error)
            if self._strict:
                raise ActionRejected(action, result.error or "rejected")
            return result

        if self._history.maxlen:
            self._history.append(self._state)
        self._state = result.state
        logger.debug(
            "session: applied %s, focus=%s/%s",
            action.type,
            self._state.canvas_focus.component_id,
            self._state.canvas_focus.child_id,
        )
        return result

    # -- apply --

    def apply(self, actions: list[Action]) -> ApplyResult:
        """
        Dispatch a batch in order.
        Partial application: rejected actions are skipped, the rest still apply.
        A code generator failure stops the batch; actions before it stay committed.
        """
        applied: list[Action] = []
        rejected: list[tuple[Action, str]] = []

        for action in actions:
            try:
                result = reduce(self._state, action, self._codegen)
            except Exception:
                logger.exception("session: code generation failed for %s", action.type)
                raise
            if not result.applied:
                rejected.append((action, result.error or "Unknown error"))
                continue
            if self._history.maxlen:
                self._history.append(self._state)
            self._state = result.state
            applied.append(action)

        if rejected:
            logger.info("session: batch applied %d, rejected %d", len(applied), len(rejected))
        return ApplyResult(state=self._state, applied=applied, rejected=rejected)

    # -- undo --

    def undo(self) -> bool:
        """Restore the previous committed snapshot. Returns False if there is none."""
        if not self._history:
            return False
        self._state = self._history.pop()
        return True
