"""
Edit Session - per-row state machine for inline value editing.

    IDLE --begin--> EDITING --commit--> SAVING --ok--> IDLE
                       ^                  |
                       +-----failed-------+
    EDITING --cancel--> IDLE

Only rows with a primitive type can leave IDLE. The session never writes the
document itself: it coerces the draft, composes the row's path and hands both
to the JsonPatcher.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Sequence

from jsonvista.edit.constants import INVALID_VALUE_MESSAGE, UPDATE_FAILED_MESSAGE
from jsonvista.inline_edit import coerce_primitive, compose_child_path
from jsonvista.models import JsonPath, NodeRow, PathSegment, value_to_text
from jsonvista.patcher import INLINE_EDIT_REASON, JsonPatcher

logger = logging.getLogger(__name__)


class EditPhase(Enum):
    IDLE = 'idle'
    EDITING = 'editing'
    SAVING = 'saving'


@dataclass(frozen=True)
class EditSessionState:
    """Immutable snapshot of a session, handed to on_state_change."""
    phase: EditPhase
    draft: str
    error: Optional[str] = None
    display_text: str = ''

    @property
    def is_editing(self) -> bool:
        return self.phase is EditPhase.EDITING


class EditSession:
    """
    Inline edit state for one displayed row.

    Rows of an object/array node are addressed through their node's path plus
    their key or index. A text node's single row is the node's own value, so
    node_path is already the full path; pass leaf=True for those.
    """

    def __init__(
        self,
        row: NodeRow,
        node_path: Optional[Sequence[PathSegment]],
        patcher: JsonPatcher,
        index: int = 0,
        leaf: bool = False,
        on_state_change: Optional[Callable[[EditSessionState], None]] = None,
    ):
        self.row = row
        self.node_path = list(node_path) if node_path is not None else None
        self.index = index
        self.leaf = leaf
        self._patcher = patcher
        self._on_state_change = on_state_change
        self._phase = EditPhase.IDLE
        self._draft = value_to_text(row.value)
        self._error: Optional[str] = None

    @property
    def can_edit(self) -> bool:
        """Primitive rows with a composable path. Root-level rows stay display-only."""
        return self.row.is_primitive and self.target_path() is not None

    @property
    def state(self) -> EditSessionState:
        return EditSessionState(
            phase=self._phase,
            draft=self._draft,
            error=self._error,
            display_text=self.row.display_text(),
        )

    def set_on_state_change(self, callback: Callable[[EditSessionState], None]):
        self._on_state_change = callback

    def target_path(self) -> Optional[JsonPath]:
        if self.leaf:
            return list(self.node_path) if self.node_path else None
        return compose_child_path(self.node_path, self.row, self.index)

    def begin(self) -> bool:
        """Enter EDITING with a draft seeded from the current value."""
        if not self.can_edit or self._phase is not EditPhase.IDLE:
            return False
        self._draft = value_to_text(self.row.value)
        self._error = None
        self._transition(EditPhase.EDITING)
        return True

    def set_draft(self, text: str) -> None:
        if self._phase is EditPhase.EDITING:
            self._draft = text

    def commit(self) -> bool:
        """
        Validate the draft and patch the document.

        Returns True when the value was written. On failure the session stays
        in EDITING with the draft kept and an error message set.
        """
        if self._phase is not EditPhase.EDITING:
            return False
        self._transition(EditPhase.SAVING)

        try:
            result = coerce_primitive(self.row.type, self._draft)
            if not result.ok:
                return self._fail(result.error or INVALID_VALUE_MESSAGE)

            path = self.target_path()
            if path is None:
                return self._fail(UPDATE_FAILED_MESSAGE)

            saved = self._patcher.update_json_at_path(path, result.value, reason=INLINE_EDIT_REASON)
        except Exception as e:
            logger.error(f"Inline edit of {self.row.key!r} failed: {e}")
            return self._fail(UPDATE_FAILED_MESSAGE)
        if not saved:
            return self._fail(UPDATE_FAILED_MESSAGE)

        self.row = replace(self.row, value=result.value)
        self._draft = value_to_text(result.value)
        self._error = None
        self._transition(EditPhase.IDLE)
        return True

    def cancel(self) -> None:
        """Drop the draft and return to IDLE. Does not touch the document."""
        if self._phase is not EditPhase.EDITING:
            return
        self._draft = value_to_text(self.row.value)
        self._error = None
        self._transition(EditPhase.IDLE)

    def _fail(self, message: str) -> bool:
        self._error = message
        self._transition(EditPhase.EDITING)
        return False

    def _transition(self, phase: EditPhase) -> None:
        self._phase = phase
        if self._on_state_change:
            self._on_state_change(self.state)
