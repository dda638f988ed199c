"""
Inline editing system for the JSON graph.

This package provides per-row value editing:
- EditSession: Idle/Editing/Saving state machine for one row
- render_row_editor: NiceGUI controls bound to a session

Usage:
    from jsonvista.edit import EditSession, render_row_editor
"""

from jsonvista.edit.constants import (
    UPDATE_FAILED_MESSAGE,
    INVALID_VALUE_MESSAGE,
    COMMIT_KEY,
    CANCEL_KEY,
)
from jsonvista.edit.session import EditPhase, EditSession, EditSessionState
from jsonvista.edit.row_editor import render_row_editor

__all__ = [
    'EditPhase',
    'EditSession',
    'EditSessionState',
    'render_row_editor',
    'UPDATE_FAILED_MESSAGE',
    'INVALID_VALUE_MESSAGE',
    'COMMIT_KEY',
    'CANCEL_KEY',
]
