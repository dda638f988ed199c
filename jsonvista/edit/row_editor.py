"""
Row Editor - NiceGUI rendering of one node row bound to an EditSession.

Idle rows show "key: value" plus an Edit button (primitive rows only).
While editing, the row shows an input with Save/Cancel buttons; Enter commits,
Escape cancels, and a rejected draft shows its message inline.
"""

from typing import Callable, Optional

from nicegui import ui

from jsonvista.edit.constants import CANCEL_KEY, COMMIT_KEY
from jsonvista.edit.session import EditPhase, EditSession, EditSessionState
from jsonvista.utils import color_for_type


def row_label(session: EditSession) -> str:
    if session.leaf and session.node_path:
        return f'[{session.node_path[-1]}]'
    if session.row.key is not None:
        return f'{session.row.key}:'
    return f'[{session.index}]'


def render_row_editor(
    session: EditSession,
    on_saved: Optional[Callable[[EditSession], None]] = None,
):
    """
    Render a row inside the current NiceGUI context and keep it in sync with
    the session's state.
    """
    container = ui.row().classes('w-full items-center gap-2 no-wrap min-h-8')

    def commit():
        if session.commit() and on_saved:
            on_saved(session)

    def render(state: EditSessionState):
        # the details panel may have been rebuilt by the document change
        if container.is_deleted:
            return
        container.clear()
        with container:
            ui.label(row_label(session)).classes('text-xs font-mono text-gray-400 shrink-0')

            if state.phase is EditPhase.IDLE:
                ui.label(state.display_text).classes('text-sm font-mono truncate').style(
                    f'color: {color_for_type(session.row.type)}'
                )
                if session.can_edit:
                    ui.button('Edit', on_click=lambda: session.begin()).props('flat dense size=sm color=primary')
                return

            draft_input = ui.input(value=state.draft).props('dense outlined autofocus').classes('font-mono text-sm flex-1')
            draft_input.on_value_change(lambda e: session.set_draft(e.value))
            draft_input.on(f'keydown.{COMMIT_KEY.lower()}', commit)
            draft_input.on(f'keydown.{CANCEL_KEY.lower()}', session.cancel)
            if state.phase is EditPhase.SAVING:
                draft_input.disable()
            else:
                # Select the draft once the input is mounted (cosmetic only)
                ui.timer(0.05, lambda: draft_input.run_method('select'), once=True)

            ui.button('Save', on_click=commit).props('flat dense size=sm color=positive')
            ui.button('Cancel', on_click=session.cancel).props('flat dense size=sm color=grey')

        if state.error:
            with container:
                ui.label(state.error).classes('text-xs text-red-400')

    session.set_on_state_change(render)
    render(session.state)
    return container
