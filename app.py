"""
Main NiceGUI application for JSONVista.

Renders the current JSON document as a graph with ui.echart, keeps a text
editor pane in sync with it, and lets the user edit primitive values of the
selected node inline.
"""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from dotenv import load_dotenv
from nicegui import ui

from jsonvista.chart_builder import (
    REQUESTED_EVENT_KEYS,
    build_echart_options,
    normalize_click_payload,
    resolve_node_id_from_payload,
)
from jsonvista.config import get_document_path, is_auto_fit_enabled, set_document_path
from jsonvista.document_io import DEFAULT_DOCUMENT, format_document, load_document, save_document
from jsonvista.edit import EditSession, render_row_editor
from jsonvista.errors import DocumentStateError
from jsonvista.graph_builder import JsonGraph, build_graph
from jsonvista.patcher import JsonPatcher
from jsonvista.paths import ensure_documents_dir
from jsonvista.stores import DocumentChange, DocumentStore, EditorContents, EditorStore, LayoutStore

load_dotenv()
logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
logger = logging.getLogger(__name__)

UNTITLED_DOCUMENT = 'untitled.json'


@dataclass
class AppContext:
    """One set of stores per page, wired together explicitly."""
    document_store: DocumentStore
    editor_store: EditorStore
    layout_store: LayoutStore
    patcher: JsonPatcher
    document_path: Optional[Path] = None
    graph: JsonGraph = field(default_factory=JsonGraph)


def create_context(text: str, document_path: Optional[Path] = None,
                   auto_fit: bool = True) -> AppContext:
    document_store = DocumentStore(text)
    editor_store = EditorStore(text, document_store=document_store)
    layout_store = LayoutStore(auto_fit_enabled=auto_fit)
    layout_store.attach(document_store)
    ctx = AppContext(
        document_store=document_store,
        editor_store=editor_store,
        layout_store=layout_store,
        patcher=JsonPatcher(document_store, editor_store),
        document_path=document_path,
    )
    ctx.graph = rebuild_graph(ctx)
    return ctx


def rebuild_graph(ctx: AppContext) -> JsonGraph:
    """Parse the current document into a graph. Keeps the old graph if it is invalid."""
    try:
        return build_graph(ctx.document_store.parse())
    except DocumentStateError as e:
        logger.warning(f"Keeping previous graph: {e.message}")
        return ctx.graph


def load_initial_document() -> Tuple[str, Optional[Path]]:
    """Return (text, path) for the configured document, or the sample document."""
    path = get_document_path()
    if path is not None and path.exists():
        try:
            return load_document(path), path
        except OSError as e:
            logger.warning(f"Could not read {path}: {e}")
    return DEFAULT_DOCUMENT, path


@ui.page('/')
def main_page():
    text, path = load_initial_document()
    ctx = create_context(text, path, auto_fit=is_auto_fit_enabled())
    state: Dict[str, Any] = {
        'selected_node_id': None,
        'chart': None,
        'editor': None,
        'details_container': None,
        'status_label': None,
        'editor_focused': False,
        'editor_stale': False,
    }

    # --- Rendering ---

    def render_details():
        container = state['details_container']
        if container is None:
            return
        container.clear()
        node = ctx.graph.get_node(state['selected_node_id']) if state['selected_node_id'] else None
        with container:
            if node is None:
                ui.label('Click a node to inspect its values').classes('text-sm text-gray-400')
                return
            path_text = ' › '.join(str(s) for s in node.path) or '(root)'
            ui.label(path_text).classes('text-xs font-mono text-gray-400')
            for index, row in enumerate(node.rows):
                session = EditSession(
                    row=row,
                    node_path=node.path,
                    patcher=ctx.patcher,
                    index=index,
                    leaf=node.is_leaf,
                )
                render_row_editor(session)

    def refresh_chart(fit_view: bool):
        chart = state['chart']
        if chart is None:
            return
        options = build_echart_options(ctx.graph, state['selected_node_id'], fit_view=fit_view)
        chart.options.clear()
        chart.options.update(options)
        chart.update()

    def update_status():
        label = state['status_label']
        if label is None:
            return
        name = ctx.document_path.name if ctx.document_path else UNTITLED_DOCUMENT
        marker = ' •' if ctx.editor_store.has_changes else ''
        error = ctx.editor_store.error
        label.set_text(f'{name}{marker}' + (f'  |  {error}' if error else ''))

    # --- Store subscriptions ---

    def on_document_change(change: DocumentChange):
        ctx.graph = rebuild_graph(ctx)
        if state['selected_node_id'] and ctx.graph.get_node(state['selected_node_id']) is None:
            state['selected_node_id'] = None
        refresh_chart(fit_view=ctx.layout_store.consume_fit_request())
        render_details()
        update_status()

    def sync_editor_text():
        editor = state['editor']
        state['editor_stale'] = False
        if editor is not None and editor.value != ctx.editor_store.contents:
            editor.value = ctx.editor_store.contents

    def on_editor_change(update: EditorContents):
        sync_editor_text()

    def on_mirrored_contents(update: EditorContents):
        # inline edits must not move the cursor of a focused editor;
        # its text catches up on blur
        if update.skip_update:
            if state['editor_focused']:
                state['editor_stale'] = True
            else:
                sync_editor_text()
        update_status()

    ctx.document_store.subscribe(on_document_change)
    ctx.editor_store.subscribe(on_editor_change, view=True)
    ctx.editor_store.subscribe(on_mirrored_contents)

    # --- Handlers ---

    def handle_editor_input(e):
        if state['editor_stale'] or e.value == ctx.editor_store.contents:
            return
        ctx.editor_store.set_contents(e.value, has_changes=True)

    def handle_editor_focus(_):
        state['editor_focused'] = True

    def handle_editor_blur(_):
        state['editor_focused'] = False
        if state['editor_stale']:
            sync_editor_text()

    def handle_chart_click(event):
        raw = event.args if hasattr(event, 'args') else event
        payload = normalize_click_payload(raw)
        node_id = resolve_node_id_from_payload(payload, ctx.graph)
        if node_id == state['selected_node_id']:
            return
        state['selected_node_id'] = node_id
        refresh_chart(fit_view=False)
        render_details()

    def do_format():
        try:
            formatted = format_document(ctx.editor_store.contents)
        except DocumentStateError as e:
            ui.notify(e.message, color='negative')
            return
        ctx.editor_store.set_contents(formatted, has_changes=True)

    def do_save():
        target = ctx.document_path or (ensure_documents_dir() / UNTITLED_DOCUMENT)
        try:
            save_document(target, ctx.editor_store.contents)
        except OSError as e:
            logger.error(f"Save failed for {target}: {e}")
            ui.notify(f'Save failed: {e}', color='negative')
            return
        ctx.document_path = target
        ctx.editor_store.mark_saved()
        set_document_path(target)
        update_status()
        ui.notify(f'Saved {target.name}', color='positive', position='bottom', timeout=1000)

    # --- Layout Construction ---

    with ui.header().classes('items-center gap-4 bg-slate-900 px-4 py-2'):
        ui.label('JSONVista').classes('text-lg font-bold text-white')
        state['status_label'] = ui.label('').classes('text-sm text-gray-300 flex-1')
        ui.button('Format', icon='format_align_left', on_click=do_format).props('flat dense color=white')
        ui.button('Save', icon='save', on_click=do_save).props('flat dense color=white')

    with ui.splitter(value=30).classes('w-full h-[calc(100vh-56px)]') as splitter:
        with splitter.before:
            state['editor'] = ui.textarea(value=ctx.editor_store.contents).props(
                'borderless autogrow input-class="font-mono text-xs"'
            ).classes('w-full h-full bg-slate-950 text-gray-200 p-2')
            state['editor'].on_value_change(handle_editor_input)
            state['editor'].on('focus', handle_editor_focus)
            state['editor'].on('blur', handle_editor_blur)
        with splitter.after:
            init_opts = build_echart_options(
                ctx.graph, fit_view=ctx.layout_store.consume_fit_request()
            )
            state['chart'] = ui.echart(init_opts).classes('w-full h-full')
            state['chart'].on('componentClick', handle_chart_click, REQUESTED_EVENT_KEYS)

    details_card = ui.card().classes(
        'fixed right-6 top-20 w-96 max-h-[80vh] overflow-y-auto z-20 shadow-2xl '
        'bg-slate-900/95 border border-slate-700'
    )
    with details_card:
        ui.label('VALUES').classes('text-xs font-bold text-gray-400')
        state['details_container'] = ui.column().classes('w-full gap-1')

    render_details()
    update_status()


if __name__ in {"__main__", "__mp_main__"}:
    ui.run(
        title='JSONVista',
        port=8082,
        dark=True,
        reload=not getattr(sys, 'frozen', False),
    )
