"""
Document, editor and layout stores.

These are plain objects wired together per page (see AppContext in app.py)
rather than process-wide singletons:

- DocumentStore: JSON text (source of truth), a version counter and a content
  digest. Every write emits a DocumentChange to its subscribers.
- EditorStore: the text shown in the editor pane plus its unsaved-changes flag.
  Valid user edits are pushed on to the DocumentStore.
- LayoutStore: decides whether the graph viewport should be refit after a
  document change. Inline edits tag their change with skip_auto_fit so the
  graph keeps its current zoom and position.
"""

import hashlib
import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from jsonvista.errors import DocumentStateError

logger = logging.getLogger(__name__)


def content_digest(text: str) -> str:
    return hashlib.sha256(text.encode('utf-8')).hexdigest()


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _parse_finite_float(text: str) -> float:
    number = float(text)
    if not math.isfinite(number):
        raise ValueError(f"Number {text} is out of range")
    return number


def parse_json_text(text: str) -> Any:
    """
    Parse strict JSON. Raises DocumentStateError.

    NaN/Infinity literals and numbers that overflow to infinity (1e400) are
    refused, so every accepted document can be serialized back.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant, parse_float=_parse_finite_float)
    except ValueError as e:
        raise DocumentStateError(f"Invalid JSON: {e}") from e


def _notify(listeners: List[Callable[[Any], None]], event: Any) -> None:
    for listener in list(listeners):
        try:
            listener(event)
        except Exception as e:
            logger.error(f"Error in listener {getattr(listener, '__name__', listener)}: {e}")


@dataclass(frozen=True)
class DocumentChange:
    """Emitted after every document write."""
    text: str
    version: int
    digest: str
    skip_auto_fit: bool = False


DocumentListener = Callable[[DocumentChange], None]


class DocumentStore:
    """Holds the current document text. Parsed forms are produced on demand."""

    def __init__(self, text: str = "{}"):
        self._text = text
        self._version = 0
        self._digest = content_digest(text)
        self._listeners: List[DocumentListener] = []

    @property
    def version(self) -> int:
        return self._version

    @property
    def digest(self) -> str:
        return self._digest

    def get_document(self) -> str:
        return self._text

    def parse(self) -> Any:
        return parse_json_text(self._text)

    def set_document(self, text: str, *, skip_auto_fit: bool = False) -> DocumentChange:
        """
        Replace the document text and notify subscribers.

        The version is bumped only when the content actually changes, so
        listeners can compare versions instead of comparing text.
        """
        digest = content_digest(text)
        if digest != self._digest:
            self._version += 1
        self._text = text
        self._digest = digest
        change = DocumentChange(
            text=text,
            version=self._version,
            digest=digest,
            skip_auto_fit=skip_auto_fit,
        )
        logger.debug(f"Document set (version={change.version}, skip_auto_fit={skip_auto_fit})")
        _notify(self._listeners, change)
        return change

    def subscribe(self, listener: DocumentListener) -> Callable[[], None]:
        """Register a listener. Returns a function that removes it again."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


@dataclass(frozen=True)
class EditorContents:
    contents: str
    has_changes: bool
    skip_update: bool


EditorListener = Callable[[EditorContents], None]


class EditorStore:
    """
    Text shown in the editor pane, plus its unsaved-changes flag.

    A regular set_contents() pushes valid JSON on to the document store.
    Updates that originated from the document itself (an inline edit) pass
    skip_update=True so the text is mirrored without being written back,
    which would otherwise emit a second, untagged document change.

    Listeners subscribed with view=True own a cursor (the text editor
    widget). They are not told about skip_update writes; the other
    listeners are.
    """

    def __init__(self, contents: str = "", document_store: Optional[DocumentStore] = None):
        self._contents = contents
        self._has_changes = False
        self._error: Optional[str] = None
        self._document_store = document_store
        self._listeners: List[EditorListener] = []
        self._view_listeners: List[EditorListener] = []

    @property
    def contents(self) -> str:
        return self._contents

    @property
    def has_changes(self) -> bool:
        return self._has_changes

    @property
    def error(self) -> Optional[str]:
        """Parse error of the last text that could not be pushed to the document."""
        return self._error

    def set_contents(self, contents: str, has_changes: Optional[bool] = None,
                     skip_update: bool = False) -> None:
        self._contents = contents
        if has_changes is not None:
            self._has_changes = has_changes
        if skip_update:
            self._error = None
        elif self._document_store is not None:
            try:
                parse_json_text(contents)
            except DocumentStateError as e:
                self._error = e.message
            else:
                self._error = None
                self._document_store.set_document(contents)

        update = EditorContents(contents, self._has_changes, skip_update)
        if not skip_update:
            _notify(self._view_listeners, update)
        _notify(self._listeners, update)

    def mark_saved(self) -> None:
        self._has_changes = False

    def subscribe(self, listener: EditorListener, view: bool = False) -> Callable[[], None]:
        listeners = self._view_listeners if view else self._listeners
        listeners.append(listener)

        def unsubscribe():
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe


class LayoutStore:
    """
    Tracks whether the next graph render should fit the viewport.

    Subscribe it to a DocumentStore with attach(). A change that carries
    skip_auto_fit leaves the pending request untouched; any other change
    requests a fit. consume_fit_request() is read once per render.
    """

    def __init__(self, auto_fit_enabled: bool = True):
        self.auto_fit_enabled = auto_fit_enabled
        self._fit_requested = auto_fit_enabled
        self._last_version: Optional[int] = None

    def attach(self, document_store: DocumentStore) -> Callable[[], None]:
        return document_store.subscribe(self.on_document_change)

    def on_document_change(self, change: DocumentChange) -> None:
        if change.version == self._last_version:
            return
        self._last_version = change.version
        if change.skip_auto_fit:
            logger.debug(f"Skipping auto-fit for version {change.version}")
            return
        if self.auto_fit_enabled:
            self._fit_requested = True

    def consume_fit_request(self) -> bool:
        requested = self._fit_requested
        self._fit_requested = False
        return requested
