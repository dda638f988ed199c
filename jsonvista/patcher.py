"""
Path-addressed patching of the JSON document.

JsonPatcher rewrites exactly one scalar value of the current document:

1. parse the current text (no cached tree: the latest text always wins),
2. walk the path down to the parent container,
3. assign the new value in place, leaving siblings and their order alone,
4. re-serialize with the fixed formatting convention,
5. write the text to the document store and mirror it into the editor store.

Every guard raises an InlineEditError before anything is written, so a failed
patch leaves the stored text byte-identical.
"""

import json
import logging
import math
from typing import Any, List, Optional, Sequence

from jsonvista.errors import DocumentStateError, InlineEditError, PathError, ValidationError
from jsonvista.models import PathSegment
from jsonvista.stores import DocumentStore, EditorStore, parse_json_text

logger = logging.getLogger(__name__)

INDENT = 2

# Reason passed by the edit session; changes made for it keep the viewport.
INLINE_EDIT_REASON = 'inline_edit'


def serialize_document(data: Any) -> str:
    """Serialize with the one formatting convention used for every write."""
    try:
        return json.dumps(data, indent=INDENT, ensure_ascii=False, allow_nan=False)
    except ValueError as e:
        raise DocumentStateError(f"Cannot serialize document: {e}") from e


def _is_scalar(value: Any) -> bool:
    return value is None or isinstance(value, (str, bool, int, float))


def _is_index(segment: Any) -> bool:
    return isinstance(segment, int) and not isinstance(segment, bool)


def _step(container: Any, segment: PathSegment, path: Sequence[PathSegment]) -> Any:
    """Resolve one segment against a container, raising PathError if it is not there."""
    if isinstance(container, dict):
        if not isinstance(segment, str) or segment not in container:
            raise PathError(f"Key {segment!r} not found", path)
        return container[segment]
    if isinstance(container, list):
        if not _is_index(segment) or not 0 <= segment < len(container):
            raise PathError(f"Index {segment!r} out of range", path)
        return container[segment]
    raise PathError(f"Cannot descend into {type(container).__name__} at {segment!r}", path)


def set_value_at_path(data: Any, path: Sequence[PathSegment], new_value: Any) -> None:
    """
    Assign new_value at path inside an already parsed document.

    Only an existing scalar may be replaced, and only by a scalar: adding or
    removing keys and replacing whole containers are refused.
    """
    if not path:
        raise PathError("Refusing to replace the document root", path)
    if not _is_scalar(new_value):
        raise ValidationError("Only scalar values can be written inline", path)
    if isinstance(new_value, float) and not math.isfinite(new_value):
        raise ValidationError("Invalid number", path)

    parent = data
    for segment in path[:-1]:
        parent = _step(parent, segment, path)

    last = path[-1]
    current = _step(parent, last, path)
    if not _is_scalar(current):
        raise PathError(f"Target at {last!r} is a container", path)
    parent[last] = new_value


class JsonPatcher:
    """
    Applies single-value edits to the document held by a DocumentStore.

    The stores are injected so tests (and each UI client) get their own
    isolated state.
    """

    def __init__(self, document_store: DocumentStore, editor_store: Optional[EditorStore] = None):
        self.document_store = document_store
        self.editor_store = editor_store

    def apply_at_path(self, path: Optional[Sequence[PathSegment]], new_value: Any,
                      reason: Optional[str] = None) -> str:
        """
        Patch the document and return the new text.

        Raises:
            PathError: path is empty or does not resolve
            ValidationError: new_value is not a JSON scalar
            DocumentStateError: the current text is not valid JSON
        """
        if not path:
            raise PathError("Refusing to replace the document root", path)
        segments: List[PathSegment] = list(path)

        data = parse_json_text(self.document_store.get_document())
        set_value_at_path(data, segments, new_value)
        text = serialize_document(data)

        # Editor first: document listeners may read the editor contents
        if self.editor_store is not None:
            self.editor_store.set_contents(text, has_changes=True, skip_update=True)
        change = self.document_store.set_document(
            text, skip_auto_fit=(reason == INLINE_EDIT_REASON)
        )
        logger.info(f"Patched {segments} (version={change.version})")
        return text

    def update_json_at_path(self, path: Optional[Sequence[PathSegment]], new_value: Any,
                            reason: Optional[str] = None) -> bool:
        """Patch the document. Returns False (and writes nothing) on any failure."""
        try:
            self.apply_at_path(path, new_value, reason=reason)
        except InlineEditError as e:
            logger.warning(f"Inline edit refused for {path}: {e.message}")
            return False
        return True
