"""
Inline edit primitives: draft coercion and child path composition.

Both functions are pure. They never touch the document; JsonPatcher does the
writing once a value and a path have been produced here.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Union

from jsonvista.models import JsonPath, NodeRow, PathSegment

# Largest integer a JSON consumer can hold without losing precision (2**53 - 1)
MAX_SAFE_INTEGER = 9007199254740991

_DECIMAL_RE = re.compile(r'^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$')
_PREFIXED_INT_RE = re.compile(r'^0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$')


@dataclass(frozen=True)
class CoercionResult:
    ok: bool
    value: Any = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: Any) -> 'CoercionResult':
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> 'CoercionResult':
        return cls(ok=False, error=error)


def _parse_number(text: str) -> Optional[Union[int, float]]:
    try:
        if _PREFIXED_INT_RE.match(text):
            return int(text, 0)
        if not _DECIMAL_RE.match(text):
            return None
        if not any(c in text for c in '.eE'):
            return int(text)
    except ValueError:
        # int() refuses literals past sys.get_int_max_str_digits()
        return None
    number = float(text)
    if not math.isfinite(number):
        return None
    if number.is_integer() and abs(number) <= MAX_SAFE_INTEGER:
        return int(number)
    return number


def coerce_primitive(original_type: str, text: str) -> CoercionResult:
    """
    Convert a draft string back into the value's original JSON type.

    Args:
        original_type: Declared type of the value being edited
        text: Raw draft text as typed by the user

    Returns:
        CoercionResult with the typed value, or with a user-facing error.
        Strings are passed through untouched (whitespace is significant).
    """
    trimmed = text.strip()

    if original_type == 'number':
        if not trimmed:
            return CoercionResult.failure("Number required")
        number = _parse_number(trimmed)
        if number is None:
            return CoercionResult.failure("Invalid number")
        return CoercionResult.success(number)

    if original_type == 'boolean':
        lowered = trimmed.lower()
        if lowered == 'true':
            return CoercionResult.success(True)
        if lowered == 'false':
            return CoercionResult.success(False)
        return CoercionResult.failure("Use true or false")

    if original_type == 'null':
        if trimmed == '' or trimmed.lower() == 'null':
            return CoercionResult.success(None)
        return CoercionResult.failure("Use null")

    if original_type == 'string':
        return CoercionResult.success(text)

    # object/array rows are display-only, and anything else is a caller bug
    return CoercionResult.failure("Unsupported type")


def _row_key(row: Union[NodeRow, Mapping[str, Any]]) -> Optional[str]:
    if isinstance(row, Mapping):
        return row.get('key')
    return row.key


def _is_index(segment: Any) -> bool:
    return isinstance(segment, int) and not isinstance(segment, bool) and segment >= 0


def compose_child_path(
    parent_path: Optional[Sequence[PathSegment]],
    row: Union[NodeRow, Mapping[str, Any]],
    index: int,
    explicit_index: Optional[int] = None,
) -> Optional[JsonPath]:
    """
    Build the absolute path of a row from its node's path.

    Object fields are addressed by key, array elements by index. Returns None
    when the parent path is missing or empty (the root is never replaced) or
    when no valid index is available.
    """
    if not parent_path:
        return None

    key = _row_key(row)
    if key is not None:
        return [*parent_path, key]

    segment = explicit_index if explicit_index is not None else index
    if _is_index(segment):
        return [*parent_path, segment]
    return None
