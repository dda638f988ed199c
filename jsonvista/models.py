"""
Shared data shapes for the graph and the inline editor.

A NodeRow describes one displayed key/value line of a graph node. Rows are
produced by graph_builder and consumed by the edit session.
"""

from dataclasses import dataclass
from typing import Any, List, Literal, Optional, Union

ValueType = Literal['string', 'number', 'boolean', 'null', 'object', 'array']
PathSegment = Union[str, int]
JsonPath = List[PathSegment]

PRIMITIVE_TYPES = ('string', 'number', 'boolean', 'null')
CONTAINER_TYPES = ('object', 'array')


@dataclass(frozen=True)
class NodeRow:
    """One field of an object node, or one element of an array node."""
    key: Optional[str]
    type: ValueType
    value: Any = None
    children_count: Optional[int] = None

    @property
    def is_primitive(self) -> bool:
        return self.type in PRIMITIVE_TYPES

    def display_text(self) -> str:
        if self.type == 'object':
            return f"{{{self.children_count or 0} keys}}"
        if self.type == 'array':
            return f"[{self.children_count or 0} items]"
        return value_to_text(self.value)


def value_type_of(value: Any) -> ValueType:
    """Map a parsed JSON value to its declared type name."""
    if value is None:
        return 'null'
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, (int, float)):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, dict):
        return 'object'
    if isinstance(value, list):
        return 'array'
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def value_to_text(value: Any) -> str:
    """Textual form used to seed an edit draft."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)
