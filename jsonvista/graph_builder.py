"""
Build the node graph shown for a JSON document.

Every object and array becomes a node:

- object nodes list one row per field; nested containers are shown as
  "{N keys}" / "[N items]" rows and get their own child node,
- array nodes list one row per element (rows without a key), and every
  element also gets a child node; primitive elements become leaf text nodes,
- a primitive document root becomes a single text node.

Each node carries its absolute path. Object and array rows are edited through
compose_child_path; a text node is edited through its own path. The
structure is also available as a NetworkX DiGraph.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

import networkx as nx

from jsonvista.models import CONTAINER_TYPES, JsonPath, NodeRow, PathSegment, value_type_of

NodeKind = Literal['object', 'array', 'text']

ROOT_NODE_ID = 'root'


def _escape_segment(segment: PathSegment) -> str:
    return str(segment).replace('~', '~0').replace('/', '~1')


def node_id_for_path(path: List[PathSegment]) -> str:
    """Stable node id derived from the node's path (JSON Pointer style)."""
    if not path:
        return ROOT_NODE_ID
    return '/' + '/'.join(_escape_segment(s) for s in path)


@dataclass
class GraphNode:
    id: str
    kind: NodeKind
    path: JsonPath
    rows: List[NodeRow] = field(default_factory=list)

    @property
    def label(self) -> str:
        if self.kind == 'text':
            return self.rows[0].display_text() if self.rows else ''
        if self.kind == 'array':
            # elements are drawn as child nodes
            return f"[{len(self.rows)} items]" if self.rows else ''
        lines = []
        for row in self.rows:
            if row.key is None:
                lines.append(row.display_text())
            else:
                lines.append(f"{row.key}: {row.display_text()}")
        return '\n'.join(lines)

    @property
    def is_leaf(self) -> bool:
        return self.kind == 'text'


@dataclass
class GraphEdge:
    source: str
    target: str
    label: str = ''


@dataclass
class JsonGraph:
    nodes: List[GraphNode] = field(default_factory=list)
    edges: List[GraphEdge] = field(default_factory=list)

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def to_networkx(self) -> nx.DiGraph:
        G = nx.DiGraph()
        for node in self.nodes:
            G.add_node(node.id, kind=node.kind, path=list(node.path), label=node.label)
        for edge in self.edges:
            G.add_edge(edge.source, edge.target, label=edge.label)
        return G

    def as_dict(self) -> Dict[str, Any]:
        """Plain dict form: {'nodes': [...], 'edges': [...]}."""
        return {
            'nodes': [
                {'id': n.id, 'kind': n.kind, 'path': list(n.path), 'label': n.label}
                for n in self.nodes
            ],
            'edges': [
                {'source': e.source, 'target': e.target, 'label': e.label}
                for e in self.edges
            ],
        }


def _container_row(key: Optional[str], value: Any) -> NodeRow:
    value_type = value_type_of(value)
    if value_type in CONTAINER_TYPES:
        return NodeRow(key=key, type=value_type, value=None, children_count=len(value))
    return NodeRow(key=key, type=value_type, value=value)


def build_graph(data: Any) -> JsonGraph:
    """
    Convert a parsed JSON value into a JsonGraph.

    Args:
        data: Parsed document (dict, list or scalar)

    Returns:
        JsonGraph with the root node first, children in document order.
    """
    graph = JsonGraph()

    # Iterative walk keeps deeply nested documents off the recursion limit
    stack = [(data, [])]
    while stack:
        value, path = stack.pop()
        node_id = node_id_for_path(path)
        if not isinstance(value, (dict, list)):
            graph.nodes.append(GraphNode(
                id=node_id,
                kind='text',
                path=path,
                rows=[_container_row(None, value)],
            ))
            continue

        if isinstance(value, dict):
            node = GraphNode(id=node_id, kind='object', path=path)
            items = list(value.items())
        else:
            node = GraphNode(id=node_id, kind='array', path=path)
            items = list(enumerate(value))
        graph.nodes.append(node)

        children = []
        for key, child in items:
            is_array = isinstance(value, list)
            node.rows.append(_container_row(None if is_array else key, child))
            # object fields that are primitives stay rows of their node;
            # every array element gets a node of its own
            if is_array or isinstance(child, (dict, list)):
                child_path = [*path, key]
                graph.edges.append(GraphEdge(
                    source=node_id,
                    target=node_id_for_path(child_path),
                    label=str(key),
                ))
                children.append((child, child_path))
        # Reverse so the first child is popped (and listed) first
        stack.extend(reversed(children))

    return graph
