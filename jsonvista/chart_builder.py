"""
ECharts options builder for the JSON graph.

Turns a JsonGraph into an ECharts 'graph' series. Node geometry is left to
the ECharts force layout; this module only decides labels, colors and sizes.
"""

from typing import Any, Dict, List, Optional

from jsonvista.graph_builder import JsonGraph, GraphNode
from jsonvista.utils import BACKGROUND_COLOR, NODE_FILL_COLOR, color_for_type, hex_to_rgba, lerp_hex


# Event keys we request from ECharts click events
REQUESTED_EVENT_KEYS = ['componentType', 'name', 'seriesType', 'value']

# Rows shown in a node label before it is truncated
MAX_LABEL_ROWS = 12
MAX_ROW_CHARS = 48


def _node_accent(node: GraphNode) -> str:
    if node.kind == 'text' and node.rows:
        return color_for_type(node.rows[0].type)
    return color_for_type(node.kind)


def _truncate(text: str) -> str:
    if len(text) <= MAX_ROW_CHARS:
        return text
    return text[:MAX_ROW_CHARS - 1] + '…'


def format_node_label(node: GraphNode) -> str:
    if not node.rows:
        return '{}' if node.kind == 'object' else '[]'
    lines = [_truncate(line) for line in node.label.split('\n')]
    if len(lines) > MAX_LABEL_ROWS:
        hidden = len(lines) - MAX_LABEL_ROWS
        lines = lines[:MAX_LABEL_ROWS] + [f'… {hidden} more']
    return '\n'.join(lines)


def build_echart_options(
    graph: JsonGraph,
    selected_node_id: Optional[str] = None,
    fit_view: bool = True,
) -> Dict[str, Any]:
    """
    Build ECharts options from a JsonGraph.

    Args:
        graph: Graph produced by build_graph()
        selected_node_id: Node to highlight, if any
        fit_view: Reset the zoom level. False keeps the user's current viewport

    Returns:
        ECharts options dict ready for ui.echart()
    """
    e_nodes: List[Dict[str, Any]] = []
    for node in graph.nodes:
        accent = _node_accent(node)
        is_selected = node.id == selected_node_id
        label = format_node_label(node)
        row_count = label.count('\n') + 1

        e_nodes.append({
            'id': node.id,
            'name': node.id,
            'value': node.kind,
            'symbol': 'roundRect',
            'symbolSize': [180, 18 * row_count + 12],
            'itemStyle': {
                'color': lerp_hex(NODE_FILL_COLOR, accent, 0.15),
                'borderColor': '#ffd700' if is_selected else accent,
                'borderWidth': 3 if is_selected else 1,
            },
            'label': {
                'show': True,
                'formatter': label,
                'position': 'inside',
                'align': 'left' if node.kind != 'text' else 'center',
                'fontFamily': 'monospace',
                'fontSize': 11,
                'color': '#e5e7eb',
            },
            'draggable': True,
        })

    e_links = []
    for edge in graph.edges:
        e_links.append({
            'source': edge.source,
            'target': edge.target,
            'label': {'show': bool(edge.label), 'formatter': edge.label, 'fontSize': 10},
            'lineStyle': {'color': hex_to_rgba('#9ca3af', 0.8), 'width': 1.5, 'curveness': 0},
            'symbol': ['none', 'arrow'],
        })

    series: Dict[str, Any] = {
        'type': 'graph',
        'layout': 'force',
        'roam': True,
        'force': {
            'repulsion': 900,
            'gravity': 0.05,
            'edgeLength': 160,
            'layoutAnimation': False,
        },
        'data': e_nodes,
        'links': e_links,
    }
    # zoom is only reset when asked; otherwise ECharts keeps the
    # viewport the user panned to
    if fit_view:
        series['zoom'] = 1

    return {
        'backgroundColor': BACKGROUND_COLOR,
        'tooltip': {'show': False},
        'animationDurationUpdate': 0,
        'series': [series],
    }


def normalize_click_payload(raw_payload: Any) -> Dict[str, Any]:
    """Normalize NiceGUI chart click payloads into a dictionary for easier parsing."""
    if isinstance(raw_payload, dict):
        return raw_payload
    if isinstance(raw_payload, (list, tuple)):
        return {
            REQUESTED_EVENT_KEYS[i]: raw_payload[i]
            for i in range(min(len(raw_payload), len(REQUESTED_EVENT_KEYS)))
        }
    if isinstance(raw_payload, str):
        return {'name': raw_payload}
    return {}


def resolve_node_id_from_payload(payload: Dict[str, Any], graph: JsonGraph) -> Optional[str]:
    """Return a node id from a normalized payload, validated against the graph."""
    if not isinstance(payload, dict):
        return None
    if payload.get('componentType') != 'series':
        return None

    node_id = payload.get('name')
    if not node_id:
        return None
    if graph.get_node(node_id) is not None:
        return node_id
    return None
