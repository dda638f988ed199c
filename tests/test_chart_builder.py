from jsonvista.chart_builder import (
    MAX_LABEL_ROWS,
    build_echart_options,
    format_node_label,
    normalize_click_payload,
    resolve_node_id_from_payload,
)
from jsonvista.graph_builder import build_graph


def test_options_structure():
    graph = build_graph({'a': {'b': 1}, 'c': [1, 2]})
    options = build_echart_options(graph)

    series = options['series'][0]
    assert series['type'] == 'graph'
    assert [d['id'] for d in series['data']] == ['root', '/a', '/c', '/c/0', '/c/1']
    assert {(l['source'], l['target']) for l in series['links']} == {
        ('root', '/a'), ('root', '/c'), ('/c', '/c/0'), ('/c', '/c/1'),
    }


def test_fit_view_controls_zoom_reset():
    graph = build_graph({'a': 1})
    assert build_echart_options(graph, fit_view=True)['series'][0]['zoom'] == 1
    assert 'zoom' not in build_echart_options(graph, fit_view=False)['series'][0]


def test_selected_node_is_highlighted():
    graph = build_graph({'a': {'b': 1}})
    data = build_echart_options(graph, selected_node_id='/a')['series'][0]['data']
    styles = {d['id']: d['itemStyle'] for d in data}
    assert styles['/a']['borderWidth'] > styles['root']['borderWidth']


def test_long_labels_are_truncated():
    graph = build_graph({f'k{i}': i for i in range(MAX_LABEL_ROWS + 5)})
    label = format_node_label(graph.nodes[0])
    lines = label.split('\n')
    assert len(lines) == MAX_LABEL_ROWS + 1
    assert lines[-1] == '… 5 more'


def test_empty_containers_get_a_placeholder_label():
    graph = build_graph({'a': {}, 'b': []})
    assert format_node_label(graph.get_node('/a')) == '{}'
    assert format_node_label(graph.get_node('/b')) == '[]'


def test_normalize_click_payload_handles_dict():
    payload = {'componentType': 'series', 'name': 'root'}
    assert normalize_click_payload(payload) is payload


def test_normalize_click_payload_handles_list():
    payload = normalize_click_payload(['series', '/a', 'graph', 'object'])
    assert payload == {
        'componentType': 'series',
        'name': '/a',
        'seriesType': 'graph',
        'value': 'object',
    }


def test_normalize_click_payload_handles_string():
    assert normalize_click_payload('/a') == {'name': '/a'}


def test_resolve_node_id_validates_against_graph():
    graph = build_graph({'a': {'b': 1}})
    assert resolve_node_id_from_payload({'componentType': 'series', 'name': '/a'}, graph) == '/a'
    assert resolve_node_id_from_payload({'componentType': 'series', 'name': '/zzz'}, graph) is None


def test_resolve_node_id_returns_none_for_non_series():
    graph = build_graph({'a': {'b': 1}})
    assert resolve_node_id_from_payload({'componentType': 'tooltip', 'name': '/a'}, graph) is None
