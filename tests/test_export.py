from dagrad import ComputationGraph, Op, to_dot, write_dot
from dagrad.core.graph_utils import format_graph, get_graph_stats, summarize_graph


def test_dot_layout(shared):
    graph, h = shared
    graph.run_backward_pass()
    dot = to_dot(graph)

    assert dot.startswith("digraph {\n")
    assert dot.rstrip().endswith("}")
    assert 'rankdir="LR"' in dot
    assert "node [shape=record]" in dot
    assert '0 [label="{ a | data: -2.0000 | grad: -3.0000 }"]' in dot
    assert '4 [label="{ f | data: -6.0000 | grad: 1.0000 }"]' in dot
    assert 'op2 [label="*" shape=circle]' in dot
    assert 'op3 [label="+" shape=circle]' in dot
    assert "op0" not in dot
    for src, dst in graph.edges():
        assert f"{src} -> op{dst}" in dot
    for result in (2, 3, 4):
        assert f"op{result} -> {result}" in dot


def test_dot_escapes_record_labels(graph):
    graph.insert_leaf(1.0, label='a|{b}')
    graph.insert_leaf(1.0)
    dot = to_dot(graph)
    assert r"a\|\{b\}" in dot
    assert "{ v1 | data: 1.0000" in dot


def test_write_dot(tmp_path, shared):
    graph, _ = shared
    path = write_dot(graph, tmp_path / "graph.dot")
    assert path.read_text(encoding="utf-8") == to_dot(graph)


def test_graph_stats(shared):
    graph, _ = shared
    stats = get_graph_stats(graph)
    assert stats['nodes'] == 5
    assert stats['edges'] == 6
    assert stats['leaves'] == 2
    assert stats['max_fan_in'] == 2
    assert stats['avg_fan_in'] == 1.2
    assert stats['max_fan_out'] == 2
    assert stats['operations'] == {'leaf': 2, 'MUL': 2, 'ADD': 1}


def test_empty_graph_reports():
    graph = ComputationGraph()
    assert get_graph_stats(graph)['nodes'] == 0
    assert format_graph(graph) == "Empty graph"
    assert summarize_graph(graph) == "Empty computation graph"


def test_format_graph(shared):
    graph, _ = shared
    text = format_graph(graph)
    lines = text.splitlines()
    assert len(lines) == 5
    assert lines[0].startswith("Node    0: leaf")
    assert lines[4].startswith("Node    4: MUL")
    assert lines[4].endswith("<- [Node2, Node3]")

    truncated = format_graph(graph, max_nodes=2)
    assert truncated.splitlines()[-1] == "... (3 more nodes)"


def test_format_graph_marks_constants(graph):
    x = graph.insert_leaf(2.0)
    graph.insert_op(Op.POW, x, graph.insert_constant(2.0))
    assert "const" in format_graph(graph).splitlines()[1]
    assert "POW: 1" in summarize_graph(graph)
