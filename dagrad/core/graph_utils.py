"""
Graph statistics and plain-text dumps of a ComputationGraph.
"""

from collections import Counter
from typing import Dict, List

import numpy as np


def get_graph_stats(graph) -> Dict:
    """
    Collect size and shape statistics without printing.

    Returns:
        dict with nodes, edges, leaves, max/avg fan-in, max/avg fan-out and
        per-operator counts (leaves counted under "leaf").
    """
    n_nodes = len(graph)
    if n_nodes == 0:
        return {
            'nodes': 0,
            'edges': 0,
            'leaves': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'operations': {}
        }

    fan_ins = np.array([len(graph.operands(h)) for h in range(n_nodes)])
    fan_outs = np.array([len(graph.consumers(h)) for h in range(n_nodes)])
    op_counter = Counter(node.op.name if node.op else "leaf" for _, node in graph.nodes())

    return {
        'nodes': n_nodes,
        'edges': int(fan_ins.sum()),
        'leaves': op_counter.get("leaf", 0),
        'max_fan_in': int(fan_ins.max()),
        'avg_fan_in': float(fan_ins.mean()),
        'max_fan_out': int(fan_outs.max()),
        'avg_fan_out': float(fan_outs.mean()),
        'operations': dict(op_counter)
    }


def format_graph(graph, max_nodes: int = 20) -> str:
    """
    One line per node:  ``Node    3: MUL   (  -6.000000) <- [Node0, Node1]``
    """
    if len(graph) == 0:
        return "Empty graph"

    lines: List[str] = []
    for h, node in graph.nodes():
        if h >= max_nodes:
            lines.append(f"... ({len(graph) - max_nodes} more nodes)")
            break
        tag = node.op.name if node.op else ("const" if not node.requires_grad else "leaf")
        head = f"Node {h:4d}: {tag:6s} ({node.value:12.6f}) grad={node.grad:12.6f}"
        operands = graph.operands(h)
        if operands:
            lines.append(f"{head} <- [{', '.join(f'Node{p}' for p in operands)}]")
        else:
            lines.append(head)
    return "\n".join(lines)


def summarize_graph(graph) -> str:
    """Short text report built from ``get_graph_stats``."""
    stats = get_graph_stats(graph)
    if stats['nodes'] == 0:
        return "Empty computation graph"

    report = ["Computation graph:"]
    report.append(f"  Total nodes:  {stats['nodes']:,} ({stats['leaves']:,} leaves)")
    report.append(f"  Total edges:  {stats['edges']:,}")
    report.append(f"  Max fan-out:  {stats['max_fan_out']}")
    report.append(f"  Avg fan-out:  {stats['avg_fan_out']:.2f}")
    for op, count in sorted(stats['operations'].items(), key=lambda x: x[1], reverse=True):
        pct = 100.0 * count / stats['nodes']
        report.append(f"    - {op}: {count} ({pct:.1f}%)")
    return "\n".join(report)
