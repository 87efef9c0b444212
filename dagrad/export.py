"""
Graphviz DOT export of a ComputationGraph.

Value nodes are records ``{ label | data | grad }``; every computed node gets
an extra circle holding its operator symbol, fed by the operands and pointing
at the result:

    0 -> op2 -> 2 <- op2 <- 1
"""

import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

_RECORD_SPECIAL = str.maketrans({c: "\\" + c for c in '{}|<>"\\'})


def _escape(text: str) -> str:
    return text.translate(_RECORD_SPECIAL)


def to_dot(graph) -> str:
    lines = ["digraph {", '    rankdir="LR"', "    node [shape=record]"]

    for h, node in graph.nodes():
        label = _escape(node.label or f"v{h}")
        lines.append(
            f'    {h} [label="{{ {label} | data: {node.value:.4f} | grad: {node.grad:.4f} }}"]')
        if node.op is not None:
            lines.append(f'    op{h} [label="{node.op.symbol}" shape=circle]')
            lines.append(f"    op{h} -> {h}")

    lines.append("")
    for src, dst in graph.edges():
        lines.append(f"    {src} -> op{dst}")

    lines.append("}")
    return "\n".join(lines) + "\n"


def write_dot(graph, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.write_text(to_dot(graph), encoding="utf-8")
    logger.info("wrote %d nodes to %s", len(graph), path)
    return path
