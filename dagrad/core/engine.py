# dagrad/core/engine.py
"""
Reverse pass over a ComputationGraph.

Seeding plants d(root)/d(root) at the output; ``propagate`` then walks the
handles in descending order, so every consumer is expanded before any of its
operands, and accumulates ``operand.grad += dx(operand, g, other)``.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from .errors import AmbiguousRootError

logger = logging.getLogger(__name__)


def zero_grads(graph) -> None:
    """Set every gradient on the graph to exactly 0.0."""
    for _, node in graph.nodes():
        node.grad = 0.0


def sinks(graph) -> List[int]:
    """Handles of all nodes with no consumer, in insertion order."""
    return [h for h, _ in graph.nodes() if not graph.consumers(h)]


def find_root(graph) -> int:
    """
    Return the unique node without consumers.

    Raises AmbiguousRootError when the graph has no such node or several of
    them (independent outputs, unused leaves); callers should then pass an
    explicit root.
    """
    candidates = sinks(graph)
    if len(candidates) != 1:
        raise AmbiguousRootError(candidates)
    return candidates[0]


def seed_root(graph, root: Optional[int] = None, seed: float = 1.0) -> int:
    if root is None:
        root = find_root(graph)
    graph.set_gradient(root, seed)
    return root


def backward_node(graph, handle: int) -> None:
    """Expand one computed node into its operands' gradients."""
    node = graph.get_node(handle)
    if node.op is None:
        return
    g = node.grad
    operands = graph.operands(handle)
    values = [graph.get_node(p).value for p in operands]
    for pos, p in enumerate(operands):
        dx = node.op.derivative(pos)
        if dx is None:
            continue
        parent = graph.get_node(p)
        if not parent.requires_grad:
            continue
        other = values[1 - pos] if len(values) == 2 else None
        # Accumulate: shared operands receive one contribution per consumer.
        parent.grad = parent.grad + dx(values[pos], g, other)


def propagate(graph, start: Optional[int] = None) -> None:
    """
    Expand every computed node with handle <= ``start`` (default: all) in
    descending handle order. Nodes with a zero gradient have nothing to push.
    """
    if start is None:
        start = len(graph) - 1
    else:
        graph.get_node(start)  # validates the handle
    for h in range(start, -1, -1):
        node = graph.get_node(h)
        if node.op is None or node.grad == 0.0:
            continue
        backward_node(graph, h)


def reverse(graph, root: Optional[int] = None, seed: float = 1.0) -> int:
    """
    Run one backward pass: seed ``root`` (auto-detected when None) and
    propagate. Gradients are accumulated onto whatever the graph holds, so
    call ``zero_grads`` first when the graph is reused.

    Returns the root handle.
    """
    root = seed_root(graph, root, seed)
    propagate(graph, root)
    logger.debug("backward pass from root %d (seed=%g) over %d nodes", root, seed, root + 1)
    return root
