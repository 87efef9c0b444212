# dagrad/core/graph.py
from __future__ import annotations

import logging
import numbers
from typing import Iterator, List, Optional, Tuple

import numpy as np

from ..ops.catalog import Op
from .errors import ContractViolation
from .node import Node

logger = logging.getLogger(__name__)


class ComputationGraph:
    """
    Arena of scalar nodes plus the operand -> result edges between them.

    Handles are plain integers assigned in insertion order and valid for the
    lifetime of the graph. Operands always exist before their result, so
    insertion order is a topological order and the backward pass is a
    reverse index scan.
    """

    def __init__(self):
        self._nodes: List[Node] = []
        self._operands: List[Tuple[int, ...]] = []
        self._consumers: List[List[int]] = []

    def __len__(self):
        return len(self._nodes)

    def __repr__(self):
        n_edges = sum(len(ops) for ops in self._operands)
        return f"ComputationGraph(nodes={len(self._nodes)}, edges={n_edges})"

    # ------------------------------ construction ------------------------------ #
    def insert_leaf(self, value, label: str = "", requires_grad: bool = True) -> int:
        """Append an input / parameter node and return its handle."""
        return self._append(Node(_as_float(value), op=None, label=label,
                                 requires_grad=requires_grad), ())

    def insert_constant(self, value, label: str = "") -> int:
        """Append a leaf that never accumulates gradient (e.g. a POW exponent)."""
        return self.insert_leaf(value, label=label, requires_grad=False)

    def insert_op(self, op: Op, lhs: int, rhs: Optional[int] = None, label: str = "") -> int:
        """
        Apply ``op`` to existing node(s) and append the result.

        The forward value is computed eagerly from the operands' current
        values. Raises ContractViolation when the operand count does not match
        the operator, a handle does not exist, or a POW exponent is not a
        constant leaf.
        """
        if not isinstance(op, Op):
            raise ContractViolation(f"unknown operator {op!r}")
        if op.is_unary and rhs is not None:
            raise ContractViolation(f"{op.name} takes 1 operand, got 2")
        if not op.is_unary and rhs is None:
            raise ContractViolation(f"{op.name} takes 2 operands, got 1")

        operands = (self._check_handle(lhs),)
        if rhs is not None:
            operands += (self._check_handle(rhs),)

        if op is Op.POW:
            exponent = self._nodes[operands[1]]
            if not exponent.is_leaf or exponent.requires_grad:
                raise ContractViolation(
                    f"POW exponent (node {operands[1]}) must be a constant leaf; "
                    "insert it with insert_constant()")

        value = op.forward(*(self._nodes[h].value for h in operands))
        return self._append(Node(value, op=op, label=label), operands)

    def _append(self, node: Node, operands: Tuple[int, ...]) -> int:
        handle = len(self._nodes)
        self._nodes.append(node)
        self._operands.append(operands)
        self._consumers.append([])
        for h in operands:
            self._consumers[h].append(handle)
        return handle

    def _check_handle(self, handle) -> int:
        if isinstance(handle, bool) or not isinstance(handle, (int, np.integer)):
            raise ContractViolation(f"node handle must be an int, got {handle!r}")
        if not 0 <= handle < len(self._nodes):
            raise ContractViolation(
                f"node handle {handle} does not exist (graph has {len(self._nodes)} nodes)")
        return int(handle)

    # -------------------------------- accessors ------------------------------- #
    def get_node(self, handle: int) -> Node:
        return self._nodes[self._check_handle(handle)]

    def get_value(self, handle: int) -> float:
        return self.get_node(handle).value

    def get_gradient(self, handle: int) -> float:
        return self.get_node(handle).grad

    def set_gradient(self, handle: int, value) -> None:
        self.get_node(handle).grad = _as_float(value)

    def set_value(self, handle: int, value) -> None:
        """
        Replace the value of a leaf (parameter update, finite-difference bump).
        Computed nodes are stale until ``recompute()`` runs.
        """
        node = self.get_node(handle)
        if not node.is_leaf:
            raise ContractViolation(
                f"node {handle} is computed by {node.op.name}; only leaf values can be set")
        node.value = _as_float(value)

    def operands(self, handle: int) -> Tuple[int, ...]:
        return self._operands[self._check_handle(handle)]

    def consumers(self, handle: int) -> Tuple[int, ...]:
        return tuple(self._consumers[self._check_handle(handle)])

    def nodes(self) -> Iterator[Tuple[int, Node]]:
        """Iterate ``(handle, node)`` in insertion order."""
        return enumerate(self._nodes)

    def edges(self) -> Iterator[Tuple[int, int]]:
        """Iterate ``(operand, result)`` pairs in insertion order of the result."""
        for dst, operands in enumerate(self._operands):
            for src in operands:
                yield src, dst

    def leaves(self, trainable_only: bool = False) -> List[int]:
        return [h for h, n in enumerate(self._nodes)
                if n.is_leaf and (n.requires_grad or not trainable_only)]

    # --------------------------------- forward -------------------------------- #
    def recompute(self) -> None:
        """Re-evaluate every computed node from the current leaf values."""
        for h, node in enumerate(self._nodes):
            if node.op is not None:
                node.value = node.op.forward(*(self._nodes[p].value for p in self._operands[h]))
        logger.debug("recomputed %d nodes", len(self._nodes))

    # --------------------------------- backward ------------------------------- #
    def find_root(self) -> int:
        from .engine import find_root
        return find_root(self)

    def seed_root(self, root: Optional[int] = None, seed: float = 1.0) -> int:
        from .engine import seed_root
        return seed_root(self, root, seed)

    def backward_node(self, handle: int) -> None:
        from .engine import backward_node
        backward_node(self, handle)

    def propagate(self, start: Optional[int] = None) -> None:
        from .engine import propagate
        propagate(self, start)

    def run_backward_pass(self, root: Optional[int] = None, seed: float = 1.0) -> int:
        from .engine import reverse
        return reverse(self, root, seed)

    def reset_gradients(self) -> None:
        from .engine import zero_grads
        zero_grads(self)


def _as_float(value) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError(f"node values must be real numbers, got {type(value).__name__}")
    return float(value)
