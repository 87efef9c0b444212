# dagrad/core/var.py
from __future__ import annotations

from typing import Optional

from ..ops.catalog import Op


class Scalar:
    """
    Operator-overloading view of one node in a ComputationGraph.

    Arithmetic on Scalars records new nodes in the same graph; plain numbers
    on either side are inserted as constants.

    Attributes
    ----------
    graph : ComputationGraph
        The graph owning the node.
    handle : int
        The node's handle in ``graph``.
    """

    __slots__ = ("graph", "handle")

    def __init__(self, graph, handle: int):
        graph.get_node(handle)
        self.graph = graph
        self.handle = handle

    @classmethod
    def leaf(cls, graph, value, label: str = "", requires_grad: bool = True) -> "Scalar":
        return cls(graph, graph.insert_leaf(value, label=label, requires_grad=requires_grad))

    @property
    def value(self) -> float:
        return self.graph.get_value(self.handle)

    @property
    def grad(self) -> float:
        return self.graph.get_gradient(self.handle)

    @property
    def label(self) -> str:
        return self.graph.get_node(self.handle).label

    @label.setter
    def label(self, name: str) -> None:
        self.graph.get_node(self.handle).label = name

    def __repr__(self):
        return f"Scalar({self.label or self.handle}={self.value:.4f}, grad={self.grad:.4f})"

    def _lift(self, other) -> "Scalar":
        if isinstance(other, Scalar):
            if other.graph is not self.graph:
                raise ValueError("cannot combine Scalars from different graphs")
            return other
        return Scalar(self.graph, self.graph.insert_constant(other))

    def _apply(self, op: Op, rhs: Optional["Scalar"] = None) -> "Scalar":
        h = self.graph.insert_op(op, self.handle, None if rhs is None else rhs.handle)
        return Scalar(self.graph, h)

    # ---------------------------- forward operations -------------------------- #
    def __add__(self, other):
        return self._apply(Op.ADD, self._lift(other))

    def __radd__(self, other):
        return self._lift(other)._apply(Op.ADD, self)

    def __sub__(self, other):
        return self._apply(Op.SUB, self._lift(other))

    def __rsub__(self, other):
        return self._lift(other)._apply(Op.SUB, self)

    def __mul__(self, other):
        return self._apply(Op.MUL, self._lift(other))

    def __rmul__(self, other):
        return self._lift(other)._apply(Op.MUL, self)

    def __neg__(self):
        return self * -1.0

    def __pow__(self, exponent):
        if isinstance(exponent, bool) or not isinstance(exponent, (int, float)):
            raise TypeError("only int/float exponents are supported")
        return self._apply(Op.POW, self._lift(exponent))

    def tanh(self) -> "Scalar":
        return self._apply(Op.TANH)

    # ------------------------------ backward pass ----------------------------- #
    def backward(self, seed: float = 1.0) -> None:
        """Clear all gradients on the graph and backpropagate from this node."""
        self.graph.reset_gradients()
        self.graph.run_backward_pass(root=self.handle, seed=seed)
