# dagrad/core/__init__.py

"""
Core public API: the scalar graph and its backward pass.

Exports:
    Node               : One scalar entry (value, grad, op, label).
    ComputationGraph   : Arena of nodes with append-only construction.
    Scalar             : Operator-overloading wrapper around a node handle.
    reverse            : Seed a root and propagate gradients.
    zero_grads         : Reset every gradient on a graph to zero.
    find_root          : Detect the unique output node.
"""

from .node import Node
from .errors import GraphError, ContractViolation, AmbiguousRootError
from .graph import ComputationGraph
from .var import Scalar
from .engine import reverse, propagate, backward_node, seed_root, find_root, zero_grads

__all__ = [
    "Node",
    "GraphError", "ContractViolation", "AmbiguousRootError",
    "ComputationGraph",
    "Scalar",
    "reverse", "propagate", "backward_node", "seed_root", "find_root", "zero_grads",
]
