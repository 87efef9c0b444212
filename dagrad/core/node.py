# dagrad/core/node.py
from dataclasses import dataclass
from typing import Optional

from ..ops.catalog import Op


@dataclass
class Node:
    """
    One scalar entry in the graph arena.

    Attributes
    ----------
    value : float
        Forward result, or the provided input / parameter / constant.
    grad : float
        Accumulated d(root)/d(this node). Meaningful only after a backward
        pass over a specific root.
    op : Optional[Op]
        Operator that produced this node. None for leaves.
    label : str
        Debug name, never used in computation.
    requires_grad : bool
        False for constants; constants never accumulate gradient.
    """
    value: float
    grad: float = 0.0
    op: Optional[Op] = None
    label: str = ""
    requires_grad: bool = True

    @property
    def is_leaf(self) -> bool:
        return self.op is None
