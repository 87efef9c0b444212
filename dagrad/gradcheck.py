"""
Finite-difference gradients for validating the backward pass.

Each leaf is bumped up and down by ``eps``, the graph is re-evaluated and the
central difference

    dR/dL ~ (R(L + eps) - R(L - eps)) / (2 eps)

is compared with the analytic gradient from one reverse pass.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np


@dataclass
class GradCheckResult:
    leaves: List[int]
    analytic: np.ndarray
    numeric: np.ndarray
    rtol: float
    atol: float

    @property
    def mismatches(self) -> List[int]:
        close = np.isclose(self.analytic, self.numeric, rtol=self.rtol, atol=self.atol)
        return [h for h, ok in zip(self.leaves, close) if not ok]

    @property
    def ok(self) -> bool:
        return not self.mismatches

    @property
    def max_abs_error(self) -> float:
        if not self.leaves:
            return 0.0
        return float(np.max(np.abs(self.analytic - self.numeric)))


def numeric_gradient(graph, root: int, leaf: int, eps: float = 1e-6) -> float:
    """Central difference of ``root`` w.r.t. ``leaf``. Graph values are restored."""
    original = graph.get_value(leaf)
    try:
        graph.set_value(leaf, original + eps)
        graph.recompute()
        f_plus = graph.get_value(root)

        graph.set_value(leaf, original - eps)
        graph.recompute()
        f_minus = graph.get_value(root)
    finally:
        graph.set_value(leaf, original)
        graph.recompute()
    return (f_plus - f_minus) / (2.0 * eps)


def check_gradients(graph, root: int, leaves: Optional[Sequence[int]] = None,
                    eps: float = 1e-6, rtol: float = 1e-4, atol: float = 1e-6) -> GradCheckResult:
    """
    Compare analytic and numeric gradients of ``root`` for ``leaves``
    (default: every trainable leaf). Leaves the analytic gradients on the graph.
    """
    if leaves is None:
        leaves = graph.leaves(trainable_only=True)
    leaves = list(leaves)

    numeric = np.array([numeric_gradient(graph, root, h, eps) for h in leaves], dtype=float)

    graph.reset_gradients()
    graph.run_backward_pass(root=root)
    analytic = np.array([graph.get_gradient(h) for h in leaves], dtype=float)

    return GradCheckResult(leaves=leaves, analytic=analytic, numeric=numeric,
                           rtol=rtol, atol=atol)
