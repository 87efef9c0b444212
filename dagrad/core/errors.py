# dagrad/core/errors.py
from typing import Sequence


class GraphError(Exception):
    """Base class for computation graph errors."""


class ContractViolation(GraphError):
    """
    The caller broke the construction contract (wrong operand count, unknown
    handle, non-constant exponent, ...). This is a programming error and the
    graph must not be used to produce gradients afterwards.
    """


class AmbiguousRootError(GraphError):
    """No unique output node could be detected; pass an explicit root."""

    def __init__(self, sinks: Sequence[int]):
        self.sinks = list(sinks)
        if not self.sinks:
            msg = "ambiguous root: graph has no node without consumers"
        else:
            msg = (f"ambiguous root: {len(self.sinks)} nodes have no consumers "
                   f"({', '.join(map(str, self.sinks[:8]))}"
                   f"{', ...' if len(self.sinks) > 8 else ''}); "
                   "pass an explicit output handle")
        super().__init__(msg)
