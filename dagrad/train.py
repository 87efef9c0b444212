"""
Gradient-descent training over a static graph.

The forward and loss sub-graphs are built once. Each epoch re-evaluates them
from the current parameter values, clears gradients, backpropagates from the
loss and steps every parameter along its negative gradient.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

import numpy as np

from .config import TrainingConfig
from .core.var import Scalar

logger = logging.getLogger(__name__)

Target = Union[float, Sequence[float]]


@dataclass
class TrainingResult:
    """Loss history and final outputs of a training run."""
    losses: List[float] = field(default_factory=list)
    predictions: List[List[float]] = field(default_factory=list)
    loss_handle: Optional[int] = None
    output_handles: List[List[int]] = field(default_factory=list)

    @property
    def final_loss(self) -> float:
        return self.losses[-1] if self.losses else float("nan")


def mse_loss(graph, preds: Sequence[int], targets: Sequence[float]) -> int:
    """
    Sum of squared errors, sum_i (y_i - pred_i) ** 2, as a new sub-graph.
    Returns the loss handle.
    """
    if len(preds) != len(targets):
        raise ValueError(f"got {len(preds)} predictions for {len(targets)} targets")

    total = Scalar(graph, graph.insert_constant(0.0, label="result"))
    for y_true, pred in zip(targets, preds):
        y = Scalar(graph, graph.insert_constant(y_true, label="y"))
        err = y - Scalar(graph, pred)
        err.label = "E"
        sq_err = err ** 2
        sq_err.label = "SE"
        total = sq_err + total
        total.label = "L"
        logger.debug("(y_truth - y_pred)^2 = (%.4f - %.4f)^2 = %.4f",
                     y.value, graph.get_value(pred), sq_err.value)
    return total.handle


def gradient_descent_step(graph, params: Sequence[int], learning_rate: float) -> None:
    """value <- value - learning_rate * grad for every parameter leaf."""
    for p in params:
        node = graph.get_node(p)
        graph.set_value(p, node.value + node.grad * -learning_rate)


def _flatten_targets(ys: Sequence[Target], n_outputs: int) -> List[float]:
    flat: List[float] = []
    for y in ys:
        row = np.atleast_1d(np.asarray(y, dtype=float))
        if row.shape != (n_outputs,):
            raise ValueError(f"target {y!r} does not match {n_outputs} model outputs")
        flat.extend(float(v) for v in row)
    return flat


def train(model, xs: Sequence[Sequence[float]], ys: Sequence[Target],
          config: Optional[TrainingConfig] = None) -> TrainingResult:
    """
    Fit ``model`` to (xs, ys) with full-batch gradient descent.

    Args:
        model: MLP whose parameters live in ``model.graph``
        xs: input vectors, one per sample
        ys: targets, a float per sample for single-output models or a
            sequence of ``n_outputs`` floats
        config: epochs, learning rate and verbose (defaults if None). The
            model fields (layer_widths, nonlin_output, seed) are read by
            whoever builds the model, e.g. the CLI; ``train`` uses
            ``model`` as given.

    Returns:
        TrainingResult with the loss before each step and the final outputs.
    """
    config = config or TrainingConfig()
    if len(xs) != len(ys):
        raise ValueError(f"got {len(xs)} inputs for {len(ys)} targets")

    graph = model.graph
    outputs = [model.forward(x) for x in xs]
    n_outputs = len(outputs[0]) if outputs else 0
    targets = _flatten_targets(ys, n_outputs)
    loss = mse_loss(graph, [h for out in outputs for h in out], targets)
    params = model.parameters()
    logger.info("training %d parameters on %d samples (%d graph nodes)",
                len(params), len(xs), len(graph))

    result = TrainingResult(loss_handle=loss, output_handles=outputs)
    for epoch in range(config.epochs):
        graph.recompute()
        graph.reset_gradients()
        graph.run_backward_pass(root=loss)
        loss_val = graph.get_value(loss)
        result.losses.append(loss_val)
        gradient_descent_step(graph, params, config.learning_rate)

        logger.debug("epoch %d: loss=%.6f", epoch, loss_val)
        if config.verbose:
            print(f"epoch {epoch:4d}  loss = {loss_val:.6f}")

    graph.recompute()
    result.predictions = [[graph.get_value(h) for h in out] for out in outputs]
    if result.losses:
        logger.info("trained %d epochs: loss %.6f -> %.6f",
                    config.epochs, result.losses[0], graph.get_value(loss))
    return result
