"""
Neuron / Layer / MLP built on the ComputationGraph construction API.

Weights and biases are trainable leaves inserted at construction; calling a
model inserts the weighted sums (MUL / ADD) and the optional tanh. No
differentiation happens here.
"""

import logging
from typing import List, Optional, Sequence, Union

import numpy as np

from .core.var import Scalar
from .ops import Op

logger = logging.getLogger(__name__)


class Neuron:
    """
    o = tanh(sum_i w_i * x_i + b), or the plain weighted sum when ``nonlin``
    is False. Parameters start uniform in [-1, 1).
    """

    def __init__(self, graph, n_inputs: int, nonlin: bool = True,
                 rng: Optional[np.random.Generator] = None, label: str = ""):
        if n_inputs <= 0:
            raise ValueError(f"a neuron needs at least one input, got {n_inputs}")
        rng = rng if rng is not None else np.random.default_rng()
        self.graph = graph
        self.nonlin = nonlin
        self.label = label
        self.weights: List[int] = [
            graph.insert_leaf(w, label=f"{label}w{i}")
            for i, w in enumerate(rng.uniform(-1.0, 1.0, n_inputs))
        ]
        self.bias: int = graph.insert_leaf(rng.uniform(-1.0, 1.0), label=f"{label}b")

    def __call__(self, xs: Sequence[int]) -> int:
        if len(xs) != len(self.weights):
            raise ValueError(f"neuron expects {len(self.weights)} inputs, got {len(xs)}")
        g = self.graph
        act = None
        for i, (w, x) in enumerate(zip(self.weights, xs)):
            wx = g.insert_op(Op.MUL, w, x, label=f"{self.label}w{i}x{i}")
            act = wx if act is None else g.insert_op(Op.ADD, act, wx)
        act = g.insert_op(Op.ADD, act, self.bias, label=f"{self.label}n")
        if self.nonlin:
            act = g.insert_op(Op.TANH, act, label=f"{self.label}o")
        return act

    def parameters(self) -> List[int]:
        return self.weights + [self.bias]

    def __repr__(self):
        return f"{'Tanh' if self.nonlin else 'Linear'}Neuron({len(self.weights)})"


class Layer:
    """``n_outputs`` independent neurons over the same inputs."""

    def __init__(self, graph, n_inputs: int, n_outputs: int, nonlin: bool = True,
                 rng: Optional[np.random.Generator] = None, label: str = ""):
        self.neurons = [
            Neuron(graph, n_inputs, nonlin=nonlin, rng=rng, label=f"{label}N{j}")
            for j in range(n_outputs)
        ]

    def __call__(self, xs: Sequence[int]) -> List[int]:
        return [n(xs) for n in self.neurons]

    def parameters(self) -> List[int]:
        return [p for n in self.neurons for p in n.parameters()]

    def __repr__(self):
        return f"Layer of [{', '.join(str(n) for n in self.neurons)}]"


class MLP:
    """
    Multi-layer perceptron.

    Args:
        graph: ComputationGraph receiving parameters and activations
        layer_widths: [n_inputs, hidden_1, ..., n_outputs]
        nonlin_output: apply tanh on the last layer too
        rng: numpy Generator for weight initialization
    """

    def __init__(self, graph, layer_widths: Sequence[int], nonlin_output: bool = True,
                 rng: Optional[np.random.Generator] = None):
        if len(layer_widths) < 2:
            raise ValueError("layer_widths needs at least an input and an output width")
        rng = rng if rng is not None else np.random.default_rng()
        self.graph = graph
        self.layer_widths = list(layer_widths)
        n_layers = len(layer_widths) - 1
        self.layers = [
            Layer(graph, layer_widths[i], layer_widths[i + 1],
                  nonlin=nonlin_output or i < n_layers - 1, rng=rng, label=f"L{i}")
            for i in range(n_layers)
        ]
        self._params = set(self.parameters())
        logger.debug("built MLP %s with %d parameters", self.layer_widths, len(self.parameters()))

    @property
    def n_inputs(self) -> int:
        return self.layer_widths[0]

    def __call__(self, xs: Sequence[Union[int, Scalar]]) -> List[int]:
        """
        Build the forward sub-graph over existing input nodes.

        ``xs`` holds node handles or Scalars of this graph. Bare floats are
        rejected since plain ints cannot be told apart from handles; use
        ``forward()`` for numeric input vectors.
        """
        if len(xs) != self.n_inputs:
            raise ValueError(f"MLP expects {self.n_inputs} inputs, got {len(xs)}")
        xs = [self._input_handle(x) for x in xs]
        for layer in self.layers:
            xs = layer(xs)
        return xs

    def _input_handle(self, x) -> int:
        if isinstance(x, Scalar):
            if x.graph is not self.graph:
                raise ValueError("input Scalar belongs to a different graph")
            return x.handle
        if isinstance(x, (float, np.floating)):
            raise TypeError(
                f"MLP inputs must be node handles, got {x!r}; use forward() for numeric inputs")
        self.graph.get_node(x)
        if x in self._params:
            raise ValueError(f"input handle {x} is a parameter of this model")
        return int(x)

    def forward(self, inputs: Sequence[float]) -> List[int]:
        """Insert ``inputs`` as constant leaves and return one handle per output unit."""
        if len(inputs) != self.n_inputs:
            raise ValueError(f"MLP expects {self.n_inputs} inputs, got {len(inputs)}")
        xs = [self.graph.insert_constant(x, label=f"x{i}") for i, x in enumerate(inputs)]
        return self(xs)

    def parameters(self) -> List[int]:
        return [p for layer in self.layers for p in layer.parameters()]

    def __repr__(self):
        return f"MLP of [{', '.join(str(layer) for layer in self.layers)}]"


def build(layer_widths: Sequence[int], graph, seed: Optional[int] = None,
          nonlin_output: bool = True) -> MLP:
    """Create an MLP whose parameters live in ``graph``."""
    return MLP(graph, layer_widths, nonlin_output=nonlin_output,
               rng=np.random.default_rng(seed))
