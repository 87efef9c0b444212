"""
Training configuration shared by the training driver and the CLI.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class TrainingConfig:
    """Configuration for MLP training."""
    # Model
    layer_widths: Tuple[int, ...] = (3, 4, 4, 1)  # inputs, hidden..., outputs
    nonlin_output: bool = True  # tanh on the output layer
    seed: Optional[int] = None  # weight initialization seed

    # Optimization
    epochs: int = 20
    learning_rate: float = 0.05

    # Logging
    verbose: bool = False

    def __post_init__(self):
        self.layer_widths = tuple(int(w) for w in self.layer_widths)
        if len(self.layer_widths) < 2:
            raise ValueError("layer_widths needs at least an input and an output width")
        if any(w <= 0 for w in self.layer_widths):
            raise ValueError(f"layer widths must be positive, got {self.layer_widths}")
        if self.epochs < 0:
            raise ValueError(f"epochs must be >= 0, got {self.epochs}")
        if self.learning_rate <= 0:
            raise ValueError(f"learning_rate must be > 0, got {self.learning_rate}")

    @property
    def n_inputs(self) -> int:
        return self.layer_widths[0]

    @property
    def n_outputs(self) -> int:
        return self.layer_widths[-1]
