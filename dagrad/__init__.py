# dagrad/__init__.py
# Scalar reverse-mode automatic differentiation over an arena-backed DAG

__version__ = "0.1.0"

from .ops import Op
from .core.node import Node
from .core.errors import GraphError, ContractViolation, AmbiguousRootError
from .core.graph import ComputationGraph
from .core.var import Scalar
from .core.engine import reverse, zero_grads, find_root

# Collaborators built on the core
from .config import TrainingConfig
from .nn import Neuron, Layer, MLP, build
from .train import mse_loss, gradient_descent_step, train, TrainingResult
from .gradcheck import numeric_gradient, check_gradients, GradCheckResult
from .export import to_dot, write_dot

__all__ = [
    # Core
    'Op',
    'Node',
    'GraphError',
    'ContractViolation',
    'AmbiguousRootError',
    'ComputationGraph',
    'Scalar',
    # Engine
    'reverse',
    'zero_grads',
    'find_root',
    # Model / training
    'TrainingConfig',
    'Neuron',
    'Layer',
    'MLP',
    'build',
    'mse_loss',
    'gradient_descent_step',
    'train',
    'TrainingResult',
    # Diagnostics
    'numeric_gradient',
    'check_gradients',
    'GradCheckResult',
    'to_dot',
    'write_dot',
]
