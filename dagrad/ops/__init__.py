# dagrad/ops/__init__.py

from .catalog import Op, OpRule, LocalDerivative

__all__ = ["Op", "OpRule", "LocalDerivative"]
