# dagrad/ops/catalog.py
from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, NamedTuple, Optional

from . import arithmetic, transcendental

# dx(self_value, upstream_grad, other_value) -> contribution
LocalDerivative = Callable[[float, float, Optional[float]], float]


class OpRule(NamedTuple):
    forward: Callable[..., float]
    dlhs: LocalDerivative
    drhs: Optional[LocalDerivative]  # None: no gradient flows to rhs


class Op(Enum):
    """Closed set of supported operators: (symbol, arity)."""
    ADD = ("+", 2)
    SUB = ("-", 2)
    MUL = ("*", 2)
    POW = ("^", 2)
    TANH = ("tanh", 1)

    @property
    def symbol(self) -> str:
        return self.value[0]

    @property
    def arity(self) -> int:
        return self.value[1]

    @property
    def is_unary(self) -> bool:
        return self.arity == 1

    @property
    def rule(self) -> OpRule:
        return _RULES[self]

    def forward(self, lhs: float, rhs: Optional[float] = None) -> float:
        if self.is_unary:
            return self.rule.forward(lhs)
        return self.rule.forward(lhs, rhs)

    def derivative(self, position: int) -> Optional[LocalDerivative]:
        """Local-derivative rule for operand ``position`` (0 = lhs, 1 = rhs)."""
        if position == 0:
            return self.rule.dlhs
        if position == 1 and not self.is_unary:
            return self.rule.drhs
        raise IndexError(f"{self.name} has no operand at position {position}")

    def __str__(self):
        return self.symbol


_RULES: Dict[Op, OpRule] = {
    Op.ADD: OpRule(arithmetic.add, arithmetic.add_dlhs, arithmetic.add_drhs),
    Op.SUB: OpRule(arithmetic.sub, arithmetic.sub_dlhs, arithmetic.sub_drhs),
    Op.MUL: OpRule(arithmetic.mul, arithmetic.mul_dlhs, arithmetic.mul_drhs),
    # Exponent is a constant: never differentiated.
    Op.POW: OpRule(arithmetic.pow, arithmetic.pow_dlhs, None),
    Op.TANH: OpRule(transcendental.tanh, transcendental.tanh_dx, None),
}
