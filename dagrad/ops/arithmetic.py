# dagrad/ops/arithmetic.py
"""
Forward and local-derivative rules for the binary operators.

Every derivative rule has the signature ``dx(self_value, g, other_value)``:
``self_value`` is the value of the operand receiving the contribution,
``g`` the upstream gradient of the result and ``other_value`` the value of
the remaining operand.
"""
import numpy as np

# IEEE results (inf / nan) are propagated, never raised or warned about.
_IEEE = dict(divide="ignore", invalid="ignore", over="ignore", under="ignore")


def add(x, y): return x + y
def add_dlhs(x, g, y): return g
def add_drhs(y, g, x): return g


def sub(x, y): return x - y
def sub_dlhs(x, g, y): return g
def sub_drhs(y, g, x): return -g


def mul(x, y): return x * y
def mul_dlhs(x, g, y): return g * y
def mul_drhs(y, g, x): return g * x


def pow(x, y):
    """
    x ** y with numpy float semantics: 0 ** -1 -> inf, (-8) ** (1/3) -> nan.
    Plain Python floats would raise ZeroDivisionError or return complex.
    """
    with np.errstate(**_IEEE):
        return float(np.power(np.float64(x), np.float64(y)))


def pow_dlhs(x, g, y):
    """d(x ** y)/dx = y * x ** (y - 1). The exponent is a constant."""
    with np.errstate(**_IEEE):
        return float(np.float64(g) * y * np.power(np.float64(x), np.float64(y) - 1.0))
