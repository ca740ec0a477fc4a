# scalargrad/ops/arithmetic.py
import numpy as np

from ..core.node import Op
from ..core.rules import RULES
from ..core.scalar import Scalar, make_derived


def _apply(op: Op, *operands: Scalar, aux: float = 0.0) -> Scalar:
    """
    Generic primitive:
      - computes out.value = forward(operand values, aux)
      - records a new INTERMEDIATE node pointing at `operands`
    The local gradients are evaluated later, by backward().
    """
    for x in operands:
        if not isinstance(x, Scalar):
            raise TypeError(f"{op.value} expects Scalar operands, got {type(x)}")
    values = tuple(x.value for x in operands)
    out = RULES[op].forward(values, aux)
    return make_derived(out, operands, op, aux)


def add(a: Scalar, b: Scalar) -> Scalar:      return _apply(Op.ADD, a, b)
def subtract(a: Scalar, b: Scalar) -> Scalar: return _apply(Op.SUB, a, b)
def multiply(a: Scalar, b: Scalar) -> Scalar: return _apply(Op.MUL, a, b)


def power(a: Scalar, exponent: float) -> Scalar:
    """
    a ** exponent for a constant real exponent.

    Local partial: exponent * a^(exponent-1). A negative base with a
    fractional exponent gives nan in both the value and the gradient.
    """
    if isinstance(exponent, bool) or not isinstance(exponent, (int, float, np.integer, np.floating)):
        raise TypeError(f"only supporting int/float powers, got {type(exponent)}")
    return _apply(Op.POW, a, aux=float(exponent))
