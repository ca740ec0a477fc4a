# scalargrad/core/rules.py
"""
Forward formula and local-gradient rule of every primitive.

Each Rule takes the operands' forward values (and the op's auxiliary
constant) and returns either the forward result or one local partial
d(out)/d(operand) per operand. Rules never look at gradients; the backward
driver multiplies the partials by the node's adjoint.
"""
from __future__ import annotations
from typing import Callable, Dict, NamedTuple, Tuple
import numpy as np

from .node import Op

Values = Tuple[float, ...]


class Rule(NamedTuple):
    arity: int
    forward: Callable[[Values, float], float]
    local_gradients: Callable[[Values, float], Values]


def _pow_forward(v, k):
    # negative base with fractional exponent -> nan, not an error
    with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
        return float(np.power(np.float64(v[0]), k))


def _pow_local(v, k):
    with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
        return (float(k * np.power(np.float64(v[0]), k - 1.0)),)


def _relu_forward(v, _):
    return v[0] if v[0] > 0.0 else 0.0


def _abs_local(v, _):
    # subgradient 0 at the kink
    if v[0] > 0.0:
        return (1.0,)
    if v[0] < 0.0:
        return (-1.0,)
    return (0.0 if v[0] == 0.0 else float("nan"),)


def _tanh_local(v, _):
    t = np.tanh(v[0])
    return (float(1.0 - t * t),)


RULES: Dict[Op, Rule] = {
    Op.ADD:  Rule(2, lambda v, _: v[0] + v[1],  lambda v, _: (1.0, 1.0)),
    Op.SUB:  Rule(2, lambda v, _: v[0] - v[1],  lambda v, _: (1.0, -1.0)),
    Op.MUL:  Rule(2, lambda v, _: v[0] * v[1],  lambda v, _: (v[1], v[0])),
    Op.POW:  Rule(1, _pow_forward,              _pow_local),
    Op.RELU: Rule(1, _relu_forward,             lambda v, _: (1.0 if v[0] > 0.0 else 0.0,)),
    Op.ABS:  Rule(1, lambda v, _: abs(v[0]),    _abs_local),
    Op.TANH: Rule(1, lambda v, _: float(np.tanh(v[0])), _tanh_local),
}
