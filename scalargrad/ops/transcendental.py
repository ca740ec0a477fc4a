# scalargrad/ops/transcendental.py
from ..core.node import Op
from ..core.scalar import Scalar
from .arithmetic import _apply


def tanh(a: Scalar) -> Scalar:
    return _apply(Op.TANH, a)
