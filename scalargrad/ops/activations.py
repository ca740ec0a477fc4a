# scalargrad/ops/activations.py
from ..core.node import Op
from ..core.scalar import Scalar
from .arithmetic import _apply


def relu(a: Scalar) -> Scalar:
    """max(0, a); the local gradient is 1 only for a strictly positive input."""
    return _apply(Op.RELU, a)


def absolute(a: Scalar) -> Scalar:
    """
    |a| with gradient sign(a). At a == 0 the subgradient 0 is used, so a
    zero input passes no gradient back.
    """
    return _apply(Op.ABS, a)
