# scalargrad/core/gradcheck.py
from __future__ import annotations
from typing import Callable, List, Sequence
import numpy as np

from .node import Role
from .scalar import Scalar, make_leaf
from .seeds import grads_list
from .tape import use_tape


def _evaluate(f: Callable[[List[Scalar]], Scalar], xs: Sequence[float]) -> float:
    with use_tape():
        return f([make_leaf(v, Role.INPUT) for v in xs]).value


def numerical_gradient(f: Callable[[List[Scalar]], Scalar],
                       xs: Sequence[float], h: float = 1e-6) -> np.ndarray:
    """Central difference (f(x+h) - f(x-h)) / 2h for each input."""
    x = np.asarray(xs, dtype=np.float64)
    out = np.empty_like(x)
    for i in range(x.size):
        up, down = x.copy(), x.copy()
        up[i] += h
        down[i] -= h
        out[i] = (_evaluate(f, up.tolist()) - _evaluate(f, down.tolist())) / (2.0 * h)
    return out


def gradcheck(f: Callable[[List[Scalar]], Scalar], xs: Sequence[float],
              h: float = 1e-6, atol: float = 1e-5, rtol: float = 1e-4) -> bool:
    """
    Compare backward() against finite differences at `xs`.

    Raises AssertionError naming the first mismatching input; returns True
    when every component agrees within `atol + rtol * |numerical|`.
    """
    analytic = np.asarray(grads_list(f, xs), dtype=np.float64)
    numeric = numerical_gradient(f, xs, h)
    for i, (a, n) in enumerate(zip(analytic, numeric)):
        if not np.isclose(a, n, atol=atol, rtol=rtol):
            raise AssertionError(
                f"gradient mismatch for input {i}: analytic={a:.10g}, numerical={n:.10g}"
            )
    return True
