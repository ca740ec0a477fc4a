# scalargrad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the graph. Each helper builds its graph on a fresh tape,
# so nothing leaks into the caller's tape.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Callable, Dict, Iterable, List

from .engine import backward
from .node import Role
from .scalar import Scalar, make_leaf
from .tape import use_tape


def value(x) -> float:
    """Return the forward value of a Scalar; pass through plain numbers unchanged."""
    return x.value if isinstance(x, Scalar) else x


def _check_output(y, fname: str):
    if not isinstance(y, Scalar):
        raise TypeError(f"{fname} expects f to return a Scalar, got {type(y)}")


def grad(f: Callable[[Scalar], Scalar], x0: float) -> float:
    """Derivative of y = f(x) at x0."""
    with use_tape():
        x = make_leaf(x0, Role.INPUT)
        y = f(x)
        _check_output(y, "grad")
        backward(y)
        return x.grad


def grads(f: Callable[[Dict[str, Scalar]], Scalar],
          inputs: Dict[str, float]) -> Dict[str, float]:
    """
    Gradient of y = f(vars) w.r.t. all inputs (dict form), from ONE reverse pass.

    Returns a dict {name: dy/dname} in the key order of `inputs`.
    """
    with use_tape():
        xs = {k: make_leaf(v, Role.INPUT) for k, v in inputs.items()}
        y = f(xs)
        _check_output(y, "grads")
        backward(y)
        return {k: xs[k].grad for k in inputs}


def grads_list(f: Callable[[List[Scalar]], Scalar],
               x0_list: Iterable[float]) -> List[float]:
    """
    Same as grads(), with inputs and results as lists.

    Example
    -------
    f = lambda xs: xs[0] * xs[0] + xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 1.0]
    """
    with use_tape():
        xs = [make_leaf(v, Role.INPUT) for v in x0_list]
        y = f(xs)
        _check_output(y, "grads_list")
        backward(y)
        return [x.grad for x in xs]
