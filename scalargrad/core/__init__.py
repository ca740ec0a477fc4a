# scalargrad/core/__init__.py

"""
Core public API of the engine.

Exports:
    Scalar            : Handle to one node of a tape.
    Role, Op          : Node roles and the closed primitive set.
    Tape, use_tape    : Node arena and the context manager that swaps it.
    make_leaf         : Create an Input or Parameter leaf.
    make_derived      : Record a node produced by a primitive.
    backward          : One reverse pass (seed, traverse, reclaim).
    topological_order : Reachable nodes, dependencies first.
    value_of, gradient_of, reset_gradient, ... : accessors.
"""

from .config import EngineConfig
from .errors import ScalarGradError, ReclaimedNodeError, GraphCycleError, TapeMismatchError
from .node import Role, Op, Node, NodeRef
from .tape import Tape, global_tape, current_tape, use_tape
from .scalar import (
    Scalar, make_leaf, make_derived,
    value_of, gradient_of, reset_gradient, zero_gradients,
    set_value, mark_output, is_alive,
)
from .graph import topological_order
from .engine import backward, zero_grad
from .seeds import grad, grads, grads_list, value
from .gradcheck import gradcheck, numerical_gradient

__all__ = [
    "EngineConfig",
    "ScalarGradError", "ReclaimedNodeError", "GraphCycleError", "TapeMismatchError",
    "Role", "Op", "Node", "NodeRef",
    "Tape", "global_tape", "current_tape", "use_tape",
    "Scalar", "make_leaf", "make_derived",
    "value_of", "gradient_of", "reset_gradient", "zero_gradients",
    "set_value", "mark_output", "is_alive",
    "topological_order",
    "backward", "zero_grad",
    "grad", "grads", "grads_list", "value",
    "gradcheck", "numerical_gradient",
]
