# scalargrad/__init__.py
# Scalar reverse-mode automatic differentiation

from .core import (
    EngineConfig,
    ScalarGradError, ReclaimedNodeError, GraphCycleError, TapeMismatchError,
    Role, Op,
    Tape, global_tape, use_tape,
    Scalar, make_leaf, make_derived,
    value_of, gradient_of, reset_gradient, zero_gradients,
    set_value, mark_output, is_alive,
    topological_order,
    backward, zero_grad,
    grad, grads, grads_list,
    gradcheck, numerical_gradient,
)
from .ops import add, subtract, multiply, power, relu, absolute, tanh

__all__ = [
    # Core
    'EngineConfig',
    'ScalarGradError', 'ReclaimedNodeError', 'GraphCycleError', 'TapeMismatchError',
    'Role', 'Op',
    'Tape', 'global_tape', 'use_tape',
    'Scalar', 'make_leaf', 'make_derived',
    'value_of', 'gradient_of', 'reset_gradient', 'zero_gradients',
    'set_value', 'mark_output', 'is_alive',
    'topological_order',
    # Engine
    'backward', 'zero_grad',
    'grad', 'grads', 'grads_list',
    'gradcheck', 'numerical_gradient',
    # Ops
    'add', 'subtract', 'multiply', 'power', 'relu', 'absolute', 'tanh',
]
