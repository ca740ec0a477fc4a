# scalargrad/ops/__init__.py

# Convenience re-exports so users can do: from scalargrad.ops import multiply, tanh, ...
from .arithmetic import add, subtract, multiply, power
from .activations import relu, absolute
from .transcendental import tanh

__all__ = [
    "add", "subtract", "multiply", "power",
    "relu", "absolute",
    "tanh",
]
