# scalargrad/nn.py
"""
Small multilayer perceptron built only from the engine's public API.

Weights and biases are PARAMETER leaves created once, on the tape that is
current when the model is built; every forward pass adds INTERMEDIATE nodes
that the next backward() releases.
"""
from __future__ import annotations
from enum import Enum
from typing import List, Optional, Sequence
import numpy as np

from .core import Role, Scalar, make_leaf, reset_gradient, set_value
from .core.tape import Tape


class Activation(Enum):
    LINEAR = "linear"
    RELU = "relu"
    TANH = "tanh"


def glorot_normal(rng: np.random.Generator, n_in: int, n_out: int) -> float:
    """Normal sample with std sqrt(2 / (n_in + n_out))."""
    return float(rng.normal(0.0, np.sqrt(2.0 / (n_in + n_out))))


def _activate(x: Scalar, act: Activation) -> Scalar:
    if act is Activation.RELU:
        return x.relu()
    if act is Activation.TANH:
        return x.tanh()
    return x


class Neuron:
    """w · x + b"""

    def __init__(self, n_in: int, n_out: int, rng: np.random.Generator,
                 tape: Optional[Tape] = None):
        self.w = [make_leaf(glorot_normal(rng, n_in, n_out), Role.PARAMETER, tape=tape)
                  for _ in range(n_in)]
        self.b = make_leaf(0.0, Role.PARAMETER, tape=tape)

    def __call__(self, x: Sequence[Scalar]) -> Scalar:
        if len(x) != len(self.w):
            raise ValueError(f"neuron expects {len(self.w)} inputs, got {len(x)}")
        act = self.b
        for wi, xi in zip(self.w, x):
            act = act + wi * xi
        return act

    def parameters(self) -> List[Scalar]:
        return self.w + [self.b]


class Layer:
    def __init__(self, n_in: int, n_out: int, act: Activation,
                 rng: np.random.Generator, tape: Optional[Tape] = None):
        self.neurons = [Neuron(n_in, n_out, rng, tape) for _ in range(n_out)]
        self.act = act

    def __call__(self, x: Sequence[Scalar]) -> List[Scalar]:
        return [_activate(n(x), self.act) for n in self.neurons]

    def parameters(self) -> List[Scalar]:
        return [p for n in self.neurons for p in n.parameters()]


class MLP:
    """
    Fully connected network; hidden layers share one activation, the last
    layer has its own (LINEAR by default).
    """

    def __init__(self, n_in: int, layer_sizes: Sequence[int],
                 hidden: Activation = Activation.TANH,
                 output: Activation = Activation.LINEAR,
                 seed: Optional[int] = None, tape: Optional[Tape] = None):
        if not layer_sizes:
            raise ValueError("MLP needs at least one layer")
        rng = np.random.default_rng(seed)
        sizes = [n_in] + list(layer_sizes)
        last = len(layer_sizes) - 1
        self.layers = [
            Layer(sizes[i], sizes[i + 1], output if i == last else hidden, rng, tape)
            for i in range(len(layer_sizes))
        ]

    def __call__(self, x: Sequence[Scalar]) -> List[Scalar]:
        for layer in self.layers:
            x = layer(x)
        return x

    def parameters(self) -> List[Scalar]:
        return [p for layer in self.layers for p in layer.parameters()]

    def zero_grad(self):
        for p in self.parameters():
            reset_gradient(p)


def sgd_step(params: Sequence[Scalar], learning_rate: float):
    """p <- p - lr * dL/dp, then reset the gradient for the next pass."""
    for p in params:
        set_value(p, p.value - learning_rate * p.grad)
        reset_gradient(p)
