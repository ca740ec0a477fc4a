# scalargrad/core/scalar.py
from __future__ import annotations
from typing import Iterable, Optional, Sequence, Tuple
import numpy as np

from .errors import TapeMismatchError
from .node import LEAF_ROLES, Node, NodeRef, Op, Role
from .rules import RULES
from .tape import Tape, current_tape


class Scalar:
    """
    Handle to one node of a tape.

    The handle is what user code holds: it never owns the node, it only
    remembers where the node lives. Once backward() has released the node,
    every access through the handle raises ReclaimedNodeError.

    Two handles compare equal when they address the same node; forward
    values are never compared.
    """
    __slots__ = ("tape", "ref")

    def __init__(self, tape: Tape, ref: NodeRef):
        self.tape = tape
        self.ref = ref

    @property
    def node(self) -> Node:
        return self.tape.node(self.ref)

    @property
    def value(self) -> float:
        return self.node.value

    @property
    def grad(self) -> float:
        return self.node.grad

    @property
    def role(self) -> Role:
        return self.node.role

    @property
    def op(self) -> Optional[Op]:
        return self.node.op

    @property
    def operands(self) -> Tuple["Scalar", ...]:
        return tuple(Scalar(self.tape, r) for r in self.node.operands)

    @property
    def alive(self) -> bool:
        return self.tape.is_alive(self.ref)

    def __eq__(self, other):
        if not isinstance(other, Scalar):
            return NotImplemented
        return self.tape is other.tape and self.ref == other.ref

    def __hash__(self):
        return hash((id(self.tape), self.ref))

    def __repr__(self):
        if not self.alive:
            return f"Scalar(<released #{self.ref.index}>)"
        n = self.node
        return f"Scalar(value={n.value!r}, grad={n.grad!r}, role={n.role.value})"

    # Operator overloading for the primitive set; only Scalar operands
    def __add__(self, other):
        if not isinstance(other, Scalar):
            return NotImplemented
        from ..ops.arithmetic import add
        return add(self, other)

    def __sub__(self, other):
        if not isinstance(other, Scalar):
            return NotImplemented
        from ..ops.arithmetic import subtract
        return subtract(self, other)

    def __mul__(self, other):
        if not isinstance(other, Scalar):
            return NotImplemented
        from ..ops.arithmetic import multiply
        return multiply(self, other)

    def __pow__(self, exponent):
        if isinstance(exponent, Scalar):
            return NotImplemented
        from ..ops.arithmetic import power
        return power(self, exponent)

    def __abs__(self):
        from ..ops.activations import absolute
        return absolute(self)

    def relu(self):
        from ..ops.activations import relu
        return relu(self)

    def tanh(self):
        from ..ops.transcendental import tanh
        return tanh(self)


def _as_float(value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise TypeError(f"Scalar only accepts real numbers, but got {type(value)}")
    return float(value)


def make_leaf(value, role: Role = Role.INPUT, *, tape: Optional[Tape] = None) -> Scalar:
    """Create an Input or Parameter leaf with gradient 0."""
    if role not in LEAF_ROLES:
        raise ValueError(f"leaf role must be INPUT or PARAMETER, got {role}")
    tape = tape if tape is not None else current_tape()
    ref = tape.push_node(Node(value=_as_float(value), role=role))
    return Scalar(tape, ref)


def make_derived(value, operands: Sequence[Scalar], op: Op, aux: float = 0.0,
                 role: Role = Role.INTERMEDIATE) -> Scalar:
    """
    Record a node produced by `op` from `operands`.

    The operands must be alive and share one tape; the new node goes on that
    tape and keeps non-owning refs to them.
    """
    if role in LEAF_ROLES:
        raise ValueError(f"derived nodes cannot take the leaf role {role}")
    arity = RULES[op].arity
    if len(operands) != arity:
        raise TypeError(f"{op.value} takes {arity} operand(s), got {len(operands)}")
    for x in operands:
        if not isinstance(x, Scalar):
            raise TypeError(f"{op.value} operands must be Scalar, got {type(x)}")
    tape = operands[0].tape
    if any(x.tape is not tape for x in operands[1:]):
        raise TapeMismatchError(f"operands of {op.value} live on different tapes")
    for x in operands:
        tape.node(x.ref)  # fail fast on released operands
    node = Node(value=float(value), role=role, op=op,
                operands=tuple(x.ref for x in operands), aux=float(aux))
    return Scalar(tape, tape.push_node(node))


# ----------------------------- accessors ----------------------------- #
def value_of(x: Scalar) -> float:
    return x.value


def gradient_of(x: Scalar) -> float:
    return x.grad


def is_alive(x: Scalar) -> bool:
    return x.alive


def reset_gradient(x: Scalar):
    x.node.grad = 0.0


def zero_gradients(xs: Iterable[Scalar]):
    for x in xs:
        reset_gradient(x)


def set_value(x: Scalar, value):
    """Replace the value of a leaf between passes (parameter updates, new inputs)."""
    node = x.node
    if node.role not in LEAF_ROLES:
        raise ValueError("only INPUT and PARAMETER leaves may change value")
    node.value = _as_float(value)


def mark_output(x: Scalar) -> Scalar:
    """Promote a derived node to OUTPUT so backward() keeps it alive."""
    node = x.node
    if node.role in LEAF_ROLES:
        raise ValueError("leaves are never released and cannot be marked as output")
    node.role = Role.OUTPUT
    return x
