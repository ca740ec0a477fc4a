# scalargrad/core/node.py
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Tuple


class Role(Enum):
    """What a node is for; only INTERMEDIATE nodes are released by backward()."""
    INPUT = "input"
    PARAMETER = "parameter"
    INTERMEDIATE = "intermediate"
    OUTPUT = "output"


LEAF_ROLES = (Role.INPUT, Role.PARAMETER)


class Op(Enum):
    """Closed set of differentiable primitives."""
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    POW = "pow"
    RELU = "relu"
    ABS = "abs"
    TANH = "tanh"


class NodeRef(NamedTuple):
    """Address of one arena slot; `generation` changes when the slot is released."""
    index: int
    generation: int


@dataclass
class Node:
    """
    One scalar in the computation graph.

    Attributes
    ----------
    value    : float
        Forward result, set at construction.
    role     : Role
        Decides whether backward() may release the node.
    op       : Optional[Op]
        Primitive that produced the node; None for leaves.
    operands : Tuple[NodeRef, ...]
        Non-owning references to the inputs of `op`, in argument order.
    aux      : float
        Constant used by the rule (the exponent of POW).
    grad     : float
        Adjoint accumulator, only ever increased with `+=` during backward.
    """
    value: float
    role: Role
    op: Optional[Op] = None
    operands: Tuple[NodeRef, ...] = ()
    aux: float = 0.0
    grad: float = 0.0

    @property
    def is_leaf(self) -> bool:
        return self.op is None
