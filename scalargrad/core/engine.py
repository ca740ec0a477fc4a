# scalargrad/core/engine.py
from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import List

from .graph import topo_refs
from .node import NodeRef, Role
from .rules import RULES
from .scalar import Scalar
from .tape import Tape

logger = logging.getLogger(__name__)


@contextmanager
def reclaiming(tape: Tape):
    """
    Collect refs of consumed INTERMEDIATE nodes and release them all when the
    block exits, whether or not it raised.
    """
    consumed: List[NodeRef] = []
    try:
        yield consumed
    finally:
        if tape.config.reclaim_intermediates:
            for ref in consumed:
                tape.release(ref)


def backward(root: Scalar) -> None:
    """
    Run one reverse pass from `root`.

    Seed     : root.grad = 1.0
    Traverse : walk the topological order backwards; for each derived node,
               operand.grad += node.grad * d(node)/d(operand)
    Reclaim  : release every INTERMEDIATE node reached by the pass

    Afterwards every INPUT/PARAMETER/OUTPUT node reached holds d(root)/d(node)
    added to whatever its gradient held before; INTERMEDIATE handles are dead.
    """
    tape = root.tape
    order = topo_refs(tape, root.ref)
    tape.node(root.ref).grad = 1.0

    with reclaiming(tape) as consumed:
        for ref in reversed(order):
            node = tape.node(ref)
            if node.op is not None:
                operands = [tape.node(r) for r in node.operands]
                partials = RULES[node.op].local_gradients(
                    tuple(p.value for p in operands), node.aux)
                for p, local in zip(operands, partials):
                    # Accumulate: p.grad += node.grad * (∂node/∂p)
                    p.grad += node.grad * local
            # every dependent of `node` came earlier in this loop
            if node.role is Role.INTERMEDIATE:
                consumed.append(ref)

    logger.debug("backward: %d nodes visited, %d intermediates consumed, %d live on tape",
                 len(order), len(consumed), tape.live_count)


def zero_grad(tape: Tape) -> None:
    """Set the gradient of every live node on `tape` to zero."""
    for node in tape.slots:
        if node is not None:
            node.grad = 0.0
