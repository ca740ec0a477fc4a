# scalargrad/core/graph.py
from __future__ import annotations
from typing import Iterator, List, Set, Tuple

from .errors import GraphCycleError
from .node import NodeRef
from .scalar import Scalar
from .tape import Tape


def topo_refs(tape: Tape, root: NodeRef) -> List[NodeRef]:
    """
    Post-order DFS from `root` over operand edges.

    Every reachable node appears exactly once, after all of its operands.
    Operands are visited in argument order, which makes the result the same
    as the textbook recursive build_topo, but with an explicit stack so long
    chains (e.g. a running loss sum) do not hit the recursion limit.
    """
    detect_cycles = tape.config.detect_cycles
    visited: Set[NodeRef] = {root}
    on_path: Set[NodeRef] = {root}
    order: List[NodeRef] = []
    stack: List[Tuple[NodeRef, Iterator[NodeRef]]] = [(root, iter(tape.node(root).operands))]

    while stack:
        ref, children = stack[-1]
        for child in children:
            if child in visited:
                if detect_cycles and child in on_path:
                    raise GraphCycleError(f"node #{child.index} depends on itself")
                continue
            visited.add(child)
            on_path.add(child)
            stack.append((child, iter(tape.node(child).operands)))
            break
        else:
            stack.pop()
            on_path.discard(ref)
            order.append(ref)
    return order


def topological_order(root: Scalar) -> List[Scalar]:
    """All nodes reachable from `root`, dependencies before dependents."""
    return [Scalar(root.tape, r) for r in topo_refs(root.tape, root.ref)]
