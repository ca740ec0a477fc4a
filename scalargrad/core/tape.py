# scalargrad/core/tape.py
from __future__ import annotations
from typing import List, Optional
from contextlib import contextmanager

from .config import EngineConfig
from .errors import ReclaimedNodeError
from .node import Node, NodeRef


class Tape:
    """
    Arena owning every node of a computation.

    Nodes live in indexed slots. A slot released by the backward pass is
    emptied, its generation is bumped and its index goes on a free list, so
    later allocations recycle it while refs taken before the release stop
    resolving.
    """
    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config if config is not None else EngineConfig()
        self.slots: List[Optional[Node]] = []
        self.generations: List[int] = []
        self._free: List[int] = []
        self.released_count = 0

    def __len__(self):
        return len(self.slots)

    @property
    def live_count(self) -> int:
        return len(self.slots) - len(self._free)

    def reset(self):
        self.slots.clear()
        self.generations.clear()
        self._free.clear()
        self.released_count = 0

    def push_node(self, node: Node) -> NodeRef:
        """Store `node` in a free slot (or a new one) and return its ref."""
        if self._free:
            idx = self._free.pop()
            self.slots[idx] = node
        else:
            idx = len(self.slots)
            self.slots.append(node)
            self.generations.append(0)
        return NodeRef(idx, self.generations[idx])

    def is_alive(self, ref: NodeRef) -> bool:
        return (0 <= ref.index < len(self.slots)
                and self.generations[ref.index] == ref.generation
                and self.slots[ref.index] is not None)

    def node(self, ref: NodeRef) -> Node:
        """Resolve `ref`; raises ReclaimedNodeError for a released slot."""
        if self.config.check_reclaimed and not self.is_alive(ref):
            raise ReclaimedNodeError(
                f"node #{ref.index} (generation {ref.generation}) was released "
                f"by a previous backward pass"
            )
        node = self.slots[ref.index]
        if node is None:
            raise ReclaimedNodeError(f"node #{ref.index} was released")
        return node

    def release(self, ref: NodeRef):
        """Empty the slot behind `ref`. Releasing twice is an error."""
        if not self.is_alive(ref):
            raise ReclaimedNodeError(f"node #{ref.index} released twice")
        self.slots[ref.index] = None
        self.generations[ref.index] += 1
        self._free.append(ref.index)
        self.released_count += 1


# Default tape used when no other tape is given
global_tape = Tape()


def current_tape() -> Tape:
    from . import tape as _tape_mod  # read the module attribute so use_tape() swaps are seen
    return _tape_mod.global_tape


@contextmanager
def use_tape(tape: Optional[Tape] = None):
    """
    Context manager to temporarily record onto another tape:
        with use_tape() as t:
            x = make_leaf(2.0)
            backward(x * x)
    """
    from . import tape as _tape_mod  # local import to avoid cycles
    prev = _tape_mod.global_tape
    try:
        _tape_mod.global_tape = tape if tape is not None else Tape()
        yield _tape_mod.global_tape
    finally:
        _tape_mod.global_tape = prev
