# scalargrad/core/config.py
from dataclasses import dataclass


@dataclass
class EngineConfig:
    """
    Switches for the invariant checks and memory policy of one tape.

    Attributes
    ----------
    check_reclaimed : bool
        Compare the generation stored in a handle with the slot's current
        generation on every access, raising ReclaimedNodeError on mismatch.
        With this off, a stale handle may silently read a recycled slot.
    detect_cycles : bool
        Track the current DFS path during traversal and raise
        GraphCycleError on a back edge.
    reclaim_intermediates : bool
        Release INTERMEDIATE nodes at the end of each backward pass. Turn
        off to inspect intermediate gradients after the pass.
    """
    check_reclaimed: bool = True
    detect_cycles: bool = True
    reclaim_intermediates: bool = True
