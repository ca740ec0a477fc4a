# scalargrad/core/errors.py
"""
Exceptions raised when an engine invariant is broken.

Numeric problems (NaN, inf) are never raised; they flow through values and
gradients like any other float.
"""


class ScalarGradError(Exception):
    """Base class for every engine error."""


class ReclaimedNodeError(ScalarGradError, RuntimeError):
    """A handle points at a node whose slot has already been released."""


class GraphCycleError(ScalarGradError, RuntimeError):
    """Traversal found a node among its own ancestors."""


class TapeMismatchError(ScalarGradError, ValueError):
    """Operands of one primitive were recorded on different tapes."""
