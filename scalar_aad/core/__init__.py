# scalar_aad/core/__init__.py

"""
Core public API for the AAD package.

Exports:
    ADVar            : Handle to a scalar node on a tape.
    Node, Op         : The tape slot and its operation tag.
    Tape             : The arena owning all nodes.
    use_tape         : Context manager to temporarily switch the active tape.
    backward         : Run a single reverse pass to accumulate gradients.
    topological_order: Reachable nodes, outputs first.
    zero_gradients   : Reset gradients to zero.
    value, gradient  : Accessors for ADVars.
    grad, grads      : Convenience: derivatives of a function at a point.
"""

from .node import Node, Op
from .var import ADVar
from .tape import Tape, use_tape
from .engine import backward, topological_order, zero_gradients
from .seeds import value, gradient, grad, grads, grads_list

__all__ = [
    "ADVar",
    "Node",
    "Op",
    "Tape",
    "use_tape",
    "backward",
    "topological_order",
    "zero_gradients",
    "value",
    "gradient",
    "grad",
    "grads",
    "grads_list",
]
