# scalar_aad/core/tape.py
from __future__ import annotations
import logging
from typing import List, Optional, Sequence
from contextlib import contextmanager
from .node import Node, Op

logger = logging.getLogger(__name__)


class Tape:
    """
    Arena that owns every Node, in creation order.

    A node is addressed by its handle (its index in `nodes`). Operands always
    have smaller handles than the node that uses them, so the graph stored on
    a tape is acyclic by construction.
    """
    def __init__(self):
        self.nodes: List[Node] = []
        # bumped on reset so handles minted before it can be detected as stale
        self.generation = 0

    def __len__(self):
        return len(self.nodes)

    def __getitem__(self, handle: int) -> Node:
        return self.nodes[handle]

    def reset(self):
        logger.debug("resetting tape with %d nodes", len(self.nodes))
        self.nodes.clear()
        self.generation += 1

    def push_node(self, *, op_tag: Op, value, operands: Sequence[int] = (),
                  partials: Sequence[float] = (), name: Optional[str] = None) -> int:
        """
        Append a Node to the tape and return its handle.
        `operands` are handles already on this tape, `partials` the matching
        local derivatives ∂value/∂operand.
        """
        if len(operands) != len(partials):
            raise ValueError(
                f"{op_tag.value}: got {len(operands)} operands but {len(partials)} partials"
            )
        handle = len(self.nodes)
        for h in operands:
            if not 0 <= h < handle:
                raise ValueError(f"{op_tag.value}: operand handle {h} is not on the tape")
        self.nodes.append(Node(op_tag=op_tag, value=value, operands=tuple(operands),
                               partials=tuple(partials), name=name))
        return handle


# Global singleton tape (simple and practical for single-threaded use)
global_tape = Tape()


@contextmanager
def use_tape(tape: Optional[Tape] = None):
    """
    Context manager to temporarily use a fresh (or given) tape:
        with use_tape():
            ... build expression ...
            backward(y)
    """
    from . import tape as _tape_mod  # module access so swaps are seen everywhere
    prev = _tape_mod.global_tape
    try:
        _tape_mod.global_tape = tape if tape is not None else Tape()
        yield _tape_mod.global_tape
    finally:
        _tape_mod.global_tape = prev
