# scalar_aad/core/var.py
from __future__ import annotations
from typing import Tuple

from .node import Node, Op
from .tape import Tape


class ADVar:
    """
    Handle to one node on a tape, the value users build expressions with.

    The node itself (value, operands, local partials, gradient) lives in the
    tape; an ADVar only remembers where. Any number of expressions can share
    the same ADVar as an operand, and all of them address the same slot.

    Attributes
    ----------
    tape       : Tape
        The tape that owns the node.
    index      : int
        Handle of the node on that tape.
    generation : int
        Tape generation the handle was minted in; a reset tape makes it stale.
    """

    __slots__ = ("tape", "index", "generation")

    def __init__(self, tape: Tape, index: int):
        self.tape = tape
        self.index = index
        self.generation = tape.generation

    def _check(self):
        """Raise RuntimeError if the tape was reset after this handle was minted."""
        if self.generation != self.tape.generation:
            raise RuntimeError(
                f"ADVar #{self.index} refers to a tape that has been reset since it was created"
            )

    @property
    def node(self) -> Node:
        self._check()
        return self.tape[self.index]

    @property
    def value(self) -> float:
        return float(self.node.value)

    @property
    def gradient(self) -> float:
        return float(self.node.gradient)

    @property
    def op_tag(self) -> Op:
        return self.node.op_tag

    @property
    def name(self):
        return self.node.name

    @property
    def operands(self) -> Tuple["ADVar", ...]:
        return tuple(ADVar(self.tape, h) for h in self.node.operands)

    def __eq__(self, other):
        if not isinstance(other, ADVar):
            return NotImplemented
        return (self.tape is other.tape and self.index == other.index
                and self.generation == other.generation)

    def __hash__(self):
        return hash((id(self.tape), self.index, self.generation))

    def __repr__(self):
        node = self.node
        label = f", name={node.name!r}" if node.name else ""
        return (f"ADVar({float(node.value)!r}, grad={float(node.gradient)!r}, "
                f"op={node.op_tag.value}{label})")

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def tanh(self):
        from ..ops.transcendental import tanh
        return tanh(self)

    def backward(self, seed=None):
        """Run the backward engine with this variable as the output."""
        from .engine import backward
        backward(self, seed=seed)
