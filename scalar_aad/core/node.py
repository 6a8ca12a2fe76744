# scalar_aad/core/node.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class Op(str, Enum):
    """Operation tag of a node. The string value doubles as the debug tag."""
    LEAF = "leaf"
    NEG = "neg"
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    TANH = "tanh"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    Op.LEAF: "leaf",
    Op.NEG: "neg",
    Op.ADD: "+",
    Op.SUB: "-",
    Op.MUL: "*",
    Op.TANH: "tanh",
}


@dataclass
class Node:
    """
    One slot of the tape, produced by a leaf or a primitive operation.

    Attributes
    ----------
    op_tag   : Op
        Which primitive produced this node.
    value    : float
        Forward value, fixed at creation.
    operands : Tuple[int, ...]
        Tape handles of the inputs, in left/right order (empty for leaves).
    partials : Tuple[float, ...]
        One local partial ∂value/∂operand per operand, computed from the
        operand values at creation time. Together with `op_tag` this is the
        node's local backward rule.
    gradient : float
        ∂output/∂this, accumulated by the backward engine (only ever `+=`).
    name     : Optional[str]
        Debug label, usually only set on leaves.
    """
    op_tag: Op
    value: float
    operands: Tuple[int, ...] = ()
    partials: Tuple[float, ...] = ()
    gradient: float = 0.0
    name: Optional[str] = None
