# scalar_aad/ops/arithmetic.py
import numbers
import numpy as np
from ..core.var import ADVar
from ..core.node import Op
from ..core import tape as tape_mod  # Use module access for use_tape() compatibility


def _check_scalar(x):
    """Return x as float64, or raise TypeError for anything that is not a real scalar."""
    if isinstance(x, (bool, np.bool_)) or not isinstance(x, numbers.Real):
        raise TypeError(
            f"scalar_aad only accepts real scalars (int, float, numpy scalar), "
            f"but got {type(x)}"
        )
    return np.float64(x)


def leaf(x, *, name=None):
    """Create an input scalar on the active tape."""
    tape = tape_mod.global_tape
    return ADVar(tape, tape.push_node(op_tag=Op.LEAF, value=_check_scalar(x), name=name))


def _tape_of(*xs):
    """Pick the tape shared by all ADVar operands (the active tape if there are none)."""
    tape = None
    for x in xs:
        if not isinstance(x, ADVar):
            continue
        x._check()
        if tape is None:
            tape = x.tape
        elif x.tape is not tape:
            raise ValueError("operands live on different tapes")
    return tape if tape is not None else tape_mod.global_tape


def _as_ad(x, tape):
    """Ensure x is an ADVar on `tape`; otherwise wrap it as a constant leaf there."""
    if isinstance(x, ADVar):
        return x
    return ADVar(tape, tape.push_node(op_tag=Op.LEAF, value=_check_scalar(x)))


def _binary(x, y, f, dfdx, dfdy, tag):
    """
    Generic binary primitive:
      - computes out.value = f(x.value, y.value)
      - pushes a Node with the local partials (∂out/∂x, ∂out/∂y), evaluated
        on the operand values as they are now
    """
    tape = _tape_of(x, y)
    x = _as_ad(x, tape)
    y = _as_ad(y, tape)
    a, b = x.node.value, y.node.value
    with np.errstate(over="ignore", invalid="ignore"):
        out = f(a, b)
    handle = tape.push_node(
        op_tag=tag, value=out,
        operands=(x.index, y.index), partials=(dfdx(a, b), dfdy(a, b)),
    )
    return ADVar(tape, handle)


def add(x, y): return _binary(x, y, lambda a,b:a+b, lambda a,b:1.0, lambda a,b:1.0,  Op.ADD)
def sub(x, y): return _binary(x, y, lambda a,b:a-b, lambda a,b:1.0, lambda a,b:-1.0, Op.SUB)
def mul(x, y): return _binary(x, y, lambda a,b:a*b, lambda a,b:b,   lambda a,b:a,    Op.MUL)


def neg(x):
    """
    Unary negation:
      out.value = -x.value
      ∂out/∂x   = -1
    """
    tape = _tape_of(x)
    x = _as_ad(x, tape)
    handle = tape.push_node(op_tag=Op.NEG, value=-x.node.value,
                            operands=(x.index,), partials=(-1.0,))
    return ADVar(tape, handle)
