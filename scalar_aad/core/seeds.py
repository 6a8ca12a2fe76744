# scalar_aad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the tape.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

from .var import ADVar
from .tape import use_tape
from .engine import backward


def value(x: Any) -> Any:
    """Return the numeric value of an ADVar; pass through plain numbers unchanged."""
    return x.value if isinstance(x, ADVar) else x


def gradient(x: Any) -> float:
    """Return the accumulated gradient of an ADVar; plain numbers have none (0.0)."""
    return x.gradient if isinstance(x, ADVar) else 0.0


def _run(y: Any):
    # A plain number means f did not depend on its inputs: every gradient stays 0.
    if isinstance(y, ADVar):
        backward(y)


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[ADVar], Any], x0: float) -> float:
    """
    Derivative of a scalar function y=f(x) at x0.
    Runs one backward pass within a fresh, isolated tape.
    """
    from ..ops.arithmetic import leaf
    with use_tape():
        x = leaf(x0, name="x")
        _run(f(x))
        return x.gradient


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Dict[str, ADVar]], Any],
          inputs: Dict[str, float]) -> Dict[str, float]:
    """
    Gradient of y=f(vars) w.r.t. ALL inputs (dict form).
    Performs ONE backward pass to obtain all ∂y/∂var simultaneously.

    Parameters
    ----------
    f       : function taking a dict {name: ADVar} and returning a scalar ADVar
    inputs  : dict {name: numeric}

    Returns
    -------
    dict {name: float}  # gradients in the same key order as `inputs`
    """
    from ..ops.arithmetic import leaf
    with use_tape():
        vars_ad = {k: leaf(v, name=k) for k, v in inputs.items()}
        _run(f(vars_ad))
        return {k: vars_ad[k].gradient for k in inputs.keys()}


def grads_list(f: Callable[[List[ADVar]], Any], x0_list: Iterable[float]) -> List[float]:
    """
    Same as grads(), but the inputs are provided as a list and the result is a list
    of partials in the same order.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    from ..ops.arithmetic import leaf
    with use_tape():
        xs = [leaf(v, name=f"x{i}") for i, v in enumerate(x0_list)]
        _run(f(xs))
        return [x.gradient for x in xs]
