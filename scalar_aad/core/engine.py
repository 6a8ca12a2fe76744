# scalar_aad/core/engine.py
from __future__ import annotations
import logging
from collections import defaultdict
from typing import List, Optional, Sequence, Union

import numpy as np

from .tape import Tape
from .var import ADVar
from ..config import get_config

logger = logging.getLogger(__name__)


def _roots(outputs: Union[ADVar, Sequence[ADVar]]):
    """Normalize `outputs` to (tape, [handles]); all outputs must share a tape."""
    if isinstance(outputs, ADVar):
        outputs = [outputs]
    outputs = list(outputs)
    if not outputs:
        raise ValueError("at least one output is required")
    tape = None
    roots = []
    for y in outputs:
        if not isinstance(y, ADVar):
            raise TypeError(f"expected ADVar outputs, got {type(y)}")
        y._check()
        if tape is None:
            tape = y.tape
        elif y.tape is not tape:
            raise ValueError("outputs live on different tapes")
        roots.append(y.index)
    return tape, roots


def _topo_handles(tape: Tape, roots: Sequence[int]) -> List[int]:
    """
    Post-order DFS from `roots` over operand edges, visited set keyed by handle.
    Returns handles with every node ahead of its operands (outputs first).
    Iterative, so long chains do not run into the recursion limit.
    """
    visited = set()
    post = []
    for root in roots:
        if root in visited:
            continue
        stack = [(root, False)]
        while stack:
            h, expanded = stack.pop()
            if expanded:
                post.append(h)
                continue
            if h in visited:
                continue
            visited.add(h)
            stack.append((h, True))
            # reversed so the left operand is explored first
            for op in reversed(tape[h].operands):
                if op not in visited:
                    stack.append((op, False))
    post.reverse()
    return post


def topological_order(outputs: Union[ADVar, Sequence[ADVar]]) -> List[ADVar]:
    """
    Reverse topological order of the subgraph reachable from `outputs`:
    each reachable node exactly once, every node before all of its operands.
    """
    tape, roots = _roots(outputs)
    return [ADVar(tape, h) for h in _topo_handles(tape, roots)]


def backward(outputs: Union[ADVar, Sequence[ADVar]], seed: Optional[float] = None):
    """
    Run a single reverse pass from the given output(s).

    Args:
        outputs: an ADVar or a (list/tuple) of ADVars on the same tape. A
                 sequence is differentiated as the sum of its members.
        seed: adjoint planted at each output; defaults to the configured
              seed (1.0).

    Notes:
        - Within the pass, for each node in reverse topological order:
          operand_adj += (∂node/∂operand) * node_adj. A node's adjoint is
          complete before its rule fires, and each rule fires once.
        - Adjoints of the pass are collected separately and then added to
          each node's `gradient`, so repeated calls accumulate whole passes:
          calling twice without zeroing doubles every gradient.
    """
    config = get_config()
    if seed is None:
        seed = config.seed
    tape, roots = _roots(outputs)
    order = _topo_handles(tape, roots)
    logger.debug("backward: %d reachable nodes from %d output(s), seed=%r",
                 len(order), len(roots), seed)

    adj = defaultdict(float)
    for h in roots:
        adj[h] += float(seed)

    # Backward sweep
    with np.errstate(over="ignore", invalid="ignore"):
        for h in order:
            g = adj[h]
            if config.skip_zero_adjoints and g == 0.0:
                continue
            node = tape[h]
            for op, local_partial in zip(node.operands, node.partials):
                adj[op] += local_partial * g

        for h in order:
            tape[h].gradient += adj[h]


def zero_gradients(outputs: Union[ADVar, Sequence[ADVar], None] = None):
    """
    Set gradients back to zero, either on every node reachable from `outputs`
    or, when no outputs are given, on every node of the active tape.
    """
    if outputs is None:
        from . import tape as _tape_mod
        nodes = _tape_mod.global_tape.nodes
    else:
        tape, roots = _roots(outputs)
        nodes = [tape[h] for h in _topo_handles(tape, roots)]
    logger.debug("zeroing gradients on %d nodes", len(nodes))
    for node in nodes:
        node.gradient = 0.0
