# scalar_aad/__init__.py
# Scalar reverse-mode Automatic Adjoint Differentiation library

from .core.node import Node, Op
from .core.var import ADVar
from .core.tape import Tape, use_tape
from .core.engine import (
    backward,
    topological_order,
    zero_gradients,
)
from .core.seeds import value, gradient, grad, grads, grads_list
from .core.graph_utils import (
    format_node,
    format_graph,
    get_graph_stats,
    print_graph_summary,
)
from .ops import leaf, neg, add, sub, mul, tanh
from .config import EngineConfig, get_config, use_config

__all__ = [
    # Graph
    'ADVar',
    'Node',
    'Op',
    'leaf',
    'neg',
    'add',
    'sub',
    'mul',
    'tanh',
    # Tape
    'Tape',
    'use_tape',
    # Engine
    'backward',
    'topological_order',
    'zero_gradients',
    # Accessors
    'value',
    'gradient',
    'grad',
    'grads',
    'grads_list',
    # Rendering
    'format_node',
    'format_graph',
    'get_graph_stats',
    'print_graph_summary',
    # Config
    'EngineConfig',
    'get_config',
    'use_config',
]
