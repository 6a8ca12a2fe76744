"""
Computation graph utilities.
Rendering and statistics for a tape, or for the subgraph behind an output.
"""

from collections import Counter
from typing import Dict, List, Union

import numpy as np

from .tape import Tape
from .var import ADVar


def format_node(x: ADVar) -> str:
    """One line: value, gradient, operation and operand handles of a node."""
    node = x.node
    line = (f"Value: {float(node.value)!r}, Gradient: {float(node.gradient)!r}, "
            f"Operation: {node.op_tag.symbol}")
    if node.operands:
        line += " <- [" + ", ".join(f"Node{h}" for h in node.operands) + "]"
    if x.name:
        line += f" ({x.name})"
    return line


def _handles(source: Union[Tape, ADVar]):
    """(tape, handles in tape order) for a whole tape or an output's subgraph."""
    if isinstance(source, ADVar):
        from .engine import topological_order
        return source.tape, sorted(v.index for v in topological_order(source))
    return source, list(range(len(source.nodes)))


def format_graph(source: Union[Tape, ADVar], max_nodes: int = 20) -> str:
    """
    Render the computation graph as text, one node per line in tape order.

    Args:
        source: a Tape, or an ADVar whose reachable subgraph should be shown
        max_nodes: at most this many nodes are listed
    """
    tape, handles = _handles(source)
    if not handles:
        return "Empty graph"

    lines: List[str] = []
    for h in handles[:max_nodes]:
        lines.append(f"Node {h:4d}: {format_node(ADVar(tape, h))}")
    if len(handles) > max_nodes:
        lines.append(f"... ({len(handles) - max_nodes} more nodes)")
    return "\n".join(lines)


def get_graph_stats(tape: Tape) -> Dict:
    """
    Gather computation graph statistics (without printing).

    Returns:
        dict with nodes, edges, fan-in/fan-out maxima and averages, and a
        count per operation tag
    """
    if not tape.nodes:
        return {
            'nodes': 0,
            'edges': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'operations': {}
        }

    n_nodes = len(tape.nodes)
    n_edges = sum(len(node.operands) for node in tape.nodes)

    # fan-in: operands per node
    fan_ins = [len(node.operands) for node in tape.nodes]

    # fan-out: how many nodes use each node as an operand
    fan_outs = [0] * n_nodes
    for node in tape.nodes:
        for h in node.operands:
            fan_outs[h] += 1

    op_counter = Counter(node.op_tag.value for node in tape.nodes)

    return {
        'nodes': n_nodes,
        'edges': n_edges,
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(op_counter)
    }


def print_graph_summary(tape: Tape, detailed: bool = False) -> Dict:
    """
    Print a summary of the computation graph.

    Args:
        tape: the tape to summarize
        detailed: also list the nodes (only for graphs of at most 100 nodes)

    Returns:
        the statistics dict from get_graph_stats
    """
    stats = get_graph_stats(tape)
    if stats['nodes'] == 0:
        print("Empty computation graph")
        return stats

    print("\n" + "="*70)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {stats['nodes']:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print()
    print("Operation breakdown:")
    for op_type, count in Counter(stats['operations']).most_common():
        pct = 100.0 * count / stats['nodes']
        print(f"  {op_type:12s}: {count:6,} ({pct:5.1f}%)")

    if detailed and stats['nodes'] <= 100:
        print()
        print(format_graph(tape, max_nodes=100))

    print("="*70 + "\n")
    return stats
