"""
Functional wrappers (grad / grads / grads_list), accessors and graph rendering.
"""

import pytest

from scalar_aad import (
    backward, grad, grads, grads_list, value, gradient,
    format_node, format_graph, get_graph_stats, print_graph_summary,
    leaf, tanh, Tape,
)


def test_accessors():
    x = leaf(3.5)
    y = x * 2.0
    backward(y)
    assert value(y) == 7.0
    assert gradient(x) == 2.0
    assert value(4) == 4
    assert gradient(4.0) == 0.0


def test_grad_single_input():
    assert grad(lambda x: x * x, 3.0) == 6.0
    assert grad(lambda x: -x + 1.0, 10.0) == -1.0
    t = float(tanh(leaf(0.5)).value)
    assert grad(lambda x: x.tanh(), 0.5) == pytest.approx(1.0 - t * t, abs=1e-12)


def test_grad_of_constant_function():
    assert grad(lambda x: 5.0, 1.0) == 0.0


def test_grads_dict():
    out = grads(lambda v: v["a"] * v["b"] + v["a"], {"a": 2.0, "b": 3.0})
    assert out == {"a": 4.0, "b": 2.0}
    assert list(out) == ["a", "b"]


def test_grads_list():
    assert grads_list(lambda xs: xs[0] * xs[0] + 3 * xs[1], [2.0, 4.0]) == [4.0, 3.0]


def test_wrappers_use_isolated_tapes(tape):
    leaf(1.0)
    grads_list(lambda xs: xs[0] * xs[1], [1.0, 2.0])
    grad(lambda x: x * x, 2.0)
    assert len(tape) == 1


def test_format_node():
    a, b = leaf(2.0, name="a"), leaf(-3.0)
    r = a - b
    backward(r)
    line = format_node(r)
    assert "Value: 5.0" in line
    assert "Gradient: 1.0" in line
    assert "Operation: -" in line
    assert f"Node{a.index}" in line
    assert "(a)" in format_node(a)
    assert "Operation: leaf" in format_node(b)


def test_repr():
    x = leaf(1.25, name="x")
    text = repr(x)
    assert text.startswith("ADVar(1.25")
    assert "op=leaf" in text
    assert "name='x'" in text


def test_format_graph_whole_tape_and_subgraph(tape):
    a, b, c = leaf(2.0), leaf(3.0), leaf(4.0)
    unused = leaf(9.0)
    r = a * b + c
    listing = format_graph(tape)
    assert len(listing.splitlines()) == 6
    sub = format_graph(r)
    assert len(sub.splitlines()) == 5
    assert f"Node {unused.index:4d}" not in sub

    short = format_graph(tape, max_nodes=2)
    assert short.splitlines()[-1] == "... (4 more nodes)"
    assert format_graph(Tape()) == "Empty graph"


def test_graph_stats(tape):
    a, b, c = leaf(2.0), leaf(3.0), leaf(4.0)
    a * b + a * c
    stats = get_graph_stats(tape)
    assert stats["nodes"] == 6
    assert stats["edges"] == 6
    assert stats["max_fan_in"] == 2
    assert stats["max_fan_out"] == 2
    assert stats["avg_fan_out"] == pytest.approx(1.0)
    assert stats["operations"] == {"leaf": 3, "mul": 2, "add": 1}


def test_graph_stats_empty():
    stats = get_graph_stats(Tape())
    assert stats["nodes"] == 0
    assert stats["operations"] == {}


def test_print_graph_summary(tape, capsys):
    x = leaf(0.5)
    (x * x).tanh()
    stats = print_graph_summary(tape, detailed=True)
    out = capsys.readouterr().out
    assert "COMPUTATION GRAPH SUMMARY" in out
    assert "tanh" in out
    assert stats["nodes"] == 3

    print_graph_summary(Tape())
    assert "Empty computation graph" in capsys.readouterr().out
