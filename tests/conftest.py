import pytest

from dagrad import ComputationGraph, Op


@pytest.fixture
def graph():
    return ComputationGraph()


@pytest.fixture
def shared(graph):
    """a=-2, b=3; d=a*b; e=a+b; f=d*e. ``a`` and ``b`` each feed two consumers."""
    a = graph.insert_leaf(-2.0, "a")
    b = graph.insert_leaf(3.0, "b")
    d = graph.insert_op(Op.MUL, a, b, label="d")
    e = graph.insert_op(Op.ADD, a, b, label="e")
    f = graph.insert_op(Op.MUL, d, e, label="f")
    return graph, dict(a=a, b=b, d=d, e=e, f=f)
