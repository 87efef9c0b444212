import numpy as np
import pytest

from dagrad import ComputationGraph, Op, check_gradients, numeric_gradient


def random_dag(seed, n_leaves=4, n_ops=14):
    """Random DAG over every operator, folded into a single root with ADD."""
    rng = np.random.default_rng(seed)
    graph = ComputationGraph()
    pool = [graph.insert_leaf(rng.uniform(0.5, 1.5), label=f"l{i}") for i in range(n_leaves)]
    ops = [Op.ADD, Op.SUB, Op.MUL, Op.POW, Op.TANH]

    for _ in range(n_ops):
        op = ops[rng.integers(len(ops))]
        lhs = pool[rng.integers(len(pool))]
        if op is Op.TANH:
            h = graph.insert_op(op, lhs)
        elif op is Op.POW:
            h = graph.insert_op(op, lhs, graph.insert_constant(2.0))
        else:
            h = graph.insert_op(op, lhs, pool[rng.integers(len(pool))])
        if abs(graph.get_value(h)) > 2.0:
            h = graph.insert_op(Op.TANH, h)
        pool.append(h)

    unconsumed = [h for h in pool if not graph.consumers(h)]
    root = unconsumed[0]
    for h in unconsumed[1:]:
        root = graph.insert_op(Op.ADD, root, h)
    return graph, root


@pytest.mark.parametrize("seed", range(8))
def test_backward_matches_finite_differences(seed):
    graph, root = random_dag(seed)
    assert graph.find_root() == root

    result = check_gradients(graph, root)
    assert len(result.leaves) == 4
    assert result.ok, (result.analytic, result.numeric)
    assert result.max_abs_error < 1e-5


def test_numeric_gradient_restores_graph(shared):
    graph, h = shared
    before = [node.value for _, node in graph.nodes()]
    assert numeric_gradient(graph, h["f"], h["a"]) == pytest.approx(-3.0, rel=1e-6)
    assert numeric_gradient(graph, h["f"], h["b"]) == pytest.approx(-8.0, rel=1e-6)
    assert [node.value for _, node in graph.nodes()] == before


def test_check_gradients_reports_mismatch(shared):
    graph, h = shared
    result = check_gradients(graph, h["f"])
    assert result.ok
    result.analytic[0] += 1.0
    assert result.mismatches == [h["a"]]
    assert not result.ok
