import pytest

from dagrad import ComputationGraph, TrainingConfig, build, gradient_descent_step, mse_loss, train

XS = [[2.0, 3.0, -1.0], [3.0, -1.0, 0.5], [0.5, 1.0, 1.0], [1.0, 1.0, -1.0]]
YS = [1.0, -1.0, -1.0, 1.0]


def test_mse_loss_value_and_gradients(graph):
    p1 = graph.insert_leaf(0.5)
    p2 = graph.insert_leaf(-0.5)
    loss = mse_loss(graph, [p1, p2], [1.0, -1.0])
    assert graph.get_value(loss) == 0.5
    assert graph.find_root() == loss

    graph.run_backward_pass()
    assert graph.get_gradient(p1) == pytest.approx(-1.0)
    assert graph.get_gradient(p2) == pytest.approx(1.0)


def test_mse_loss_length_mismatch(graph):
    with pytest.raises(ValueError):
        mse_loss(graph, [graph.insert_leaf(1.0)], [1.0, 2.0])


def test_gradient_descent_step(graph):
    w = graph.insert_leaf(1.0)
    graph.set_gradient(w, 2.0)
    gradient_descent_step(graph, [w], learning_rate=0.1)
    assert graph.get_value(w) == pytest.approx(0.8)
    assert graph.get_gradient(w) == 2.0


def test_training_reduces_loss():
    graph = ComputationGraph()
    model = build([3, 4, 4, 1], graph, seed=0)
    config = TrainingConfig(epochs=40, learning_rate=0.05)
    result = train(model, XS, YS, config)

    assert len(result.losses) == 40
    assert result.final_loss < result.losses[0]
    assert len(result.predictions) == 4
    assert all(len(p) == 1 for p in result.predictions)
    assert result.predictions[0][0] == graph.get_value(result.output_handles[0][0])


def test_training_reuses_one_graph():
    graph = ComputationGraph()
    model = build([3, 4, 1], graph, seed=3)
    result = train(model, XS, YS, TrainingConfig(epochs=1))
    size = len(graph)
    train_again = train(model, XS, YS, TrainingConfig(epochs=5))
    assert len(graph) > size  # a second call builds its own forward sub-graph
    assert train_again.loss_handle != result.loss_handle


def test_multi_output_targets():
    graph = ComputationGraph()
    model = build([3, 4, 2], graph, seed=1)
    ys = [[1.0, -1.0], [-1.0, 1.0], [0.5, 0.5], [0.0, 0.0]]
    result = train(model, XS, ys, TrainingConfig(epochs=3))
    assert all(len(p) == 2 for p in result.predictions)

    with pytest.raises(ValueError):
        train(model, XS, YS, TrainingConfig(epochs=1))


def test_train_rejects_mismatched_data():
    model = build([3, 2, 1], ComputationGraph(), seed=0)
    with pytest.raises(ValueError):
        train(model, XS, YS[:2])


def test_zero_epochs():
    model = build([3, 2, 1], ComputationGraph(), seed=0)
    result = train(model, XS, YS, TrainingConfig(epochs=0))
    assert result.losses == []
    assert len(result.predictions) == 4


def test_verbose_training_prints(capsys):
    model = build([3, 2, 1], ComputationGraph(), seed=0)
    train(model, XS, YS, TrainingConfig(epochs=2, verbose=True))
    out = capsys.readouterr().out
    assert "epoch    0" in out and "epoch    1" in out


@pytest.mark.parametrize("kwargs", [
    dict(layer_widths=(3,)),
    dict(layer_widths=(3, 0, 1)),
    dict(epochs=-1),
    dict(learning_rate=0.0),
])
def test_config_validation(kwargs):
    with pytest.raises(ValueError):
        TrainingConfig(**kwargs)


def test_config_defaults():
    config = TrainingConfig(layer_widths=[2, 3, 1])
    assert config.layer_widths == (2, 3, 1)
    assert (config.n_inputs, config.n_outputs) == (2, 1)
    assert config.learning_rate == 0.05


def test_model_fields_of_config_do_not_rebuild_model():
    graph = ComputationGraph()
    model = build([3, 2, 1], graph, seed=0)
    n_params = len(model.parameters())
    result = train(model, XS, YS, TrainingConfig(layer_widths=(3, 4, 4, 1), epochs=2))
    assert len(model.parameters()) == n_params
    assert model.layer_widths == [3, 2, 1]
    assert len(result.losses) == 2
