import pytest

from dagrad.cli import main, parse_args, parse_layers


def test_parse_layers():
    assert parse_layers("3,4,4,1") == [3, 4, 4, 1]


@pytest.mark.parametrize("argv", [["--layers", "2,1"], ["--layers", "3,4,2"], ["--layers", "x"]])
def test_bad_layers_exit(argv):
    with pytest.raises(SystemExit) as exc:
        parse_args(argv)
    assert exc.value.code == 2


def test_main_trains_and_writes_dot(tmp_path, capsys):
    dot = tmp_path / "graph.dot"
    assert main(["--epochs", "3", "--seed", "0", "--dot", str(dot)]) == 0

    out = capsys.readouterr().out
    assert "41 parameters" in out
    assert "epoch    2" in out
    assert "Predictions:" in out
    assert dot.read_text(encoding="utf-8").startswith("digraph {")


def test_main_rejects_bad_learning_rate(capsys):
    assert main(["--epochs", "1", "--lr", "-1"]) == 2
    assert "learning_rate" in capsys.readouterr().err
