"""
Train a small MLP on a toy dataset and optionally export its graph.

    python -m dagrad --layers 3,4,4,1 --epochs 20 --lr 0.05 --dot graph.dot
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from .config import TrainingConfig
from .core.graph import ComputationGraph
from .core.graph_utils import summarize_graph
from .export import write_dot
from .nn import build
from .train import train

XS = [
    [2.0, 3.0, -1.0],
    [3.0, -1.0, 0.5],
    [0.5, 1.0, 1.0],
    [1.0, 1.0, -1.0],
]
YS = [1.0, -1.0, -1.0, 1.0]


def parse_layers(text: str) -> List[int]:
    """Parse '3,4,4,1' into [3, 4, 4, 1]."""
    try:
        widths = [int(w) for w in text.split(",") if w.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid layer widths {text!r}")
    if len(widths) < 2 or any(w <= 0 for w in widths):
        raise argparse.ArgumentTypeError(f"invalid layer widths {text!r}")
    return widths


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="dagrad",
        description="Train a tanh MLP with scalar reverse-mode autodiff",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--layers', type=parse_layers, default=[3, 4, 4, 1],
                        help=f'Comma-separated layer widths; must start with {len(XS[0])} and end with 1')
    parser.add_argument('--epochs', type=int, default=20,
                        help='Number of gradient-descent steps')
    parser.add_argument('--lr', type=float, default=0.05,
                        help='Learning rate')
    parser.add_argument('--seed', type=int, default=None,
                        help='Weight initialization seed')
    parser.add_argument('--linear-output', action='store_true',
                        help='No tanh on the output layer')
    parser.add_argument('--dot', type=str, default=None,
                        help='Write the trained graph as Graphviz DOT to this path')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Debug logging')
    args = parser.parse_args(argv)
    if args.layers[0] != len(XS[0]) or args.layers[-1] != 1:
        parser.error(f"--layers must start with {len(XS[0])} and end with 1")
    return args


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        config = TrainingConfig(
            layer_widths=tuple(args.layers),
            nonlin_output=not args.linear_output,
            seed=args.seed,
            epochs=args.epochs,
            learning_rate=args.lr,
            verbose=True,
        )
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    graph = ComputationGraph()
    model = build(config.layer_widths, graph, seed=config.seed,
                  nonlin_output=config.nonlin_output)
    print(f"{'─' * 50}")
    print(f"{model}")
    print(f"{len(model.parameters())} parameters")
    print(f"{'─' * 50}")

    result = train(model, XS, YS, config)

    print(f"\n{'─' * 50}")
    print("Predictions:")
    for x, y, pred in zip(XS, YS, result.predictions):
        print(f"  x={x}  target={y:+.1f}  pred={pred[0]:+.4f}")
    print()
    print(summarize_graph(graph))

    if args.dot:
        path = write_dot(graph, args.dot)
        print(f"-- Wrote to file: {path} --")
    return 0
