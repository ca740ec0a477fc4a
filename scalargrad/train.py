# scalargrad/train.py
"""
Train a small MLP with an L1 loss and plain SGD.

    python -m scalargrad.train --epochs 50 --lr 1e-3 --seed 0
"""
from __future__ import annotations
import argparse
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from .core import Role, Scalar, backward, current_tape, make_leaf, zero_gradients
from .nn import MLP, Activation, sgd_step

logger = logging.getLogger(__name__)

# Toy dataset: 4 samples, 3 features, targets in {-1, 1}
XS = [
    [-0.07708825, 1.09136604, -1.47771791],
    [0.46909754, 1.45333126, 0.21135764],
    [0.46909754, 1.45333126, 0.21135764],
    [1.78757578, -0.87620064, 0.48024694],
]
YS = [1.0, -1.0, -1.0, 1.0]


@dataclass
class TrainConfig:
    """Hyper-parameters of one training run"""
    n_in: int = 3
    layer_sizes: Tuple[int, ...] = field(default=(5, 5, 1))
    hidden: Activation = Activation.TANH
    output: Activation = Activation.LINEAR
    learning_rate: float = 1e-4
    epochs: int = 20
    seed: Optional[int] = None


def l1_loss(preds: Sequence[Scalar], targets: Sequence[Scalar]) -> Scalar:
    """sum_i |y_i - pred_i|"""
    if not preds or len(preds) != len(targets):
        raise ValueError("need one target per prediction")
    loss = None
    for pred, y in zip(preds, targets):
        term = abs(y - pred)
        loss = term if loss is None else loss + term
    return loss


def fit(config: TrainConfig, xs: Sequence[Sequence[float]] = XS,
        ys: Sequence[float] = YS) -> Tuple[MLP, pd.DataFrame]:
    """
    Run `config.epochs` full-batch epochs.

    Returns the trained model and a DataFrame with columns (epoch, loss).
    Inputs and targets are INPUT leaves created once; each epoch builds a
    fresh graph on top of them which backward() then releases.
    """
    if not config.layer_sizes or config.layer_sizes[-1] != 1:
        raise ValueError("the last layer must have exactly one unit")
    if len(xs) != len(ys):
        raise ValueError(f"{len(xs)} samples but {len(ys)} targets")
    tape = current_tape()
    model = MLP(config.n_in, config.layer_sizes, config.hidden, config.output,
                seed=config.seed, tape=tape)
    params = model.parameters()
    inputs: List[List[Scalar]] = [[make_leaf(v, Role.INPUT, tape=tape) for v in x] for x in xs]
    targets = [make_leaf(y, Role.INPUT, tape=tape) for y in ys]

    history = []
    for epoch in range(config.epochs):
        preds = [model(x)[0] for x in inputs]
        loss = l1_loss(preds, targets)
        loss_value = loss.value  # the loss node is released by backward()

        backward(loss)
        sgd_step(params, config.learning_rate)
        zero_gradients(targets)
        for x in inputs:
            zero_gradients(x)

        logger.info("Epoch: %d | Loss: %.5f", epoch, loss_value)
        history.append({"epoch": epoch, "loss": loss_value})

    return model, pd.DataFrame(history, columns=["epoch", "loss"])


def parse_args(argv=None):
    """Parse command line arguments."""
    defaults = TrainConfig()
    parser = argparse.ArgumentParser(
        description='Train a small MLP on the toy dataset',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--layers', type=str, default=",".join(map(str, defaults.layer_sizes)),
                        help='Comma-separated layer sizes (e.g., "5,5,1")')
    parser.add_argument('--hidden', choices=[a.value for a in Activation],
                        default=defaults.hidden.value, help='Hidden-layer activation')
    parser.add_argument('--lr', type=float, default=defaults.learning_rate,
                        help='SGD learning rate')
    parser.add_argument('--epochs', type=int, default=defaults.epochs,
                        help='Number of epochs')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for weight initialization')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log every epoch')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    sizes = tuple(int(s) for s in args.layers.split(',') if s.strip())
    if not sizes or sizes[-1] != 1:
        raise SystemExit("the last layer must have exactly one unit")
    config = TrainConfig(layer_sizes=sizes, hidden=Activation(args.hidden),
                         learning_rate=args.lr, epochs=args.epochs, seed=args.seed)
    _, history = fit(config)
    print(history.to_string(index=False))


if __name__ == "__main__":
    main()
