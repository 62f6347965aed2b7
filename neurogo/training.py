"""Mini-batch training loop with class weighting and learning-rate decay on plateaus."""

from __future__ import annotations

import math
import random
import sys
import time
from collections.abc import Sequence
from typing import TextIO

from .network import NeuralNet


def _format_duration(seconds: float) -> str:
    """Render an elapsed time with a unit suited to its size."""
    if seconds < 1e-6:
        return f"{seconds * 1e9:.0f}ns"
    if seconds < 1e-3:
        return f"{seconds * 1e6:.3f}µs"
    if seconds < 1:
        return f"{seconds * 1e3:.3f}ms"
    return f"{seconds:.3f}s"


def class_weights(targets: Sequence[Sequence[float]]) -> list[float]:
    """Weight each class by how much rarer it is than the most frequent class.

    A class with no samples gets an infinite weight (or NaN when no class has any).
    """
    if not targets:
        raise ValueError("cannot compute class weights without targets")
    counts = [0] * len(targets[0])
    for target in targets:
        for index, value in enumerate(target[: len(counts)]):
            if value == 1:
                counts[index] += 1
    peak = float(max(counts))
    return [peak / count if count else (math.inf if peak else math.nan) for count in counts]


def train_model(
    net: NeuralNet,
    inputs: Sequence[Sequence[float]],
    targets: Sequence[Sequence[float]],
    epochs: int = 400,
    batch_size: int = 4,
    patience: int = 8,
    lr_factor: float = 0.3,
    rng: random.Random | None = None,
    out: TextIO | None = None,
) -> list[float]:
    """Train ``net`` and return the average loss of every epoch.

    The learning rate is multiplied by ``lr_factor`` whenever the loss has not
    improved for ``patience`` consecutive epochs.
    """
    if not inputs:
        raise ValueError("cannot train on an empty dataset")
    if len(inputs) != len(targets):
        raise ValueError("inputs and targets differ in length")
    if batch_size < 1:
        raise ValueError("batch size must be at least 1")
    if out is None:
        out = sys.stdout
    if rng is None:
        rng = random.Random()

    print("Training model...", file=out)
    weights = class_weights(targets)
    weighted = [[value * weight for value, weight in zip(target, weights)] for target in targets]

    order = list(range(len(inputs)))
    best_loss = math.inf
    stale_epochs = 0
    history: list[float] = []

    for epoch in range(1, epochs + 1):
        started = time.perf_counter()
        rng.shuffle(order)

        total_loss = 0.0
        for begin in range(0, len(order), batch_size):
            batch = order[begin : begin + batch_size]
            batch_loss = sum(net.train(inputs[i], weighted[i]) for i in batch)
            total_loss += batch_loss / len(batch)

        average = total_loss / len(inputs)
        history.append(average)
        elapsed = _format_duration(time.perf_counter() - started)
        print(f"Epoch {epoch}: Loss: {average:.4f}, Time: {elapsed}", file=out)

        if average < best_loss:
            best_loss = average
            stale_epochs = 0
        else:
            stale_epochs += 1
            if stale_epochs >= patience:
                net.learning_rate *= lr_factor
                print(f"Reducing learning rate to {net.learning_rate:.6f}", file=out)
                stale_epochs = 0

    return history