"""A small feed-forward neural network with ReLU hidden layers and a softmax output."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence

_EPSILON = 1e-10
_L2_LAMBDA = 0.0001
_DEFAULT_DROPOUT = 0.2


def relu(x: float) -> float:
    """Rectified linear unit."""
    return x if x > 0 else 0.0


def relu_derivative(x: float) -> float:
    """Derivative of the rectified linear unit."""
    return 1.0 if x > 0 else 0.0


def softmax(xs: Sequence[float]) -> list[float]:
    """Return the softmax of ``xs``, shifted by the maximum for numerical stability."""
    if not xs:
        raise ValueError("softmax of an empty sequence")
    peak = max(xs)
    exps = [math.exp(x - peak) for x in xs]
    total = sum(exps)
    return [e / total for e in exps]


def argmax(values: Sequence[float]) -> int:
    """Index of the first largest value; 0 for an empty sequence."""
    best = 0
    for i, v in enumerate(values):
        if v > values[best]:
            best = i
    return best


def _cross_entropy(output: Sequence[float], target: Sequence[float]) -> float:
    return -sum(t * math.log(o + _EPSILON) for o, t in zip(output, target) if t > 0)


class NeuralNet:
    """Feed-forward network trained one sample at a time by backpropagation."""

    def __init__(
        self,
        layer_sizes: Sequence[int],
        learning_rate: float,
        rng: random.Random | None = None,
    ) -> None:
        if len(layer_sizes) < 2:
            raise ValueError("a network needs at least an input and an output layer")
        if any(size <= 0 for size in layer_sizes):
            raise ValueError("layer sizes must be positive")
        self.rng = rng if rng is not None else random.Random()
        self.learning_rate = learning_rate
        self.dropout_rate = _DEFAULT_DROPOUT
        self.layers: list[list[float]] = [[0.0] * size for size in layer_sizes]
        self.weights: list[list[list[float]]] = []
        self.biases: list[list[float]] = []
        for fan_in, fan_out in zip(layer_sizes, layer_sizes[1:]):
            # He initialisation: weights ~ N(0, sqrt(2 / fan_in)).
            scale = math.sqrt(2.0 / fan_in)
            self.weights.append(
                [[self.rng.gauss(0.0, 1.0) * scale for _ in range(fan_out)] for _ in range(fan_in)]
            )
            self.biases.append([self.rng.gauss(0.0, 1.0) * 0.01 for _ in range(fan_out)])

    @property
    def layer_sizes(self) -> list[int]:
        return [len(layer) for layer in self.layers]

    def _weighted_sums(self, index: int) -> list[float]:
        source = self.layers[index]
        weights = self.weights[index]
        return [
            bias + sum(value * row[j] for value, row in zip(source, weights))
            for j, bias in enumerate(self.biases[index])
        ]

    def forward(self, inputs: Sequence[float]) -> list[float]:
        """Propagate ``inputs`` through the network and return the output probabilities."""
        if len(inputs) != len(self.layers[0]):
            raise ValueError(
                f"expected {len(self.layers[0])} inputs, got {len(inputs)}"
            )
        self.layers[0] = [float(x) for x in inputs]

        last = len(self.layers) - 1
        for i in range(last - 1):
            activations = []
            for total in self._weighted_sums(i):
                value = relu(total)
                if self.rng.random() < self.dropout_rate:
                    value = 0.0
                activations.append(value)
            self.layers[i + 1] = activations

        self.layers[last] = softmax(self._weighted_sums(last - 1))
        return list(self.layers[last])

    def train(self, inputs: Sequence[float], target: Sequence[float]) -> float:
        """Run one backpropagation step and return the cross-entropy loss."""
        output = self.forward(inputs)
        if len(target) != len(output):
            raise ValueError(f"expected {len(output)} targets, got {len(target)}")

        count = len(self.layers)
        deltas: list[list[float]] = [[] for _ in range(count)]
        deltas[-1] = [o - t for o, t in zip(output, target)]
        for layer in range(count - 2, 0, -1):
            after = deltas[layer + 1]
            deltas[layer] = [
                sum(d * w for d, w in zip(after, row)) * relu_derivative(value)
                for value, row in zip(self.layers[layer], self.weights[layer])
            ]

        rate = self.learning_rate
        for layer in range(count - 1):
            after = deltas[layer + 1]
            for value, row in zip(self.layers[layer], self.weights[layer]):
                for j, delta in enumerate(after):
                    row[j] -= rate * (delta * value + _L2_LAMBDA * row[j])
            biases = self.biases[layer]
            for j, delta in enumerate(after):
                biases[j] -= rate * delta

        return _cross_entropy(output, target)

    def predict(self, inputs: Sequence[float]) -> list[float]:
        """Forward pass with dropout switched off."""
        saved = self.dropout_rate
        self.dropout_rate = 0.0
        try:
            return self.forward(inputs)
        finally:
            self.dropout_rate = saved

    def evaluate(
        self, inputs: Sequence[Sequence[float]], targets: Sequence[Sequence[float]]
    ) -> tuple[float, float]:
        """Return ``(accuracy, average cross-entropy loss)`` over a dataset."""
        if not inputs:
            raise ValueError("cannot evaluate on an empty dataset")
        if len(inputs) != len(targets):
            raise ValueError("inputs and targets differ in length")
        correct = 0
        total_loss = 0.0
        for sample, target in zip(inputs, targets):
            prediction = self.predict(sample)
            if argmax(prediction) == argmax(target):
                correct += 1
            total_loss += _cross_entropy(prediction, target)
        return correct / len(inputs), total_loss / len(inputs)