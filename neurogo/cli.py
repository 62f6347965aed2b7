"""Interactive menu for loading the Iris dataset, training and evaluating a network."""

from __future__ import annotations

import argparse
import csv
import os
import random
import sys
import time
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import TextIO

from .network import NeuralNet, argmax
from .training import _format_duration, train_model

DEFAULT_DATA_PATH = os.path.join("data", "iris.csv")
CLASS_NAMES = ("Setosa", "Versicolor", "Virginica")
_LABELS = {"Iris-setosa": 0, "Iris-versicolor": 1, "Iris-virginica": 2}
_FEATURE_RANGES = ((4.0, 8.0), (2.0, 4.5), (1.0, 7.0), (0.1, 2.5))
_SAMPLE_PREDICTIONS = 6


class DatasetError(Exception):
    """The dataset could not be read or holds invalid records."""


@dataclass
class Dataset:
    """Training and test halves of a labelled dataset."""

    train_inputs: list[list[float]] = field(default_factory=list)
    train_targets: list[list[float]] = field(default_factory=list)
    test_inputs: list[list[float]] = field(default_factory=list)
    test_targets: list[list[float]] = field(default_factory=list)


def parse_records(rows: Sequence[Sequence[str]]) -> tuple[list[list[float]], list[list[float]]]:
    """Turn CSV records (id, four features, label) into features and one-hot targets."""
    inputs: list[list[float]] = []
    targets: list[list[float]] = []
    for index, row in enumerate(rows):
        if len(row) < 6:
            raise DatasetError(f"Error reading CSV: record {index} has {len(row)} fields, expected 6")
        features = []
        for column, text in enumerate(row[1:5]):
            try:
                features.append(float(text))
            except ValueError as exc:
                raise DatasetError(
                    f"Error parsing feature {column} in record {index}: {exc}"
                ) from exc
        label = row[5]
        if label not in _LABELS:
            raise DatasetError(f"Error: Unknown class label '{label}' in record {index}")
        target = [0.0] * len(_LABELS)
        target[_LABELS[label]] = 1.0
        inputs.append(features)
        targets.append(target)
    return inputs, targets


def _unusual(features: Sequence[float]) -> bool:
    return any(not low <= value <= high for value, (low, high) in zip(features, _FEATURE_RANGES))


def _format_floats(values: Sequence[float]) -> str:
    parts = []
    for value in values:
        text = repr(float(value))
        parts.append(text[:-2] if text.endswith(".0") else text)
    return "[" + " ".join(parts) + "]"


def split_data(
    inputs: Sequence[Sequence[float]],
    targets: Sequence[Sequence[float]],
    train_ratio: float,
    rng: random.Random | None = None,
) -> tuple[list, list, list, list]:
    """Shuffle the samples and split them into training and test sets."""
    if len(inputs) != len(targets):
        raise ValueError("inputs and targets differ in length")
    if rng is None:
        rng = random.Random()
    order = list(range(len(inputs)))
    rng.shuffle(order)
    split = int(len(inputs) * train_ratio)
    head, tail = order[:split], order[split:]
    return (
        [inputs[i] for i in head],
        [targets[i] for i in head],
        [inputs[i] for i in tail],
        [targets[i] for i in tail],
    )


def load_dataset(
    path: str = DEFAULT_DATA_PATH,
    train_ratio: float = 0.8,
    rng: random.Random | None = None,
    out: TextIO | None = None,
) -> Dataset:
    """Read an Iris CSV file, report on it and split it into train and test sets."""
    if out is None:
        out = sys.stdout
    try:
        with open(path, newline="", encoding="utf-8") as handle:
            rows = list(csv.reader(handle))
    except OSError as exc:
        raise DatasetError(f"Error opening file: {exc}") from exc
    except csv.Error as exc:
        raise DatasetError(f"Error reading CSV: {exc}") from exc

    inputs, targets = parse_records(rows[1:])
    if not inputs:
        raise DatasetError("Error reading CSV: no records after the header")
    for index, features in enumerate(inputs):
        if _unusual(features):
            print(
                f"Warning: Unusual feature values in record {index}: {_format_floats(features)}",
                file=out,
            )

    dataset = Dataset(*split_data(inputs, targets, train_ratio, rng))

    print("Dataset loaded successfully:", file=out)
    print(f"- Total samples: {len(inputs)}", file=out)
    print(f"- Training samples: {len(dataset.train_inputs)}", file=out)
    print(f"- Test samples: {len(dataset.test_inputs)}", file=out)
    print(
        f"- Input features: {len(inputs[0])} "
        "(sepal length, sepal width, petal length, petal width)",
        file=out,
    )
    print(f"- Output classes: {len(targets[0])} (Setosa, Versicolor, Virginica)", file=out)

    print("\nSample of first 3 records:", file=out)
    for number, (features, target) in enumerate(zip(inputs[:3], targets[:3]), start=1):
        shown = ", ".join(f"{value:.1f}" for value in features)
        print(
            f"Record {number}: Features: [{shown}], Class: {CLASS_NAMES[argmax(target)]}",
            file=out,
        )
    return dataset


def define_architecture(rng: random.Random | None = None) -> NeuralNet:
    """Build the 4-6-3 network used for the Iris data."""
    return NeuralNet([4, 6, 3], 0.005, rng)


def confusion_matrix(
    net: NeuralNet,
    inputs: Sequence[Sequence[float]],
    targets: Sequence[Sequence[float]],
) -> list[list[int]]:
    """Count predictions per (actual class, predicted class) pair."""
    size = len(CLASS_NAMES)
    matrix = [[0] * size for _ in range(size)]
    for sample, target in zip(inputs, targets):
        matrix[argmax(target)][argmax(net.predict(sample))] += 1
    return matrix


def _evaluate(net: NeuralNet, dataset: Dataset, out: TextIO) -> None:
    print("Evaluating model...", file=out)
    started = time.perf_counter()
    accuracy, loss = net.evaluate(dataset.test_inputs, dataset.test_targets)
    elapsed = _format_duration(time.perf_counter() - started)
    print(
        f"Test Accuracy: {accuracy * 100:.2f}%, Loss: {loss:.4f}, Time: {elapsed}\n",
        file=out,
    )

    print("Sample Predictions:", file=out)
    print("-------------------", file=out)
    samples = zip(dataset.test_inputs, dataset.test_targets)
    for _, (sample, target) in zip(range(_SAMPLE_PREDICTIONS), samples):
        prediction = net.predict(sample)
        actual = CLASS_NAMES[argmax(target)]
        predicted_index = argmax(prediction)
        predicted = CLASS_NAMES[predicted_index]
        print(f"Sample (Class: {actual}):", file=out)
        print(f"  Features: {_format_floats(sample)}", file=out)
        print(
            f"  Predicted: {predicted} (confidence: {prediction[predicted_index] * 100:.2f}%)",
            file=out,
        )
        print(f"  Actual: {actual}", file=out)
        print(f"  Correct: {str(predicted == actual).lower()}\n", file=out)

    print("Confusion Matrix:", file=out)
    print("----------------", file=out)
    matrix = confusion_matrix(net, dataset.test_inputs, dataset.test_targets)
    print("   Predicted      Setosa  Versicolor   Virginica", file=out)
    print("Actual", file=out)
    for name, row in zip(CLASS_NAMES, matrix):
        print(f"{name:<10} {row[0]:10d} {row[1]:10d} {row[2]:10d}", file=out)


def _tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def run(
    stdin: TextIO | None = None,
    out: TextIO | None = None,
    data_path: str = DEFAULT_DATA_PATH,
    rng: random.Random | None = None,
) -> int:
    """Run the interactive menu until the user exits or input ends."""
    if stdin is None:
        stdin = sys.stdin
    if out is None:
        out = sys.stdout
    if rng is None:
        rng = random.Random()

    tokens = _tokens(stdin)
    dataset: Dataset | None = None
    net: NeuralNet | None = None

    while True:
        print("\nWelcome to NeuralNet CLI 🚀", file=out)
        print("1. Load dataset", file=out)
        print("2. Define architecture", file=out)
        print("3. Train model", file=out)
        print("4. Evaluate", file=out)
        print("5. Exit", file=out)
        print("\nEnter choice: ", end="", file=out)

        token = next(tokens, None)
        if token is None:
            print(file=out)
            return 0
        try:
            choice = int(token)
        except ValueError:
            choice = 0

        if choice == 1:
            print(f"Loading dataset ({os.path.basename(data_path)})...", file=out)
            try:
                dataset = load_dataset(data_path, rng=rng, out=out)
            except DatasetError as exc:
                print(exc, file=out)
                dataset = None
        elif choice == 2:
            if dataset is None or not dataset.train_inputs:
                print("Please load dataset first", file=out)
                continue
            net = define_architecture(rng)
            print(f"Architecture defined: {_format_ints(net.layer_sizes)}", file=out)
        elif choice == 3:
            if net is not None and dataset is not None and dataset.train_inputs:
                train_model(net, dataset.train_inputs, dataset.train_targets, rng=rng, out=out)
            else:
                print("Please load dataset and define architecture first", file=out)
        elif choice == 4:
            if net is not None and dataset is not None and dataset.test_inputs:
                _evaluate(net, dataset, out)
            else:
                print("Please load dataset and train model first", file=out)
        elif choice == 5:
            print("Exiting...", file=out)
            return 0
        else:
            print("Invalid choice", file=out)


def _format_ints(values: Sequence[int]) -> str:
    return "[" + " ".join(str(value) for value in values) + "]"


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        prog="neurogo",
        description="Interactive neural network trainer for the Iris dataset.",
    )
    parser.add_argument(
        "--data",
        default=DEFAULT_DATA_PATH,
        help="path of the Iris CSV file (default: %(default)s)",
    )
    args = parser.parse_args(argv)
    return run(data_path=args.data)


if __name__ == "__main__":
    raise SystemExit(main())