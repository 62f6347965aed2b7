# neurogo

A small feedforward neural network written in plain Python with no
third-party dependencies, together with an interactive menu that loads
the Iris dataset, builds a network, trains it and reports how well it
does.

## Installing

    pip install .

To run the tests as well:

    pip install ".[test]"
    pytest

## The interactive menu

By default the menu reads `data/iris.csv` relative to the directory you
work in. The file needs a header row and then one row per sample: an id
column, four numeric features (sepal length, sepal width, petal length,
petal width) and a class label of `Iris-setosa`, `Iris-versicolor` or
`Iris-virginica`.

Start the menu with:

    neurogo

or point it at another file:

    neurogo --data path/to/iris.csv

It offers five choices, read as whitespace-separated tokens from
standard input:

1. **Load dataset** – reads the CSV, warns about records whose features
   fall outside the usual Iris ranges, shuffles the samples and splits
   them 80/20 into training and test sets, then prints a summary and the
   first three records. A missing file, a non-numeric feature or an
   unknown label is reported and nothing is loaded.
2. **Define architecture** – builds a network with layers `[4, 6, 3]`
   and a learning rate of 0.005.
3. **Train model** – 400 epochs in batches of 4, with class weights to
   even out imbalance and the learning rate multiplied by 0.3 after
   8 epochs without improvement. Each epoch's loss is printed.
4. **Evaluate** – prints test accuracy and loss, predictions for the
   first six test samples and a confusion matrix.
5. **Exit**

The menu also stops when its input ends. It can be driven from code
through `neurogo.cli.run(stdin, out, data_path, rng)`, which takes any
text streams and an optional `random.Random` for reproducible runs.

## Using the network directly

```python
import random

from neurogo.network import NeuralNet, argmax

net = NeuralNet([4, 6, 3], 0.005, random.Random(1))
loss = net.train([5.1, 3.5, 1.4, 0.2], [1.0, 0.0, 0.0])
probabilities = net.predict([5.1, 3.5, 1.4, 0.2])
print(argmax(probabilities))

accuracy, avg_loss = net.evaluate(
    [[5.1, 3.5, 1.4, 0.2]],
    [[1.0, 0.0, 0.0]],
)
```

Weights use He initialisation. Hidden layers use ReLU with 20% dropout
during `forward` and `train`; `predict` switches dropout off for the
call. The output layer uses softmax, and loss is cross entropy. Each
`train` call is one plain gradient-descent step with a small L2 penalty.
A wrong number of inputs or targets raises `ValueError`, as does
evaluating on an empty dataset.

The helpers `relu`, `relu_derivative`, `softmax` and `argmax` are in
`neurogo.network`.

The training loop used by the menu is `neurogo.training.train_model`,
which returns the average loss of every epoch; its epochs, batch size,
patience and decay factor can be changed. `neurogo.training.class_weights`
computes the per-class weights it applies.

`neurogo.cli` also offers `parse_records`, `split_data`, `load_dataset`
(raising `DatasetError` on bad input), `define_architecture` and
`confusion_matrix` for use outside the menu.

## What it does not do

Trained networks live only in memory: there is no way to save a model
to disk or load one back, so each session starts from a freshly
initialised network. The dataset is not bundled or downloaded; you
supply the CSV file yourself.