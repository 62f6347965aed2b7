import math
import random

import pytest

from neurogo.network import NeuralNet, argmax, relu, relu_derivative, softmax


def make_net(sizes=(4, 6, 3), lr=0.005, seed=1):
    return NeuralNet(list(sizes), lr, random.Random(seed))


def test_relu():
    assert relu(2.5) == 2.5
    assert relu(-1.0) == 0.0
    assert relu(0.0) == 0.0


def test_relu_derivative():
    assert relu_derivative(3.0) == 1.0
    assert relu_derivative(0.0) == 0.0
    assert relu_derivative(-2.0) == 0.0


def test_softmax_sums_to_one_and_keeps_order():
    out = softmax([1.0, 2.0, 3.0])
    assert sum(out) == pytest.approx(1.0)
    assert out[0] < out[1] < out[2]


def test_softmax_uniform_for_equal_inputs():
    out = softmax([5.0, 5.0, 5.0, 5.0])
    assert out == pytest.approx([0.25, 0.25, 0.25, 0.25])


def test_softmax_shift_invariant_and_stable():
    a = softmax([1.0, 2.0, 3.0])
    b = softmax([1001.0, 1002.0, 1003.0])
    assert a == pytest.approx(b)


def test_softmax_empty_raises():
    with pytest.raises(ValueError):
        softmax([])


def test_argmax_picks_first_of_ties():
    assert argmax([0.1, 0.7, 0.7, 0.2]) == 1
    assert argmax([3.0, 1.0]) == 0
    assert argmax([]) == 0


def test_shapes_follow_layer_sizes():
    net = make_net((4, 6, 3))
    assert net.layer_sizes == [4, 6, 3]
    assert [len(w) for w in net.weights] == [4, 6]
    assert [len(w[0]) for w in net.weights] == [6, 3]
    assert [len(b) for b in net.biases] == [6, 3]
    assert net.dropout_rate == 0.2
    assert net.learning_rate == 0.005


def test_same_seed_same_weights():
    first = make_net(seed=7)
    second = make_net(seed=7)
    other = make_net(seed=8)
    assert first.weights == second.weights
    assert first.biases == second.biases
    assert [len(w) for w in first.weights] == [4, 6]
    assert first.weights != other.weights


def test_invalid_architecture():
    with pytest.raises(ValueError):
        NeuralNet([4], 0.1, random.Random(0))
    with pytest.raises(ValueError):
        NeuralNet([4, 0, 3], 0.1, random.Random(0))


def test_forward_wrong_input_length():
    net = make_net()
    with pytest.raises(ValueError):
        net.forward([1.0, 2.0])


def test_predict_is_distribution_and_restores_dropout():
    net = make_net()
    out = net.predict([5.1, 3.5, 1.4, 0.2])
    assert len(out) == 3
    assert sum(out) == pytest.approx(1.0)
    assert all(p > 0 for p in out)
    assert net.dropout_rate == 0.2


def test_predict_is_deterministic():
    net = make_net()
    sample = [6.0, 2.9, 4.5, 1.5]
    first = list(net.predict(sample))
    second = list(net.predict(sample))
    assert first == pytest.approx(second)
    assert len(first) == 3
    assert sum(first) == pytest.approx(1.0)


def test_full_dropout_gives_softmax_of_output_biases():
    net = make_net()
    net.dropout_rate = 1.0
    out = net.forward([5.0, 3.0, 1.5, 0.3])
    assert all(v == 0.0 for v in net.layers[1])
    assert out == pytest.approx(softmax(net.biases[-1]))


def test_train_returns_cross_entropy_of_pre_update_output():
    net = make_net()
    net.dropout_rate = 0.0
    sample = [5.1, 3.5, 1.4, 0.2]
    before = net.predict(sample)
    loss = net.train(sample, [0.0, 1.0, 0.0])
    assert loss == pytest.approx(-math.log(before[1] + 1e-10))


def test_train_changes_weights():
    net = make_net()
    net.dropout_rate = 0.0
    old = [row[:] for row in net.weights[-1]]
    net.train([5.1, 3.5, 1.4, 0.2], [1.0, 0.0, 0.0])
    assert net.weights[-1] != old


def test_train_wrong_target_length():
    net = make_net()
    with pytest.raises(ValueError):
        net.train([1.0, 2.0, 3.0, 4.0], [1.0, 0.0])


def test_learns_simple_mapping():
    net = NeuralNet([2, 8, 2], 0.05, random.Random(3))
    net.dropout_rate = 0.0
    inputs = [[1.0, 0.0], [0.0, 1.0]]
    targets = [[1.0, 0.0], [0.0, 1.0]]
    _, loss_before = net.evaluate(inputs, targets)
    for _ in range(500):
        for x, t in zip(inputs, targets):
            net.train(x, t)
    accuracy, loss_after = net.evaluate(inputs, targets)
    assert accuracy == 1.0
    assert loss_after < loss_before


def test_evaluate_accuracy_matches_predictions():
    net = make_net()
    inputs = [[5.1, 3.5, 1.4, 0.2], [6.0, 2.9, 4.5, 1.5], [6.9, 3.1, 5.4, 2.1]]
    targets = [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]
    accuracy, loss = net.evaluate(inputs, targets)
    hits = sum(argmax(net.predict(x)) == argmax(t) for x, t in zip(inputs, targets))
    assert accuracy == pytest.approx(hits / 3)
    assert loss > 0


def test_evaluate_empty_raises():
    with pytest.raises(ValueError):
        make_net().evaluate([], [])