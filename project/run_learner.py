"""
Be sure you have minilearn installed in you Virtual Env.
>>> pip install -Ue .

Trains a two layer network built from learners on a toy 2D dataset.
"""

import random
import time

import numpy as np

import minilearn
from minilearn import dual, operators


def RParam(size: int) -> np.ndarray:
    """Make a random parameter vector in [-1, 1)."""
    return 2 * (np.array([random.random() for _ in range(size)]) - 0.5)


def Linear(in_size: int, out_size: int, activation=dual.sigmoid):
    """Parameterized function for a dense layer.

    The parameter is the flattened `out_size x in_size` weights followed by
    the `out_size` biases. Written with `operators.dot` so that it runs on
    floats and on duals alike.
    """

    def forward(p, a):
        a = list(a)
        out = []
        for k in range(out_size):
            w = [p[k * in_size + j] for j in range(in_size)]
            b = p[in_size * out_size + k]
            out.append(activation(operators.dot(w, a) + b))
        return out

    return forward, in_size * out_size + out_size


class Network:
    def __init__(self, hidden_layers: int, rate: float):
        error = minilearn.quadratic_error()
        layer1, size1 = Linear(2, hidden_layers)
        layer2, size2 = Linear(hidden_layers, 1)
        self.learner = minilearn.compose(
            minilearn.param_to_learn_dual(rate, error, layer2),
            minilearn.param_to_learn_dual(rate, error, layer1),
        )
        self.sizes = (size1, size2)

    def init_params(self):
        return (RParam(self.sizes[0]), RParam(self.sizes[1]))

    def forward(self, p, x):
        return self.learner.i(p, x)


def simple_dataset(N: int):
    """Points in the unit square labelled by which half they lie in."""
    X = [(random.random(), random.random()) for _ in range(N)]
    y = [1.0 if x_1 < 0.5 else 0.0 for x_1, _ in X]
    return X, y


def default_log_fn(epoch, loss, correct, losses, time_per_epoch):
    print(f"Epoch {epoch}, loss {loss}, correct {correct}, time per epoch {time_per_epoch}")


class LearnerTrain:
    def __init__(self, hidden_layers: int):
        self.hidden_layers = hidden_layers

    def run_one(self, x):
        return self.model.forward(self.params, list(x))

    def train(self, data, learning_rate: float, max_epochs: int = 500, log_fn=default_log_fn):
        """Train the network one example at a time with quadratic error."""
        self.model = Network(self.hidden_layers, learning_rate)
        self.params = self.model.init_params()
        X, y = data

        losses = []
        times = []
        for epoch in range(1, max_epochs + 1):
            start_time = time.time()
            total_loss = 0.0
            correct = 0
            for x, label in zip(X, y):
                out = self.model.forward(self.params, list(x))
                total_loss += 0.5 * (out[0] - label) ** 2
                correct += int((out[0] > 0.5) == (label > 0.5))
                self.params = self.model.learner.u(self.params, list(x), [label])
            losses.append(total_loss)
            times.append(time.time() - start_time)

            if epoch % 10 == 0 or epoch == max_epochs:
                log_fn(epoch, total_loss, correct, losses, np.mean(times[-10:]))


if __name__ == "__main__":
    PTS = 50
    HIDDEN = 4
    RATE = 0.5
    data = simple_dataset(PTS)
    LearnerTrain(HIDDEN).train(data, RATE, max_epochs=100)
