import numpy as np
import pytest

from personality.model_manager import PersonalityModel

HEADER = (
    "Time_spent_Alone,Stage_fear,Social_event_attendance,Going_outside,"
    "Drained_after_socializing,Friends_circle_size,Post_frequency,Personality"
)

INTROVERT_ROW = "9,Yes,1,1,Yes,2,1,Introvert"
EXTROVERT_ROW = "1,No,9,6,No,13,8,Extrovert"


def personality_rows(n):
    """Alternating introvert / extrovert rows with small variations."""
    rows = []
    for i in range(n):
        if i % 2 == 0:
            rows.append(f"{8 + i % 4},Yes,{i % 3},{1 + i % 2},Yes,{2 + i % 3},{i % 3},Introvert")
        else:
            rows.append(f"{i % 3},No,{7 + i % 4},{5 + i % 3},No,{10 + i % 6},{6 + i % 5},Extrovert")
    return rows


@pytest.fixture
def write_csv(tmp_path):
    def _write(rows, header=HEADER, name="personality.csv"):
        path = tmp_path / name
        path.write_text("\n".join([header] + list(rows)) + "\n")
        return str(path)
    return _write


class StubModel(PersonalityModel):
    """Deterministic numpy forward pass with fixed weights."""

    def __init__(self, sizes=(7, 10, 5, 1), seed=3):
        rng = np.random.default_rng(seed)
        self.kernels = [rng.normal(size=(a, b)) for a, b in zip(sizes[:-1], sizes[1:])]
        self.biases = [rng.normal(size=b) for b in sizes[1:]]
        self.calls = 0

    def _forward(self, x):
        outputs = []
        for i, (w, b) in enumerate(zip(self.kernels, self.biases)):
            z = x @ w + b
            x = 1 / (1 + np.exp(-z)) if i == len(self.kernels) - 1 else np.maximum(z, 0)
            outputs.append(x)
        return outputs

    def predict(self, features):
        self.calls += 1
        return float(self._forward(np.asarray(features, dtype=float))[-1][0])

    def predict_batch(self, features):
        return self._forward(np.asarray(features, dtype=float))[-1][:, 0]

    def predict_activations(self, features):
        outs = self._forward(np.asarray(features, dtype=float))
        return (tuple(features),) + tuple(tuple(float(v) for v in o) for o in outs)

    def layer_weights(self):
        return [k.copy() for k in self.kernels]


class FixedModel(PersonalityModel):
    """Returns canned probabilities for predict_batch."""

    def __init__(self, probabilities):
        self.probabilities = np.asarray(probabilities, dtype=float)

    def predict(self, features):
        return float(self.probabilities[0])

    def predict_batch(self, features):
        return self.probabilities[: len(features)]

    def predict_activations(self, features):
        return (tuple(features), (0.0,) * 10, (0.0,) * 5, (self.predict(features),))


@pytest.fixture
def stub_model():
    return StubModel()
