import dataclasses
import warnings

import numpy as np
import pytest

from personality.dataset import DatasetError, load_dataset
from personality.model_manager import (
    DEFAULT_CONFIG, KerasPersonalityModel, build_model, describe_architecture, train_model,
)
from personality.pipeline import run_pipeline
from personality.preprocessing import UserInputs, normalize

from conftest import HEADER, personality_rows


@pytest.fixture(scope="module")
def trained(tmp_path_factory):
    path = tmp_path_factory.mktemp("data") / "personality.csv"
    path.write_text("\n".join([HEADER] + personality_rows(60)) + "\n")
    seen = []
    result = run_pipeline(str(path), on_epoch=seen.append)
    return result, seen


def test_architecture():
    model = build_model()
    assert [layer.units for layer in model.layers] == [10, 5, 1]
    assert model.count_params() == 141
    assert [row["parameters"] for row in describe_architecture()] == [80, 55, 6]


def test_fifty_epochs_recorded_in_order(trained):
    result, seen = trained
    history = result.run.history
    assert len(history) == 50
    assert [e.epoch for e in history] == list(range(50))
    assert seen == history
    assert all(0.0 <= e.accuracy <= 1.0 for e in history)
    assert result.metrics.validation_loss == history[-1].val_loss


def test_split_sizes(trained):
    result, _ = trained
    assert len(result.run.train) == 48
    assert len(result.run.validation) == 12


def test_activation_snapshot(trained):
    result, _ = trained
    model = result.run.model
    features = normalize(UserInputs())
    snapshot = model.predict_activations(features)
    assert len(snapshot) == 4
    assert snapshot[0] == features
    assert [len(layer) for layer in snapshot] == [7, 10, 5, 1]
    assert snapshot[-1][0] == pytest.approx(model.predict(features), abs=1e-6)


def test_prediction_does_not_change_weights(trained):
    result, _ = trained
    model = result.run.model
    before = [w.copy() for w in model.layer_weights()]
    features = normalize(UserInputs(time_alone=10, stage_fear=True))
    first = model.predict(features)
    model.predict_batch(result.dataset.features)
    assert model.predict(features) == first
    for a, b in zip(before, model.layer_weights()):
        np.testing.assert_array_equal(a, b)


def test_layer_weights_shapes(trained):
    result, _ = trained
    assert [w.shape for w in result.run.model.layer_weights()] == [(7, 10), (10, 5), (5, 1)]


def test_wrong_feature_count_rejected(trained):
    result, _ = trained
    with pytest.raises(ValueError):
        result.run.model.predict((0.5,) * 6)


def test_short_config_runs_requested_epochs(write_csv):
    ds = load_dataset(write_csv(personality_rows(10)))
    run = train_model(ds, dataclasses.replace(DEFAULT_CONFIG, epochs=3))
    assert [e.epoch for e in run.history] == [0, 1, 2]
    assert isinstance(run.model, KerasPersonalityModel)


def test_single_row_cannot_train(write_csv):
    ds = load_dataset(write_csv(personality_rows(1)))
    with pytest.raises(DatasetError):
        train_model(ds)


def test_activation_pass_matches_input_structure(trained):
    result, _ = trained
    features = normalize(UserInputs())
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        result.run.model.predict_activations(features)
    assert not [w for w in caught if "structure of `inputs`" in str(w.message)
                or "Expected:" in str(w.message)]
