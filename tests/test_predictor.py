import pytest

from personality.predictor import describe, predict
from personality.preprocessing import UserInputs, normalize


def test_first_activation_layer_is_the_feature_vector(stub_model):
    inputs = UserInputs(time_alone=8, stage_fear=True, friends_circle=3)
    result = predict(stub_model, inputs)
    assert result.activations[0] == normalize(inputs)
    assert result.features == normalize(inputs)


def test_snapshot_has_one_entry_per_layer(stub_model):
    result = predict(stub_model, UserInputs())
    assert [len(layer) for layer in result.activations] == [7, 10, 5, 1]
    assert result.activations[-1][0] == pytest.approx(result.probability)


def test_prediction_is_idempotent(stub_model):
    inputs = UserInputs(post_frequency=2, drained_after_socializing=True)
    first = predict(stub_model, inputs)
    second = predict(stub_model, inputs)
    assert first == second


def test_label_and_confidence():
    assert describe(0.8) == ("Introvert", 0.8)
    label, conf = describe(0.3)
    assert label == "Extrovert"
    assert conf == pytest.approx(0.7)
    assert describe(0.5)[0] == "Extrovert"


def test_readout_format(stub_model):
    result = predict(stub_model, UserInputs())
    assert result.readout == f"{result.predicted_class} ({result.confidence:.1%})"
    assert result.class_index == (1 if result.predicted_class == "Introvert" else 0)
