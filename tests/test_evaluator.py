import math

import numpy as np
import pytest

from personality.dataset import Dataset
from personality.evaluator import ConfusionCounts, confusion_counts, evaluate, metrics_from_counts

from conftest import FixedModel


def test_closed_form_metrics():
    m = metrics_from_counts(ConfusionCounts(tp=3, fp=1, tn=4, fn=2))
    assert m.accuracy == pytest.approx(0.7)
    assert m.precision == pytest.approx(0.75)
    assert m.recall == pytest.approx(0.6)
    assert m.f1 == pytest.approx(2 / 3, abs=1e-3)


def test_threshold_is_strictly_greater():
    counts = confusion_counts([1, 0, 1, 0], [0.5, 0.5, 0.51, 0.49])
    assert counts == ConfusionCounts(tp=1, fp=0, tn=2, fn=1)


def test_no_positive_predictions_gives_zero_not_nan():
    m = metrics_from_counts(ConfusionCounts(tp=0, fp=0, tn=5, fn=3))
    assert m.precision == 0.0
    assert m.recall == 0.0
    assert m.f1 == 0.0
    assert m.accuracy == pytest.approx(5 / 8)


def test_empty_validation_set_gives_zeros():
    m = metrics_from_counts(ConfusionCounts(0, 0, 0, 0))
    assert (m.accuracy, m.precision, m.recall, m.f1) == (0.0, 0.0, 0.0, 0.0)


def test_evaluate_tallies_validation_partition():
    labels = np.array([1, 1, 1, 1, 1, 0, 0, 0, 0, 0])
    probs = [0.9, 0.8, 0.7, 0.2, 0.1, 0.6, 0.3, 0.2, 0.1, 0.05]
    validation = Dataset(np.zeros((10, 7), dtype=np.float32), labels)
    m = evaluate(FixedModel(probs), validation, validation_loss=0.42)
    assert m.counts == ConfusionCounts(tp=3, fp=1, tn=4, fn=2)
    assert m.accuracy == pytest.approx(0.7)
    assert m.validation_loss == 0.42


def test_confusion_matrix_layout():
    matrix = ConfusionCounts(tp=3, fp=1, tn=4, fn=2).as_matrix()
    assert matrix.tolist() == [[4, 1], [2, 3]]


def test_default_validation_loss_is_nan():
    assert math.isnan(metrics_from_counts(ConfusionCounts(1, 0, 1, 0)).validation_loss)
