"""
evaluator.py
────────────
Confusion-matrix metrics on the validation partition.

A prediction is positive (Introvert) when p > threshold. Any metric whose
denominator is zero is reported as 0.0 rather than NaN.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .dataset import Dataset
from .model_manager import PersonalityModel

logger = logging.getLogger(__name__)

DECISION_THRESHOLD = 0.5


@dataclass(frozen=True)
class ConfusionCounts:
    tp: int
    fp: int
    tn: int
    fn: int

    @property
    def total(self) -> int:
        return self.tp + self.fp + self.tn + self.fn

    def as_matrix(self) -> np.ndarray:
        """[[TN, FP], [FN, TP]] with rows = actual, columns = predicted."""
        return np.array([[self.tn, self.fp], [self.fn, self.tp]])


@dataclass(frozen=True)
class Metrics:
    accuracy: float
    precision: float
    recall: float
    f1: float
    validation_loss: float
    counts: ConfusionCounts


def _ratio(num: float, den: float) -> float:
    return float(num) / den if den else 0.0


def confusion_counts(y_true: Sequence[int], y_prob: Sequence[float],
                     threshold: float = DECISION_THRESHOLD) -> ConfusionCounts:
    y_true = np.asarray(y_true).astype(int)
    y_pred = (np.asarray(y_prob, dtype=float) > threshold).astype(int)
    if y_true.shape != y_pred.shape:
        raise ValueError(f"Label/prediction length mismatch: {y_true.shape} vs {y_pred.shape}")
    return ConfusionCounts(
        tp=int(np.sum((y_pred == 1) & (y_true == 1))),
        fp=int(np.sum((y_pred == 1) & (y_true == 0))),
        tn=int(np.sum((y_pred == 0) & (y_true == 0))),
        fn=int(np.sum((y_pred == 0) & (y_true == 1))),
    )


def metrics_from_counts(counts: ConfusionCounts,
                        validation_loss: float = float("nan")) -> Metrics:
    precision = _ratio(counts.tp, counts.tp + counts.fp)
    recall = _ratio(counts.tp, counts.tp + counts.fn)
    return Metrics(
        accuracy=_ratio(counts.tp + counts.tn, counts.total),
        precision=precision,
        recall=recall,
        f1=_ratio(2 * precision * recall, precision + recall),
        validation_loss=validation_loss,
        counts=counts,
    )


def evaluate(model: PersonalityModel, validation: Dataset,
             validation_loss: float = float("nan"),
             threshold: float = DECISION_THRESHOLD) -> Metrics:
    """Run *model* once over *validation* and compute the metrics snapshot."""
    probs = model.predict_batch(validation.features)
    counts = confusion_counts(validation.labels, probs, threshold)
    logger.info(
        "Validation confusion: TP=%d FP=%d TN=%d FN=%d",
        counts.tp, counts.fp, counts.tn, counts.fn,
    )
    return metrics_from_counts(counts, validation_loss)
