"""
predictor.py
────────────
Pure inference logic. Depends on preprocessing and the model interface.
No training, no visualisation, no session state.

Public functions:
    predict(model, inputs)     -> PredictionResult
    describe(probability)      -> (label, confidence)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .evaluator import DECISION_THRESHOLD
from .model_manager import ActivationSnapshot, PersonalityModel
from .preprocessing import CLASS_LABELS, FeatureVector, UserInputs, normalize


# ──────────────────────────────────────────────
# Result type
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class PredictionResult:
    features: FeatureVector
    probability: float                   # sigmoid output, P(Introvert)
    predicted_class: str
    class_index: int
    confidence: float                    # probability of the predicted class
    activations: ActivationSnapshot      # input layer + every dense layer

    @property
    def readout(self) -> str:
        return f"{self.predicted_class} ({self.confidence:.1%})"


def describe(probability: float) -> Tuple[str, float]:
    """Map P(Introvert) to the displayed class and its confidence."""
    if probability > DECISION_THRESHOLD:
        return CLASS_LABELS[1], probability
    return CLASS_LABELS[0], 1.0 - probability


# ──────────────────────────────────────────────
# Main predict function
# ──────────────────────────────────────────────

def predict(model: PersonalityModel, inputs: UserInputs) -> PredictionResult:
    """
    Run both forward passes for the current control values.

    The first entry of the activation snapshot is the FeatureVector itself,
    unchanged.
    """
    features = normalize(inputs)
    probability = model.predict(features)
    activations = model.predict_activations(features)
    activations = (features,) + tuple(activations[1:])

    label, confidence = describe(probability)
    return PredictionResult(
        features=features,
        probability=probability,
        predicted_class=label,
        class_index=1 if label == CLASS_LABELS[1] else 0,
        confidence=confidence,
        activations=activations,
    )
