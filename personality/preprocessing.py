"""
preprocessing.py
────────────────
Feature metadata and normalisation.

Every attribute is scaled by a fixed divisor so the network always sees
values in [0, 1]:
  - Time_spent_Alone          : hours / 11
  - Stage_fear                : Yes → 1, No → 0
  - Social_event_attendance   : events / 10
  - Going_outside             : days / 7
  - Drained_after_socializing : Yes → 1, No → 0
  - Friends_circle_size       : friends / 15
  - Post_frequency            : posts / 10

The public API is:
    normalize(inputs)          -> FeatureVector (tuple of 7 floats)
    encode_yes_no(value)       -> 0.0 | 1.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple, Union

FeatureVector = Tuple[float, ...]


# ──────────────────────────────────────────────
# Feature metadata
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class FeatureSpec:
    """One input attribute: CSV column, UI label and scaling."""
    column: str
    label: str                 # short name shown next to input nodes
    title: str                 # control caption
    scale: float               # divisor; 1.0 for Yes/No columns
    binary: bool = False


FEATURES: Tuple[FeatureSpec, ...] = (
    FeatureSpec("Time_spent_Alone", "Time Alone", "Time Spent Alone (hours/day)", 11.0),
    FeatureSpec("Stage_fear", "Stage Fear", "Stage Fear", 1.0, binary=True),
    FeatureSpec("Social_event_attendance", "Social Events", "Social Event Attendance (per month)", 10.0),
    FeatureSpec("Going_outside", "Going Outside", "Going Outside (days/week)", 7.0),
    FeatureSpec("Drained_after_socializing", "Drained After", "Drained After Socializing", 1.0, binary=True),
    FeatureSpec("Friends_circle_size", "Friends Circle", "Friends Circle Size", 15.0),
    FeatureSpec("Post_frequency", "Post Frequency", "Social Media Post Frequency (per week)", 10.0),
)

FEATURE_COLUMNS = [f.column for f in FEATURES]
FEATURE_LABELS = [f.label for f in FEATURES]
NUM_FEATURES = len(FEATURES)

LABEL_COLUMN = "Personality"
POSITIVE_CLASS = "Introvert"
NEGATIVE_CLASS = "Extrovert"

CLASS_LABELS: Dict[int, str] = {
    0: NEGATIVE_CLASS,
    1: POSITIVE_CLASS,
}


# ──────────────────────────────────────────────
# Raw user inputs
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class UserInputs:
    """The seven control values in natural units."""
    time_alone: float = 5
    stage_fear: bool = False
    social_events: float = 5
    going_outside: float = 5
    drained_after_socializing: bool = False
    friends_circle: float = 7
    post_frequency: float = 5

    def __post_init__(self):
        for name, spec in zip(_FIELD_NAMES, FEATURES):
            if spec.binary:
                continue
            value = getattr(self, name)
            if not 0 <= value <= spec.scale:
                raise ValueError(
                    f"{name} must be between 0 and {spec.scale:g}, got {value!r}"
                )


_FIELD_NAMES = (
    "time_alone",
    "stage_fear",
    "social_events",
    "going_outside",
    "drained_after_socializing",
    "friends_circle",
    "post_frequency",
)

# Control ranges for sliders, keyed by UserInputs field.
INPUT_RANGES: Dict[str, Tuple[int, int]] = {
    name: (0, int(spec.scale))
    for name, spec in zip(_FIELD_NAMES, FEATURES)
    if not spec.binary
}


def field_spec(name: str) -> FeatureSpec:
    return FEATURES[_FIELD_NAMES.index(name)]


def input_fields() -> Tuple[str, ...]:
    return _FIELD_NAMES


# ──────────────────────────────────────────────
# Public API
# ──────────────────────────────────────────────

def encode_yes_no(value: Union[str, bool]) -> float:
    """'Yes' / True → 1.0, anything else → 0.0."""
    if isinstance(value, str):
        return 1.0 if value == "Yes" else 0.0
    return 1.0 if value else 0.0


def normalize(inputs: UserInputs) -> FeatureVector:
    """
    Map raw control values to the model's FeatureVector.

    Returns:
        tuple of 7 floats in [0, 1], in FEATURES order.
    """
    vector = []
    for name, spec in zip(_FIELD_NAMES, FEATURES):
        value = getattr(inputs, name)
        if spec.binary:
            vector.append(encode_yes_no(value))
        else:
            vector.append(float(value) / spec.scale)
    return tuple(vector)
