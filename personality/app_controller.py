"""
app_controller.py
─────────────────
Centralised Streamlit session-state management.

Rules:
  1. One browser session owns exactly one Session record: one dataset,
     one trained model.
  2. The model is trained ONCE per session and never retrained.
  3. Changing any input invalidates the cached PredictionResult;
     ensure_prediction() recomputes it from the current inputs.
  4. All pages read state from here; nothing is kept in module globals.

Every function takes an optional *store* mapping (defaults to
st.session_state) so the flow can be driven without a running app.

Public API:
    init_state()                     -> Session
    get_session()                    -> Session
    get_inputs() / set_inputs(**kw)  -> UserInputs / None
    ensure_model(on_epoch=None)      -> PipelineResult | None
    is_trained()                     -> bool
    get_error() / clear_error()      -> str | None / None
    get_prediction()                 -> PredictionResult | None
    ensure_prediction()              -> PredictionResult | None
    set_page(name) / get_page()
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Callable, MutableMapping, Optional

import streamlit as st

from .dataset import DatasetError
from .evaluator import Metrics
from .model_manager import DEFAULT_CONFIG, NetworkConfig, TrainingHistoryEntry
from .pipeline import PipelineResult, run_pipeline
from .predictor import PredictionResult, predict
from .preprocessing import UserInputs

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Keys
# ──────────────────────────────────────────────

_KEY_SESSION = "pc_session"
_KEY_PAGE    = "pc_page"


@dataclass
class Session:
    inputs: UserInputs = dataclasses.field(default_factory=UserInputs)
    result: Optional[PipelineResult] = None          # dataset + model + history + metrics
    prediction: Optional[PredictionResult] = None
    error: Optional[str] = None

    @property
    def metrics(self) -> Optional[Metrics]:
        return self.result.metrics if self.result else None


def _store(store: Optional[MutableMapping]) -> MutableMapping:
    return st.session_state if store is None else store


# ──────────────────────────────────────────────
# Initialisation
# ──────────────────────────────────────────────

def init_state(store: Optional[MutableMapping] = None) -> Session:
    store = _store(store)
    if _KEY_SESSION not in store:
        store[_KEY_SESSION] = Session()
    if _KEY_PAGE not in store:
        store[_KEY_PAGE] = "Home"
    return store[_KEY_SESSION]


def get_session(store: Optional[MutableMapping] = None) -> Session:
    return init_state(store)


# ──────────────────────────────────────────────
# Inputs
# ──────────────────────────────────────────────

def get_inputs(store: Optional[MutableMapping] = None) -> UserInputs:
    return get_session(store).inputs


def set_inputs(store: Optional[MutableMapping] = None, **changes) -> None:
    """Update control values. Clears the prediction when anything changed."""
    session = get_session(store)
    updated = dataclasses.replace(session.inputs, **changes)
    if updated != session.inputs:
        session.inputs = updated
        clear_prediction(store)


# ──────────────────────────────────────────────
# Model lifecycle
# ──────────────────────────────────────────────

def is_trained(store: Optional[MutableMapping] = None) -> bool:
    return get_session(store).result is not None


def get_result(store: Optional[MutableMapping] = None) -> Optional[PipelineResult]:
    return get_session(store).result


def get_error(store: Optional[MutableMapping] = None) -> Optional[str]:
    return get_session(store).error


def clear_error(store: Optional[MutableMapping] = None) -> None:
    get_session(store).error = None


def ensure_model(
    on_epoch: Optional[Callable[[TrainingHistoryEntry], None]] = None,
    source: Optional[str] = None,
    config: NetworkConfig = DEFAULT_CONFIG,
    store: Optional[MutableMapping] = None,
) -> Optional[PipelineResult]:
    """
    Train the session's model if it does not exist yet.
    No-op once trained, or after a dataset failure until clear_error().
    """
    session = get_session(store)
    if session.result is not None:
        return session.result
    if session.error is not None:
        return None

    try:
        session.result = run_pipeline(source=source, config=config, on_epoch=on_epoch)
    except DatasetError as e:
        logger.error("Dataset unavailable: %s", e)
        session.error = str(e)
        return None

    clear_prediction(store)
    return session.result


# ──────────────────────────────────────────────
# Prediction cache
# ──────────────────────────────────────────────

def get_prediction(store: Optional[MutableMapping] = None) -> Optional[PredictionResult]:
    return get_session(store).prediction


def clear_prediction(store: Optional[MutableMapping] = None) -> None:
    get_session(store).prediction = None


def ensure_prediction(store: Optional[MutableMapping] = None) -> Optional[PredictionResult]:
    """
    Recompute the prediction if the cached one is stale.
    Returns None while no model exists.
    """
    session = get_session(store)
    if session.prediction is not None:
        return session.prediction
    if session.result is None:
        return None
    session.prediction = predict(session.result.run.model, session.inputs)
    return session.prediction


# ──────────────────────────────────────────────
# Page routing
# ──────────────────────────────────────────────

def set_page(name: str, store: Optional[MutableMapping] = None) -> None:
    _store(store)[_KEY_PAGE] = name


def get_page(store: Optional[MutableMapping] = None) -> str:
    return _store(store).get(_KEY_PAGE, "Home")
