"""
pipeline.py
───────────
Load → train → evaluate, in one call. No session state, no UI.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .dataset import Dataset, load_dataset
from .evaluator import Metrics, evaluate
from .model_manager import DEFAULT_CONFIG, NetworkConfig, TrainingHistoryEntry, TrainingRun, train_model

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    dataset: Dataset
    run: TrainingRun
    metrics: Metrics


def run_pipeline(
    source: Optional[str] = None,
    config: NetworkConfig = DEFAULT_CONFIG,
    on_epoch: Optional[Callable[[TrainingHistoryEntry], None]] = None,
    dataset: Optional[Dataset] = None,
) -> PipelineResult:
    """Train a fresh model on the CSV at *source* (or on *dataset*) and score it."""
    if dataset is None:
        dataset = load_dataset(source)
    run = train_model(dataset, config, on_epoch=on_epoch)
    metrics = evaluate(run.model, run.validation, validation_loss=run.final_val_loss)
    logger.info(
        "Validation accuracy=%.3f precision=%.3f recall=%.3f f1=%.3f",
        metrics.accuracy, metrics.precision, metrics.recall, metrics.f1,
    )
    return PipelineResult(dataset=dataset, run=run, metrics=metrics)
