"""
model_manager.py
────────────────
Single source of truth for the network architecture and its training run.

The network is fixed:
  - input      : 7 normalised features
  - hidden 1   : Dense(10, relu)
  - hidden 2   : Dense(5, relu)
  - output     : Dense(1, sigmoid)  → P(Introvert)

Compiled with Adam(0.001) + binary cross-entropy, tracked metric accuracy,
trained for exactly 50 epochs with the validation partition evaluated after
every epoch. There is no early stopping and no retraining: a model is built
once per session and only read afterwards.

Callers never touch Keras directly; they receive a PersonalityModel.
"""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
import tensorflow as tf

from .dataset import Dataset, DatasetError, TRAIN_FRACTION
from .preprocessing import NUM_FEATURES, FeatureVector

logger = logging.getLogger(__name__)

ActivationSnapshot = Tuple[Tuple[float, ...], ...]


# ──────────────────────────────────────────────
# Configuration
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class NetworkConfig:
    """Declarative hyper-parameters for the personality network."""
    input_size: int = NUM_FEATURES
    hidden_units: Tuple[int, ...] = (10, 5)
    hidden_activation: str = "relu"
    output_activation: str = "sigmoid"
    learning_rate: float = 0.001
    loss: str = "binary_crossentropy"
    epochs: int = 50
    batch_size: int = 32
    train_fraction: float = TRAIN_FRACTION
    seed: Optional[int] = 42

    @property
    def layer_sizes(self) -> Tuple[int, ...]:
        """Neuron count per layer, input layer included."""
        return (self.input_size,) + tuple(self.hidden_units) + (1,)


DEFAULT_CONFIG = NetworkConfig()

LAYER_NAMES = ("Input Layer", "Hidden Layer 1", "Hidden Layer 2", "Output Layer")


def describe_architecture(config: NetworkConfig = DEFAULT_CONFIG) -> List[Dict[str, object]]:
    """Rows describing each dense layer, for display."""
    rows = []
    sizes = config.layer_sizes
    activations = [config.hidden_activation] * len(config.hidden_units) + [config.output_activation]
    for i, (fan_in, units) in enumerate(zip(sizes[:-1], sizes[1:])):
        rows.append({
            "layer": LAYER_NAMES[i + 1] if i + 1 < len(LAYER_NAMES) else f"Dense {i + 1}",
            "units": units,
            "activation": activations[i],
            "parameters": fan_in * units + units,
        })
    return rows


# ──────────────────────────────────────────────
# Results
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class TrainingHistoryEntry:
    epoch: int                       # 0-based
    loss: float
    accuracy: float
    val_loss: float
    val_accuracy: float


# ──────────────────────────────────────────────
# Model interface
# ──────────────────────────────────────────────

class PersonalityModel(abc.ABC):
    """Read-only view of a trained classifier."""

    @abc.abstractmethod
    def predict(self, features: FeatureVector) -> float:
        """P(Introvert) for one FeatureVector."""

    @abc.abstractmethod
    def predict_batch(self, features: np.ndarray) -> np.ndarray:
        """P(Introvert) for every row of an (n, 7) matrix."""

    @abc.abstractmethod
    def predict_activations(self, features: FeatureVector) -> ActivationSnapshot:
        """Input vector followed by every dense layer's output."""

    def layer_weights(self) -> Optional[List[np.ndarray]]:
        """Kernels of shape (fan_in, units) per dense layer, if known."""
        return None


class KerasPersonalityModel(PersonalityModel):
    """PersonalityModel backed by a trained tf.keras.Sequential."""

    def __init__(self, keras_model: tf.keras.Model):
        self._model = keras_model
        self._activation_model = tf.keras.Model(
            inputs=keras_model.inputs[0],
            outputs=[layer.output for layer in keras_model.layers],
        )

    @property
    def keras_model(self) -> tf.keras.Model:
        return self._model

    @staticmethod
    def _batch(features: Sequence[float]) -> np.ndarray:
        batch = np.asarray([features], dtype=np.float32)
        if batch.shape != (1, NUM_FEATURES):
            raise ValueError(f"Expected {NUM_FEATURES} features, got {batch.shape[1:]}")
        return batch

    def predict(self, features: FeatureVector) -> float:
        output = self._model(self._batch(features), training=False)
        return float(np.asarray(output)[0, 0])

    def predict_batch(self, features: np.ndarray) -> np.ndarray:
        features = np.asarray(features, dtype=np.float32)
        if len(features) == 0:
            return np.zeros(0, dtype=np.float32)
        return self._model.predict(features, verbose=0)[:, 0]

    def predict_activations(self, features: FeatureVector) -> ActivationSnapshot:
        outputs = self._activation_model(self._batch(features), training=False)
        if not isinstance(outputs, (list, tuple)):
            outputs = [outputs]
        layers = [tuple(float(v) for v in np.asarray(out)[0]) for out in outputs]
        return (tuple(features),) + tuple(layers)

    def layer_weights(self) -> List[np.ndarray]:
        return [np.array(layer.get_weights()[0]) for layer in self._model.layers]


# ──────────────────────────────────────────────
# Build + train
# ──────────────────────────────────────────────

def build_model(config: NetworkConfig = DEFAULT_CONFIG) -> tf.keras.Model:
    """Return the compiled, untrained Keras network."""
    model = tf.keras.Sequential(name="personality_net")
    model.add(tf.keras.Input(shape=(config.input_size,)))
    for units in config.hidden_units:
        model.add(tf.keras.layers.Dense(units, activation=config.hidden_activation))
    model.add(tf.keras.layers.Dense(1, activation=config.output_activation))

    model.compile(
        optimizer=tf.keras.optimizers.Adam(learning_rate=config.learning_rate),
        loss=config.loss,
        metrics=["accuracy"],
    )
    return model


class _HistoryRecorder(tf.keras.callbacks.Callback):
    """Appends one TrainingHistoryEntry per finished epoch."""

    def __init__(self, history: List[TrainingHistoryEntry],
                 on_epoch: Optional[Callable[[TrainingHistoryEntry], None]] = None):
        super().__init__()
        self.entries = history
        self.on_epoch = on_epoch

    def on_epoch_end(self, epoch, logs=None):
        logs = logs or {}
        entry = TrainingHistoryEntry(
            epoch=epoch,
            loss=float(logs.get("loss", np.nan)),
            accuracy=float(logs.get("accuracy", np.nan)),
            val_loss=float(logs.get("val_loss", np.nan)),
            val_accuracy=float(logs.get("val_accuracy", np.nan)),
        )
        self.entries.append(entry)
        logger.debug(
            "epoch %d: loss=%.4f acc=%.4f val_loss=%.4f val_acc=%.4f",
            epoch, entry.loss, entry.accuracy, entry.val_loss, entry.val_accuracy,
        )
        if self.on_epoch is not None:
            self.on_epoch(entry)


@dataclass
class TrainingRun:
    model: PersonalityModel
    history: List[TrainingHistoryEntry] = field(default_factory=list)
    train: Optional[Dataset] = None
    validation: Optional[Dataset] = None

    @property
    def final_val_loss(self) -> float:
        return self.history[-1].val_loss if self.history else float("nan")


def train_model(
    dataset: Dataset,
    config: NetworkConfig = DEFAULT_CONFIG,
    on_epoch: Optional[Callable[[TrainingHistoryEntry], None]] = None,
) -> TrainingRun:
    """
    Split *dataset*, build the network and fit it for config.epochs epochs.

    Args:
        dataset  : full, order-preserved dataset
        config   : hyper-parameters
        on_epoch : called with each TrainingHistoryEntry as soon as it exists

    Returns:
        TrainingRun with the wrapped model and the per-epoch history.
    """
    if config.seed is not None:
        tf.keras.utils.set_random_seed(config.seed)

    train, validation = dataset.split(config.train_fraction)
    if len(train) == 0:
        raise DatasetError("Dataset is too small to split into training and validation")

    logger.info(
        "Training %s on %d examples (%d validation) for %d epochs",
        "-".join(str(s) for s in config.layer_sizes),
        len(train), len(validation), config.epochs,
    )

    keras_model = build_model(config)
    history: List[TrainingHistoryEntry] = []

    fit_kwargs = {}
    if len(validation):
        fit_kwargs["validation_data"] = (
            validation.features,
            validation.labels.reshape(-1, 1).astype(np.float32),
        )

    keras_model.fit(
        train.features,
        train.labels.reshape(-1, 1).astype(np.float32),
        epochs=config.epochs,
        batch_size=config.batch_size,
        shuffle=True,
        verbose=0,
        callbacks=[_HistoryRecorder(history, on_epoch)],
        **fit_kwargs,
    )

    run = TrainingRun(
        model=KerasPersonalityModel(keras_model),
        history=history,
        train=train,
        validation=validation,
    )
    if history:
        last = history[-1]
        logger.info(
            "Training finished: loss=%.4f acc=%.4f val_loss=%.4f val_acc=%.4f",
            last.loss, last.accuracy, last.val_loss, last.val_accuracy,
        )
    return run
