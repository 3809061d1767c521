"""
dataset.py
──────────
CSV loading and the deterministic train / validation split.

Rules:
  1. A record is kept only if every field is present and non-empty.
  2. Numeric columns that do not parse as finite numbers inside the
     control range count as incomplete.
  3. Lines with too many fields are skipped.
  4. Row order from the file is preserved; no shuffling.
  5. The split boundary is floor(0.8 × n).

Public API:
    load_dataset(source=None)      -> Dataset
    frame_to_dataset(df)           -> Dataset
    split_index(n, fraction=0.8)   -> int
    Dataset.split()                -> (train, validation)
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from typing import Optional, Tuple
from urllib.error import URLError

import numpy as np
import pandas as pd

from .preprocessing import (
    FEATURES, FEATURE_COLUMNS, LABEL_COLUMN, POSITIVE_CLASS, NUM_FEATURES,
    FeatureVector, encode_yes_no,
)

logger = logging.getLogger(__name__)

_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DEFAULT_DATASET_PATH = os.path.join(_ROOT, "data", "personality_dataset.csv")
DATASET_PATH = os.environ.get("PERSONALITY_DATASET", DEFAULT_DATASET_PATH)

TRAIN_FRACTION = 0.8

REQUIRED_COLUMNS = FEATURE_COLUMNS + [LABEL_COLUMN]


class PersonalityError(Exception):
    """Base class for errors raised by the personality package."""


class DatasetError(PersonalityError):
    """The dataset could not be read or holds no usable rows."""


# ──────────────────────────────────────────────
# Dataset container
# ──────────────────────────────────────────────

@dataclass
class Dataset:
    features: np.ndarray             # (n, 7) float32, every value in FEATURES order
    labels: np.ndarray               # (n,) int, 1 = Introvert

    def __post_init__(self):
        if self.features.ndim != 2 or self.features.shape[1] != NUM_FEATURES:
            raise ValueError(
                f"features must have shape (n, {NUM_FEATURES}), got {self.features.shape}"
            )
        if len(self.features) != len(self.labels):
            raise ValueError("features and labels must have the same length")

    def __len__(self) -> int:
        return len(self.labels)

    def example(self, i: int) -> Tuple[FeatureVector, int]:
        return tuple(float(v) for v in self.features[i]), int(self.labels[i])

    def split(self, fraction: float = TRAIN_FRACTION) -> Tuple["Dataset", "Dataset"]:
        """Order-preserving split into (train, validation)."""
        idx = split_index(len(self), fraction)
        return (
            Dataset(self.features[:idx], self.labels[:idx]),
            Dataset(self.features[idx:], self.labels[idx:]),
        )


def split_index(n: int, fraction: float = TRAIN_FRACTION) -> int:
    return math.floor(n * fraction)


# ──────────────────────────────────────────────
# Loading
# ──────────────────────────────────────────────

def _read_csv(source: str) -> pd.DataFrame:
    bad_lines = []

    def _skip(line):
        bad_lines.append(line)
        return None

    try:
        # Everything as text so empty cells stay visible as "".
        df = pd.read_csv(
            source, dtype=str, keep_default_na=False, skip_blank_lines=True,
            engine="python", on_bad_lines=_skip,
        )
    except FileNotFoundError as e:
        raise DatasetError(f"Dataset not found: {source}") from e
    except pd.errors.EmptyDataError as e:
        raise DatasetError(f"Dataset is empty: {source}") from e
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise DatasetError(f"Could not parse dataset {source}: {e}") from e
    except (URLError, OSError) as e:
        raise DatasetError(f"Could not fetch dataset {source}: {e}") from e

    if bad_lines:
        logger.info("Skipped %d malformed lines in %s", len(bad_lines), source)
    return df


def frame_to_dataset(df: pd.DataFrame) -> Dataset:
    """Clean a raw text DataFrame and encode it as a Dataset."""
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise DatasetError(f"Dataset is missing columns: {', '.join(missing)}")

    total = len(df)
    complete = df.fillna("").apply(lambda col: col.astype(str).str.strip() != "")
    df = df[complete.all(axis=1)]

    columns = {}
    for spec in FEATURES:
        raw = df[spec.column]
        if spec.binary:
            columns[spec.column] = raw.map(encode_yes_no)
        else:
            columns[spec.column] = pd.to_numeric(raw, errors="coerce") / spec.scale
    encoded = pd.DataFrame(columns, index=df.index).astype(float)
    # NaN, inf and values outside the control range all count as invalid.
    valid = np.isfinite(encoded) & (encoded >= 0) & (encoded <= 1)
    encoded = encoded[valid.all(axis=1)]

    dropped = total - len(encoded)
    if dropped:
        logger.info("Dropped %d of %d rows with missing or invalid values", dropped, total)

    if encoded.empty:
        raise DatasetError("Dataset has no usable rows")

    labels = (df.loc[encoded.index, LABEL_COLUMN] == POSITIVE_CLASS).astype(int)
    return Dataset(
        features=encoded[FEATURE_COLUMNS].to_numpy(dtype=np.float32),
        labels=labels.to_numpy(),
    )


def load_dataset(source: Optional[str] = None) -> Dataset:
    """
    Read the personality CSV from a path or URL.

    Raises:
        DatasetError when the resource cannot be read or yields no rows.
    """
    source = source or DATASET_PATH
    df = _read_csv(source)
    dataset = frame_to_dataset(df)
    logger.info(
        "Loaded %d examples from %s (%d introvert)",
        len(dataset), source, int(dataset.labels.sum()),
    )
    return dataset
