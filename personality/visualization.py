"""
visualization.py
────────────────
Network diagram (SVG) and training / evaluation charts (Matplotlib).

Diagram layout:
  • x = layer_index × width / (layers − 1)
  • y = (node_index + 1) × height / (layer_size + 1)
  • node fill   = viridis(activation), text = activation to 2 decimals
  • connector   = cubic curve, green for w > 0, red otherwise,
                  opacity = min(|w|, 1), stroke width = 2·|w|

When no weights are passed, seeded random weights are drawn purely for
visual variety and the layout is marked illustrative.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence
from xml.sax.saxutils import escape

import matplotlib
from matplotlib import colors as mcolors
import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib.figure import Figure

from .evaluator import ConfusionCounts
from .model_manager import DEFAULT_CONFIG, LAYER_NAMES, TrainingHistoryEntry
from .preprocessing import CLASS_LABELS, FEATURE_LABELS

POSITIVE_COLOR = "#4CAF50"
NEGATIVE_COLOR = "#f44336"
NODE_RADIUS = 20
MARGIN = 40
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
ILLUSTRATIVE_SEED = 0

_VIRIDIS = matplotlib.colormaps["viridis"]


# ──────────────────────────────────────────────
# Layout
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class NetworkNode:
    layer: int
    index: int
    x: float
    y: float
    value: float


@dataclass(frozen=True)
class NetworkLink:
    source: NetworkNode
    target: NetworkNode
    weight: float

    @property
    def color(self) -> str:
        return POSITIVE_COLOR if self.weight > 0 else NEGATIVE_COLOR

    @property
    def opacity(self) -> float:
        return min(abs(self.weight), 1.0)

    @property
    def stroke_width(self) -> float:
        return abs(self.weight) * 2

    @property
    def path(self) -> str:
        s, t = self.source, self.target
        mid = (s.x + t.x) / 2
        return f"M{s.x:.2f},{s.y:.2f} C{mid:.2f},{s.y:.2f} {mid:.2f},{t.y:.2f} {t.x:.2f},{t.y:.2f}"


@dataclass
class NetworkLayout:
    layer_sizes: Sequence[int]
    width: int
    height: int
    nodes: List[NetworkNode] = field(default_factory=list)
    links: List[NetworkLink] = field(default_factory=list)
    illustrative: bool = False

    def layer(self, i: int) -> List[NetworkNode]:
        return [n for n in self.nodes if n.layer == i]


def node_color(value: float) -> str:
    """Viridis colour for an activation, clamped to [0, 1]."""
    return mcolors.to_hex(_VIRIDIS(float(np.clip(value, 0.0, 1.0))))


def illustrative_weights(layer_sizes: Sequence[int],
                         seed: int = ILLUSTRATIVE_SEED) -> List[np.ndarray]:
    """Random weights in [-1, 1) for display only; not the model's weights."""
    rng = np.random.default_rng(seed)
    return [rng.uniform(-1.0, 1.0, size=(a, b)) for a, b in zip(layer_sizes[:-1], layer_sizes[1:])]


def _activation(activations, layer: int, index: int) -> float:
    try:
        value = float(activations[layer][index])
    except (IndexError, TypeError):
        return 0.0
    return 0.0 if np.isnan(value) else value


def layout_network(
    activations: Optional[Sequence[Sequence[float]]] = None,
    weights: Optional[Sequence[np.ndarray]] = None,
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    layer_sizes: Sequence[int] = DEFAULT_CONFIG.layer_sizes,
) -> NetworkLayout:
    """Compute node positions and connectors for the current snapshot."""
    inner_w = width - 2 * MARGIN
    inner_h = height - 2 * MARGIN
    layer_spacing = inner_w / (len(layer_sizes) - 1)

    illustrative = weights is None or len(weights) == 0
    if illustrative:
        weights = illustrative_weights(layer_sizes)

    layout = NetworkLayout(layer_sizes=tuple(layer_sizes), width=width, height=height,
                           illustrative=illustrative)
    for i, size in enumerate(layer_sizes):
        node_spacing = inner_h / (size + 1)
        for j in range(size):
            layout.nodes.append(NetworkNode(
                layer=i, index=j,
                x=i * layer_spacing,
                y=(j + 1) * node_spacing,
                value=_activation(activations, i, j),
            ))

    for i in range(len(layer_sizes) - 1):
        kernel = np.asarray(weights[i])
        for src in layout.layer(i):
            for dst in layout.layer(i + 1):
                layout.links.append(NetworkLink(src, dst, float(kernel[src.index, dst.index])))
    return layout


# ──────────────────────────────────────────────
# SVG rendering
# ──────────────────────────────────────────────

def render_network_svg(layout: NetworkLayout) -> str:
    """Full SVG document for *layout*; always drawn from scratch."""
    inner_w = layout.width - 2 * MARGIN
    n_layers = len(layout.layer_sizes)
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{layout.width}" height="{layout.height}" '
        f'viewBox="0 0 {layout.width} {layout.height}" style="max-width:100%;height:auto;background:#fff">',
        f'<g transform="translate({MARGIN},{MARGIN})">',
    ]

    for i in range(n_layers):
        name = LAYER_NAMES[i] if i < len(LAYER_NAMES) else f"Layer {i}"
        parts.append(
            f'<text class="layer-label" x="{inner_w * i / (n_layers - 1):.2f}" y="-20" '
            f'text-anchor="middle" font-size="14" font-weight="bold">{escape(name)}</text>'
        )

    parts.append('<g class="links">')
    for link in layout.links:
        parts.append(
            f'<path class="link" d="{link.path}" fill="none" stroke="{link.color}" '
            f'stroke-opacity="{link.opacity:.3f}" stroke-width="{link.stroke_width:.3f}"/>'
        )
    parts.append("</g>")

    parts.append('<g class="nodes">')
    for node in layout.nodes:
        parts.append(
            f'<g class="node" transform="translate({node.x:.2f},{node.y:.2f})">'
            f'<circle r="{NODE_RADIUS}" fill="{node_color(node.value)}" stroke="#666" stroke-width="2"/>'
            f'<text dy=".35em" text-anchor="middle" fill="white" font-size="12">{node.value:.2f}</text>'
            f"</g>"
        )
    for node in layout.layer(0):
        label = FEATURE_LABELS[node.index] if node.index < len(FEATURE_LABELS) else ""
        parts.append(
            f'<text class="input-label" x="{node.x - 30:.2f}" y="{node.y:.2f}" dy=".35em" '
            f'text-anchor="end" font-size="12">{escape(label)}</text>'
        )
    parts.append("</g>")
    parts.append("</g>")

    if layout.illustrative:
        parts.append(
            f'<text class="illustrative-note" x="{layout.width - 10}" y="{layout.height - 10}" '
            f'text-anchor="end" font-size="11" fill="#888">'
            f"Illustrative weights (not the trained model)</text>"
        )
    parts.append("</svg>")
    return "\n".join(parts)


# ──────────────────────────────────────────────
# Charts
# ──────────────────────────────────────────────

def history_frame(history: Sequence[TrainingHistoryEntry]) -> pd.DataFrame:
    """History as a DataFrame indexed by 1-based epoch."""
    df = pd.DataFrame(
        [(e.epoch, e.loss, e.val_loss, e.accuracy, e.val_accuracy) for e in history],
        columns=["epoch", "loss", "val_loss", "accuracy", "val_accuracy"],
    )
    df.index = df["epoch"] + 1
    df.index.name = "Epoch"
    return df.drop(columns="epoch")


def plot_training_history(history: Sequence[TrainingHistoryEntry]) -> Figure:
    df = history_frame(history)
    fig = Figure(figsize=(8, 4))
    ax = fig.add_subplot(111)
    series = [
        ("loss", "Training Loss", "#ff6384"),
        ("val_loss", "Validation Loss", "#36a2eb"),
        ("accuracy", "Training Accuracy", "#4bc0c0"),
        ("val_accuracy", "Validation Accuracy", "#9966ff"),
    ]
    for column, label, color in series:
        ax.plot(df.index, df[column], label=label, color=color, linewidth=1.5)
    ax.set_ylim(0, 1)
    ax.set_xlabel("Epoch")
    ax.set_title("Training Progress")
    ax.legend(loc="upper center", ncol=4, fontsize=8, bbox_to_anchor=(0.5, -0.15))
    ax.grid(alpha=0.3)
    fig.tight_layout()
    return fig


def plot_confusion_matrix(counts: ConfusionCounts) -> Figure:
    labels = [CLASS_LABELS[0], CLASS_LABELS[1]]
    fig = Figure(figsize=(4, 3.5))
    ax = fig.add_subplot(111)
    sns.heatmap(counts.as_matrix(), annot=True, fmt="d", cmap="Blues", cbar=False,
                xticklabels=labels, yticklabels=labels, ax=ax)
    ax.set_xlabel("Predicted")
    ax.set_ylabel("Actual")
    ax.set_title("Validation Confusion Matrix")
    fig.tight_layout()
    return fig
