import numpy as np
import pytest
from matplotlib.figure import Figure

from personality.evaluator import ConfusionCounts
from personality.model_manager import TrainingHistoryEntry
from personality.visualization import (
    NEGATIVE_COLOR, POSITIVE_COLOR, history_frame, layout_network, node_color,
    plot_confusion_matrix, plot_training_history, render_network_svg,
)


def _history(n=5):
    return [TrainingHistoryEntry(i, 0.7 - i * 0.01, 0.5 + i * 0.01, 0.69 - i * 0.01, 0.55) for i in range(n)]


def test_node_and_connector_counts():
    layout = layout_network()
    assert len(layout.nodes) == 23
    assert len(layout.links) == 7 * 10 + 10 * 5 + 5 * 1


def test_svg_draws_every_node_and_connector():
    svg = render_network_svg(layout_network())
    assert svg.count("<circle") == 23
    assert svg.count('<path class="link"') == 7 * 10 + 10 * 5 + 5 * 1
    assert svg.count('class="input-label"') == 7
    assert "Time Alone" in svg and "Post Frequency" in svg


def test_positions_follow_grid():
    layout = layout_network(width=800, height=600)
    inner_w, inner_h = 720, 520
    first = layout.layer(0)[0]
    assert (first.x, first.y) == (0, pytest.approx(inner_h / 8))
    out = layout.layer(3)[0]
    assert out.x == pytest.approx(inner_w)
    assert out.y == pytest.approx(inner_h / 2)


def test_missing_weights_are_flagged_illustrative():
    layout = layout_network()
    assert layout.illustrative
    assert all(-1.0 <= link.weight < 1.0 for link in layout.links)
    assert "Illustrative weights" in render_network_svg(layout)


def test_illustrative_weights_are_stable_between_renders():
    a = [link.weight for link in layout_network().links]
    b = [link.weight for link in layout_network().links]
    assert a == b


def test_supplied_weights_drive_connectors():
    sizes = (7, 10, 5, 1)
    weights = [np.full((a, b), 0.5) for a, b in zip(sizes[:-1], sizes[1:])]
    weights[2][3, 0] = -2.0
    layout = layout_network(weights=weights)
    assert not layout.illustrative
    assert "Illustrative weights" not in render_network_svg(layout)

    link = next(l for l in layout.links if l.source.layer == 2 and l.source.index == 3)
    assert link.color == NEGATIVE_COLOR
    assert link.opacity == 1.0
    assert link.stroke_width == 4.0

    positive = layout.links[0]
    assert positive.color == POSITIVE_COLOR
    assert positive.opacity == 0.5
    assert positive.stroke_width == 1.0


def test_activation_values_are_labelled():
    activations = [(0.25,) * 7, (1.5,) * 10, (0.0,) * 5, (0.875,)]
    layout = layout_network(activations)
    assert [n.value for n in layout.layer(3)] == [0.875]
    svg = render_network_svg(layout)
    assert ">0.25<" in svg
    assert ">1.50<" in svg
    assert ">0.88<" in svg


def test_missing_activations_default_to_zero():
    layout = layout_network([(0.5,) * 7])
    assert all(n.value == 0.0 for n in layout.nodes if n.layer > 0)


def test_node_color_clamps():
    assert node_color(-3) == node_color(0)
    assert node_color(7) == node_color(1)
    assert node_color(0) != node_color(1)


def test_history_frame_is_one_based():
    df = history_frame(_history(3))
    assert df.index.tolist() == [1, 2, 3]
    assert list(df.columns) == ["loss", "val_loss", "accuracy", "val_accuracy"]


def test_charts_return_figures():
    fig = plot_training_history(_history())
    assert isinstance(fig, Figure)
    ax = fig.axes[0]
    assert len(ax.get_lines()) == 4
    assert ax.get_ylim() == (0, 1)

    cm = plot_confusion_matrix(ConfusionCounts(tp=3, fp=1, tn=4, fn=2))
    assert isinstance(cm, Figure)
