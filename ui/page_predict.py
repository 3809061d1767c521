"""
ui/page_predict.py
──────────────────
Live Prediction page.

  • Seven input controls (five sliders, two Yes/No toggles)
  • Prediction readout ("Training..." until the model exists)
  • Network diagram coloured by the current activations
"""

import streamlit as st

from personality import (
    CLASS_LABELS, INPUT_RANGES, field_spec, input_fields,
    get_inputs, set_inputs, ensure_prediction, get_result,
    layout_network, render_network_svg,
)


def render():
    st.title("🧪 Personality Prediction")

    col_in, col_out = st.columns([1, 1])

    with col_in:
        st.subheader("Your Answers")
        _input_controls()

    prediction = ensure_prediction()

    with col_out:
        st.subheader("Prediction")
        _prediction_panel(prediction)

    st.markdown("---")
    _network_panel(prediction)


# ──────────────────────────────────────────────
# Controls
# ──────────────────────────────────────────────

def _input_controls():
    current = get_inputs()
    changes = {}
    for name in input_fields():
        spec = field_spec(name)
        value = getattr(current, name)
        if spec.binary:
            changes[name] = st.toggle(spec.title, value=bool(value), key=f"in_{name}",
                                      help="On = Yes, Off = No")
        else:
            lo, hi = INPUT_RANGES[name]
            changes[name] = st.slider(spec.title, min_value=lo, max_value=hi,
                                      value=int(value), key=f"in_{name}")
    set_inputs(**changes)


# ──────────────────────────────────────────────
# Result panel
# ──────────────────────────────────────────────

def _prediction_panel(prediction):
    if prediction is None:
        st.metric("Personality", "Training...")
        return

    icon = "🌙" if prediction.predicted_class == CLASS_LABELS[1] else "☀️"
    st.metric("Personality", f"{icon} {prediction.readout}")
    st.metric("P(Introvert)", f"{prediction.probability:.3f}")
    st.progress(prediction.probability)

    with st.expander("Normalised inputs"):
        st.write({
            field_spec(name).label: round(v, 3)
            for name, v in zip(input_fields(), prediction.features)
        })


# ──────────────────────────────────────────────
# Network diagram
# ──────────────────────────────────────────────

def _network_panel(prediction):
    st.subheader("Neural Network Visualization")

    result = get_result()
    c1, c2, c3 = st.columns(3)
    with c1:
        use_trained = st.toggle("Use trained weights", value=True, key="viz_trained",
                                disabled=result is None)
    with c2:
        width = st.number_input("Width", min_value=400, max_value=1600, value=800, step=50)
    with c3:
        height = st.number_input("Height", min_value=300, max_value=1200, value=600, step=50)

    weights = result.run.model.layer_weights() if (result and use_trained) else None
    activations = prediction.activations if prediction else None
    layout = layout_network(activations, weights, width=int(width), height=int(height))

    st.markdown(render_network_svg(layout), unsafe_allow_html=True)

    if layout.illustrative:
        st.warning(
            "⚠️ Connection colours and thickness are **illustrative only** — "
            "random weights, not the trained model's."
        )

    st.caption(
        "Node colour = activation (viridis, 0 → 1). "
        "Green connections = positive weights, red = negative; thickness = magnitude."
    )
