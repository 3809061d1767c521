"""
ui/page_home.py
"""
import pandas as pd
import streamlit as st

from personality import DEFAULT_CONFIG, FEATURES, describe_architecture, get_result


def render():
    st.markdown("""
    <div style="background:rgba(102,51,153,0.12);padding:40px;border-radius:20px;
    border:1px solid rgba(153,102,255,0.35);">
    <h1 style="color:#7e57c2;font-size:42px;">Personality Prediction Model</h1>
    <p style="font-size:18px;">
    A tiny neural network trained in your session on seven behavioural answers,
    predicting whether someone leans introvert or extrovert.
    </p>
    </div>
    """, unsafe_allow_html=True)

    st.markdown("## 🧠 System Overview")

    cfg = DEFAULT_CONFIG
    col1, col2 = st.columns(2)
    with col1:
        st.markdown("""
        ### 🔄 Pipeline
        - CSV load → drop incomplete rows
        - Scale every answer to [0, 1]
        - First 80% trains, last 20% validates
        - 50 epochs of Adam on binary cross-entropy
        - Threshold 0.5 → Introvert / Extrovert
        """)
    with col2:
        st.markdown(f"""
        ### ⚙ Current Configuration
        - **Layers**: `{" → ".join(str(s) for s in cfg.layer_sizes)}`
        - **Optimizer**: `Adam (lr={cfg.learning_rate})`
        - **Loss**: `{cfg.loss}`
        - **Epochs**: `{cfg.epochs}`
        - **Model trained**: `{"✅" if get_result() is not None else "⏳ training"}`
        """)

    st.markdown("## 📊 Dataset")
    result = get_result()
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Features", len(FEATURES))
    if result is not None:
        c2.metric("Usable rows", f"{len(result.dataset):,}")
        c3.metric("Introverts", f"{int(result.dataset.labels.sum()):,}")
        c4.metric("Extroverts", f"{int(len(result.dataset) - result.dataset.labels.sum()):,}")

    st.dataframe(
        pd.DataFrame([
            {"Column": f.column, "Meaning": f.title,
             "Scaling": "Yes → 1, No → 0" if f.binary else f"÷ {f.scale:g}"}
            for f in FEATURES
        ]),
        hide_index=True, use_container_width=True,
    )

    st.markdown("## 🏗 Architecture")
    st.graphviz_chart("""
    digraph G {
        rankdir=LR;
        node [shape=box, style=filled, fillcolor="#7e57c2", fontcolor="white"];
        "Input (7)" -> "Dense 10 · ReLU" -> "Dense 5 · ReLU" -> "Dense 1 · Sigmoid";
    }
    """)
    st.dataframe(pd.DataFrame(describe_architecture(cfg)), hide_index=True, use_container_width=True)

    st.caption(
        "For educational purposes only. "
        "A questionnaire and a 141-parameter network cannot describe a person."
    )
