"""
ui/page_metrics.py
"""
import streamlit as st

from personality import get_result, history_frame, plot_training_history, plot_confusion_matrix


def render():
    st.title("📊 Model Performance")

    result = get_result()
    if result is None:
        st.info("The model is still training.")
        return

    _metrics_panel(result.metrics)

    st.markdown("---")
    _history_panel(result.run.history)

    st.markdown("---")
    col1, col2 = st.columns([1, 1])
    with col1:
        st.subheader("Confusion Matrix")
        st.pyplot(plot_confusion_matrix(result.metrics.counts))
    with col2:
        st.subheader("Data Split")
        st.metric("Training examples", len(result.run.train))
        st.metric("Validation examples", len(result.run.validation))
        st.caption("First 80% of the file trains the model; the last 20% validates it. No shuffling.")


def _metrics_panel(metrics):
    st.subheader("Validation Metrics")
    col1, col2, col3, col4, col5 = st.columns(5)
    col1.metric("Accuracy", f"{metrics.accuracy:.2%}")
    col2.metric("Precision", f"{metrics.precision:.2%}")
    col3.metric("Recall", f"{metrics.recall:.2%}")
    col4.metric("F1 Score", f"{metrics.f1:.2%}")
    col5.metric("Val Loss", f"{metrics.validation_loss:.4f}")

    c = metrics.counts
    if c.tp + c.fp == 0 or c.tp + c.fn == 0:
        st.warning(
            "⚠️ One class never appears in the predictions or in the validation labels. "
            "Metrics with a zero denominator are reported as 0."
        )


def _history_panel(history):
    st.subheader("Training History")
    st.pyplot(plot_training_history(history))

    with st.expander("Per-epoch values"):
        st.dataframe(history_frame(history), use_container_width=True)
