import logging
import os

import streamlit as st

from personality import (
    DEFAULT_CONFIG, init_state, ensure_model, is_trained,
    get_error, clear_error, set_page, get_page,
    history_frame,
)
from ui import page_home, page_learn, page_metrics, page_predict

logging.basicConfig(
    level=os.environ.get("PERSONALITY_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

PAGES = {
    "Home": page_home,
    "Live Prediction": page_predict,
    "Performance Metrics": page_metrics,
    "How It Works": page_learn,
}

# Page Configuration
st.set_page_config(
    page_title="Personality Prediction Model",
    page_icon="🧠",
    layout="wide"
)

init_state()


# Sidebar Navigation
st.sidebar.title("Navigation")
page = st.sidebar.radio("Go to", list(PAGES), index=list(PAGES).index(get_page()))
set_page(page)


def _train_with_progress():
    """Train once per session, streaming each epoch into the sidebar."""
    history = []
    st.sidebar.markdown("---")
    st.sidebar.subheader("Training...")
    bar = st.sidebar.progress(0.0)
    chart = st.sidebar.empty()

    def on_epoch(entry):
        history.append(entry)
        bar.progress(len(history) / DEFAULT_CONFIG.epochs,
                     text=f"Epoch {entry.epoch + 1}/{DEFAULT_CONFIG.epochs}")
        chart.line_chart(history_frame(history)[["loss", "val_loss"]], height=150)

    result = ensure_model(on_epoch=on_epoch)
    bar.empty()
    chart.empty()
    return result


if not is_trained() and get_error() is None:
    with st.spinner("Loading dataset and training the network…"):
        _train_with_progress()

error = get_error()
if error is not None:
    st.sidebar.markdown("---")
    st.sidebar.error(f"Training unavailable: {error}")
    if st.sidebar.button("🔄 Retry"):
        clear_error()
        st.rerun()
    st.error(f"The dataset could not be loaded, so no model is available.\n\n{error}")
    st.stop()
elif is_trained():
    st.sidebar.markdown("---")
    st.sidebar.success("✅ Model trained for this session")

PAGES[page].render()
