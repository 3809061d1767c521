"""
ui/page_learn.py
────────────────
Explanation of the inputs and of how the network reaches a prediction.
"""

import streamlit as st

from personality import FEATURES


_FEATURE_NOTES = {
    "Time_spent_Alone": "Higher values suggest introversion: preference for solitude and time for self-reflection.",
    "Stage_fear": "Common among introverts; related to comfort with public speaking.",
    "Social_event_attendance": "Frequency of social gatherings and comfort in group settings.",
    "Going_outside": "Daily social exposure and activity pattern.",
    "Drained_after_socializing": "The 'social battery': how much recovery time social contact needs.",
    "Friends_circle_size": "Size of the social network someone maintains.",
    "Post_frequency": "Online presence and willingness to share publicly.",
}


def render():
    st.title("🧠 Understanding the Prediction")

    tabs = st.tabs([
        "1️⃣ Inputs",
        "2️⃣ Network",
        "3️⃣ Decision",
        "4️⃣ Reading the Diagram",
    ])

    with tabs[0]:
        _inputs_tab()
    with tabs[1]:
        _network_tab()
    with tabs[2]:
        _decision_tab()
    with tabs[3]:
        _diagram_tab()


def _inputs_tab():
    st.header("Input Variables and Their Impact")
    for f in FEATURES:
        st.markdown(f"**{f.title}** — {_FEATURE_NOTES.get(f.column, '')}")
    st.info("Every answer is divided by its maximum so the network sees values between 0 and 1.")


def _network_tab():
    st.header("Dense Layers")
    st.write("Each neuron computes a weighted sum of the previous layer and applies an activation:")
    st.latex(r"a^{(l)} = f\left(W^{(l)\top} a^{(l-1)} + b^{(l)}\right)")
    st.latex(r"\mathrm{ReLU}(z) = \max(0, z)")
    st.write(
        "The two hidden layers (10 and 5 neurons) use ReLU; the single output neuron "
        "uses a sigmoid so its value reads as a probability."
    )


def _decision_tab():
    st.header("From Probability to Label")
    st.latex(r"\sigma(z) = \frac{1}{1 + e^{-z}}")
    st.latex(r"\hat{y} = \begin{cases} \text{Introvert} & p > 0.5 \\ \text{Extrovert} & p \leq 0.5 \end{cases}")
    st.write(
        "The readout shows the predicted class with the probability of that class: "
        "p for Introvert, 1 − p for Extrovert."
    )


def _diagram_tab():
    st.header("Node Values")
    st.markdown("""
    - **Input layer**: the normalised answers
    - **Hidden layers**: intermediate features learned by the network
    - **Output layer**: final prediction (closer to 1 = Introvert, closer to 0 = Extrovert)
    """)
    st.header("Colours")
    st.markdown("""
    - Node colour follows the viridis scale: dark purple ≈ 0, yellow ≈ 1
    - Green connections: positive weights; red connections: negative weights
    - Line thickness and opacity: weight magnitude
    """)
    st.warning(
        "With **Use trained weights** switched off the connections are random and only "
        "decorative; they do not come from the trained model."
    )
