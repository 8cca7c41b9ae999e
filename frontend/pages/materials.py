import requests
import streamlit as st
from api import ApiError, generate_from_text, generate_from_topic, generate_from_upload
from config import USER_ID
from navigation import enter_page

st.title("✨ Create Study Materials")
st.caption("Generate from a topic or upload your own content")

if not USER_ID:
    st.warning("Sign in first: STUDYAID_USER_ID is not set.")
    st.stop()

st.session_state.setdefault("generating", False)
st.session_state.setdefault("generation_log", [])
enter_page(st.session_state, "materials")


def run_generation(call, first_step: str, second_step: str):
    """Run one generation request with a progress log, then go to the notes page."""
    st.session_state.generating = True
    log = [first_step]
    placeholder = st.empty()
    placeholder.info("\n\n".join(log))
    try:
        result = call()
    except ApiError as e:
        st.toast(e.detail, icon="⚠️")
        st.session_state.generation_log = []
        return
    except requests.RequestException:
        st.toast("Cannot reach the StudyAid API. Please try again.", icon="⚠️")
        return
    finally:
        st.session_state.generating = False

    log += [second_step, "✓ All done! Your materials are ready."]
    placeholder.success("\n\n".join(log))
    st.toast(result["message"], icon="✅")
    if result.get("next_view") == "notes":
        st.switch_page("pages/notes.py")


topic_tab, upload_tab = st.tabs(["AI Generate", "Upload"])

with topic_tab:
    st.markdown("Enter any topic and AI will create comprehensive study materials")
    topic = st.text_input(
        "Study Topic",
        placeholder="e.g., Photosynthesis, World War II, Calculus",
        disabled=st.session_state.generating,
    )
    if st.button(
        "Generate Study Materials",
        type="primary",
        disabled=st.session_state.generating or not topic.strip(),
    ):
        run_generation(
            lambda: generate_from_topic(USER_ID, topic.strip()),
            "Generating content from AI...",
            "Content generated! Saving to your workspace...",
        )

with upload_tab:
    text = st.text_area(
        "Paste your study material here...",
        height=240,
        disabled=st.session_state.generating,
    )
    if st.button(
        "Process Material",
        type="primary",
        disabled=st.session_state.generating or not text.strip(),
    ):
        run_generation(
            lambda: generate_from_text(USER_ID, text),
            "Analyzing your material...",
            "Creating study materials...",
        )

    uploaded = st.file_uploader("...or upload a text file", type=["txt", "md"])
    if uploaded is not None and st.button(
        "Process File", disabled=st.session_state.generating
    ):
        run_generation(
            lambda: generate_from_upload(USER_ID, uploaded.name, uploaded.getvalue()),
            "Reading your file...",
            "Creating study materials...",
        )
