import requests
import streamlit as st
from api import ApiError, get_profile_stats
from config import APP_TITLE, USER_ID
from navigation import enter_page

st.set_page_config(
    page_title=APP_TITLE,
    layout="wide",
)
enter_page(st.session_state, "home")

# -------------------------
# Header
# -------------------------
st.title(APP_TITLE)
st.caption("Turn anything you study into notes, flashcards and quizzes")

st.markdown("---")

st.markdown(
    """
### 🚀 How it works

1. **Create** study material from a topic, pasted text or a text file.
2. **Read** the generated notes, key points and examples.
3. **Test** yourself with the generated quiz and track your scores.
"""
)

col1, col2 = st.columns(2)
with col1:
    st.page_link("pages/materials.py", label="Create study materials", icon="✨")
    st.page_link("pages/notes.py", label="Read your notes", icon="🗒️")
with col2:
    st.page_link("pages/quizzes.py", label="Take a quiz", icon="📝")

# -------------------------
# Profile stats
# -------------------------
if USER_ID:
    st.markdown("### 📊 Your progress")
    try:
        stats = get_profile_stats(USER_ID)
    except ApiError as e:
        st.error(f"Failed to load stats: {e.detail}")
    except requests.RequestException:
        st.toast("Cannot reach the StudyAid API. Please try again.", icon="⚠️")
    else:
        metrics = st.columns(4)
        metrics[0].metric("Materials", stats["materials_count"])
        metrics[1].metric("Notes", stats["notes_count"])
        metrics[2].metric("Flashcards", stats["flashcards_count"])
        average = stats.get("average_score")
        metrics[3].metric(
            "Average quiz score",
            f"{average:.0f}%" if average is not None else "N/A",
            help=f"{stats['attempts_count']} attempt(s)",
        )
else:
    st.info("Set STUDYAID_USER_ID to connect to your workspace.")
