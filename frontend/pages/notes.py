import requests
import streamlit as st
from api import ApiError, delete_note, list_notes
from config import USER_ID
from navigation import enter_page

st.title("🗒️ Notes")

if not USER_ID:
    st.warning("Sign in first: STUDYAID_USER_ID is not set.")
    st.stop()

st.session_state.setdefault("note_to_delete", None)
st.session_state.setdefault("deleting_note", False)

if enter_page(st.session_state, "notes") or "notes" not in st.session_state:
    st.session_state.note_to_delete = None
    st.session_state.deleting_note = False
    try:
        st.session_state.notes = list_notes(USER_ID)
    except ApiError as e:
        st.session_state.notes = []
        st.error(f"Failed to load notes: {e.detail}")
    except requests.RequestException:
        st.session_state.notes = []
        st.toast("Cannot reach the StudyAid API. Please try again.", icon="⚠️")


@st.dialog("Are you sure you want to delete this note?")
def confirm_delete_dialog():
    st.write("This action cannot be undone. This will permanently delete the note.")
    cancel_col, delete_col = st.columns(2)
    if cancel_col.button("Cancel", disabled=st.session_state.deleting_note, use_container_width=True):
        st.session_state.note_to_delete = None
        st.rerun()
    if delete_col.button(
        "Delete", type="primary", disabled=st.session_state.deleting_note, use_container_width=True
    ):
        note_id = st.session_state.note_to_delete
        st.session_state.deleting_note = True
        try:
            with st.spinner("Deleting..."):
                delete_note(USER_ID, note_id)
        except ApiError as e:
            st.toast(f"Failed to delete note: {e.detail}", icon="⚠️")
            return
        except requests.RequestException:
            st.toast("Failed to delete note", icon="⚠️")
            return
        finally:
            st.session_state.deleting_note = False
        # drop locally, no reload of the list
        st.session_state.notes = [n for n in st.session_state.notes if n["id"] != note_id]
        st.session_state.note_to_delete = None
        st.toast("Note deleted successfully!", icon="✅")
        st.rerun()


if not st.session_state.notes:
    st.info("No notes yet. Create study materials to get started.")

for note in st.session_state.notes:
    with st.container(border=True):
        title_col, delete_col = st.columns([6, 1])
        title_col.markdown(f"**{note['title']}**")
        if delete_col.button("🗑️", key=f"delete-{note['id']}", help="Delete note"):
            st.session_state.note_to_delete = note["id"]
        with st.expander("Read"):
            st.markdown(note["content"])
            if note.get("key_points"):
                st.markdown("**Key points**")
                for point in note["key_points"]:
                    st.markdown(f"- {point}")
            if note.get("examples"):
                st.markdown("**Examples**")
                for example in note["examples"]:
                    st.markdown(f"- {example}")

if st.session_state.note_to_delete is not None:
    confirm_delete_dialog()
