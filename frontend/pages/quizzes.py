import streamlit as st
from api import ApiQuizStore
from config import USER_ID
from navigation import enter_page

from studyaid.services.quiz.grading import option_list
from studyaid.services.quiz.session import DELETE_WARNING, QuizSession, QuizState


def notify(level: str, message: str) -> None:
    st.toast(message, icon="✅" if level == "success" else "⚠️")


# ======================
# Page setup & state
# ======================
st.title("📝 Quizzes")
st.caption("Test your knowledge with AI-generated quizzes")

if not USER_ID:
    st.warning("Sign in first: STUDYAID_USER_ID is not set.")
    st.stop()

if "quiz_session" not in st.session_state:
    st.session_state.quiz_session = QuizSession(ApiQuizStore(USER_ID), notify=notify)
    st.session_state.quiz_list_loaded = False

session: QuizSession = st.session_state.quiz_session

if enter_page(st.session_state, "quizzes"):
    session.leave()
    st.session_state.quiz_list_loaded = False


@st.dialog("Are you sure you want to delete this quiz?")
def confirm_delete_dialog():
    st.write(DELETE_WARNING)
    cancel_col, delete_col = st.columns(2)
    if cancel_col.button("Cancel", disabled=session.deleting, use_container_width=True):
        session.cancel_delete()
        st.rerun()
    if delete_col.button("Delete", type="primary", disabled=session.deleting, use_container_width=True):
        with st.spinner("Deleting..."):
            deleted = session.confirm_delete()
        if deleted:
            st.rerun()


# ======================
# Browsing
# ======================
def render_browsing():
    if not st.session_state.quiz_list_loaded:
        with st.spinner("Loading quizzes..."):
            session.refresh()
        st.session_state.quiz_list_loaded = True

    if not session.quizzes:
        st.info("No quizzes yet. Create study materials with AI to generate quizzes automatically.")
        return

    for quiz in session.quizzes:
        with st.container(border=True):
            open_col, delete_col = st.columns([6, 1])
            created = f"Created {quiz.created_at:%Y-%m-%d}" if quiz.created_at else ""
            if open_col.button(
                f"**{quiz.title}**  \n{created}",
                key=f"open-{quiz.id}",
                disabled=session.pending_delete is not None,
                use_container_width=True,
            ):
                with st.spinner("Loading questions..."):
                    started = session.select_quiz(quiz)
                if started:
                    st.rerun()
            if delete_col.button("🗑️", key=f"delete-{quiz.id}", help="Delete quiz"):
                session.request_delete(quiz.id)

    if session.pending_delete is not None:
        confirm_delete_dialog()


# ======================
# Taking the quiz
# ======================
def render_question(locked: bool):
    question = session.current_question
    total = len(session.questions)

    head_col, count_col = st.columns([4, 1])
    head_col.subheader(session.quiz.title)
    count_col.caption(f"{session.current_index + 1} / {total}")
    st.progress(session.progress)

    with st.container(border=True):
        st.markdown(f"#### {question.question_text}")
        options = option_list(question.options)
        selected = session.selected_answer()
        choice = st.radio(
            "Answer",
            options,
            index=options.index(selected) if selected in options else None,
            key=f"answer-{question.id}",
            label_visibility="collapsed",
            disabled=locked,
        )
        if not locked and choice is not None and choice != selected:
            session.select_answer(choice)
        if locked:
            item = session.review_items()[session.current_index]
            if item.is_correct:
                st.success("Correct")
            else:
                st.error(f"Your answer: {item.answer_label}. Correct answer: {question.correct_answer}")
            if question.explanation:
                st.caption(question.explanation)

    exit_col, prev_col, next_col = st.columns(3)
    if exit_col.button("Exit Quiz" if not locked else "Back to Results", use_container_width=True):
        if locked:
            session.back_to_results()
        else:
            session.reset()
            st.session_state.quiz_list_loaded = False
        st.rerun()
    if prev_col.button("Previous", disabled=session.current_index == 0, use_container_width=True):
        session.previous()
        st.rerun()
    if session.is_last_question and not locked:
        if next_col.button("Submit Quiz", type="primary", use_container_width=True):
            with st.spinner("Saving results..."):
                session.submit()
            st.rerun()
    elif next_col.button("Next", disabled=session.is_last_question, use_container_width=True):
        session.next()
        st.rerun()


# ======================
# Results
# ======================
def render_results():
    result = session.result
    with st.container(border=True):
        st.markdown("## 🏆 Quiz Complete!")
        st.markdown(f"# {result.display_percentage}%")
        st.caption(f"You got {result.score} out of {result.total_questions} questions correct")
        back_col, review_col = st.columns(2)
        if back_col.button("Back to Quizzes", use_container_width=True):
            session.reset()
            st.session_state.quiz_list_loaded = False
            st.rerun()
        if review_col.button("Review Answers", type="primary", use_container_width=True):
            session.review()
            st.rerun()

    for item in session.review_items():
        with st.container(border=True):
            icon = "✅" if item.is_correct else "❌"
            st.markdown(f"{icon} **{item.number}. {item.question_text}**")
            st.markdown(f"Your answer: {item.answer_label}")
            if item.correct_answer is not None:
                st.markdown(f"Correct answer: {item.correct_answer}")
            if item.explanation:
                st.caption(item.explanation)


if session.state is QuizState.BROWSING:
    render_browsing()
elif session.state is QuizState.IN_PROGRESS:
    render_question(locked=False)
elif session.state is QuizState.REVIEWING:
    render_question(locked=True)
elif session.state is QuizState.RESULTS:
    render_results()
else:
    st.info("Working...")
