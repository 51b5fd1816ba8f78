"""
EnglishAI - AI-assisted English Learning App

Streamlit application for practising six English skills (listening, reading,
speaking, writing, grammar, vocabulary) with generated lessons, graded
answers, XP, streaks and badges.

Usage:
    streamlit run app.py
"""

import asyncio
import logging

import streamlit as st
import streamlit.components.v1 as components

from englishai.classroom import (
    LessonAvailability,
    NavigationController,
    ProgressStore,
    SQLiteBlobStore,
    SkillDataLoader,
    View,
    build_lesson_list,
    build_level_cards,
    finish_lesson,
)
from englishai.config import get_settings
from englishai.schemas import SKILLS, Level, Skill, make_lesson_id
from englishai.tutor import (
    AnswerGrader,
    GeminiClient,
    GenerationError,
    LessonProvider,
    OBJECTIVE_TYPES,
    grade_objective,
)
from englishai.viewer import (
    LEVEL_INFO,
    SECTION_INFO,
    calculate_lesson_xp,
    get_audio_text,
    get_dashboard_css,
    get_lesson_css,
    is_lesson_finished,
    is_renderable,
    render_assignment_header,
    render_badge_notice,
    render_content,
    render_feedback,
    render_header,
    render_level_card,
    render_placeholder,
    render_section_card,
    render_speech_player,
    render_tutorial,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="EnglishAI",
    page_icon="🎓",
    layout="wide",
    initial_sidebar_state="collapsed",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "settings" not in st.session_state:
        st.session_state.settings = get_settings()

    settings = st.session_state.settings

    if "store" not in st.session_state:
        st.session_state.store = ProgressStore(SQLiteBlobStore(settings.progress_db))

    if "user" not in st.session_state:
        st.session_state.user = st.session_state.store.load()

    if "nav" not in st.session_state:
        st.session_state.nav = NavigationController()

    if "skill_data" not in st.session_state:
        st.session_state.skill_data = SkillDataLoader(settings.data_dir)

    if "client" not in st.session_state:
        try:
            st.session_state.client = GeminiClient(
                api_key=settings.gemini_api_key, model=settings.model
            )
        except ValueError as e:
            logger.warning(str(e))
            st.session_state.client = None

    if "lessons" not in st.session_state:
        st.session_state.lessons = {}  # lesson id -> Lesson

    if "feedback" not in st.session_state:
        st.session_state.feedback = {}  # assignment id -> AIFeedback

    if "skipped" not in st.session_state:
        st.session_state.skipped = set()

    if "generation_error" not in st.session_state:
        st.session_state.generation_error = None

    if "notice" not in st.session_state:
        st.session_state.notice = None


def reset_lesson_state():
    st.session_state.feedback = {}
    st.session_state.skipped = set()


def go_back():
    st.session_state.nav.back()
    st.session_state.generation_error = None
    reset_lesson_state()
    st.rerun()


# -----------------------------------------------------------------------------
# Dashboard
# -----------------------------------------------------------------------------

def render_dashboard():
    """Six skill cards with progress."""
    user = st.session_state.user

    st.markdown("### Choose a skill to practise")
    columns = st.columns(3)
    for i, skill in enumerate(SKILLS):
        with columns[i % 3]:
            st.markdown(
                render_section_card(skill, user.progress_for(skill)),
                unsafe_allow_html=True,
            )
            if st.button(
                f"Open {SECTION_INFO[skill]['title']}",
                key=f"section_{skill.value}",
                use_container_width=True,
            ):
                st.session_state.nav.select_section(skill)
                st.rerun()


# -----------------------------------------------------------------------------
# Level Selector
# -----------------------------------------------------------------------------

def render_level_selector():
    nav = st.session_state.nav
    skill = nav.state.skill
    progress = st.session_state.user.progress_for(skill)

    if st.button("← Back to dashboard"):
        go_back()

    info = SECTION_INFO[skill]
    st.title(f"{info['icon']} {info['title']}")
    st.caption(info["description"])

    columns = st.columns(3)
    for column, card in zip(columns, build_level_cards(progress)):
        with column:
            st.markdown(render_level_card(card), unsafe_allow_html=True)
            if st.button(
                f"Start {LEVEL_INFO[card.level]['title']}",
                key=f"level_{card.level.value}",
                disabled=not card.unlocked,
                use_container_width=True,
            ):
                nav.select_level(card.level)
                st.rerun()


# -----------------------------------------------------------------------------
# Lesson List
# -----------------------------------------------------------------------------

def get_or_create_lesson(skill: Skill, level: Level, lesson_number: int):
    """
    Static lesson if one exists, else a cached or freshly generated one.

    Raises:
        GenerationError: If generation fails or no text service is configured
    """
    static = st.session_state.skill_data.get_lesson(skill, level, lesson_number)
    if static is not None:
        return static

    lesson_id = make_lesson_id(skill.value, level.value, lesson_number)
    cache = st.session_state.lessons
    if lesson_id in cache:
        return cache[lesson_id]

    client = st.session_state.client
    if client is None:
        raise GenerationError("GEMINI_API_KEY not set. Add it to your .env file to generate lessons.")

    provider = LessonProvider(client)
    progress = st.session_state.user.progress_for(skill)
    lesson = asyncio.run(provider.generate_lesson(skill, level, lesson_number, progress))
    cache[lesson_id] = lesson
    return lesson


def open_lesson(skill: Skill, level: Level, lesson_number: int):
    with st.spinner("Preparing your lesson..."):
        try:
            lesson = get_or_create_lesson(skill, level, lesson_number)
        except GenerationError as e:
            logger.error(f"Lesson generation failed: {e}")
            st.session_state.generation_error = (lesson_number, str(e))
            st.rerun()

    st.session_state.generation_error = None
    reset_lesson_state()
    st.session_state.nav.select_lesson(lesson)
    st.rerun()


def render_lesson_list():
    nav = st.session_state.nav
    skill, level = nav.state.skill, nav.state.level
    progress = st.session_state.user.progress_for(skill)

    if st.button("← Back to levels"):
        go_back()

    st.title(f"{SECTION_INFO[skill]['icon']} {SECTION_INFO[skill]['title']}: {LEVEL_INFO[level]['title']}")

    notice = st.session_state.notice
    if notice:
        if notice["goal_reached"]:
            st.balloons()
            st.success(f"🎉 You reached the {level.value} XP goal for {skill.value}!")
        if notice["badges"]:
            st.markdown(get_dashboard_css(), unsafe_allow_html=True)
            st.markdown(render_badge_notice(notice["badges"]), unsafe_allow_html=True)
        st.success(f"Lesson complete! +{notice['xp']} XP")
        st.session_state.notice = None

    error = st.session_state.generation_error
    if error:
        lesson_number, message = error
        st.error(f"Could not load lesson {lesson_number}: {message}")
        if st.button("Retry", key="retry_generation"):
            open_lesson(skill, level, lesson_number)

    indicators = {
        LessonAvailability.COMPLETED: "✅",
        LessonAvailability.AVAILABLE: "▶️",
        LessonAvailability.LOCKED: "🔒",
    }

    for slot in build_lesson_list(skill, level, progress):
        col1, col2 = st.columns([1, 9])
        with col1:
            st.markdown(indicators[slot.availability])
        with col2:
            label = f"Lesson {slot.number}"
            if slot.availability == LessonAvailability.COMPLETED:
                label += " (review)"
            if st.button(
                label,
                key=f"lesson_{slot.lesson_id}",
                disabled=slot.availability == LessonAvailability.LOCKED,
                use_container_width=True,
            ):
                open_lesson(skill, level, slot.number)


# -----------------------------------------------------------------------------
# Lesson
# -----------------------------------------------------------------------------

def answer_widget(assignment, key: str):
    """Input widget for an assignment; returns the current answer or None."""
    if assignment.type == "mcq":
        options = assignment.options
        return st.radio(
            assignment.question,
            options=list(range(len(options))),
            format_func=lambda i: options[i],
            index=None,
            key=key,
        )

    if assignment.type == "true-false":
        return st.radio(
            assignment.question,
            options=[True, False],
            format_func=lambda v: "True" if v else "False",
            index=None,
            key=key,
        )

    if assignment.type == "vocabulary" and assignment.options:
        options = assignment.options
        choice = st.radio(
            assignment.question,
            options=list(range(len(options))),
            format_func=lambda i: options[i],
            index=None,
            key=key,
        )
        if choice is None or isinstance(assignment.correct_answer, int):
            return choice
        return options[choice]

    if assignment.type in ("fill-blank", "vocabulary"):
        value = st.text_input(assignment.question, key=key)
        return value.strip() or None

    if assignment.type == "writing":
        for line in assignment.instructions:
            st.markdown(f"- {line}")
        limits = []
        if assignment.min_words:
            limits.append(f"min {assignment.min_words} words")
        if assignment.max_words:
            limits.append(f"max {assignment.max_words} words")
        if limits:
            st.caption(", ".join(limits))
        value = st.text_area(assignment.question, height=200, key=key)
        st.caption(f"{len(value.split())} words")
        return value if value.strip() else None

    if assignment.type == "speaking":
        value = st.text_area(
            assignment.question,
            placeholder="Say your answer aloud, then type what you said here.",
            key=key,
        )
        return value if value.strip() else None

    value = st.text_area(assignment.question, key=key)
    return value if value.strip() else None


def grade_answer(assignment, answer):
    if assignment.type in OBJECTIVE_TYPES:
        return grade_objective(assignment, answer)

    client = st.session_state.client
    if client is None:
        st.error("GEMINI_API_KEY not set. Add it to your .env file to grade open answers.")
        return None

    grader = AnswerGrader(client, timeout=st.session_state.settings.grading_timeout)
    with st.spinner("Checking your answer..."):
        return asyncio.run(grader.grade(assignment, answer))


def render_assignment(assignment, index: int):
    st.markdown(render_assignment_header(assignment, index), unsafe_allow_html=True)

    feedback = st.session_state.feedback.get(assignment.id)
    if feedback is not None:
        st.markdown(f"**{assignment.question}**")
        st.markdown(render_feedback(feedback, assignment), unsafe_allow_html=True)
        return

    if assignment.id in st.session_state.skipped:
        st.markdown(f"**{assignment.question}**")
        st.caption("Skipped")
        return

    if not is_renderable(assignment):
        st.markdown(f"**{assignment.question}**")
        st.markdown(render_placeholder(assignment), unsafe_allow_html=True)
        if st.button("Skip", key=f"skip_{assignment.id}"):
            st.session_state.skipped.add(assignment.id)
            st.rerun()
        return

    answer = answer_widget(assignment, key=f"answer_{assignment.id}")
    if st.button("Submit", key=f"submit_{assignment.id}", disabled=answer is None):
        result = grade_answer(assignment, answer)
        if result is not None:
            st.session_state.feedback[assignment.id] = result
            st.rerun()


def complete_lesson(lesson):
    nav = st.session_state.nav
    skill, level = nav.state.skill, nav.state.level
    earned = calculate_lesson_xp(lesson, st.session_state.feedback)

    outcome = finish_lesson(st.session_state.user, skill, level, lesson.id, earned)
    st.session_state.user = outcome.user
    st.session_state.store.save(outcome.user)
    logger.info(f"Completed {lesson.id}: +{earned} XP, new badges {outcome.new_badges}")

    st.session_state.notice = {
        "xp": earned,
        "badges": outcome.new_badges,
        "goal_reached": outcome.level_goal_reached,
    }
    go_back()


def render_lesson_view():
    lesson = st.session_state.nav.state.lesson

    if st.button("← Back to lessons"):
        go_back()

    st.title(lesson.title)
    st.markdown(get_lesson_css(), unsafe_allow_html=True)
    st.markdown(render_tutorial(lesson), unsafe_allow_html=True)

    audio_text = get_audio_text(lesson)
    if audio_text:
        st.subheader("🎧 Listen")
        components.html(render_speech_player(audio_text, key=lesson.id), height=60)

    body = render_content(lesson)
    if body:
        st.markdown(body, unsafe_allow_html=True)

    st.divider()
    st.subheader("Exercises")
    for i, assignment in enumerate(lesson.assignments):
        render_assignment(assignment, i)

    st.divider()
    feedback = st.session_state.feedback
    finished = is_lesson_finished(lesson, feedback, st.session_state.skipped)
    st.markdown(
        f"**Points so far:** {calculate_lesson_xp(lesson, feedback)} / {lesson.total_points}"
    )
    if st.button(
        "Complete lesson",
        type="primary",
        disabled=not finished,
        use_container_width=True,
    ):
        complete_lesson(lesson)


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()

    st.markdown(get_dashboard_css(), unsafe_allow_html=True)
    st.markdown(render_header(st.session_state.user), unsafe_allow_html=True)

    view = st.session_state.nav.view
    if view == View.DASHBOARD:
        render_dashboard()
    elif view == View.LEVEL_SELECTOR:
        render_level_selector()
    elif view == View.LESSON_LIST:
        render_lesson_list()
    elif view == View.LESSON:
        render_lesson_view()


if __name__ == "__main__":
    main()
