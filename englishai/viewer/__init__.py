"""
EnglishAI Viewer - Rendering components for the Streamlit app.

This module provides:
- Dashboard header, section cards and level cards
- Lesson content, assignment and feedback rendering
- Browser speech playback for listening lessons
"""

from .dashboard import (
    SECTION_INFO,
    LEVEL_INFO,
    get_dashboard_css,
    render_header,
    render_progress_bar,
    render_section_card,
    render_level_card,
    render_badge_notice,
    progress_percent,
)

from .lesson import (
    RENDERABLE_TYPES,
    get_lesson_css,
    render_tutorial,
    render_content,
    render_word,
    get_audio_text,
    is_renderable,
    render_assignment_header,
    render_placeholder,
    render_feedback,
    calculate_lesson_xp,
    is_lesson_finished,
)

from .audio import (
    CHUNK_SIZE,
    INTER_CHUNK_DELAY_MS,
    SPEECH_RATE,
    split_text,
    render_speech_player,
)

__all__ = [
    # Dashboard
    "SECTION_INFO",
    "LEVEL_INFO",
    "get_dashboard_css",
    "render_header",
    "render_progress_bar",
    "render_section_card",
    "render_level_card",
    "render_badge_notice",
    "progress_percent",
    # Lesson
    "RENDERABLE_TYPES",
    "get_lesson_css",
    "render_tutorial",
    "render_content",
    "render_word",
    "get_audio_text",
    "is_renderable",
    "render_assignment_header",
    "render_placeholder",
    "render_feedback",
    "calculate_lesson_xp",
    "is_lesson_finished",
    # Audio
    "CHUNK_SIZE",
    "INTER_CHUNK_DELAY_MS",
    "SPEECH_RATE",
    "split_text",
    "render_speech_player",
]
