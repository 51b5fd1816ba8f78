"""
Lesson renderer - HTML fragments for lesson display.

Features:
- Tutorial and skill-specific content (passage, word list, speaking notes)
- Assignment headers with point values
- Grading feedback boxes
- Placeholders for assignment types without an input widget
"""

from typing import Optional
import html

from englishai.schemas import (
    AssignmentBase,
    Lesson,
    ListeningContent,
    ReadingContent,
    SpeakingContent,
    VocabularyContent,
    WordEntry,
)
from englishai.tutor import AIFeedback, points_earned


# Types the lesson page has an input widget for. Others get a placeholder
# with a Skip action.
RENDERABLE_TYPES = {"mcq", "true-false", "fill-blank", "open", "speaking", "writing", "vocabulary"}

TYPE_LABELS = {
    "mcq": "Multiple choice",
    "true-false": "True or false",
    "fill-blank": "Fill in the blank",
    "open": "Open answer",
    "speaking": "Speaking",
    "writing": "Writing",
    "matching": "Matching",
    "vocabulary": "Vocabulary",
    "grammar": "Grammar",
}


def get_lesson_css() -> str:
    """Get CSS styles for lesson display."""
    return """
    <style>
    .tutorial-box {
        background: #e8f5e9;
        border-left: 4px solid #4CAF50;
        border-radius: 8px;
        padding: 1em 1.2em;
        margin: 1em 0;
        line-height: 1.6;
        white-space: pre-wrap;
    }
    .passage-box {
        background: #fafafa;
        border: 1px solid #e0e0e0;
        border-radius: 8px;
        padding: 1.2em;
        margin: 1em 0;
        font-size: 1.05em;
        line-height: 1.8;
        white-space: pre-wrap;
    }
    .word-card {
        border-bottom: 1px solid #eeeeee;
        padding: 0.6em 0;
    }
    .word-head {
        font-weight: 600;
        font-size: 1.1em;
        color: #1565C0;
    }
    .word-ipa {
        color: #888;
        margin-left: 0.5em;
    }
    .word-example {
        color: #555;
        font-style: italic;
    }
    .word-synonyms {
        color: #777;
        font-size: 0.9em;
    }
    .assignment-header {
        display: flex;
        justify-content: space-between;
        font-weight: 600;
        margin-top: 1.2em;
    }
    .assignment-type {
        color: #7B1FA2;
        font-size: 0.85em;
    }
    .feedback-box {
        border-radius: 8px;
        padding: 0.8em 1em;
        margin: 0.6em 0;
    }
    .feedback-correct {
        background: #e8f5e9;
        border-left: 4px solid #4CAF50;
    }
    .feedback-incorrect {
        background: #ffebee;
        border-left: 4px solid #E53935;
    }
    .placeholder-box {
        background: #fff3e0;
        border-left: 4px solid #FF9800;
        border-radius: 8px;
        padding: 0.8em 1em;
        color: #e65100;
    }
    </style>
    """


def render_tutorial(lesson: Lesson) -> str:
    if not lesson.tutorial:
        return ""
    return f'<div class="tutorial-box">📘 {html.escape(lesson.tutorial)}</div>'


def render_word(entry: WordEntry) -> str:
    """Render one vocabulary word with its optional details."""
    parts = [f'<div class="word-head">{html.escape(entry.word)}']
    if entry.pronunciation:
        parts.append(f'<span class="word-ipa">{html.escape(entry.pronunciation)}</span>')
    parts.append("</div>")
    if entry.definition:
        parts.append(f"<div>{html.escape(entry.definition)}</div>")
    if entry.example:
        parts.append(f'<div class="word-example">"{html.escape(entry.example)}"</div>')
    if entry.synonyms:
        synonyms = ", ".join(html.escape(s) for s in entry.synonyms)
        parts.append(f'<div class="word-synonyms">Synonyms: {synonyms}</div>')
    return f'<div class="word-card">{"".join(parts)}</div>'


def render_content(lesson: Lesson) -> str:
    """
    Render the skill-specific body of a lesson.

    Listening content is not rendered as text: the audio text is only played
    through the speech player.
    """
    content = lesson.content
    if isinstance(content, ReadingContent):
        return f'<div class="passage-box">{html.escape(content.passage)}</div>'
    if isinstance(content, SpeakingContent) and content.instructions:
        return f'<div class="tutorial-box">🎤 {html.escape(content.instructions)}</div>'
    if isinstance(content, VocabularyContent):
        return "".join(render_word(entry) for entry in content.words)
    return ""


def get_audio_text(lesson: Lesson) -> Optional[str]:
    if isinstance(lesson.content, ListeningContent) and lesson.content.audio_text:
        return lesson.content.audio_text
    return None


def is_renderable(assignment: AssignmentBase) -> bool:
    return assignment.type in RENDERABLE_TYPES


def render_assignment_header(assignment: AssignmentBase, index: int) -> str:
    label = TYPE_LABELS.get(assignment.type, assignment.type)
    return f"""
    <div class="assignment-header">
        <span>Question {index + 1} <span class="assignment-type">{html.escape(label)}</span></span>
        <span>{assignment.points} pts</span>
    </div>
    """


def render_placeholder(assignment: AssignmentBase) -> str:
    label = TYPE_LABELS.get(assignment.type, assignment.type)
    return (
        f'<div class="placeholder-box">{html.escape(label)} exercises are not available yet. '
        f'You can skip this question.</div>'
    )


def render_feedback(feedback: AIFeedback, assignment: AssignmentBase) -> str:
    """Feedback box with score and points earned."""
    css_class = "feedback-correct" if feedback.correct else "feedback-incorrect"
    icon = "✅" if feedback.correct else "❌"
    earned = points_earned(feedback, assignment)
    return f"""
    <div class="feedback-box {css_class}">
        <strong>{icon} Score: {feedback.score}/100</strong> (+{earned} XP)
        <div>{html.escape(feedback.feedback)}</div>
    </div>
    """


def calculate_lesson_xp(lesson: Lesson, feedback: dict[str, AIFeedback]) -> int:
    """Sum of points earned over graded assignments."""
    return sum(
        points_earned(feedback[a.id], a)
        for a in lesson.assignments
        if a.id in feedback
    )


def is_lesson_finished(lesson: Lesson, feedback: dict[str, AIFeedback], skipped: set[str]) -> bool:
    """Every assignment has been graded or skipped."""
    return all(a.id in feedback or a.id in skipped for a in lesson.assignments)
