"""
EnglishAI Tutor - Text-service backed lesson generation and grading.

This module provides:
- GeminiClient: Prompt in, free text out
- LessonProvider: Per-skill lesson generators
- AnswerGrader: Local and remote answer grading
"""

from .client import GeminiClient

from .lessons import (
    GenerationError,
    LessonProvider,
    normalize_assignment,
    parse_lesson,
)

from .grader import (
    AIFeedback,
    AnswerGrader,
    UnsupportedAssignmentError,
    OBJECTIVE_TYPES,
    SUBJECTIVE_TYPES,
    points_earned,
    grade_objective,
    heuristic_feedback,
    is_gradable,
)

__all__ = [
    # Client
    "GeminiClient",
    # Lessons
    "GenerationError",
    "LessonProvider",
    "normalize_assignment",
    "parse_lesson",
    # Grading
    "AIFeedback",
    "AnswerGrader",
    "UnsupportedAssignmentError",
    "OBJECTIVE_TYPES",
    "SUBJECTIVE_TYPES",
    "points_earned",
    "grade_objective",
    "heuristic_feedback",
    "is_gradable",
]
