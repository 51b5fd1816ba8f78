"""
EnglishAI Schemas - Pydantic models for the English learning app.

This module exports all schema classes for:
- Progress: skills, levels, per-skill progress, user record
- Lesson: lesson content variants, assignment variants, lessons
- Badge: achievement catalog entries
- Skill data: optional static lesson documents
"""

# Progress schemas
from .progress import (
    Skill,
    Level,
    SKILLS,
    LEVELS,
    UserProgress,
    User,
)

# Lesson schemas
from .lesson import (
    ListeningContent,
    ReadingContent,
    SpeakingContent,
    WordEntry,
    VocabularyContent,
    LessonBody,
    AssignmentBase,
    MCQAssignment,
    TrueFalseAssignment,
    FillBlankAssignment,
    OpenAssignment,
    SpeakingAssignment,
    WritingAssignment,
    MatchingAssignment,
    VocabularyAssignment,
    GrammarAssignment,
    Assignment,
    ASSIGNMENT_TYPES,
    Lesson,
    make_lesson_id,
)

# Badge schema
from .badge import (
    Badge,
    BadgeCategory,
)

# Skill data schemas
from .skill_data import (
    SectionData,
    SkillData,
)

__all__ = [
    # Progress
    'Skill',
    'Level',
    'SKILLS',
    'LEVELS',
    'UserProgress',
    'User',
    # Lesson
    'ListeningContent',
    'ReadingContent',
    'SpeakingContent',
    'WordEntry',
    'VocabularyContent',
    'LessonBody',
    'AssignmentBase',
    'MCQAssignment',
    'TrueFalseAssignment',
    'FillBlankAssignment',
    'OpenAssignment',
    'SpeakingAssignment',
    'WritingAssignment',
    'MatchingAssignment',
    'VocabularyAssignment',
    'GrammarAssignment',
    'Assignment',
    'ASSIGNMENT_TYPES',
    'Lesson',
    'make_lesson_id',
    # Badge
    'Badge',
    'BadgeCategory',
    # Skill data
    'SectionData',
    'SkillData',
]
