"""
EnglishAI Classroom - Runtime components for progress and navigation.

This module provides:
- ProgressStore: Load and save the learner's progress record
- Progress engine: XP, levels, streaks, lesson completion
- Badges: Static catalog and eligibility checks
- NavigationController: View state machine and gating rules
- SkillDataLoader: Optional static lesson content
"""

from .progress import (
    ProgressStore,
    SQLiteBlobStore,
    MemoryBlobStore,
    STORAGE_KEY,
)

from .engine import (
    LessonOutcome,
    LEVEL_UP_THRESHOLDS,
    LEVEL_XP_GOALS,
    update_streak,
    add_xp,
    complete_activity,
    award_badges,
    finish_lesson,
    xp_goal_for,
)

from .badges import (
    BADGES,
    BADGES_BY_ID,
    is_badge_earned,
    check_new_badges,
    get_user_badges,
)

from .navigator import (
    View,
    NavigationError,
    NavigationState,
    NavigationController,
    LessonAvailability,
    LevelCard,
    NavigationLesson,
    completed_in_level,
    is_level_completed,
    can_access_level,
    can_access_lesson,
    get_lesson_availability,
    build_lesson_list,
    build_level_cards,
)

from .loader import SkillDataLoader

__all__ = [
    # Progress store
    "ProgressStore",
    "SQLiteBlobStore",
    "MemoryBlobStore",
    "STORAGE_KEY",
    # Engine
    "LessonOutcome",
    "LEVEL_UP_THRESHOLDS",
    "LEVEL_XP_GOALS",
    "update_streak",
    "add_xp",
    "complete_activity",
    "award_badges",
    "finish_lesson",
    "xp_goal_for",
    # Badges
    "BADGES",
    "BADGES_BY_ID",
    "is_badge_earned",
    "check_new_badges",
    "get_user_badges",
    # Navigator
    "View",
    "NavigationError",
    "NavigationState",
    "NavigationController",
    "LessonAvailability",
    "LevelCard",
    "NavigationLesson",
    "completed_in_level",
    "is_level_completed",
    "can_access_level",
    "can_access_lesson",
    "get_lesson_availability",
    "build_lesson_list",
    "build_level_cards",
    # Loader
    "SkillDataLoader",
]
