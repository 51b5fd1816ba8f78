"""
Navigator - View state machine and access gating.

Provides:
- NavigationState snapshots (dashboard, level selector, lesson list, lesson)
- NavigationController with forward transitions and back navigation
- Level and lesson availability for the view layer
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from englishai.config import LESSONS_PER_LEVEL, LEVEL_GATING_ENABLED
from englishai.schemas import LEVELS, Lesson, Level, Skill, UserProgress, make_lesson_id


class View(str, Enum):
    DASHBOARD = "dashboard"
    LEVEL_SELECTOR = "level-selector"
    LESSON_LIST = "lesson-list"
    LESSON = "lesson"


class NavigationError(Exception):
    """Raised for a transition that is not allowed from the current view."""


@dataclass(frozen=True)
class NavigationState:
    """Immutable navigation snapshot."""
    view: View = View.DASHBOARD
    skill: Optional[Skill] = None
    level: Optional[Level] = None
    lesson: Optional[Lesson] = None


# -----------------------------------------------------------------------------
# Transitions
# -----------------------------------------------------------------------------

def _require_view(state: NavigationState, view: View, action: str):
    if state.view != view:
        raise NavigationError(f"Cannot {action} from {state.view.value}")


def select_section(state: NavigationState, skill: Skill | str) -> NavigationState:
    _require_view(state, View.DASHBOARD, "select a section")
    return NavigationState(view=View.LEVEL_SELECTOR, skill=Skill(skill))


def select_level(state: NavigationState, level: Level | str) -> NavigationState:
    _require_view(state, View.LEVEL_SELECTOR, "select a level")
    return replace(state, view=View.LESSON_LIST, level=Level(level))


def select_lesson(state: NavigationState, lesson: Lesson) -> NavigationState:
    _require_view(state, View.LESSON_LIST, "select a lesson")
    return replace(state, view=View.LESSON, lesson=lesson)


def go_back(state: NavigationState) -> NavigationState:
    """Step back one view. The dashboard has nowhere to go back to."""
    if state.view == View.LESSON:
        return replace(state, view=View.LESSON_LIST, lesson=None)
    if state.view == View.LESSON_LIST:
        return replace(state, view=View.LEVEL_SELECTOR, level=None)
    if state.view == View.LEVEL_SELECTOR:
        return NavigationState()
    return state


class NavigationController:
    """
    Hold the current navigation snapshot and the snapshots before it.

    Each action replaces `state` with a new snapshot; earlier snapshots are
    kept in `history`.
    """

    def __init__(self, state: Optional[NavigationState] = None):
        self.state = state or NavigationState()
        self.history: list[NavigationState] = []

    def _apply(self, new_state: NavigationState) -> NavigationState:
        if new_state != self.state:
            self.history.append(self.state)
            self.state = new_state
        return self.state

    @property
    def view(self) -> View:
        return self.state.view

    def select_section(self, skill: Skill | str) -> NavigationState:
        return self._apply(select_section(self.state, skill))

    def select_level(self, level: Level | str) -> NavigationState:
        return self._apply(select_level(self.state, level))

    def select_lesson(self, lesson: Lesson) -> NavigationState:
        return self._apply(select_lesson(self.state, lesson))

    def back(self) -> NavigationState:
        return self._apply(go_back(self.state))


# -----------------------------------------------------------------------------
# Gating
# -----------------------------------------------------------------------------

class LessonAvailability(str, Enum):
    """Availability status for UI display."""
    LOCKED = "locked"           # Previous lesson not completed
    AVAILABLE = "available"     # Can start
    COMPLETED = "completed"     # Finished, can review


@dataclass
class LevelCard:
    """Level with gating metadata."""
    level: Level
    unlocked: bool
    completed: bool
    is_current: bool
    completed_count: int


@dataclass
class NavigationLesson:
    """Lesson slot with gating metadata."""
    lesson_id: str
    number: int
    availability: LessonAvailability


def completed_in_level(progress: UserProgress, level: Level | str) -> int:
    """Count completed lessons whose id carries the level token."""
    token = f"-{Level(level).value}-"
    return sum(1 for lesson_id in progress.completed if token in lesson_id)


def is_level_completed(progress: UserProgress, level: Level | str) -> bool:
    return completed_in_level(progress, level) >= LESSONS_PER_LEVEL


def can_access_level(
    progress: UserProgress,
    level: Level | str,
    gating_enabled: bool = LEVEL_GATING_ENABLED,
) -> bool:
    """
    Check whether a level may be opened.

    With gating off every level is open. With gating on, beginner is always
    open and each later level needs the one before it completed.
    """
    if not gating_enabled:
        return True
    index = LEVELS.index(Level(level))
    if index == 0:
        return True
    return is_level_completed(progress, LEVELS[index - 1])


def can_access_lesson(
    progress: UserProgress,
    skill: Skill | str,
    level: Level | str,
    index: int,
) -> bool:
    """
    Check whether the lesson at 0-based `index` may be opened.

    The first lesson is always open; every other lesson needs the previous
    one completed.
    """
    if index == 0:
        return True
    previous_id = make_lesson_id(Skill(skill).value, Level(level).value, index)
    return previous_id in progress.completed


def get_lesson_availability(
    progress: UserProgress,
    skill: Skill | str,
    level: Level | str,
    index: int,
) -> LessonAvailability:
    lesson_id = make_lesson_id(Skill(skill).value, Level(level).value, index + 1)
    if lesson_id in progress.completed:
        return LessonAvailability.COMPLETED
    if can_access_lesson(progress, skill, level, index):
        return LessonAvailability.AVAILABLE
    return LessonAvailability.LOCKED


def build_lesson_list(
    skill: Skill | str,
    level: Level | str,
    progress: UserProgress,
    lesson_count: int = LESSONS_PER_LEVEL,
) -> list[NavigationLesson]:
    """Lesson slots for a level, each annotated with its availability."""
    skill = Skill(skill)
    level = Level(level)
    return [
        NavigationLesson(
            lesson_id=make_lesson_id(skill.value, level.value, index + 1),
            number=index + 1,
            availability=get_lesson_availability(progress, skill, level, index),
        )
        for index in range(lesson_count)
    ]


def build_level_cards(
    progress: UserProgress,
    gating_enabled: bool = LEVEL_GATING_ENABLED,
) -> list[LevelCard]:
    """Level cards for the level selector."""
    return [
        LevelCard(
            level=level,
            unlocked=can_access_level(progress, level, gating_enabled),
            completed=is_level_completed(progress, level),
            is_current=progress.level == level,
            completed_count=completed_in_level(progress, level),
        )
        for level in LEVELS
    ]
