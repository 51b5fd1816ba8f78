"""
ProgressEngine - Pure functions over the User record.

Provides:
- XP awards with per-skill level promotion
- Daily streak tracking
- Idempotent activity completion
- Lesson completion (activity + XP + badges in one step)

Every function returns a new User; nothing here persists. Callers hand the
result to ProgressStore.save().
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from englishai.schemas import Level, Skill, User

from .badges import check_new_badges


# XP at which a skill is promoted out of its current level. Advanced is
# terminal, so it has no entry.
LEVEL_UP_THRESHOLDS = {
    Level.BEGINNER: 50,
    Level.INTERMEDIATE: 150,
}

# XP goal shown for each level; reaching it triggers a celebration.
LEVEL_XP_GOALS = {
    Level.BEGINNER: 50,
    Level.INTERMEDIATE: 150,
    Level.ADVANCED: 300,
}


@dataclass
class LessonOutcome:
    """Result of finishing a lesson."""
    user: User
    new_badges: list[str]
    level_goal_reached: bool


def update_streak(user: User, today: Optional[date] = None) -> User:
    """
    Update the daily streak for activity on `today`.

    One day after the last activity extends the streak, a longer gap restarts
    it at 1, and the same day leaves it alone. A last-active date in the
    future (clock moved back) counts as the same day.
    """
    today = today or date.today()
    days_diff = (today - user.last_active_date).days

    if days_diff == 1:
        streak = user.streak + 1
    elif days_diff > 1:
        streak = 1
    else:
        streak = user.streak

    return user.model_copy(update={"streak": streak, "last_active_date": today})


def add_xp(user: User, skill: Skill | str, amount: int, today: Optional[date] = None) -> User:
    """
    Award XP to a skill and to the running total, then refresh the streak.

    At most one promotion happens per call, checked against the post-award XP.

    Raises:
        ValueError: If amount is negative
    """
    if amount < 0:
        raise ValueError(f"XP amount must be non-negative, got {amount}")

    skill = Skill(skill)
    progress = user.progress_for(skill)
    xp = progress.xp + amount

    level = progress.level
    if level == Level.BEGINNER and xp >= LEVEL_UP_THRESHOLDS[Level.BEGINNER]:
        level = Level.INTERMEDIATE
    elif level == Level.INTERMEDIATE and xp >= LEVEL_UP_THRESHOLDS[Level.INTERMEDIATE]:
        level = Level.ADVANCED

    updated = user.model_copy(update={
        skill.value: progress.model_copy(update={"xp": xp, "level": level}),
        "total_xp": user.total_xp + amount,
    })
    return update_streak(updated, today)


def complete_activity(user: User, skill: Skill | str, activity_id: str) -> User:
    """Record an activity as completed. Repeated ids are ignored."""
    skill = Skill(skill)
    progress = user.progress_for(skill)
    if activity_id in progress.completed:
        return user

    return user.model_copy(update={
        skill.value: progress.model_copy(update={
            "completed": [*progress.completed, activity_id]
        }),
    })


def award_badges(user: User) -> tuple[User, list[str]]:
    """Merge newly earned badges into the user record."""
    new_badges = check_new_badges(user)
    if not new_badges:
        return user, []
    return user.model_copy(update={"badges": [*user.badges, *new_badges]}), new_badges


def finish_lesson(
    user: User,
    skill: Skill | str,
    level: Level | str,
    lesson_id: str,
    earned_xp: int,
    today: Optional[date] = None,
) -> LessonOutcome:
    """
    Apply everything that happens when a lesson is completed.

    Args:
        user: Current user record
        skill: Skill the lesson belongs to
        level: Level the lesson was taken at
        lesson_id: Lesson id (see make_lesson_id)
        earned_xp: Points earned across the lesson's assignments
        today: Override for the current date

    Returns:
        LessonOutcome with the updated user, newly earned badge ids, and
        whether the skill's XP has reached the goal for `level`
    """
    skill = Skill(skill)
    level = Level(level)

    updated = complete_activity(user, skill, lesson_id)
    updated = add_xp(updated, skill, earned_xp, today)
    updated, new_badges = award_badges(updated)

    goal_reached = updated.progress_for(skill).xp >= LEVEL_XP_GOALS[level]
    return LessonOutcome(user=updated, new_badges=new_badges, level_goal_reached=goal_reached)


def xp_goal_for(level: Level | str) -> int:
    """XP goal displayed for a level."""
    return LEVEL_XP_GOALS[Level(level)]
