"""
Badge catalog and eligibility rules.
"""

from englishai.schemas import Badge, Skill, User


BADGES: list[Badge] = [
    Badge(id="first-steps", name="First Steps", icon="👶", description="Complete your first activity", requirement=1, category="general"),
    Badge(id="streak-3", name="Consistency", icon="🔥", description="Maintain a 3-day streak", requirement=3, category="streak"),
    Badge(id="streak-7", name="Week Warrior", icon="⚡", description="Maintain a 7-day streak", requirement=7, category="streak"),
    Badge(id="grammar-ninja", name="Grammar Ninja", icon="🥷", description="Complete 10 grammar exercises", requirement=10, category="grammar"),
    Badge(id="word-wizard", name="Word Wizard", icon="🪄", description="Learn 50 new vocabulary words", requirement=50, category="vocabulary"),
    Badge(id="listening-master", name="Listening Master", icon="🎧", description="Complete 20 listening exercises", requirement=20, category="listening"),
    Badge(id="reading-champion", name="Reading Champion", icon="📖", description="Complete 15 reading exercises", requirement=15, category="reading"),
    Badge(id="speaking-star", name="Speaking Star", icon="⭐", description="Complete 10 speaking exercises", requirement=10, category="speaking"),
    Badge(id="writing-pro", name="Writing Pro", icon="✍️", description="Complete 12 writing exercises", requirement=12, category="writing"),
    Badge(id="xp-1000", name="Rising Star", icon="🌟", description="Earn 1000 total XP", requirement=1000, category="xp"),
    Badge(id="xp-5000", name="Super Learner", icon="🚀", description="Earn 5000 total XP", requirement=5000, category="xp"),
]

BADGES_BY_ID: dict[str, Badge] = {badge.id: badge for badge in BADGES}


def is_badge_earned(badge: Badge, user: User) -> bool:
    """Evaluate a badge's category rule against the user record."""
    if badge.category == "general":
        return user.total_xp > 0
    if badge.category == "streak":
        return user.streak >= badge.requirement
    if badge.category == "xp":
        return user.total_xp >= badge.requirement
    # remaining categories are skills
    progress = user.progress_for(Skill(badge.category))
    return len(progress.completed) >= badge.requirement


def check_new_badges(user: User) -> list[str]:
    """
    List badges the user now qualifies for but does not hold yet.

    Returns ids in catalog order. The user record is not modified; callers
    merge the result into `user.badges`.
    """
    held = set(user.badges)
    return [
        badge.id for badge in BADGES
        if badge.id not in held and is_badge_earned(badge, user)
    ]


def get_user_badges(user: User) -> list[Badge]:
    """Badges held by the user, in catalog order."""
    held = set(user.badges)
    return [badge for badge in BADGES if badge.id in held]
