"""
Dashboard renderer - Header stats, section cards and level cards.

Features:
- Header with total XP, streak and earned badge icons
- One card per skill with level, XP progress and completed count
- Level selector cards with gating state
- New badge notice shown after a lesson
"""

import html

from englishai.classroom import BADGES_BY_ID, LEVEL_XP_GOALS, LevelCard, get_user_badges
from englishai.schemas import Level, Skill, User, UserProgress


SECTION_INFO = {
    Skill.LISTENING: {
        "title": "Listening",
        "icon": "🎧",
        "description": "Improve your listening comprehension with audio exercises",
    },
    Skill.READING: {
        "title": "Reading",
        "icon": "📖",
        "description": "Enhance reading skills with passages and comprehension questions",
    },
    Skill.SPEAKING: {
        "title": "Speaking",
        "icon": "🎤",
        "description": "Practice pronunciation and speaking fluency",
    },
    Skill.WRITING: {
        "title": "Writing",
        "icon": "✍️",
        "description": "Develop writing skills through guided exercises",
    },
    Skill.GRAMMAR: {
        "title": "Grammar",
        "icon": "📝",
        "description": "Master English grammar rules and structures",
    },
    Skill.VOCABULARY: {
        "title": "Vocabulary",
        "icon": "📚",
        "description": "Expand your vocabulary with new words and phrases",
    },
}

LEVEL_INFO = {
    Level.BEGINNER: {"title": "Beginner", "icon": "🌱", "description": "Build a strong foundation"},
    Level.INTERMEDIATE: {"title": "Intermediate", "icon": "🌿", "description": "Expand your skills"},
    Level.ADVANCED: {"title": "Advanced", "icon": "🌳", "description": "Refine and perfect"},
}

MAX_HEADER_BADGES = 3


def get_dashboard_css() -> str:
    """Get CSS styles for the dashboard."""
    return """
    <style>
    .app-header {
        display: flex;
        justify-content: space-between;
        align-items: center;
        background: linear-gradient(135deg, #1976D2 0%, #7B1FA2 100%);
        color: white;
        border-radius: 12px;
        padding: 1em 1.5em;
        margin-bottom: 1.5em;
    }
    .app-title {
        font-size: 1.5em;
        font-weight: 700;
    }
    .header-stats {
        display: flex;
        gap: 1.2em;
        font-size: 1.05em;
    }
    .section-card {
        background: white;
        border: 1px solid #e0e0e0;
        border-radius: 12px;
        padding: 1.2em;
        margin-bottom: 0.8em;
    }
    .section-icon {
        font-size: 2em;
    }
    .section-title {
        font-weight: 600;
        font-size: 1.2em;
        color: #333;
    }
    .section-description {
        color: #666;
        font-size: 0.9em;
        margin: 0.3em 0 0.8em 0;
    }
    .section-meta {
        display: flex;
        justify-content: space-between;
        font-size: 0.85em;
        color: #555;
        margin-top: 0.4em;
    }
    .level-pill {
        display: inline-block;
        background: #e3f2fd;
        color: #1565C0;
        border-radius: 12px;
        padding: 0.1em 0.7em;
        font-size: 0.8em;
        text-transform: capitalize;
    }
    .progress-track {
        background: #eeeeee;
        border-radius: 6px;
        height: 10px;
        overflow: hidden;
    }
    .progress-fill {
        background: linear-gradient(90deg, #4CAF50, #8BC34A);
        height: 100%;
    }
    .level-up-note {
        color: #388E3C;
        font-weight: 600;
        font-size: 0.85em;
        margin-top: 0.4em;
    }
    .level-card {
        border-radius: 12px;
        padding: 1em;
        border: 2px solid #e0e0e0;
        text-align: center;
    }
    .level-card.current {
        border-color: #1976D2;
    }
    .level-card.locked {
        opacity: 0.5;
    }
    .badge-notice {
        background: #fff8e1;
        border-left: 4px solid #FFC107;
        border-radius: 8px;
        padding: 1em;
        margin: 1em 0;
    }
    </style>
    """


def render_header(user: User) -> str:
    """Header bar with total XP, streak and up to three badge icons."""
    badges = get_user_badges(user)
    icons = "".join(html.escape(badge.icon) for badge in badges[:MAX_HEADER_BADGES])
    overflow = len(badges) - MAX_HEADER_BADGES
    if overflow > 0:
        icons += f" +{overflow}"

    return f"""
    <div class="app-header">
        <div class="app-title">🎓 EnglishAI</div>
        <div class="header-stats">
            <span title="Total XP">⭐ {user.total_xp} XP</span>
            <span title="Day streak">🔥 {user.streak}</span>
            <span title="Badges">🏆 {len(badges)} {icons}</span>
        </div>
    </div>
    """


def progress_percent(xp: int, goal: int) -> int:
    if goal <= 0:
        return 100
    return min(100, int(xp / goal * 100))


def render_progress_bar(xp: int, goal: int) -> str:
    return (
        f'<div class="progress-track">'
        f'<div class="progress-fill" style="width: {progress_percent(xp, goal)}%"></div>'
        f'</div>'
    )


def render_section_card(skill: Skill, progress: UserProgress) -> str:
    """Card for one skill on the dashboard."""
    info = SECTION_INFO[skill]
    goal = LEVEL_XP_GOALS[progress.level]
    reached = progress.xp >= goal

    if reached and progress.level == Level.ADVANCED:
        note = '<div class="level-up-note">Mastered!</div>'
    elif reached:
        note = '<div class="level-up-note">Ready to level up!</div>'
    else:
        note = ""

    return f"""
    <div class="section-card">
        <span class="section-icon">{info['icon']}</span>
        <span class="section-title">{html.escape(info['title'])}</span>
        <span class="level-pill">{progress.level.value}</span>
        <div class="section-description">{html.escape(info['description'])}</div>
        {render_progress_bar(progress.xp, goal)}
        <div class="section-meta">
            <span>{progress.xp} / {goal} XP</span>
            <span>{len(progress.completed)} lessons completed</span>
        </div>
        {note}
    </div>
    """


def render_level_card(card: LevelCard) -> str:
    info = LEVEL_INFO[card.level]
    classes = ["level-card"]
    if card.is_current:
        classes.append("current")
    if not card.unlocked:
        classes.append("locked")

    status = "✅ Completed" if card.completed else f"{card.completed_count} lessons done"
    if not card.unlocked:
        status = "🔒 Locked"

    return f"""
    <div class="{' '.join(classes)}">
        <div class="section-icon">{info['icon']}</div>
        <div class="section-title">{info['title']}</div>
        <div class="section-description">{info['description']}</div>
        <div>{status}</div>
    </div>
    """


def render_badge_notice(badge_ids: list[str]) -> str:
    """Notice listing badges earned by the last lesson."""
    badges = [BADGES_BY_ID[badge_id] for badge_id in badge_ids if badge_id in BADGES_BY_ID]
    if not badges:
        return ""

    items = "".join(
        f"<div>{html.escape(badge.icon)} <strong>{html.escape(badge.name)}</strong>"
        f" - {html.escape(badge.description)}</div>"
        for badge in badges
    )
    return f"""
    <div class="badge-notice">
        <div class="section-title">🏆 New badge{'s' if len(badges) > 1 else ''} earned!</div>
        {items}
    </div>
    """
