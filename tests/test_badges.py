"""
Tests for the badge catalog and eligibility rules.
"""

from englishai.classroom import BADGES, BADGES_BY_ID, check_new_badges, get_user_badges, is_badge_earned
from englishai.schemas import User, UserProgress


def completed_ids(skill: str, count: int) -> list[str]:
    return [f"{skill}-beginner-{i}" for i in range(1, count + 1)]


class TestCatalog:

    def test_catalog_ids_in_order(self):
        assert [b.id for b in BADGES] == [
            "first-steps",
            "streak-3",
            "streak-7",
            "grammar-ninja",
            "word-wizard",
            "listening-master",
            "reading-champion",
            "speaking-star",
            "writing-pro",
            "xp-1000",
            "xp-5000",
        ]

    def test_lookup_by_id(self):
        assert BADGES_BY_ID["grammar-ninja"].requirement == 10
        assert BADGES_BY_ID["xp-5000"].category == "xp"


class TestEligibility:

    def test_fresh_user_has_nothing(self):
        assert check_new_badges(User()) == []

    def test_first_steps_needs_any_xp(self):
        assert check_new_badges(User(total_xp=1)) == ["first-steps"]

    def test_streak_badges(self):
        assert "streak-3" in check_new_badges(User(streak=3))
        assert "streak-7" not in check_new_badges(User(streak=6))
        assert {"streak-3", "streak-7"} <= set(check_new_badges(User(streak=7)))

    def test_xp_badges(self):
        new = check_new_badges(User(total_xp=1000))
        assert "xp-1000" in new
        assert "xp-5000" not in new

    def test_grammar_ninja_at_ten_completions(self):
        user = User(
            total_xp=100,
            grammar=UserProgress(completed=completed_ids("grammar", 10)),
            badges=["first-steps"],
        )
        assert check_new_badges(user) == ["grammar-ninja"]

    def test_grammar_ninja_not_at_nine(self):
        user = User(grammar=UserProgress(completed=completed_ids("grammar", 9)))
        assert not is_badge_earned(BADGES_BY_ID["grammar-ninja"], user)

    def test_held_badges_excluded(self):
        user = User(total_xp=10, streak=3, badges=["streak-3"])
        assert check_new_badges(user) == ["first-steps"]

    def test_catalog_order_preserved(self):
        user = User(
            total_xp=1200,
            streak=7,
            writing=UserProgress(completed=completed_ids("writing", 12)),
        )
        assert check_new_badges(user) == [
            "first-steps", "streak-3", "streak-7", "writing-pro", "xp-1000",
        ]

    def test_does_not_mutate(self):
        user = User(total_xp=10)
        check_new_badges(user)
        assert user.badges == []


class TestUserBadges:

    def test_catalog_order_and_unknown_ids_ignored(self):
        user = User(badges=["xp-1000", "retired-badge", "first-steps"])
        assert [b.id for b in get_user_badges(user)] == ["first-steps", "xp-1000"]
