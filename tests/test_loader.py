"""
Tests for the static skill-data loader.
"""

import json

import pytest

from englishai.classroom import SkillDataLoader
from englishai.schemas import Skill


def write_skill(data_dir, skill: str, lessons_by_level: dict):
    document = {
        level: {"title": level.title(), "lessons": lessons_by_level.get(level, [])}
        for level in ("beginner", "intermediate", "advanced")
    }
    (data_dir / f"{skill}.json").write_text(json.dumps(document), encoding="utf-8")


class TestSkillDataLoader:

    def test_missing_file(self, tmp_path):
        loader = SkillDataLoader(tmp_path)
        assert not loader.has_skill_data("reading")
        with pytest.raises(FileNotFoundError):
            loader.load_skill_data("reading")
        assert loader.get_lesson("reading", "beginner", 1) is None

    def test_invalid_file(self, tmp_path):
        (tmp_path / "grammar.json").write_text('{"beginner": 1}', encoding="utf-8")
        loader = SkillDataLoader(tmp_path)
        with pytest.raises(ValueError):
            loader.load_skill_data(Skill.GRAMMAR)
        assert loader.get_lesson("grammar", "beginner", 1) is None

    def test_get_lesson(self, tmp_path):
        write_skill(tmp_path, "reading", {
            "beginner": [
                {
                    "id": "reading-beginner-1",
                    "title": "The Library",
                    "content": {"kind": "reading", "passage": "Books everywhere."},
                    "assignments": [
                        {"id": "q1", "type": "true-false", "question": "Books?", "correct_answer": True},
                    ],
                },
            ],
        })
        loader = SkillDataLoader(tmp_path)
        assert loader.has_skill_data(Skill.READING)

        lesson = loader.get_lesson("reading", "beginner", 1)
        assert lesson.title == "The Library"
        assert lesson.assignments[0].correct_answer is True

        assert loader.get_lesson("reading", "beginner", 2) is None
        assert loader.get_lesson("reading", "advanced", 1) is None

    def test_load_section(self, tmp_path):
        write_skill(tmp_path, "writing", {})
        section = SkillDataLoader(tmp_path).load_section("writing", "intermediate")
        assert section.title == "Intermediate"
        assert section.lessons == []
