"""
SkillDataLoader - Load optional static skill-data documents.

Each skill may ship a `<skill>.json` file in the data directory (see
scripts/generate_skill_data.py). When a document holds a lesson for a given
(skill, level, number), the app serves it instead of generating one.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from englishai.schemas import Lesson, Level, SectionData, Skill, SkillData, make_lesson_id


logger = logging.getLogger(__name__)


class SkillDataLoader:
    """
    Read-only access to static skill-data files.

    Documents are parsed on first use and cached for the loader's lifetime.
    """

    def __init__(self, data_dir: str | Path):
        """
        Args:
            data_dir: Directory containing <skill>.json files
        """
        self.data_dir = Path(data_dir)
        self._cache: dict[Skill, Optional[SkillData]] = {}

    def skill_path(self, skill: Skill | str) -> Path:
        return self.data_dir / f"{Skill(skill).value}.json"

    def has_skill_data(self, skill: Skill | str) -> bool:
        return self.skill_path(skill).exists()

    def load_skill_data(self, skill: Skill | str) -> SkillData:
        """
        Load the full document for a skill.

        Raises:
            FileNotFoundError: If the skill has no data file
            ValueError: If the file is not a valid skill-data document
        """
        path = self.skill_path(skill)
        if not path.exists():
            raise FileNotFoundError(f"Skill data not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            try:
                return SkillData.model_validate(json.load(f))
            except (json.JSONDecodeError, ValidationError) as e:
                raise ValueError(f"Invalid skill data in {path}: {e}") from e

    def load_section(self, skill: Skill | str, level: Level | str) -> SectionData:
        return self.load_skill_data(skill).section(Level(level).value)

    def _cached(self, skill: Skill) -> Optional[SkillData]:
        if skill not in self._cache:
            try:
                self._cache[skill] = self.load_skill_data(skill)
            except FileNotFoundError:
                self._cache[skill] = None
            except ValueError as e:
                logger.warning(str(e))
                self._cache[skill] = None
        return self._cache[skill]

    def get_lesson(
        self,
        skill: Skill | str,
        level: Level | str,
        lesson_number: int,
    ) -> Optional[Lesson]:
        """Find a static lesson, or None if there is none."""
        skill = Skill(skill)
        level = Level(level)
        data = self._cached(skill)
        if data is None:
            return None

        lesson_id = make_lesson_id(skill.value, level.value, lesson_number)
        for lesson in data.section(level.value).lessons:
            if lesson.id == lesson_id:
                return lesson
        return None
