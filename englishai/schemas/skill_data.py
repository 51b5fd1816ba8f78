"""
Static skill-data schemas.

A skill-data document is an optional, pre-generated content source with one
section per level:

    {"beginner": {...}, "intermediate": {...}, "advanced": {...}}

Each section carries display metadata and a list of lessons.
"""

from pydantic import BaseModel

from .lesson import Lesson


class SectionData(BaseModel):
    title: str
    description: str = ""
    xp_required: int = 0
    lessons: list[Lesson] = []


class SkillData(BaseModel):
    beginner: SectionData
    intermediate: SectionData
    advanced: SectionData

    def section(self, level: str) -> SectionData:
        return getattr(self, level)
