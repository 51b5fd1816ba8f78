"""
Progress tracking schemas for EnglishAI.

Defines Pydantic models for learner progress including:
- Skills and levels
- Per-skill progress (level, XP, completed lessons)
- The persisted user record
"""

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field


class Skill(str, Enum):
    LISTENING = "listening"
    READING = "reading"
    SPEAKING = "speaking"
    WRITING = "writing"
    GRAMMAR = "grammar"
    VOCABULARY = "vocabulary"


class Level(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


SKILLS = list(Skill)
LEVELS = list(Level)


class UserProgress(BaseModel):
    level: Level = Level.BEGINNER
    xp: int = Field(default=0, ge=0)
    completed: list[str] = []  # lesson ids, unique


class User(BaseModel):
    listening: UserProgress = Field(default_factory=UserProgress)
    reading: UserProgress = Field(default_factory=UserProgress)
    speaking: UserProgress = Field(default_factory=UserProgress)
    writing: UserProgress = Field(default_factory=UserProgress)
    grammar: UserProgress = Field(default_factory=UserProgress)
    vocabulary: UserProgress = Field(default_factory=UserProgress)
    total_xp: int = Field(default=0, ge=0)  # additive only, never recomputed
    streak: int = Field(default=0, ge=0)
    last_active_date: date = Field(default_factory=date.today)
    badges: list[str] = []

    def progress_for(self, skill: Skill | str) -> UserProgress:
        return getattr(self, Skill(skill).value)
