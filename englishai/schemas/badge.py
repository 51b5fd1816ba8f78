"""
Badge schema for EnglishAI.

Badges form a static catalog (see englishai.classroom.badges); users only
hold the ids of the badges they have earned.
"""

from typing import Literal

from pydantic import BaseModel, Field


BadgeCategory = Literal[
    "general",
    "streak",
    "xp",
    "grammar",
    "vocabulary",
    "listening",
    "reading",
    "speaking",
    "writing",
]


class Badge(BaseModel):
    id: str
    name: str
    icon: str
    description: str
    requirement: int = Field(..., ge=0)
    category: BadgeCategory
