"""
Lesson content schemas for EnglishAI.

Defines Pydantic models for generated lessons including:
- Skill-specific lesson content (audio text, passage, instructions, words)
- Assignment variants, one per assignment type
- The lesson itself
"""

from pydantic import BaseModel, Field
from typing import Annotated, Optional, Literal, Union


# -----------------------------------------------------------------------------
# Lesson content types
# -----------------------------------------------------------------------------

class ListeningContent(BaseModel):
    kind: Literal["listening"] = "listening"
    audio_text: str


class ReadingContent(BaseModel):
    kind: Literal["reading"] = "reading"
    passage: str


class SpeakingContent(BaseModel):
    kind: Literal["speaking"] = "speaking"
    instructions: str = ""


class WordEntry(BaseModel):
    """A vocabulary word introduced by a vocabulary lesson."""
    word: str
    definition: str = ""
    pronunciation: Optional[str] = None  # IPA
    example: Optional[str] = None
    synonyms: list[str] = []


class VocabularyContent(BaseModel):
    kind: Literal["vocabulary"] = "vocabulary"
    words: list[WordEntry] = []


LessonBody = Annotated[
    Union[
        ListeningContent,
        ReadingContent,
        SpeakingContent,
        VocabularyContent,
    ],
    Field(discriminator="kind"),
]


# -----------------------------------------------------------------------------
# Assignment types
# -----------------------------------------------------------------------------

class AssignmentBase(BaseModel):
    id: str
    type: str
    question: str
    points: int = Field(default=10, gt=0)
    context: Optional[str] = None


class MCQAssignment(AssignmentBase):
    type: Literal["mcq"] = "mcq"
    options: list[str] = Field(..., min_length=2)
    correct_answer: Optional[int] = None  # index into options


class TrueFalseAssignment(AssignmentBase):
    type: Literal["true-false"] = "true-false"
    correct_answer: Optional[bool] = None


class FillBlankAssignment(AssignmentBase):
    type: Literal["fill-blank"] = "fill-blank"
    correct_answer: Optional[str] = None


class OpenAssignment(AssignmentBase):
    type: Literal["open"] = "open"


class SpeakingAssignment(AssignmentBase):
    type: Literal["speaking"] = "speaking"


class WritingAssignment(AssignmentBase):
    type: Literal["writing"] = "writing"
    instructions: list[str] = []
    min_words: Optional[int] = Field(default=None, ge=0)
    max_words: Optional[int] = Field(default=None, ge=0)


class MatchingAssignment(AssignmentBase):
    type: Literal["matching"] = "matching"
    options: list[str] = []
    correct_answer: Optional[str] = None


class VocabularyAssignment(AssignmentBase):
    type: Literal["vocabulary"] = "vocabulary"
    options: list[str] = []
    correct_answer: Optional[Union[int, str]] = None


class GrammarAssignment(AssignmentBase):
    type: Literal["grammar"] = "grammar"
    correct_answer: Optional[str] = None


Assignment = Annotated[
    Union[
        MCQAssignment,
        TrueFalseAssignment,
        FillBlankAssignment,
        OpenAssignment,
        SpeakingAssignment,
        WritingAssignment,
        MatchingAssignment,
        VocabularyAssignment,
        GrammarAssignment,
    ],
    Field(discriminator="type"),
]

ASSIGNMENT_TYPES: dict[str, type[AssignmentBase]] = {
    "mcq": MCQAssignment,
    "true-false": TrueFalseAssignment,
    "fill-blank": FillBlankAssignment,
    "open": OpenAssignment,
    "speaking": SpeakingAssignment,
    "writing": WritingAssignment,
    "matching": MatchingAssignment,
    "vocabulary": VocabularyAssignment,
    "grammar": GrammarAssignment,
}


# -----------------------------------------------------------------------------
# Main lesson schema
# -----------------------------------------------------------------------------

class Lesson(BaseModel):
    """A generated lesson. Identity is (skill, level, lesson number)."""
    id: str
    title: str
    tutorial: str = ""
    content: Optional[LessonBody] = None
    assignments: list[Assignment] = []

    @property
    def total_points(self) -> int:
        return sum(a.points for a in self.assignments)


def make_lesson_id(skill: str, level: str, lesson_number: int) -> str:
    """Build the lesson id used for completion tracking."""
    return f"{skill}-{level}-{lesson_number}"
