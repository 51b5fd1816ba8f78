"""
LessonProvider - Generate lessons with the Gemini text service.

Each skill has its own generator. A generator:
1. Builds a prompt from the skill's YAML template, filling in level-specific
   difficulty descriptors (or a topic, for grammar and vocabulary)
2. Sends it to the text service
3. Extracts the first JSON object from the reply
4. Normalises the assignments and builds a Lesson, numbering assignments
   q1, q2, ... in the order the model returned them

Any failure raises GenerationError. Retrying is left to the learner.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from englishai.schemas import (
    ASSIGNMENT_TYPES,
    Lesson,
    Level,
    ListeningContent,
    ReadingContent,
    Skill,
    SpeakingContent,
    UserProgress,
    VocabularyContent,
    make_lesson_id,
)
from englishai.tutor.grader import OBJECTIVE_TYPES
from englishai.utils.json_extract import extract_json_object
from englishai.utils.prompt_loader import format_prompt, load_prompt


logger = logging.getLogger(__name__)

DEFAULT_POINTS = 10

PROMPT_NAMES = {
    Skill.LISTENING: "lesson_listening",
    Skill.READING: "lesson_reading",
    Skill.SPEAKING: "lesson_speaking",
    Skill.WRITING: "lesson_writing",
    Skill.GRAMMAR: "lesson_grammar",
    Skill.VOCABULARY: "lesson_vocabulary",
}

# Model output uses camelCase; schemas use snake_case
KEY_ALIASES = {
    "correctAnswer": "correct_answer",
    "minWords": "min_words",
    "maxWords": "max_words",
}


class GenerationError(Exception):
    """Raised when a lesson cannot be generated or parsed."""


# -----------------------------------------------------------------------------
# Response parsing
# -----------------------------------------------------------------------------

def normalize_assignment(raw: Any) -> Optional[dict[str, Any]]:
    """
    Map one model-produced assignment onto the schema's field names.

    Returns None for entries that are not objects or have an unknown type.
    Objective questions without a correct answer are dropped as well.
    """
    if not isinstance(raw, dict):
        logger.warning(f"Skipping non-object assignment: {raw!r}")
        return None

    data = {KEY_ALIASES.get(key, key): value for key, value in raw.items()}
    assignment_type = data.get("type")
    if assignment_type not in ASSIGNMENT_TYPES:
        logger.warning(f"Skipping assignment with unknown type: {assignment_type!r}")
        return None

    if not data.get("points"):
        data["points"] = DEFAULT_POINTS

    if assignment_type == "mcq":
        answer = data.get("correct_answer")
        options = data.get("options") or []
        # Models sometimes answer with the option text instead of its index
        if isinstance(answer, str):
            if answer in options:
                data["correct_answer"] = options.index(answer)
            elif answer.strip().isdigit():
                data["correct_answer"] = int(answer.strip())

    # Objective questions are graded by comparing against the stored answer
    if assignment_type in OBJECTIVE_TYPES and data.get("correct_answer") is None:
        logger.warning(f"Skipping {assignment_type} assignment without a correct answer")
        return None

    if assignment_type == "writing" and isinstance(data.get("instructions"), str):
        data["instructions"] = [data["instructions"]]

    return data


def build_content(skill: Skill, data: dict[str, Any]):
    """Build the skill-specific lesson content, if the skill has any."""
    if skill == Skill.LISTENING:
        return ListeningContent(audio_text=data.get("audioText", ""))
    if skill == Skill.READING:
        return ReadingContent(passage=data.get("passage", ""))
    if skill == Skill.SPEAKING:
        return SpeakingContent(instructions=data.get("instructions") or "")
    if skill == Skill.VOCABULARY:
        return VocabularyContent(words=data.get("words") or [])
    return None


def parse_lesson(
    skill: Skill | str,
    level: Level | str,
    lesson_number: int,
    response_text: str,
) -> Lesson:
    """
    Parse a model reply into a Lesson.

    Raises:
        GenerationError: If the reply has no JSON object or it doesn't fit
            the lesson schema
    """
    skill = Skill(skill)
    level = Level(level)

    data = extract_json_object(response_text)
    if data is None:
        raise GenerationError("Failed to parse lesson data: no JSON object in response")

    raw_assignments = data.get("assignments") or []
    if not isinstance(raw_assignments, list):
        raise GenerationError("Failed to parse lesson data: assignments is not a list")

    assignments = []
    for raw in raw_assignments:
        normalized = normalize_assignment(raw)
        if normalized is not None:
            normalized["id"] = f"q{len(assignments) + 1}"
            assignments.append(normalized)

    try:
        return Lesson(
            id=make_lesson_id(skill.value, level.value, lesson_number),
            title=data.get("title") or f"{skill.value.title()} Lesson {lesson_number}",
            tutorial=data.get("tutorial") or "",
            content=build_content(skill, data),
            assignments=assignments,
        )
    except ValidationError as e:
        raise GenerationError(f"Failed to parse lesson data: {e}") from e


# -----------------------------------------------------------------------------
# Provider
# -----------------------------------------------------------------------------

def build_progress_note(user_progress: Optional[UserProgress]) -> str:
    if user_progress is None or not user_progress.completed:
        return ""
    return (
        f"The learner has already completed {len(user_progress.completed)} lessons "
        f"in this skill; avoid repeating the most basic material.\n"
    )


class LessonProvider:
    """
    Generate lessons for any skill.

    Args:
        client: Text service with an async `generate_async(prompt) -> str`
        prompts_dir: Optional custom prompts directory
    """

    def __init__(self, client, prompts_dir: Optional[Path] = None):
        self.client = client
        self.prompts_dir = prompts_dir
        self._prompts: dict[Skill, dict] = {}

    def _prompt_config(self, skill: Skill) -> dict:
        if skill not in self._prompts:
            self._prompts[skill] = load_prompt(PROMPT_NAMES[skill], self.prompts_dir)
        return self._prompts[skill]

    def build_prompt(
        self,
        skill: Skill | str,
        level: Level | str,
        lesson_number: int,
        user_progress: Optional[UserProgress] = None,
    ) -> str:
        """Fill the skill's template for a level and lesson number."""
        skill = Skill(skill)
        level = Level(level)
        config = self._prompt_config(skill)

        values = {
            "level": level.value,
            "lesson_number": lesson_number,
            "progress_note": build_progress_note(user_progress),
        }
        if "difficulty" in config:
            values["difficulty"] = config["difficulty"][level.value]
        if "topics" in config:
            topics = config["topics"][level.value]
            values["topic"] = topics[lesson_number % len(topics)]

        return format_prompt(config["user_template"], **values)

    async def _generate(
        self,
        skill: Skill,
        level: Level | str,
        lesson_number: int,
        user_progress: Optional[UserProgress],
    ) -> Lesson:
        lesson_id = make_lesson_id(skill.value, Level(level).value, lesson_number)
        try:
            prompt = self.build_prompt(skill, level, lesson_number, user_progress)
        except ValueError as e:
            logger.error(f"Bad prompt template for {lesson_id}: {e}")
            raise GenerationError(f"Failed to build prompt for {lesson_id}: {e}") from e

        logger.info(f"Generating lesson {lesson_id}...")
        try:
            response_text = await self.client.generate_async(prompt)
        except Exception as e:
            logger.error(f"Text service call failed for {lesson_id}: {e}")
            raise GenerationError(f"Failed to generate lesson {lesson_id}: {e}") from e

        lesson = parse_lesson(skill, level, lesson_number, response_text)
        logger.info(f"Generated {lesson_id}: {lesson.title} ({len(lesson.assignments)} assignments)")
        return lesson

    async def generate_listening_lesson(self, level, lesson_number, user_progress=None) -> Lesson:
        return await self._generate(Skill.LISTENING, level, lesson_number, user_progress)

    async def generate_reading_lesson(self, level, lesson_number, user_progress=None) -> Lesson:
        return await self._generate(Skill.READING, level, lesson_number, user_progress)

    async def generate_speaking_lesson(self, level, lesson_number, user_progress=None) -> Lesson:
        return await self._generate(Skill.SPEAKING, level, lesson_number, user_progress)

    async def generate_writing_lesson(self, level, lesson_number, user_progress=None) -> Lesson:
        return await self._generate(Skill.WRITING, level, lesson_number, user_progress)

    async def generate_grammar_lesson(self, level, lesson_number, user_progress=None) -> Lesson:
        return await self._generate(Skill.GRAMMAR, level, lesson_number, user_progress)

    async def generate_vocabulary_lesson(self, level, lesson_number, user_progress=None) -> Lesson:
        return await self._generate(Skill.VOCABULARY, level, lesson_number, user_progress)

    async def generate_lesson(
        self,
        skill: Skill | str,
        level: Level | str,
        lesson_number: int,
        user_progress: Optional[UserProgress] = None,
    ) -> Lesson:
        """
        Generate a lesson for any skill.

        Raises:
            GenerationError: On an unknown skill, a failed call, or an
                unparseable reply
        """
        generators = {
            Skill.LISTENING: self.generate_listening_lesson,
            Skill.READING: self.generate_reading_lesson,
            Skill.SPEAKING: self.generate_speaking_lesson,
            Skill.WRITING: self.generate_writing_lesson,
            Skill.GRAMMAR: self.generate_grammar_lesson,
            Skill.VOCABULARY: self.generate_vocabulary_lesson,
        }
        try:
            generator = generators[Skill(skill)]
        except ValueError as e:
            raise GenerationError(f"Unknown skill: {skill}") from e
        return await generator(level, lesson_number, user_progress)
