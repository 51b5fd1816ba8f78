"""
AnswerGrader - Score learner answers.

Objective assignments (mcq, true-false, fill-blank, matching, vocabulary) are
graded locally by exact match. Open, speaking and writing answers go to the
text service, which is asked for a {correct, score, feedback} object; if the
reply has none, a length heuristic stands in.

A remote grading call never raises: timeouts and failures come back as a
zero-score result with a message the learner can act on.
"""

import asyncio
import logging
import math
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from englishai.config import DEFAULT_GRADING_TIMEOUT
from englishai.schemas import AssignmentBase, WritingAssignment
from englishai.utils.json_extract import extract_json_object
from englishai.utils.prompt_loader import format_prompt, load_prompt


logger = logging.getLogger(__name__)

OBJECTIVE_TYPES = {"mcq", "true-false", "fill-blank", "matching", "vocabulary"}
SUBJECTIVE_TYPES = {"open", "speaking", "writing"}

SPEAKING_FEEDBACK_CHARS = 150

TIMEOUT_MESSAGE = "The request timed out. Please check your internet connection and try again."
FAILURE_MESSAGE = "Unable to evaluate your answer at the moment. Please check your connection and try again."
FALLBACK_MESSAGE = "Good effort! Keep practicing to improve your English skills."
CORRECT_MESSAGE = "Correct! Well done."


class AIFeedback(BaseModel):
    correct: bool
    score: int = Field(..., ge=0, le=100)
    feedback: str


class UnsupportedAssignmentError(ValueError):
    """Raised for assignment types the grader cannot score."""


def points_earned(feedback: AIFeedback, assignment: AssignmentBase) -> int:
    """Points an answer contributes: score percentage of the assignment's points, rounded half up."""
    return math.floor(feedback.score / 100 * assignment.points + 0.5)


def count_words(text: str) -> int:
    return len(text.split())


def truncate_feedback(text: str, max_chars: Optional[int]) -> str:
    if max_chars is None or len(text) <= max_chars:
        return text
    return text[:max_chars - 3] + "..."


def describe_answer(assignment: AssignmentBase) -> str:
    """Human-readable correct answer (option text for index-based answers)."""
    answer = getattr(assignment, "correct_answer", None)
    options = getattr(assignment, "options", None) or []
    if isinstance(answer, int) and not isinstance(answer, bool) and 0 <= answer < len(options):
        return options[answer]
    if isinstance(answer, bool):
        return "True" if answer else "False"
    return str(answer)


def grade_objective(assignment: AssignmentBase, answer: Any) -> AIFeedback:
    """Exact-match grading for assignments with a known answer."""
    if answer == assignment.correct_answer:
        return AIFeedback(correct=True, score=100, feedback=CORRECT_MESSAGE)
    return AIFeedback(
        correct=False,
        score=0,
        feedback=f"Incorrect. The correct answer is: {describe_answer(assignment)}",
    )


def heuristic_feedback(answer: str, response_text: str) -> AIFeedback:
    """Stand-in result when the service reply carries no usable JSON."""
    long_enough = len(answer.strip()) > 10
    return AIFeedback(
        correct=long_enough,
        score=75 if long_enough else 25,
        feedback=response_text or FALLBACK_MESSAGE,
    )


class AnswerGrader:
    """
    Grade answers locally or through the text service.

    Args:
        client: Text service with an async `generate_async(prompt) -> str`
        timeout: Seconds to wait for a remote grading call
        prompts_dir: Optional custom prompts directory
    """

    def __init__(
        self,
        client,
        timeout: float = DEFAULT_GRADING_TIMEOUT,
        prompts_dir: Optional[Path] = None,
    ):
        self.client = client
        self.timeout = timeout
        self.prompts_dir = prompts_dir
        self._prompt_config: Optional[dict] = None

    @property
    def prompt_config(self) -> dict:
        if self._prompt_config is None:
            self._prompt_config = load_prompt("grade_answer", self.prompts_dir)
        return self._prompt_config

    def build_prompt(self, question: str, answer: str, context: Optional[str] = None) -> str:
        return format_prompt(
            self.prompt_config["user_template"],
            question=question,
            context_line=f"Context: {context}" if context else "",
            answer=answer,
        )

    async def check_open_answer(
        self,
        question: str,
        answer: str,
        context: Optional[str] = None,
        max_feedback_chars: Optional[int] = None,
    ) -> AIFeedback:
        """Grade a free-text answer with the text service."""
        prompt = self.build_prompt(question, answer, context)

        try:
            response_text = await asyncio.wait_for(
                self.client.generate_async(prompt), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            logger.warning(f"Grading timed out after {self.timeout}s")
            return AIFeedback(correct=False, score=0, feedback=TIMEOUT_MESSAGE)
        except Exception as e:
            logger.error(f"Error checking answer with AI: {e}")
            return AIFeedback(correct=False, score=0, feedback=FAILURE_MESSAGE)

        data = extract_json_object(response_text)
        result = None
        if data is not None:
            try:
                result = AIFeedback.model_validate(data)
            except ValidationError as e:
                logger.warning(f"Grading reply did not match the feedback shape: {e}")

        if result is None:
            result = heuristic_feedback(answer, response_text)

        result.feedback = truncate_feedback(result.feedback, max_feedback_chars)
        return result

    async def check_speaking_answer(self, prompt: str, transcript: str) -> AIFeedback:
        return await self.check_open_answer(
            f"Speaking prompt: {prompt}",
            transcript,
            self.prompt_config["speaking_context"],
            max_feedback_chars=SPEAKING_FEEDBACK_CHARS,
        )

    async def check_writing_answer(
        self,
        prompt: str,
        essay: str,
        min_words: Optional[int] = None,
    ) -> AIFeedback:
        context = format_prompt(
            self.prompt_config["writing_context"],
            min_words_note=f"Minimum words required: {min_words}. " if min_words else "",
            word_count=count_words(essay),
        )
        return await self.check_open_answer(prompt, essay, context)

    async def grade(self, assignment: AssignmentBase, answer: Any) -> AIFeedback:
        """
        Grade an answer according to its assignment type.

        Raises:
            UnsupportedAssignmentError: For types with no grading rule
        """
        if assignment.type in OBJECTIVE_TYPES:
            return grade_objective(assignment, answer)

        if assignment.type == "speaking":
            return await self.check_speaking_answer(assignment.question, str(answer))
        if assignment.type == "writing":
            min_words = assignment.min_words if isinstance(assignment, WritingAssignment) else None
            return await self.check_writing_answer(assignment.question, str(answer), min_words)
        if assignment.type == "open":
            return await self.check_open_answer(assignment.question, str(answer), assignment.context)

        raise UnsupportedAssignmentError(f"Cannot grade assignment type: {assignment.type}")


def is_gradable(assignment: AssignmentBase) -> bool:
    return assignment.type in OBJECTIVE_TYPES or assignment.type in SUBJECTIVE_TYPES


__all__ = [
    "AIFeedback",
    "AnswerGrader",
    "UnsupportedAssignmentError",
    "OBJECTIVE_TYPES",
    "SUBJECTIVE_TYPES",
    "points_earned",
    "grade_objective",
    "heuristic_feedback",
    "is_gradable",
]
