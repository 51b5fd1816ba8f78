"""
Tests for answer grading.
"""

import asyncio
import json

import pytest

from englishai.schemas import (
    FillBlankAssignment,
    GrammarAssignment,
    MCQAssignment,
    MatchingAssignment,
    OpenAssignment,
    SpeakingAssignment,
    TrueFalseAssignment,
    VocabularyAssignment,
    WritingAssignment,
)
from englishai.tutor import (
    AIFeedback,
    AnswerGrader,
    UnsupportedAssignmentError,
    grade_objective,
    heuristic_feedback,
    is_gradable,
    points_earned,
)
from englishai.tutor.grader import FAILURE_MESSAGE, FALLBACK_MESSAGE, TIMEOUT_MESSAGE


class FakeClient:

    def __init__(self, response: str = "", error: Exception | None = None, delay: float = 0):
        self.response = response
        self.error = error
        self.delay = delay
        self.prompts = []

    async def generate_async(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.response


def reply(correct: bool, score: int, feedback: str) -> str:
    return "Evaluation:\n" + json.dumps({"correct": correct, "score": score, "feedback": feedback})


MCQ = MCQAssignment(
    id="q1", question="Capital of France?", options=["Rome", "Berlin", "Paris"], correct_answer=2, points=10,
)


class TestObjectiveGrading:

    def test_mcq_correct(self):
        result = grade_objective(MCQ, 2)
        assert result.correct is True
        assert result.score == 100
        assert points_earned(result, MCQ) == 10

    def test_mcq_wrong_reveals_option_text(self):
        result = grade_objective(MCQ, 0)
        assert result.correct is False
        assert result.score == 0
        assert "Paris" in result.feedback
        assert points_earned(result, MCQ) == 0

    def test_true_false(self):
        assignment = TrueFalseAssignment(id="q1", question="Water is wet", correct_answer=True)
        assert grade_objective(assignment, True).correct
        wrong = grade_objective(assignment, False)
        assert not wrong.correct
        assert "True" in wrong.feedback

    def test_fill_blank_exact_match(self):
        assignment = FillBlankAssignment(id="q1", question="She ___ to school", correct_answer="goes")
        assert grade_objective(assignment, "goes").correct
        assert not grade_objective(assignment, "Goes").correct

    def test_vocabulary_by_text(self):
        assignment = VocabularyAssignment(id="q1", question="Rain, lightly", correct_answer="drizzle")
        assert grade_objective(assignment, "drizzle").score == 100

    def test_grade_dispatches_objective_without_client(self):
        grader = AnswerGrader(client=None)
        result = asyncio.run(grader.grade(MCQ, 2))
        assert result == AIFeedback(correct=True, score=100, feedback="Correct! Well done.")

    def test_matching_is_gradable_locally(self):
        assignment = MatchingAssignment(id="q1", question="Match", correct_answer="a-1,b-2")
        result = asyncio.run(AnswerGrader(client=None).grade(assignment, "a-1,b-2"))
        assert result.correct


class TestPointsEarned:

    def test_rounds_half_up(self):
        assignment = OpenAssignment(id="q1", question="Q", points=15)
        # 50% of 15 = 7.5
        assert points_earned(AIFeedback(correct=True, score=50, feedback=""), assignment) == 8
        # 10% of 15 = 1.5
        assert points_earned(AIFeedback(correct=False, score=10, feedback=""), assignment) == 2

    def test_partial_score(self):
        assignment = OpenAssignment(id="q1", question="Q", points=20)
        assert points_earned(AIFeedback(correct=True, score=85, feedback=""), assignment) == 17


class TestHeuristic:

    def test_long_answer(self):
        result = heuristic_feedback("I like to read books at night.", "Nice work overall")
        assert result.correct is True
        assert result.score == 75
        assert result.feedback == "Nice work overall"

    def test_short_answer(self):
        result = heuristic_feedback("   yes    ", "")
        assert result.correct is False
        assert result.score == 25
        assert result.feedback == FALLBACK_MESSAGE


class TestOpenAnswers:

    def test_structured_reply(self):
        client = FakeClient(reply(True, 85, "Good structure."))
        grader = AnswerGrader(client)
        result = asyncio.run(grader.check_open_answer("Why read?", "Reading builds vocabulary.", "Reading lesson"))
        assert result == AIFeedback(correct=True, score=85, feedback="Good structure.")
        prompt = client.prompts[0]
        assert "Question: Why read?" in prompt
        assert "Context: Reading lesson" in prompt
        assert "Student's Answer: Reading builds vocabulary." in prompt

    def test_no_context_line(self):
        client = FakeClient(reply(True, 70, "ok"))
        asyncio.run(AnswerGrader(client).check_open_answer("Q", "A long enough answer"))
        assert "Context:" not in client.prompts[0]

    def test_reply_without_json_uses_heuristic(self):
        client = FakeClient("That is a thoughtful answer.")
        result = asyncio.run(AnswerGrader(client).check_open_answer("Q", "A sufficiently long answer"))
        assert result.correct is True
        assert result.score == 75
        assert result.feedback == "That is a thoughtful answer."

    def test_reply_with_wrong_shape_uses_heuristic(self):
        client = FakeClient('{"grade": "B"}')
        result = asyncio.run(AnswerGrader(client).check_open_answer("Q", "short"))
        assert result.score == 25

    def test_timeout(self):
        client = FakeClient(reply(True, 90, "late"), delay=1.0)
        grader = AnswerGrader(client, timeout=0.01)
        result = asyncio.run(grader.check_open_answer("Q", "An answer that is long"))
        assert result == AIFeedback(correct=False, score=0, feedback=TIMEOUT_MESSAGE)

    def test_transport_failure(self):
        client = FakeClient(error=ConnectionError("offline"))
        result = asyncio.run(AnswerGrader(client).check_open_answer("Q", "An answer"))
        assert result == AIFeedback(correct=False, score=0, feedback=FAILURE_MESSAGE)

    def test_open_assignment_passes_context(self):
        client = FakeClient(reply(True, 80, "fine"))
        assignment = OpenAssignment(id="q1", question="Describe it", context="The park passage")
        asyncio.run(AnswerGrader(client).grade(assignment, "It is a big green park."))
        assert "Context: The park passage" in client.prompts[0]


class TestSpeakingAndWriting:

    def test_speaking_feedback_truncated(self):
        long_feedback = "x" * 200
        client = FakeClient(reply(True, 80, long_feedback))
        assignment = SpeakingAssignment(id="q1", question="Talk about your weekend")
        result = asyncio.run(AnswerGrader(client).grade(assignment, "I went hiking with my friends."))
        assert len(result.feedback) == 150
        assert result.feedback == "x" * 147 + "..."
        assert "Speaking prompt: Talk about your weekend" in client.prompts[0]

    def test_speaking_short_feedback_untouched(self):
        client = FakeClient(reply(True, 80, "Clear and fluent."))
        result = asyncio.run(AnswerGrader(client).check_speaking_answer("Prompt", "Transcript here"))
        assert result.feedback == "Clear and fluent."

    def test_writing_context_has_word_count(self):
        client = FakeClient(reply(True, 90, "Well organised."))
        assignment = WritingAssignment(id="q1", question="Describe your town", min_words=50)
        asyncio.run(AnswerGrader(client).grade(assignment, "My town is small and quiet."))
        prompt = client.prompts[0]
        assert "Minimum words required: 50." in prompt
        assert "Word count: 6." in prompt

    def test_writing_without_minimum(self):
        client = FakeClient(reply(True, 90, "ok"))
        asyncio.run(AnswerGrader(client).check_writing_answer("Prompt", "one two three"))
        assert "Minimum words required" not in client.prompts[0]
        assert "Word count: 3." in client.prompts[0]


class TestUnsupported:

    def test_grammar_assignment_not_gradable(self):
        assignment = GrammarAssignment(id="q1", question="Fix: he go", correct_answer="he goes")
        assert not is_gradable(assignment)
        with pytest.raises(UnsupportedAssignmentError):
            asyncio.run(AnswerGrader(FakeClient()).grade(assignment, "he goes"))

    def test_objective_types_gradable(self):
        assert is_gradable(MCQ)
