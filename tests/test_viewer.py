"""
Tests for viewer rendering helpers and speech chunking.
"""

from englishai.schemas import (
    GrammarAssignment,
    Lesson,
    Level,
    MatchingAssignment,
    OpenAssignment,
    Skill,
    User,
    UserProgress,
)
from englishai.tutor import AIFeedback
from englishai.viewer import (
    calculate_lesson_xp,
    get_audio_text,
    is_lesson_finished,
    is_renderable,
    progress_percent,
    render_badge_notice,
    render_content,
    render_feedback,
    render_header,
    render_section_card,
    render_speech_player,
    split_text,
)


class TestSplitText:

    def test_short_text_single_chunk(self):
        assert split_text("Hello there.") == ["Hello there."]

    def test_chunks_within_limit(self):
        text = " ".join(["word"] * 100)
        chunks = split_text(text)
        assert len(chunks) > 1
        assert all(len(chunk) <= 180 for chunk in chunks)
        assert " ".join(chunks).split() == text.split()

    def test_custom_chunk_size(self):
        assert split_text("aa bb cc dd", chunk_size=5) == ["aa bb", "cc dd"]

    def test_empty(self):
        assert split_text("") == []

    def test_long_word_sliced_without_loss(self):
        text = "hello " + "x" * 200 + " bye"
        chunks = split_text(text)
        assert chunks == ["hello", "x" * 180, "x" * 20 + " bye"]
        assert "".join(chunks).replace(" ", "") == text.replace(" ", "")


class TestSpeechPlayer:

    def test_embeds_chunks_and_settings(self):
        html = render_speech_player("Listen to this sentence.", key="lesson-1")
        assert '"Listen to this sentence."' in html
        assert "utterance.rate = 0.9" in html
        assert "300" in html
        assert "speech-lesson-1-stop" in html

    def test_stop_resets_index(self):
        html = render_speech_player("text")
        assert "speechSynthesis.cancel()" in html
        assert "index = 0" in html

    def test_script_close_tag_in_text_escaped(self):
        html = render_speech_player("Stop </script> here")
        assert html.count("</script>") == 1
        assert "<\\/script>" in html


class TestDashboard:

    def test_header_badge_overflow(self):
        user = User(
            total_xp=1500,
            streak=7,
            badges=["first-steps", "streak-3", "streak-7", "xp-1000"],
        )
        html = render_header(user)
        assert "1500 XP" in html
        assert "+1" in html

    def test_section_card_ready_to_level_up(self):
        html = render_section_card(Skill.READING, UserProgress(level=Level.BEGINNER, xp=60))
        assert "60 / 50 XP" in html
        assert "Ready to level up!" in html

    def test_section_card_mastered(self):
        html = render_section_card(Skill.WRITING, UserProgress(level=Level.ADVANCED, xp=300))
        assert "Mastered!" in html

    def test_section_card_in_progress(self):
        html = render_section_card(Skill.GRAMMAR, UserProgress(xp=10, completed=["grammar-beginner-1"]))
        assert "1 lessons completed" in html
        assert "level up" not in html

    def test_progress_percent_capped(self):
        assert progress_percent(25, 50) == 50
        assert progress_percent(500, 50) == 100

    def test_badge_notice(self):
        assert "Grammar Ninja" in render_badge_notice(["grammar-ninja"])
        assert render_badge_notice([]) == ""


class TestLessonView:

    def lesson(self) -> Lesson:
        return Lesson(
            id="listening-beginner-1",
            title="At the Cafe",
            content={"kind": "listening", "audio_text": "Two coffees, please."},
            assignments=[
                OpenAssignment(id="q1", question="What did they order?", points=15),
                GrammarAssignment(id="q2", question="Fix it", correct_answer="x"),
            ],
        )

    def test_listening_text_not_shown_as_content(self):
        lesson = self.lesson()
        assert get_audio_text(lesson) == "Two coffees, please."
        assert render_content(lesson) == ""

    def test_reading_passage_escaped(self):
        lesson = Lesson(id="r", title="T", content={"kind": "reading", "passage": "<b>bold</b>"})
        assert "&lt;b&gt;" in render_content(lesson)

    def test_placeholder_types(self):
        assert not is_renderable(GrammarAssignment(id="q", question="?"))
        assert not is_renderable(MatchingAssignment(id="q", question="?"))
        assert is_renderable(OpenAssignment(id="q", question="?"))

    def test_lesson_progress(self):
        lesson = self.lesson()
        feedback = {"q1": AIFeedback(correct=True, score=50, feedback="ok")}
        assert calculate_lesson_xp(lesson, feedback) == 8
        assert not is_lesson_finished(lesson, feedback, set())
        assert is_lesson_finished(lesson, feedback, {"q2"})

    def test_feedback_box(self):
        assignment = OpenAssignment(id="q1", question="Q", points=10)
        html = render_feedback(AIFeedback(correct=False, score=30, feedback="Try <more>"), assignment)
        assert "Score: 30/100" in html
        assert "+3 XP" in html
        assert "Try &lt;more&gt;" in html
