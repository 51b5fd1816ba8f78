"""
Tests for JSON extraction and prompt loading.
"""

import pytest

from englishai.utils import (
    extract_json_object,
    find_balanced_object,
    format_prompt,
    get_available_prompts,
    load_prompt,
    missing_prompts,
)


class TestFindBalancedObject:

    def test_nested(self):
        text = 'Result: {"a": {"b": 1}} trailing'
        assert find_balanced_object(text) == '{"a": {"b": 1}}'

    def test_braces_inside_strings_ignored(self):
        text = 'x {"s": "a } b { c", "n": 2} y'
        assert find_balanced_object(text) == '{"s": "a } b { c", "n": 2}'

    def test_escaped_quote_in_string(self):
        text = r'{"s": "say \"}\" now"}'
        assert find_balanced_object(text) == text

    def test_unbalanced(self):
        assert find_balanced_object('{"a": 1') is None

    def test_no_brace(self):
        assert find_balanced_object("plain text") is None

    def test_start_offset(self):
        text = '{"first": 1} {"second": 2}'
        assert find_balanced_object(text, start=5) == '{"second": 2}'


class TestExtractJsonObject:

    def test_markdown_fenced(self):
        text = 'Sure!\n```json\n{"correct": true, "score": 80, "feedback": "Nice"}\n```'
        assert extract_json_object(text) == {"correct": True, "score": 80, "feedback": "Nice"}

    def test_first_object_wins(self):
        assert extract_json_object('{"a": 1} and {"b": 2}') == {"a": 1}

    def test_invalid_json(self):
        assert extract_json_object("{correct: yes}") is None

    def test_empty(self):
        assert extract_json_object("") is None
        assert extract_json_object(None) is None


class TestPromptLoader:

    def test_shipped_prompts(self):
        assert get_available_prompts() == [
            "grade_answer",
            "lesson_grammar",
            "lesson_listening",
            "lesson_reading",
            "lesson_speaking",
            "lesson_vocabulary",
            "lesson_writing",
        ]

    def test_load_prompt(self):
        config = load_prompt("grade_answer")
        assert "user_template" in config
        assert "speaking_context" in config
        assert config["meta"]["version"]

    def test_missing_prompt(self):
        with pytest.raises(FileNotFoundError):
            load_prompt("does_not_exist")

    def test_custom_dir(self, tmp_path):
        (tmp_path / "custom.yaml").write_text("user_template: 'Hi {name}'\n", encoding="utf-8")
        assert get_available_prompts(tmp_path) == ["custom"]
        config = load_prompt("custom", tmp_path)
        assert format_prompt(config["user_template"], name="Ana") == "Hi Ana"

    def test_missing_dir(self, tmp_path):
        assert get_available_prompts(tmp_path / "nope") == []

    def test_doubled_braces_survive(self):
        assert format_prompt("{{\"x\": {v}}}", v=1) == '{"x": 1}'

    def test_template_must_be_mapping(self, tmp_path):
        (tmp_path / "listy.yaml").write_text("- one\n- two\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_prompt("listy", tmp_path)

    def test_template_requires_user_template(self, tmp_path):
        (tmp_path / "bare.yaml").write_text("meta:\n  version: '1.0'\n", encoding="utf-8")
        with pytest.raises(ValueError, match="user_template"):
            load_prompt("bare", tmp_path)

    def test_missing_placeholder_value(self):
        with pytest.raises(ValueError, match="topic"):
            format_prompt("Teach {topic} at {level}", level="beginner")

    def test_missing_prompts(self, tmp_path):
        assert missing_prompts(["grade_answer", "lesson_reading"]) == []
        (tmp_path / "lesson_reading.yaml").write_text("user_template: x\n", encoding="utf-8")
        assert missing_prompts(["lesson_reading", "lesson_grammar"], tmp_path) == ["lesson_grammar"]
