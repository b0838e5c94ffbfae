"""
Tests for Pydantic data models.

This module tests the question and review models, validation, and serialization.
"""

import pytest
from pydantic import ValidationError

from reviewgen.models.questions import (
    ExtractedQuestion,
    ExtractionResult,
    PatternFamily,
    ValidationReport,
)
from reviewgen.models.reviews import (
    QuestionType,
    ReviewQuestionRow,
    ReviewRequest,
    SubtopicRef,
)
from reviewgen.models.config import Settings


class TestExtractedQuestion:
    """Tests for ExtractedQuestion model."""

    def test_create_question(self):
        """Test creating a multiple-choice question."""
        question = ExtractedQuestion(prompt="  What is 2+2? ", options=["3", "4", "5", "6"], answer="B")
        assert question.prompt == "What is 2+2?"
        assert question.is_multiple_choice is True

    def test_empty_prompt_raises_error(self):
        """Test that empty prompt raises validation error."""
        with pytest.raises(ValueError, match="cannot be empty"):
            ExtractedQuestion(prompt="")

    def test_whitespace_prompt_raises_error(self):
        """Test that whitespace-only prompt raises validation error."""
        with pytest.raises(ValueError, match="cannot be empty"):
            ExtractedQuestion(prompt="   ")

    def test_options_must_have_four_entries(self):
        """Test that options of any other size are rejected."""
        with pytest.raises(ValueError, match="exactly 4"):
            ExtractedQuestion(prompt="Pick one", options=["a", "b", "c"])

    def test_boolean_answer_stays_boolean(self):
        """Test that true/false answers are not converted to text."""
        question = ExtractedQuestion(prompt="Java is compiled.", answer=True)
        assert question.answer is True

    def test_to_dict_omits_unset_fields(self):
        """Test conversion to dictionary."""
        question = ExtractedQuestion(prompt="Name a planet.", answer="Mars")
        assert question.to_dict() == {"prompt": "Name a planet.", "answer": "Mars"}


class TestExtractionResult:
    """Tests for ExtractionResult model."""

    def test_question_count(self):
        result = ExtractionResult(
            questions=[ExtractedQuestion(prompt="Q1?", answer="a")],
            family=PatternFamily.LAST_RESORT,
        )
        assert result.question_count == 1
        assert result.success is True

    def test_empty_result(self):
        result = ExtractionResult()
        assert result.question_count == 0
        assert result.family is None


class TestValidationReport:
    """Tests for ValidationReport model."""

    def test_error_marks_invalid(self):
        """Test that adding an error marks the report invalid."""
        report = ValidationReport(total_questions=1)
        report.add_issue(0, "short_prompt", "Too short")
        assert report.is_valid is True

        report.add_issue(0, "missing_answer", "No answer", "error")
        assert report.is_valid is False
        assert report.count("error") == 1
        assert report.count("warning") == 1


class TestReviewModels:
    """Tests for review request and row models."""

    def test_question_type_accepts_any_case(self):
        """Test that question types are matched case-insensitively."""
        assert QuestionType("True or False") is QuestionType.TRUE_OR_FALSE
        assert QuestionType("fill_in_missing_words") is QuestionType.FILL_IN_MISSING_WORDS

    def test_unknown_question_type_rejected(self):
        with pytest.raises(ValidationError):
            ReviewRequest(subject="Java", grade="11", title="Loops", question_type="essay")

    def test_question_count_bounds(self):
        with pytest.raises(ValidationError):
            ReviewRequest(subject="Java", grade="11", title="Loops", question_count=0)

    def test_to_review_data(self, review_request):
        """Test projecting a request onto persisted fields."""
        data = review_request.to_review_data()
        assert data.title == "Loops and Conditions"
        assert data.question_type == "multiple choice questions"
        assert data.subtopic_ids == [12, 13]
        assert data.include_hints is True

    def test_question_row_round_trip(self):
        """Test converting a question to a stored row and back."""
        question = ExtractedQuestion(prompt="Java is compiled.", answer=False, hint="JVM")
        row = ReviewQuestionRow.from_question("r-1", 3, question)

        assert row.question_number == 3
        assert row.question_text == "Java is compiled."
        assert row.correct_answer is False
        assert row.to_question() == question

    def test_subtopic_defaults(self):
        subtopic = SubtopicRef(id=1, title="Loops")
        assert subtopic.topic_title == ""


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        settings = Settings()
        assert settings.openai_model == "gpt-3.5-turbo"
        assert settings.openai_temperature == 0.7
        assert settings.openai_max_tokens == 2000
        assert settings.is_openai_configured is False

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("OPENAI_MODEL", "gpt-4o-mini")
        settings = Settings()
        assert settings.is_openai_configured is True
        assert settings.openai_model == "gpt-4o-mini"
