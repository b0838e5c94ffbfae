"""
Tests for question validation.

This module tests prompt, option and answer checks and the confidence score.
"""

import pytest

from reviewgen.models.questions import PLACEHOLDER_ANSWER, ExtractedQuestion, ValidationReport
from reviewgen.tools.validation import (
    answer_matches_options,
    calculate_confidence_score,
    format_report,
    validate_options,
    validate_prompt,
    validate_questions,
)


def issue_types(report):
    return [issue.issue_type for issue in report.issues]


class TestPromptChecks:
    """Tests for prompt length checks."""

    def test_valid_prompt(self):
        report = ValidationReport(total_questions=1)
        validate_prompt("What is polymorphism?", 0, report)
        assert report.issues == []

    def test_empty_prompt_is_error(self):
        report = ValidationReport(total_questions=1)
        validate_prompt("  ", 0, report)
        assert report.issues[0].severity == "error"
        assert report.is_valid is False

    def test_short_prompt_is_warning(self):
        report = validate_questions([ExtractedQuestion(prompt="2+2?", answer="4")])
        assert issue_types(report) == ["short_prompt"]
        assert report.is_valid is True

    def test_long_prompt_is_info(self):
        report = validate_questions([ExtractedQuestion(prompt="x" * 501 + "?", answer="y")])
        assert issue_types(report) == ["long_prompt"]
        assert report.issues[0].severity == "info"


class TestOptionChecks:
    """Tests for multiple-choice option checks."""

    def test_empty_options(self):
        report = ValidationReport(total_questions=1)
        validate_options(["a", "b", " ", "d"], 0, report)
        assert issue_types(report) == ["incomplete_options"]
        assert "C" in report.issues[0].message

    def test_duplicate_options_ignore_case(self):
        report = ValidationReport(total_questions=1)
        validate_options(["Loop", "loop ", "if", "switch"], 0, report)
        assert issue_types(report) == ["duplicate_options"]

    def test_long_option(self):
        report = ValidationReport(total_questions=1)
        validate_options(["a", "b", "c", "d" * 201], 0, report)
        assert issue_types(report) == ["long_option"]
        assert "Option D" in report.issues[0].message


class TestAnswerChecks:
    """Tests for answer checks."""

    @pytest.mark.parametrize("answer", ["B", "b", "B)", "b.", "4", " 4 "])
    def test_answer_matches_letter_or_text(self, answer):
        question = ExtractedQuestion(prompt="What is 2+2?", options=["3", "4", "5", "6"], answer=answer)
        assert answer_matches_options(question) is True

    def test_answer_outside_options(self):
        question = ExtractedQuestion(prompt="What is 2+2?", options=["3", "4", "5", "6"], answer="E")
        report = validate_questions([question])
        assert issue_types(report) == ["answer_not_in_options"]
        assert report.issues[0].severity == "warning"

    def test_boolean_answer_with_options(self):
        question = ExtractedQuestion(prompt="Pick the truth", options=["a", "b", "c", "d"], answer=True)
        assert answer_matches_options(question) is False

    def test_open_question_needs_no_options(self):
        assert answer_matches_options(ExtractedQuestion(prompt="Java is compiled.", answer=False)) is True

    def test_missing_answer_is_error(self):
        report = validate_questions([ExtractedQuestion(prompt="What is a loop?")])
        assert issue_types(report) == ["missing_answer"]
        assert report.is_valid is False

    def test_placeholder_answer_is_info(self):
        report = validate_questions([ExtractedQuestion(prompt="What is a loop?", answer=PLACEHOLDER_ANSWER)])
        assert issue_types(report) == ["unresolved_answer"]
        assert report.confidence_score == 1.0


class TestConfidenceScore:
    """Tests for the confidence score."""

    def test_clean_questions(self, sample_questions):
        report = validate_questions(sample_questions)
        assert report.is_valid is True
        assert report.issues == []
        assert report.confidence_score == 1.0

    def test_penalties_are_averaged(self, sample_questions):
        """Test that one error over four questions costs 0.3 / 4."""
        questions = sample_questions + [ExtractedQuestion(prompt="What is a loop?")]
        report = validate_questions(questions)
        assert report.confidence_score == pytest.approx(1.0 - 0.3 / 4)

    def test_score_is_clamped(self):
        report = ValidationReport(total_questions=1)
        for _ in range(5):
            report.add_issue(0, "missing_answer", "No answer", "error")
        assert calculate_confidence_score(1, report) == 0.0

    def test_no_questions(self):
        report = validate_questions([])
        assert report.total_questions == 0
        assert report.confidence_score == 0.0


class TestFormatReport:
    """Tests for the text report."""

    def test_valid_report(self, sample_questions):
        text = format_report(validate_questions(sample_questions))
        assert "Validation Report for 3 question(s)" in text
        assert "Status: ✓ VALID" in text
        assert "No issues found" in text

    def test_issue_details(self):
        text = format_report(validate_questions([ExtractedQuestion(prompt="What is a loop?")]))
        assert "Status: ✗ INVALID" in text
        assert "✗ Q1: Question has no answer [missing_answer]" in text
