"""
Quality checks for extracted review questions.

The extractor is best-effort, so its output is checked for the usual
failure shapes (truncated prompts, incomplete options, answers that do
not match the options, placeholder answers) and given a confidence score.
"""

from ..models.questions import (
    OPTION_LETTERS,
    ExtractedQuestion,
    ValidationReport,
)


# ==================== Validation Rules ====================

MIN_PROMPT_LENGTH = 5
MAX_PROMPT_LENGTH = 500
MAX_OPTION_LENGTH = 200


def validate_prompt(prompt: str, index: int, report: ValidationReport) -> None:
    """Check the question prompt length."""
    text = (prompt or "").strip()
    if not text:
        report.add_issue(index, "empty_prompt", "Question prompt is empty", "error")
    elif len(text) < MIN_PROMPT_LENGTH:
        report.add_issue(
            index,
            "short_prompt",
            f"Prompt is too short ({len(text)} chars, minimum {MIN_PROMPT_LENGTH})",
        )
    elif len(text) > MAX_PROMPT_LENGTH:
        report.add_issue(
            index, "long_prompt", f"Prompt is very long ({len(text)} chars)", "info"
        )


def validate_options(options: list[str], index: int, report: ValidationReport) -> None:
    """Check multiple-choice options for gaps, duplicates and length."""
    empty = [
        letter for letter, option in zip(OPTION_LETTERS, options)
        if not option.strip()
    ]
    if empty:
        report.add_issue(
            index, "incomplete_options", f"Empty options: {', '.join(empty)}"
        )

    values = [option.strip().lower() for option in options if option.strip()]
    if len(values) != len(set(values)):
        report.add_issue(index, "duplicate_options", "Some options have duplicate values")

    for letter, option in zip(OPTION_LETTERS, options):
        if len(option) > MAX_OPTION_LENGTH:
            report.add_issue(
                index,
                "long_option",
                f"Option {letter} is very long ({len(option)} chars)",
                "info",
            )


def answer_matches_options(question: ExtractedQuestion) -> bool:
    """Check that a multiple-choice answer names one of the options.

    The answer may be an option letter or the text of an option.
    """
    if question.options is None:
        return True
    answer = question.answer
    if not isinstance(answer, str):
        return False
    normalized = answer.strip().rstrip(".)").strip()
    if normalized.upper() in OPTION_LETTERS:
        return True
    return normalized.lower() in {option.strip().lower() for option in question.options}


def validate_question(question: ExtractedQuestion, index: int, report: ValidationReport) -> None:
    """Run every check on one question."""
    validate_prompt(question.prompt, index, report)

    if question.options is not None:
        validate_options(question.options, index, report)

    if question.answer is None or (isinstance(question.answer, str) and not question.answer.strip()):
        report.add_issue(index, "missing_answer", "Question has no answer", "error")
    elif question.has_placeholder_answer:
        report.add_issue(
            index,
            "unresolved_answer",
            "Answer could not be located and must be read from the content",
            "info",
        )
    elif not answer_matches_options(question):
        report.add_issue(
            index,
            "answer_not_in_options",
            f"Answer {question.answer!r} does not match any option",
        )


def calculate_confidence_score(question_count: int, report: ValidationReport) -> float:
    """Calculate overall confidence score.

    Args:
        question_count: Number of validated questions
        report: Report holding the issues found

    Returns:
        Confidence score between 0.0 and 1.0
    """
    if not question_count:
        return 0.0

    error_penalty = report.count("error") * 0.3
    warning_penalty = report.count("warning") * 0.1
    score = 1.0 - (error_penalty + warning_penalty) / question_count

    return max(0.0, min(1.0, score))


def validate_questions(questions: list[ExtractedQuestion]) -> ValidationReport:
    """Validate a list of extracted questions.

    Args:
        questions: Questions to check

    Returns:
        ValidationReport with issues and confidence score
    """
    report = ValidationReport(total_questions=len(questions))

    for i, question in enumerate(questions):
        validate_question(question, i, report)

    report.confidence_score = calculate_confidence_score(len(questions), report)
    return report


def format_report(report: ValidationReport) -> str:
    """Render a validation report as text."""
    lines = [
        f"Validation Report for {report.total_questions} question(s)",
        "=" * 60,
        f"Status: {'✓ VALID' if report.is_valid else '✗ INVALID'}",
        f"Confidence Score: {report.confidence_score:.2f}",
        "",
        "Issues Summary:",
        f"  - Errors: {report.count('error')}",
        f"  - Warnings: {report.count('warning')}",
        f"  - Info: {report.count('info')}",
    ]

    if report.issues:
        lines.append("")
        lines.append("Issue Details:")
        for issue in report.issues:
            severity_icon = {"error": "✗", "warning": "⚠", "info": "ℹ"}.get(issue.severity, "•")
            lines.append(
                f"  {severity_icon} Q{issue.question_index + 1}: {issue.message} [{issue.issue_type}]"
            )
    else:
        lines.append("")
        lines.append("No issues found. All questions passed validation.")

    return "\n".join(lines)


__all__ = [
    "validate_questions",
    "validate_question",
    "answer_matches_options",
    "calculate_confidence_score",
    "format_report",
]
