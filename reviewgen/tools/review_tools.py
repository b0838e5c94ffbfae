"""
LangChain tools wrapping extraction, validation and Word export.

Each tool returns a human-readable string for the calling agent and
reports problems in that string instead of raising.
"""

from pathlib import Path
from typing import Optional

from langchain.tools import tool

from ..extraction import extract_questions_with_family
from ..models.config import get_settings
from .json_generator import load_questions_json, save_questions_json
from .validation import format_report, validate_questions
from .word_generator import generate_word_document


@tool
def extract_review_questions(content: str, output_path: Optional[str] = None) -> str:
    """Extract structured questions from generated review text.

    Recognizes JSON-like question objects, numbered multiple-choice
    questions with options A-D, numbered questions with "Answer:" lines,
    and, as a last resort, numbered lines ending in a question mark.

    Args:
        content: The review text produced by the language model.
        output_path: Optional JSON file path to save the questions to.

    Returns:
        A summary of the extracted questions, including the pattern used
        and where they were saved.
    """
    result = extract_questions_with_family(content)
    if not result.questions:
        return "No questions could be extracted from the content."

    lines = [
        f"Extracted {result.question_count} question(s) using the "
        f"{result.family.value} pattern."
    ]
    for i, question in enumerate(result.questions, start=1):
        lines.append(f"  Q{i}: {question.prompt[:80]}")

    if output_path:
        try:
            path = save_questions_json(result, output_path, indent=get_settings().json_indent)
        except OSError as e:
            lines.append(f"Failed to save questions: {e}")
        else:
            lines.append(f"Saved to {path}")

    return "\n".join(lines)


@tool
def validate_review_questions(questions_file: str) -> str:
    """Validate extracted questions for completeness and quality.

    Checks for empty or short prompts, incomplete or duplicate options,
    answers that match no option, and placeholder answers. Reports a
    confidence score between 0.0 and 1.0.

    Args:
        questions_file: Path to a JSON file written by extract_review_questions.

    Returns:
        A validation report.
    """
    try:
        questions = load_questions_json(questions_file)
    except FileNotFoundError:
        return f"Error: File not found: {questions_file}"
    except ValueError as e:
        return f"Error: {e}"

    if not questions:
        return "Error: No questions provided. The questions array is empty."

    return format_report(validate_questions(questions))


@tool
def save_review_word(
    questions_file: str,
    output_path: str,
    title: Optional[str] = None,
    include_answers: bool = True,
) -> str:
    """Save questions to a Word document with an answer key.

    Args:
        questions_file: Path to a JSON file written by extract_review_questions.
        output_path: Where to save the document; .docx is added if missing.
        title: Optional heading for the document.
        include_answers: Whether to add the answer key. Default: True

    Returns:
        A string describing the result of the operation.
    """
    try:
        questions = load_questions_json(questions_file)
    except FileNotFoundError:
        return f"Error: File not found: {questions_file}"
    except ValueError as e:
        return f"Error: {e}"

    if not questions:
        return "Error: No questions provided. The questions array is empty."

    _, message, _ = generate_word_document(
        questions, Path(output_path), title=title, include_answers=include_answers
    )
    return message


__all__ = [
    "extract_review_questions",
    "validate_review_questions",
    "save_review_word",
]
