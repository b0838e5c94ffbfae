"""
JSON files of extracted questions.

Files are written as ``{"family": ..., "questions": [...]}``; a bare list
of question objects is accepted when reading.
"""

import json
from pathlib import Path

from pydantic import ValidationError

from ..models.questions import ExtractedQuestion, ExtractionResult
from ..utils.file_utils import read_json_file, write_json_file


def save_questions_json(
    result: ExtractionResult,
    output_path: str | Path,
    indent: int = 2,
) -> Path:
    """Save an extraction result to a JSON file.

    Args:
        result: Extraction result to save
        output_path: Path of the JSON file (.json is added if missing)
        indent: JSON indentation spaces

    Returns:
        Path of the written file
    """
    path = Path(output_path)
    if path.suffix.lower() != ".json":
        path = path.with_suffix(".json")

    data = {
        "family": result.family.value if result.family else None,
        "extracted_at": result.extracted_at.isoformat(),
        "questions": [q.to_dict() for q in result.questions],
    }
    return write_json_file(path, data, indent=indent)


def load_questions_json(file_path: str | Path) -> list[ExtractedQuestion]:
    """Load questions from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid JSON or holds invalid questions
    """
    try:
        data = read_json_file(file_path)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in file: {e}") from e

    if isinstance(data, dict):
        data = data.get("questions")
    if not isinstance(data, list):
        raise ValueError("File must contain a list of questions or an object with 'questions'")

    try:
        return [ExtractedQuestion.model_validate(item) for item in data]
    except ValidationError as e:
        raise ValueError(f"Invalid question data: {e.errors()[0]['msg']}") from e


__all__ = [
    "save_questions_json",
    "load_questions_json",
]
