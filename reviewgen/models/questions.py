"""
Pydantic models for extracted questions.

This module defines the question record produced by the extractor,
the pattern families it can match, and validation reports.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator


OPTION_COUNT = 4
OPTION_LETTERS = ("A", "B", "C", "D")

# Answer recorded when only the question itself could be located.
PLACEHOLDER_ANSWER = "See explanation in content"

AnswerValue = Union[bool, int, float, str]


class PatternFamily(str, Enum):
    """Extraction heuristics, in the order they are attempted."""
    EMBEDDED_OBJECT = "embedded_object"
    MULTIPLE_CHOICE = "multiple_choice"
    NUMBERED_WITH_ANSWER = "numbered_with_answer"
    LAST_RESORT = "last_resort"


class ExtractedQuestion(BaseModel):
    """A single question recovered from generated review text."""
    prompt: str = Field(description="The question statement")
    options: Optional[list[str]] = Field(
        default=None,
        description="The four multiple-choice options, in order"
    )
    answer: Optional[AnswerValue] = Field(
        default=None,
        description="Correct response: a letter A-D, a boolean, or free text"
    )
    explanation: Optional[str] = Field(
        default=None,
        description="Rationale for the answer"
    )
    hint: Optional[str] = Field(
        default=None,
        description="Hint shown to the learner"
    )

    @field_validator("prompt")
    @classmethod
    def prompt_not_empty(cls, v: str) -> str:
        """Validate that the prompt is not empty."""
        if not v or not v.strip():
            raise ValueError("Question prompt cannot be empty")
        return v.strip()

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        """Validate that options, when given, hold exactly four entries."""
        if v is not None and len(v) != OPTION_COUNT:
            raise ValueError(f"Options must contain exactly {OPTION_COUNT} entries")
        return v

    @property
    def is_multiple_choice(self) -> bool:
        return self.options is not None

    @property
    def has_placeholder_answer(self) -> bool:
        return self.answer == PLACEHOLDER_ANSWER

    def to_dict(self) -> dict:
        """Convert to a plain dictionary, omitting unset fields."""
        return self.model_dump(exclude_none=True)


class ExtractionResult(BaseModel):
    """Result of one extraction call."""
    questions: list[ExtractedQuestion] = Field(
        default_factory=list,
        description="Extracted questions in source order"
    )
    family: Optional[PatternFamily] = Field(
        default=None,
        description="Pattern family that produced the questions"
    )
    extracted_at: datetime = Field(
        default_factory=datetime.now,
        description="Timestamp of extraction"
    )

    @property
    def question_count(self) -> int:
        """Get the number of extracted questions."""
        return len(self.questions)

    @property
    def success(self) -> bool:
        return bool(self.questions)


class ValidationIssue(BaseModel):
    """A single validation issue for a question."""
    question_index: int = Field(description="Index of the question with the issue")
    issue_type: str = Field(description="Type of issue (e.g., 'empty_prompt', 'duplicate_options')")
    message: str = Field(description="Human-readable description of the issue")
    severity: str = Field(
        default="warning",
        description="Severity level: 'error', 'warning', or 'info'"
    )


class ValidationReport(BaseModel):
    """Validation report for extracted questions."""
    is_valid: bool = Field(default=True, description="Whether all questions passed validation")
    total_questions: int = Field(default=0, description="Total number of questions validated")
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="List of validation issues found"
    )
    confidence_score: float = Field(
        default=1.0,
        description="Overall confidence score (0.0 to 1.0)"
    )

    def add_issue(
        self,
        question_index: int,
        issue_type: str,
        message: str,
        severity: str = "warning"
    ) -> None:
        """Add a validation issue to the report."""
        self.issues.append(ValidationIssue(
            question_index=question_index,
            issue_type=issue_type,
            message=message,
            severity=severity
        ))
        if severity == "error":
            self.is_valid = False

    def count(self, severity: str) -> int:
        """Count issues of the given severity."""
        return sum(1 for issue in self.issues if issue.severity == severity)
