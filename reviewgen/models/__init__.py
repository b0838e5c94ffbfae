"""
Data models for review generation and question extraction.
"""

from .questions import (
    OPTION_COUNT,
    OPTION_LETTERS,
    PLACEHOLDER_ANSWER,
    ExtractedQuestion,
    ExtractionResult,
    PatternFamily,
    ValidationIssue,
    ValidationReport,
)
from .reviews import (
    GeneratedReview,
    QuestionType,
    ReviewData,
    ReviewQuestionRow,
    ReviewRecord,
    ReviewRequest,
    ReviewUpdate,
    SubtopicRef,
)
from .config import Settings, get_settings

__all__ = [
    # Question models
    "OPTION_COUNT",
    "OPTION_LETTERS",
    "PLACEHOLDER_ANSWER",
    "ExtractedQuestion",
    "ExtractionResult",
    "PatternFamily",
    "ValidationIssue",
    "ValidationReport",
    # Review models
    "GeneratedReview",
    "QuestionType",
    "ReviewData",
    "ReviewQuestionRow",
    "ReviewRecord",
    "ReviewRequest",
    "ReviewUpdate",
    "SubtopicRef",
    # Config
    "Settings",
    "get_settings",
]
