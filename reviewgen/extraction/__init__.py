"""
Heuristic extraction of questions from generated review text.
"""

from .extractor import (
    MIN_LAST_RESORT_LENGTH,
    PATTERN_FAMILIES,
    extract_questions,
    extract_questions_with_family,
    match_embedded_objects,
    match_last_resort,
    match_multiple_choice,
    match_numbered_with_answer,
)

__all__ = [
    "MIN_LAST_RESORT_LENGTH",
    "PATTERN_FAMILIES",
    "extract_questions",
    "extract_questions_with_family",
    "match_embedded_objects",
    "match_last_resort",
    "match_multiple_choice",
    "match_numbered_with_answer",
]
