"""
Review generation and question extraction.

Generates assessment reviews with a language model and recovers
structured questions from the text that comes back.
"""

__version__ = "0.1.0"

from .extraction import extract_questions, extract_questions_with_family
from .models import ExtractedQuestion, ExtractionResult, PatternFamily

__all__ = [
    "__version__",
    "extract_questions",
    "extract_questions_with_family",
    "ExtractedQuestion",
    "ExtractionResult",
    "PatternFamily",
]
