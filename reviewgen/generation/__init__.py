"""
Review generation: prompt building and the language model call.
"""

from .generator import ReviewGenerationError, create_chat_model, generate_review
from .prompts import (
    EXAM_STYLE_INSTRUCTIONS,
    SYSTEM_PROMPT,
    build_review_prompt,
    get_exam_style_instruction,
    get_question_format_instruction,
)

__all__ = [
    "ReviewGenerationError",
    "create_chat_model",
    "generate_review",
    "EXAM_STYLE_INSTRUCTIONS",
    "SYSTEM_PROMPT",
    "build_review_prompt",
    "get_exam_style_instruction",
    "get_question_format_instruction",
]
