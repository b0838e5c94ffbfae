"""
Tools for working with extracted review questions.

This module provides validation, JSON and Word output, and LangChain
tool wrappers so an agent can extract, check and export questions.

Tools:
    - extract_review_questions: Extract questions from review text
    - validate_review_questions: Validate question quality
    - save_review_word: Export questions to a Word document

Example:
    from langchain.agents import create_agent
    from reviewgen.tools import get_all_tools

    agent = create_agent(model="gpt-4o", tools=get_all_tools())
"""

from .review_tools import (
    extract_review_questions,
    validate_review_questions,
    save_review_word,
)
from .json_generator import load_questions_json, save_questions_json
from .validation import format_report, validate_questions
from .word_generator import generate_word_document


def get_all_tools() -> list:
    """Get all available tools for an agent.

    Returns:
        List of LangChain tool functions ready to use with an agent.
    """
    return [
        extract_review_questions,
        validate_review_questions,
        save_review_word,
    ]


__all__ = [
    # Tools
    "extract_review_questions",
    "validate_review_questions",
    "save_review_word",
    "get_all_tools",
    # Programmatic helpers
    "load_questions_json",
    "save_questions_json",
    "format_report",
    "validate_questions",
    "generate_word_document",
]
