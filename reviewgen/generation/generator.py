"""
Review generation with an OpenAI-compatible chat model.

The model writes a review as free text; the questions are then recovered
from it with the heuristic extractor.
"""

import logging
from typing import Optional

import openai
from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from ..extraction import extract_questions_with_family
from ..models.config import Settings, get_settings
from ..models.reviews import GeneratedReview, ReviewRequest
from .prompts import SYSTEM_PROMPT, build_review_prompt

logger = logging.getLogger(__name__)


class ReviewGenerationError(Exception):
    """Raised when the language model call fails."""


def create_chat_model(settings: Optional[Settings] = None) -> ChatOpenAI:
    """
    Create the chat model used for review generation.

    Args:
        settings: Settings to use (defaults to the cached settings)

    Returns:
        Configured ChatOpenAI client

    Raises:
        ValueError: If no API key is configured
    """
    settings = settings or get_settings()

    if not settings.is_openai_configured:
        raise ValueError(
            "API key is missing. Set OPENAI_API_KEY in the environment or .env file."
        )

    return ChatOpenAI(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        model=settings.openai_model,
        temperature=settings.openai_temperature,
        max_tokens=settings.openai_max_tokens,
    )


def _message_text(message) -> str:
    """Get plain text from a chat model reply."""
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for item in content:
            if isinstance(item, dict) and "text" in item:
                parts.append(item["text"])
            elif isinstance(item, str):
                parts.append(item)
        return "".join(parts)
    return str(content)


def generate_review(
    request: ReviewRequest,
    llm: Optional[BaseChatModel] = None,
) -> GeneratedReview:
    """
    Generate a review and extract its questions.

    Args:
        request: Review parameters
        llm: Chat model to use (defaults to one built from settings)

    Returns:
        GeneratedReview with the raw content and the extracted questions

    Raises:
        ValueError: If the model is not configured
        ReviewGenerationError: If the model call fails
    """
    logger.info(
        "Generating review %r: %s, %d subtopic(s), %d question(s), difficulty=%s, style=%s, hints=%s",
        request.title,
        request.question_type.value,
        len(request.subtopics),
        request.question_count,
        request.difficulty_level,
        request.exam_style,
        request.include_hints,
    )

    llm = llm or create_chat_model()
    messages = [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_review_prompt(request)},
    ]

    try:
        response = llm.invoke(messages)
    except openai.OpenAIError as e:
        logger.error("Review generation failed: %s", e)
        raise ReviewGenerationError(f"Failed to generate review: {e}") from e

    content = _message_text(response)
    logger.info("Review generated (%d characters)", len(content))

    result = extract_questions_with_family(content)
    logger.info("Extracted %d questions from the generated content", result.question_count)

    return GeneratedReview(
        content=content,
        questions=result.questions,
        family=result.family,
    )


__all__ = [
    "ReviewGenerationError",
    "create_chat_model",
    "generate_review",
]
