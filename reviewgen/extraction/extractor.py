"""
Question extraction from generated review text.

Language models asked for a review rarely follow the requested format
exactly. This module recovers structured questions from whatever came
back by trying a fixed sequence of pattern families:

    1. embedded_object      - JSON-like ``{"question": ...}`` blocks
    2. multiple_choice      - numbered question, options A-D, ``Answer: X``
    3. numbered_with_answer - numbered question with an ``Answer:`` line
    4. last_resort          - numbered lines that look like questions

The first family producing at least one valid question wins and its
results are returned as-is. Extraction never raises on bad input; an
empty list means nothing recognizable was found.
"""

import json
import logging
import re
from typing import Any, Callable, Iterator, Optional

from pydantic import ValidationError

from ..models.questions import (
    OPTION_COUNT,
    PLACEHOLDER_ANSWER,
    ExtractedQuestion,
    ExtractionResult,
    PatternFamily,
)

logger = logging.getLogger(__name__)


# Numbered lines shorter than this are not taken as questions by the last resort family.
MIN_LAST_RESORT_LENGTH = 10

# "1." optionally behind a markdown heading or emphasis; "1.5" is not a number prefix.
_NUMBER_PREFIX = r"^[ \t]*(?:\#{1,6}[ \t]+)?[*_]*(\d+)\.(?!\d)[*_]*[ \t]*"

# Captured text starts with a non-space character so it never competes with
# the surrounding whitespace runs for the same characters.
NUMBERED_LINE_PATTERN = re.compile(_NUMBER_PREFIX + r"((?:\S.*)?)$", re.MULTILINE)

EMBEDDED_OBJECT_START = re.compile(r'\{\s*"question"\s*:')

# Not at the start of a numbered line or an option line.
_NOT_ITEM_START = r"(?!^[ \t]*(?:[*_]*\d+\.(?!\d)|[A-D][.)]))"

# End of the current line plus any blank lines after it.
_LINE_END = r"[ \t]*\n(?:[ \t]*\n)*"


def _option_line(letter: str) -> str:
    return rf"^[ \t]*{letter}[.)][ \t]*((?:\S.*)?)\n(?:[ \t]*\n)*"


MULTIPLE_CHOICE_PATTERN = re.compile(
    _NUMBER_PREFIX
    # Question text may wrap, but never across another numbered or option line.
    + rf"((?:{_NOT_ITEM_START}\S(?:(?:{_NOT_ITEM_START}[\s\S])*?{_NOT_ITEM_START}\S)?)?)"
    + _LINE_END
    + "".join(_option_line(letter) for letter in "ABCD")
    + r"^[ \t]*[*_]*(?:Correct[ \t]+)?Answer[*_]*[ \t]*(?::[*_]*[ \t]*)?\(?([A-D])\b",
    re.MULTILINE,
)

LABEL_LINE_PATTERN = re.compile(
    r"^[ \t]*[*_]*(?P<label>hint|explanation|(?:correct[ \t]+)?answer)\b[*_]*[ \t]*"
    r"(?P<colon>:)?[*_]*[ \t]*(?P<text>(?:\S.*)?)$",
    re.IGNORECASE,
)


# ==================== Helpers ====================

def _clean_text(text: str) -> str:
    """Collapse surrounding whitespace and markdown emphasis."""
    return text.strip().strip("*").strip()


def _split_sections(text: str, initial: str) -> dict[str, str]:
    """Split text into labelled sections (hint, explanation, answer).

    Lines before the first label belong to ``initial``. An answer or
    explanation label opens its section and following unlabelled lines
    continue it. A hint is only the text on its own line; the lines after
    it stay with the section that was open before. ``Answer`` and
    ``Explanation`` need a colon to count as labels, ``Hint`` does not.
    Only the first occurrence of each label opens a section.
    """
    sections: dict[str, list[str]] = {initial: []}
    current = initial

    for line in text.split("\n"):
        match = LABEL_LINE_PATTERN.match(line)
        if match:
            label = match.group("label").lower()
            if label.endswith("answer"):
                label = "answer"
            needs_colon = label != "hint"
            if label not in sections and (match.group("colon") or not needs_colon):
                sections[label] = [match.group("text").rstrip()]
                if label != "hint":
                    current = label
                continue
        sections[current].append(line)

    return {
        label: "\n".join(lines).strip()
        for label, lines in sections.items()
    }


def _numbered_blocks(content: str) -> Iterator[tuple[re.Match, str]]:
    """Yield each numbered line with the text up to the next numbered line."""
    matches = list(NUMBERED_LINE_PATTERN.finditer(content))
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(content)
        yield match, content[match.end():end]


def _build_question(**fields: Any) -> Optional[ExtractedQuestion]:
    """Validate a candidate record, returning None when it is unusable."""
    try:
        return ExtractedQuestion(**fields)
    except ValidationError as e:
        logger.debug("Discarding candidate question: %s", e.errors()[0]["msg"])
        return None


def _optional_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


# ==================== Embedded Object Family ====================

def _iter_embedded_objects(content: str) -> Iterator[Any]:
    """Decode every ``{"question": ...}`` block, skipping malformed ones.

    Each block is decoded from its opening brace to its matching closing
    brace. When decoding fails the scan resumes after the first closing
    brace following the block's start.
    """
    decoder = json.JSONDecoder()
    pos = 0

    while True:
        match = EMBEDDED_OBJECT_START.search(content, pos)
        if match is None:
            return

        try:
            value, end = decoder.raw_decode(content, match.start())
        except (json.JSONDecodeError, RecursionError) as e:
            close = content.find("}", match.end())
            block = content[match.start():close + 1 if close != -1 else len(content)]
            logger.warning("Failed to parse question block %r: %s", block[:120], e)
            pos = close + 1 if close != -1 else match.end()
            continue

        yield value
        pos = end


def _question_from_object(value: Any) -> Optional[ExtractedQuestion]:
    """Turn a decoded block into a question if it has a prompt and an answer."""
    if not isinstance(value, dict):
        return None

    prompt = value.get("question")
    answer = value.get("answer")
    if not _is_present(answer):
        # Fill-in-the-blank reviews are requested with "correct_answer".
        answer = value.get("correct_answer")

    if not isinstance(prompt, str) or not _is_present(answer):
        return None
    if not isinstance(answer, (bool, int, float, str)):
        return None
    if isinstance(answer, str):
        answer = answer.strip()

    options = value.get("options")
    if isinstance(options, list) and len(options) == OPTION_COUNT:
        options = [str(option).strip() for option in options]
    else:
        if options is not None:
            logger.debug("Ignoring options that are not a list of %d entries", OPTION_COUNT)
        options = None

    return _build_question(
        prompt=prompt,
        options=options,
        answer=answer,
        explanation=_optional_text(value.get("explanation")),
        hint=_optional_text(value.get("hint")),
    )


def match_embedded_objects(content: str) -> list[ExtractedQuestion]:
    """Extract questions written as JSON-like objects."""
    questions = []
    for value in _iter_embedded_objects(content):
        question = _question_from_object(value)
        if question is not None:
            questions.append(question)
    return questions


# ==================== Multiple Choice Family ====================

def match_multiple_choice(content: str) -> list[ExtractedQuestion]:
    """Extract numbered questions with options A-D and a lettered answer."""
    questions = []

    for match in MULTIPLE_CHOICE_PATTERN.finditer(content):
        # The numbered line is always question text; wrapped lines may carry a hint.
        first_line, _, wrapped = match.group(2).partition("\n")
        prompt_sections = _split_sections(wrapped, "prompt")
        prompt = f"{first_line}\n{prompt_sections['prompt']}"

        # Explanation and hint lines may follow the answer, up to the next question.
        next_question = NUMBERED_LINE_PATTERN.search(content, match.end())
        tail_end = next_question.start() if next_question else len(content)
        tail_sections = _split_sections(content[match.end():tail_end], "rest")

        question = _build_question(
            prompt=_clean_text(prompt),
            options=[_clean_text(match.group(i)) for i in range(3, 7)],
            answer=match.group(7),
            explanation=_optional_text(tail_sections.get("explanation")),
            hint=_optional_text(prompt_sections.get("hint") or tail_sections.get("hint")),
        )
        if question is not None:
            questions.append(question)

    return questions


# ==================== Numbered With Answer Family ====================

def match_numbered_with_answer(content: str) -> list[ExtractedQuestion]:
    """Extract numbered questions whose block contains an ``Answer:`` line."""
    questions = []

    for match, body in _numbered_blocks(content):
        sections = _split_sections(body, "context")
        answer = sections.get("answer")
        if not answer:
            continue

        question = _build_question(
            prompt=_clean_text(match.group(2)),
            answer=answer,
            explanation=_optional_text(sections.get("explanation")),
            hint=_optional_text(sections.get("hint")),
        )
        if question is not None:
            questions.append(question)

    return questions


# ==================== Last Resort Family ====================

def match_last_resort(content: str) -> list[ExtractedQuestion]:
    """Treat any reasonably long numbered line with a question mark as a question."""
    questions = []

    for match in NUMBERED_LINE_PATTERN.finditer(content):
        line = match.group(0).strip()
        if len(line) <= MIN_LAST_RESORT_LENGTH or "?" not in line:
            continue

        question = _build_question(
            prompt=_clean_text(match.group(2)),
            answer=PLACEHOLDER_ANSWER,
        )
        if question is not None:
            questions.append(question)

    return questions


# ==================== Public API ====================

Matcher = Callable[[str], list[ExtractedQuestion]]

PATTERN_FAMILIES: tuple[tuple[PatternFamily, Matcher], ...] = (
    (PatternFamily.EMBEDDED_OBJECT, match_embedded_objects),
    (PatternFamily.MULTIPLE_CHOICE, match_multiple_choice),
    (PatternFamily.NUMBERED_WITH_ANSWER, match_numbered_with_answer),
    (PatternFamily.LAST_RESORT, match_last_resort),
)


def extract_questions_with_family(content: Any) -> ExtractionResult:
    """Extract questions and report which pattern family produced them.

    Args:
        content: Text returned by the language model. Anything that is not
                 a non-empty string yields an empty result.

    Returns:
        ExtractionResult holding the questions of the first family that
        matched, or no questions and no family.
    """
    if not isinstance(content, str) or not content.strip():
        logger.warning("Invalid content provided for question extraction")
        return ExtractionResult()

    content = content.replace("\r\n", "\n").replace("\r", "\n")
    logger.debug("Extracting questions from content: %.200s...", content)

    for family, matcher in PATTERN_FAMILIES:
        questions = matcher(content)
        if questions:
            logger.info(
                "Parsed %d question(s) using the %s pattern",
                len(questions), family.value,
            )
            return ExtractionResult(questions=questions, family=family)
        logger.debug("No questions matched the %s pattern", family.value)

    logger.warning("No questions extracted")
    return ExtractionResult()


def extract_questions(content: Any) -> list[ExtractedQuestion]:
    """Extract questions from generated review text.

    Returns an empty list when nothing recognizable is found.
    """
    return extract_questions_with_family(content).questions


__all__ = [
    "MIN_LAST_RESORT_LENGTH",
    "PATTERN_FAMILIES",
    "extract_questions",
    "extract_questions_with_family",
    "match_embedded_objects",
    "match_multiple_choice",
    "match_numbered_with_answer",
    "match_last_resort",
]
