"""
Word export for reviews.

Questions are written as numbered paragraphs; multiple-choice options go
in a borderless 2x2 table below the question, hints follow in italics,
and an answer key closes the document.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from docx import Document
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt

from ..models.questions import OPTION_LETTERS, ExtractedQuestion

logger = logging.getLogger(__name__)


FONT_NAME = "Calibri"
ANSWER_KEY_HEADING = "Answer Key"


# ==================== Word Document Helpers ====================

def remove_table_borders(document: Document) -> None:
    """Remove borders from all tables in the document."""
    for table in document.tables:
        tbl = table._tbl
        tbl_pr = tbl.tblPr
        if tbl_pr is None:
            tbl_pr = OxmlElement("w:tblPr")
            tbl.insert(0, tbl_pr)
        borders = OxmlElement("w:tblBorders")
        for edge in ("top", "left", "bottom", "right", "insideH", "insideV"):
            border = OxmlElement(f"w:{edge}")
            border.set(qn("w:val"), "nil")
            borders.append(border)
        tbl_pr.append(borders)


def apply_font(run, size_pt: float, italic: bool = False) -> None:
    """Apply the document font to a run."""
    run.font.name = FONT_NAME
    run.font.size = Pt(size_pt)
    run.font.italic = italic


def format_cell_text(cell, font_size: float) -> None:
    """Format text in a table cell."""
    for paragraph in cell.paragraphs:
        for run in paragraph.runs:
            apply_font(run, font_size)


def format_answer(question: ExtractedQuestion) -> str:
    """Render a question's answer for the answer key."""
    answer = question.answer
    if isinstance(answer, bool):
        return "True" if answer else "False"
    if answer is None:
        return "-"
    return str(answer)


# ==================== Document Builders ====================

def add_options_table(document: Document, options: list[str]) -> None:
    """Add a 2x2 table holding options A-D."""
    table = document.add_table(rows=2, cols=2)
    table.allow_autofit = False
    coords = [(0, 0), (0, 1), (1, 0), (1, 1)]

    for letter, option, coordinate in zip(OPTION_LETTERS, options, coords):
        cell = table.cell(*coordinate)
        cell.text = f"{letter}. {option.strip()}"
        format_cell_text(cell, 10)


def build_question_paragraphs(
    questions: Iterable[ExtractedQuestion], document: Document
) -> int:
    """Add the numbered questions to the document.

    Args:
        questions: Questions in display order
        document: Word document to add to

    Returns:
        Number of questions added
    """
    count = 0
    for question in questions:
        paragraph = document.add_paragraph(style="List Number")
        apply_font(paragraph.add_run(question.prompt), 12)

        if question.options is not None:
            add_options_table(document, question.options)

        if question.hint:
            hint = document.add_paragraph()
            apply_font(hint.add_run(f"Hint: {question.hint}"), 10, italic=True)

        document.add_paragraph()
        count += 1

    return count


def build_answer_key(questions: list[ExtractedQuestion], document: Document) -> None:
    """Add the answer key section."""
    document.add_heading(ANSWER_KEY_HEADING, level=2)
    for number, question in enumerate(questions, start=1):
        paragraph = document.add_paragraph()
        apply_font(paragraph.add_run(f"{number}. {format_answer(question)}"), 11)
        if question.explanation:
            explanation = document.add_paragraph()
            apply_font(explanation.add_run(question.explanation), 10, italic=True)


def generate_word_document(
    questions: list[ExtractedQuestion],
    output_path: Path,
    title: Optional[str] = None,
    include_answers: bool = True,
) -> tuple[bool, str, int]:
    """Generate a Word document from review questions.

    Args:
        questions: Questions to write
        output_path: Path to save the document (.docx is added if missing)
        title: Optional document heading
        include_answers: Whether to append the answer key

    Returns:
        Tuple of (success, message, question count)
    """
    output_path = Path(output_path)
    if output_path.suffix.lower() != ".docx":
        output_path = output_path.with_suffix(".docx")

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        document = Document()

        if title:
            document.add_heading(title, level=1)

        count = build_question_paragraphs(questions, document)
        if include_answers and questions:
            build_answer_key(questions, document)

        remove_table_borders(document)
        document.save(output_path)

    except (OSError, ValueError) as e:
        # ValueError: text that is not XML compatible, e.g. control characters
        logger.error("Failed to write Word document %s: %s", output_path, e)
        return False, f"Error generating document: {e}", 0

    logger.info("Saved %d question(s) to %s", count, output_path)
    return True, f"Successfully saved {count} questions to {output_path}", count


__all__ = [
    "generate_word_document",
    "build_question_paragraphs",
    "build_answer_key",
    "format_answer",
]
