"""
JSON-backed persistence for reviews and their questions.

The store keeps three tables in a single ``reviews.json`` document:

    reviews           - one row per review (ReviewRecord)
    review_subtopics  - (review_id, subtopic_id) links
    review_questions  - numbered question rows (ReviewQuestionRow)

Every operation reads the document, applies its change and writes the
whole document back atomically, so a failed operation leaves the
previous state untouched.
"""

import json
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from ..models.config import get_settings
from ..models.questions import ExtractedQuestion
from ..models.reviews import (
    ReviewData,
    ReviewQuestionRow,
    ReviewRecord,
    ReviewUpdate,
)
from ..utils.file_utils import read_json_file, write_json_file

logger = logging.getLogger(__name__)


STORE_FILENAME = "reviews.json"
TABLES = ("reviews", "review_subtopics", "review_questions")


class ReviewPersistenceError(Exception):
    """Raised when a review cannot be read or written."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        if self.code:
            return f"{self.message} ({self.code})"
        return self.message


class ReviewStore:
    """
    Persist reviews, their subtopic links and their questions.

    Attributes:
        path: Location of the JSON document
        indent: JSON indentation used when writing
    """

    def __init__(self, data_dir: Optional[str | Path] = None, indent: Optional[int] = None):
        settings = get_settings()
        self.path = Path(data_dir or settings.data_dir) / STORE_FILENAME
        self.indent = settings.json_indent if indent is None else indent

    # -------------------------------------------------------------------------
    # Document access
    # -------------------------------------------------------------------------

    def _load(self) -> dict[str, list[dict]]:
        if not self.path.exists():
            return {table: [] for table in TABLES}

        try:
            data = read_json_file(self.path)
        except (json.JSONDecodeError, OSError) as e:
            raise ReviewPersistenceError(
                f"Review store is unreadable: {self.path}",
                "STORE_CORRUPT",
                {"error": str(e)},
            ) from e

        if not isinstance(data, dict):
            raise ReviewPersistenceError(
                f"Review store has invalid format: {self.path}", "STORE_CORRUPT"
            )
        for table in TABLES:
            data.setdefault(table, [])
        return data

    def _save(self, data: dict[str, list[dict]]) -> None:
        try:
            write_json_file(self.path, data, indent=self.indent)
        except OSError as e:
            raise ReviewPersistenceError(
                f"Failed to write review store: {self.path}",
                "STORE_WRITE_FAILED",
                {"error": str(e)},
            ) from e

    @staticmethod
    def _find_review(data: dict, review_id: str) -> Optional[dict]:
        for row in data["reviews"]:
            if row.get("review_id") == review_id:
                return row
        return None

    def _require_review(self, data: dict, review_id: str) -> dict:
        row = self._find_review(data, review_id)
        if row is None:
            raise ReviewPersistenceError(
                f"Review not found: {review_id}",
                "REVIEW_NOT_FOUND",
                {"review_id": review_id},
            )
        return row

    @staticmethod
    def _question_rows(review_id: str, questions: list[ExtractedQuestion]) -> list[dict]:
        return [
            ReviewQuestionRow.from_question(review_id, number, question).model_dump(mode="json")
            for number, question in enumerate(questions, start=1)
        ]

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def save_review(
        self,
        review_data: ReviewData,
        generated_content: str,
        teacher_id: Optional[str],
    ) -> str:
        """
        Save a review and link it to its subtopics.

        Args:
            review_data: Review fields
            generated_content: Text returned by the language model
            teacher_id: Id of the teacher creating the review

        Returns:
            The new review id

        Raises:
            ReviewPersistenceError: If the teacher id is missing or the
                store cannot be written
        """
        if not teacher_id:
            raise ReviewPersistenceError("Authentication required", "AUTH_REQUIRED")

        data = self._load()
        record = ReviewRecord(
            review_id=str(uuid.uuid4()),
            teacher_id=teacher_id,
            title=review_data.title,
            description=review_data.description or None,
            question_type=review_data.question_type,
            difficulty_level=review_data.difficulty_level,
            exam_style=review_data.exam_style,
            include_hints=review_data.include_hints,
            content=generated_content,
        )

        data["reviews"].append(record.model_dump(mode="json"))
        data["review_subtopics"].extend(
            {"review_id": record.review_id, "subtopic_id": subtopic_id}
            for subtopic_id in review_data.subtopic_ids
        )
        self._save(data)

        logger.info(
            "Review created: %s (%d subtopic(s))",
            record.review_id, len(review_data.subtopic_ids),
        )
        return record.review_id

    def save_review_questions(self, review_id: str, questions: list[ExtractedQuestion]) -> None:
        """
        Save questions for a review, numbered from 1 in list order.

        An empty list is a no-op.

        Raises:
            ReviewPersistenceError: If the review does not exist
        """
        if not questions:
            logger.warning("No questions to insert for review %s", review_id)
            return

        data = self._load()
        self._require_review(data, review_id)

        data["review_questions"].extend(self._question_rows(review_id, questions))
        self._save(data)
        logger.info("Review questions inserted: %d for review %s", len(questions), review_id)

    def get_review_with_questions(
        self, review_id: str
    ) -> tuple[ReviewRecord, list[ExtractedQuestion]]:
        """
        Get a review with its questions in question-number order.

        Raises:
            ReviewPersistenceError: If the review does not exist or a stored
                row is invalid
        """
        data = self._load()
        row = self._require_review(data, review_id)

        try:
            review = ReviewRecord.model_validate(row)
            question_rows = sorted(
                (
                    ReviewQuestionRow.model_validate(q)
                    for q in data["review_questions"]
                    if q.get("review_id") == review_id
                ),
                key=lambda q: q.question_number,
            )
            questions = [q.to_question() for q in question_rows]
        except ValidationError as e:
            raise ReviewPersistenceError(
                f"Stored review is invalid: {review_id}",
                "STORE_CORRUPT",
                {"error": str(e)},
            ) from e

        return review, questions

    def get_subtopic_ids(self, review_id: str) -> list[int]:
        """Get the subtopic ids linked to a review."""
        data = self._load()
        return [
            link["subtopic_id"]
            for link in data["review_subtopics"]
            if link.get("review_id") == review_id
        ]

    def update_review(
        self,
        review_id: str,
        updates: ReviewUpdate,
        updated_content: Optional[str] = None,
        updated_questions: Optional[list[ExtractedQuestion]] = None,
    ) -> None:
        """
        Update a review. Only fields set in ``updates`` are changed.

        Args:
            review_id: Review to update
            updates: Partial review fields
            updated_content: Replacement generated content, if any
            updated_questions: Replacement question set, if any

        Raises:
            ReviewPersistenceError: If the review does not exist
        """
        data = self._load()
        row = self._require_review(data, review_id)

        changes = updates.model_dump(exclude_unset=True, exclude_none=True)
        if "description" in changes:
            changes["description"] = changes["description"] or None
        if updated_content:
            changes["content"] = updated_content

        if updated_questions is not None:
            data["review_questions"] = [
                q for q in data["review_questions"] if q.get("review_id") != review_id
            ]
            data["review_questions"].extend(self._question_rows(review_id, updated_questions))

        if not changes and updated_questions is None:
            logger.debug("Nothing to update for review %s", review_id)
            return

        row.update(changes)
        row["updated_at"] = datetime.now().isoformat()
        self._save(data)
        logger.info("Review updated: %s (%s)", review_id, ", ".join(sorted(changes)) or "questions")

    def delete_review(self, review_id: str) -> None:
        """
        Delete a review with its subtopic links and questions.

        Raises:
            ReviewPersistenceError: If the review does not exist
        """
        data = self._load()
        self._require_review(data, review_id)

        for table in TABLES:
            data[table] = [row for row in data[table] if row.get("review_id") != review_id]
        self._save(data)
        logger.info("Review deleted: %s", review_id)

    def list_reviews(self) -> list[ReviewRecord]:
        """Get all reviews, newest first."""
        data = self._load()
        try:
            reviews = [ReviewRecord.model_validate(row) for row in data["reviews"]]
        except ValidationError as e:
            raise ReviewPersistenceError(
                f"Stored review is invalid: {self.path}",
                "STORE_CORRUPT",
                {"error": str(e)},
            ) from e
        return sorted(reviews, key=lambda r: r.created_at, reverse=True)


__all__ = [
    "ReviewPersistenceError",
    "ReviewStore",
    "STORE_FILENAME",
]
