"""
Pydantic models for reviews: generation requests and stored rows.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .questions import AnswerValue, ExtractedQuestion, PatternFamily


class QuestionType(str, Enum):
    """Question formats a review can be generated in."""
    MULTIPLE_CHOICE = "multiple choice questions"
    FILL_IN_MISSING_WORDS = "fill in missing words"
    TRUE_OR_FALSE = "true or false"
    MATCH_THE_COLUMN = "match the column"
    EXPLAIN = "explain"

    @classmethod
    def _missing_(cls, value):
        # Accept "Multiple Choice Questions", "true_or_false", etc.
        if isinstance(value, str):
            normalized = value.strip().lower().replace("_", " ")
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class SubtopicRef(BaseModel):
    """A curriculum subtopic a review covers."""
    id: int
    title: str
    topic_id: Optional[int] = None
    topic_title: str = ""


class ReviewRequest(BaseModel):
    """Parameters for generating a review with the language model."""
    subject: str
    grade: str
    title: str
    description: str = ""
    question_type: QuestionType = QuestionType.MULTIPLE_CHOICE
    subtopics: list[SubtopicRef] = Field(default_factory=list)
    include_hints: bool = False
    difficulty_level: str = "Medium"
    exam_style: str = "Standard"
    question_count: int = Field(default=5, ge=1, le=50)

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Review title cannot be empty")
        return v.strip()

    @field_validator("question_type", mode="before")
    @classmethod
    def normalize_question_type(cls, v):
        if isinstance(v, str):
            return QuestionType(v)
        return v

    def to_review_data(self) -> "ReviewData":
        """Project the request onto the fields that get persisted."""
        return ReviewData(
            title=self.title,
            description=self.description,
            question_type=self.question_type.value,
            subtopic_ids=[s.id for s in self.subtopics],
            difficulty_level=self.difficulty_level,
            exam_style=self.exam_style,
            include_hints=self.include_hints,
        )


class ReviewData(BaseModel):
    """Review fields saved alongside the generated content."""
    title: str
    description: str = ""
    question_type: str = QuestionType.MULTIPLE_CHOICE.value
    subtopic_ids: list[int] = Field(default_factory=list)
    difficulty_level: str = "Medium"
    exam_style: str = "Standard"
    include_hints: bool = False


class ReviewUpdate(BaseModel):
    """Partial update of a stored review; unset fields are left alone."""
    title: Optional[str] = None
    description: Optional[str] = None
    difficulty_level: Optional[str] = None
    exam_style: Optional[str] = None
    include_hints: Optional[bool] = None


class ReviewRecord(BaseModel):
    """A stored review row."""
    review_id: str
    teacher_id: str
    title: str
    description: Optional[str] = None
    status: str = "published"
    question_type: str
    difficulty_level: str
    exam_style: str
    include_hints: bool = False
    content: str = ""
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None


class ReviewQuestionRow(BaseModel):
    """A stored question row, numbered from 1 within its review."""
    review_id: str
    question_number: int
    question_text: str
    options: Optional[list[str]] = None
    correct_answer: Optional[AnswerValue] = None
    explanation: Optional[str] = None
    hint: Optional[str] = None

    @classmethod
    def from_question(
        cls, review_id: str, question_number: int, question: ExtractedQuestion
    ) -> "ReviewQuestionRow":
        return cls(
            review_id=review_id,
            question_number=question_number,
            question_text=question.prompt,
            options=question.options,
            correct_answer=question.answer,
            explanation=question.explanation or None,
            hint=question.hint or None,
        )

    def to_question(self) -> ExtractedQuestion:
        return ExtractedQuestion(
            prompt=self.question_text,
            options=self.options,
            answer=self.correct_answer,
            explanation=self.explanation,
            hint=self.hint,
        )


class GeneratedReview(BaseModel):
    """Model output for a review together with the questions found in it."""
    content: str
    questions: list[ExtractedQuestion] = Field(default_factory=list)
    family: Optional[PatternFamily] = None

    @property
    def question_count(self) -> int:
        return len(self.questions)
