"""
Shared fixtures for the test suite.
"""

import pytest

from reviewgen.models.config import get_settings
from reviewgen.models.questions import ExtractedQuestion
from reviewgen.models.reviews import ReviewData, ReviewRequest, SubtopicRef
from reviewgen.storage import ReviewStore


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep tests away from real credentials and data directories."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "OPENAI_API_KEY", "OPENAI_BASE_URL", "OPENAI_MODEL", "OPENAI_TEMPERATURE",
        "OPENAI_MAX_TOKENS", "DATA_DIR", "DEFAULT_OUTPUT_DIR", "LOG_LEVEL",
        "REVIEWGEN_TEACHER_ID",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def multiple_choice_text():
    return (
        "Here is your review.\n\n"
        "1. What is 2+2?\n"
        "A. 3\n"
        "B. 4\n"
        "C. 5\n"
        "D. 6\n"
        "Answer: B\n"
        "Explanation: Two plus two equals four.\n\n"
        "2. Which keyword declares a constant in Java?\n"
        "A. const\n"
        "B. static\n"
        "C. final\n"
        "D. var\n"
        "Answer: C\n"
    )


@pytest.fixture
def numbered_answer_text():
    return (
        "1. What is the capital of France?\n"
        "Think about famous landmarks.\n"
        "Hint: It is home to the Eiffel Tower\n"
        "Answer: Paris\n"
        "2. Name the largest planet in the solar system.\n"
        "Answer: Jupiter\n"
    )


@pytest.fixture
def embedded_object_text():
    return (
        "Daily review\n\n"
        '{ "question": "Java is a compiled language.", "answer": true, '
        '"explanation": "Java compiles to bytecode.", "hint": "Think about the JVM." }\n\n'
        '{ "question": "Which loop always runs at least once?", '
        '"options": ["for", "while", "do-while", "foreach"], "answer": "do-while" }\n'
    )


@pytest.fixture
def sample_questions():
    return [
        ExtractedQuestion(
            prompt="What is 2+2?",
            options=["3", "4", "5", "6"],
            answer="B",
            explanation="Two plus two equals four.",
        ),
        ExtractedQuestion(
            prompt="Java is a compiled language.",
            answer=True,
            hint="Think about the JVM.",
        ),
        ExtractedQuestion(prompt="Name the largest planet.", answer="Jupiter"),
    ]


@pytest.fixture
def review_request():
    return ReviewRequest(
        subject="Java",
        grade="Grade 11",
        title="Loops and Conditions",
        description="Revision before the test",
        question_type="Multiple Choice Questions",
        subtopics=[
            SubtopicRef(id=12, title="For loops", topic_id=3, topic_title="Control flow"),
            SubtopicRef(id=13, title="If statements", topic_id=3, topic_title="Control flow"),
        ],
        include_hints=True,
        difficulty_level="Hard",
        exam_style="IEB",
        question_count=4,
    )


@pytest.fixture
def review_data():
    return ReviewData(
        title="Loops and Conditions",
        description="Revision before the test",
        subtopic_ids=[12, 13],
        difficulty_level="Hard",
        exam_style="IEB",
        include_hints=True,
    )


@pytest.fixture
def store(tmp_path):
    return ReviewStore(tmp_path / "data")
