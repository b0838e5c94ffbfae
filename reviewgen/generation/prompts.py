"""
Prompt templates for review generation.

This module builds the instructions sent to the language model: the
question format to follow, the exam style to imitate, and the review
prompt itself.
"""

from ..models.reviews import QuestionType, ReviewRequest


SYSTEM_PROMPT = (
    "You are an expert educational content creator specializing in "
    "creating review materials for students."
)

DEFAULT_EXAM_STYLE_INSTRUCTION = (
    "Create questions with a balanced difficulty level, suitable for general assessments."
)

EXAM_STYLE_INSTRUCTIONS = {
    "Standard": "Create questions that are straightforward and suitable for high school level exams.",
    "IEB": "Create questions that focus on critical thinking and application, as expected in IEB exams.",
    "Cambridge": (
        "Create questions that assess deep understanding, problem-solving, and analytical skills, "
        "similar to Cambridge International exams."
    ),
    "AP": "Create questions that are rigorous and college-level, similar to Advanced Placement exams.",
    "OCA": (
        "Create questions that reflect the format and difficulty of the Oracle Certified Associate (OCA) "
        "exam, focusing on Java fundamentals and syntax."
    ),
    "OCP": (
        "Create questions that match the Oracle Certified Professional (OCP) exam, emphasizing advanced "
        "Java concepts, APIs, and performance optimization."
    ),
    "Oracle Master": (
        "Create highly complex questions that reflect the Oracle Certified Master (OCM) level, focusing "
        "on advanced Java architecture, performance tuning, and real-world scenarios."
    ),
    "Java SE 8": "Create questions specific to Java SE 8, including lambdas, streams, and functional interfaces.",
    "Java SE 11": "Create questions specific to Java SE 11, including modules, var keyword, and new APIs.",
    "Java SE 17": (
        "Create questions specific to Java SE 17, including pattern matching, records, and sealed classes."
    ),
    "Mock Interview": (
        "Create questions that simulate real-world technical interview challenges, including algorithmic "
        "problem-solving and coding exercises."
    ),
    "Coding Challenge": (
        "Create competitive programming questions that test problem-solving speed and accuracy, similar "
        "to coding contests."
    ),
    "LeetCode Style": (
        "Create algorithmic and data structure questions similar to those found on LeetCode, including "
        "edge cases and optimal solutions."
    ),
    "HackerRank Style": (
        "Create algorithmic and data structure questions similar to those on HackerRank, with a focus on "
        "efficiency and code clarity."
    ),
    "Final Exam": (
        "Create comprehensive, multi-topic questions suitable for final exams, covering a wide range of "
        "concepts."
    ),
    "Midterm": "Create midterm-level questions that assess understanding at the halfway point of a course.",
    "Placement Test": (
        "Create questions that assess readiness for job placement or university admission, focusing on "
        "practical knowledge and critical thinking."
    ),
}

QUESTION_FORMAT_INSTRUCTIONS = {
    QuestionType.MULTIPLE_CHOICE: """
Format each question as multiple choice with 4 options, including only one correct answer. Use this structure:

{
  "question": "What is the correct answer to this concept?",
  "options": ["Option A", "Option B", "Option C", "Option D"],
  "answer": "Correct Option",
  "explanation": "A short explanation of why this answer is correct.",
  "hint": "Optional hint for the question"
}
""",
    QuestionType.FILL_IN_MISSING_WORDS: """
Format the questions as fill-in-the-blank sentences, where learners must identify the correct missing words. Use this structure:

{
  "question": "Java is a ____ language.",
  "correct_answer": "programming",
  "hint": "It's a common term for software development."
}
""",
    QuestionType.TRUE_OR_FALSE: """
Format the questions as true/false statements. Use this structure:

{
  "question": "Java is a compiled language.",
  "answer": true,
  "explanation": "Java code is compiled to bytecode which runs on the JVM.",
  "hint": "Think about how Java code is executed."
}
""",
    QuestionType.MATCH_THE_COLUMN: """
Format the questions as match-the-column exercises, where learners pair related items. Use this structure:

{
  "pairs": [
    { "left": "Java", "right": "Programming Language" },
    { "left": "JVM", "right": "Java Virtual Machine" },
    { "left": "Polymorphism", "right": "OOP Concept" }
  ],
  "hint": "Match the items based on their relationship."
}
""",
    QuestionType.EXPLAIN: """
Format the questions as open-ended explain prompts, where learners must provide detailed responses. Use this structure:

{
  "question": "Explain the difference between overloading and overriding in Java.",
  "hint": "Consider method signatures and runtime behavior."
}
""",
}


def get_exam_style_instruction(exam_style: str) -> str:
    """Get the instruction matching an exam style, or the balanced default."""
    return EXAM_STYLE_INSTRUCTIONS.get(exam_style, DEFAULT_EXAM_STYLE_INSTRUCTION)


def get_question_format_instruction(question_type: str | QuestionType) -> str:
    """
    Get the example structure for a question type.

    Args:
        question_type: A QuestionType or its name in any letter case

    Returns:
        Format instruction, or an empty string for unknown types
    """
    try:
        key = QuestionType(question_type)
    except ValueError:
        return ""
    return QUESTION_FORMAT_INSTRUCTIONS.get(key, "").strip()


def build_review_prompt(request: ReviewRequest) -> str:
    """
    Build the user prompt for generating a review.

    Args:
        request: Review parameters

    Returns:
        Prompt text
    """
    subtopics = "\n".join(
        f"- {s.title} (from topic: {s.topic_title})" if s.topic_title else f"- {s.title}"
        for s in request.subtopics
    )
    hints_line = (
        "Please include hints for each question." if request.include_hints
        else "Do not include hints."
    )
    count = request.question_count

    lines = [
        f'Create a {request.difficulty_level} difficulty daily review for {request.grade} '
        f'{request.subject} with the title "{request.title}".',
        "",
        f"Description: {request.description or 'No specific description provided.'}",
        "",
        "The review should cover the following subtopics *only*:",
        subtopics or "- (no subtopics selected)",
        "",
        "Do not include questions about concepts not explicitly listed, "
        "unless they are part of the listed subtopics.",
        "",
        f"Question type: {request.question_type.value}",
        f"Exam style: {request.exam_style}",
        hints_line,
        "For each question, also include an explanation of why the correct answer is correct.",
        f"Generate exactly {count} questions.",
        "",
        get_question_format_instruction(request.question_type),
        get_exam_style_instruction(request.exam_style),
        "",
        "Format the review with:",
        "1. A brief introduction",
        f"2. Exactly {count} questions with clear numbering",
    ]
    if request.include_hints:
        lines.append("3. Hints for each question")
        lines.append("4. Answer key at the end")
    else:
        lines.append("3. Answer key at the end")
    lines.extend([
        "",
        f"Make the questions appropriate for {request.grade} level students "
        "and ensure they cover all the listed subtopics.",
    ])

    return "\n".join(lines)


__all__ = [
    "SYSTEM_PROMPT",
    "EXAM_STYLE_INSTRUCTIONS",
    "QUESTION_FORMAT_INSTRUCTIONS",
    "get_exam_style_instruction",
    "get_question_format_instruction",
    "build_review_prompt",
]
