"""
Tests for the command-line interface.

The language model is never called: generate_review is replaced where a
command needs a generated review.
"""

import json

import pytest
from click.testing import CliRunner
from docx import Document
from rich.console import Console

from reviewgen import __version__, cli
from reviewgen.cli import main
from reviewgen.extraction import extract_questions_with_family
from reviewgen.models.reviews import GeneratedReview


@pytest.fixture
def runner(monkeypatch):
    # Wide console so table cells are not wrapped or cropped
    monkeypatch.setattr(cli, "console", Console(width=200))
    return CliRunner()


@pytest.fixture
def saved_review(store, review_data, sample_questions):
    review_id = store.save_review(review_data, "Generated review text", "teacher-1")
    store.save_review_questions(review_id, sample_questions)
    return review_id


@pytest.fixture
def fake_generation(monkeypatch, multiple_choice_text):
    calls = []

    def fake_generate_review(request):
        calls.append(request)
        result = extract_questions_with_family(multiple_choice_text)
        return GeneratedReview(content=multiple_choice_text, questions=result.questions, family=result.family)

    monkeypatch.setattr(cli, "generate_review", fake_generate_review)
    return calls


class TestExtractCommand:
    """Tests for 'reviewgen extract'."""

    def test_extract_file_with_outputs(self, runner, tmp_path, multiple_choice_text):
        source = tmp_path / "review.txt"
        source.write_text(multiple_choice_text, encoding="utf-8")

        result = runner.invoke(main, [
            "extract", str(source), "-j", "questions.json", "-w", "review.docx",
            "--title", "Arithmetic", "--validate",
        ])

        assert result.exit_code == 0, result.output
        assert "Extracted 2 question(s) using the multiple_choice pattern" in result.output
        assert "Validation:" in result.output

        data = json.loads((tmp_path / "questions.json").read_text(encoding="utf-8"))
        assert data["family"] == "multiple_choice"
        assert len(data["questions"]) == 2
        assert "Arithmetic" in [p.text for p in Document(tmp_path / "review.docx").paragraphs]

    def test_extract_from_stdin(self, runner, numbered_answer_text):
        result = runner.invoke(main, ["extract"], input=numbered_answer_text)

        assert result.exit_code == 0, result.output
        assert "numbered_with_answer" in result.output
        assert "What is the capital of France?" in result.output

    def test_no_questions(self, runner):
        result = runner.invoke(main, ["extract"], input="Nothing to see here.")

        assert result.exit_code == 1
        assert "No questions could be extracted" in result.output


class TestValidateCommand:
    """Tests for 'reviewgen validate'."""

    def test_valid_file(self, runner, tmp_path, sample_questions):
        path = tmp_path / "questions.json"
        path.write_text(json.dumps([q.to_dict() for q in sample_questions]), encoding="utf-8")

        result = runner.invoke(main, ["validate", str(path)])

        assert result.exit_code == 0, result.output
        assert "VALID" in result.output
        assert "confidence 1.00" in result.output

    def test_issue_lines(self, runner, tmp_path):
        path = tmp_path / "questions.json"
        path.write_text(json.dumps([{"prompt": "What is a loop?"}]), encoding="utf-8")

        result = runner.invoke(main, ["validate", str(path)])

        assert "INVALID" in result.output
        assert "Q1: Question has no answer [missing_answer]" in result.output

    def test_invalid_file(self, runner, tmp_path):
        path = tmp_path / "questions.json"
        path.write_text("{broken", encoding="utf-8")

        result = runner.invoke(main, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Invalid JSON" in result.output


class TestGenerateCommand:
    """Tests for 'reviewgen generate'."""

    BASE_ARGS = [
        "generate", "--subject", "Java", "--grade", "Grade 11", "--title", "Loops",
        "-s", "12:For loops:Control flow", "-s", "13:If statements",
        "--hints", "--exam-style", "IEB", "-n", "2",
    ]

    def test_builds_request(self, runner, fake_generation):
        result = runner.invoke(main, self.BASE_ARGS + ["-t", "True or False"])

        assert result.exit_code == 0, result.output
        request = fake_generation[0]
        assert request.question_type.value == "true or false"
        assert [(s.id, s.title, s.topic_title) for s in request.subtopics] == [
            (12, "For loops", "Control flow"),
            (13, "If statements", ""),
        ]
        assert request.include_hints is True
        assert request.question_count == 2
        assert "Extracted 2 question(s) using the multiple_choice pattern" in result.output

    def test_save_to_store(self, runner, tmp_path, fake_generation):
        data_dir = tmp_path / "store"
        result = runner.invoke(main, self.BASE_ARGS + [
            "--save", "--teacher-id", "teacher-1", "--data-dir", str(data_dir), "-j", "out.json",
        ])

        assert result.exit_code == 0, result.output
        assert "Saved review" in result.output

        data = json.loads((data_dir / "reviews.json").read_text(encoding="utf-8"))
        assert data["reviews"][0]["teacher_id"] == "teacher-1"
        assert [link["subtopic_id"] for link in data["review_subtopics"]] == [12, 13]
        assert len(data["review_questions"]) == 2
        assert (tmp_path / "out.json").exists()

    def test_teacher_id_from_environment(self, runner, tmp_path, fake_generation):
        result = runner.invoke(
            main,
            self.BASE_ARGS + ["--save", "--data-dir", str(tmp_path / "store")],
            env={"REVIEWGEN_TEACHER_ID": "teacher-9"},
        )

        assert result.exit_code == 0, result.output
        data = json.loads((tmp_path / "store" / "reviews.json").read_text(encoding="utf-8"))
        assert data["reviews"][0]["teacher_id"] == "teacher-9"

    def test_save_requires_teacher_id(self, runner, tmp_path, fake_generation):
        result = runner.invoke(main, self.BASE_ARGS + ["--save", "--data-dir", str(tmp_path / "store")])

        assert result.exit_code == 1
        assert "AUTH_REQUIRED" in result.output
        assert not (tmp_path / "store" / "reviews.json").exists()

    def test_bad_subtopic(self, runner, fake_generation):
        result = runner.invoke(main, ["generate", "--subject", "Java", "--grade", "11",
                                      "--title", "Loops", "-s", "loops"])

        assert result.exit_code == 2
        assert "ID:TITLE" in result.output
        assert fake_generation == []

    def test_blank_title(self, runner, fake_generation):
        result = runner.invoke(main, ["generate", "--subject", "Java", "--grade", "11", "--title", "   "])

        assert result.exit_code == 1
        assert "Review title cannot be empty" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert fake_generation == []

    def test_missing_api_key(self, runner):
        result = runner.invoke(main, ["generate", "--subject", "Java", "--grade", "11", "--title", "Loops"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestStoredReviewCommands:
    """Tests for commands working with saved reviews."""

    def test_reviews_empty(self, runner, tmp_path):
        result = runner.invoke(main, ["reviews", "--data-dir", str(tmp_path / "data")])

        assert result.exit_code == 0
        assert "No reviews saved yet." in result.output

    def test_reviews_list(self, runner, tmp_path, saved_review):
        result = runner.invoke(main, ["reviews", "--data-dir", str(tmp_path / "data")])

        assert result.exit_code == 0, result.output
        assert saved_review in result.output
        assert "Loops and Conditions" in result.output

    def test_show(self, runner, tmp_path, saved_review):
        result = runner.invoke(main, ["show", saved_review, "--data-dir", str(tmp_path / "data"), "--content"])

        assert result.exit_code == 0, result.output
        assert "IEB" in result.output
        assert "Name the largest planet." in result.output
        assert "Generated review text" in result.output

    def test_reviews_invalid_row(self, runner, tmp_path):
        data_dir = tmp_path / "data"
        data_dir.mkdir()
        (data_dir / "reviews.json").write_text(json.dumps({"reviews": [{"review_id": "r-1"}]}), encoding="utf-8")

        result = runner.invoke(main, ["reviews", "--data-dir", str(data_dir)])

        assert result.exit_code == 1
        assert "STORE_CORRUPT" in result.output

    def test_show_missing(self, runner, tmp_path):
        result = runner.invoke(main, ["show", "missing", "--data-dir", str(tmp_path / "data")])

        assert result.exit_code == 1
        assert "REVIEW_NOT_FOUND" in result.output

    def test_export_to_path(self, runner, tmp_path, saved_review):
        output_path = tmp_path / "exported.docx"
        result = runner.invoke(main, [
            "export", saved_review, "-o", str(output_path), "--no-answers",
            "--data-dir", str(tmp_path / "data"),
        ])

        assert result.exit_code == 0, result.output
        paragraphs = [p.text for p in Document(output_path).paragraphs]
        assert "Loops and Conditions" in paragraphs
        assert "Answer Key" not in paragraphs

    def test_export_default_path(self, runner, tmp_path, saved_review):
        result = runner.invoke(main, ["export", saved_review, "--data-dir", str(tmp_path / "data")])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "output" / "loops_and_conditions.docx").exists()

    def test_delete(self, runner, tmp_path, store, saved_review):
        result = runner.invoke(main, ["delete", saved_review, "--yes", "--data-dir", str(tmp_path / "data")])

        assert result.exit_code == 0, result.output
        assert f"Deleted review {saved_review}" in result.output
        assert store.list_reviews() == []


class TestMiscCommands:
    """Tests for version and config output."""

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert __version__ in result.output

    def test_config(self, runner):
        result = runner.invoke(main, ["config"])

        assert result.exit_code == 0
        assert "gpt-3.5-turbo" in result.output
        assert "Not set" in result.output
