"""
Command-line interface for review generation and question extraction.

Commands:
- extract:  Extract questions from generated review text
- generate: Generate a review with the language model and extract its questions
- validate: Validate a JSON file of extracted questions
- reviews / show / export / delete: Work with saved reviews
- config:   Show current configuration
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from . import __version__
from .extraction import extract_questions_with_family
from .generation import ReviewGenerationError, generate_review
from .models.config import get_settings
from .models.questions import ExtractedQuestion, ExtractionResult, ValidationReport
from .models.reviews import QuestionType, ReviewRecord, ReviewRequest, SubtopicRef
from .storage import ReviewPersistenceError, ReviewStore
from .tools.json_generator import load_questions_json, save_questions_json
from .tools.validation import validate_questions
from .tools.word_generator import format_answer, generate_word_document
from .utils.file_utils import get_unique_filename, slugify

console = Console()
err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    """Send log records through rich at the given level."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


# ============================================================================
# Display Helpers
# ============================================================================

def display_questions(questions: list[ExtractedQuestion], title: str = "Questions"):
    """Display questions as a table."""
    table = Table(title=title, box=box.ROUNDED, show_lines=True, expand=True)
    table.add_column("#", style="dim", width=4)
    table.add_column("Question", overflow="fold")
    table.add_column("Options", overflow="fold")
    table.add_column("Answer", style="green", overflow="fold")
    table.add_column("Hint", style="cyan", overflow="fold")

    for i, question in enumerate(questions, 1):
        options = ""
        if question.options:
            options = "\n".join(
                f"{letter}. {option}" for letter, option in zip("ABCD", question.options)
            )
        table.add_row(
            str(i),
            Text(question.prompt),
            Text(options),
            Text(format_answer(question)),
            Text(question.hint or ""),
        )

    console.print(table)


def display_validation(report: ValidationReport):
    """Display a validation report."""
    status = "[green]✓ VALID[/green]" if report.is_valid else "[red]✗ INVALID[/red]"
    console.print(
        f"Validation: {status}  confidence {report.confidence_score:.2f}  "
        f"({report.count('error')} error(s), {report.count('warning')} warning(s), "
        f"{report.count('info')} info)"
    )
    for issue in report.issues:
        style = {"error": "red", "warning": "yellow"}.get(issue.severity, "dim")
        line = escape(f"Q{issue.question_index + 1}: {issue.message} [{issue.issue_type}]")
        console.print(f"  [{style}]{line}[/{style}]", highlight=False)


def display_review(review: ReviewRecord):
    """Display stored review details."""
    table = Table(box=box.ROUNDED, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Review ID", review.review_id)
    table.add_row("Title", Text(review.title))
    table.add_row("Description", Text(review.description or ""))
    table.add_row("Question Type", review.question_type)
    table.add_row("Difficulty", review.difficulty_level)
    table.add_row("Exam Style", review.exam_style)
    table.add_row("Hints", "yes" if review.include_hints else "no")
    table.add_row("Status", review.status)
    table.add_row("Created", review.created_at.strftime("%Y-%m-%d %H:%M"))
    console.print(table)


def parse_subtopic(value: str) -> SubtopicRef:
    """Parse ``ID:TITLE[:TOPIC]`` into a subtopic reference."""
    parts = [part.strip() for part in value.split(":", 2)]
    if len(parts) < 2 or not parts[0].isdigit() or not parts[1]:
        raise click.BadParameter(
            f"Expected ID:TITLE[:TOPIC], got {value!r}", param_hint="--subtopic"
        )
    return SubtopicRef(
        id=int(parts[0]),
        title=parts[1],
        topic_title=parts[2] if len(parts) > 2 else "",
    )


def write_outputs(result, json_output: Optional[str], word_output: Optional[str], title: Optional[str]):
    """Write extracted questions to the requested files."""
    settings = get_settings()
    if json_output:
        path = save_questions_json(result, json_output, indent=settings.json_indent)
        console.print(f"[green]✓[/green] Saved JSON: {path}")
    if word_output:
        success, message, _ = generate_word_document(result.questions, Path(word_output), title=title)
        if not success:
            console.print(f"[red]{message}[/red]")
            raise click.Abort()
        console.print(f"[green]✓[/green] {message}")


# ============================================================================
# CLI Commands
# ============================================================================

@click.group()
@click.version_option(version=__version__, prog_name="reviewgen")
@click.option("--log-level", default=None, help="Log level (defaults to LOG_LEVEL setting)")
def main(log_level):
    """
    Review Generator - generate reviews and extract their questions.

    Use 'reviewgen COMMAND --help' for more information on a command.
    """
    configure_logging(log_level or get_settings().log_level)


@main.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("-j", "--json", "json_output", type=click.Path(dir_okay=False), help="Output JSON file path")
@click.option("-w", "--word", "word_output", type=click.Path(dir_okay=False), help="Output Word document path")
@click.option("--title", help="Heading for the Word document")
@click.option("--validate", "run_validation", is_flag=True, help="Validate the extracted questions")
def extract(source, json_output, word_output, title, run_validation):
    """
    Extract questions from generated review text.

    SOURCE: Text file to read ('-' for standard input).

    Examples:

        reviewgen extract review.txt

        reviewgen extract review.txt -j questions.json --validate
    """
    result = extract_questions_with_family(source.read())

    if not result.questions:
        console.print("[yellow]No questions could be extracted from the content.[/yellow]")
        sys.exit(1)

    console.print(
        f"Extracted [bold]{result.question_count}[/bold] question(s) "
        f"using the [cyan]{result.family.value}[/cyan] pattern"
    )
    display_questions(result.questions)

    if run_validation:
        display_validation(validate_questions(result.questions))

    write_outputs(result, json_output, word_output, title)


@main.command()
@click.option("--subject", required=True, help="Subject name")
@click.option("--grade", required=True, help="Grade or level")
@click.option("--title", required=True, help="Review title")
@click.option("--description", default="", help="Review description")
@click.option(
    "-t", "--type",
    "question_type",
    type=click.Choice([t.value for t in QuestionType], case_sensitive=False),
    default=QuestionType.MULTIPLE_CHOICE.value,
    help="Question format"
)
@click.option("-s", "--subtopic", "subtopics", multiple=True, help="Subtopic as ID:TITLE[:TOPIC] (repeatable)")
@click.option("--hints/--no-hints", default=False, help="Ask for a hint per question")
@click.option("--difficulty", default="Medium", help="Difficulty level")
@click.option("--exam-style", default="Standard", help="Exam style to imitate")
@click.option("-n", "--count", "question_count", type=click.IntRange(1, 50), default=5, help="Number of questions")
@click.option("--save", is_flag=True, help="Save the review and its questions to the store")
@click.option("--teacher-id", envvar="REVIEWGEN_TEACHER_ID", help="Teacher id recorded on saved reviews")
@click.option("--data-dir", type=click.Path(file_okay=False), help="Review store directory")
@click.option("-j", "--json", "json_output", type=click.Path(dir_okay=False), help="Output JSON file path")
@click.option("-w", "--word", "word_output", type=click.Path(dir_okay=False), help="Output Word document path")
def generate(subject, grade, title, description, question_type, subtopics, hints, difficulty,
             exam_style, question_count, save, teacher_id, data_dir, json_output, word_output):
    """
    Generate a review with the language model and extract its questions.

    Example:

        reviewgen generate --subject Java --grade "Grade 11" --title "Loops" \\
            -s "12:For loops:Control flow" --hints --save --teacher-id t-1
    """
    subtopic_refs = [parse_subtopic(s) for s in subtopics]
    try:
        request = ReviewRequest(
            subject=subject,
            grade=grade,
            title=title,
            description=description,
            question_type=question_type,
            subtopics=subtopic_refs,
            include_hints=hints,
            difficulty_level=difficulty,
            exam_style=exam_style,
            question_count=question_count,
        )
    except ValidationError as e:
        console.print(f"[red]Invalid review parameters: {escape(e.errors()[0]['msg'])}[/red]")
        raise click.Abort()

    try:
        with console.status("[bold blue]Generating review...[/bold blue]", spinner="dots"):
            review = generate_review(request)
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise click.Abort()
    except ReviewGenerationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort()

    if not review.questions:
        console.print("[yellow]No questions could be extracted from the generated review.[/yellow]")
    else:
        console.print(
            f"Extracted [bold]{review.question_count}[/bold] question(s) "
            f"using the [cyan]{review.family.value}[/cyan] pattern"
        )
        display_questions(review.questions, title=title)

    if save:
        store = ReviewStore(data_dir)
        try:
            review_id = store.save_review(request.to_review_data(), review.content, teacher_id)
            store.save_review_questions(review_id, review.questions)
        except ReviewPersistenceError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise click.Abort()
        console.print(f"[green]✓[/green] Saved review {review_id}")

    if review.questions:
        result = ExtractionResult(questions=review.questions, family=review.family)
        write_outputs(result, json_output, word_output, title)


@main.command()
@click.argument("questions_file", type=click.Path(exists=True, dir_okay=False))
def validate(questions_file):
    """
    Validate a JSON file of extracted questions.

    QUESTIONS_FILE: File written by 'reviewgen extract -j'.
    """
    try:
        questions = load_questions_json(questions_file)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort()

    if not questions:
        console.print("[yellow]The file contains no questions.[/yellow]")
        return

    display_validation(validate_questions(questions))


@main.command()
@click.option("--data-dir", type=click.Path(file_okay=False), help="Review store directory")
def reviews(data_dir):
    """List saved reviews, newest first."""
    try:
        records = ReviewStore(data_dir).list_reviews()
    except ReviewPersistenceError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort()

    if not records:
        console.print("[yellow]No reviews saved yet.[/yellow]")
        return

    table = Table(box=box.ROUNDED, header_style="bold cyan")
    table.add_column("Review ID", no_wrap=True)
    table.add_column("Title")
    table.add_column("Type")
    table.add_column("Created")
    for record in records:
        table.add_row(
            record.review_id,
            Text(record.title),
            record.question_type,
            record.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    console.print(table)


@main.command()
@click.argument("review_id")
@click.option("--data-dir", type=click.Path(file_okay=False), help="Review store directory")
@click.option("--content", "show_content", is_flag=True, help="Also print the generated content")
def show(review_id, data_dir, show_content):
    """Show a saved review with its questions."""
    try:
        review, questions = ReviewStore(data_dir).get_review_with_questions(review_id)
    except ReviewPersistenceError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort()

    display_review(review)
    if questions:
        display_questions(questions, title=review.title)
    else:
        console.print("[yellow]This review has no questions.[/yellow]")

    if show_content:
        console.print(Panel(Text(review.content), title="Generated content", border_style="dim"))


@main.command()
@click.argument("review_id")
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Output Word document path")
@click.option("--answers/--no-answers", default=True, help="Include the answer key")
@click.option("--data-dir", type=click.Path(file_okay=False), help="Review store directory")
def export(review_id, output, answers, data_dir):
    """Export a saved review to a Word document."""
    try:
        review, questions = ReviewStore(data_dir).get_review_with_questions(review_id)
    except ReviewPersistenceError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort()

    if output:
        output_path = Path(output)
    else:
        output_path = get_unique_filename(get_settings().default_output_dir, slugify(review.title), ".docx")

    success, message, _ = generate_word_document(
        questions, output_path, title=review.title, include_answers=answers
    )
    if not success:
        console.print(f"[red]{message}[/red]")
        raise click.Abort()
    console.print(f"[green]✓[/green] {message}")


@main.command()
@click.argument("review_id")
@click.option("--data-dir", type=click.Path(file_okay=False), help="Review store directory")
@click.confirmation_option(prompt="Delete this review and its questions?")
def delete(review_id, data_dir):
    """Delete a saved review with its questions."""
    try:
        ReviewStore(data_dir).delete_review(review_id)
    except ReviewPersistenceError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort()
    console.print(f"[green]✓[/green] Deleted review {review_id}")


@main.command()
def config():
    """
    Display current configuration settings.

    Shows the configuration loaded from environment variables
    and .env file.
    """
    settings = get_settings()

    table = Table(box=box.ROUNDED, show_header=False, title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("API Key", "✓ Set" if settings.is_openai_configured else "✗ Not set")
    table.add_row("Model", settings.openai_model)
    table.add_row("Base URL", settings.openai_base_url or "default")
    table.add_row("Temperature", str(settings.openai_temperature))
    table.add_row("Max Tokens", str(settings.openai_max_tokens))
    table.add_row("Data Directory", str(settings.data_dir))
    table.add_row("Output Directory", str(settings.default_output_dir))
    table.add_row("Log Level", settings.log_level)

    console.print(table)


if __name__ == "__main__":
    main()
