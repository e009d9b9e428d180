"""CLI entrypoint using typer."""

from __future__ import annotations

import asyncio
import json
from datetime import datetime
from pathlib import Path
from typing import get_args

import structlog
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from jobprep_agents.agents.follow_up_writer import FollowUpWriterAgent
from jobprep_agents.observability import CostTracker, bind_user_context, configure_logging
from jobprep_agents.scoring.mock_grader import grade_session
from jobprep_agents.services.base import as_utc
from jobprep_agents.services.prediction_service import PredictionService
from jobprep_agents.templating.placeholders import (
    extract_placeholders,
    finalize_message,
    unfilled_placeholders,
)
from jobprep_core.config.settings import Settings
from jobprep_core.exceptions import JobPrepError
from jobprep_core.models.follow_up import FollowUpType, PolishedMessage
from jobprep_core.models.mock_interview import MockQuestion
from jobprep_infra.db.engine import create_engine
from jobprep_infra.db.models import InterviewSuccessPredictionModel
from jobprep_infra.db.session import create_session_factory, init_db

app = typer.Typer(
    name="job-prep",
    help="Interview preparation scoring, mock interview grading and follow-up drafting",
)
console = Console()
logger = structlog.get_logger()

SUBJECT_PREFIX = "Subject:"


def _load_settings(verbose: bool) -> Settings:
    settings = Settings()
    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings)
    bind_user_context(settings.user_id)
    return settings


def _fail(exc: Exception) -> typer.Exit:
    console.print(f"[red]Error:[/red] {exc}")
    return typer.Exit(code=1)


def _parse_values(pairs: list[str]) -> dict[str, str]:
    """KEY=VALUE pairs; keys are wrapped in brackets when given bare."""
    values: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise typer.BadParameter(f"Expected KEY=VALUE, got {pair!r}")
        key = key.strip()
        if not key.startswith("["):
            key = f"[{key}]"
        values[key] = value
    return values


def _parse_timestamp(value: object) -> datetime | None:
    """ISO timestamp as UTC; naive values are taken to be UTC already."""
    if not value:
        return None
    if not isinstance(value, str):
        raise ValueError(f"Expected an ISO timestamp, got {value!r}")
    return as_utc(datetime.fromisoformat(value))


def _read_session_file(path: Path) -> tuple[list[MockQuestion], datetime | None, datetime | None]:
    """Questions plus optional start/end times from a list or an object payload."""
    raw = json.loads(path.read_text())
    payload = {"questions": raw} if isinstance(raw, list) else raw
    if not isinstance(payload, dict):
        raise ValueError("Expected a list of questions or an object with 'questions'")
    questions = [MockQuestion.model_validate(q) for q in payload.get("questions") or []]
    return (
        questions,
        _parse_timestamp(payload.get("started_at")),
        _parse_timestamp(payload.get("completed_at")),
    )


def _split_template(text: str) -> tuple[str, str]:
    """Use a leading 'Subject:' line as the subject, the rest as the body."""
    first, _, rest = text.partition("\n")
    if first.startswith(SUBJECT_PREFIX):
        return first[len(SUBJECT_PREFIX) :].strip(), rest.lstrip("\n")
    return "", text


@app.command("init-db")
def init_db_command(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Create database tables."""
    settings = _load_settings(verbose)

    async def _run() -> None:
        engine = create_engine(settings)
        try:
            await init_db(engine)
        finally:
            await engine.dispose()

    asyncio.run(_run())
    console.print(f"[bold green]Database ready:[/bold green] {settings.db_backend}")


@app.command()
def grade(
    session_file: Path = typer.Argument(
        ..., help="JSON file with questions and responses", exists=True
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Grade a mock interview session offline."""
    _load_settings(verbose)
    try:
        questions, started, completed = _read_session_file(session_file)
    except (json.JSONDecodeError, ValidationError, ValueError, TypeError) as exc:
        logger.warning("session_file_invalid", path=str(session_file), error=str(exc))
        raise _fail(exc) from exc

    result = grade_session(questions, started, completed)
    summary = result.summary

    console.print(f"[bold]Overall score:[/bold] {result.overall_score}%")
    table = Table(title="Session summary")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Completion", f"{summary.completion_rate}%")
    table.add_row("Quality", f"{summary.quality_rate}%")
    table.add_row("Avg words", str(summary.avg_response_length))
    star = summary.star_analysis
    table.add_row("STAR (S/T/A/R)", f"{star.s}/{star.t}/{star.a}/{star.r}")
    table.add_row("Time (min)", str(summary.total_time_minutes))
    console.print(table)

    console.print("\n[bold green]Strengths[/bold green]")
    for line in summary.strengths:
        console.print(f"  + {line}")
    console.print("\n[bold yellow]Areas for improvement[/bold yellow]")
    for line in summary.areas_for_improvement:
        console.print(f"  - {line}")
    for line in summary.specific_feedback:
        console.print(f"  [dim]{line}[/dim]")


@app.command()
def fill(
    template_file: Path = typer.Argument(
        ..., help="Template text, optional 'Subject:' first line", exists=True
    ),
    value: list[str] = typer.Option([], "--value", help="Placeholder value as KEY=VALUE"),
    follow_up_type: str = typer.Option("thank_you", "--type", help="Follow-up type"),
    polish: bool = typer.Option(False, "--polish", help="Polish the merged text with AI"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Fill bracket placeholders in a follow-up template."""
    settings = _load_settings(verbose)
    subject, content = _split_template(template_file.read_text())
    values = _parse_values(value)

    placeholders = extract_placeholders(subject, content)
    missing = unfilled_placeholders(f"{subject}\n{content}", values)
    if missing:
        console.print(f"[yellow]Unfilled:[/yellow] {', '.join(missing)}")

    if follow_up_type not in get_args(FollowUpType):
        raise typer.BadParameter(f"Unknown follow-up type {follow_up_type!r}")
    tracker = CostTracker.from_settings(settings)
    polisher = FollowUpWriterAgent(settings, tracker) if polish else None
    ftype: FollowUpType = follow_up_type  # type: ignore[assignment]
    message: PolishedMessage = asyncio.run(
        finalize_message(subject, content, values, ftype, polisher=polisher)
    )

    logger.debug("template_filled", placeholders=len(placeholders), missing=len(missing))
    if polish:
        logger.info("llm_cost_summary", **tracker.summary())
    if message.subject:
        console.print(f"[bold]Subject:[/bold] {message.subject}\n")
    console.print(message.content)


@app.command()
def predict(
    interview_id: str = typer.Argument(..., help="Interview ID"),
    job_id: str = typer.Argument(..., help="Job ID the interview belongs to"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Calculate and store an interview success prediction."""
    settings = _load_settings(verbose)
    tracker = CostTracker.from_settings(settings)

    async def _run() -> InterviewSuccessPredictionModel:
        engine = create_engine(settings)
        try:
            service = PredictionService(
                settings, create_session_factory(engine), cost_tracker=tracker
            )
            return await service.calculate(interview_id, job_id)
        finally:
            await engine.dispose()

    try:
        snapshot = asyncio.run(_run())
    except JobPrepError as exc:
        raise _fail(exc) from exc
    finally:
        logger.info("llm_cost_summary", **tracker.summary())

    console.print(
        f"[bold]Success probability:[/bold] {snapshot.overall_probability}% "
        f"({snapshot.confidence_level} confidence, {snapshot.predicted_outcome})"
    )
    console.print(f"  Preparation: {snapshot.preparation_score}%")
    console.print(f"  Role match: {snapshot.role_match_score}%")
    console.print(f"  Company research: {snapshot.company_research_score}%")
    console.print(f"  Practice hours: {snapshot.practice_hours_score}%")
    console.print(
        f"  History: {snapshot.historical_success_rate:.1f}% ({snapshot.performance_trend})"
    )
    if snapshot.prioritized_actions:
        console.print("\n[bold]Next actions:[/bold]")
        for action in snapshot.prioritized_actions:
            console.print(f"  {action}")


@app.command()
def version() -> None:
    """Show version."""
    console.print("job-prep v0.1.0")


if __name__ == "__main__":
    app()
