"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from jobinfo_capture.clients.extraction_client import ExtractionClient
from jobinfo_capture.config import AppConfig, load_config
from jobinfo_capture.form.state_machine import CaptureStateMachine, SubmitResult
from jobinfo_capture.models.attachment import ResumeAttachment
from jobinfo_capture.models.job_info import JobInfo, format_experience_level
from jobinfo_capture.storage.job_info_store import JobInfoStore

app = typer.Typer(
    name="jobinfo-capture",
    help="Capture job information for interview practice",
    no_args_is_help=True,
)
console = Console()

_NOTIFY_STYLES = {"error": "red", "success": "green", "info": "dim"}


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _notify(level: str, message: str) -> None:
    style = _NOTIFY_STYLES.get(level, "white")
    console.print(f"[{style}]{message}[/{style}]")


def _open_store(config: AppConfig) -> JobInfoStore:
    return JobInfoStore(
        db_path=config.store.resolved_db_path,
        experience_levels=config.form.experience_levels,
    )


async def _capture(
    config: AppConfig,
    store: JobInfoStore,
    existing: JobInfo | None,
    *,
    name: str | None,
    title: str | None,
    level: str | None,
    technologies: list[str],
    description: str | None,
    resume: Path | None,
) -> tuple[CaptureStateMachine, SubmitResult]:
    async with ExtractionClient(
        config.extraction.endpoint,
        file_field=config.extraction.file_field,
        result_field=config.extraction.result_field,
        timeout=config.extraction.timeout,
    ) as extraction:
        machine = CaptureStateMachine(
            extraction,
            store,
            job_info=existing,
            experience_levels=config.form.experience_levels,
            default_experience_level=config.form.default_experience_level,
            available_technologies=config.form.available_technologies,
            notify=_notify,
        )
        if name is not None:
            machine.set_name(name)
        if title is not None:
            machine.set_title(title)
        if level is not None:
            machine.set_experience_level(level)
        if description is not None:
            machine.set_description(description)
        for tech in technologies:
            machine.add_technology(tech)

        if resume is not None:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
            ) as progress:
                progress.add_task(f"Extracting technologies from {resume.name}...", total=None)
                await machine.select_file(ResumeAttachment.from_path(resume))

        result = await machine.submit()
    return machine, result


@app.command()
def capture(
    name: str = typer.Option(None, "--name", "-n", help="Display name for this job info"),
    title: str = typer.Option(None, "--title", help="Specific job title (optional)"),
    level: str = typer.Option(None, "--level", "-l", help="Experience level"),
    tech: list[str] = typer.Option(None, "--tech", help="Technology (repeatable)"),
    description: str = typer.Option(None, "--description", "-d", help="Job description"),
    resume: Path = typer.Option(None, "--resume", help="PDF resume to extract technologies from"),
    update: str = typer.Option(None, "--update", help="Id of an existing job info to edit"),
    config_path: Path = typer.Option(None, "--config", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Create or update job information, optionally from a resume."""
    _setup_logging(verbose)
    if resume is not None and not resume.is_file():
        console.print(f"[red]Resume file not found: {resume}[/red]")
        raise typer.Exit(1)

    config = load_config(config_path)
    store = _open_store(config)

    existing = None
    if update:
        existing = store.get(update)
        if existing is None:
            console.print(f"[red]No job information with id {update}[/red]")
            raise typer.Exit(1)

    if resume is not None and tech:
        console.print("[dim]Technologies from the resume replace --tech values.[/dim]")

    machine, result = asyncio.run(
        _capture(
            config,
            store,
            existing,
            name=name,
            title=title,
            level=level,
            technologies=list(tech or []),
            description=description,
            resume=resume,
        )
    )

    if not result.ok:
        for field_name, message in result.field_errors.items():
            console.print(f"[red]{field_name}: {message}[/red]")
        raise typer.Exit(1)

    draft = machine.draft
    console.print(
        Panel(
            f"Name: {draft.name}\n"
            f"Title: {draft.title or '-'}\n"
            f"Level: {format_experience_level(draft.experience_level)}\n"
            f"Technologies: {', '.join(draft.technologies) or '-'}\n"
            f"From resume: {'yes' if draft.has_resume else 'no'}",
            title=f"Saved {result.job_info_id}",
        )
    )


@app.command(name="list")
def list_job_infos(
    limit: int = typer.Option(20, "--limit", help="Maximum rows to show"),
    config_path: Path = typer.Option(None, "--config", help="Path to config.yaml"),
) -> None:
    """List saved job information, most recently updated first."""
    config = load_config(config_path)
    job_infos = _open_store(config).list_job_infos(limit=limit)
    if not job_infos:
        console.print("[dim]No job information saved yet.[/dim]")
        return

    table = Table(title="Job information")
    table.add_column("Id", style="dim")
    table.add_column("Name")
    table.add_column("Level")
    table.add_column("Technologies")
    for info in job_infos:
        table.add_row(
            info.id,
            info.name,
            format_experience_level(info.experience_level),
            ", ".join(info.technologies),
        )
    console.print(table)


@app.command()
def levels(
    config_path: Path = typer.Option(None, "--config", help="Path to config.yaml"),
) -> None:
    """Show the accepted experience levels."""
    config = load_config(config_path)
    for level in config.form.experience_levels:
        console.print(f"{level}  [dim]{format_experience_level(level)}[/dim]")


if __name__ == "__main__":
    app()
