"""CLI principal (Typer).

Comandos:
- `run`: prepara carpetas, genera los YAML de Percy y lanza `percy snapshot`.
- `plan`: muestra qué páginas y ramas usaría `run`, sin tocar nada.
- `doctor`: diagnóstico del entorno.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.text import Text

from adapters.pdf_reader import PypdfPageCounter
from adapters.percy_runner import PercyRunner
from adapters.run_info_loader import load_run_info
from cli import doctor
from cli.ui_components import (
    build_plan_table,
    build_results_table,
    configure_logging,
    print_banner,
)
from core.config import AppSettings
from core.domain.models import RunInfoConfig
from core.errors import PdfReadError, RunInfoError
from core.services.page_selection import describe_pages
from core.services.run_info import selected_pages, strip_whitespace
from core.services.snapshot_pipeline import (
    DocumentOutcome,
    PipelineHooks,
    RunRequest,
    build_run_info_for_job,
    plan_jobs,
    run_snapshots,
)
from core.workspace import prepare_workspace

app = typer.Typer(
    no_args_is_help=True,
    help="Visual regression snapshots of PDF documents (PDF.js + Percy).",
)
app.command(name="doctor", help="Environment diagnostics.")(doctor.run)

_console = Console()

_CONFIG_ARGUMENT = typer.Argument(
    ...,
    help="Run description YAML, e.g. configs/pdf-docs-run-info-baseline.yml",
    show_default=False,
)


def _load_config_or_exit(path: Path, settings: AppSettings) -> RunInfoConfig:
    try:
        return load_run_info(path, encoding=settings.file_encoding)
    except RunInfoError as exc:
        _console.print(Text(str(exc), style="red"))
        raise typer.Exit(code=1) from exc


@app.command(name="run")
def run_command(
    config_path: Path = _CONFIG_ARGUMENT,
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Generate the snapshot files without calling Percy.",
    ),
    skip_setup: bool = typer.Option(
        False,
        "--skip-setup",
        help="Do not recreate/copy the PDF.js project folders.",
    ),
    concurrency: int | None = typer.Option(
        None,
        "--concurrency",
        "-c",
        min=1,
        help="Documents processed in parallel (default: PDF_VRT_MAX_CONCURRENCY).",
    ),
    no_banner: bool = typer.Option(False, "--no-banner", help="Hide the banner."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Generate per-document Percy configs and snapshot every selected page."""

    configure_logging(_console, verbose=verbose)
    settings = AppSettings()

    config = _load_config_or_exit(config_path, settings)
    if not no_banner:
        print_banner(_console, config.run_mode)

    if not skip_setup:
        prepare_workspace(settings)

    def on_done(outcome: DocumentOutcome) -> None:
        if not outcome.ok:
            _console.print(
                Text.assemble(("✗ ", "red"), f"{outcome.project}/{outcome.pdf_file_name}: {outcome.error}")
            )

    hooks = PipelineHooks(
        project_found=lambda project, count: _console.print(
            f"Project folder found: [cyan]{project}[/cyan] ({count} documents)"
        ),
        pages_selected=lambda doc_id, pages: _console.print(
            Text(f"Pages considered for snapshot in DOC: {doc_id} => {pages}")
        ),
        warning=lambda message: _console.print(Text(message, style="yellow")),
        document_done=on_done,
    )

    result = asyncio.run(
        run_snapshots(
            settings=settings,
            request=RunRequest(config=config, dry_run=dry_run, max_concurrency=concurrency),
            page_counter=PypdfPageCounter(),
            runner=None if dry_run else PercyRunner(settings),
            hooks=hooks,
        )
    )

    if result.outcomes:
        _console.print(build_results_table(result.outcomes))
    if result.failed:
        _console.print(f"[red]{len(result.failed)} document(s) failed.[/red]")
        raise typer.Exit(code=1)


@app.command()
def plan(
    config_path: Path = _CONFIG_ARGUMENT,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Show the pages and branches a run would use (read-only)."""

    configure_logging(_console, verbose=verbose)
    settings = AppSettings()
    config = _load_config_or_exit(config_path, settings)

    counter = PypdfPageCounter()
    table = build_plan_table()
    jobs = plan_jobs(
        settings=settings,
        config=config,
        warn=lambda message: _console.print(Text(message, style="yellow")),
    )
    for job in jobs:
        try:
            page_count = counter.count_pages(job.pdf_path)
        except PdfReadError as exc:
            table.add_row(job.project, job.file_name, Text(str(exc), style="red"), "-", "-")
            continue
        run_info = build_run_info_for_job(
            job=job,
            config=config,
            page_count=page_count,
            settings=settings,
        )
        table.add_row(
            job.project,
            job.file_name,
            describe_pages(selected_pages(run_info)),
            strip_whitespace(run_info.branch),
            strip_whitespace(run_info.target_branch) or "-",
        )
    _console.print(table)


def run() -> None:
    app()
