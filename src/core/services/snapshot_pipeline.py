"""Snapshot run orchestration.

This module holds the whole run flow so the CLI only has to prepare the
workspace, load the run description and render results. Side-effects that
belong to a UI (printing, progress) go through `PipelineHooks`; side-effects
that belong to infrastructure (PDF parsing, the snapshot service) go through
the `core.interfaces` protocols.

Flow per project folder:
- list the PDFs of the baseline folder (the reference set of documents)
- apply includeDocs / excludeDocs and collect page filters
- per document, concurrently: count pages of the baseline copy, build the
  run record and the snapshot config, write the YAML, run the service
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from adapters.yaml_exporter import export_snapshot_yaml
from core.config import AppSettings
from core.domain.models import DocumentRunInfo, RunInfoConfig, SpecialDocConfig
from core.errors import PdfVrtError
from core.interfaces import PageCounter, SnapshotRunner
from core.services.page_selection import describe_pages
from core.services.run_info import (
    build_document_run_info,
    build_snapshot_config,
    filter_documents,
    selected_pages,
    snapshot_config_file_name,
    special_configs_for,
    strip_whitespace,
)
from core.workspace import list_pdf_files

logger = logging.getLogger(__name__)


@dataclass
class RunRequest:
    """Parameters that control a snapshot run."""

    config: RunInfoConfig
    dry_run: bool = False
    max_concurrency: int | None = None


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress, warnings)."""

    project_found: Callable[[str, int], None] | None = None
    pages_selected: Callable[[str, str], None] | None = None
    warning: Callable[[str], None] | None = None
    document_done: Callable[["DocumentOutcome"], None] | None = None


@dataclass
class DocumentOutcome:
    """What happened to one document."""

    project: str
    pdf_file_name: str
    doc_id: str = ""
    branch: str = ""
    target_branch: str = ""
    pages: list[int] = field(default_factory=list)
    config_path: Path | None = None
    exit_code: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.exit_code in (None, 0)


@dataclass
class PipelineResult:
    """Output of a pipeline invocation."""

    outcomes: list[DocumentOutcome] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def failed(self) -> list[DocumentOutcome]:
        return [o for o in self.outcomes if not o.ok]


@dataclass
class DocumentJob:
    project: str
    file_name: str
    pdf_path: Path
    special_configs: dict[str, SpecialDocConfig]


def plan_jobs(
    *,
    settings: AppSettings,
    config: RunInfoConfig,
    warn: Callable[[str], None] | None = None,
    project_found: Callable[[str, int], None] | None = None,
) -> list[DocumentJob]:
    """Documents a run would process, in project/file order."""

    def _warn(message: str) -> None:
        if warn:
            warn(message)
        else:
            logger.warning(message)

    if config.project_folders is None:
        _warn("No 'projectFolders' in the run description; nothing to snapshot.")
        return []

    jobs: list[DocumentJob] = []
    for project in config.project_folders:
        project_root = settings.projects_source_dir / project
        baseline_folder = project_root / config.baseline_dir
        if not baseline_folder.is_dir():
            _warn(f"Baseline folder not found for project '{project}': {baseline_folder}")
            continue

        file_names = filter_documents(project, list_pdf_files(baseline_folder), config)
        specials = special_configs_for(project, file_names, config)
        logger.debug("Project folder found: %s (%d documents)", project, len(file_names))
        if project_found:
            project_found(project, len(file_names))

        # Pages are counted on the baseline copy in both modes; pages dropped or
        # documents missing in the release then surface as diffs in Percy.
        for file_name in file_names:
            jobs.append(
                DocumentJob(
                    project=project,
                    file_name=file_name,
                    pdf_path=baseline_folder / file_name,
                    special_configs=specials,
                )
            )
    return jobs


def build_run_info_for_job(
    *,
    job: DocumentJob,
    config: RunInfoConfig,
    page_count: int,
    settings: AppSettings,
) -> DocumentRunInfo:
    return build_document_run_info(
        config=config,
        special_configs=job.special_configs,
        file_name=job.file_name,
        project=job.project,
        page_count=page_count,
        settings=settings,
    )


async def run_snapshots(
    *,
    settings: AppSettings,
    request: RunRequest,
    page_counter: PageCounter,
    runner: SnapshotRunner | None,
    hooks: PipelineHooks | None = None,
) -> PipelineResult:
    hooks = hooks or PipelineHooks()
    result = PipelineResult()

    def warn(message: str) -> None:
        result.warnings.append(message)
        if hooks.warning:
            hooks.warning(message)

    jobs = plan_jobs(
        settings=settings,
        config=request.config,
        warn=warn,
        project_found=hooks.project_found,
    )
    if not request.dry_run and runner is None:
        raise ValueError("a snapshot runner is required unless dry_run is set")

    sem = asyncio.Semaphore(max(1, request.max_concurrency or settings.max_concurrency))

    async def process(job: DocumentJob) -> DocumentOutcome:
        outcome = DocumentOutcome(project=job.project, pdf_file_name=job.file_name)
        async with sem:
            try:
                page_count = await asyncio.to_thread(page_counter.count_pages, job.pdf_path)
                run_info = build_run_info_for_job(
                    job=job,
                    config=request.config,
                    page_count=page_count,
                    settings=settings,
                )
                outcome.doc_id = run_info.doc_id
                outcome.branch = strip_whitespace(run_info.branch)
                outcome.target_branch = strip_whitespace(run_info.target_branch)
                outcome.pages = selected_pages(run_info)

                summary = describe_pages(outcome.pages)
                logger.debug(
                    "Pages considered for snapshot in DOC: %s => %s",
                    strip_whitespace(run_info.doc_id),
                    summary,
                )
                if hooks.pages_selected:
                    hooks.pages_selected(strip_whitespace(run_info.doc_id), summary)

                snapshot_config = build_snapshot_config(run_info, settings)
                outcome.config_path = export_snapshot_yaml(
                    config=snapshot_config,
                    output_path=settings.snapshot_config_dir
                    / snapshot_config_file_name(run_info, settings),
                    encoding=settings.file_encoding,
                )

                if not request.dry_run and runner is not None:
                    outcome.exit_code = await runner.run(
                        outcome.config_path,
                        run_info.branch,
                        run_info.target_branch,
                    )
                    if outcome.exit_code != 0:
                        outcome.error = f"snapshot service exited with code {outcome.exit_code}"
            except (PdfVrtError, OSError) as exc:
                logger.debug("%s/%s failed", job.project, job.file_name, exc_info=True)
                outcome.error = str(exc)

        if hooks.document_done:
            hooks.document_done(outcome)
        return outcome

    result.outcomes = list(await asyncio.gather(*(process(job) for job in jobs)))
    return result
