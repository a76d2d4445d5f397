"""Per-document run records and Percy snapshot configs.

This module turns the user's run description plus one discovered PDF into
everything the snapshot service needs: the document id, the branch pair
that encodes the baseline/release relationship, and the snapshot config
itself. It has no I/O so it can be exercised directly by tests and by the
`plan` command.
"""

from __future__ import annotations

import re
from typing import Iterable, Mapping

from core.config import AppSettings
from core.domain.models import (
    DocumentRunInfo,
    RunInfoConfig,
    SnapshotConfig,
    SnapshotEntry,
    SpecialDocConfig,
)
from core.domain.run_mode import RunMode
from core.services.page_selection import (
    RESTORE_PAGE_STATE_REFERENCE,
    RESTORE_PAGE_STATE_SCRIPT,
    build_additional_snapshots,
    select_pages,
)

_WHITESPACE_RE = re.compile(r"\s")


def strip_whitespace(value: str) -> str:
    return _WHITESPACE_RE.sub("", value)


def branch_id(prefix: str, project: str, working_dir: str, file_name: str) -> str:
    """Identifier shared by the document id and the Percy branches."""

    return f"{prefix}_{project}_{working_dir}_{file_name}"


def _docs_for_project(refs: Iterable, project: str) -> set[str]:
    return {ref.doc for ref in refs if ref.project == project}


def filter_documents(project: str, file_names: Iterable[str], config: RunInfoConfig) -> list[str]:
    """Apply `includeDocs` then `excludeDocs` for one project folder."""

    names = list(file_names)
    if config.include_docs is not None:
        included = _docs_for_project(config.include_docs, project)
        names = [name for name in names if name in included]
    if config.exclude_docs is not None:
        excluded = _docs_for_project(config.exclude_docs, project)
        names = [name for name in names if name not in excluded]
    return names


def special_configs_for(
    project: str,
    file_names: Iterable[str],
    config: RunInfoConfig,
) -> dict[str, SpecialDocConfig]:
    """Page filters of the included documents of `project`, keyed by file name."""

    names = set(file_names)
    out: dict[str, SpecialDocConfig] = {}
    for special in config.special_doc_configs or []:
        if special.project == project and special.doc in names:
            out[special.doc] = special
    return out


def build_document_run_info(
    *,
    config: RunInfoConfig,
    special_configs: Mapping[str, SpecialDocConfig],
    file_name: str,
    project: str,
    page_count: int,
    settings: AppSettings,
) -> DocumentRunInfo:
    working_dir = config.working_dir
    doc_id = branch_id(settings.branch_prefix, project, working_dir, file_name)

    target_branch = ""
    if config.run_mode is RunMode.COMPARE_RELEASE_WITH_BASELINE:
        target_branch = branch_id(settings.branch_prefix, project, config.baseline_dir, file_name)

    special = special_configs.get(file_name)
    return DocumentRunInfo(
        run_mode=config.run_mode,
        baseline_dir=config.baseline_dir,
        release_dir=config.release_dir,
        doc_id=doc_id,
        project_folder=project,
        pdf_file_name=file_name,
        page_count=page_count,
        include_pages=list(special.include_pages) if special else [],
        exclude_pages=list(special.exclude_pages) if special else [],
        branch=doc_id,
        target_branch=target_branch,
        working_dir=working_dir,
    )


def selected_pages(run_info: DocumentRunInfo) -> list[int]:
    return select_pages(run_info.page_count, run_info.include_pages, run_info.exclude_pages)


def build_snapshot_config(run_info: DocumentRunInfo, settings: AppSettings) -> SnapshotConfig:
    """Percy snapshot file for one document: page 1 plus one step per selected page."""

    additional = build_additional_snapshots(
        selected_pages(run_info),
        filtered=run_info.has_page_filters,
        wait_for_selector=settings.wait_for_selector,
    )
    url = "/".join(
        (
            settings.viewer_url_path,
            run_info.project_folder,
            run_info.working_dir,
            run_info.pdf_file_name,
        )
    )
    return SnapshotConfig(
        base_url=settings.pdf_server_base_url,
        references={RESTORE_PAGE_STATE_REFERENCE: RESTORE_PAGE_STATE_SCRIPT},
        snapshots=[
            SnapshotEntry(
                name=run_info.pdf_file_name,
                url=url,
                wait_for_selector=settings.wait_for_selector,
                additional_snapshots=additional,
            )
        ],
    )


def snapshot_config_file_name(run_info: DocumentRunInfo, settings: AppSettings) -> str:
    return (
        f"{settings.snapshot_file_prefix}{strip_whitespace(run_info.doc_id)}"
        f"_{run_info.working_dir}{settings.snapshot_file_ext}"
    )
