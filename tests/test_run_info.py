from __future__ import annotations

from core.domain.models import RunInfoConfig
from core.domain.run_mode import RunMode
from core.services.page_selection import RESTORE_PAGE_STATE_REFERENCE, RESTORE_PAGE_STATE_SCRIPT
from core.services.run_info import (
    build_document_run_info,
    build_snapshot_config,
    filter_documents,
    snapshot_config_file_name,
    special_configs_for,
    strip_whitespace,
)


def _config(**extra) -> RunInfoConfig:
    data = {
        "runMode": "create-baseline",
        "baselineDir": "v1",
        "releaseDir": "v2",
        "projectFolders": ["invoices", "letters"],
    }
    data.update(extra)
    return RunInfoConfig.model_validate(data)


def test_baseline_mode_branches(settings, baseline_config):
    info = build_document_run_info(
        config=baseline_config,
        special_configs={},
        file_name="a.pdf",
        project="invoices",
        page_count=3,
        settings=settings,
    )

    assert info.working_dir == "v1"
    assert info.doc_id == "DOC_invoices_v1_a.pdf"
    assert info.branch == info.doc_id
    assert info.target_branch == ""
    assert info.include_pages == [] and info.exclude_pages == []


def test_compare_mode_targets_the_baseline_branch(settings, compare_config):
    info = build_document_run_info(
        config=compare_config,
        special_configs={},
        file_name="a.pdf",
        project="invoices",
        page_count=3,
        settings=settings,
    )

    assert info.run_mode is RunMode.COMPARE_RELEASE_WITH_BASELINE
    assert info.working_dir == "v2"
    assert info.branch == "DOC_invoices_v2_a.pdf"
    assert info.target_branch == "DOC_invoices_v1_a.pdf"


def test_include_and_exclude_docs_are_scoped_per_project():
    config = _config(
        includeDocs=[
            {"project": "invoices", "doc": "a.pdf"},
            {"project": "invoices", "doc": "b.pdf"},
            {"project": "letters", "doc": "c.pdf"},
        ],
        excludeDocs=[{"project": "invoices", "doc": "b.pdf"}],
    )

    assert filter_documents("invoices", ["a.pdf", "b.pdf", "c.pdf"], config) == ["a.pdf"]
    assert filter_documents("letters", ["a.pdf", "c.pdf"], config) == ["c.pdf"]


def test_missing_doc_filters_keep_everything():
    assert filter_documents("invoices", ["a.pdf", "b.pdf"], _config()) == ["a.pdf", "b.pdf"]


def test_empty_include_docs_keeps_nothing():
    assert filter_documents("invoices", ["a.pdf"], _config(includeDocs=[])) == []


def test_special_configs_match_project_and_included_docs():
    config = _config(
        specialDocConfigs=[
            {"project": "invoices", "doc": "a.pdf", "includePages": [2]},
            {"project": "letters", "doc": "a.pdf", "excludePages": [3]},
            {"project": "invoices", "doc": "gone.pdf", "includePages": [4]},
        ]
    )

    specials = special_configs_for("invoices", ["a.pdf"], config)

    assert list(specials) == ["a.pdf"]
    assert specials["a.pdf"].include_pages == [2]
    assert specials["a.pdf"].exclude_pages == []


def test_special_config_pages_flow_into_run_info(settings, baseline_config):
    config = _config(specialDocConfigs=[{"project": "invoices", "doc": "a.pdf", "excludePages": [2]}])
    specials = special_configs_for("invoices", ["a.pdf"], config)

    info = build_document_run_info(
        config=config,
        special_configs=specials,
        file_name="a.pdf",
        project="invoices",
        page_count=4,
        settings=settings,
    )

    assert info.exclude_pages == [2]
    assert info.has_page_filters


def test_snapshot_config_without_filters(settings, baseline_config):
    info = build_document_run_info(
        config=baseline_config,
        special_configs={},
        file_name="a.pdf",
        project="invoices",
        page_count=3,
        settings=settings,
    )

    snapshot_config = build_snapshot_config(info, settings)

    assert snapshot_config.base_url == "http://localhost:8080"
    assert snapshot_config.references == {RESTORE_PAGE_STATE_REFERENCE: RESTORE_PAGE_STATE_SCRIPT}
    (entry,) = snapshot_config.snapshots
    assert entry.name == "a.pdf"
    assert entry.url == "/web/viewer.html?file=/web/projects/invoices/v1/a.pdf"
    assert entry.wait_for_selector == "div#viewer > div.page[data-loaded]"
    assert [s.suffix for s in entry.additional_snapshots] == [" | Page 2", " | Page 3"]
    assert {s.execute for s in entry.additional_snapshots} == {RESTORE_PAGE_STATE_SCRIPT}


def test_snapshot_config_file_name_strips_whitespace(settings, compare_config):
    info = build_document_run_info(
        config=compare_config,
        special_configs={},
        file_name="annual report.pdf",
        project="invoices",
        page_count=1,
        settings=settings,
    )

    assert snapshot_config_file_name(info, settings) == "snapshots_DOC_invoices_v2_annualreport.pdf_v2.yml"


def test_strip_whitespace_removes_all_whitespace():
    assert strip_whitespace(" a b\tc\n") == "abc"
