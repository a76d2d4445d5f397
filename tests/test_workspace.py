from __future__ import annotations

from core.workspace import list_pdf_files, prepare_workspace, recreate_folder


def test_recreate_folder_empties_existing_content(tmp_path):
    folder = tmp_path / "out"
    (folder / "old").mkdir(parents=True)
    (folder / "old" / "x.yml").write_text("x", encoding="utf-8")

    recreate_folder(folder)

    assert folder.is_dir()
    assert list(folder.iterdir()) == []


def test_prepare_workspace_copies_projects(settings):
    source = settings.projects_source_dir / "invoices" / "v1"
    source.mkdir(parents=True)
    (source / "a.pdf").write_bytes(b"%PDF-1.4\n")
    stale = settings.server_projects_dir / "stale"
    stale.mkdir(parents=True)
    settings.snapshot_config_dir.mkdir(parents=True)
    (settings.snapshot_config_dir / "snapshots_old.yml").write_text("x", encoding="utf-8")

    prepare_workspace(settings)

    assert (settings.server_projects_dir / "invoices" / "v1" / "a.pdf").is_file()
    assert not stale.exists()
    assert list(settings.snapshot_config_dir.iterdir()) == []


def test_prepare_workspace_without_projects_folder(settings):
    prepare_workspace(settings)

    assert settings.server_projects_dir.is_dir()
    assert settings.snapshot_config_dir.is_dir()


def test_list_pdf_files(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "nested.pdf").write_bytes(b"")
    for name in ("b.pdf", "A.Pdf", "readme.md"):
        (tmp_path / name).write_bytes(b"")

    assert list_pdf_files(tmp_path) == ["A.Pdf", "b.pdf"]
    assert list_pdf_files(tmp_path / "missing") == []
