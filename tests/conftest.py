from __future__ import annotations

from pathlib import Path

import pytest
from pypdf import PdfWriter

from core.config import AppSettings
from core.domain.models import RunInfoConfig
from core.errors import PdfReadError


def write_pdf(path: Path, pages: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=200, height=200)
    with path.open("wb") as fp:
        writer.write(fp)
    return path


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return AppSettings(
        projects_source_dir=tmp_path / "projects",
        server_projects_dir=tmp_path / "pdfjs" / "web" / "projects",
        snapshot_config_dir=tmp_path / ".dist",
    )


@pytest.fixture
def baseline_config() -> RunInfoConfig:
    return RunInfoConfig.model_validate(
        {
            "runMode": "create-baseline",
            "baselineDir": "v1",
            "releaseDir": "v2",
            "projectFolders": ["invoices"],
        }
    )


@pytest.fixture
def compare_config() -> RunInfoConfig:
    return RunInfoConfig.model_validate(
        {
            "runMode": "compare-release-with-baseline",
            "baselineDir": "v1",
            "releaseDir": "v2",
            "projectFolders": ["invoices"],
        }
    )


class FakePageCounter:
    def __init__(self, counts: dict[str, int]) -> None:
        self.counts = counts
        self.calls: list[Path] = []

    def count_pages(self, path: Path) -> int:
        self.calls.append(path)
        if path.name not in self.counts:
            raise PdfReadError(f"Could not read PDF {path}")
        return self.counts[path.name]


class FakeRunner:
    def __init__(self, exit_code: int = 0) -> None:
        self.exit_code = exit_code
        self.calls: list[tuple[Path, str, str]] = []

    async def run(self, config_path: Path, branch: str, target_branch: str) -> int:
        self.calls.append((config_path, branch, target_branch))
        return self.exit_code
