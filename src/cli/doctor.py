"""Doctor command for environment diagnostics."""

from __future__ import annotations

import os
import shutil

import httpx
from rich.console import Console
from rich.table import Table

from core.config import AppSettings

_console = Console()


def _check_http(url: str, timeout: float) -> tuple[bool, str]:
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or exc.__class__.__name__


def _check_percy_command(settings: AppSettings) -> tuple[bool, str]:
    executable = settings.percy_command[0]
    resolved = shutil.which(executable)
    if resolved is None:
        return False, f"'{executable}' not found on PATH"
    return True, " ".join([resolved, *settings.percy_command[1:]])


def collect_checks(settings: AppSettings) -> list[tuple[str, str, str]]:
    """(check, status, details) rows; no side-effects besides one HTTP GET."""

    rows: list[tuple[str, str, str]] = []

    ok_cmd, detail_cmd = _check_percy_command(settings)
    rows.append(("Percy command", "OK" if ok_cmd else "FAIL", detail_cmd))

    if os.environ.get("PERCY_TOKEN"):
        rows.append(("PERCY_TOKEN", "OK", "set"))
    else:
        rows.append(("PERCY_TOKEN", "FAIL", "Percy needs PERCY_TOKEN to upload snapshots"))

    source = settings.projects_source_dir
    if source.is_dir():
        projects = sorted(p.name for p in source.iterdir() if p.is_dir())
        rows.append(("Projects folder", "OK", f"{source} ({len(projects)} projects)"))
    else:
        rows.append(("Projects folder", "FAIL", f"{source} not found"))

    ok_http, detail_http = _check_http(settings.pdf_server_base_url, settings.http_timeout_seconds)
    rows.append(("PDF.js server", "OK" if ok_http else "FAIL", f"{settings.pdf_server_base_url}: {detail_http}"))

    return rows


def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="PDF-VRT Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    rows = collect_checks(settings)
    for check, status, details in rows:
        table.add_row(check, status, details)

    _console.print(table)

    if any(check == "PDF.js server" and status == "FAIL" for check, status, _ in rows):
        _console.print(
            "\n[yellow]Note:[/yellow] Start the PDF.js server before `run`, "
            f"e.g. `npx http-server pdfjs-3.4.120-dist -p {settings.pdf_server_port}`."
        )
