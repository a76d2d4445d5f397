"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `run` y `plan`.
"""

from __future__ import annotations

import logging

from rich.align import Align
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.run_mode import RunMode
from core.services.page_selection import describe_pages
from core.services.snapshot_pipeline import DocumentOutcome


def configure_logging(console: Console, *, verbose: bool = False) -> None:
    """Envía `logging` a Rich. Sin `--verbose` solo se muestran avisos."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=verbose, markup=False)],
        force=True,
    )


def print_banner(console: Console, run_mode: RunMode | None = None) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (CI).
    """

    title = Text("PDF-VRT", style="bold cyan")
    subtitle = Text("PDF visual regression • PDF.js • Percy", style="dim")
    parts: list[Text | str] = [title, "\n", subtitle]
    if run_mode is not None:
        parts.extend(["\n", Text(f"mode: {run_mode.value} ({run_mode.label()})", style="yellow")])
    body = Align.center(Text.assemble(*parts), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_plan_table() -> Table:
    table = Table(title="Snapshot plan")
    table.add_column("Project", style="cyan", no_wrap=True)
    table.add_column("Document", style="white")
    table.add_column("Pages", style="green")
    table.add_column("PERCY_BRANCH", style="magenta")
    table.add_column("PERCY_TARGET_BRANCH", style="magenta")
    return table


def build_results_table(outcomes: list[DocumentOutcome]) -> Table:
    """Tabla final con el resultado de cada documento."""

    table = Table(title="Snapshot results")
    table.add_column("Project", style="cyan", no_wrap=True)
    table.add_column("Document", style="white")
    table.add_column("Pages", style="green")
    table.add_column("Config", style="dim")
    table.add_column("Status", style="white")

    for outcome in outcomes:
        if outcome.ok:
            status = Text("OK" if outcome.exit_code is not None else "GENERATED", style="green")
        else:
            status = Text(f"FAIL: {outcome.error}", style="red")
        table.add_row(
            outcome.project,
            outcome.pdf_file_name,
            describe_pages(outcome.pages) if outcome.doc_id else "-",
            str(outcome.config_path) if outcome.config_path else "-",
            status,
        )
    return table
