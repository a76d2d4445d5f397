"""Conteo de páginas con pypdf.

Por qué está en adapters:
- El parser de PDF es un detalle de infraestructura; el Core solo necesita
  un entero por documento (`core.interfaces.PageCounter`).
"""

from __future__ import annotations

from pathlib import Path

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from core.errors import PdfReadError


class PypdfPageCounter:
    """`PageCounter` respaldado por `pypdf.PdfReader`."""

    def __init__(self, *, strict: bool = False) -> None:
        self._strict = strict

    def count_pages(self, path: Path) -> int:
        try:
            with path.open("rb") as fp:
                reader = PdfReader(fp, strict=self._strict)
                return len(reader.pages)
        except PyPdfError as exc:
            raise PdfReadError(f"Could not read PDF {path}: {exc}") from exc
