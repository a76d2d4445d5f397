"""Contrato para obtener el número de páginas de un PDF."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class PageCounter(Protocol):
    """Contrato mínimo del parser de PDF.

    Reglas de diseño:
    - Síncrono: el pipeline lo ejecuta en un hilo (`asyncio.to_thread`).
    - Errores de parseo se reportan como `core.errors.PdfReadError`.
    """

    def count_pages(self, path: Path) -> int:
        """Devuelve el número de páginas del PDF en `path`."""

        ...
