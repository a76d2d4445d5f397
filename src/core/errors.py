"""Errores del dominio.

Por qué una jerarquía propia:
- Los adaptadores envuelven errores de librerías (PyYAML, pypdf, subprocess)
  para que la CLI no dependa de sus tipos concretos.
"""

from __future__ import annotations

from pathlib import Path


class PdfVrtError(Exception):
    """Base de todos los errores de la aplicación."""


class RunInfoError(PdfVrtError):
    """El archivo de descripción de la ejecución no existe o es inválido."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{message}\nPlease update {path}."
        super().__init__(message)


class PdfReadError(PdfVrtError):
    """No se pudo leer el PDF para contar sus páginas."""


class SnapshotRunnerError(PdfVrtError):
    """No se pudo lanzar el proceso externo de snapshots."""
