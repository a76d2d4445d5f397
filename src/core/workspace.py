"""Preparación de carpetas de trabajo.

Este módulo vive en `core/` porque:
- centraliza *dónde* se dejan los PDFs servidos y los YAML generados
- evita duplicar lógica de paths en la CLI y en el pipeline.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from core.config import AppSettings

logger = logging.getLogger(__name__)


def recreate_folder(path: Path) -> Path:
    """Borra `path` (si existe) y lo crea vacío."""

    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def prepare_workspace(settings: AppSettings) -> None:
    """Deja el servidor PDF.js y la carpeta de YAML listos para una ejecución.

    Orden:
    1) recrear la carpeta de proyectos del servidor y la de configs generadas
    2) copiar los proyectos del usuario a la carpeta servida
    """

    recreate_folder(settings.server_projects_dir)
    recreate_folder(settings.snapshot_config_dir)

    source = settings.projects_source_dir
    if not source.is_dir():
        logger.warning("Projects folder not found: %s", source)
        return

    shutil.copytree(source, settings.server_projects_dir, dirs_exist_ok=True)
    logger.debug("Copied %s -> %s", source, settings.server_projects_dir)


def list_pdf_files(folder: Path) -> list[str]:
    """Nombres de los PDFs de `folder` (no recursivo, orden estable)."""

    if not folder.is_dir():
        return []
    return sorted(p.name for p in folder.iterdir() if p.is_file() and p.suffix.lower() == ".pdf")
