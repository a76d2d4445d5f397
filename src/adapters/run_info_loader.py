"""Carga del archivo de descripción de la ejecución (YAML).

Formato esperado (ejemplo):

    runMode: compare-release-with-baseline
    baselineDir: v1
    releaseDir: v2
    projectFolders: [invoices]
    excludeDocs:
      - {project: invoices, doc: draft.pdf}
    specialDocConfigs:
      - {project: invoices, doc: big.pdf, includePages: [2, 5]}
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from core.domain.models import RunInfoConfig
from core.domain.run_mode import RunMode
from core.errors import RunInfoError


def _describe_validation_error(exc: ValidationError) -> str:
    lines: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "<root>"
        if loc == "runMode":
            accepted = "' OR '".join(RunMode.accepted_values())
            lines.append(
                f"'runMode' found: {err.get('input')}.\nIt should be either '{accepted}'."
            )
        else:
            lines.append(f"{loc}: {err.get('msg')}")
    return "\n".join(lines)


def load_run_info(path: Path, *, encoding: str = "utf-8") -> RunInfoConfig:
    """Lee y valida el YAML del usuario.

    Todos los fallos (archivo inexistente, YAML roto, esquema inválido) se
    reportan como `RunInfoError`.
    """

    if not path.is_file():
        raise RunInfoError(f"Run description file not found: {path}")

    try:
        text = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise RunInfoError(f"Could not read the run description: {exc}", path=path) from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RunInfoError(f"Invalid YAML: {exc}", path=path) from exc

    if not isinstance(data, dict):
        raise RunInfoError("The run description must be a YAML mapping.", path=path)

    try:
        return RunInfoConfig.model_validate(data)
    except ValidationError as exc:
        raise RunInfoError(_describe_validation_error(exc), path=path) from exc
