"""Contrato del servicio externo de snapshots.

Por qué Protocol:
- El pipeline no sabe si detrás hay `npx percy`, otro CLI o un doble de test.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class SnapshotRunner(Protocol):
    async def run(self, config_path: Path, branch: str, target_branch: str) -> int:
        """Procesa un archivo de snapshots y devuelve el código de salida."""

        ...
