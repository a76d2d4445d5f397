"""Lanzador del CLI de Percy.

Por qué un proceso externo:
- La captura, el diff y la comparación entre ramas viven en Percy; aquí
  solo le pasamos el YAML generado y las variables de rama.
- La salida del proceso se hereda (stdio) para que el usuario vea el
  progreso de Percy tal cual.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
from pathlib import Path
from typing import Mapping, Sequence

from core.config import AppSettings
from core.errors import SnapshotRunnerError
from core.services.run_info import strip_whitespace

logger = logging.getLogger(__name__)


def build_percy_env(
    branch: str,
    target_branch: str,
    base_env: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Entorno del proceso: el actual más PERCY_BRANCH / PERCY_TARGET_BRANCH."""

    env = dict(os.environ if base_env is None else base_env)
    env["PERCY_BRANCH"] = strip_whitespace(branch)
    env["PERCY_TARGET_BRANCH"] = strip_whitespace(target_branch)
    return env


class PercyRunner:
    """`SnapshotRunner` que ejecuta `<percy_command> snapshot <archivo>`."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        command: Sequence[str] | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._command = list(command or self._settings.percy_command)

    def build_args(self, config_path: Path) -> list[str]:
        executable, *rest = self._command
        # En Windows `npx` es `npx.cmd`; which() lo resuelve.
        resolved = shutil.which(executable) or executable
        return [resolved, *rest, "snapshot", str(config_path)]

    async def run(self, config_path: Path, branch: str, target_branch: str) -> int:
        args = self.build_args(config_path)
        logger.debug("Running %s (branch=%s, target=%s)", " ".join(args), branch, target_branch)
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                env=build_percy_env(branch, target_branch),
            )
        except OSError as exc:
            raise SnapshotRunnerError(f"Could not start '{args[0]}': {exc}") from exc

        return await process.wait()
