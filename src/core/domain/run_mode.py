"""Run modes for a snapshot run.

This module centralizes the two comparison states the snapshot service
understands. Keeping it in the domain layer allows the config loader, the
services and the CLI to share a single source of truth.
"""

from __future__ import annotations

from enum import Enum


class RunMode(str, Enum):
    """Which side of the baseline/release comparison a run produces."""

    CREATE_BASELINE = "create-baseline"
    COMPARE_RELEASE_WITH_BASELINE = "compare-release-with-baseline"

    @classmethod
    def accepted_values(cls) -> list[str]:
        """Literal values accepted in the run-description file."""

        return [mode.value for mode in cls]

    def working_dir(self, baseline_dir: str, release_dir: str) -> str:
        """Folder whose documents are rendered and snapshotted in this mode."""

        if self is RunMode.CREATE_BASELINE:
            return baseline_dir
        return release_dir

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return "baseline" if self is RunMode.CREATE_BASELINE else "release vs baseline"
