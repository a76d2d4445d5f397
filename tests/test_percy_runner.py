from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from adapters import percy_runner
from adapters.percy_runner import PercyRunner, build_percy_env
from core.errors import SnapshotRunnerError


def test_env_strips_whitespace_from_branches():
    env = build_percy_env("DOC_a_v2_my doc.pdf", " DOC_a_v1_my doc.pdf ", base_env={"PATH": "/bin"})

    assert env == {
        "PATH": "/bin",
        "PERCY_BRANCH": "DOC_a_v2_mydoc.pdf",
        "PERCY_TARGET_BRANCH": "DOC_a_v1_mydoc.pdf",
    }


def test_build_args_appends_snapshot_and_path(settings, monkeypatch):
    monkeypatch.setattr(percy_runner.shutil, "which", lambda name: f"/usr/bin/{name}")

    args = PercyRunner(settings).build_args(Path(".dist/snapshots_x.yml"))

    assert args == ["/usr/bin/npx", "percy", "snapshot", str(Path(".dist/snapshots_x.yml"))]


def test_run_passes_branch_variables(settings, monkeypatch):
    captured: dict = {}

    class _Process:
        async def wait(self) -> int:
            return 0

    async def fake_exec(*args, env=None):
        captured["args"] = args
        captured["env"] = env
        return _Process()

    monkeypatch.setattr(percy_runner.asyncio, "create_subprocess_exec", fake_exec)

    code = asyncio.run(
        PercyRunner(settings, command=["percy"]).run(Path("cfg.yml"), "DOC_p_v2_a.pdf", "DOC_p_v1_a.pdf")
    )

    assert code == 0
    assert captured["args"][-2:] == ("snapshot", "cfg.yml")
    assert captured["env"]["PERCY_BRANCH"] == "DOC_p_v2_a.pdf"
    assert captured["env"]["PERCY_TARGET_BRANCH"] == "DOC_p_v1_a.pdf"


def test_missing_executable_raises(settings):
    runner = PercyRunner(settings, command=["definitely-not-a-real-percy-binary"])

    with pytest.raises(SnapshotRunnerError):
        asyncio.run(runner.run(Path("cfg.yml"), "b", ""))
