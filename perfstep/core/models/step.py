"""
Step models — settings, installation mode, and build outcome.

Settings are loaded from perfstep.yml (or defaulted). The installation
mode is the single fact the fallback chain produces; the executor
consumes it to pick the command prefix.
"""

from __future__ import annotations

import sys
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class InstallationMode(str, Enum):
    """Where the performance-test tool was found (or not)."""

    GLOBAL = "global"           # tool on PATH
    LOCAL = "local"             # provisioned into the workspace virtualenv
    UNAVAILABLE = "unavailable"


class BuildOutcome(str, Enum):
    """Final pass/fail signal handed back to the build platform."""

    SUCCESS = "success"
    FAILURE = "failure"

    @property
    def ok(self) -> bool:
        return self is BuildOutcome.SUCCESS


class StepTimeouts(BaseModel):
    """Per-phase subprocess timeouts in seconds. ``None`` waits forever."""

    probe: float | None = 120
    install: float | None = 900
    test: float | None = None


class StepSettings(BaseModel):
    """Knobs for the bootstrap chain and the test run.

    The defaults reproduce the stock Taurus setup: ``bzt`` on PATH, or a
    ``taurus-venv`` virtualenv created inside the workspace.
    """

    tool: str = "bzt"
    virtualenv: str = "virtualenv"
    venv_dir: str = "taurus-venv"
    default_config: str = "defaultReport.yml"
    timeouts: StepTimeouts = Field(default_factory=StepTimeouts)

    def venv_path(self, working_dir: Path) -> Path:
        """Absolute location of the local environment for a workspace."""
        return Path(working_dir) / self.venv_dir

    def venv_bin(self, working_dir: Path) -> Path:
        """Executable directory inside the local environment."""
        scripts = "Scripts" if sys.platform == "win32" else "bin"
        return self.venv_path(working_dir) / scripts

    # ── Fixed argv builders ─────────────────────────────────────

    def check_tool_command(self) -> list[str]:
        return [self.tool, "--help"]

    def check_virtualenv_command(self) -> list[str]:
        return [self.virtualenv, "--help"]

    def create_venv_command(self, working_dir: Path) -> list[str]:
        return [
            self.virtualenv,
            "--clear",
            "--system-site-packages",
            str(self.venv_path(working_dir)),
        ]

    def install_tool_command(self, working_dir: Path) -> list[str]:
        pip = self.venv_bin(working_dir) / "pip"
        return [str(pip), "--no-cache-dir", "install", self.tool]

    def local_tool(self, working_dir: Path) -> str:
        return str(self.venv_bin(working_dir) / self.tool)

    def check_local_tool_command(self, working_dir: Path) -> list[str]:
        return [self.local_tool(working_dir), "--help"]
