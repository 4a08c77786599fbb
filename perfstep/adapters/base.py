"""
Runner base — the protocol contract between the build step and processes.

The bootstrap chain and the executor never call ``subprocess`` directly.
They hand an argv to a ``CommandRunner`` and get a bool back, which keeps
the fallback logic testable with a scripted double.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass
class BuildContext:
    """What the build platform lends us for one invocation.

    ``log`` is the build console. Progress lines and relayed process
    output are written to it; it is owned by the caller.
    """

    working_dir: Path
    log: logging.Logger

    def __post_init__(self) -> None:
        self.working_dir = Path(self.working_dir).resolve()


class CommandRunner(ABC):
    """Abstract base for command runners.

    Runners NEVER raise for process failures: a command that cannot be
    started, exits non-zero, times out, or is interrupted yields False.
    """

    @abstractmethod
    def run(
        self,
        argv: list[str],
        context: BuildContext,
        suppress_output: bool,
        timeout: float | None = None,
    ) -> bool:
        """Run ``argv`` in ``context.working_dir``.

        Args:
            argv: Program and arguments, passed without a shell.
            context: Working directory and build log.
            suppress_output: Discard stdout/stderr instead of relaying them.
            timeout: Seconds to wait before killing the child.

        Returns:
            True iff the process started and exited with status 0.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"
