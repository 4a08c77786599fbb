"""
Performance test use case — the whole build step, end to end.

Resolves the installation mode, runs the test, and hands the outcome
to the build platform. The step always finishes with exactly one of
SUCCESS or FAILURE; nothing is raised to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, ClassVar

from perfstep.adapters.base import BuildContext, CommandRunner
from perfstep.adapters.shell.command import ProcessRunner
from perfstep.core.models.step import BuildOutcome, InstallationMode, StepSettings
from perfstep.core.services.bootstrap import resolve_installation
from perfstep.core.services.executor import execute

logger = logging.getLogger(__name__)

ResultCallback = Callable[[BuildOutcome], None]


@dataclass
class RunResult:
    """Result of one build-step invocation."""

    outcome: BuildOutcome = BuildOutcome.FAILURE
    mode: InstallationMode = InstallationMode.UNAVAILABLE

    @property
    def ok(self) -> bool:
        return self.outcome.ok

    def to_dict(self) -> dict:
        return {"outcome": self.outcome.value, "mode": self.mode.value}


def run_step(
    params: str | None,
    context: BuildContext,
    runner: CommandRunner | None = None,
    settings: StepSettings | None = None,
) -> RunResult:
    """Bootstrap the tool and run the test, reporting mode and outcome."""
    runner = runner or ProcessRunner()
    settings = settings or StepSettings()
    result = RunResult()

    try:
        result.mode = resolve_installation(runner, context, settings)
        result.outcome = execute(result.mode, params, context, runner, settings)
    except Exception as e:
        logger.exception("Performance test step crashed")
        context.log.error("Performance test: unexpected error: %s", e)
        result.outcome = BuildOutcome.FAILURE

    return result


def run_performance_test(
    params: str | None,
    context: BuildContext,
    set_result: ResultCallback | None = None,
    runner: CommandRunner | None = None,
    settings: StepSettings | None = None,
) -> BuildOutcome:
    """Run the build step and hand the outcome to ``set_result``.

    Args:
        params: Raw space-delimited arguments for the test tool.
        context: Working directory and build log.
        set_result: Called exactly once with the final outcome.
        runner: Command runner (default: real processes).
        settings: Step settings (default: stock Taurus setup).

    Returns:
        The same outcome passed to ``set_result``.
    """
    outcome = run_step(params, context, runner, settings).outcome
    if set_result is not None:
        set_result(outcome)
    return outcome


@dataclass
class PerformanceTestStep:
    """Build step bound to one parameter string.

    The platform creates it from stored job data, may reassign
    ``params`` later, and calls ``perform`` once per build.
    """

    params: str = ""

    symbol: ClassVar[str] = "performanceTest"

    def perform(
        self,
        context: BuildContext,
        set_result: ResultCallback | None = None,
        runner: CommandRunner | None = None,
        settings: StepSettings | None = None,
    ) -> BuildOutcome:
        return run_performance_test(self.params, context, set_result, runner, settings)
