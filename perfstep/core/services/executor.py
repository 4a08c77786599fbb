"""
Executor — build and run the final performance-test command.

The command is ``<tool> <params...> <workspace>/defaultReport.yml``,
where ``<tool>`` is the bare name for a global install or the virtualenv
binary for a local one. Its output is always streamed to the build log.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from perfstep.adapters.base import BuildContext, CommandRunner
from perfstep.core.data import DEFAULT_REPORT_TEMPLATE
from perfstep.core.models.step import BuildOutcome, InstallationMode, StepSettings

logger = logging.getLogger(__name__)


def tokenize_params(params: str | None) -> list[str]:
    """Split the raw parameter string on whitespace, dropping empty tokens.

    No quoting: an argument with an embedded space cannot be expressed.
    """
    if not params:
        return []
    return [token for token in params.split() if token]


def materialize_default_config(
    working_dir: Path,
    settings: StepSettings,
    template: Path = DEFAULT_REPORT_TEMPLATE,
) -> Path:
    """Copy the bundled report template into the workspace, overwriting.

    Returns:
        Absolute path of the copy.
    """
    target = Path(working_dir).resolve() / settings.default_config
    shutil.copyfile(template, target)
    logger.debug("Wrote default config %s", target)
    return target


def build_test_command(
    mode: InstallationMode,
    params: str | None,
    working_dir: Path,
    config_path: Path,
    settings: StepSettings,
) -> list[str]:
    """Assemble the test argv for an available installation mode."""
    if mode is InstallationMode.UNAVAILABLE:
        raise ValueError("No test command without an installed tool")

    if mode is InstallationMode.LOCAL:
        command = [settings.local_tool(working_dir)]
    else:
        command = [settings.tool]
    command.extend(tokenize_params(params))
    command.append(str(config_path))
    return command


def execute(
    mode: InstallationMode,
    params: str | None,
    context: BuildContext,
    runner: CommandRunner,
    settings: StepSettings,
) -> BuildOutcome:
    """Run the performance test and map its exit status to an outcome."""
    if mode is InstallationMode.UNAVAILABLE:
        context.log.info("Performance test: %s is not available, test is not started.", settings.tool)
        return BuildOutcome.FAILURE

    try:
        config_path = materialize_default_config(context.working_dir, settings)
    except OSError as e:
        context.log.error("Performance test: cannot write %s: %s", settings.default_config, e)
        return BuildOutcome.FAILURE

    command = build_test_command(mode, params, context.working_dir, config_path, settings)
    context.log.info("Performance test: Running %s", " ".join(command))

    if runner.run(command, context, False, settings.timeouts.test):
        return BuildOutcome.SUCCESS
    return BuildOutcome.FAILURE
