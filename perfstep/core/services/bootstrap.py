"""
Bootstrap — find the performance-test tool, or provision it locally.

The fallback chain, each step gated on the previous one:

    1. ``bzt --help``                                       → GLOBAL
    2. ``virtualenv --help``                                (else UNAVAILABLE)
    3. ``virtualenv --clear --system-site-packages <venv>`` (else UNAVAILABLE)
    4. ``<venv>/bin/pip --no-cache-dir install bzt``        (else UNAVAILABLE)
    5. ``<venv>/bin/bzt --help``                            → LOCAL / UNAVAILABLE

Every command runs with output suppressed. A failed step leaves the
virtualenv directory as it is; nothing is cleaned up.
"""

from __future__ import annotations

import logging

from perfstep.adapters.base import BuildContext, CommandRunner
from perfstep.core.models.step import InstallationMode, StepSettings

logger = logging.getLogger(__name__)

_PREFIX = "Performance test:"


def resolve_installation(
    runner: CommandRunner,
    context: BuildContext,
    settings: StepSettings,
) -> InstallationMode:
    """Run the fallback chain and report where the tool lives."""
    log = context.log
    tool = settings.tool
    probe_timeout = settings.timeouts.probe

    log.info("%s Checking %s installed on your machine.", _PREFIX, tool)
    if runner.run(settings.check_tool_command(), context, True, probe_timeout):
        log.info("%s %s is installed on your machine.", _PREFIX, tool)
        return InstallationMode.GLOBAL

    log.info(
        "%s You have not got %s on your machine. Next step is checking %s.",
        _PREFIX, tool, settings.virtualenv,
    )
    if not runner.run(settings.check_virtualenv_command(), context, True, probe_timeout):
        log.info("%s %s is not available, cannot install %s.", _PREFIX, settings.virtualenv, tool)
        return InstallationMode.UNAVAILABLE

    mode = provision(runner, context, settings)
    logger.debug("Installation mode for %s: %s", context.working_dir, mode.value)
    return mode


def provision(
    runner: CommandRunner,
    context: BuildContext,
    settings: StepSettings,
) -> InstallationMode:
    """Create the workspace virtualenv, install the tool, and check it.

    Assumes the virtualenv helper has already been found.
    """
    log = context.log
    wd = context.working_dir
    tool = settings.tool
    install_timeout = settings.timeouts.install

    log.info("%s Checking %s is OK. Next step is creation local python.", _PREFIX, settings.virtualenv)
    if not runner.run(settings.create_venv_command(wd), context, True, install_timeout):
        log.info("%s Creation local python failed in %s.", _PREFIX, settings.venv_path(wd))
        return InstallationMode.UNAVAILABLE

    log.info("%s Creation local python is OK. Next step is install %s.", _PREFIX, tool)
    if not runner.run(settings.install_tool_command(wd), context, True, install_timeout):
        log.info("%s Installation of %s into local python failed.", _PREFIX, tool)
        return InstallationMode.UNAVAILABLE

    log.info("%s %s installed successfully. Checking %s.", _PREFIX, tool, tool)
    if not runner.run(settings.check_local_tool_command(wd), context, True, settings.timeouts.probe):
        log.info("%s Installed %s does not respond.", _PREFIX, tool)
        return InstallationMode.UNAVAILABLE

    log.info("%s %s is working.", _PREFIX, tool)
    return InstallationMode.LOCAL
