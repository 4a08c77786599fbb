"""Adapters — process bindings for the build step.

Public re-exports for convenient access.
"""

from perfstep.adapters.base import BuildContext, CommandRunner
from perfstep.adapters.mock import MockRunner
from perfstep.adapters.shell.command import ProcessRunner

__all__ = [
    "BuildContext",
    "CommandRunner",
    "MockRunner",
    "ProcessRunner",
]
