"""
Domain models — Pydantic types and enums for the build step.

All models are re-exported here for convenient access:

    from perfstep.core.models import BuildOutcome, InstallationMode, StepSettings
"""

from perfstep.core.models.step import (
    BuildOutcome,
    InstallationMode,
    StepSettings,
    StepTimeouts,
)

__all__ = [
    "BuildOutcome",
    "InstallationMode",
    "StepSettings",
    "StepTimeouts",
]
