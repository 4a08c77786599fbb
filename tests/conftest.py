"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from perfstep.adapters.base import BuildContext
from perfstep.adapters.mock import MockRunner
from perfstep.core.models.step import StepSettings


class RecordingHandler(logging.Handler):
    """Keeps every record emitted on the build log."""

    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    @property
    def messages(self) -> list[str]:
        return [r.getMessage() for r in self.records]

    def at(self, level: int) -> list[str]:
        return [r.getMessage() for r in self.records if r.levelno == level]


@pytest.fixture
def build_records(request: pytest.FixtureRequest):
    """A fresh, isolated build logger and the handler recording it."""
    log = logging.getLogger(f"tests.build.{request.node.name}")
    log.handlers.clear()
    log.setLevel(logging.DEBUG)
    log.propagate = False
    handler = RecordingHandler()
    log.addHandler(handler)
    yield log, handler
    log.removeHandler(handler)


@pytest.fixture
def build_log(build_records) -> RecordingHandler:
    """Just the recording handler of the build log."""
    return build_records[1]


@pytest.fixture
def context(tmp_path: Path, build_records) -> BuildContext:
    """Build context over a temporary workspace."""
    return BuildContext(working_dir=tmp_path, log=build_records[0])


@pytest.fixture
def runner() -> MockRunner:
    return MockRunner()


@pytest.fixture
def settings() -> StepSettings:
    return StepSettings()
