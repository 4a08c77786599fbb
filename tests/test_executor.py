"""
Tests for the executor — tokenizing, default config, test command.
"""

from pathlib import Path

import pytest

from perfstep.core.data import DEFAULT_REPORT_TEMPLATE
from perfstep.core.models.step import BuildOutcome, InstallationMode
from perfstep.core.services.executor import (
    build_test_command,
    execute,
    materialize_default_config,
    tokenize_params,
)


class TestTokenizeParams:
    def test_simple(self):
        assert tokenize_params("-o a=1 test.yml") == ["-o", "a=1", "test.yml"]

    def test_repeated_whitespace_dropped(self):
        assert tokenize_params("  -o   a=1\t\ttest.yml  ") == ["-o", "a=1", "test.yml"]

    def test_empty_and_none(self):
        assert tokenize_params("") == []
        assert tokenize_params("   ") == []
        assert tokenize_params(None) == []

    def test_quotes_not_interpreted(self):
        assert tokenize_params('-o "a b"') == ["-o", '"a', 'b"']


class TestDefaultConfig:
    def test_copied_verbatim(self, tmp_path: Path, settings):
        target = materialize_default_config(tmp_path, settings)
        assert target == tmp_path.resolve() / "defaultReport.yml"
        assert target.read_bytes() == DEFAULT_REPORT_TEMPLATE.read_bytes()

    def test_overwrites_existing(self, tmp_path: Path, settings):
        (tmp_path / "defaultReport.yml").write_text("stale: true\n")
        target = materialize_default_config(tmp_path, settings)
        assert target.read_bytes() == DEFAULT_REPORT_TEMPLATE.read_bytes()

    def test_template_is_yaml_mapping(self):
        import yaml

        data = yaml.safe_load(DEFAULT_REPORT_TEMPLATE.read_text(encoding="utf-8"))
        assert isinstance(data, dict)
        assert "reporting" in data


class TestBuildTestCommand:
    def test_global(self, tmp_path: Path, settings):
        cfg = tmp_path / "defaultReport.yml"
        cmd = build_test_command(InstallationMode.GLOBAL, "-o x=1", tmp_path, cfg, settings)
        assert cmd == ["bzt", "-o", "x=1", str(cfg)]

    def test_local(self, tmp_path: Path, settings):
        cfg = tmp_path / "defaultReport.yml"
        cmd = build_test_command(InstallationMode.LOCAL, "", tmp_path, cfg, settings)
        assert cmd == [settings.local_tool(tmp_path), str(cfg)]

    def test_unavailable_rejected(self, tmp_path: Path, settings):
        with pytest.raises(ValueError):
            build_test_command(InstallationMode.UNAVAILABLE, "", tmp_path, tmp_path, settings)


class TestExecute:
    def test_unavailable_launches_nothing(self, runner, context, settings):
        outcome = execute(InstallationMode.UNAVAILABLE, "-o x=1", context, runner, settings)
        assert outcome == BuildOutcome.FAILURE
        assert runner.call_count == 0
        assert not (context.working_dir / "defaultReport.yml").exists()

    def test_success(self, runner, context, settings):
        outcome = execute(InstallationMode.GLOBAL, "-o x=1", context, runner, settings)
        assert outcome == BuildOutcome.SUCCESS
        assert runner.call_log == [
            ["bzt", "-o", "x=1", str(context.working_dir / "defaultReport.yml")],
        ]

    def test_output_streamed(self, runner, context, settings):
        execute(InstallationMode.GLOBAL, "", context, runner, settings)
        assert runner.suppressed == [False]

    def test_failure(self, runner, context, settings):
        runner.set_failure("bzt")
        outcome = execute(InstallationMode.GLOBAL, "", context, runner, settings)
        assert outcome == BuildOutcome.FAILURE

    def test_unwritable_workspace(self, runner, context, settings):
        settings.default_config = "missing-dir/defaultReport.yml"
        outcome = execute(InstallationMode.GLOBAL, "", context, runner, settings)
        assert outcome == BuildOutcome.FAILURE
        assert runner.call_count == 0
