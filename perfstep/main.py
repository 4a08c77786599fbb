"""
perfstep — CLI entrypoint.

Usage:
    python -m perfstep.main --help
    python -m perfstep.main probe
    python -m perfstep.main run --params "-o modules.console.disable=true"
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from perfstep import __version__
from perfstep.core.observability.logging_config import build_log, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="perfstep")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to perfstep.yml (default: auto-detect from the workspace).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """perfstep — run Taurus performance tests as a build step."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("PERFSTEP_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("PERFSTEP_LOG_FILE"),
        log_file_level=os.environ.get("PERFSTEP_LOG_FILE_LEVEL"),
    )


def _load_settings(ctx: click.Context, workspace: Path):
    """Load perfstep.yml for the workspace, exiting 1 on a bad file."""
    from perfstep.core.config.loader import ConfigError, load_settings

    try:
        return load_settings(ctx.obj.get("config_path"), start_dir=workspace)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


_workspace_option = click.option(
    "--workspace",
    "-w",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="Build workspace (default: current directory).",
)


@cli.command()
@_workspace_option
@click.option("--params", "-p", default="", help="Raw arguments passed to the test tool.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.pass_context
def run(ctx: click.Context, workspace: Path, params: str, as_json: bool) -> None:
    """Make sure the test tool is installed, then run the performance test."""
    from perfstep.adapters.base import BuildContext
    from perfstep.core.use_cases.performance_test import run_step

    settings = _load_settings(ctx, workspace)
    # Keep stdout clean for JSON consumers
    console = sys.stderr if as_json else sys.stdout
    context = BuildContext(working_dir=workspace, log=build_log(console))

    result = run_step(params, context, settings=settings)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif not ctx.obj.get("quiet"):
        if result.ok:
            click.secho("✅ Performance test passed", fg="green", bold=True)
        else:
            click.secho("❌ Performance test failed", fg="red", bold=True)

    sys.exit(0 if result.ok else 1)


@cli.command()
@_workspace_option
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.pass_context
def probe(ctx: click.Context, workspace: Path, as_json: bool) -> None:
    """Find the test tool, provisioning a local virtualenv if needed."""
    from perfstep.adapters.base import BuildContext
    from perfstep.adapters.shell.command import ProcessRunner
    from perfstep.core.models.step import InstallationMode
    from perfstep.core.services.bootstrap import resolve_installation

    settings = _load_settings(ctx, workspace)
    # Keep stdout clean for JSON consumers
    console = sys.stderr if as_json else sys.stdout
    context = BuildContext(working_dir=workspace, log=build_log(console))

    mode = resolve_installation(ProcessRunner(), context, settings)

    if as_json:
        click.echo(json.dumps({"mode": mode.value}, indent=2))
    else:
        color = "red" if mode is InstallationMode.UNAVAILABLE else "green"
        click.secho(f"Installation mode: {mode.value}", fg=color)

    sys.exit(1 if mode is InstallationMode.UNAVAILABLE else 0)


if __name__ == "__main__":
    cli()
