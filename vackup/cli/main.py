################################################################################
# VACKUP
#
# @file:        main.py
# @module:      vackup.cli.main
# @description: Typer-based CLI routing export/import/save/load to the dispatcher.
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
################################################################################

"""
vackup — main CLI

Configuration (options and VACKUP_* environment variables) is read once in
the callback and stored in the context; commands fetch the dispatcher from
there instead of re-reading the environment.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from ..constants import (
    DEFAULT_DOCKER_BINARY,
    DEFAULT_HELPER_IMAGE,
    DEFAULT_LOG_LEVEL,
    ENV_DOCKER_BINARY,
    ENV_FAILURE_SCRIPT,
    ENV_HELPER_IMAGE,
    ENV_LOG_LEVEL,
    EXIT_FAILURE,
    VERSION,
)
from ..cores import CommandDispatcher, FailureReporter, VolumeManager
from ..errors import EngineError
from ..helpers.config import VackupConfig
from ..helpers.logging import get_logger, log_manager
from ..helpers.system_utils import SystemUtils
from ..helpers.ui_utils import console, create_status_table, err_console, print_error, print_info

app = typer.Typer(
    name="vackup",
    add_completion=False,
    help=(
        "vackup - copy data between Docker volumes, tarballs and images.\n\n"
        "export VOLUME FILE, import FILE VOLUME, save VOLUME IMAGE, load IMAGE VOLUME"
    ),
    context_settings={"help_option_names": ["-h", "--help"]},
)
logger = get_logger(__name__)


# -------------------------
# Application Context
# -------------------------

@app.callback(invoke_without_command=True)
def initialize_context(
    ctx: typer.Context,
    failure_script: Optional[str] = typer.Option(
        None, "--failure-script", envvar=ENV_FAILURE_SCRIPT,
        help="Executable run as `SCRIPT LINE EXIT_CODE` when a command fails.",
    ),
    helper_image: str = typer.Option(
        DEFAULT_HELPER_IMAGE, "--helper-image", envvar=ENV_HELPER_IMAGE,
        help="Image used for helper containers.",
    ),
    docker_binary: str = typer.Option(
        DEFAULT_DOCKER_BINARY, "--docker", envvar=ENV_DOCKER_BINARY,
        help="Docker CLI executable.",
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print docker commands that change state instead of running them.",
    ),
    log_level: str = typer.Option(
        DEFAULT_LOG_LEVEL, "--log-level", envvar=ENV_LOG_LEVEL,
        help="Log level (DEBUG, INFO, WARNING, ERROR).",
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Also write log records to this file.",
    ),
):
    """
    Initialize application context before any command runs.
    Builds the configuration once and sets up logging.
    """
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    try:
        cfg = VackupConfig.from_env(
            failure_script=failure_script,
            helper_image=helper_image,
            docker_binary=docker_binary,
            dry_run=dry_run,
            log_level=log_level,
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"])
            print_error(f"Invalid {field}: {err['msg']}")
        raise typer.Exit(code=EXIT_FAILURE)

    log_manager.configure(level=cfg.log_level, log_file=log_file)
    logger.debug(f"Configuration: {cfg.model_dump()}")
    if cfg.dry_run:
        print_info("Dry run: docker commands that change state are printed, not executed")

    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


# -------------------------
# Helper Functions
# -------------------------

def get_config(ctx: typer.Context) -> VackupConfig:
    """Get config from the context."""
    return ctx.obj["config"]


def get_reporter(ctx: typer.Context) -> FailureReporter:
    if "reporter" not in ctx.obj:
        ctx.obj["reporter"] = FailureReporter.from_config(get_config(ctx))
    return ctx.obj["reporter"]


def get_dispatcher(ctx: typer.Context) -> CommandDispatcher:
    """Get or create the dispatcher for this invocation."""
    if "dispatcher" not in ctx.obj:
        manager = VolumeManager(get_config(ctx))
        ctx.obj["dispatcher"] = CommandDispatcher(manager, get_reporter(ctx))
    return ctx.obj["dispatcher"]


# -------------------------
# Volume Operations
# -------------------------

@app.command("export")
def cmd_export(
    ctx: typer.Context,
    volume: Optional[str] = typer.Argument(None, metavar="VOLUME", help="Volume to back up."),
    file: Optional[str] = typer.Argument(None, metavar="FILE", help="Tarball to write."),
):
    """Create a gzip'ed tarball from a volume."""
    raise typer.Exit(code=get_dispatcher(ctx).run("export", volume, file))


@app.command("import")
def cmd_import(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(None, metavar="FILE", help="Tarball created by export."),
    volume: Optional[str] = typer.Argument(None, metavar="VOLUME", help="Target volume (created if missing)."),
):
    """Extract a gzip'ed tarball into a volume."""
    raise typer.Exit(code=get_dispatcher(ctx).run("import", file, volume))


@app.command("save")
def cmd_save(
    ctx: typer.Context,
    volume: Optional[str] = typer.Argument(None, metavar="VOLUME", help="Volume to copy."),
    image: Optional[str] = typer.Argument(None, metavar="IMAGE", help="Image to commit."),
):
    """Copy the contents of a volume into a new image under /volume-data."""
    raise typer.Exit(code=get_dispatcher(ctx).run("save", volume, image))


@app.command("load")
def cmd_load(
    ctx: typer.Context,
    image: Optional[str] = typer.Argument(None, metavar="IMAGE", help="Image created by save."),
    volume: Optional[str] = typer.Argument(None, metavar="VOLUME", help="Target volume (created if missing)."),
):
    """Copy /volume-data from an image into a volume."""
    raise typer.Exit(code=get_dispatcher(ctx).run("load", image, volume))


# -------------------------
# Diagnostics
# -------------------------

@app.command("version")
def cmd_version():
    """Show vackup version."""
    typer.echo(f"vackup {VERSION}")


@app.command("check")
def cmd_check(
    ctx: typer.Context,
    path: Path = typer.Argument(Path("."), help="Directory whose free space is reported."),
):
    """Check that Docker is reachable and report free disk space."""
    cfg = get_config(ctx)

    docker_path = SystemUtils.find_docker(cfg.docker_binary)
    daemon_ok = bool(docker_path) and SystemUtils.check_docker(cfg.docker_binary)
    free_gb = SystemUtils.get_available_disk_space(str(path))

    table = create_status_table("vackup check")
    table.add_row("Docker CLI", docker_path or "not found")
    table.add_row("Docker daemon", "reachable" if daemon_ok else "not reachable")
    table.add_row("Helper image", cfg.helper_image)
    table.add_row("Free space", f"{free_gb:.2f} GB ({path.resolve()})")
    table.add_row("Failure script", str(cfg.failure_script) if cfg.failure_script else "-")
    console.print(table)

    if not daemon_ok:
        raise typer.Exit(code=get_reporter(ctx).report(EngineError("Docker daemon not reachable")))


def cli_main():
    """
    Entry point for CLI

    This function is called by the console script entry point.
    """
    try:
        app()
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(EXIT_FAILURE)
    except Exception as e:
        print_error(str(e))
        if log_manager.level == "DEBUG":
            raise
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    cli_main()
