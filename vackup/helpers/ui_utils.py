################################################################################
# VACKUP
#
# @file:        ui_utils.py
# @module:      vackup.helpers.ui_utils
# @description: Rich console output helpers and the subprocess runner.
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
################################################################################

"""
CLI output and process helpers.

Success lines go to stdout; warnings, errors and informational notes go to
stderr so that stdout stays clean for scripting.
"""

import subprocess
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .logging import get_logger

logger = get_logger(__name__)

console = Console(highlight=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)


class SubprocessError(Exception):
    """
    Raised when an external command exits non-zero.

    Args:
        cmd: Argument list that was executed
        returncode: Exit status of the process
        stdout: Captured standard output
        stderr: Captured standard error
    """

    def __init__(self, cmd: List[str], returncode: int, stdout: str = "", stderr: str = ""):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stdout = stdout or ""
        self.stderr = stderr or ""
        super().__init__(
            f"Command '{' '.join(self.cmd)}' failed with exit code {returncode}"
            + (f": {self.stderr.strip()}" if self.stderr.strip() else "")
        )


def run_command(
    cmd: List[str],
    description: str = "",
    check: bool = True,
) -> subprocess.CompletedProcess:
    """
    Run an external command and capture its output.

    No timeout is applied; the call blocks until the process exits.

    Args:
        cmd: Argument list (no shell)
        description: Short label used in log messages
        check: Raise SubprocessError on a non-zero exit status

    Returns:
        CompletedProcess with text stdout/stderr

    Raises:
        SubprocessError: If the command fails (or cannot be started) and check is set
    """
    label = description or cmd[0]
    logger.debug(f"{label}: {' '.join(cmd)}")
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as e:
        logger.debug(f"{label}: cannot execute {cmd[0]}: {e}")
        raise SubprocessError(cmd, 127, stderr=str(e)) from e

    if result.returncode != 0:
        logger.debug(f"{label}: exit {result.returncode}: {(result.stderr or '').strip()}")
        if check:
            raise SubprocessError(cmd, result.returncode, result.stdout, result.stderr)
    return result


def print_success(message: str):
    """Print success message with green checkmark"""
    console.print(f"[green]✓[/green] {escape(message)}")


def print_error(message: str):
    """Print error message to stderr"""
    err_console.print(f"[red]Error:[/red] {escape(message)}")


def print_warning(message: str):
    """Print warning message to stderr"""
    err_console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def print_info(message: str):
    """Print info message with cyan arrow"""
    err_console.print(f"[cyan]→[/cyan] {escape(message)}")


def print_usage(usage: str, stderr: bool = True):
    """Print a ``Usage:`` line"""
    target = err_console if stderr else console
    target.print(f"Usage: {escape(usage)}")


def create_status_table(title: Optional[str] = None) -> Table:
    """
    Create a pre-configured status table (Property | Value format).

    Args:
        title: Optional table title

    Returns:
        Configured Rich Table
    """
    table = Table(title=title, box=box.SIMPLE, show_header=False)
    table.add_column("Property", style="cyan", width=20)
    table.add_column("Value", style="white")
    return table
