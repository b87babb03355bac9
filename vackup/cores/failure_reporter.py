################################################################################
# VACKUP
#
# @file:        failure_reporter.py
# @module:      vackup.cores.failure_reporter
# @description: Single failure path: error line, optional hook, exit code.
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
################################################################################

"""
Failure reporting.

Every failed operation ends in :meth:`FailureReporter.report`, which prints
the ``Error:`` line (plus the usage line for usage errors), notifies the
configured failure hook with the line number and exit code, and returns the
exit code for the process.
"""

import os
import subprocess
from pathlib import Path
from typing import Callable, Optional, Union

from ..constants import EXIT_FAILURE
from ..errors import UsageError, VackupError
from ..helpers.config import VackupConfig
from ..helpers.logging import get_logger
from ..helpers.ui_utils import print_error, print_usage

logger = get_logger(__name__)

# Called as hook(line_number, exit_code); the return value is ignored.
FailureHook = Callable[[int, int], object]


class ScriptFailureHook:
    """
    Failure hook running an external executable as ``script LINE EXIT_CODE``.

    Args:
        script: Path to the executable
    """

    def __init__(self, script: Union[str, Path]):
        self.script = Path(script).expanduser()

    def __call__(self, line: int, exit_code: int) -> bool:
        """
        Run the script synchronously.

        Returns:
            True if the script ran and exited 0, False otherwise
        """
        if not self.script.exists():
            logger.error(f"Failure script not found: {self.script}")
            return False
        if not os.access(self.script, os.X_OK):
            logger.error(f"Failure script not executable: {self.script}")
            return False

        cmd = [str(self.script), str(line), str(exit_code)]
        logger.debug(f"Running failure script: {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            logger.error(f"Failed to run failure script {self.script}: {e}")
            return False

        if result.returncode != 0:
            logger.warning(
                f"Failure script exited with {result.returncode}: {(result.stderr or '').strip()}"
            )
            return False
        return True

    def __repr__(self) -> str:
        return f"ScriptFailureHook({str(self.script)!r})"


class FailureReporter:
    """
    Report failures and decide the exit code.

    Args:
        hook: Optional callable notified with (line_number, exit_code)
    """

    def __init__(self, hook: Optional[FailureHook] = None):
        self.hook = hook

    @classmethod
    def from_config(cls, config: VackupConfig) -> "FailureReporter":
        hook = ScriptFailureHook(config.failure_script) if config.failure_script else None
        return cls(hook)

    def report(
        self,
        error: VackupError,
        line: Optional[int] = None,
        exit_code: Optional[int] = None,
    ) -> int:
        """
        Report a failure.

        Args:
            error: The failure to report
            line: Line number override (defaults to error.line)
            exit_code: Exit code override (defaults to error.exit_code, then 1)

        Returns:
            The exit code the process should terminate with
        """
        line = error.line if line is None else line
        code = exit_code if exit_code is not None else (error.exit_code or EXIT_FAILURE)

        print_error(error.message)
        if isinstance(error, UsageError) and error.usage:
            print_usage(error.usage)
        logger.debug(f"Failure at line {line}, exit code {code}: {error.message}")

        if self.hook is not None:
            self.hook(line, code)

        return code
