################################################################################
# VACKUP
#
# @file:        errors.py
# @module:      vackup.errors
# @description: Exception hierarchy for usage, precondition and engine failures.
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
################################################################################

"""Application exceptions."""

from __future__ import annotations

from typing import List, Optional

from .constants import EXIT_FAILURE


class VackupError(Exception):
    """
    Base error for every vackup failure.

    Args:
        message: One-line, user-facing description
        exit_code: Process exit code to terminate with
        line: Explicit line number reported to the failure hook; when
            omitted the line where the error was raised is used
    """

    def __init__(self, message: str, exit_code: int = EXIT_FAILURE, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code
        self._line = line

    @property
    def line(self) -> int:
        """Line number of the failure (explicit, or innermost raising frame)."""
        if self._line is not None:
            return self._line
        tb = self.__traceback__
        if tb is None:
            return 0
        while tb.tb_next is not None:
            tb = tb.tb_next
        return tb.tb_lineno

    def __str__(self) -> str:
        return self.message


class UsageError(VackupError):
    """Raised when a command is missing required arguments."""

    def __init__(self, message: str, usage: str = "", **kwargs):
        super().__init__(message, **kwargs)
        self.usage = usage


class PreconditionError(VackupError):
    """Raised when a referenced volume or file is not in the required state."""


class EngineError(VackupError):
    """Raised when a docker invocation fails."""

    def __init__(
        self,
        message: str,
        cmd: Optional[List[str]] = None,
        returncode: Optional[int] = None,
        stderr: str = "",
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.cmd = cmd or []
        self.returncode = returncode
        self.stderr = stderr
