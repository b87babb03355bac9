################################################################################
# VACKUP
#
# @file:        types.py
# @module:      vackup.types
# @description: Value types passed between the router, handlers and reporter.
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
################################################################################

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import EXIT_OK
from .errors import VackupError


@dataclass(frozen=True)
class ResolvedPath:
    directory: Path  # absolute, symlinks resolved
    filename: str

    @property
    def full_path(self) -> Path:
        return self.directory / self.filename


@dataclass
class OperationResult:
    command: str
    success: bool = True
    message: str = ""
    exit_code: int = EXIT_OK
    error: Optional[VackupError] = None

    @classmethod
    def failed(cls, command: str, error: VackupError) -> "OperationResult":
        return cls(
            command=command,
            success=False,
            message=error.message,
            exit_code=error.exit_code,
            error=error,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "command": self.command,
            "success": self.success,
            "message": self.message,
            "exit_code": self.exit_code,
        }
