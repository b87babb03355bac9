################################################################################
# VACKUP
#
# @file:        dispatcher.py
# @module:      vackup.cores.dispatcher
# @description: Run one operation and map its outcome to a result and exit code.
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
################################################################################

"""Command dispatch from operation name to handler."""

from typing import Callable, Dict, Optional

from ..constants import EXIT_OK
from ..errors import UsageError, VackupError
from ..helpers.logging import get_logger
from ..helpers.ui_utils import print_success
from ..types import OperationResult
from .failure_reporter import FailureReporter
from .volume_manager import VolumeManager

logger = get_logger(__name__)


class CommandDispatcher:
    """
    Dispatch commands to VolumeManager handlers.

    Args:
        manager: Volume operation handlers
        reporter: Failure reporter (no hook when omitted)
    """

    def __init__(self, manager: VolumeManager, reporter: Optional[FailureReporter] = None):
        self.manager = manager
        self.reporter = reporter or FailureReporter()
        self.handlers: Dict[str, Callable[[str, str], str]] = {
            "export": manager.export_volume,
            "import": manager.import_volume,
            "save": manager.save_volume,
            "load": manager.load_volume,
        }

    def dispatch(self, command: str, first: Optional[str], second: Optional[str]) -> OperationResult:
        """
        Run a command handler and capture its outcome.

        Returns:
            OperationResult; failures carry the raised VackupError
        """
        handler = self.handlers.get(command)
        if handler is None:
            return OperationResult.failed(command, UsageError(f"Unknown command: {command}"))

        logger.debug(f"Dispatching {command} {first!r} {second!r}")
        try:
            message = handler(first or "", second or "")
        except VackupError as e:
            return OperationResult.failed(command, e)
        return OperationResult(command=command, message=message)

    def run(self, command: str, first: Optional[str], second: Optional[str]) -> int:
        """
        Dispatch a command and report its outcome.

        Returns:
            Process exit code
        """
        result = self.dispatch(command, first, second)
        if result.success:
            print_success(result.message)
            return EXIT_OK
        return self.reporter.report(result.error)
