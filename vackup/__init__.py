################################################################################
# VACKUP
#
# @file:        __init__.py
# @module:      vackup
# @description: Exposes version, configuration and core operations.
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
################################################################################

"""
vackup: copy data between Docker volumes, tarballs and images.

All real work is done by helper containers started through the Docker CLI;
this package validates arguments, builds the docker commands and reports
the outcome.
"""

from .constants import VERSION

__version__ = VERSION

from .errors import EngineError, PreconditionError, UsageError, VackupError
from .types import OperationResult, ResolvedPath
from .helpers.config import VackupConfig
from .helpers.logging import get_logger, log_manager
from .cores import (
    CommandDispatcher,
    DockerEngine,
    FailureReporter,
    ScriptFailureHook,
    VolumeManager,
)

__all__ = [
    "VERSION",
    "VackupError",
    "UsageError",
    "PreconditionError",
    "EngineError",
    "OperationResult",
    "ResolvedPath",
    "VackupConfig",
    "get_logger",
    "log_manager",
    "CommandDispatcher",
    "DockerEngine",
    "FailureReporter",
    "ScriptFailureHook",
    "VolumeManager",
]
