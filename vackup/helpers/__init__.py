"""Helper modules and utilities for vackup."""

from .config import VackupConfig
from .logging import get_logger, log_manager
from .paths import resolve_file_path
from .system_utils import SystemUtils
from .ui_utils import SubprocessError, run_command

__all__ = [
    'VackupConfig',
    'get_logger',
    'log_manager',
    'resolve_file_path',
    'SystemUtils',
    'SubprocessError',
    'run_command',
]
