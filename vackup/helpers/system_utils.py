################################################################################
# VACKUP
#
# @file:        system_utils.py
# @module:      vackup.helpers.system_utils
# @description: Docker availability and host disk space checks.
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
################################################################################

"""
System utilities module for vackup.

Used by the ``check`` command to tell the user whether the Docker CLI and
daemon are reachable and how much room a backup directory has left.
"""

import shutil
import subprocess
from typing import Optional

import psutil

from ..constants import DEFAULT_DOCKER_BINARY
from .logging import get_logger

logger = get_logger(__name__)


class SystemUtils:
    """System checks used before running volume operations."""

    @staticmethod
    def find_docker(docker_binary: str = DEFAULT_DOCKER_BINARY) -> Optional[str]:
        """
        Locate the Docker CLI.

        Returns:
            Absolute path of the executable, or None
        """
        return shutil.which(docker_binary)

    @staticmethod
    def check_docker(docker_binary: str = DEFAULT_DOCKER_BINARY) -> bool:
        """
        Check if the Docker daemon answers.

        Returns:
            True if `docker version` succeeds
        """
        try:
            result = subprocess.run(
                [docker_binary, 'version'],
                capture_output=True,
                text=True,
                timeout=5
            )
            return result.returncode == 0
        except (FileNotFoundError, subprocess.TimeoutExpired):
            return False

    @staticmethod
    def get_available_disk_space(path: str = '.') -> float:
        """
        Get available disk space in gigabytes.

        Args:
            path: Path to check disk space for

        Returns:
            Available disk space in GB (0.0 if it cannot be determined)
        """
        try:
            usage = psutil.disk_usage(path)
            return usage.free / (1024 ** 3)
        except OSError as e:
            logger.error(f"Failed to get disk space for {path}: {e}")
            return 0.0
