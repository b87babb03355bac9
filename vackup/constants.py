################################################################################
# VACKUP
#
# @file:        constants.py
# @module:      vackup.constants
# @description: Fixed names, mount points and defaults shared across vackup.
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
################################################################################

"""
Constants used throughout vackup.

The mount points and the image data directory are part of the on-disk
contract: tarballs created by ``export`` contain ``vackup-volume/...`` paths
and images created by ``save`` keep their data under ``/volume-data``.
"""

# Version information
VERSION = "1.0.0"

# Environment variables (read once into VackupConfig)
ENV_FAILURE_SCRIPT = 'VACKUP_FAILURE_SCRIPT'
ENV_HELPER_IMAGE = 'VACKUP_HELPER_IMAGE'
ENV_DOCKER_BINARY = 'VACKUP_DOCKER'
ENV_LOG_LEVEL = 'VACKUP_LOG_LEVEL'

# Docker defaults
DEFAULT_DOCKER_BINARY = 'docker'
DEFAULT_HELPER_IMAGE = 'busybox'

# Mount points inside helper containers
VOLUME_MOUNT = '/vackup-volume'
HOST_DIR_MOUNT = '/vackup'
COPY_MOUNT = '/mount-volume'
IMAGE_DATA_DIR = '/volume-data'

# Commit message template for `save`
COMMIT_MESSAGE = 'saving volume {volume} to {data_dir}'

# Container id reported by `docker create` in dry-run mode
DRY_RUN_CONTAINER_ID = 'dry-run'

# Exit codes
EXIT_OK = 0
EXIT_FAILURE = 1

# Logging
DEFAULT_LOG_LEVEL = 'WARNING'
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Usage lines per command
USAGE = {
    'export': 'vackup export VOLUME FILE',
    'import': 'vackup import FILE VOLUME',
    'save': 'vackup save VOLUME IMAGE',
    'load': 'vackup load IMAGE VOLUME',
}
