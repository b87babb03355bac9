################################################################################
# VACKUP
#
# @file:        volume_manager.py
# @module:      vackup.cores.volume_manager
# @description: export/import/save/load handlers moving data through helper containers.
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
################################################################################

"""
Volume operations.

Each handler validates its arguments, checks (or creates) the volume and runs
a helper container that does the actual copying. Handlers return the success
line on completion and raise a :class:`~vackup.errors.VackupError` subclass
otherwise; they never exit the process.

Volume policy: ``export`` and ``save`` refuse to work on a missing volume,
``import`` and ``load`` create it.
"""

import os
from typing import Optional

from ..constants import COPY_MOUNT, HOST_DIR_MOUNT, USAGE, VOLUME_MOUNT
from ..errors import EngineError, PreconditionError, UsageError
from ..helpers.config import VackupConfig
from ..helpers.logging import get_logger
from ..helpers.paths import resolve_file_path
from ..helpers.ui_utils import SubprocessError, print_warning
from ..types import ResolvedPath
from .docker_engine import DockerEngine

logger = get_logger(__name__)


class VolumeManager:
    """
    Copy data between volumes, tarballs and images.

    Args:
        config: Runtime configuration
        engine: Docker adapter (built from the config when omitted)
    """

    def __init__(self, config: VackupConfig, engine: Optional[DockerEngine] = None):
        self.config = config
        self.engine = engine or DockerEngine(config.docker_binary, dry_run=config.dry_run)
        self.helper_image = config.helper_image

    # --------------- Validation helpers ---------------

    @staticmethod
    def _require(command: str, **arguments: Optional[str]) -> None:
        missing = [name for name, value in arguments.items() if not value]
        if missing:
            raise UsageError(
                f"Missing required argument{'s' if len(missing) > 1 else ''}: {' '.join(missing)}",
                usage=USAGE[command],
            )

    @staticmethod
    def _resolve(file: str) -> ResolvedPath:
        try:
            return resolve_file_path(file)
        except ValueError as e:
            raise PreconditionError(str(e)) from e

    def _volume_exists(self, volume: str) -> bool:
        try:
            return self.engine.volume_exists(volume)
        except SubprocessError as e:
            raise EngineError(
                f"Docker CLI not available: {self.engine.docker_binary}",
                cmd=e.cmd, returncode=e.returncode, stderr=e.stderr,
            ) from e

    def _ensure_volume(self, volume: str) -> None:
        if self._volume_exists(volume):
            return
        print_warning(f"Volume {volume} does not exist, creating...")
        try:
            self.engine.create_volume(volume)
        except SubprocessError as e:
            raise EngineError(
                f"Failed to create volume {volume}",
                cmd=e.cmd, returncode=e.returncode, stderr=e.stderr,
            ) from e

    def _require_volume(self, volume: str) -> None:
        if not self._volume_exists(volume):
            raise PreconditionError(f"Volume {volume} does not exist")

    @staticmethod
    def _engine_error(message: str, error: SubprocessError) -> EngineError:
        logger.debug(f"{message}: {error}")
        return EngineError(message, cmd=error.cmd, returncode=error.returncode, stderr=error.stderr)

    # --------------- Operations ---------------

    def export_volume(self, volume: str, file: str) -> str:
        """
        Write a gzip'ed tarball of VOLUME to FILE.

        The archive stores paths below ``vackup-volume/``. Ownership of the
        written file is handed to the invoking user afterwards, since the
        helper container runs as root.
        """
        self._require("export", VOLUME=volume, FILE=file)
        target = self._resolve(file)
        if not target.directory.is_dir():
            raise PreconditionError(f"Directory {target.directory} does not exist")
        self._require_volume(volume)

        archive = f"{HOST_DIR_MOUNT}/{target.filename}"
        logger.info(f"Exporting volume {volume} to {target.full_path}")
        try:
            self.engine.run_container(
                self.helper_image,
                ["tar", "-zcvf", archive, VOLUME_MOUNT],
                mounts=[(volume, VOLUME_MOUNT), (target.directory, HOST_DIR_MOUNT)],
            )
        except SubprocessError as e:
            raise self._engine_error(f"Failed to start {self.helper_image} backup container", e) from e

        owner = f"{os.getuid()}:{os.getgid()}"
        try:
            self.engine.run_container(
                self.helper_image,
                ["chown", owner, archive],
                mounts=[(target.directory, HOST_DIR_MOUNT)],
            )
        except SubprocessError as e:
            raise self._engine_error(f"Failed to change ownership of {file} to {owner}", e) from e

        return f"Successfully tar'ed volume {volume} into file {file}"

    def import_volume(self, file: str, volume: str) -> str:
        """Unpack a tarball made by export_volume into VOLUME (created if missing)."""
        self._require("import", FILE=file, VOLUME=volume)
        source = self._resolve(file)
        path = source.full_path
        if not path.exists():
            raise PreconditionError(f"File {file} does not exist")
        if path.is_dir():
            raise PreconditionError(f"{file} is a directory, not a tarball")
        if not os.access(path, os.R_OK):
            raise PreconditionError(f"File {file} is not readable")

        self._ensure_volume(volume)

        logger.info(f"Importing {path} into volume {volume}")
        try:
            self.engine.run_container(
                self.helper_image,
                ["tar", "-xvzf", f"{HOST_DIR_MOUNT}/{source.filename}", "-C", "/"],
                mounts=[(volume, VOLUME_MOUNT), (source.directory, HOST_DIR_MOUNT)],
            )
        except SubprocessError as e:
            raise self._engine_error(f"Failed to start {self.helper_image} container", e) from e

        return f"Successfully unpacked {file} into volume {volume}"

    def save_volume(self, volume: str, image: str) -> str:
        """
        Commit the contents of VOLUME into IMAGE under the image data directory.

        The helper container id comes straight from `docker create`, so the
        commit never picks up an unrelated container.
        """
        self._require("save", VOLUME=volume, IMAGE=image)
        self._require_volume(volume)

        data_dir = self.config.image_data_dir
        try:
            container_id = self.engine.create_container(
                self.helper_image,
                ["cp", "-Rp", f"{COPY_MOUNT}/.", f"{data_dir}/"],
                mounts=[(volume, COPY_MOUNT)],
            )
        except SubprocessError as e:
            raise self._engine_error(f"Failed to create {self.helper_image} container", e) from e
        if not container_id:
            raise EngineError(f"Failed to create {self.helper_image} container: no container id returned")

        try:
            try:
                self.engine.start_container(container_id)
            except SubprocessError as e:
                raise self._engine_error(
                    f"Failed to copy volume {volume} in {self.helper_image} container", e
                ) from e
            try:
                self.engine.commit_container(container_id, image, self.config.commit_message(volume))
            except SubprocessError as e:
                raise self._engine_error(f"Failed to commit container {container_id} to image {image}", e) from e
        finally:
            self._remove_container(container_id)

        return f"Successfully copied volume {volume} into image {image}, under {data_dir}"

    def load_volume(self, image: str, volume: str) -> str:
        """Copy the image data directory of IMAGE into VOLUME (created if missing)."""
        self._require("load", IMAGE=image, VOLUME=volume)
        self._ensure_volume(volume)

        data_dir = self.config.image_data_dir
        try:
            self.engine.run_container(
                image,
                ["cp", "-Rp", f"{data_dir}/.", f"{COPY_MOUNT}/"],
                mounts=[(volume, COPY_MOUNT)],
            )
        except SubprocessError as e:
            raise self._engine_error(f"Failed to start container from {image}", e) from e

        return f"Successfully copied {data_dir} from {image} into volume {volume}"

    def _remove_container(self, container_id: str) -> None:
        try:
            self.engine.remove_container(container_id)
        except SubprocessError as e:
            logger.debug(f"Failed to remove container {container_id}: {e}")
            print_warning(f"Failed to remove helper container {container_id}")
