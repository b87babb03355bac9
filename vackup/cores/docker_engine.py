################################################################################
# VACKUP
#
# @file:        docker_engine.py
# @module:      vackup.cores.docker_engine
# @description: Thin adapter building and running docker CLI argument lists.
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
################################################################################

"""
Docker CLI adapter.

Every docker invocation made by vackup goes through :class:`DockerEngine`.
Calls are blocking and have no timeout. Failures surface as
:class:`~vackup.helpers.ui_utils.SubprocessError`; the volume manager turns
them into user-facing errors.
"""

import shlex
import subprocess
from pathlib import Path
from typing import List, Sequence, Tuple, Union

from ..constants import DEFAULT_DOCKER_BINARY, DRY_RUN_CONTAINER_ID
from ..helpers.logging import get_logger
from ..helpers.ui_utils import console, run_command

logger = get_logger(__name__)

Mount = Tuple[Union[str, Path], str]


class DockerEngine:
    """
    Run docker commands.

    Args:
        docker_binary: Docker CLI executable
        dry_run: Print mutating commands instead of executing them;
            read-only queries still run
    """

    def __init__(self, docker_binary: str = DEFAULT_DOCKER_BINARY, dry_run: bool = False):
        self.docker_binary = docker_binary
        self.dry_run = dry_run

    # --------------- Command building ---------------

    def build(self, *args: str) -> List[str]:
        """Prefix arguments with the docker executable."""
        return [self.docker_binary, *args]

    @staticmethod
    def mount_args(mounts: Sequence[Mount]) -> List[str]:
        """Turn (source, target) pairs into ``-v source:target`` arguments."""
        args: List[str] = []
        for source, target in mounts:
            args.extend(["-v", f"{source}:{target}"])
        return args

    def _execute(self, cmd: List[str], description: str) -> subprocess.CompletedProcess:
        if self.dry_run:
            console.print(f"[dry-run] {shlex.join(cmd)}", markup=False)
            stdout = DRY_RUN_CONTAINER_ID + "\n" if cmd[1:2] == ["create"] else ""
            return subprocess.CompletedProcess(cmd, 0, stdout=stdout, stderr="")
        return run_command(cmd, description)

    # --------------- Volumes ---------------

    def volume_exists(self, name: str) -> bool:
        """Return True if `docker volume inspect NAME` succeeds."""
        result = run_command(
            self.build("volume", "inspect", name),
            "volume inspect",
            check=False,
        )
        exists = result.returncode == 0
        logger.debug(f"Volume {name} exists: {exists}")
        return exists

    def create_volume(self, name: str) -> None:
        self._execute(self.build("volume", "create", name), "volume create")
        logger.info(f"Created volume {name}")

    # --------------- Containers ---------------

    def run_container(
        self,
        image: str,
        command: Sequence[str],
        mounts: Sequence[Mount] = (),
        remove: bool = True,
    ) -> subprocess.CompletedProcess:
        """
        Run a container to completion.

        Args:
            image: Image to run
            command: Command executed inside the container
            mounts: (source, target) bind or volume mounts
            remove: Pass ``--rm``
        """
        args = ["run"]
        if remove:
            args.append("--rm")
        args.extend(self.mount_args(mounts))
        args.append(image)
        args.extend(command)
        return self._execute(self.build(*args), f"run {image}")

    def create_container(self, image: str, command: Sequence[str], mounts: Sequence[Mount] = ()) -> str:
        """
        Create (but do not start) a container.

        Returns:
            The container id printed by `docker create`
        """
        args = ["create", *self.mount_args(mounts), image, *command]
        result = self._execute(self.build(*args), f"create {image}")
        container_id = result.stdout.strip().splitlines()[-1] if result.stdout.strip() else ""
        logger.debug(f"Created container {container_id}")
        return container_id

    def start_container(self, container_id: str) -> subprocess.CompletedProcess:
        """Start a created container and wait for it to exit."""
        return self._execute(self.build("start", "--attach", container_id), "start")

    def commit_container(self, container_id: str, image: str, message: str) -> subprocess.CompletedProcess:
        return self._execute(
            self.build("commit", "-m", message, container_id, image),
            "commit",
        )

    def remove_container(self, container_id: str) -> subprocess.CompletedProcess:
        return self._execute(self.build("container", "rm", container_id), "container rm")
