"""
Shared pytest fixtures for vackup tests.

Provides a CLI runner, a scripted stand-in for the docker CLI and a failure
hook script that records its arguments.
"""

import stat
import subprocess
from pathlib import Path
from typing import Iterable, List
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from vackup.helpers.config import VackupConfig
from vackup.helpers.ui_utils import SubprocessError


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without external dependencies")
    config.addinivalue_line("markers", "integration: tests requiring a running Docker daemon")


class FakeDocker:
    """
    Scripted replacement for run_command in vackup.cores.docker_engine.

    Args:
        volumes: Names for which `docker volume inspect` succeeds
        fail_on: Docker subcommands (e.g. "run", "commit") that exit non-zero
        container_id: Id printed by `docker create`
    """

    def __init__(self, volumes: Iterable[str] = (), fail_on: Iterable[str] = (), container_id: str = "abc123"):
        self.volumes = set(volumes)
        self.fail_on = set(fail_on)
        self.container_id = container_id
        self.calls: List[List[str]] = []

    def __call__(self, cmd, description="", check=True):
        self.calls.append(list(cmd))
        args = cmd[1:]

        if args[:2] == ["volume", "inspect"]:
            rc = 0 if args[2] in self.volumes else 1
            return subprocess.CompletedProcess(cmd, rc, stdout="", stderr="" if rc == 0 else "no such volume")

        subcommand = args[1] if args[0] in ("volume", "container") else args[0]
        if subcommand in self.fail_on:
            raise SubprocessError(cmd, 1, stderr=f"{subcommand} failed")

        if args[:2] == ["volume", "create"]:
            self.volumes.add(args[2])
        if args[0] == "create":
            return subprocess.CompletedProcess(cmd, 0, stdout=f"{self.container_id}\n", stderr="")
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    def subcommands(self) -> List[str]:
        """Docker subcommands in call order, e.g. ['volume inspect', 'run']."""
        out = []
        for cmd in self.calls:
            args = cmd[1:]
            out.append(" ".join(args[:2]) if args[0] in ("volume", "container") else args[0])
        return out


@pytest.fixture
def cli_runner():
    """Typer CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def config():
    """Default configuration (no failure hook, busybox helper)."""
    return VackupConfig()


@pytest.fixture
def fake_docker():
    """
    Patch docker invocations with a FakeDocker.

    Usage:
        def test_something(fake_docker):
            docker = fake_docker(volumes=["data"])
    """
    patchers = []

    def _install(**kwargs) -> FakeDocker:
        docker = FakeDocker(**kwargs)
        p = patch("vackup.cores.docker_engine.run_command", side_effect=docker)
        p.start()
        patchers.append(p)
        return docker

    yield _install

    for p in patchers:
        p.stop()


@pytest.fixture
def hook_script(tmp_path):
    """Executable failure script appending its arguments to a record file."""
    record = tmp_path / "hook-calls.txt"
    script = tmp_path / "on-failure.sh"
    script.write_text(f'#!/bin/sh\necho "$1 $2" >> "{record}"\n')
    script.chmod(script.stat().st_mode | stat.S_IEXEC)
    return script, record


@pytest.fixture
def tarball(tmp_path) -> Path:
    """An (empty, never inspected) tarball file on disk."""
    path = tmp_path / "backup.tar.gz"
    path.write_bytes(b"\x1f\x8b")
    return path
