"""
Unit tests for DockerEngine command building and execution.
"""

import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from vackup.cores.docker_engine import DockerEngine
from vackup.helpers.ui_utils import SubprocessError, run_command


@pytest.mark.unit
class TestCommandBuilding:
    """Tests for argument list construction."""

    def test_mount_args(self):
        args = DockerEngine.mount_args([("data", "/vackup-volume"), (Path("/tmp/out"), "/vackup")])
        assert args == ["-v", "data:/vackup-volume", "-v", "/tmp/out:/vackup"]

    def test_custom_binary(self):
        assert DockerEngine("podman").build("ps") == ["podman", "ps"]

    @patch("vackup.cores.docker_engine.run_command")
    def test_run_container_with_rm(self, mock_run):
        engine = DockerEngine()

        engine.run_container("busybox", ["tar", "-zcvf", "/vackup/x.tgz", "/vackup-volume"],
                             mounts=[("data", "/vackup-volume")])

        cmd = mock_run.call_args[0][0]
        assert cmd == [
            "docker", "run", "--rm", "-v", "data:/vackup-volume",
            "busybox", "tar", "-zcvf", "/vackup/x.tgz", "/vackup-volume",
        ]

    @patch("vackup.cores.docker_engine.run_command")
    def test_run_container_without_rm(self, mock_run):
        DockerEngine().run_container("img", ["true"], remove=False)
        assert "--rm" not in mock_run.call_args[0][0]

    @patch("vackup.cores.docker_engine.run_command")
    def test_create_container_returns_id(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess([], 0, stdout="deadbeef\n", stderr="")

        container_id = DockerEngine().create_container("busybox", ["cp", "-Rp", "a", "b"],
                                                       mounts=[("v", "/mount-volume")])

        assert container_id == "deadbeef"
        assert mock_run.call_args[0][0][:2] == ["docker", "create"]

    @patch("vackup.cores.docker_engine.run_command")
    def test_start_commit_remove(self, mock_run):
        engine = DockerEngine()

        engine.start_container("c1")
        engine.commit_container("c1", "img:latest", "msg")
        engine.remove_container("c1")

        cmds = [c[0][0] for c in mock_run.call_args_list]
        assert cmds == [
            ["docker", "start", "--attach", "c1"],
            ["docker", "commit", "-m", "msg", "c1", "img:latest"],
            ["docker", "container", "rm", "c1"],
        ]


@pytest.mark.unit
class TestVolumeQueries:
    """Tests for volume existence and creation."""

    @patch("vackup.cores.docker_engine.run_command")
    def test_volume_exists(self, mock_run):
        mock_run.return_value = Mock(returncode=0)
        assert DockerEngine().volume_exists("data") is True
        mock_run.assert_called_once_with(["docker", "volume", "inspect", "data"], "volume inspect", check=False)

    @patch("vackup.cores.docker_engine.run_command")
    def test_volume_missing(self, mock_run):
        mock_run.return_value = Mock(returncode=1)
        assert DockerEngine().volume_exists("data") is False

    @patch("vackup.cores.docker_engine.run_command")
    def test_create_volume(self, mock_run):
        DockerEngine().create_volume("data")
        assert mock_run.call_args[0][0] == ["docker", "volume", "create", "data"]


@pytest.mark.unit
class TestDryRun:
    """Dry run prints mutating commands and skips them."""

    @patch("vackup.cores.docker_engine.run_command")
    def test_mutations_not_executed(self, mock_run, capsys):
        engine = DockerEngine(dry_run=True)

        engine.create_volume("data")
        engine.run_container("busybox", ["true"], mounts=[("data", "/x")])

        mock_run.assert_not_called()
        out = capsys.readouterr().out
        assert "[dry-run] docker volume create data" in out
        assert "[dry-run] docker run --rm -v data:/x busybox true" in out

    @patch("vackup.cores.docker_engine.run_command")
    def test_create_returns_placeholder_id(self, mock_run):
        assert DockerEngine(dry_run=True).create_container("busybox", ["true"]) == "dry-run"
        mock_run.assert_not_called()

    @patch("vackup.cores.docker_engine.run_command")
    def test_queries_still_run(self, mock_run):
        mock_run.return_value = Mock(returncode=0)
        assert DockerEngine(dry_run=True).volume_exists("data") is True
        mock_run.assert_called_once()


@pytest.mark.unit
class TestRunCommand:
    """Tests for the subprocess wrapper."""

    def test_success(self, mock_subprocess_run):
        mock_subprocess_run.return_value = subprocess.CompletedProcess([], 0, stdout="ok", stderr="")
        assert run_command(["docker", "ps"]).stdout == "ok"

    def test_failure_raises(self, mock_subprocess_run):
        mock_subprocess_run.return_value = subprocess.CompletedProcess([], 3, stdout="", stderr="bad")

        with pytest.raises(SubprocessError) as exc:
            run_command(["docker", "ps"])

        assert exc.value.returncode == 3
        assert exc.value.stderr == "bad"
        assert "bad" in str(exc.value)

    def test_failure_without_check(self, mock_subprocess_run):
        mock_subprocess_run.return_value = subprocess.CompletedProcess([], 1, stdout="", stderr="")
        assert run_command(["docker", "ps"], check=False).returncode == 1

    def test_missing_binary(self, mock_subprocess_run):
        mock_subprocess_run.side_effect = FileNotFoundError("docker")

        with pytest.raises(SubprocessError) as exc:
            run_command(["docker", "ps"], check=False)

        assert exc.value.returncode == 127

    def test_binary_not_executable(self, mock_subprocess_run):
        mock_subprocess_run.side_effect = PermissionError(13, "Permission denied")

        with pytest.raises(SubprocessError) as exc:
            run_command(["/opt/docker", "ps"])

        assert exc.value.returncode == 127
        assert "Permission denied" in exc.value.stderr


@pytest.fixture
def mock_subprocess_run():
    with patch("vackup.helpers.ui_utils.subprocess.run") as mock_run:
        yield mock_run
