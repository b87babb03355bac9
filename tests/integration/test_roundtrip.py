"""
Round-trip tests against a real Docker daemon.

Skipped when `docker` is missing or the daemon does not answer.
"""

import subprocess
import uuid

import pytest

from vackup.cli.main import app
from vackup.helpers.system_utils import SystemUtils

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(not SystemUtils.check_docker(), reason="Docker daemon not available"),
]

SEED = (
    "mkdir -p /data/sub && echo hello > /data/a.txt && "
    "echo nested > /data/sub/b.txt"
)
LIST = "cd /data && find . -type f | sort | xargs -n1 sh -c 'echo $0; cat $0'"


def docker(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(["docker", *args], capture_output=True, text=True, check=True)


def volume_listing(volume: str) -> str:
    return docker("run", "--rm", "-v", f"{volume}:/data", "busybox", "sh", "-c", LIST).stdout


@pytest.fixture
def volumes():
    """Yield a factory of unique volume names; removes them afterwards."""
    created = []

    def _name() -> str:
        name = f"vackup-test-{uuid.uuid4().hex[:8]}"
        created.append(name)
        return name

    yield _name

    for name in created:
        subprocess.run(["docker", "volume", "rm", "-f", name], capture_output=True)


@pytest.fixture
def source_volume(volumes):
    name = volumes()
    docker("volume", "create", name)
    docker("run", "--rm", "-v", f"{name}:/data", "busybox", "sh", "-c", SEED)
    return name


def test_export_import_roundtrip(cli_runner, volumes, source_volume, tmp_path):
    target = volumes()
    archive = tmp_path / "backup.tar.gz"

    exported = cli_runner.invoke(app, ["export", source_volume, str(archive)])
    assert exported.exit_code == 0, exported.output
    assert archive.is_file()

    imported = cli_runner.invoke(app, ["import", str(archive), target])
    assert imported.exit_code == 0, imported.output

    assert volume_listing(target) == volume_listing(source_volume)


def test_save_load_roundtrip(cli_runner, volumes, source_volume):
    target = volumes()
    image = f"vackup-test-image:{uuid.uuid4().hex[:8]}"

    try:
        saved = cli_runner.invoke(app, ["save", source_volume, image])
        assert saved.exit_code == 0, saved.output

        loaded = cli_runner.invoke(app, ["load", image, target])
        assert loaded.exit_code == 0, loaded.output

        assert volume_listing(target) == volume_listing(source_volume)
    finally:
        subprocess.run(["docker", "image", "rm", "-f", image], capture_output=True)


def test_export_missing_volume_writes_nothing(cli_runner, tmp_path):
    archive = tmp_path / "never.tar.gz"

    result = cli_runner.invoke(app, ["export", f"vackup-missing-{uuid.uuid4().hex[:8]}", str(archive)])

    assert result.exit_code == 1
    assert not archive.exists()
