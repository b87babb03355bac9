################################################################################
# VACKUP
#
# @file:        paths.py
# @module:      vackup.helpers.paths
# @description: Split host file paths into a bind-mountable directory + filename.
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
################################################################################

"""Host path resolution for bind mounts."""

import os
from pathlib import Path
from typing import Union

from ..types import ResolvedPath


def resolve_file_path(path: Union[str, Path]) -> ResolvedPath:
    """
    Resolve a file path into its absolute directory and bare filename.

    The directory is made absolute and symlink-resolved so it can be passed
    to ``docker run -v DIR:...``; the filename itself is left untouched
    (the file does not have to exist yet).

    Args:
        path: Relative or absolute file path

    Returns:
        ResolvedPath(directory, filename)

    Raises:
        ValueError: If the path is empty or names no file
    """
    raw = os.fspath(path)
    if not raw:
        raise ValueError("File path cannot be empty")

    candidate = Path(raw).expanduser()
    filename = candidate.name
    if not filename or filename in (".", "..") or raw.endswith(os.sep):
        raise ValueError(f"Path does not name a file: {raw}")

    directory = candidate.parent.resolve()
    return ResolvedPath(directory=directory, filename=filename)
