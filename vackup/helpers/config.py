################################################################################
# VACKUP
#
# @file:        config.py
# @module:      vackup.helpers.config
# @description: Validated runtime configuration built from options or environment.
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
################################################################################

"""
Configuration for vackup.

Environment variables are read exactly once, when the CLI builds a
:class:`VackupConfig`; every component afterwards receives the config (or
the pieces it needs) explicitly.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from ..constants import (
    COMMIT_MESSAGE,
    DEFAULT_DOCKER_BINARY,
    DEFAULT_HELPER_IMAGE,
    DEFAULT_LOG_LEVEL,
    ENV_DOCKER_BINARY,
    ENV_FAILURE_SCRIPT,
    ENV_HELPER_IMAGE,
    ENV_LOG_LEVEL,
    IMAGE_DATA_DIR,
    LOG_LEVELS,
)


class VackupConfig(BaseModel):
    """Runtime configuration"""

    failure_script: Optional[Path] = Field(
        default=None,
        description="Executable invoked as `script LINE EXIT_CODE` on failure",
    )
    docker_binary: str = Field(
        default=DEFAULT_DOCKER_BINARY,
        description="Docker CLI executable",
    )
    helper_image: str = Field(
        default=DEFAULT_HELPER_IMAGE,
        description="Image used for helper containers (needs tar, cp, chown)",
    )
    image_data_dir: str = Field(
        default=IMAGE_DATA_DIR,
        description="Directory holding volume data inside saved images",
    )
    dry_run: bool = Field(
        default=False,
        description="Print mutating docker commands instead of running them",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        description="Log level name",
    )

    @field_validator("failure_script", mode="before")
    @classmethod
    def validate_failure_script(cls, v: Any) -> Optional[Path]:
        """Empty means unset; strings are expanded to a Path"""
        if v is None:
            return None
        if isinstance(v, str):
            if not v.strip():
                return None
            return Path(v).expanduser()
        return v

    @field_validator("docker_binary", "helper_image", "image_data_dir")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {', '.join(LOG_LEVELS)}")
        return level

    def commit_message(self, volume: str) -> str:
        """Commit message recorded on images created by `save`"""
        return COMMIT_MESSAGE.format(volume=volume, data_dir=self.image_data_dir)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> "VackupConfig":
        """
        Build a config from VACKUP_* environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)
            **overrides: Field values taking precedence over the environment

        The CLI passes its resolved options as overrides, so a command-line
        value wins over the variable it shadows.
        """
        env = os.environ if environ is None else environ
        values = {
            "failure_script": env.get(ENV_FAILURE_SCRIPT),
            "docker_binary": env.get(ENV_DOCKER_BINARY, DEFAULT_DOCKER_BINARY),
            "helper_image": env.get(ENV_HELPER_IMAGE, DEFAULT_HELPER_IMAGE),
            "log_level": env.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
