"""Core operations of vackup."""

from .dispatcher import CommandDispatcher
from .docker_engine import DockerEngine
from .failure_reporter import FailureHook, FailureReporter, ScriptFailureHook
from .volume_manager import VolumeManager

__all__ = [
    'CommandDispatcher',
    'DockerEngine',
    'FailureHook',
    'FailureReporter',
    'ScriptFailureHook',
    'VolumeManager',
]
