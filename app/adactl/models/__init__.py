"""Data models for adactl.

This module exports the core data structures used throughout the application.
"""

from adactl.models.dependencies import DependencyVersions
from adactl.models.node_config import NodeConfig
from adactl.models.status import NodeStatus

__all__ = [
    "DependencyVersions",
    "NodeConfig",
    "NodeStatus",
]
