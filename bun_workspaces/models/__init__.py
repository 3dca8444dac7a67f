"""Data models for bun-workspaces."""

from bun_workspaces.models.enums import (
    ErrorKind,
    LogLevel,
    ManifestField,
    ScriptCommandMethod,
)
from bun_workspaces.models.workspace import PackageJson, ScriptMetadata, Workspace

__all__ = [
    # Enums
    "ErrorKind",
    "LogLevel",
    "ManifestField",
    "ScriptCommandMethod",
    # Workspace
    "PackageJson",
    "ScriptMetadata",
    "Workspace",
]
