"""Workspace discovery and package.json resolution."""

from bun_workspaces.workspaces.discovery import (
    DiscoveredProject,
    find_workspaces,
    find_workspaces_from_package,
)
from bun_workspaces.workspaces.package_json import (
    PACKAGE_JSON,
    resolve_package_json,
    resolve_package_json_path,
)

__all__ = [
    "PACKAGE_JSON",
    "DiscoveredProject",
    "find_workspaces",
    "find_workspaces_from_package",
    "resolve_package_json",
    "resolve_package_json_path",
]
