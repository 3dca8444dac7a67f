"""Shared enumerations used across bun-workspaces."""

from __future__ import annotations

from enum import StrEnum

# -- Errors ------------------------------------------------------------------


class ErrorKind(StrEnum):
    """Distinguishable failure kinds raised by discovery and the project index."""

    # Manifest / discovery
    PACKAGE_NOT_FOUND = "PackageNotFound"
    INVALID_PACKAGE_JSON = "InvalidPackageJson"
    NO_WORKSPACE_NAME = "NoWorkspaceName"
    INVALID_WORKSPACE_NAME = "InvalidWorkspaceName"
    DUPLICATE_WORKSPACE_NAME = "DuplicateWorkspaceName"
    INVALID_WORKSPACES = "InvalidWorkspaces"
    INVALID_WORKSPACE_PATTERN = "InvalidWorkspacePattern"
    INVALID_SCRIPTS = "InvalidScripts"

    # Project
    PROJECT_WORKSPACE_NOT_FOUND = "ProjectWorkspaceNotFound"
    WORKSPACE_SCRIPT_DOES_NOT_EXIST = "WorkspaceScriptDoesNotExist"
    INVALID_SCRIPT_ARGS = "InvalidScriptArgs"


# -- Manifest ----------------------------------------------------------------


class ManifestField(StrEnum):
    """Top-level package.json fields that can be validated on request."""

    NAME = "name"
    WORKSPACES = "workspaces"
    SCRIPTS = "scripts"


# -- Script commands ---------------------------------------------------------


class ScriptCommandMethod(StrEnum):
    """How a workspace script is invoked.

    ``cd`` runs the script from inside the workspace directory; ``filter``
    runs it from the project root and targets the workspace by name.
    """

    CD = "cd"
    FILTER = "filter"


# -- Logging -----------------------------------------------------------------


class LogLevel(StrEnum):
    """Log levels accepted by ``--log-level``."""

    SILENT = "silent"
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"
