"""Error taxonomy.

Every failure raised by manifest resolution, workspace discovery and the
project index is a ``BunWorkspacesError`` subclass tagged with an
``ErrorKind``.  Lookup failures are also ``LookupError``; validation failures
are also ``ValueError``.  Callers can catch either the specific class, the
builtin family, or the base class and branch on ``kind``.

Script execution failures are *not* exceptions; they are captured in
``CommandResult`` by the orchestrator.
"""

from __future__ import annotations

from typing import Any, ClassVar

from bun_workspaces.models.enums import ErrorKind


class BunWorkspacesError(Exception):
    """Base class for all bun-workspaces errors."""

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Manifest / discovery
# ---------------------------------------------------------------------------


class PackageNotFoundError(BunWorkspacesError, LookupError):
    """The project root has no package.json."""

    kind = ErrorKind.PACKAGE_NOT_FOUND


class InvalidPackageJsonError(BunWorkspacesError, ValueError):
    """A package.json could not be read, parsed, or is not a JSON object."""

    kind = ErrorKind.INVALID_PACKAGE_JSON


class NoWorkspaceNameError(BunWorkspacesError, ValueError):
    """A workspace package.json has no usable ``name``."""

    kind = ErrorKind.NO_WORKSPACE_NAME


class InvalidWorkspaceNameError(BunWorkspacesError, ValueError):
    """A workspace name contains the wildcard character."""

    kind = ErrorKind.INVALID_WORKSPACE_NAME


class DuplicateWorkspaceNameError(BunWorkspacesError, ValueError):
    """Two workspaces at different paths declare the same name."""

    kind = ErrorKind.DUPLICATE_WORKSPACE_NAME


class InvalidWorkspacesError(BunWorkspacesError, ValueError):
    """The ``workspaces`` field is present but not a list."""

    kind = ErrorKind.INVALID_WORKSPACES


class InvalidWorkspacePatternError(BunWorkspacesError, ValueError):
    """A workspace glob is not a string or resolves outside the root."""

    kind = ErrorKind.INVALID_WORKSPACE_PATTERN


class InvalidScriptsError(BunWorkspacesError, ValueError):
    """The ``scripts`` field is not an object of strings."""

    kind = ErrorKind.INVALID_SCRIPTS


# ---------------------------------------------------------------------------
# Project
# ---------------------------------------------------------------------------


class ProjectWorkspaceNotFoundError(BunWorkspacesError, LookupError):
    """No workspace with the requested name exists in the project."""

    kind = ErrorKind.PROJECT_WORKSPACE_NOT_FOUND

    def __init__(self, workspace_name: str) -> None:
        super().__init__(f"Workspace not found: {workspace_name!r}", workspace_name=workspace_name)


class WorkspaceScriptDoesNotExistError(BunWorkspacesError, LookupError):
    """The workspace exists but does not declare the requested script."""

    kind = ErrorKind.WORKSPACE_SCRIPT_DOES_NOT_EXIST

    def __init__(self, workspace_name: str, script_name: str, available: list[str]) -> None:
        super().__init__(
            f"Script not found in workspace {workspace_name!r}: {script_name!r} "
            f"(available: {', '.join(available) or 'none'})",
            workspace_name=workspace_name,
            script_name=script_name,
            available=available,
        )


class InvalidScriptArgsError(BunWorkspacesError, ValueError):
    """Extra script arguments cannot be split into an argument vector."""

    kind = ErrorKind.INVALID_SCRIPT_ARGS

    def __init__(self, script_args: str, reason: str) -> None:
        super().__init__(f"Invalid script arguments {script_args!r}: {reason}", script_args=script_args)
