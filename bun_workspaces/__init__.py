"""bun-workspaces -- discover Bun monorepo workspaces and run their scripts."""

from loguru import logger

from bun_workspaces.errors import (
    BunWorkspacesError,
    DuplicateWorkspaceNameError,
    InvalidPackageJsonError,
    InvalidScriptArgsError,
    InvalidScriptsError,
    InvalidWorkspaceNameError,
    InvalidWorkspacePatternError,
    InvalidWorkspacesError,
    NoWorkspaceNameError,
    PackageNotFoundError,
    ProjectWorkspaceNotFoundError,
    WorkspaceScriptDoesNotExistError,
)
from bun_workspaces.execution import CommandResult, RunSummary, run_commands
from bun_workspaces.models import ErrorKind, PackageJson, ScriptCommandMethod, ScriptMetadata, Workspace
from bun_workspaces.project import Project, ProjectScriptCommand, ScriptCommand, create_project
from bun_workspaces.workspaces import find_workspaces, find_workspaces_from_package

__version__ = "0.1.0"

# Library default: stay quiet until the CLI calls setup_logging().
logger.disable("bun_workspaces")

__all__ = [
    "BunWorkspacesError",
    "CommandResult",
    "DuplicateWorkspaceNameError",
    "ErrorKind",
    "InvalidPackageJsonError",
    "InvalidScriptArgsError",
    "InvalidScriptsError",
    "InvalidWorkspaceNameError",
    "InvalidWorkspacePatternError",
    "InvalidWorkspacesError",
    "NoWorkspaceNameError",
    "PackageJson",
    "PackageNotFoundError",
    "Project",
    "ProjectScriptCommand",
    "ProjectWorkspaceNotFoundError",
    "RunSummary",
    "ScriptCommand",
    "ScriptCommandMethod",
    "ScriptMetadata",
    "Workspace",
    "WorkspaceScriptDoesNotExistError",
    "__version__",
    "create_project",
    "find_workspaces",
    "find_workspaces_from_package",
    "run_commands",
]
