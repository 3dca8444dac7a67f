"""Project index.

A ``Project`` is the root package plus its discovered workspaces.  The
workspace list is read once at construction and never mutated; every query
below is a pure read over it and preserves its (name, path) ordering.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from bun_workspaces.errors import ProjectWorkspaceNotFoundError, WorkspaceScriptDoesNotExistError
from bun_workspaces.models.enums import ScriptCommandMethod
from bun_workspaces.models.workspace import ScriptMetadata, Workspace
from bun_workspaces.project.script_command import (
    DEFAULT_RUNNER,
    ScriptCommand,
    ScriptCommandOptions,
    create_script_command,
)
from bun_workspaces.wildcard import create_wildcard_regex
from bun_workspaces.workspaces.discovery import find_workspaces_from_package


@dataclass(frozen=True)
class ProjectScriptCommand:
    """A script command bound to the workspace and script it runs."""

    command: ScriptCommand
    script_name: str
    workspace: Workspace


class Project:
    """Read-only index over the workspaces of one Bun monorepo.

    Discovery runs eagerly in the constructor, so any manifest error
    surfaces here and no partial project is ever returned.
    """

    def __init__(self, root_dir: str | Path, *, runner: str = DEFAULT_RUNNER) -> None:
        self.root_dir = Path(root_dir).resolve()
        self.runner = runner

        discovered = find_workspaces_from_package(self.root_dir)
        self.name = discovered.name
        self._workspaces = tuple(discovered.workspaces)

        logger.debug(
            "Project: {!r} ({} workspace{})",
            self.name,
            len(self._workspaces),
            "" if len(self._workspaces) == 1 else "s",
        )
        logger.debug("Project root: {}", self.root_dir)

    @property
    def workspaces(self) -> list[Workspace]:
        return list(self._workspaces)

    # -- Workspace lookup ------------------------------------------------------

    def find_workspace_by_name(self, workspace_name: str) -> Workspace | None:
        for workspace in self._workspaces:
            if workspace.name == workspace_name:
                return workspace
        return None

    def find_workspaces_by_pattern(self, pattern: str) -> list[Workspace]:
        """Return workspaces whose name matches a ``*`` wildcard pattern.

        An empty pattern matches nothing.
        """
        if not pattern:
            return []
        regex = create_wildcard_regex(pattern)
        return [ws for ws in self._workspaces if regex.fullmatch(ws.name)]

    # -- Scripts ---------------------------------------------------------------

    def list_workspaces_with_script(self, script_name: str) -> list[Workspace]:
        return [ws for ws in self._workspaces if ws.has_script(script_name)]

    def list_scripts_with_workspaces(self) -> dict[str, ScriptMetadata]:
        """Map every script name (sorted) to the workspaces declaring it."""
        script_names = {name for ws in self._workspaces for name in ws.package_json.scripts}
        return {
            name: ScriptMetadata(name=name, workspaces=self.list_workspaces_with_script(name))
            for name in sorted(script_names)
        }

    def create_script_command(
        self,
        *,
        script_name: str,
        workspace_name: str,
        method: ScriptCommandMethod | str = ScriptCommandMethod.CD,
        args: str = "",
    ) -> ProjectScriptCommand:
        """Build the command for running *script_name* in one workspace.

        Raises
        ------
        ProjectWorkspaceNotFoundError:
            No workspace is named *workspace_name*.
        WorkspaceScriptDoesNotExistError:
            The workspace does not declare *script_name*.
        InvalidScriptArgsError:
            *args* has an unbalanced quote or a trailing escape.
        """
        workspace = self.find_workspace_by_name(workspace_name)
        if workspace is None:
            raise ProjectWorkspaceNotFoundError(workspace_name)

        if not workspace.has_script(script_name):
            raise WorkspaceScriptDoesNotExistError(workspace.name, script_name, workspace.script_names)

        command = create_script_command(
            ScriptCommandOptions(
                script_name=script_name,
                workspace=workspace,
                root_dir=self.root_dir,
                method=ScriptCommandMethod(method),
                args=args,
                runner=self.runner,
            )
        )
        return ProjectScriptCommand(command=command, script_name=script_name, workspace=workspace)


def create_project(root_dir: str | Path, *, runner: str = DEFAULT_RUNNER) -> Project:
    """Discover the project rooted at *root_dir*."""
    return Project(root_dir, runner=runner)
