"""Project index and script command construction."""

from bun_workspaces.project.project import Project, ProjectScriptCommand, create_project
from bun_workspaces.project.script_command import (
    DEFAULT_RUNNER,
    ScriptCommand,
    ScriptCommandOptions,
    create_script_command,
    split_script_args,
)

__all__ = [
    "DEFAULT_RUNNER",
    "Project",
    "ProjectScriptCommand",
    "ScriptCommand",
    "ScriptCommandOptions",
    "create_project",
    "create_script_command",
    "split_script_args",
]
