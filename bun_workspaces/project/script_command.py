"""Script command construction.

A ``ScriptCommand`` is kept as an argv vector plus a working directory.  The
single-string form shown to users is rendered from that vector; the
orchestrator spawns the vector directly, without a shell.

Methods:

- ``cd``:     ``bun --silent run <script> [args]`` in the workspace directory
- ``filter``: ``bun --silent run --filter=<workspace> <script> [args]`` in
  the project root
"""

from __future__ import annotations

import shlex
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from bun_workspaces.errors import InvalidScriptArgsError
from bun_workspaces.models.enums import ScriptCommandMethod
from bun_workspaces.models.workspace import Workspace

DEFAULT_RUNNER = "bun"
RUNNER_FLAGS = ("--silent",)


@dataclass(frozen=True)
class ScriptCommand:
    """One concrete invocation of a workspace script."""

    base_argv: tuple[str, ...]
    cwd: Path
    args: str = ""
    """Extra arguments, trimmed; appended verbatim to the string form."""
    args_argv: tuple[str, ...] = ()
    """``args`` split shell-style, appended to the vector form."""

    @property
    def argv(self) -> list[str]:
        """Full argument vector passed to the process launcher."""
        return [*self.base_argv, *self.args_argv]

    @property
    def command(self) -> str:
        base = shlex.join(self.base_argv)
        return f"{base} {self.args}" if self.args else base


@dataclass(frozen=True)
class ScriptCommandOptions:
    """Everything needed to build a command for one workspace."""

    script_name: str
    workspace: Workspace
    root_dir: Path
    method: ScriptCommandMethod = ScriptCommandMethod.CD
    args: str = ""
    runner: str = DEFAULT_RUNNER


def _cd(options: ScriptCommandOptions) -> tuple[tuple[str, ...], Path]:
    argv = (options.runner, *RUNNER_FLAGS, "run", options.script_name)
    return argv, options.root_dir / options.workspace.path


def _filter(options: ScriptCommandOptions) -> tuple[tuple[str, ...], Path]:
    argv = (
        options.runner,
        *RUNNER_FLAGS,
        "run",
        f"--filter={options.workspace.name}",
        options.script_name,
    )
    return argv, options.root_dir


_METHODS: dict[ScriptCommandMethod, Callable[[ScriptCommandOptions], tuple[tuple[str, ...], Path]]] = {
    ScriptCommandMethod.CD: _cd,
    ScriptCommandMethod.FILTER: _filter,
}


def split_script_args(args: str) -> tuple[str, ...]:
    """Split extra script arguments the way a POSIX shell would.

    Raises ``InvalidScriptArgsError`` for unbalanced quotes or a trailing
    escape.
    """
    try:
        return tuple(shlex.split(args))
    except ValueError as exc:
        raise InvalidScriptArgsError(args, str(exc)) from exc


def create_script_command(options: ScriptCommandOptions) -> ScriptCommand:
    """Build the command that runs ``options.script_name`` for one workspace."""
    base_argv, cwd = _METHODS[ScriptCommandMethod(options.method)](options)
    args = options.args.strip()
    return ScriptCommand(base_argv=base_argv, cwd=cwd.resolve(), args=args, args_argv=split_script_args(args))
