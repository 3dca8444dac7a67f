from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import ClassVar

import anyio
import click
from loguru import logger

from bun_workspaces import __version__
from bun_workspaces.errors import BunWorkspacesError
from bun_workspaces.execution.runner import run_commands
from bun_workspaces.log import is_silent, setup_logging
from bun_workspaces.models.enums import LogLevel, ScriptCommandMethod
from bun_workspaces.output import json_lines, script_info_lines, workspace_info_lines
from bun_workspaces.project.project import Project, create_project
from bun_workspaces.settings import get_settings
from bun_workspaces.wildcard import WILDCARD

WORKSPACE_PLACEHOLDER = "<workspace>"


# ---------------------------------------------------------------------------
# Shared state
# ---------------------------------------------------------------------------


def _cli_error(exc: BunWorkspacesError) -> click.ClickException:
    return click.ClickException(f"{exc.kind}: {exc}")


@dataclass
class CliState:
    """Global options, plus the project loaded on first use."""

    cwd: Path
    log_level: LogLevel
    runner: str
    _project: Project | None = field(default=None, repr=False)

    def project(self) -> Project:
        if self._project is None:
            try:
                self._project = create_project(self.cwd, runner=self.runner)
            except BunWorkspacesError as exc:
                raise _cli_error(exc) from exc
        return self._project


pass_state = click.make_pass_decorator(CliState)


def print_lines(*lines: str) -> None:
    click.echo("\n".join(lines))


class AliasedGroup(click.Group):
    """Group that also resolves short command aliases."""

    aliases: ClassVar[dict[str, str]] = {
        "ls": "list-workspaces",
        "list": "list-workspaces",
        "info": "workspace-info",
    }

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        return super().get_command(ctx, self.aliases.get(cmd_name, cmd_name))

    def resolve_command(self, ctx: click.Context, args: list[str]) -> tuple[str | None, click.Command | None, list[str]]:
        _, cmd, args = super().resolve_command(ctx, args)
        return (cmd.name if cmd else None), cmd, args


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


@click.group(cls=AliasedGroup, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-V", "--version", prog_name="bun-workspaces")
@click.option(
    "-l",
    "--log-level",
    type=click.Choice([level.value for level in LogLevel]),
    default=None,
    help="Log level (default: from BW_LOG_LEVEL or info).",
)
@click.option(
    "-d",
    "--cwd",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project root directory (default: current directory).",
)
@click.pass_context
def main(ctx: click.Context, log_level: str | None, cwd: Path | None) -> None:
    """CLI for utilities for Bun workspaces."""
    settings = get_settings()
    level = LogLevel(log_level) if log_level else settings.log_level
    setup_logging(level)

    ctx.obj = CliState(cwd=cwd or Path.cwd(), log_level=level, runner=settings.runner)


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


@main.command("list-workspaces")
@click.argument("pattern", required=False)
@click.option("--name-only", is_flag=True, help="Only show workspace names.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--pretty", is_flag=True, help="Pretty print JSON.")
@pass_state
def list_workspaces(state: CliState, pattern: str | None, name_only: bool, as_json: bool, pretty: bool) -> None:
    """List all workspaces, optionally filtered by a wildcard PATTERN."""
    logger.debug("Command: list workspaces (pattern={!r}, name_only={}, json={})", pattern, name_only, as_json)
    project = state.project()

    workspaces = project.find_workspaces_by_pattern(pattern) if pattern else project.workspaces

    lines: list[str] = []
    if as_json:
        data = [ws.name for ws in workspaces] if name_only else [ws.to_json_dict() for ws in workspaces]
        lines.extend(json_lines(data, pretty=pretty))
    else:
        for workspace in workspaces:
            lines.extend([workspace.name] if name_only else workspace_info_lines(workspace))

    print_lines(*(lines or ["No workspaces found"]))


@main.command("list-scripts")
@click.option("--name-only", is_flag=True, help="Only show script names.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--pretty", is_flag=True, help="Pretty print JSON.")
@pass_state
def list_scripts(state: CliState, name_only: bool, as_json: bool, pretty: bool) -> None:
    """List all scripts available with their workspaces."""
    logger.debug("Command: list scripts (name_only={}, json={})", name_only, as_json)
    scripts = state.project().list_scripts_with_workspaces()

    lines: list[str] = []
    if as_json:
        data = (
            list(scripts)
            if name_only
            else [{"name": meta.name, "workspaces": meta.workspace_names} for meta in scripts.values()]
        )
        lines.extend(json_lines(data, pretty=pretty))
    else:
        for meta in scripts.values():
            lines.extend([meta.name] if name_only else script_info_lines(meta.name, meta.workspaces))

    print_lines(*(lines or ["No scripts found"]))


# ---------------------------------------------------------------------------
# Info
# ---------------------------------------------------------------------------


@main.command("workspace-info")
@click.argument("workspace_name", metavar="WORKSPACE")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--pretty", is_flag=True, help="Pretty print JSON.")
@pass_state
def workspace_info(state: CliState, workspace_name: str, as_json: bool, pretty: bool) -> None:
    """Show information about a workspace."""
    logger.debug("Command: workspace info for {!r} (json={})", workspace_name, as_json)

    workspace = state.project().find_workspace_by_name(workspace_name)
    if workspace is None:
        logger.error("Workspace not found: {!r}", workspace_name)
        raise click.exceptions.Exit(1)

    print_lines(*(json_lines(workspace.to_json_dict(), pretty=pretty) if as_json else workspace_info_lines(workspace)))


@main.command("script-info")
@click.argument("script")
@click.option("--workspaces-only", is_flag=True, help="Only show the script's workspace names.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--pretty", is_flag=True, help="Pretty print JSON.")
@pass_state
def script_info(state: CliState, script: str, workspaces_only: bool, as_json: bool, pretty: bool) -> None:
    """Show information about a script."""
    logger.debug("Command: script info for {!r} (workspaces_only={}, json={})", script, workspaces_only, as_json)

    scripts = state.project().list_scripts_with_workspaces()
    meta = scripts.get(script)
    if meta is None:
        print_lines(f"Script not found: {script!r} (available: {', '.join(scripts) or 'none'})")
        raise click.exceptions.Exit(1)

    if as_json:
        data = meta.workspace_names if workspaces_only else {"name": meta.name, "workspaces": meta.workspace_names}
        print_lines(*json_lines(data, pretty=pretty))
    elif workspaces_only:
        print_lines(*meta.workspace_names)
    else:
        print_lines(*script_info_lines(meta.name, meta.workspaces))


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


def resolve_run_workspaces(project: Project, script: str, workspace_args: tuple[str, ...]) -> list[str]:
    """Turn ``run`` workspace arguments into an ordered list of names.

    Without arguments every workspace declaring *script* is used.  Arguments
    containing ``*`` expand to the matching workspaces that declare the
    script; plain names are kept as given so unknown names fail loudly later.
    """
    if not workspace_args:
        return [ws.name for ws in project.list_workspaces_with_script(script)]

    names: list[str] = []
    for arg in workspace_args:
        if WILDCARD in arg:
            names.extend(ws.name for ws in project.find_workspaces_by_pattern(arg) if ws.has_script(script))
        else:
            names.append(arg)
    return list(dict.fromkeys(names))


@main.command("run")
@click.argument("script")
@click.argument("workspace_args", metavar="[WORKSPACES]...", nargs=-1)
@click.option("--parallel", is_flag=True, help="Run the scripts in parallel.")
@click.option(
    "--args",
    "script_args",
    default="",
    help=f"Args to append to the script command ({WORKSPACE_PLACEHOLDER} is replaced by the workspace name).",
)
@click.pass_context
def run(ctx: click.Context, script: str, workspace_args: tuple[str, ...], parallel: bool, script_args: str) -> None:
    """Run SCRIPT in all workspaces that declare it, or in the given WORKSPACES."""
    state = ctx.find_object(CliState)
    logger.debug(
        "Command: run script {!r} for {} (parallel={}, args={!r})",
        script,
        ", ".join(workspace_args) if workspace_args else "all workspaces",
        parallel,
        script_args,
    )
    project = state.project()

    workspace_names = resolve_run_workspaces(project, script, workspace_args)
    if not workspace_names:
        matching = "matching " if workspace_args else ""
        msg = f"No {matching}workspaces found for script {script!r}"
        raise click.ClickException(msg)

    # Resolve everything up front so a bad name fails before anything runs.
    try:
        commands = [
            project.create_script_command(
                script_name=script,
                workspace_name=name,
                method=ScriptCommandMethod.CD,
                args=script_args.replace(WORKSPACE_PLACEHOLDER, name),
            )
            for name in workspace_names
        ]
    except BunWorkspacesError as exc:
        raise _cli_error(exc) from exc

    summary = anyio.run(partial(run_commands, commands, parallel=parallel, silent=is_silent(state.log_level)))

    for result in summary.results:
        if result.success:
            logger.info("✅ {}: {}", result.workspace_name, script)
        else:
            logger.info("❌ {}: {} ({})", result.workspace_name, script, result.error)

    total = len(summary.results)
    s = "" if total == 1 else "s"
    if not summary.success:
        logger.info("{} of {} script{} failed", summary.failed_count, total, s)
        ctx.exit(1)
    logger.info("{} script{} ran successfully", total, s)


if __name__ == "__main__":
    main()
