"""Script execution orchestrator.

Runs a batch of ``ProjectScriptCommand`` entries as subprocesses, either one
after another or all at once in an anyio task group.  Both strategies share
the same per-entry contract:

- the child inherits the environment and runs in the command's ``cwd``;
- exit code 0 is success, anything else (including a spawn failure) is a
  failure recorded in the entry's ``CommandResult``;
- nothing raised by one entry escapes to its siblings or the caller.

Results are stored by input position, so the summary order always matches
the input order regardless of completion order.  There is no timeout and no
cancellation: a hung child hangs the batch.
"""

from __future__ import annotations

import subprocess
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import anyio
from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from bun_workspaces.project.project import ProjectScriptCommand


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass
class CommandResult:
    """Outcome of one script run in one workspace."""

    workspace_name: str
    script_name: str
    success: bool
    exit_code: int | None = None
    error: str | None = None
    duration_ms: int = 0


@dataclass
class RunSummary:
    """Ordered per-entry results plus the aggregate outcome."""

    results: list[CommandResult] = field(default_factory=list)

    @property
    def failed(self) -> list[CommandResult]:
        return [r for r in self.results if not r.success]

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def success(self) -> bool:
        return not self.failed


# ---------------------------------------------------------------------------
# Single command
# ---------------------------------------------------------------------------


async def run_command(entry: ProjectScriptCommand, *, silent: bool = False) -> CommandResult:
    """Run one script command to completion and report how it went."""
    workspace_name = entry.workspace.name
    command = entry.command
    output = subprocess.DEVNULL if silent else None

    logger.debug(
        "Running script {} in workspace {} (cwd: {}): {}",
        entry.script_name,
        workspace_name,
        command.cwd,
        command.command,
    )

    start_time = time.monotonic()
    try:
        async with await anyio.open_process(
            command.argv,
            cwd=command.cwd,
            stdin=None,
            stdout=output,
            stderr=output,
        ) as process:
            exit_code = await process.wait()
    except Exception as exc:
        # Spawn errors (missing runner or cwd, bad argv) belong to this entry only.
        duration_ms = int((time.monotonic() - start_time) * 1000)
        logger.debug("{}:{} failed to start: {!r}", workspace_name, entry.script_name, exc)
        return CommandResult(
            workspace_name=workspace_name,
            script_name=entry.script_name,
            success=False,
            error=f"Failed to start {command.base_argv[0]!r}: {exc}",
            duration_ms=duration_ms,
        )

    duration_ms = int((time.monotonic() - start_time) * 1000)
    logger.debug("{}:{} exited with code {} after {}ms", workspace_name, entry.script_name, exit_code, duration_ms)

    return CommandResult(
        workspace_name=workspace_name,
        script_name=entry.script_name,
        success=exit_code == 0,
        exit_code=exit_code,
        error=None if exit_code == 0 else f"Script exited with code {exit_code}",
        duration_ms=duration_ms,
    )


# ---------------------------------------------------------------------------
# Batch
# ---------------------------------------------------------------------------


async def run_commands(
    commands: Sequence[ProjectScriptCommand],
    *,
    parallel: bool = False,
    silent: bool = False,
) -> RunSummary:
    """Run every command and wait for all of them to settle.

    Parameters
    ----------
    commands:
        Resolved commands, in the order results should be reported.
    parallel:
        Start every command at once instead of one after another.
    silent:
        Discard child stdout / stderr instead of inheriting them.

    Returns
    -------
    RunSummary
        One ``CommandResult`` per input entry, in input order.
    """
    results: list[CommandResult | None] = [None] * len(commands)

    async def _run_at(index: int) -> None:
        results[index] = await run_command(commands[index], silent=silent)

    if parallel:
        async with anyio.create_task_group() as tg:
            for index in range(len(commands)):
                tg.start_soon(_run_at, index)
    else:
        for index in range(len(commands)):
            await _run_at(index)

    return RunSummary(results=[r for r in results if r is not None])
