"""Script execution.

- **runner**: run a batch of script commands sequentially or in parallel and
  collect per-workspace results.
"""

from bun_workspaces.execution.runner import CommandResult, RunSummary, run_command, run_commands

__all__ = [
    "CommandResult",
    "RunSummary",
    "run_command",
    "run_commands",
]
