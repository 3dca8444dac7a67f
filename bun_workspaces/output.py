"""Plain-text and JSON renderings used by the CLI commands."""

from __future__ import annotations

import json
from typing import Any

from bun_workspaces.models.workspace import Workspace


def workspace_info_lines(workspace: Workspace) -> list[str]:
    return [
        f"Workspace: {workspace.name}",
        f" - Path: {workspace.path}",
        f" - Glob Match: {workspace.match_pattern}",
        f" - Scripts: {', '.join(sorted(workspace.script_names))}",
    ]


def script_info_lines(script_name: str, workspaces: list[Workspace]) -> list[str]:
    return [f"Script: {script_name}", *(f" - {workspace.name}" for workspace in workspaces)]


def json_lines(data: Any, *, pretty: bool = False) -> list[str]:
    """Serialize *data* to JSON split into lines (compact unless *pretty*)."""
    if pretty:
        text = json.dumps(data, indent=2, ensure_ascii=False)
    else:
        text = json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    return text.split("\n")
