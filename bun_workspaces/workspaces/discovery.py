"""Workspace discovery.

Expands the root ``workspaces`` globs against the filesystem and builds the
validated, deduplicated, sorted list of ``Workspace`` records.

Rules, applied in pattern order:

1. Negation patterns (``!pkg``) are not supported by Bun workspaces; they are
   logged and skipped.
2. Every glob match is mapped to a package.json (the match itself, or one
   directly inside it).  Matches without one are not workspaces.
3. A workspace whose path was already accepted is skipped, so the first
   pattern to match a directory owns it.
4. A workspace whose name was already accepted at another path is an error.

The final list is sorted by name, then path.
"""

from __future__ import annotations

import glob
import os
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from bun_workspaces.errors import DuplicateWorkspaceNameError, PackageNotFoundError
from bun_workspaces.models.enums import ManifestField
from bun_workspaces.models.workspace import Workspace
from bun_workspaces.workspaces.package_json import (
    PACKAGE_JSON,
    resolve_package_json,
    resolve_package_json_path,
)


@dataclass
class DiscoveredProject:
    """Root package name plus the workspaces its globs resolved to."""

    name: str
    workspaces: list[Workspace] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _validate_pattern(pattern: str) -> bool:
    if pattern.startswith("!"):
        logger.warning("Negation patterns are not supported by Bun workspaces: {!r}", pattern)
        return False
    return True


def scan_workspace_glob(pattern: str, root_dir: Path) -> list[Path]:
    """Expand one glob relative to *root_dir*, in a stable order.

    Matches are normalized, so ``pkgs/../pkgs/a`` and ``pkgs/a`` are the same
    path.
    """
    matches = glob.glob(pattern, root_dir=root_dir, recursive=True)
    return [Path(os.path.normpath(root_dir / match)) for match in sorted(matches)]


def _accept(candidate: Workspace, accepted: list[Workspace]) -> bool:
    """Decide whether *candidate* joins the accepted set.

    Raises ``DuplicateWorkspaceNameError`` for a name clash at a new path.
    """
    if any(ws.path == candidate.path for ws in accepted):
        logger.debug(
            "Workspace at {!r} already matched; ignoring match from {!r}",
            candidate.path,
            candidate.match_pattern,
        )
        return False

    if any(ws.name == candidate.name for ws in accepted):
        msg = f"Duplicate workspace name found: {candidate.name!r}"
        raise DuplicateWorkspaceNameError(msg, name=candidate.name, path=candidate.path)

    return True


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def find_workspaces(root_dir: str | Path, workspace_globs: list[str]) -> list[Workspace]:
    """Discover the workspaces matched by *workspace_globs* under *root_dir*."""
    root_dir = Path(root_dir).resolve()
    workspaces: list[Workspace] = []

    for pattern in workspace_globs:
        if not _validate_pattern(pattern):
            continue

        for entry in scan_workspace_glob(pattern, root_dir):
            package_json_path = resolve_package_json_path(entry)
            if package_json_path is None:
                continue

            package_json = resolve_package_json(
                package_json_path,
                root_dir,
                [ManifestField.NAME, ManifestField.SCRIPTS],
            )
            candidate = Workspace(
                name=package_json.name,
                path=package_json_path.parent.relative_to(root_dir).as_posix(),
                match_pattern=pattern,
                package_json=package_json,
            )

            if _accept(candidate, workspaces):
                workspaces.append(candidate)

    workspaces.sort(key=lambda ws: (ws.name, ws.path))
    logger.debug("Found {} workspace(s) under {}", len(workspaces), root_dir)
    return workspaces


def find_workspaces_from_package(root_dir: str | Path) -> DiscoveredProject:
    """Discover workspaces from the ``workspaces`` field of the root package.json.

    Raises ``PackageNotFoundError`` if the root has no package.json.
    """
    root_dir = Path(root_dir).resolve()
    package_json_path = root_dir / PACKAGE_JSON
    if not package_json_path.is_file():
        msg = f"No package.json found at {package_json_path}"
        raise PackageNotFoundError(msg, path=str(package_json_path))

    package_json = resolve_package_json(package_json_path, root_dir, [ManifestField.WORKSPACES])

    return DiscoveredProject(
        name=package_json.name,
        workspaces=find_workspaces(root_dir, package_json.workspaces),
    )
