"""package.json resolution and validation.

Only the fields a caller asks for are validated.  Unrequested fields are
passed through as read (with empty defaults when missing) so that, for
example, a workspace's own nested ``workspaces`` declaration never breaks
discovery of the root project.
"""

from __future__ import annotations

import json
import os
from collections.abc import Collection
from pathlib import Path
from typing import Any

from loguru import logger

from bun_workspaces.errors import (
    InvalidPackageJsonError,
    InvalidScriptsError,
    InvalidWorkspaceNameError,
    InvalidWorkspacePatternError,
    InvalidWorkspacesError,
    NoWorkspaceNameError,
)
from bun_workspaces.models.enums import ManifestField
from bun_workspaces.models.workspace import PackageJson
from bun_workspaces.wildcard import WILDCARD

PACKAGE_JSON = "package.json"


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------


def resolve_package_json_path(entry: str | Path) -> Path | None:
    """Map a glob match to the package.json it stands for.

    The match may be the package.json itself or a directory containing one.
    Returns ``None`` when the match is not a workspace.
    """
    entry = Path(entry)
    if entry.name == PACKAGE_JSON:
        return entry
    candidate = entry / PACKAGE_JSON
    if candidate.is_file():
        return candidate
    return None


# ---------------------------------------------------------------------------
# Field validators
# ---------------------------------------------------------------------------


def _validate_name(raw: dict[str, Any]) -> str:
    name = raw.get("name")
    if not isinstance(name, str):
        received = f" (received {name!r})" if name is not None else ""
        msg = f'Expected package.json to have a string "name" field{received}'
        raise NoWorkspaceNameError(msg)

    if not name.strip():
        msg = 'Expected package.json to have a non-empty "name" field'
        raise NoWorkspaceNameError(msg)

    if WILDCARD in name:
        msg = f"Package name cannot contain the character {WILDCARD!r} (workspace: {name!r})"
        raise InvalidWorkspaceNameError(msg, name=name)

    return name


def _validate_workspace_pattern(pattern: object, root_dir: Path) -> bool:
    """Return True if the pattern should be kept, False if it is blank."""
    if not isinstance(pattern, str):
        msg = f"Expected workspace pattern to be a string, got {type(pattern).__name__}"
        raise InvalidWorkspacePatternError(msg, pattern=pattern)

    if not pattern.strip():
        return False

    absolute = os.path.abspath(os.path.join(root_dir, pattern))
    if os.path.commonpath([root_dir, absolute]) != str(root_dir):
        msg = f"Cannot resolve workspace pattern outside of root directory {root_dir}: {absolute}"
        raise InvalidWorkspacePatternError(msg, pattern=pattern)

    return True


def _validate_workspaces(raw: dict[str, Any], root_dir: Path) -> list[str]:
    patterns = raw.get("workspaces")
    if patterns is None:
        return []

    if not isinstance(patterns, list):
        msg = f'Expected package.json to have an array "workspaces" field, got {type(patterns).__name__}'
        raise InvalidWorkspacesError(msg)

    return [pattern for pattern in patterns if _validate_workspace_pattern(pattern, root_dir)]


def _validate_scripts(raw: dict[str, Any]) -> dict[str, str]:
    scripts = raw.get("scripts")
    if scripts is None:
        return {}

    if not isinstance(scripts, dict):
        msg = f'Expected package.json to have an object "scripts" field, got {type(scripts).__name__}'
        raise InvalidScriptsError(msg)

    for script_name, command in scripts.items():
        if not isinstance(command, str):
            msg = (
                f"Expected workspace {raw.get('name')!r} script {script_name!r} "
                f"to be a string, got {type(command).__name__}"
            )
            raise InvalidScriptsError(msg, script_name=script_name)

    return dict(scripts)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def read_package_json(path: str | Path) -> dict[str, Any]:
    """Read and parse a package.json, requiring a JSON object at the top level.

    Raises ``InvalidPackageJsonError`` on I/O errors, malformed JSON, or a
    non-object root.
    """
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.debug("Failed to load {}: {}", path, exc)
        msg = f"Failed to read and parse package.json at {path}: {exc}"
        raise InvalidPackageJsonError(msg, path=str(path)) from exc

    if not isinstance(raw, dict):
        msg = f"Expected package.json to be an object, got {type(raw).__name__}"
        raise InvalidPackageJsonError(msg, path=str(path))

    return raw


def resolve_package_json(
    path: str | Path,
    root_dir: str | Path,
    validations: Collection[ManifestField | str] = (),
) -> PackageJson:
    """Resolve a package.json, validating only the requested fields.

    Parameters
    ----------
    path:
        The package.json file to read.
    root_dir:
        Project root.  Workspace globs must resolve inside it.
    validations:
        Which of ``name``, ``workspaces``, ``scripts`` to validate.

    Raises
    ------
    InvalidPackageJsonError, NoWorkspaceNameError, InvalidWorkspaceNameError,
    InvalidWorkspacesError, InvalidWorkspacePatternError, InvalidScriptsError
    """
    root_dir = Path(root_dir).resolve()
    requested = {ManifestField(v) for v in validations}
    raw = read_package_json(path)

    name = _validate_name(raw) if ManifestField.NAME in requested else raw.get("name") or ""
    workspaces = (
        _validate_workspaces(raw, root_dir) if ManifestField.WORKSPACES in requested else raw.get("workspaces") or []
    )
    scripts = _validate_scripts(raw) if ManifestField.SCRIPTS in requested else raw.get("scripts") or {}

    # model_construct keeps unvalidated fields and extras exactly as read.
    return PackageJson.model_construct(**{**raw, "name": name, "workspaces": workspaces, "scripts": scripts})
