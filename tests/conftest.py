"""Shared test fixtures: on-disk Bun projects built under ``tmp_path``.

``full_project`` mirrors a typical monorepo with two application workspaces
matched by ``applications/*`` and three library workspaces (one nested)
matched by ``libraries/**/*``.  ``make_project`` builds arbitrary layouts,
including deliberately broken manifests.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from loguru import logger

from bun_workspaces.settings import _get_settings_cached

ProjectFactory = Callable[..., Path]


def write_package_json(directory: Path, content: object) -> Path:
    """Write a package.json; strings are written raw (for malformed JSON)."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "package.json"
    path.write_text(content if isinstance(content, str) else json.dumps(content), encoding="utf-8")
    return path


def _workspace_manifest(name: str, group: str) -> dict:
    return {
        "name": name,
        "scripts": {
            "all-workspaces": "echo 'script for all workspaces'",
            f"{group}-workspaces": f"echo 'script for {group} workspaces'",
            name: f"echo 'script for {name}'",
        },
    }


FULL_PROJECT_ROOT = {
    "name": "test-root",
    "workspaces": ["applications/*", "libraries/**/*"],
}

FULL_PROJECT_WORKSPACES = {
    "applications/applicationA": _workspace_manifest("application-a", "a"),
    "applications/applicationB": _workspace_manifest("application-b", "b"),
    "libraries/libraryA": _workspace_manifest("library-a", "a"),
    "libraries/libraryB": _workspace_manifest("library-b", "b"),
    "libraries/nested/libraryC": _workspace_manifest("library-c", "c"),
}


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


@pytest.fixture
def make_project(tmp_path: Path) -> ProjectFactory:
    """Return a factory ``(root_manifest, workspaces=None, name="project") -> root``."""

    def _make(root_manifest: object, workspaces: dict[str, object] | None = None, name: str = "project") -> Path:
        root = tmp_path / name
        write_package_json(root, root_manifest)
        for rel_path, manifest in (workspaces or {}).items():
            write_package_json(root / rel_path, manifest)
        return root

    return _make


@pytest.fixture
def full_project(make_project: ProjectFactory) -> Path:
    return make_project(FULL_PROJECT_ROOT, FULL_PROJECT_WORKSPACES, name="full-project")


# ---------------------------------------------------------------------------
# Logging / settings isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolate_logging_and_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop sinks added by the CLI and re-read settings for every test."""
    for key in ("BW_LOG_LEVEL", "BW_RUNNER"):
        monkeypatch.delenv(key, raising=False)
    _get_settings_cached.cache_clear()
    yield
    logger.remove()
    logger.disable("bun_workspaces")
    _get_settings_cached.cache_clear()


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Collect ``LEVEL|message`` strings emitted by the package."""
    messages: list[str] = []
    logger.enable("bun_workspaces")
    handler_id = logger.add(lambda m: messages.append(str(m).rstrip("\n")), level="DEBUG", format="{level}|{message}")
    yield messages
    logger.remove(handler_id)
