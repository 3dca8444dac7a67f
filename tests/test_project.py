"""Tests for the Project index and script command construction."""

from __future__ import annotations

from pathlib import Path

import pytest

from bun_workspaces.errors import (
    BunWorkspacesError,
    InvalidScriptArgsError,
    PackageNotFoundError,
    ProjectWorkspaceNotFoundError,
    WorkspaceScriptDoesNotExistError,
)
from bun_workspaces.models.enums import ErrorKind, ScriptCommandMethod
from bun_workspaces.project import Project, create_project, split_script_args
from tests.conftest import ProjectFactory


def _names(workspaces) -> list[str]:
    return [ws.name for ws in workspaces]


@pytest.fixture
def project(full_project: Path) -> Project:
    return create_project(full_project)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def test_project_properties(project: Project, full_project: Path) -> None:
    assert project.name == "test-root"
    assert project.root_dir == full_project.resolve()
    assert project.runner == "bun"
    assert _names(project.workspaces) == ["application-a", "application-b", "library-a", "library-b", "library-c"]


def test_workspaces_returns_a_copy(project: Project) -> None:
    project.workspaces.clear()
    assert len(project.workspaces) == 5


def test_relative_root_dir(full_project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(full_project.parent)
    project = Project(full_project.name)
    assert project.root_dir == full_project.resolve()
    assert project.name == "test-root"


def test_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(PackageNotFoundError):
        Project(tmp_path)


# ---------------------------------------------------------------------------
# Workspace lookup
# ---------------------------------------------------------------------------


def test_find_workspace_by_name(project: Project) -> None:
    workspace = project.find_workspace_by_name("library-c")
    assert workspace is not None
    assert workspace.path == "libraries/nested/libraryC"
    assert workspace.match_pattern == "libraries/**/*"

    assert project.find_workspace_by_name("library-*") is None
    assert project.find_workspace_by_name("not-a-workspace") is None


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        ("*", ["application-a", "application-b", "library-a", "library-b", "library-c"]),
        ("application-*", ["application-a", "application-b"]),
        ("*-b", ["application-b", "library-b"]),
        ("library-c", ["library-c"]),
        ("nope-*", []),
        ("", []),
    ],
)
def test_find_workspaces_by_pattern(project: Project, pattern: str, expected: list[str]) -> None:
    assert _names(project.find_workspaces_by_pattern(pattern)) == expected


# ---------------------------------------------------------------------------
# Scripts
# ---------------------------------------------------------------------------


def test_list_workspaces_with_script(project: Project) -> None:
    assert _names(project.list_workspaces_with_script("all-workspaces")) == [
        "application-a",
        "application-b",
        "library-a",
        "library-b",
        "library-c",
    ]
    assert _names(project.list_workspaces_with_script("a-workspaces")) == ["application-a", "library-a"]
    assert _names(project.list_workspaces_with_script("b-workspaces")) == ["application-b", "library-b"]
    assert _names(project.list_workspaces_with_script("library-c")) == ["library-c"]
    assert project.list_workspaces_with_script("not-a-script") == []


def test_empty_script_value_is_not_declared(make_project: ProjectFactory) -> None:
    root = make_project(
        {"name": "root", "workspaces": ["packages/*"]},
        {
            "packages/a": {"name": "a", "scripts": {"build": ""}},
            "packages/b": {"name": "b", "scripts": {"build": "tsc"}},
        },
    )
    project = Project(root)
    assert _names(project.list_workspaces_with_script("build")) == ["b"]


def test_list_scripts_with_workspaces(project: Project) -> None:
    scripts = project.list_scripts_with_workspaces()

    assert list(scripts) == [
        "a-workspaces",
        "all-workspaces",
        "application-a",
        "application-b",
        "b-workspaces",
        "c-workspaces",
        "library-a",
        "library-b",
        "library-c",
    ]
    assert scripts["a-workspaces"].name == "a-workspaces"
    assert scripts["a-workspaces"].workspace_names == ["application-a", "library-a"]
    assert scripts["c-workspaces"].workspace_names == ["library-c"]
    assert len(scripts["all-workspaces"].workspaces) == 5


def test_list_scripts_without_workspaces(make_project: ProjectFactory) -> None:
    project = Project(make_project({"name": "root"}))
    assert project.workspaces == []
    assert project.list_scripts_with_workspaces() == {}


# ---------------------------------------------------------------------------
# create_script_command
# ---------------------------------------------------------------------------


def test_cd_command(project: Project) -> None:
    result = project.create_script_command(script_name="all-workspaces", workspace_name="library-a")

    assert result.script_name == "all-workspaces"
    assert result.workspace.name == "library-a"
    assert result.command.command == "bun --silent run all-workspaces"
    assert result.command.argv == ["bun", "--silent", "run", "all-workspaces"]
    assert result.command.cwd == project.root_dir / "libraries" / "libraryA"


def test_filter_command(project: Project) -> None:
    result = project.create_script_command(
        script_name="all-workspaces",
        workspace_name="library-c",
        method=ScriptCommandMethod.FILTER,
    )

    assert result.command.command == "bun --silent run --filter=library-c all-workspaces"
    assert result.command.argv == ["bun", "--silent", "run", "--filter=library-c", "all-workspaces"]
    assert result.command.cwd == project.root_dir


def test_method_accepts_plain_string(project: Project) -> None:
    result = project.create_script_command(script_name="library-b", workspace_name="library-b", method="filter")
    assert result.command.cwd == project.root_dir


@pytest.mark.parametrize(
    ("args", "command", "extra_argv"),
    [
        ("--watch", "bun --silent run application-a --watch", ["--watch"]),
        (
            " --stuff --hello=there123",
            "bun --silent run application-a --stuff --hello=there123",
            ["--stuff", "--hello=there123"],
        ),
        ("--msg 'hello world'", "bun --silent run application-a --msg 'hello world'", ["--msg", "hello world"]),
        ("   ", "bun --silent run application-a", []),
    ],
)
def test_command_with_args(project: Project, args: str, command: str, extra_argv: list[str]) -> None:
    result = project.create_script_command(script_name="application-a", workspace_name="application-a", args=args)

    assert result.command.command == command
    assert result.command.argv == ["bun", "--silent", "run", "application-a", *extra_argv]


def test_filter_command_with_args(project: Project) -> None:
    result = project.create_script_command(
        script_name="b-workspaces",
        workspace_name="application-b",
        method=ScriptCommandMethod.FILTER,
        args="--watch",
    )
    assert result.command.command == "bun --silent run --filter=application-b b-workspaces --watch"


def test_custom_runner(full_project: Path) -> None:
    project = Project(full_project, runner="/opt/bun/bin/bun")
    result = project.create_script_command(script_name="library-a", workspace_name="library-a")
    assert result.command.argv[0] == "/opt/bun/bin/bun"


def test_command_for_unknown_workspace(project: Project) -> None:
    with pytest.raises(ProjectWorkspaceNotFoundError, match="'not-a-workspace'") as exc_info:
        project.create_script_command(script_name="all-workspaces", workspace_name="not-a-workspace")

    assert exc_info.value.kind == ErrorKind.PROJECT_WORKSPACE_NOT_FOUND
    assert isinstance(exc_info.value, LookupError)


def test_command_for_unknown_script(project: Project) -> None:
    with pytest.raises(WorkspaceScriptDoesNotExistError) as exc_info:
        project.create_script_command(script_name="b-workspaces", workspace_name="library-a")

    error = exc_info.value
    assert error.kind == ErrorKind.WORKSPACE_SCRIPT_DOES_NOT_EXIST
    assert error.context["available"] == ["all-workspaces", "a-workspaces", "library-a"]
    assert str(error) == (
        "Script not found in workspace 'library-a': 'b-workspaces' "
        "(available: all-workspaces, a-workspaces, library-a)"
    )


def test_command_for_workspace_without_scripts(make_project: ProjectFactory) -> None:
    project = Project(make_project({"name": "root", "workspaces": ["packages/*"]}, {"packages/a": {"name": "a"}}))

    with pytest.raises(BunWorkspacesError, match=r"\(available: none\)"):
        project.create_script_command(script_name="build", workspace_name="a")


@pytest.mark.parametrize("args", ["it's", '--msg "unterminated', "trailing\\"])
def test_command_with_unparsable_args(project: Project, args: str) -> None:
    with pytest.raises(InvalidScriptArgsError, match="Invalid script arguments") as exc_info:
        project.create_script_command(script_name="library-a", workspace_name="library-a", args=args)

    assert exc_info.value.kind == ErrorKind.INVALID_SCRIPT_ARGS
    assert isinstance(exc_info.value, ValueError)


def test_split_script_args() -> None:
    assert split_script_args("") == ()
    assert split_script_args("--a 'b c' \"d e\"") == ("--a", "b c", "d e")
    with pytest.raises(InvalidScriptArgsError):
        split_script_args("don't")
