"""Workspace data models.

A workspace is a sub-package of a Bun monorepo: a directory with its own
``package.json`` matched by one of the root ``workspaces`` globs.

JSON output uses camelCase keys, as package.json tooling does
(``matchPattern``, ``packageJson``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PackageJson(BaseModel):
    """Resolved package.json content.

    Only ``name``, ``workspaces`` and ``scripts`` are modelled; every other
    top-level field is kept as an extra and passed through untouched.

    The three slots hold validated values (``str``, ``list[str]``,
    ``dict[str, str]``) only when the resolver was asked to validate them.
    Otherwise they carry whatever the file had, such as the object form of
    a nested ``workspaces`` declaration, so they are typed ``Any``.
    """

    model_config = ConfigDict(extra="allow")

    name: Any = ""
    workspaces: Any = Field(default_factory=list)
    scripts: Any = Field(default_factory=dict)


class Workspace(BaseModel):
    """One discovered workspace.  Immutable after discovery."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    name: str
    path: str = Field(description="POSIX path of the workspace directory, relative to the project root")
    match_pattern: str = Field(description="Root ``workspaces`` glob this workspace was matched from")
    package_json: PackageJson

    @property
    def script_names(self) -> list[str]:
        return list(self.package_json.scripts)

    def has_script(self, script_name: str) -> bool:
        """True if the workspace declares a non-empty script with this exact name."""
        return bool(self.package_json.scripts.get(script_name))

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class ScriptMetadata:
    """A script name together with every workspace that declares it."""

    name: str
    workspaces: list[Workspace] = field(default_factory=list)

    @property
    def workspace_names(self) -> list[str]:
        return [workspace.name for workspace in self.workspaces]
