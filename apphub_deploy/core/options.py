"""Deploy options parsed from the command line."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from .result import Err, Ok, Result

__all__ = ["Target", "DeployOptions", "OptionError", "validate_target"]


class Target(StrEnum):
    """Audience of an uploaded build."""

    all = "all"
    debug = "debug"
    none = "none"


@dataclass(frozen=True, slots=True)
class OptionError:
    """Error when a command-line option has an unsupported value."""

    option: str
    value: str
    message: str


def validate_target(value: str | None) -> Result[Target | None, OptionError]:
    """Check ``--target`` against the permitted audiences.

    ``None`` or an empty string means no target was chosen.
    """
    if not value:
        return Ok(None)
    try:
        return Ok(Target(value))
    except ValueError:
        permitted = ", ".join(t.value for t in Target)
        return Err(
            OptionError(
                option="--target",
                value=value,
                message=f"-t --target option needs to be one of {permitted}.",
            )
        )


@dataclass(frozen=True, slots=True)
class DeployOptions:
    """Validated flags controlling one build-and-deploy run.

    Attributes:
        target: Audience of the build, None when not given.
        build_name: Human readable build name.
        build_description: Free text description of the build.
        app_versions: Raw comma separated list of compatible app versions.
        entry_file: Entry file passed to ``apphub build``.
        plist_file: Custom Info.plist passed to ``apphub build``.
        retain_build: Keep the zip archive after a successful deploy.
        open_build_url: Open the project dashboard once done.
        verbose: Print diagnostics for every step.
    """

    target: Target | None = None
    build_name: str | None = None
    build_description: str | None = None
    app_versions: str | None = None
    entry_file: Path | None = None
    plist_file: Path | None = None
    retain_build: bool = False
    open_build_url: bool = False
    verbose: bool = False
