"""Per-run deploy context.

Everything a step needs is carried here and passed explicitly; nothing
about a run lives in module globals.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from apphub_deploy.core.credentials import Credentials
from apphub_deploy.core.options import DeployOptions
from apphub_deploy.core.settings import Settings
from apphub_deploy.output.console import ConsoleProtocol, Style

__all__ = ["DeployContext", "artifact_name", "artifact_path"]

ARTIFACT_PREFIX = "AppHubBuild_"


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def artifact_name(timestamp_ms: int) -> str:
    """Zip file name for a build started at ``timestamp_ms`` (epoch milliseconds)."""
    return f"{ARTIFACT_PREFIX}{timestamp_ms}.zip"


def artifact_path(cwd: Path, clock: Callable[[], int] = _now_ms) -> Path:
    """Absolute path of this run's build archive inside ``cwd``."""
    return (cwd / artifact_name(clock())).resolve()


@dataclass(frozen=True, slots=True)
class DeployContext:
    """Inputs of a single build-and-deploy run.

    Attributes:
        cwd: Directory the build runs in and the archive is written to.
        settings: Endpoints, build executable and timeouts.
        credentials: AppHub application id and secret.
        options: Validated command-line flags.
        artifact: Absolute path of the zip archive produced by the build.
        console: Output sink for progress and diagnostics.
    """

    cwd: Path
    settings: Settings
    credentials: Credentials
    options: DeployOptions
    artifact: Path
    console: ConsoleProtocol

    @property
    def project_url(self) -> str:
        return self.settings.project_url(self.credentials.app_id)

    def verbose(self, message: str) -> None:
        """Print a diagnostic line when ``--verbose`` is on."""
        if self.options.verbose:
            self.console.print(message, Style.DIM)
