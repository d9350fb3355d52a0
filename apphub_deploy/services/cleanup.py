from __future__ import annotations

from pathlib import Path

from apphub_deploy.core.result import Err, Ok, Result
from apphub_deploy.services.errors import DeployError

__all__ = ["remove_artifact"]


def remove_artifact(path: Path) -> Result[None, DeployError]:
    """Delete the local build archive."""
    try:
        path.unlink()
    except OSError as e:
        return Err(
            DeployError(
                kind="cleanup_failed",
                message=f"There was a problem removing the build file: {path}",
                hint=str(e),
            )
        )
    return Ok(None)
