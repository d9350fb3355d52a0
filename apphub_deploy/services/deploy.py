"""Deploy service: build, upload and clean up in one sequential run."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from apphub_deploy.core.result import Err, Ok, Result
from apphub_deploy.platform.http import HttpClient
from apphub_deploy.services.build import run_build
from apphub_deploy.services.cleanup import remove_artifact
from apphub_deploy.services.context import DeployContext
from apphub_deploy.services.errors import DeployError
from apphub_deploy.services.upload import deploy_artifact

__all__ = ["DeployOutcome", "DeployService"]


@dataclass(frozen=True, slots=True)
class DeployOutcome:
    artifact: Path
    upload_url: str
    project_url: str
    artifact_removed: bool


class DeployService:
    """Runs the steps of a deploy against one DeployContext.

    Each step blocks until done; the first failing step ends the run and
    the steps after it never start.
    """

    def __init__(self, ctx: DeployContext, http: HttpClient) -> None:
        self._ctx = ctx
        self._http = http
        self._console = ctx.console

    def run(self) -> Result[DeployOutcome, DeployError]:
        self._console.header("Building...")
        built = run_build(self._ctx)
        if isinstance(built, Err):
            return built
        self._console.success("Done!")

        self._console.header("Deploying...")
        uploaded = deploy_artifact(self._ctx, self._http)
        if isinstance(uploaded, Err):
            return uploaded
        self._console.success("Done!")

        self._console.newline()
        self._console.print("SUCCESSFULLY BUILT AND DEPLOYED TO APPHUB!")
        self._console.print(f"You can see your build here: {self._ctx.project_url}")

        removed = False
        if not self._ctx.options.retain_build:
            cleaned = self.cleanup()
            if isinstance(cleaned, Err):
                return cleaned
            removed = True

        return Ok(
            DeployOutcome(
                artifact=self._ctx.artifact,
                upload_url=uploaded.value,
                project_url=self._ctx.project_url,
                artifact_removed=removed,
            )
        )

    def cleanup(self) -> Result[None, DeployError]:
        self._console.header("Removing Build File...")
        self._ctx.verbose(f"BUILD_FILE_PATH: {self._ctx.artifact}")
        result = remove_artifact(self._ctx.artifact)
        if isinstance(result, Ok):
            self._console.success("Done!")
        return result
