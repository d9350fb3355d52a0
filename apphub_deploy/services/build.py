"""Invocation of the external ``apphub build`` command."""

from __future__ import annotations

from pathlib import Path

from apphub_deploy.core.options import DeployOptions, Target
from apphub_deploy.core.result import Err, Ok, Result
from apphub_deploy.core.settings import Settings
from apphub_deploy.platform.process import run
from apphub_deploy.services.context import DeployContext
from apphub_deploy.services.errors import DeployError

__all__ = ["build_command", "run_build"]


def build_command(settings: Settings, options: DeployOptions, artifact: Path) -> list[str]:
    """Argument list for ``apphub build`` writing its zip to ``artifact``.

    ``--output-zip`` gets the bare file name: the command runs in the
    working directory, which holds the artifact.
    """
    cmd = [settings.build_executable, "build", "--verbose"]
    if options.plist_file is not None:
        cmd += ["--plist-file", str(options.plist_file)]
    if options.entry_file is not None:
        cmd += ["--entry-file", str(options.entry_file)]
    if options.target == Target.debug:
        cmd.append("--dev")
    cmd += ["--output-zip", artifact.name]
    return cmd


def run_build(ctx: DeployContext) -> Result[Path, DeployError]:
    """Run the build and check that it produced the artifact."""
    cmd = build_command(ctx.settings, ctx.options, ctx.artifact)
    ctx.verbose(f"Build command: {' '.join(cmd)}")

    result = run(cmd, cwd=ctx.cwd)
    if isinstance(result, Err):
        error = result.error
        if error.stdout.strip():
            ctx.verbose(error.stdout.rstrip())
        return Err(
            DeployError(
                kind="build_failed",
                message=str(error),
                hint=error.stderr.strip() or None,
            )
        )

    if result.value.strip():
        ctx.verbose(result.value.rstrip())

    if not ctx.artifact.is_file():
        return Err(
            DeployError(
                kind="artifact_missing",
                message=f"Build finished but no archive was written: {ctx.artifact}",
                hint="Check the --output-zip handling of your apphub version",
            )
        )
    return Ok(ctx.artifact)
