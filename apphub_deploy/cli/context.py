from __future__ import annotations

from pathlib import Path

import typer

from apphub_deploy.core.credentials import load_credentials
from apphub_deploy.core.options import DeployOptions
from apphub_deploy.core.result import Err
from apphub_deploy.core.settings import load_settings
from apphub_deploy.output.console import ConsoleProtocol
from apphub_deploy.output.errors import deploy_error_exit_code, print_deploy_error
from apphub_deploy.services.context import DeployContext, artifact_path
from apphub_deploy.services.errors import DeployError


def fail(error: DeployError, console: ConsoleProtocol) -> typer.Exit:
    """Report ``error`` and return the Exit to raise."""
    print_deploy_error(error, console)
    return typer.Exit(code=deploy_error_exit_code(error))


def build_context(
    options: DeployOptions,
    *,
    console: ConsoleProtocol,
    settings_path: Path,
    cwd: Path,
) -> DeployContext:
    """Load settings and credentials and fix the artifact path for this run."""
    if not settings_path.is_absolute():
        settings_path = cwd / settings_path

    settings_result = load_settings(settings_path)
    if isinstance(settings_result, Err):
        raise fail(
            DeployError(kind="settings_invalid", message=settings_result.error.message),
            console,
        )
    settings = settings_result.value

    credentials_path = Path(settings.credentials_file).expanduser()
    if not credentials_path.is_absolute():
        credentials_path = cwd / credentials_path

    credentials_result = load_credentials(credentials_path)
    if isinstance(credentials_result, Err):
        error = credentials_result.error
        raise fail(
            DeployError(
                kind="credentials_missing" if error.kind == "missing" else "credentials_invalid",
                message=error.message,
            ),
            console,
        )
    if options.verbose:
        console.info(f"Found {credentials_path.name} file! Reading credentials.")

    return DeployContext(
        cwd=cwd,
        settings=settings,
        credentials=credentials_result.value,
        options=options,
        artifact=artifact_path(cwd),
        console=console,
    )
