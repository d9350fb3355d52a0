"""Deploy command - build with apphub, upload the zip, remove it."""

from __future__ import annotations

from pathlib import Path

import typer

from apphub_deploy import __version__
from apphub_deploy.cli.context import build_context, fail
from apphub_deploy.core.options import DeployOptions, validate_target
from apphub_deploy.core.result import Err, Ok
from apphub_deploy.core.settings import SETTINGS_FILE_NAME
from apphub_deploy.output.console import RichConsole
from apphub_deploy.platform.http import RealHttpClient
from apphub_deploy.services.deploy import DeployService
from apphub_deploy.services.errors import DeployError


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def deploy(
    app_versions: str | None = typer.Option(
        None,
        "--app-versions",
        "-a",
        help=(
            "App versions compatible with this build, separated by commas "
            "(e.g. -a 1.0.3,1.0.4). Defaults to the Info.plist value of the build."
        ),
        show_default=False,
    ),
    build_description: str | None = typer.Option(
        None, "--build-description", "-d", help="Description of the build.", show_default=False
    ),
    entry_file: Path | None = typer.Option(
        None,
        "--entry-file",
        "-e",
        help="Entry file of the app (e.g. index.ios.js) passed to `apphub build`.",
        show_default=False,
    ),
    open_build_url: bool = typer.Option(
        False, "--open-build-url", "-o", help="Open the AppHub builds page after deploying."
    ),
    build_name: str | None = typer.Option(
        None, "--build-name", "-n", help="Name of the build.", show_default=False
    ),
    plist_file: Path | None = typer.Option(
        None,
        "--plist-file",
        "-p",
        help="Custom Info.plist path passed to `apphub build`.",
        show_default=False,
    ),
    retain_build: bool = typer.Option(
        False, "--retain-build", "-r", help="Keep the build zip after a successful deploy."
    ),
    target: str | None = typer.Option(
        None,
        "--target",
        "-t",
        help="Target audience of the build: all, debug or none.",
        show_default=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print every step in detail."),
    config: Path = typer.Option(
        Path(SETTINGS_FILE_NAME), "--config", help="Settings file (optional)."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Build the app with apphub, upload it to AppHub and remove the local zip."""
    del version
    console = RichConsole()

    target_result = validate_target(target)
    if isinstance(target_result, Err):
        raise fail(
            DeployError(kind="invalid_target", message=target_result.error.message),
            console,
        )

    options = DeployOptions(
        target=target_result.value,
        build_name=build_name,
        build_description=build_description,
        app_versions=app_versions,
        entry_file=entry_file,
        plist_file=plist_file,
        retain_build=retain_build,
        open_build_url=open_build_url,
        verbose=verbose,
    )
    ctx = build_context(options, console=console, settings_path=config, cwd=Path.cwd())

    service = DeployService(ctx, RealHttpClient(timeout=ctx.settings.timeout))
    match service.run():
        case Err(error):
            raise fail(error, console)
        case Ok(outcome):
            if options.open_build_url:
                console.info("Opening AppHub Builds in your browser...")
                typer.launch(outcome.project_url)
