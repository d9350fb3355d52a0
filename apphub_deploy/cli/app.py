from __future__ import annotations

import typer

from apphub_deploy.cli.commands.deploy_cmd import deploy


app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
)

app.command()(deploy)


def main() -> None:
    app()
