"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from apphub_deploy.core.errors import ErrorCode
from apphub_deploy.output.console import Style
from apphub_deploy.services.errors import DeployError

if TYPE_CHECKING:
    from apphub_deploy.output.console import ConsoleProtocol

__all__ = ["print_deploy_error", "deploy_error_exit_code"]


def print_deploy_error(error: DeployError, console: ConsoleProtocol) -> None:
    """Print a deploy error, its hint, and a pointer for the failing step."""
    console.newline()
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)

    match error.kind:
        case "credentials_missing":
            console.print(
                'Create it with: {"appHubId": "<id>", "appHubSecret": "<secret>"}',
                Style.DIM,
            )
        case "build_failed":
            console.print("Re-run with --verbose to see the build output", Style.DIM)
        case _:
            pass


def deploy_error_exit_code(error: DeployError) -> int:
    """Get exit code for a deploy error.

    Every kind maps to the same status; the kind only changes the message.
    """
    del error
    return int(ErrorCode.FAILURE)
