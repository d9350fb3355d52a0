"""AppHub credential file loading.

The credential file is a JSON document saved next to the project::

    {"appHubId": "...", "appHubSecret": "..."}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import as_str_dict, get_str

__all__ = ["Credentials", "CredentialsError", "load_credentials", "CREDENTIALS_FILE_NAME"]

CREDENTIALS_FILE_NAME = ".apphub"


@dataclass(frozen=True, slots=True)
class CredentialsError:
    """Error when the credential file is missing or unusable."""

    kind: str  # "missing" | "invalid"
    message: str
    path: Path


@dataclass(frozen=True, slots=True)
class Credentials:
    """AppHub application identifier and secret."""

    app_id: str
    app_secret: str

    def __repr__(self) -> str:
        return f"Credentials(app_id={self.app_id!r}, app_secret='***')"


def load_credentials(path: Path) -> Result[Credentials, CredentialsError]:
    """Read and validate the credential file at ``path``.

    Both fields must be present, be strings and contain something other
    than whitespace. Values are returned stripped.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(CredentialsError("missing", f"Credential file not found: {path}", path))
    except PermissionError:
        return Err(CredentialsError("invalid", f"Permission denied reading: {path}", path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(CredentialsError("invalid", f"Error reading {path}: {e}", path))

    try:
        data_obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(CredentialsError("invalid", f"Invalid JSON in {path}: {e}", path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(CredentialsError("invalid", f"{path} must contain a JSON object", path))

    app_id = get_str(data, "appHubId")
    app_secret = get_str(data, "appHubSecret")
    if app_id is None or app_secret is None:
        return Err(
            CredentialsError(
                "invalid", "One or both of your AppHub credentials are blank", path
            )
        )

    return Ok(Credentials(app_id=app_id, app_secret=app_secret))
