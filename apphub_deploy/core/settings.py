"""Tool settings with defaults and optional TOML overrides.

The settings file is optional. When present it holds an ``[apphub]`` table::

    [apphub]
    api_url = "https://api.apphub.io/v1/upload"
    dashboard_url = "https://dashboard.apphub.io/projects/"
    build_executable = "./node_modules/.bin/apphub"
    credentials_file = ".apphub"
    timeout = 300

Every key is optional, but a key that is present must hold a valid value:
a misspelled table or key, a blank string or a non-positive timeout is an
error rather than a silent fallback to the production defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .credentials import CREDENTIALS_FILE_NAME
from .result import Err, Ok, Result
from .structured import as_str_dict

__all__ = [
    "Settings",
    "SettingsError",
    "load_settings",
    "parse_settings",
    "SETTINGS_FILE_NAME",
    "DEFAULT_API_URL",
    "DEFAULT_DASHBOARD_URL",
    "DEFAULT_BUILD_EXECUTABLE",
    "DEFAULT_TIMEOUT_SECONDS",
]

SETTINGS_FILE_NAME = ".apphub-deploy.toml"

DEFAULT_API_URL = "https://api.apphub.io/v1/upload"
DEFAULT_DASHBOARD_URL = "https://dashboard.apphub.io/projects/"
DEFAULT_BUILD_EXECUTABLE = "./node_modules/.bin/apphub"
DEFAULT_TIMEOUT_SECONDS = 300.0

_TABLE = "apphub"
_STR_KEYS = ("api_url", "dashboard_url", "build_executable", "credentials_file")
_NUMBER_KEYS = ("timeout",)


@dataclass(frozen=True, slots=True)
class SettingsError:
    """Error when the settings file cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class Settings:
    """Endpoints and local paths used by a deploy run."""

    api_url: str = DEFAULT_API_URL
    dashboard_url: str = DEFAULT_DASHBOARD_URL
    build_executable: str = DEFAULT_BUILD_EXECUTABLE
    credentials_file: str = CREDENTIALS_FILE_NAME
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def project_url(self, app_id: str) -> str:
        """Dashboard page listing the builds of ``app_id``."""
        return self.dashboard_url + app_id


def parse_settings(
    data: Mapping[str, object], path: Path | None = None
) -> Result[Settings, SettingsError]:
    """Validate a parsed settings mapping and build Settings from it."""
    unknown_tables = sorted(k for k in data if k != _TABLE)
    if unknown_tables:
        return Err(
            SettingsError(
                f"Unknown settings table(s): {', '.join(unknown_tables)} (expected [{_TABLE}])",
                path=path,
            )
        )

    raw = data.get(_TABLE, {})
    table = as_str_dict(raw)
    if table is None:
        return Err(SettingsError(f"[{_TABLE}] must be a table", path=path))

    unknown_keys = sorted(k for k in table if k not in _STR_KEYS + _NUMBER_KEYS)
    if unknown_keys:
        return Err(
            SettingsError(f"Unknown [{_TABLE}] key(s): {', '.join(unknown_keys)}", path=path)
        )

    values: dict[str, str | float] = {}
    for key in _STR_KEYS:
        if key not in table:
            continue
        value = table[key]
        if not isinstance(value, str) or not value.strip():
            return Err(
                SettingsError(f"{_TABLE}.{key} must be a non-blank string, got {value!r}", path)
            )
        values[key] = value.strip()

    if "timeout" in table:
        timeout = table["timeout"]
        if isinstance(timeout, bool) or not isinstance(timeout, int | float) or timeout <= 0:
            return Err(
                SettingsError(f"{_TABLE}.timeout must be a positive number, got {timeout!r}", path)
            )
        values["timeout"] = float(timeout)

    return Ok(Settings(**values))  # type: ignore[arg-type]


def load_settings(path: Path) -> Result[Settings, SettingsError]:
    """Load settings from ``path``, falling back to defaults if it doesn't exist.

    Args:
        path: Path to the settings TOML file

    Returns:
        Ok(Settings) on success, Err(SettingsError) if the file exists but
        cannot be read, parsed or validated
    """
    import tomllib

    try:
        content = path.read_bytes()
    except FileNotFoundError:
        return Ok(Settings())
    except PermissionError:
        return Err(SettingsError(f"Permission denied reading: {path}", path=path))
    except OSError as e:
        return Err(SettingsError(f"Error reading settings: {e}", path=path))

    try:
        data_obj: object = tomllib.loads(content.decode("utf-8"))
    except tomllib.TOMLDecodeError as e:
        return Err(SettingsError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(SettingsError(f"Error reading settings: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(SettingsError("Settings root must be a TOML table", path=path))
    return parse_settings(data, path)
