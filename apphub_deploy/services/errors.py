from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

DeployErrorKind = Literal[
    "invalid_target",
    "settings_invalid",
    "credentials_missing",
    "credentials_invalid",
    "build_failed",
    "artifact_missing",
    "upload_url_failed",
    "upload_failed",
    "cleanup_failed",
]


@dataclass(frozen=True, slots=True)
class DeployError:
    kind: DeployErrorKind
    message: str
    hint: str | None = None
