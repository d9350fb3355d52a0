from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from apphub_deploy.core.credentials import Credentials
from apphub_deploy.core.options import DeployOptions
from apphub_deploy.core.settings import Settings
from apphub_deploy.output.console import MockConsole
from apphub_deploy.services.context import DeployContext, artifact_name

MakeContext = Callable[..., DeployContext]


@pytest.fixture
def console() -> MockConsole:
    return MockConsole()


@pytest.fixture
def make_context(tmp_path: Path, console: MockConsole) -> MakeContext:
    def _make(**option_overrides: object) -> DeployContext:
        return DeployContext(
            cwd=tmp_path,
            settings=Settings(),
            credentials=Credentials(app_id="app-id", app_secret="app-secret"),
            options=DeployOptions(**option_overrides),  # type: ignore[arg-type]
            artifact=tmp_path / artifact_name(1700000000000),
            console=console,
        )

    return _make
