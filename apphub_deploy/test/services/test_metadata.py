"""Tests for apphub_deploy.services.metadata module."""

from __future__ import annotations

import json

import pytest

from apphub_deploy.core.options import DeployOptions, Target
from apphub_deploy.services.metadata import (
    build_metadata,
    encode_metadata,
    split_app_versions,
)


class TestSplitAppVersions:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("1.0.3", ["1.0.3"]),
            ("1.0.3,1.0.4", ["1.0.3", "1.0.4"]),
            (" 1.0.3 ,  1.0.4 ", ["1.0.3", "1.0.4"]),
            ("1.0.3,,1.0.4,", ["1.0.3", "1.0.4"]),
            (" , ", []),
        ],
    )
    def test_split_and_trim(self, raw: str, expected: list[str]) -> None:
        assert split_app_versions(raw) == expected


class TestBuildMetadata:
    def test_no_flags_gives_empty_metadata(self) -> None:
        assert build_metadata(DeployOptions()) == {}

    def test_all_flags(self) -> None:
        options = DeployOptions(
            target=Target.debug,
            build_name="Nightly",
            build_description="Fixes the login screen",
            app_versions="1.0.3, 1.0.4",
        )

        metadata = build_metadata(options)

        assert metadata == {
            "target": "debug",
            "name": "Nightly",
            "description": "Fixes the login screen",
            "app_versions": ["1.0.3", "1.0.4"],
        }
        assert list(metadata) == ["target", "name", "description", "app_versions"]

    def test_only_given_keys_are_present(self) -> None:
        metadata = build_metadata(DeployOptions(target=Target.none, build_name="RC1"))
        assert metadata == {"target": "none", "name": "RC1"}

    def test_empty_strings_are_skipped(self) -> None:
        metadata = build_metadata(DeployOptions(build_name="", build_description=""))
        assert metadata == {}


class TestEncodeMetadata:
    def test_empty_metadata_is_not_sent(self) -> None:
        assert encode_metadata({}) is None

    def test_json_object(self) -> None:
        encoded = encode_metadata({"target": "all", "app_versions": ["1.0"]})

        assert encoded is not None
        assert json.loads(encoded) == {"target": "all", "app_versions": ["1.0"]}

    def test_quotes_survive(self) -> None:
        encoded = encode_metadata({"description": "Kathy's \"chatty\" build"})

        assert encoded is not None
        assert json.loads(encoded)["description"] == "Kathy's \"chatty\" build"

    def test_non_ascii_is_escaped(self) -> None:
        encoded = encode_metadata({"name": "Café"})

        assert encoded is not None
        assert encoded.isascii()
        assert json.loads(encoded)["name"] == "Café"
