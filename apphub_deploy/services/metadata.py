"""Build metadata sent alongside the upload request."""

from __future__ import annotations

import json

from apphub_deploy.core.options import DeployOptions

__all__ = ["BuildMetadata", "build_metadata", "encode_metadata", "split_app_versions"]

BuildMetadata = dict[str, str | list[str]]


def split_app_versions(raw: str) -> list[str]:
    """Split a comma separated version list, trimming entries and dropping blanks.

    >>> split_app_versions("1.0.3, 1.0.4")
    ['1.0.3', '1.0.4']
    """
    return [v.strip() for v in raw.split(",") if v.strip()]


def build_metadata(options: DeployOptions) -> BuildMetadata:
    """Collect the metadata keys for the flags that were given.

    Key order is target, name, description, app_versions.
    """
    metadata: BuildMetadata = {}
    if options.target is not None:
        metadata["target"] = options.target.value
    if options.build_name:
        metadata["name"] = options.build_name
    if options.build_description:
        metadata["description"] = options.build_description
    if options.app_versions:
        metadata["app_versions"] = split_app_versions(options.app_versions)
    return metadata


def encode_metadata(metadata: BuildMetadata) -> str | None:
    """Serialize metadata for the ``X-AppHub-Build-Metadata`` header.

    Returns None when there is nothing to send. Non-ASCII text is escaped
    so the value is always a valid header.
    """
    if not metadata:
        return None
    return json.dumps(metadata, ensure_ascii=True)
