"""Two-phase upload: ask AppHub for a signed URL, then PUT the archive there."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from apphub_deploy.core.credentials import Credentials
from apphub_deploy.core.result import Err, Ok, Result
from apphub_deploy.core.structured import get_str, get_table
from apphub_deploy.platform.http import HttpClient
from apphub_deploy.services.context import DeployContext
from apphub_deploy.services.errors import DeployError
from apphub_deploy.services.metadata import build_metadata, encode_metadata

__all__ = [
    "HEADER_APP_ID",
    "HEADER_APP_SECRET",
    "HEADER_METADATA",
    "ZIP_CONTENT_TYPE",
    "upload_request_headers",
    "parse_upload_url",
    "request_upload_url",
    "upload_artifact",
    "deploy_artifact",
]

HEADER_APP_ID = "X-AppHub-Application-ID"
HEADER_APP_SECRET = "X-AppHub-Application-Secret"
HEADER_METADATA = "X-AppHub-Build-Metadata"
ZIP_CONTENT_TYPE = "application/zip"


def upload_request_headers(credentials: Credentials, metadata: str | None) -> dict[str, str]:
    headers = {
        HEADER_APP_ID: credentials.app_id,
        HEADER_APP_SECRET: credentials.app_secret,
        "Content-Type": ZIP_CONTENT_TYPE,
    }
    if metadata is not None:
        headers[HEADER_METADATA] = metadata
    return headers


def parse_upload_url(body: Mapping[str, object]) -> str | None:
    """Extract ``data.s3_url`` from the upload API response."""
    data = get_table(body, "data")
    if data is None:
        return None
    return get_str(data, "s3_url")


def request_upload_url(
    client: HttpClient,
    *,
    api_url: str,
    credentials: Credentials,
    metadata: str | None,
) -> Result[str, DeployError]:
    result = client.get_json(api_url, upload_request_headers(credentials, metadata))
    if isinstance(result, Err):
        return Err(
            DeployError(
                kind="upload_url_failed",
                message=f"There was a problem requesting an upload URL: {result.error}",
                hint="Check the appHubId and appHubSecret in your .apphub file",
            )
        )

    url = parse_upload_url(result.value)
    if url is None:
        return Err(
            DeployError(
                kind="upload_url_failed",
                message=f"Upload response from {api_url} has no data.s3_url",
            )
        )
    return Ok(url)


def upload_artifact(client: HttpClient, *, url: str, artifact: Path) -> Result[str, DeployError]:
    result = client.put_file(url, artifact, {"Content-Type": ZIP_CONTENT_TYPE})
    if isinstance(result, Err):
        return Err(
            DeployError(
                kind="upload_failed",
                message=f"There was a problem uploading the build: {result.error}",
            )
        )
    return Ok(result.value)


def deploy_artifact(ctx: DeployContext, client: HttpClient) -> Result[str, DeployError]:
    """Run both upload phases for the context's artifact.

    Returns the upload URL the archive was sent to.
    """
    metadata = encode_metadata(build_metadata(ctx.options))
    ctx.verbose(f"GET {ctx.settings.api_url}")
    if metadata is not None:
        ctx.verbose(f"{HEADER_METADATA}: {metadata}")

    url_result = request_upload_url(
        client,
        api_url=ctx.settings.api_url,
        credentials=ctx.credentials,
        metadata=metadata,
    )
    if isinstance(url_result, Err):
        return url_result
    upload_url = url_result.value
    ctx.verbose(f"urlForPut: {upload_url}")

    put_result = upload_artifact(client, url=upload_url, artifact=ctx.artifact)
    if isinstance(put_result, Err):
        return put_result
    if put_result.value.strip():
        ctx.verbose(put_result.value.strip())
    return Ok(upload_url)
