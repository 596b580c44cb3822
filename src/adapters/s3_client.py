"""S3 replication client (MinIO extension API).

One bucket, one alias, one signed `PUT ?replication-reset` request.
Signing is delegated to botocore; the request itself goes through httpx.
"""

from __future__ import annotations

import logging
import uuid
from urllib.parse import quote, urlencode

import httpx
from botocore.auth import S3SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials
from bs4 import BeautifulSoup
from pydantic import ValidationError

from adapters.alias_config import resolve_alias, split_aliased_url
from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import ClientInitError, RemoteError
from core.domain.models import AliasConfig, ResyncTargetsInfo
from core.interfaces.replication import ReplicationClient

logger = logging.getLogger(__name__)


def format_go_duration(days: int) -> str:
    """Render whole days the way the server's Go duration parser expects."""

    return f"{days * 24}h0m0s"


def parse_error_document(text: str) -> dict[str, str]:
    """Extract Code/Message/RequestId/BucketName from an S3 XML error body."""

    if not text:
        return {}
    # html.parser lowercases tag names, which is fine for four flat fields.
    soup = BeautifulSoup(text, "html.parser")
    out: dict[str, str] = {}
    for tag, key in (
        ("code", "code"),
        ("message", "message"),
        ("requestid", "request_id"),
        ("bucketname", "bucket"),
    ):
        node = soup.find(tag)
        if node and node.get_text(strip=True):
            out[key] = node.get_text(strip=True)
    return out


class S3ReplicationClient(ReplicationClient):
    """Talks to one bucket of one alias."""

    def __init__(
        self,
        *,
        alias: AliasConfig,
        bucket: str,
        settings: AppSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._alias = alias
        self._bucket = bucket
        self._settings = settings or AppSettings()
        self._transport = transport

    @property
    def bucket(self) -> str:
        return self._bucket

    def build_reset_url(self, older_than_days: int, target_arn: str, reset_id: str) -> str:
        params: list[tuple[str, str]] = [("replication-reset", "")]
        if older_than_days > 0:
            params.append(("older-than", format_go_duration(older_than_days)))
        if target_arn:
            params.append(("arn", target_arn))
        params.append(("reset-id", reset_id))
        # The signature covers the query exactly as sent, so encode it once here.
        query = urlencode(params, quote_via=quote, safe="")
        endpoint = self._alias.url.rstrip("/")
        return f"{endpoint}/{quote(self._bucket, safe='')}?{query}"

    def sign(self, method: str, url: str) -> dict[str, str]:
        """Return SigV4 headers for an empty-body request, or none for anonymous aliases."""

        if not self._alias.access_key or not self._alias.secret_key:
            return {}
        request = AWSRequest(method=method, url=url, data=b"")
        credentials = Credentials(
            self._alias.access_key,
            self._alias.secret_key,
            self._alias.session_token,
        )
        S3SigV4Auth(credentials, "s3", self._settings.region).add_auth(request)
        return {key: value for key, value in request.headers.items()}

    async def reset_replication(self, older_than_days: int, target_arn: str) -> ResyncTargetsInfo:
        reset_id = str(uuid.uuid4())
        url = self.build_reset_url(older_than_days, target_arn, reset_id)
        headers = self.sign("PUT", url)

        logger.debug("PUT %s", url)
        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                response = await client.put(url, content=b"", headers=headers)
        except httpx.HTTPError as exc:
            raise RemoteError(
                f"Unable to reach {self._alias.url}.",
                bucket=self._bucket,
                cause=exc,
            ) from exc
        logger.debug("PUT %s -> HTTP %d", url, response.status_code)

        if response.status_code != httpx.codes.OK:
            raise self._error_from_response(response)

        try:
            return ResyncTargetsInfo.model_validate_json(response.content or b"{}")
        except ValidationError as exc:
            raise RemoteError(
                "Unexpected response to replication reset.",
                status_code=response.status_code,
                bucket=self._bucket,
                cause=exc,
            ) from exc

    def _error_from_response(self, response: httpx.Response) -> RemoteError:
        fields = parse_error_document(response.text)
        message = fields.get("message") or f"HTTP {response.status_code} {response.reason_phrase}".strip()
        return RemoteError(
            message,
            code=fields.get("code"),
            status_code=response.status_code,
            request_id=fields.get("request_id") or response.headers.get("x-amz-request-id"),
            bucket=fields.get("bucket", self._bucket),
        )


def new_client(aliased_url: str, settings: AppSettings) -> S3ReplicationClient:
    """Build a client for `alias/bucket`, the way every command gets one."""

    alias, bucket = split_aliased_url(aliased_url)
    config = resolve_alias(alias, settings.config_dir)
    if not config.url.startswith(("http://", "https://")):
        raise ClientInitError(f"Invalid endpoint `{config.url}` for alias `{alias}`.")
    return S3ReplicationClient(alias=config, bucket=bucket, settings=settings)
