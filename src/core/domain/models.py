"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Server responses are decoded and re-encoded through the same models, with
  aliases matching the wire names, so nothing is renamed on the way through.
- Validation of alias entries happens at the edge (config file, env vars).

Note:
- These models describe *what* the data is, not *how* it is fetched.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.errors import InternalError


class ResyncTarget(BaseModel):
    """One replication target touched by a reset.

    Only `arn` and `resetid` are guaranteed by the server; the progress
    counters appear once a status query has been made. Unknown fields are
    kept so a newer server's response survives a round trip untouched.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    arn: str = Field(
        default="",
        description="ARN of the remote bucket target.",
    )
    reset_id: str = Field(
        default="",
        alias="resetid",
        description="Identifier generated for this reset; used to query progress.",
    )
    start_time: str | None = Field(default=None, alias="startTime")
    end_time: str | None = Field(default=None, alias="endTime")
    resync_status: str | None = Field(default=None, alias="resyncStatus")
    replicated_size: int | None = Field(default=None, alias="completedReplicationSize")
    failed_size: int | None = Field(default=None, alias="failedReplicationSize")
    replicated_count: int | None = Field(default=None, alias="replicationCount")
    failed_count: int | None = Field(default=None, alias="failedReplicationCount")
    bucket: str | None = Field(default=None)
    object_name: str | None = Field(default=None, alias="object")


class ResyncTargetsInfo(BaseModel):
    """Server answer to a replication reset: one entry per affected target."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    targets: list[ResyncTarget] = Field(
        default_factory=list,
        alias="target",
        description="Targets the reset was started for.",
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump with wire names and only the fields the server actually sent."""

        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class ResetRequest(BaseModel):
    """Parameters of a single reset call."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(
        ...,
        min_length=1,
        description="Aliased URL the user passed, e.g. `myminio/mybucket`.",
    )
    older_than_days: int = Field(
        default=0,
        ge=0,
        description="Only re-replicate objects older than this many days (0 = all).",
    )
    target_arn: str = Field(
        ...,
        min_length=1,
        description="Remote bucket ARN identifying the replication target.",
    )


class ReplicateResetMessage(BaseModel):
    """Printable result of `resync`, either as one line or as JSON."""

    model_config = ConfigDict(populate_by_name=True)

    op: str = Field(default="resync")
    url: str = Field(...)
    resync_info: ResyncTargetsInfo = Field(
        default_factory=ResyncTargetsInfo,
        alias="resyncInfo",
    )
    target_arn: str = Field(default="", alias="targetArn")

    def to_json(self) -> str:
        """Indented JSON document; `status` is always `success` here.

        Errors are reported through a different document, so a message that
        gets printed at all is a successful one.
        """

        payload = {
            "op": self.op,
            "url": self.url,
            "resyncInfo": self.resync_info.to_wire(),
            "status": "success",
            "targetArn": self.target_arn,
        }
        try:
            return json.dumps(payload, indent=1, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise InternalError("Unable to marshal into JSON.", cause=exc) from exc

    def __str__(self) -> str:
        targets = self.resync_info.targets
        if len(targets) == 1:
            return f"Replication reset started for {self.url} with ID {targets[0].reset_id}"
        return f"Replication reset started for {self.url}"


class AliasConfig(BaseModel):
    """One entry of the alias table (`config.json` or `MC_HOST_<alias>`)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    url: str = Field(
        ...,
        min_length=1,
        description="Endpoint URL, e.g. `https://play.min.io`.",
    )
    access_key: str = Field(default="", alias="accessKey")
    secret_key: str = Field(default="", alias="secretKey")
    session_token: str | None = Field(default=None, alias="sessionToken")
    api: str = Field(default="s3v4")
    path: str = Field(default="auto")


class AliasConfigFile(BaseModel):
    """`config.json` as written by `mc alias set`."""

    model_config = ConfigDict(extra="ignore")

    version: str = Field(default="10")
    aliases: dict[str, AliasConfig] = Field(default_factory=dict)
