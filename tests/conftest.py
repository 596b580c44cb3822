"""Shared fixtures: isolated MC_* environment and a fake replication client."""

from __future__ import annotations

import os

import pytest
from typer.testing import CliRunner

from cli import replicate_reset
from core.domain.models import ResyncTargetsInfo

REMOTE_ARN = "arn:minio:replication::xxx:mybucket"


class FakeReplicationClient:
    """Records calls and returns a canned response (or raises a canned error)."""

    def __init__(self) -> None:
        self.info = ResyncTargetsInfo()
        self.error: Exception | None = None
        self.calls: list[tuple[int, str]] = []
        self.created_for: list[str] = []

    async def reset_replication(self, older_than_days: int, target_arn: str) -> ResyncTargetsInfo:
        self.calls.append((older_than_days, target_arn))
        if self.error is not None:
            raise self.error
        return self.info


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    for key in list(os.environ):
        if key.startswith("MC_"):
            monkeypatch.delenv(key, raising=False)
    # AppSettings also reads ./.env
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MC_CONFIG_DIR", str(tmp_path / "mc"))


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def fake_client(monkeypatch) -> FakeReplicationClient:
    client = FakeReplicationClient()

    def factory(aliased_url, settings):
        client.created_for.append(aliased_url)
        return client

    monkeypatch.setattr(replicate_reset, "client_factory", factory)
    return client


def targets_info(*reset_ids: str) -> ResyncTargetsInfo:
    return ResyncTargetsInfo.model_validate(
        {"target": [{"arn": REMOTE_ARN, "resetid": reset_id} for reset_id in reset_ids]}
    )


@pytest.fixture(name="targets_info")
def targets_info_fixture():
    return targets_info


@pytest.fixture
def remote_arn() -> str:
    return REMOTE_ARN
