"""Replication reset use case.

Why a service:
- Keeps the command module about arguments and output only.
- Anything implementing `ReplicationClient` can be plugged in.
"""

from __future__ import annotations

import asyncio
import logging

from core.domain.errors import RemoteError
from core.domain.models import ReplicateResetMessage, ResetRequest
from core.interfaces.replication import ReplicationClient

logger = logging.getLogger(__name__)


class ReplicateResetService:
    """Runs one reset request against a client and builds the printable result."""

    def __init__(self, client: ReplicationClient) -> None:
        self._client = client

    async def reset(self, request: ResetRequest) -> ReplicateResetMessage:
        logger.debug(
            "Resetting replication for %s (older_than_days=%d, arn=%s)",
            request.url,
            request.older_than_days,
            request.target_arn,
        )
        try:
            info = await self._client.reset_replication(request.older_than_days, request.target_arn)
        except RemoteError as exc:
            exc.with_trace(request.url)
            raise

        logger.debug("Server started reset on %d target(s)", len(info.targets))
        return ReplicateResetMessage(
            url=request.url,
            resync_info=info,
            target_arn=request.target_arn,
        )

    def run(self, request: ResetRequest) -> ReplicateResetMessage:
        """Blocking wrapper: the event loop lives exactly as long as the call.

        Ctrl-C cancels the in-flight request; `asyncio.run` re-raises
        `KeyboardInterrupt` once the task has been cancelled.
        """

        return asyncio.run(self.reset(request))
