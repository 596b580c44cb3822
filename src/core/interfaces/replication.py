"""Contract for replication clients.

Why Protocol:
- Structural typing lets the S3 adapter and test fakes be swapped freely.
- The command never sees HTTP, signing or alias resolution.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import ResyncTargetsInfo


@runtime_checkable
class ReplicationClient(Protocol):
    """Client bound to one bucket of one alias.

    Design rules:
    - `reset_replication` is async because it does network I/O.
    - Failures are raised as `core.domain.errors.RemoteError`.
    """

    async def reset_replication(self, older_than_days: int, target_arn: str) -> ResyncTargetsInfo:
        """Start a replication reset; `older_than_days=0` means no age filter."""

        ...
