"""Error taxonomy for the replicate commands.

Every failure in a command is terminal, so the hierarchy stays flat: the CLI
only needs to know what to print, not how to recover.
"""

from __future__ import annotations

from typing import Any


class ReplicateError(Exception):
    """Base error carrying a user-facing message, a cause and a trace."""

    kind = "fatal"

    def __init__(self, message: str, *, cause: BaseException | str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.trace: list[str] = []

    def with_trace(self, *args: str) -> "ReplicateError":
        """Record the arguments the failing operation was called with."""

        self.trace.extend(args)
        return self

    def cause_text(self) -> str | None:
        if self.cause is None:
            return None
        return str(self.cause)

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message}


class InputError(ReplicateError):
    """A flag value that cannot be accepted."""


class ClientInitError(ReplicateError):
    """The alias could not be turned into a usable client."""


class RemoteError(ReplicateError):
    """The storage server (or the network in between) rejected the call."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status_code: int | None = None,
        request_id: str | None = None,
        bucket: str | None = None,
        cause: BaseException | str | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.code = code
        self.status_code = status_code
        self.request_id = request_id
        self.bucket = bucket

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.code:
            data["code"] = self.code
        if self.status_code is not None:
            data["statusCode"] = self.status_code
        if self.request_id:
            data["requestId"] = self.request_id
        if self.bucket:
            data["bucket"] = self.bucket
        return data


class InternalError(ReplicateError):
    """Something that is fully under our control went wrong (e.g. encoding)."""
