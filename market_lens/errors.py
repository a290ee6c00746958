"""Error kinds raised while reading market state."""
from __future__ import annotations


class LensError(Exception):
    """Base error; carries the instrument/account/call that failed."""

    def __init__(
        self,
        message: str,
        *,
        instrument: str | None = None,
        account: str | None = None,
        call: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.instrument = instrument
        self.account = account
        self.call = call

    def with_context(
        self,
        *,
        instrument: str | None = None,
        account: str | None = None,
        call: str | None = None,
    ) -> LensError:
        """Fill in missing context fields; fields already set are kept."""
        if self.instrument is None:
            self.instrument = instrument
        if self.account is None:
            self.account = account
        if self.call is None:
            self.call = call
        return self

    def __str__(self) -> str:
        parts = []
        if self.instrument:
            parts.append(f"instrument={self.instrument}")
        if self.account:
            parts.append(f"account={self.account}")
        if self.call:
            parts.append(f"call={self.call}")
        if not parts:
            return self.message
        return f"{self.message} ({', '.join(parts)})"


class UpstreamReadFailure(LensError):
    """A dependent query did not return successfully (transport error, revert, timeout)."""


class MalformedResponse(LensError):
    """A query returned, but with data the reader cannot interpret."""


class InvalidAddress(LensError):
    """A caller-supplied instrument or account is not a valid address."""
