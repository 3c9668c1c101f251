"""
Errors that abort a backfill run.

Transient transport failures never appear here: the API client absorbs them
until its retry budget is spent. A 404 is not an error either; it becomes an
empty result. Everything below is fatal and stops the run before the
in-flight window is committed.
"""

from __future__ import annotations


class BackfillError(Exception):
    """
    Base class for fatal backfill errors.

    Attributes:
        slot: The slot being processed when the error occurred, if any.
    """

    def __init__(self, message: str, *, slot: int | None = None) -> None:
        self.slot = slot
        super().__init__(message)

    @property
    def kind(self) -> str:
        """Short name of the error kind, used in the final error report."""
        return type(self).__name__


class RetryExhaustedError(BackfillError):
    """Every attempt of a request failed at the transport level."""

    def __init__(self, url: str, attempts: int, *, slot: int | None = None) -> None:
        self.url = url
        self.attempts = attempts
        target = f"slot {slot}" if slot is not None else url
        super().__init__(f"{attempts} retries failed for {target}", slot=slot)


class DecodeError(BackfillError):
    """A response body could not be decoded into the expected model."""

    def __init__(self, url: str, detail: str, *, slot: int | None = None) -> None:
        self.url = url
        self.detail = detail
        super().__init__(f"Failed to decode response from {url}: {detail}", slot=slot)


class UnexpectedStatusError(BackfillError):
    """The server answered with a non-retryable error status other than 404."""

    def __init__(self, url: str, status_code: int, body: str, *, slot: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(f"HTTP error {status_code} from {url}: {body[:200]}", slot=slot)


class HeadNotFoundError(BackfillError):
    """The head headers resource returned no headers."""

    def __init__(self) -> None:
        super().__init__("no headers found")


class RootParseError(BackfillError):
    """A block root string is not a valid 32-byte hex value."""

    def __init__(self, value: str, detail: str, *, slot: int) -> None:
        self.value = value
        super().__init__(f"Invalid block root {value!r} for slot {slot}: {detail}", slot=slot)


class InvalidRangeError(BackfillError):
    """The resolved slot range is empty."""

    def __init__(self, start: int, end: int) -> None:
        self.start = start
        self.end = end
        super().__init__(f"End slot {end} is before start slot {start}")


class SinkCommitError(BackfillError):
    """Records could not be committed to storage."""
