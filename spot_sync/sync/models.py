"""
Data models for sync runs.

This module defines the values flowing through the sync engine: the
requested direction, per-library selections, and the results produced
by every unit of work.

Every unit of work produces a result value instead of a swallowed
exception:
    - ChunkResult: one batch write (see batcher.py)
    - TransferResult: one library
    - SyncSummary: the fold over all TransferResults of a run

A failure always carries a FailureReason, so callers and tests can tell
an expired token from a rate limit or an unexpected bug.
"""

from dataclasses import dataclass, field
from enum import Enum

from spot_sync.core.exceptions import SpotifyError
from spot_sync.spotify.models import LIKED_SONGS_ID, AccountRole


class Direction(str, Enum):
    """
    Sync direction.

    ONE_WAY copies from the source account to the other account.
    TWO_WAY (bidirectional reconciliation) is accepted but not implemented:
    every library yields an UNSUPPORTED result.
    """
    ONE_WAY = "one-way"
    TWO_WAY = "two-way"

    @classmethod
    def parse(cls, value: "str | Direction") -> "Direction":
        """
        Parse a direction from its wire value.

        Raises:
            ValueError: If the value is not "one-way" or "two-way".
        """
        if isinstance(value, Direction):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(
                f"Invalid sync direction: {value!r} (expected 'one-way' or 'two-way')"
            ) from None


class TransferStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"
    UNSUPPORTED = "unsupported"


class FailureReason(str, Enum):
    """Why a unit of work (chunk or library) contributed nothing."""
    REMOTE_ERROR = "remote_error"
    AUTH_ERROR = "auth_error"
    RATE_LIMITED = "rate_limited"
    TRANSPORT_ERROR = "transport_error"
    UNEXPECTED_ERROR = "unexpected_error"

    @classmethod
    def from_error(cls, error: BaseException) -> "FailureReason":
        """Classify an exception raised while doing a unit of work."""
        if isinstance(error, SpotifyError):
            if error.is_auth_error:
                return cls.AUTH_ERROR
            if error.is_rate_limit:
                return cls.RATE_LIMITED
            if error.is_transport_error:
                return cls.TRANSPORT_ERROR
            return cls.REMOTE_ERROR
        return cls.UNEXPECTED_ERROR


@dataclass(frozen=True)
class LibrarySelection:
    """
    A library chosen for sync, bound explicitly to the account it is read from.

    Attributes:
        library_id: Spotify playlist ID or LIKED_SONGS_ID.
        source: Account the library is read from. The other account
                is written to.
    """
    library_id: str
    source: AccountRole = AccountRole.PRIMARY

    @property
    def destination(self) -> AccountRole:
        return self.source.other

    @property
    def is_liked_songs(self) -> bool:
        return self.library_id == LIKED_SONGS_ID


@dataclass(frozen=True)
class TransferResult:
    """
    Outcome of transferring one library.

    Attributes:
        library_id: The library identifier.
        status: OK, FAILED or UNSUPPORTED.
        items_transferred: Items written to the destination (0 on failure).
        items_fetched: Items read from the source, before filtering.
        failed_chunks: Number of write chunks that failed.
        reason: Failure reason when status is FAILED.
        detail: Human-readable failure description.
        destination_id: ID of the playlist created on the destination, if any.
    """
    library_id: str
    status: TransferStatus
    items_transferred: int = 0
    items_fetched: int = 0
    failed_chunks: int = 0
    reason: FailureReason | None = None
    detail: str = ""
    destination_id: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is TransferStatus.OK

    @classmethod
    def success(
        cls,
        library_id: str,
        items_transferred: int,
        items_fetched: int,
        failed_chunks: int = 0,
        destination_id: str | None = None
    ) -> "TransferResult":
        return cls(
            library_id=library_id,
            status=TransferStatus.OK,
            items_transferred=items_transferred,
            items_fetched=items_fetched,
            failed_chunks=failed_chunks,
            destination_id=destination_id
        )

    @classmethod
    def failure(cls, library_id: str, reason: FailureReason, detail: str = "") -> "TransferResult":
        """Create a failed result; a failed library never counts any items."""
        return cls(library_id=library_id, status=TransferStatus.FAILED, reason=reason, detail=detail)

    @classmethod
    def unsupported(cls, library_id: str, direction: Direction) -> "TransferResult":
        return cls(
            library_id=library_id,
            status=TransferStatus.UNSUPPORTED,
            detail=f"Direction '{direction.value}' is not implemented"
        )


@dataclass(frozen=True)
class SyncSummary:
    """
    Aggregate result of one sync run.

    Created once per run and immutable. The engine returns it and does not
    keep it; storing a sync history is the caller's concern.

    Attributes:
        library_count: Number of libraries processed, failed ones included.
        total_items_transferred: Sum of items_transferred over all libraries.
        succeeded: True when the run could start (both credentials present).
                   Individual library failures do not make this False.
        direction: Direction the run was requested with.
        results: Per-library results, in processing order.
    """
    library_count: int
    total_items_transferred: int
    succeeded: bool
    direction: Direction = Direction.ONE_WAY
    results: tuple[TransferResult, ...] = field(default_factory=tuple)

    @classmethod
    def from_results(cls, results: list[TransferResult], direction: Direction) -> "SyncSummary":
        """Fold per-library results into a summary."""
        return cls(
            library_count=len(results),
            total_items_transferred=sum(result.items_transferred for result in results),
            succeeded=True,
            direction=direction,
            results=tuple(results)
        )

    @property
    def failed(self) -> list[TransferResult]:
        return [result for result in self.results if result.status is TransferStatus.FAILED]

    @property
    def unsupported(self) -> list[TransferResult]:
        return [result for result in self.results if result.status is TransferStatus.UNSUPPORTED]

    @property
    def message(self) -> str:
        """Short human-readable description of the run."""
        text = (
            f"Synced {self.library_count} librar{'y' if self.library_count == 1 else 'ies'}, "
            f"{self.total_items_transferred} song{'' if self.total_items_transferred == 1 else 's'}"
        )
        if self.failed:
            text += f" ({len(self.failed)} failed)"
        if self.unsupported:
            text += f" ({len(self.unsupported)} skipped: {self.direction.value} not implemented)"
        return text
