"""
Capped, sequential batch writes.

Spotify write endpoints accept a limited number of items per request
(50 for saving tracks). The Batcher splits an item list into contiguous
chunks of at most batch_size items and awaits one write per chunk, one
after another.

Failure Policy:
    A chunk whose write raises SpotifyError is recorded as failed, logged
    (including to sync_failures.log) and skipped. The next chunk is still
    written. Its items are not counted as transferred, so
    items_transferred <= len(items) always holds.
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from spot_sync.core.exceptions import SpotifyError
from spot_sync.core.logger import get_logger, log_sync_failure
from spot_sync.sync.models import FailureReason

logger = get_logger(__name__)

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    """
    Split items into contiguous chunks of at most size items.

    Args:
        items: Items to split. Order is preserved.
        size: Maximum chunk size, must be positive.

    Returns:
        ceil(len(items) / size) chunks; an empty list for no items.

    Raises:
        ValueError: If size is not positive.
    """
    if size <= 0:
        raise ValueError(f"Chunk size must be positive, got {size}")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


@dataclass(frozen=True)
class ChunkResult:
    """
    Outcome of one chunk write.

    Attributes:
        index: Zero-based chunk position.
        size: Number of items in the chunk.
        ok: Whether the write succeeded.
        reason: Failure reason when not ok.
        detail: Failure description when not ok.
    """
    index: int
    size: int
    ok: bool
    reason: FailureReason | None = None
    detail: str = ""


@dataclass(frozen=True)
class BatchResult:
    """Fold of all chunk results of one batch run."""
    chunks: tuple[ChunkResult, ...] = ()

    @property
    def items_transferred(self) -> int:
        return sum(chunk.size for chunk in self.chunks if chunk.ok)

    @property
    def failed_chunks(self) -> int:
        return sum(1 for chunk in self.chunks if not chunk.ok)

    @property
    def call_count(self) -> int:
        return len(self.chunks)


class Batcher:
    """
    Drives one write call per chunk, sequentially.

    Attributes:
        batch_size: Maximum items per write call.
        library_id: Library being written, for failure logging.
    """

    def __init__(self, batch_size: int, library_id: str = "") -> None:
        if batch_size <= 0:
            raise ValueError(f"Batch size must be positive, got {batch_size}")
        self.batch_size = batch_size
        self.library_id = library_id

    async def write(
        self,
        items: Sequence[T],
        operation: Callable[[list[T]], Awaitable[Any]]
    ) -> BatchResult:
        """
        Write items in chunks.

        Args:
            items: Items to write, in order.
            operation: Awaitable write for one chunk. It raises SpotifyError
                       when the remote call does not succeed.

        Returns:
            BatchResult with one ChunkResult per chunk.
            No call is made for an empty item list.
        """
        chunks = chunked(items, self.batch_size)
        results: list[ChunkResult] = []

        for index, chunk in enumerate(chunks):
            label = f"chunk {index + 1}/{len(chunks)} ({len(chunk)} items)"
            try:
                await operation(chunk)
            except SpotifyError as e:
                reason = FailureReason.from_error(e)
                log_sync_failure(logger, self.library_id, label, reason.value, e.message)
                results.append(ChunkResult(index=index, size=len(chunk), ok=False, reason=reason, detail=e.message))
                continue

            logger.debug(f"{self.library_id}: wrote {label}")
            results.append(ChunkResult(index=index, size=len(chunk), ok=True))

        return BatchResult(chunks=tuple(results))
