"""
Sync module for spot-sync.

This module contains the synchronization core:
    - paginator: exhaustive cursor-based listing reads
    - batcher: capped, sequential batch writes
    - strategies: liked-tracks and playlist transfer algorithms
    - engine: SyncEngine, the orchestrator returning a SyncSummary
    - library: listing an account's selectable libraries

Usage:
    from spot_sync.sync import SyncEngine

    summary = await SyncEngine(config).sync(primary, secondary, ["liked_songs"], [])
"""

from spot_sync.sync.batcher import Batcher, BatchResult, ChunkResult, chunked
from spot_sync.sync.engine import SyncEngine
from spot_sync.sync.library import list_libraries
from spot_sync.sync.models import (
    Direction,
    FailureReason,
    LibrarySelection,
    SyncSummary,
    TransferResult,
    TransferStatus,
)
from spot_sync.sync.paginator import Paginator
from spot_sync.sync.strategies import LikedTracksStrategy, PlaylistStrategy

__all__ = [
    "SyncEngine",
    "Paginator",
    "Batcher",
    "BatchResult",
    "ChunkResult",
    "chunked",
    "LikedTracksStrategy",
    "PlaylistStrategy",
    "list_libraries",
    "Direction",
    "FailureReason",
    "LibrarySelection",
    "SyncSummary",
    "TransferResult",
    "TransferStatus",
]
