"""
spot-sync: Copy Liked Songs and playlists between two Spotify accounts.

This package reconciles two independently-owned Spotify accounts by
transferring library membership from a primary account to a secondary
account.

Architecture:
    A sync run is a single asyncio task:

    Orchestrator (sync/engine.py)
        For each selected library, in order, pick a strategy:
        - "liked_songs"  -> LikedTracksStrategy
        - anything else  -> PlaylistStrategy (a Spotify playlist ID)

    Strategy (sync/strategies.py)
        - Paginator (sync/paginator.py) reads the whole source library
        - Batcher (sync/batcher.py) writes it to the destination in
          chunks of at most 50 items, one request at a time

    Summary (sync/models.py)
        Per-library TransferResults are folded into a SyncSummary.
        A failing library contributes 0 items; the run goes on.

Modules:
    core/       - Configuration, logging, exceptions
    spotify/    - Async Spotify Web API client and models
    sync/       - Paginator, Batcher, strategies, SyncEngine, library listing
    cli.py      - Command-line interface

Usage:
    Command Line:
        spot-sync list --account primary
        spot-sync sync --liked --playlist 37i9dQZF1DXcBWIGoYBM5M

    Python API:
        from spot_sync import SyncEngine, load_config

        engine = SyncEngine(load_config())
        summary = await engine.sync(
            primary_token, secondary_token,
            ["liked_songs", "37i9dQZF1DXcBWIGoYBM5M"], [],
            direction="one-way"
        )
        print(summary.library_count, summary.total_items_transferred)

Limitations:
    - Playlists are recreated on every run (duplicates on reruns)
    - Two-way sync is accepted but not implemented
    - Tokens are not refreshed; an expired token fails its libraries

Dependencies:
    - aiohttp: Non-blocking HTTP client
    - pyyaml: Configuration file parsing
    - click / rich-click: CLI framework and colors
    - tqdm: Progress-bar-safe console logging
    - python-dotenv: Tokens from a .env file
"""

__version__ = "0.1.0"
__author__ = "spot-sync"
__license__ = "MIT"

from spot_sync.core import (
    Config,
    ConfigError,
    MissingCredentialError,
    SpotifyError,
    SpotSyncError,
    get_logger,
    load_config,
    setup_logging,
)
from spot_sync.spotify import LIKED_SONGS_ID, AccountRole, Credential
from spot_sync.sync import Direction, LibrarySelection, SyncEngine, SyncSummary, TransferResult

__all__ = [
    # Version
    "__version__",
    # Core
    "Config",
    "load_config",
    "setup_logging",
    "get_logger",
    # Exceptions
    "SpotSyncError",
    "ConfigError",
    "SpotifyError",
    "MissingCredentialError",
    # Sync
    "SyncEngine",
    "SyncSummary",
    "TransferResult",
    "LibrarySelection",
    "Direction",
    "AccountRole",
    "Credential",
    "LIKED_SONGS_ID",
]
