"""
Spotify module for spot-sync.

This module provides the remote side of a sync:
    - client: asynchronous Spotify Web API client (aiohttp)
    - models: Credential, TrackItem, PlaylistInfo, LibraryInfo

Usage:
    from spot_sync.spotify import SpotifyClient, open_session, Credential, AccountRole

    async with open_session(config.spotify) as session:
        client = SpotifyClient(session, config.spotify)
        playlist = await client.playlist(playlist_id, Credential(AccountRole.PRIMARY, token))
"""

from spot_sync.spotify.client import SpotifyClient, open_session
from spot_sync.spotify.models import (
    LIKED_SONGS_ID,
    AccountRole,
    Credential,
    LibraryInfo,
    PlaylistInfo,
    TrackItem,
)

__all__ = [
    "SpotifyClient",
    "open_session",
    "LIKED_SONGS_ID",
    "AccountRole",
    "Credential",
    "LibraryInfo",
    "PlaylistInfo",
    "TrackItem",
]
