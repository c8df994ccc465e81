"""
Data models for Spotify entities.

This module defines immutable dataclasses representing the Spotify objects
the sync engine reads and writes: account credentials, track entries from
library listings, and playlists.

Design Decisions:
    - All dataclasses are frozen (immutable) to prevent accidental modification
    - Fields match Spotify API response structure where possible
    - Parsing is lenient: a listing entry without a nested track yields None
      instead of raising, since Spotify returns such entries for local files
      and region-restricted tracks
    - A Credential never exposes its token through repr() or str()

Usage:
    from spot_sync.spotify.models import TrackItem, PlaylistInfo

    item = TrackItem.from_spotify_api(page["items"][0])
    if item is not None and item.uri:
        ...
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# Sentinel library identifier for the saved-tracks collection.
# It has no Spotify id and is matched exactly, before any remote call.
LIKED_SONGS_ID = "liked_songs"
LIKED_SONGS_NAME = "Liked Songs"


class AccountRole(str, Enum):
    """The two accounts taking part in a sync."""
    PRIMARY = "primary"
    SECONDARY = "secondary"

    @property
    def other(self) -> "AccountRole":
        """The opposite role, i.e. the destination for a given source."""
        return AccountRole.SECONDARY if self is AccountRole.PRIMARY else AccountRole.PRIMARY


@dataclass(frozen=True)
class Credential:
    """
    Opaque bearer token bound to one account role.

    Created externally at authorization time and supplied per call.
    The engine treats it as read-only and never logs it.

    Attributes:
        role: Which account the token belongs to.
        token: The OAuth access token. Hidden from repr().
    """
    role: AccountRole
    token: str = field(repr=False)

    def __bool__(self) -> bool:
        return bool(self.token and self.token.strip())

    def __str__(self) -> str:
        return f"<{self.role.value} credential>"

    @property
    def authorization_header(self) -> dict[str, str]:
        """Headers authorising a request with this credential."""
        return {"Authorization": f"Bearer {self.token}"}


@dataclass(frozen=True)
class TrackItem:
    """
    A unit of transfer.

    Attributes:
        id: Spotify track ID, used by the saved-tracks endpoints.
            None for local files.
        uri: Spotify track URI ("spotify:track:<id>"), used by the
             playlist endpoints. None if the entry carried no URI.
        name: Track title, for diagnostics only.
    """
    id: str | None
    uri: str | None
    name: str = ""

    @classmethod
    def from_spotify_api(cls, entry: dict[str, Any]) -> "TrackItem | None":
        """
        Create a TrackItem from a saved-track or playlist-track entry.

        Both listings wrap the track object: {"added_at": ..., "track": {...}}.

        Args:
            entry: One element of a listing page's "items" array.

        Returns:
            TrackItem, or None when the entry has no nested track object.
        """
        track = entry.get("track") if isinstance(entry, dict) else None
        if not isinstance(track, dict):
            return None

        return cls(
            id=track.get("id") or None,
            uri=track.get("uri") or None,
            name=track.get("name") or ""
        )


@dataclass(frozen=True)
class PlaylistInfo:
    """
    Playlist metadata (without its tracks).

    Attributes:
        id: Spotify playlist ID.
        name: Playlist name.
        description: Playlist description, empty string when Spotify returns null.
        total: Number of tracks as reported by Spotify.
        owner: Owner display name.
        public: Whether the playlist is public (None if unknown).
    """
    id: str
    name: str
    description: str = ""
    total: int = 0
    owner: str = ""
    public: bool | None = None

    @classmethod
    def from_spotify_api(cls, data: dict[str, Any]) -> "PlaylistInfo":
        """
        Create PlaylistInfo from a Spotify playlist object.

        Args:
            data: Response of GET /playlists/{id} or an element of
                  GET /me/playlists "items".
        """
        tracks = data.get("tracks") or {}
        owner = data.get("owner") or {}
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            description=data.get("description") or "",
            total=tracks.get("total") or 0,
            owner=owner.get("display_name") or owner.get("id") or "",
            public=data.get("public")
        )


@dataclass(frozen=True)
class LibraryInfo:
    """
    One selectable library of an account.

    Either a regular playlist or the synthetic liked-songs entry.

    Attributes:
        id: Playlist ID or LIKED_SONGS_ID.
        name: Display name.
        total: Number of tracks.
        owner: Owner display name ("You" for liked songs).
    """
    id: str
    name: str
    total: int
    owner: str = ""

    @property
    def is_liked_songs(self) -> bool:
        return self.id == LIKED_SONGS_ID

    @classmethod
    def liked_songs(cls, total: int) -> "LibraryInfo":
        return cls(id=LIKED_SONGS_ID, name=LIKED_SONGS_NAME, total=total, owner="You")

    @classmethod
    def from_playlist(cls, playlist: PlaylistInfo) -> "LibraryInfo":
        return cls(id=playlist.id, name=playlist.name, total=playlist.total, owner=playlist.owner)
