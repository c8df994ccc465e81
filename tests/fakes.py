"""Fake Spotify client and Spotify-shaped test data"""

from typing import Any

from spot_sync.core.exceptions import SpotifyError
from spot_sync.spotify.models import Credential, PlaylistInfo

API = "https://api.spotify.com/v1"


def track_entry(index: int, with_id: bool = True, with_uri: bool = True) -> dict[str, Any]:
    """A saved-track / playlist-track entry as Spotify returns it"""
    track = {"name": f"Song {index}", "type": "track"}
    if with_id:
        track["id"] = f"track{index:04d}"
    if with_uri:
        track["uri"] = f"spotify:track:track{index:04d}"
    return {"added_at": "2024-01-01T00:00:00Z", "track": track}


def listing_pages(first_url: str, entries: list[dict], page_size: int = 50) -> dict[str, dict]:
    """
    Split entries into Spotify-style pages keyed by request URL.

    The first page is served at first_url, later pages at
    "<path>?offset=N&limit=page_size" as Spotify builds its "next" cursors.
    """
    path = first_url.split("?")[0]
    pages = {}
    offsets = list(range(0, len(entries), page_size)) or [0]
    for position, offset in enumerate(offsets):
        url = first_url if offset == 0 else f"{path}?offset={offset}&limit={page_size}"
        has_next = position + 1 < len(offsets)
        pages[url] = {
            "href": url,
            "items": entries[offset:offset + page_size],
            "limit": page_size,
            "offset": offset,
            "total": len(entries),
            "next": f"{path}?offset={offset + page_size}&limit={page_size}" if has_next else None,
        }
    return pages


class FakeSpotifyClient:
    """
    In-memory stand-in for SpotifyClient.

    Listing pages are served from `pages` (url -> page). Every call is
    recorded in `calls` as (method name, arguments...).
    """

    base_url = API

    def __init__(self, pages: dict[str, dict] | None = None, playlists: dict[str, dict] | None = None):
        self.pages = pages or {}
        self.playlists = playlists or {}
        self.calls: list[tuple] = []
        self.failing_pages: set[str] = set()
        self.failing_writes: set[int] = set()
        self.created = 0
        self._writes = 0

    def saved_tracks_url(self, limit: int | None = None) -> str:
        return f"{API}/me/tracks?limit={limit or 50}"

    def user_playlists_url(self, limit: int | None = None) -> str:
        return f"{API}/me/playlists?limit={limit or 50}"

    def playlist_tracks_url(self, playlist_id: str, limit: int | None = None) -> str:
        return f"{API}/playlists/{playlist_id}/tracks?limit={limit or 50}"

    async def get_page(self, url: str, credential: Credential) -> dict:
        self.calls.append(("get_page", url, credential.role))
        if url in self.failing_pages or url not in self.pages:
            raise SpotifyError(f"Spotify returned 500 for GET {url}", status=500)
        return self.pages[url]

    async def playlist(self, playlist_id: str, credential: Credential) -> PlaylistInfo:
        self.calls.append(("playlist", playlist_id, credential.role))
        if playlist_id not in self.playlists:
            raise SpotifyError(f"Spotify returned 404 for GET {playlist_id}", status=404)
        return PlaylistInfo.from_spotify_api(self.playlists[playlist_id])

    async def create_playlist(self, name: str, description: str, public: bool, credential: Credential) -> PlaylistInfo:
        self.created += 1
        self.calls.append(("create_playlist", name, description, public, credential.role))
        return PlaylistInfo(id=f"created{self.created}", name=name, description=description)

    async def save_tracks(self, track_ids: list[str], credential: Credential) -> None:
        self.calls.append(("save_tracks", list(track_ids), credential.role))
        self._fail_write_if_requested()

    async def add_playlist_items(self, playlist_id: str, uris: list[str], credential: Credential) -> str:
        self.calls.append(("add_playlist_items", playlist_id, list(uris), credential.role))
        self._fail_write_if_requested()
        return "snapshot"

    def calls_to(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]

    def _fail_write_if_requested(self) -> None:
        index = self._writes
        self._writes += 1
        if index in self.failing_writes:
            raise SpotifyError("Spotify returned 502 for write", status=502)
