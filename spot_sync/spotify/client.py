"""
Asynchronous Spotify Web API client for spot-sync.

This module wraps the handful of Spotify Web API endpoints the sync
engine needs on top of an aiohttp ClientSession.

Unlike a single-user client, one SpotifyClient serves BOTH accounts of a
sync: every method takes the Credential of the account it acts on, and the
bearer token is attached per request. The client holds no token state.

Endpoints:
    GET  /me/tracks                  Saved tracks (Liked Songs), paginated
    PUT  /me/tracks                  Save up to 50 tracks by ID
    GET  /me/playlists               Current user's playlists, paginated
    POST /me/playlists               Create a playlist
    GET  /playlists/{id}             Playlist metadata
    GET  /playlists/{id}/tracks      Playlist tracks, paginated
    POST /playlists/{id}/tracks      Add up to 100 tracks by URI

Error Handling:
    Every non-2xx response raises SpotifyError with the HTTP status.
    Transport failures (connection errors, timeouts) are wrapped in
    SpotifyError with is_transport_error set. No retries are made: rate-limit
    responses (429) are reported, not waited out.

Usage:
    async with open_session(config.spotify) as session:
        client = SpotifyClient(session, config.spotify)
        page = await client.get_page(client.saved_tracks_url(), credential)
"""

import asyncio
from http import HTTPStatus
from typing import Any

import aiohttp
from aiohttp import ClientResponse, ClientSession

from spot_sync.core.config import SpotifyConfig
from spot_sync.core.exceptions import SpotifyError
from spot_sync.core.logger import get_logger
from spot_sync.spotify.models import Credential, PlaylistInfo

logger = get_logger(__name__)


# Maximum items accepted by a single write request
MAX_SAVE_TRACKS = 50
MAX_PLAYLIST_ADD = 100


def open_session(config: SpotifyConfig) -> ClientSession:
    """
    Create the aiohttp session used for one sync run.

    Args:
        config: Spotify settings (request timeout).

    Returns:
        A new ClientSession. Use it as an async context manager so that
        it is closed when the run finishes.
    """
    return ClientSession(
        timeout=aiohttp.ClientTimeout(total=config.request_timeout),
        headers={"Accept": "application/json"}
    )


class SpotifyClient:
    """
    Spotify Web API client bound to an aiohttp session.

    Attributes:
        _session: The aiohttp session used for every request.
        _config: Spotify settings (base URL, page size).

    Thread Safety:
        Not thread-safe. Use from a single event loop.
    """

    def __init__(self, session: ClientSession, config: SpotifyConfig) -> None:
        self._session = session
        self._config = config

    @property
    def base_url(self) -> str:
        return self._config.api_base_url

    # =========================================================================
    # URL helpers
    # =========================================================================

    def saved_tracks_url(self, limit: int | None = None) -> str:
        """First page URL of the current user's saved tracks."""
        return f"{self.base_url}/me/tracks?limit={limit or self._config.page_size}"

    def user_playlists_url(self, limit: int | None = None) -> str:
        """First page URL of the current user's playlists."""
        return f"{self.base_url}/me/playlists?limit={limit or self._config.page_size}"

    def playlist_tracks_url(self, playlist_id: str, limit: int | None = None) -> str:
        """First page URL of a playlist's tracks."""
        return f"{self.base_url}/playlists/{playlist_id}/tracks?limit={limit or self._config.page_size}"

    # =========================================================================
    # Read operations
    # =========================================================================

    async def get_page(self, url: str, credential: Credential) -> dict[str, Any]:
        """
        Fetch one page of a paginated listing.

        Args:
            url: Absolute URL, either a first-page URL or the "next" cursor
                 returned by a previous page.
            credential: Account to read with.

        Returns:
            The page object: "items", "total", "next" (None on the last page).

        Raises:
            SpotifyError: On non-2xx response or transport failure.
        """
        return await self._request("GET", url, credential)

    async def playlist(self, playlist_id: str, credential: Credential) -> PlaylistInfo:
        """
        Get playlist metadata.

        Args:
            playlist_id: Spotify playlist ID.
            credential: Account to read with.

        Returns:
            PlaylistInfo (name, description, owner, total).

        Raises:
            SpotifyError: If the playlist is not found, not accessible,
                          or the response is malformed.
        """
        data = await self._request("GET", f"{self.base_url}/playlists/{playlist_id}", credential)
        if "id" not in data:
            raise SpotifyError(
                f"Unexpected playlist response for: {playlist_id}",
                details={"playlist_id": playlist_id}
            )
        return PlaylistInfo.from_spotify_api(data)

    # =========================================================================
    # Write operations
    # =========================================================================

    async def create_playlist(
        self,
        name: str,
        description: str,
        public: bool,
        credential: Credential
    ) -> PlaylistInfo:
        """
        Create a new playlist on the credential's account.

        Returns:
            PlaylistInfo of the created playlist, including its new ID.

        Raises:
            SpotifyError: On failure or if no playlist ID was returned.
        """
        data = await self._request(
            "POST",
            f"{self.base_url}/me/playlists",
            credential,
            json={"name": name, "description": description, "public": public}
        )
        if "id" not in data:
            raise SpotifyError(
                f"Playlist creation returned no ID: {name}",
                details={"playlist_name": name}
            )
        return PlaylistInfo.from_spotify_api(data)

    async def save_tracks(self, track_ids: list[str], credential: Credential) -> None:
        """
        Save tracks to the credential's Liked Songs.

        Saving an already-saved track is a no-op on Spotify's side.

        Args:
            track_ids: Up to 50 Spotify track IDs.
            credential: Destination account.

        Raises:
            ValueError: If more than 50 IDs are given.
            SpotifyError: On failure (the whole request failed).
        """
        if len(track_ids) > MAX_SAVE_TRACKS:
            raise ValueError(f"At most {MAX_SAVE_TRACKS} tracks can be saved per request")
        await self._request("PUT", f"{self.base_url}/me/tracks", credential, json={"ids": track_ids})

    async def add_playlist_items(
        self,
        playlist_id: str,
        uris: list[str],
        credential: Credential
    ) -> str | None:
        """
        Append tracks to a playlist.

        Args:
            playlist_id: Destination playlist ID.
            uris: Up to 100 Spotify track URIs.
            credential: Account owning the playlist.

        Returns:
            The playlist snapshot ID returned by Spotify, if any.

        Raises:
            ValueError: If more than 100 URIs are given.
            SpotifyError: On failure (the whole request failed).
        """
        if len(uris) > MAX_PLAYLIST_ADD:
            raise ValueError(f"At most {MAX_PLAYLIST_ADD} items can be added per request")
        data = await self._request(
            "POST",
            f"{self.base_url}/playlists/{playlist_id}/tracks",
            credential,
            json={"uris": uris}
        )
        return data.get("snapshot_id")

    # =========================================================================
    # Internals
    # =========================================================================

    async def _request(
        self,
        method: str,
        url: str,
        credential: Credential,
        json: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """
        Send one request and return the JSON body.

        The Authorization header is built from the credential for this
        request only. Only method, URL and status are logged.
        """
        logger.debug(f"{method:<5} {url}")

        try:
            async with self._session.request(
                method, url, headers=credential.authorization_header, json=json
            ) as response:
                if not response.ok:
                    raise await self._error_from_response(response, method, url)
                return await self._response_as_json(response)
        except aiohttp.ClientError as e:
            raise SpotifyError(
                f"Request failed: {method} {url}: {e}",
                details={"url": url, "original_error": str(e)},
                is_transport_error=True
            ) from e
        except asyncio.TimeoutError as e:
            raise SpotifyError(
                f"Request timed out: {method} {url}",
                details={"url": url},
                is_transport_error=True
            ) from e

    @staticmethod
    async def _error_from_response(response: ClientResponse, method: str, url: str) -> SpotifyError:
        """Build a SpotifyError from a non-2xx response."""
        body = await SpotifyClient._response_as_json(response)
        error = body.get("error")
        message = error.get("message") if isinstance(error, dict) else None
        if not message:
            try:
                message = HTTPStatus(response.status).phrase
            except ValueError:
                message = "Unknown status"

        status = response.status
        logger.debug(f"{method:<5} {url} -> {status} {message}")

        return SpotifyError(
            f"Spotify returned {status} for {method} {url}: {message}",
            details={"url": url, "http_status": status},
            status=status,
            is_auth_error=status == 401,
            is_rate_limit=status == 429
        )

    @staticmethod
    async def _response_as_json(response: ClientResponse) -> dict[str, Any]:
        """Format the response to JSON, {} for empty or non-JSON bodies."""
        try:
            data = await response.json(content_type=None)
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}
