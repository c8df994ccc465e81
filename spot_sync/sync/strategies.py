"""
Library transfer strategies.

Two algorithms, one per kind of library, both composed from the
Paginator (read the whole source library) and the Batcher (write it to
the destination in capped chunks).

LikedTracksStrategy:
    FETCH_SOURCE -> (empty? -> DONE(0)) -> BATCH_WRITE_DESTINATION -> DONE(count)
    Reads GET /me/tracks on the source account, saves track IDs with
    PUT /me/tracks on the destination account.

PlaylistStrategy:
    FETCH_METADATA_AND_TRACKS (concurrently) -> CREATE_DESTINATION_PLAYLIST
    -> FILTER_VALID_TRACK_URIS -> (empty? -> DONE(0)) -> BATCH_WRITE_TRACKS
    -> DONE(count)
    A new destination playlist is created on EVERY run; no lookup of an
    existing playlist with the same name is made, so repeated runs create
    duplicate playlists.

Both strategies return TransferResult.unsupported() for Direction.TWO_WAY
without touching the network.

Errors while reading the source or creating the destination playlist
propagate as SpotifyError; the engine turns them into a failed
TransferResult for that library.

If either concurrent playlist read fails, the other one is cancelled and
awaited before the error propagates.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Mapping

from spot_sync.core.config import Config
from spot_sync.core.logger import format_transfer_message, get_logger
from spot_sync.spotify.client import SpotifyClient
from spot_sync.spotify.models import AccountRole, Credential, TrackItem
from spot_sync.sync.batcher import Batcher
from spot_sync.sync.models import Direction, LibrarySelection, TransferResult
from spot_sync.sync.paginator import Paginator

logger = get_logger(__name__)


class TransferStrategy(ABC):
    """
    Base class for library transfer strategies.

    Attributes:
        _client: Spotify client shared by both accounts.
        _config: Application configuration.
    """

    def __init__(self, client: SpotifyClient, config: Config) -> None:
        self._client = client
        self._config = config

    async def transfer(
        self,
        selection: LibrarySelection,
        credentials: Mapping[AccountRole, Credential],
        direction: Direction
    ) -> TransferResult:
        """
        Transfer one library from selection.source to selection.destination.

        Args:
            selection: The library and the account it is read from.
            credentials: Credential per account role.
            direction: Requested direction.

        Returns:
            TransferResult for the library.

        Raises:
            SpotifyError: If reading the source (or creating the destination
                          playlist) fails.
        """
        if direction is not Direction.ONE_WAY:
            logger.warning(f"{selection.library_id}: {direction.value} sync is not implemented, skipping")
            return TransferResult.unsupported(selection.library_id, direction)

        return await self._transfer_one_way(
            selection,
            source=credentials[selection.source],
            destination=credentials[selection.destination]
        )

    @abstractmethod
    async def _transfer_one_way(
        self,
        selection: LibrarySelection,
        source: Credential,
        destination: Credential
    ) -> TransferResult:
        """Copy one library from the source credential to the destination credential."""

    def _batcher(self, library_id: str) -> Batcher:
        return Batcher(self._config.spotify.batch_size, library_id=library_id)


class LikedTracksStrategy(TransferStrategy):
    """Copies the source account's Liked Songs into the destination's Liked Songs."""

    async def _transfer_one_way(
        self,
        selection: LibrarySelection,
        source: Credential,
        destination: Credential
    ) -> TransferResult:
        library_id = selection.library_id

        # The library can exceed one page, so the walk must be exhaustive
        paginator = Paginator(self._client, source)
        entries = await paginator.fetch_all(self._client.saved_tracks_url())
        logger.info(f"Fetched {len(entries)} liked songs from {selection.source.value} account")

        track_ids = []
        for entry in entries:
            item = TrackItem.from_spotify_api(entry)
            if item is not None and item.id:
                track_ids.append(item.id)

        skipped = len(entries) - len(track_ids)
        if skipped:
            logger.debug(f"{library_id}: skipped {skipped} entries without a track ID")

        if not track_ids:
            return TransferResult.success(library_id, items_transferred=0, items_fetched=len(entries))

        batch = await self._batcher(library_id).write(
            track_ids,
            lambda chunk: self._client.save_tracks(chunk, destination)
        )

        logger.info(format_transfer_message("Liked Songs", batch.items_transferred, len(track_ids)))
        return TransferResult.success(
            library_id,
            items_transferred=batch.items_transferred,
            items_fetched=len(entries),
            failed_chunks=batch.failed_chunks
        )


class PlaylistStrategy(TransferStrategy):
    """Recreates a source playlist on the destination account."""

    async def _transfer_one_way(
        self,
        selection: LibrarySelection,
        source: Credential,
        destination: Credential
    ) -> TransferResult:
        playlist_id = selection.library_id

        # Metadata and tracks have no ordering dependency: fetch both, await both
        paginator = Paginator(self._client, source)
        metadata_task = asyncio.ensure_future(self._client.playlist(playlist_id, source))
        tracks_task = asyncio.ensure_future(paginator.fetch_all(self._client.playlist_tracks_url(playlist_id)))
        try:
            playlist, entries = await asyncio.gather(metadata_task, tracks_task)
        except BaseException:
            # A failed read stops the other one before the error propagates
            for task in (metadata_task, tracks_task):
                task.cancel()
            await asyncio.gather(metadata_task, tracks_task, return_exceptions=True)
            raise

        logger.info(f"Fetched playlist '{playlist.name}' with {len(entries)} tracks")

        created = await self._client.create_playlist(
            name=playlist.name,
            description=f"{self._config.sync.description_prefix}{playlist.description}",
            public=self._config.sync.public_playlists,
            credential=destination
        )
        logger.debug(f"Created playlist '{created.name}' ({created.id}) on {selection.destination.value} account")

        # Local files and unavailable tracks come back without a track or URI
        uris = []
        for entry in entries:
            item = TrackItem.from_spotify_api(entry)
            if item is not None and item.uri:
                uris.append(item.uri)

        skipped = len(entries) - len(uris)
        if skipped:
            logger.debug(f"{playlist_id}: skipped {skipped} entries without a track URI")

        if not uris:
            return TransferResult.success(
                playlist_id, items_transferred=0, items_fetched=len(entries), destination_id=created.id
            )

        batch = await self._batcher(playlist_id).write(
            uris,
            lambda chunk: self._client.add_playlist_items(created.id, chunk, destination)
        )

        logger.info(format_transfer_message(playlist.name, batch.items_transferred, len(uris)))
        return TransferResult.success(
            playlist_id,
            items_transferred=batch.items_transferred,
            items_fetched=len(entries),
            failed_chunks=batch.failed_chunks,
            destination_id=created.id
        )
