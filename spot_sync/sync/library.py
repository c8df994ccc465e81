"""
Library listing for one account.

Lists what a user can select for sync: the synthetic Liked Songs entry
first, followed by every playlist of the account.

The liked-songs total is a secondary lookup: if it fails, the failure is
logged and the entry is reported with 0 tracks instead of failing the
whole listing. A failing playlist listing raises SpotifyError.
"""

from spot_sync.core.exceptions import SpotifyError
from spot_sync.core.logger import get_logger
from spot_sync.spotify.client import SpotifyClient
from spot_sync.spotify.models import Credential, LibraryInfo, PlaylistInfo
from spot_sync.sync.paginator import Paginator

logger = get_logger(__name__)


async def liked_songs_total(client: SpotifyClient, credential: Credential) -> int:
    """
    Number of saved tracks of the account, 0 if it cannot be fetched.

    Only the first page (limit=1) is requested; "total" covers all pages.
    """
    try:
        page = await client.get_page(client.saved_tracks_url(limit=1), credential)
    except SpotifyError as e:
        logger.warning(f"Could not fetch Liked Songs total for {credential.role.value} account: {e.message}")
        return 0
    return page.get("total") or 0


async def list_libraries(client: SpotifyClient, credential: Credential) -> list[LibraryInfo]:
    """
    List the selectable libraries of an account.

    Args:
        client: Spotify client.
        credential: Account to list.

    Returns:
        Liked Songs entry followed by all playlists, in Spotify's order.

    Raises:
        SpotifyError: If the playlist listing fails.
    """
    total = await liked_songs_total(client, credential)

    paginator = Paginator(client, credential)
    playlists = [
        LibraryInfo.from_playlist(PlaylistInfo.from_spotify_api(data))
        async for data in paginator.items(client.user_playlists_url())
        if isinstance(data, dict) and data.get("id")
    ]
    logger.debug(f"Listed {len(playlists)} playlists for {credential.role.value} account")

    return [LibraryInfo.liked_songs(total), *playlists]
