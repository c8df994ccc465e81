"""
Cursor-based pagination over Spotify listing endpoints.

Spotify listings return one page at a time:

    {"items": [...], "total": 120, "next": "https://.../me/tracks?offset=50&limit=50"}

and "next" is null on the last page. The Paginator follows "next" until it
is absent and yields the items in the order Spotify returned them.

Pages are fetched strictly one after another to stay under the rate limit.
A failing page raises SpotifyError to the caller, which decides whether the
whole library fails or the listing degrades.

Usage:
    paginator = Paginator(client, credential)
    items = await paginator.fetch_all(client.saved_tracks_url())
"""

from collections.abc import AsyncIterator
from typing import Any, Protocol

from spot_sync.core.logger import get_logger
from spot_sync.spotify.models import Credential

logger = get_logger(__name__)


class PageFetcher(Protocol):
    async def get_page(self, url: str, credential: Credential) -> dict[str, Any]: ...


class Paginator:
    """
    Walks a cursor-based listing endpoint exhaustively.

    Attributes:
        pages_fetched: Number of pages fetched by the last walk.
    """

    def __init__(self, client: PageFetcher, credential: Credential) -> None:
        self._client = client
        self._credential = credential
        self.pages_fetched = 0

    async def pages(self, first_url: str) -> AsyncIterator[dict[str, Any]]:
        """
        Yield every page, starting at first_url.

        Raises:
            SpotifyError: If any page request fails. Pages already yielded
                          stay yielded; no further page is requested.
        """
        self.pages_fetched = 0
        url: str | None = first_url

        while url:
            page = await self._client.get_page(url, self._credential)
            self.pages_fetched += 1
            yield page
            url = page.get("next")

    async def items(self, first_url: str) -> AsyncIterator[Any]:
        """Yield every item of every page, in order."""
        async for page in self.pages(first_url):
            for item in page.get("items") or []:
                yield item

    async def fetch_all(self, first_url: str) -> list[Any]:
        """
        Materialize the complete listing.

        Returns:
            Concatenation of all pages' items, in original order.
        """
        all_items = [item async for item in self.items(first_url)]
        logger.debug(f"Fetched {len(all_items)} items in {self.pages_fetched} pages")
        return all_items
