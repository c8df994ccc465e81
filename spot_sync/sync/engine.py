"""
Sync orchestration.

SyncEngine is the single entry point of the synchronization core. It
checks that both accounts are connected, walks the selected libraries one
after another, dispatches each to the right transfer strategy and folds
the per-library results into a SyncSummary.

Failure Policy:
    - A missing credential raises MissingCredentialError before any
      network request is made.
    - Any error while transferring one library is logged and recorded as
      a FAILED TransferResult contributing zero items; the remaining
      libraries are still processed.

Worklist Binding:
    Every selection names the account it is read from. sync() binds the
    primary-side selections to the primary account, and the secondary-side
    selections to `secondary_source`, which defaults to the primary account
    as the web app this engine replaces did. Pass
    secondary_source=AccountRole.SECONDARY to read them from the secondary
    account instead, or call run() with explicit LibrarySelection values.

Usage:
    engine = SyncEngine(load_config())
    summary = await engine.sync(
        primary_token, secondary_token,
        ["liked_songs", "37i9dQZF1DXcBWIGoYBM5M"], [],
        direction="one-way"
    )
    print(summary.message)
"""

from collections.abc import Mapping, Sequence

from aiohttp import ClientSession

from spot_sync.core.config import Config
from spot_sync.core.exceptions import MissingCredentialError, SpotSyncError
from spot_sync.core.logger import get_logger, log_sync_failure
from spot_sync.spotify.client import SpotifyClient, open_session
from spot_sync.spotify.models import AccountRole, Credential
from spot_sync.sync.models import (
    Direction,
    FailureReason,
    LibrarySelection,
    SyncSummary,
    TransferResult,
)
from spot_sync.sync.strategies import LikedTracksStrategy, PlaylistStrategy, TransferStrategy

logger = get_logger(__name__)


def _as_credential(role: AccountRole, value: "Credential | str | None") -> Credential | None:
    """Bind a raw token (or Credential) to a role; None if absent or blank."""
    if isinstance(value, Credential):
        value = value.token
    if not value or not value.strip():
        return None
    return Credential(role=role, token=value.strip())


def _check_credentials(credentials: Mapping[AccountRole, Credential | None]) -> dict[AccountRole, Credential]:
    missing = [role.value for role in AccountRole if not credentials.get(role)]
    if missing:
        raise MissingCredentialError(missing)
    return {role: credentials[role] for role in AccountRole}


class SyncEngine:
    """
    Transfers selected libraries between two Spotify accounts.

    The configuration is injected at construction; the engine never reads
    config files or environment variables itself.

    Attributes:
        config: Application configuration.
        _session: Optional externally-owned aiohttp session. When None,
                  each run opens (and closes) its own session.
    """

    def __init__(self, config: Config, session: ClientSession | None = None) -> None:
        self.config = config
        self._session = session

    async def sync(
        self,
        primary: Credential | str | None,
        secondary: Credential | str | None,
        selected_primary: Sequence[str],
        selected_secondary: Sequence[str] = (),
        direction: Direction | str = Direction.ONE_WAY,
        frequency: str | None = None,
        secondary_source: AccountRole = AccountRole.PRIMARY
    ) -> SyncSummary:
        """
        Run a sync for the libraries selected on both accounts.

        Args:
            primary: Primary account token.
            secondary: Secondary account token.
            selected_primary: Library IDs selected on the primary account.
            selected_secondary: Library IDs selected on the secondary account.
                                Processed after the primary ones.
            direction: "one-way" or "two-way" (two-way is not implemented).
            frequency: Scheduling hint such as "daily". Accepted and ignored;
                       scheduling runs is the caller's concern.
            secondary_source: Account the secondary-side selections are read
                              from.

        Returns:
            SyncSummary. Never raises for per-library failures.

        Raises:
            MissingCredentialError: If either token is missing or blank.
                                    No network request is made.
            ValueError: If direction is not a valid value.
        """
        credentials = _check_credentials({
            AccountRole.PRIMARY: _as_credential(AccountRole.PRIMARY, primary),
            AccountRole.SECONDARY: _as_credential(AccountRole.SECONDARY, secondary),
        })
        direction = Direction.parse(direction)

        if frequency:
            logger.debug(f"Frequency hint '{frequency}' accepted; scheduling is not handled by the engine")

        if selected_secondary and secondary_source is AccountRole.PRIMARY:
            logger.warning(
                f"{len(selected_secondary)} secondary-side selection(s) will be read from the primary account"
            )

        selections = [LibrarySelection(library_id, AccountRole.PRIMARY) for library_id in selected_primary]
        selections += [LibrarySelection(library_id, secondary_source) for library_id in selected_secondary]

        return await self.run(selections, credentials, direction)

    async def run(
        self,
        selections: Sequence[LibrarySelection],
        credentials: Mapping[AccountRole, Credential | None],
        direction: Direction | str = Direction.ONE_WAY
    ) -> SyncSummary:
        """
        Transfer each selection, in order, and summarize.

        Args:
            selections: Libraries with their explicit source account.
            credentials: Credential per account role.
            direction: Requested direction.

        Returns:
            SyncSummary over all selections.

        Raises:
            MissingCredentialError: If a credential is missing.
        """
        credentials = _check_credentials(credentials)
        direction = Direction.parse(direction)

        logger.info(f"Starting {direction.value} sync of {len(selections)} libraries")

        if self._session is not None:
            client = SpotifyClient(self._session, self.config.spotify)
            results = await self._run_all(client, selections, credentials, direction)
        else:
            async with open_session(self.config.spotify) as session:
                client = SpotifyClient(session, self.config.spotify)
                results = await self._run_all(client, selections, credentials, direction)

        summary = SyncSummary.from_results(results, direction)
        logger.info(f"Sync completed: {summary.message}")
        return summary

    async def _run_all(
        self,
        client: SpotifyClient,
        selections: Sequence[LibrarySelection],
        credentials: Mapping[AccountRole, Credential],
        direction: Direction
    ) -> list[TransferResult]:
        liked = LikedTracksStrategy(client, self.config)
        playlist = PlaylistStrategy(client, self.config)

        results = []
        for selection in selections:
            # The sentinel is matched before anything remote happens
            strategy = liked if selection.is_liked_songs else playlist
            results.append(await self._transfer(strategy, selection, credentials, direction))
        return results

    @staticmethod
    async def _transfer(
        strategy: TransferStrategy,
        selection: LibrarySelection,
        credentials: Mapping[AccountRole, Credential],
        direction: Direction
    ) -> TransferResult:
        """Run one strategy, turning any error into a failed result."""
        library_id = selection.library_id
        try:
            return await strategy.transfer(selection, credentials, direction)
        except SpotSyncError as e:
            reason = FailureReason.from_error(e)
            log_sync_failure(logger, library_id, "library", reason.value, e.message)
            return TransferResult.failure(library_id, reason, e.message)
        except Exception as e:
            logger.exception(f"Unexpected error while syncing {library_id}")
            log_sync_failure(logger, library_id, "library", FailureReason.UNEXPECTED_ERROR.value, str(e))
            return TransferResult.failure(library_id, FailureReason.UNEXPECTED_ERROR, str(e))
