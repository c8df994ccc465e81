"""
Command-line interface for spot-sync.

This module implements the CLI using Click, giving a terminal front door
to the sync engine. rich-click is used for the output colors.

Commands:
    spot-sync list --account primary         List libraries of an account
    spot-sync sync --liked --playlist <id>   Copy libraries to the secondary account

Options (sync):
    --liked                         Include the primary account's Liked Songs
    --playlist <id>                 Primary playlist to copy (repeatable)
    --secondary-playlist <id>       Secondary-side selection (repeatable)
    --secondary-source <role>       Account secondary-side selections are read from
    --direction one-way|two-way     Sync direction (two-way is not implemented)
    --frequency <hint>              Scheduling hint, accepted and ignored

Credentials:
    Access tokens are obtained outside this tool (OAuth authorization code
    flow) and read from the 'credentials' section of config.yaml or from
    the SPOTIFY_PRIMARY_TOKEN / SPOTIFY_SECONDARY_TOKEN environment
    variables. A .env file in the current directory is loaded first.

Usage:
    spot-sync list --account secondary
    spot-sync sync --liked --playlist 37i9dQZF1DXcBWIGoYBM5M
"""

import asyncio
import os
import sys
from pathlib import Path
from typing import Optional

import rich_click as click
from dotenv import find_dotenv, load_dotenv

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.MAX_WIDTH = 100

from spot_sync.core import (
    Config,
    ConfigError,
    MissingCredentialError,
    SpotifyError,
    get_logger,
    load_config,
    setup_logging,
    shutdown_logging,
)
from spot_sync.spotify import (
    LIKED_SONGS_ID,
    AccountRole,
    Credential,
    LibraryInfo,
    SpotifyClient,
    open_session,
)
from spot_sync.sync import Direction, SyncEngine, SyncSummary, list_libraries

logger = get_logger(__name__)


__version__ = "0.1.0"

TOKEN_ENV_VARS = {
    AccountRole.PRIMARY: "SPOTIFY_PRIMARY_TOKEN",
    AccountRole.SECONDARY: "SPOTIFY_SECONDARY_TOKEN",
}


@click.group()
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    metavar="<config.yaml>",
    help="Configuration file (default: ./config.yaml if present)"
)
@click.version_option(__version__, prog_name="spot-sync")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path]) -> None:
    """
    spot-sync: Copy Liked Songs and playlists between two Spotify accounts.
    """
    load_dotenv(find_dotenv(usecwd=True))

    try:
        config = load_config(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e.message}", err=True)
        sys.exit(1)

    setup_logging(config.logging.directory, config.logging.level)
    ctx.call_on_close(shutdown_logging)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@cli.command("list")
@click.option(
    "--account",
    type=click.Choice([role.value for role in AccountRole]),
    default=AccountRole.PRIMARY.value,
    show_default=True,
    help="Account whose libraries are listed"
)
@click.pass_context
def list_command(ctx: click.Context, account: str) -> None:
    """List the Liked Songs entry and all playlists of an account."""
    config: Config = ctx.obj["config"]
    role = AccountRole(account)

    token = _resolve_token(config, role)
    if not token:
        click.echo(f"No token for the {role.value} account (set {TOKEN_ENV_VARS[role]})", err=True)
        sys.exit(1)

    try:
        libraries = asyncio.run(_list(config, Credential(role=role, token=token)))
    except SpotifyError as e:
        click.echo(f"Failed to fetch playlists: {e.message}", err=True)
        sys.exit(1)

    for library in libraries:
        click.echo(f"{library.id:<24} {library.total:>6}  {library.name}  ({library.owner})")


@cli.command("sync")
@click.option("--liked", is_flag=True, help="Include the primary account's Liked Songs")
@click.option(
    "--playlist", "playlists",
    multiple=True,
    metavar="<playlist-id>",
    help="Primary playlist to copy (repeatable)"
)
@click.option(
    "--secondary-playlist", "secondary_playlists",
    multiple=True,
    metavar="<playlist-id>",
    help="Library selected on the secondary account (repeatable)"
)
@click.option(
    "--secondary-source",
    type=click.Choice([role.value for role in AccountRole]),
    default=AccountRole.PRIMARY.value,
    show_default=True,
    help="Account that secondary-side selections are read from"
)
@click.option(
    "--direction",
    type=click.Choice([direction.value for direction in Direction]),
    default=Direction.ONE_WAY.value,
    show_default=True,
    help="Sync direction (two-way is not implemented yet)"
)
@click.option("--frequency", default=None, metavar="<hint>", help="Scheduling hint, e.g. daily")
@click.pass_context
def sync_command(
    ctx: click.Context,
    liked: bool,
    playlists: tuple[str, ...],
    secondary_playlists: tuple[str, ...],
    secondary_source: str,
    direction: str,
    frequency: Optional[str]
) -> None:
    """
    Copy the selected libraries from the primary to the secondary account.

    \b
    Every run creates NEW playlists on the secondary account; running the
    same sync twice creates duplicates.
    """
    config: Config = ctx.obj["config"]

    selected = ([LIKED_SONGS_ID] if liked else []) + list(playlists)
    if not selected and not secondary_playlists:
        raise click.UsageError("Select at least one library (--liked, --playlist or --secondary-playlist)")

    engine = SyncEngine(config)
    try:
        summary = asyncio.run(engine.sync(
            _resolve_token(config, AccountRole.PRIMARY),
            _resolve_token(config, AccountRole.SECONDARY),
            selected,
            list(secondary_playlists),
            direction=direction,
            frequency=frequency,
            secondary_source=AccountRole(secondary_source)
        ))
    except MissingCredentialError as e:
        missing = ", ".join(TOKEN_ENV_VARS[AccountRole(role)] for role in e.missing_roles)
        click.echo(f"{e.message} (missing: {missing})", err=True)
        sys.exit(1)

    _print_summary(summary)


async def _list(config: Config, credential: Credential) -> list[LibraryInfo]:
    async with open_session(config.spotify) as session:
        return await list_libraries(SpotifyClient(session, config.spotify), credential)


def _resolve_token(config: Config, role: AccountRole) -> str | None:
    """Token from config.yaml, falling back to the environment."""
    if role is AccountRole.PRIMARY:
        token = config.credentials.primary_token
    else:
        token = config.credentials.secondary_token
    return token or os.environ.get(TOKEN_ENV_VARS[role]) or None


def _print_summary(summary: SyncSummary) -> None:
    """Print per-library results and the totals."""
    for result in summary.results:
        line = f"{result.library_id:<24} {result.status.value:<12} {result.items_transferred:>6}/{result.items_fetched}"
        if result.reason is not None:
            line += f"  {result.reason.value}: {result.detail}"
        elif result.failed_chunks:
            line += f"  ({result.failed_chunks} chunk(s) failed)"
        elif result.detail:
            line += f"  {result.detail}"
        click.echo(line)

    click.echo(summary.message)


def main() -> None:
    """
    Entry point for the CLI.

    This function is called when running `spot-sync` from the command line.
    """
    cli()


if __name__ == "__main__":
    main()
