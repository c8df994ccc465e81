"""
Configuration management for spot-sync.

This module handles loading, validating, and providing access to the
application configuration stored in config.yaml.

The configuration file contains:
    - Spotify Web API settings (base URL, page size, batch size, timeout)
    - Sync behavior (provenance description prefix, playlist visibility)
    - Logging settings (log directory, console level)
    - Optional access tokens for the primary and secondary accounts

Unlike the Spotify credentials of a client-credentials app, every section
is optional: a missing config.yaml yields the defaults below. The engine
receives the resulting Config object explicitly and never reads the file
or the environment itself.

Example config.yaml:
    spotify:
      api_base_url: "https://api.spotify.com/v1"
      page_size: 50
      batch_size: 50
      request_timeout: 30

    sync:
      description_prefix: "Synced from primary account - "
      public_playlists: false

    logging:
      directory: "~/.spot-sync/logs"
      level: "INFO"

    credentials:
      primary_token: null    # or SPOTIFY_PRIMARY_TOKEN in the environment
      secondary_token: null  # or SPOTIFY_SECONDARY_TOKEN in the environment
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from spot_sync.core.exceptions import ConfigError


# Default configuration file name (looked up in current working directory)
CONFIG_FILENAME = "config.yaml"

DEFAULT_API_BASE_URL = "https://api.spotify.com/v1"

# Spotify documents 50 as the maximum for /me/tracks listing and saving
SPOTIFY_MAX_PAGE_SIZE = 50
SPOTIFY_MAX_BATCH_SIZE = 50

DEFAULT_DESCRIPTION_PREFIX = "Synced from primary account - "

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class SpotifyConfig:
    """
    Spotify Web API settings.

    Attributes:
        api_base_url: Base URL of the Web API, without trailing slash.
        page_size: Items requested per listing page (1-50).
        batch_size: Items sent per write request (1-50).
        request_timeout: Total timeout in seconds for one HTTP request.
    """
    api_base_url: str = DEFAULT_API_BASE_URL
    page_size: int = SPOTIFY_MAX_PAGE_SIZE
    batch_size: int = SPOTIFY_MAX_BATCH_SIZE
    request_timeout: float = 30.0


@dataclass(frozen=True)
class SyncConfig:
    """
    Sync behavior settings.

    Attributes:
        description_prefix: Prepended to the source description of every
                            playlist created on the destination account.
        public_playlists: Visibility of created playlists. Default: private.
    """
    description_prefix: str = DEFAULT_DESCRIPTION_PREFIX
    public_playlists: bool = False


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging settings.

    Attributes:
        directory: Where log files are written. None disables file logging.
        level: Console log level name.
    """
    directory: Path | None = None
    level: str = "INFO"


@dataclass(frozen=True)
class CredentialsConfig:
    """
    Optional access tokens.

    Tokens are opaque bearer strings obtained by an external OAuth flow.
    They are only read by the CLI, never by the sync engine itself.
    """
    primary_token: str | None = field(default=None, repr=False)
    secondary_token: str | None = field(default=None, repr=False)


@dataclass(frozen=True)
class Config:
    """
    Complete application configuration.

    This is the main configuration object that aggregates all configuration
    sections. It is created by load_config() and should be treated as
    immutable (frozen dataclass).

    Example:
        config = load_config()
        engine = SyncEngine(config)
    """
    spotify: SpotifyConfig = field(default_factory=SpotifyConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    credentials: CredentialsConfig = field(default_factory=CredentialsConfig)


def load_config(config_path: Path | None = None) -> Config:
    """
    Load and validate configuration from config.yaml.

    Args:
        config_path: Optional explicit path to config file.
                     If None, looks for config.yaml in current working directory.

    Returns:
        Config: A frozen dataclass containing all configuration values.
                If no explicit path is given and config.yaml does not exist,
                the defaults are returned.

    Raises:
        ConfigError: If an explicitly given file is missing, the YAML is
                     invalid, or a value fails validation.
    """
    explicit = config_path is not None
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME

    if not config_path.exists():
        if explicit:
            raise ConfigError(
                f"Configuration file not found: {config_path}",
                details={"file_path": str(config_path)}
            )
        return Config()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except IOError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    # An empty file is a valid "use the defaults" file
    if raw_config is None:
        raw_config = {}

    return parse_config(raw_config)


def parse_config(raw_config: Any) -> Config:
    """
    Build a Config from an already-parsed YAML document.

    Args:
        raw_config: Dictionary parsed from config.yaml.

    Returns:
        Config with defaults applied for every missing section or field.

    Raises:
        ConfigError: If validation fails, with a descriptive message
                     indicating what is invalid.
    """
    if not isinstance(raw_config, dict):
        raise ConfigError("Configuration file must contain a YAML dictionary")

    for section in ("spotify", "sync", "logging", "credentials"):
        value = raw_config.get(section)
        if value is not None and not isinstance(value, dict):
            raise ConfigError(
                f"Section '{section}' must be a dictionary",
                details={"section": section}
            )

    return Config(
        spotify=_parse_spotify_config(raw_config.get("spotify") or {}),
        sync=_parse_sync_config(raw_config.get("sync") or {}),
        logging=_parse_logging_config(raw_config.get("logging") or {}),
        credentials=_parse_credentials_config(raw_config.get("credentials") or {}),
    )


def _parse_bounded_int(section: dict[str, Any], key: str, name: str, default: int, maximum: int) -> int:
    value = section.get(key)
    if value is None:
        return default
    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= maximum:
        raise ConfigError(
            f"'{name}' must be an integer between 1 and {maximum}",
            details={"field": name, "value": value}
        )
    return value


def _parse_spotify_config(spotify_section: dict[str, Any]) -> SpotifyConfig:
    """
    Parse and validate the spotify configuration section.

    Raises:
        ConfigError: If the base URL is empty, page/batch size is outside
                     1-50, or the timeout is not a positive number.
    """
    api_base_url = spotify_section.get("api_base_url", DEFAULT_API_BASE_URL)
    if not isinstance(api_base_url, str) or not api_base_url.strip():
        raise ConfigError(
            "'spotify.api_base_url' must be a non-empty string",
            details={"field": "spotify.api_base_url"}
        )

    page_size = _parse_bounded_int(
        spotify_section, "page_size", "spotify.page_size",
        SPOTIFY_MAX_PAGE_SIZE, SPOTIFY_MAX_PAGE_SIZE
    )
    batch_size = _parse_bounded_int(
        spotify_section, "batch_size", "spotify.batch_size",
        SPOTIFY_MAX_BATCH_SIZE, SPOTIFY_MAX_BATCH_SIZE
    )

    timeout = spotify_section.get("request_timeout", 30.0)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(
            "'spotify.request_timeout' must be a positive number",
            details={"field": "spotify.request_timeout", "value": timeout}
        )

    return SpotifyConfig(
        api_base_url=api_base_url.strip().rstrip("/"),
        page_size=page_size,
        batch_size=batch_size,
        request_timeout=float(timeout)
    )


def _parse_sync_config(sync_section: dict[str, Any]) -> SyncConfig:
    prefix = sync_section.get("description_prefix", DEFAULT_DESCRIPTION_PREFIX)
    if not isinstance(prefix, str):
        raise ConfigError(
            "'sync.description_prefix' must be a string",
            details={"field": "sync.description_prefix"}
        )

    public = sync_section.get("public_playlists", False)
    if not isinstance(public, bool):
        raise ConfigError(
            "'sync.public_playlists' must be true or false",
            details={"field": "sync.public_playlists", "value": public}
        )

    return SyncConfig(description_prefix=prefix, public_playlists=public)


def _parse_logging_config(logging_section: dict[str, Any]) -> LoggingConfig:
    """
    Parse and validate the logging configuration section.

    Expands ~ to home directory and converts to absolute Path.
    Does NOT create the directory (that happens in setup_logging()).
    """
    directory = None
    raw_directory = logging_section.get("directory")
    if raw_directory is not None:
        if not isinstance(raw_directory, str) or not raw_directory.strip():
            raise ConfigError(
                "'logging.directory' must be a non-empty string or null",
                details={"field": "logging.directory"}
            )
        directory = Path(raw_directory.strip()).expanduser().resolve()

    level = logging_section.get("level", "INFO")
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise ConfigError(
            f"'logging.level' must be one of {', '.join(LOG_LEVELS)}",
            details={"field": "logging.level", "value": level}
        )

    return LoggingConfig(directory=directory, level=level.upper())


def _parse_credentials_config(credentials_section: dict[str, Any]) -> CredentialsConfig:
    tokens = {}
    for key in ("primary_token", "secondary_token"):
        value = credentials_section.get(key)
        if value is not None and not isinstance(value, str):
            # Never echo the value, it may be a real token
            raise ConfigError(
                f"'credentials.{key}' must be a string or null",
                details={"field": f"credentials.{key}"}
            )
        tokens[key] = value.strip() if value else None

    return CredentialsConfig(**tokens)
