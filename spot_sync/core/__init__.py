"""
Core module for spot-sync.

This module provides the foundational components used throughout the application:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading and validation
    - logger: Logging system with console, file and failure-report outputs

Usage:
    from spot_sync.core import (
        Config, load_config,
        setup_logging, get_logger,
        SpotSyncError, ConfigError, SpotifyError
    )
"""

from spot_sync.core.config import (
    Config,
    CredentialsConfig,
    LoggingConfig,
    SpotifyConfig,
    SyncConfig,
    load_config,
    parse_config,
)
from spot_sync.core.exceptions import (
    ConfigError,
    MissingCredentialError,
    SpotifyError,
    SpotSyncError,
)
from spot_sync.core.logger import (
    get_logger,
    log_sync_failure,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Config
    "Config",
    "SpotifyConfig",
    "SyncConfig",
    "LoggingConfig",
    "CredentialsConfig",
    "load_config",
    "parse_config",
    # Exceptions
    "SpotSyncError",
    "ConfigError",
    "SpotifyError",
    "MissingCredentialError",
    # Logger
    "setup_logging",
    "get_logger",
    "log_sync_failure",
    "shutdown_logging",
]
