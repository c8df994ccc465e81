"""
Exception classes for spot-sync.

This module defines all custom exceptions used throughout the application.
Each exception carries a human-readable message and an optional details
dictionary, so that failures can be logged with context and converted
into structured sync results.

Exception Hierarchy:
    SpotSyncError (base)
        ConfigError - Configuration file issues
        SpotifyError - Spotify Web API issues (HTTP status or transport)
        MissingCredentialError - An account token was not supplied
"""


class SpotSyncError(Exception):
    """
    Base exception for all spot-sync errors.

    All custom exceptions in this project inherit from this class,
    allowing callers to catch all spot-sync errors with a single
    except clause if desired.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., URLs, status codes).

    Example:
        try:
            # some operation
        except SpotSyncError as e:
            logger.error(f"Operation failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description that will be shown to the user.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'url': URL that caused the error
                     - 'http_status': HTTP status code returned by Spotify
                     - 'original_error': The underlying exception if wrapping another error
                     Never put access tokens in here.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(SpotSyncError):
    """
    Raised when there's an issue with the configuration file.

    This is a CRITICAL error that should stop program execution.

    Common causes:
        - config.yaml has invalid YAML syntax
        - A section is not a dictionary
        - Invalid field values (e.g., batch_size above the Spotify maximum)

    Example:
        raise ConfigError(
            "'spotify.batch_size' must be an integer between 1 and 50",
            details={'field': 'spotify.batch_size', 'value': 500}
        )
    """
    pass


class SpotifyError(SpotSyncError):
    """
    Raised when a Spotify Web API call does not succeed.

    This is NON-CRITICAL for a sync run: the failing page, chunk or library
    contributes zero transferred items and the run continues.

    Common causes:
        - Non-2xx HTTP status (playlist not found, insufficient scope)
        - Expired access token (401)
        - Rate limiting (429)
        - Network connectivity issues or timeouts (is_transport_error)
        - Malformed responses, e.g. a playlist without an ID

    Attributes:
        status: HTTP status code, or None when no response status applies.
        is_auth_error: True if Spotify rejected the access token.
        is_rate_limit: True if Spotify answered 429 Too Many Requests.
        is_transport_error: True if no HTTP response was received at all.

    Example:
        raise SpotifyError(
            "Failed to fetch playlist: 404",
            details={'url': url, 'http_status': 404},
            status=404
        )
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        status: int | None = None,
        is_auth_error: bool = False,
        is_rate_limit: bool = False,
        is_transport_error: bool = False
    ) -> None:
        """
        Initialize Spotify error with additional flags.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
            status: HTTP status code of the failed response, if any.
            is_auth_error: Set to True if this is an authentication failure.
            is_rate_limit: Set to True if this is a rate limit error.
                          No retry is attempted; the unit of work is skipped.
            is_transport_error: Set to True for connection errors and timeouts.
        """
        super().__init__(message, details)
        self.status = status
        self.is_auth_error = is_auth_error
        self.is_rate_limit = is_rate_limit
        self.is_transport_error = is_transport_error


class MissingCredentialError(SpotSyncError):
    """
    Raised when a sync is requested without both account tokens.

    This is a CRITICAL precondition failure: it is raised before any
    network request is made and no partial result exists.

    Attributes:
        missing_roles: Names of the account roles without a token,
                       e.g. ['secondary'].

    Example:
        raise MissingCredentialError(["secondary"])
    """

    def __init__(self, missing_roles: list[str]) -> None:
        super().__init__(
            "Both accounts must be connected",
            details={"missing_roles": list(missing_roles)}
        )
        self.missing_roles = list(missing_roles)
