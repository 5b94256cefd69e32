"""Custom exception classes for trello2jira.

This module defines the exception hierarchy for Trello API errors,
configuration problems and failures while writing the export.
"""

from __future__ import annotations


class TrelloAPIError(Exception):
    """Base exception for Trello API errors"""

    def __init__(
        self, message: str, status_code: int | None = None, response_text: str | None = None
    ):
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(message)


class TrelloAuthenticationError(TrelloAPIError):
    """Raised when API credentials are invalid or expired (401/403)"""

    pass


class TrelloNotFoundError(TrelloAPIError):
    """Raised when a board, card, or member is not found (404)"""

    pass


class TrelloRateLimitError(TrelloAPIError):
    """Raised when Trello rejects a request for exceeding the rate limit (429)"""

    pass


class TrelloServerError(TrelloAPIError):
    """Raised when Trello's servers return an error (500/502/503/504)"""

    pass


class ConfigError(Exception):
    """Raised when a configuration file is missing, unreadable or incomplete.

    Attributes:
        path: The configuration file involved (if applicable)
        key: The missing or invalid key (if applicable)

    Example:
        >>> try:
        ...     load_config("./config")
        ... except ConfigError as e:
        ...     print(f"{e.path}: {e}")
    """

    def __init__(self, message: str, path: str | None = None, key: str | None = None):
        self.path = path
        self.key = key
        super().__init__(message)


class ExportError(Exception):
    """Raised when the export document cannot be written.

    Resolution:
        Check that the configured output `path` exists or can be created
        and that it is writable.
    """

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)
