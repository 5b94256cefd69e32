"""Export Trello boards as JIRA JSON import documents."""

from __future__ import annotations

# Import CLI from extracted module
from trello2jira.cli import main

# Import configuration loading
from trello2jira.config import ExportConfig, TranslationTables, load_config

# Import exceptions from extracted module
from trello2jira.exceptions import (
    ConfigError,
    ExportError,
    TrelloAPIError,
    TrelloAuthenticationError,
    TrelloNotFoundError,
    TrelloRateLimitError,
    TrelloServerError,
)

# Import exporter from extracted module
from trello2jira.exporter import TrelloToJiraExporter

# Import logging configuration
from trello2jira.logging_config import setup_logging

# Import output records
from trello2jira.models import Comment, Issue, Project, User

# Import rate limiter from extracted module
from trello2jira.rate_limiter import RateLimiter

# Import Trello client from extracted module
from trello2jira.trello_client import TrelloReader

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "TrelloToJiraExporter",
    "TrelloReader",
    "RateLimiter",
    "ExportConfig",
    "TranslationTables",
    "load_config",
    "setup_logging",
    # Output records
    "Issue",
    "Comment",
    "Project",
    "User",
    # Exceptions
    "TrelloAPIError",
    "TrelloAuthenticationError",
    "TrelloNotFoundError",
    "TrelloRateLimitError",
    "TrelloServerError",
    "ConfigError",
    "ExportError",
    # CLI
    "main",
]
