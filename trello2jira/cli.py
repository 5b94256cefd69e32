"""CLI entry point for trello2jira exporter."""

from __future__ import annotations

import logging
import os
import sys

from trello2jira.config import load_config
from trello2jira.exceptions import ConfigError, ExportError, TrelloAPIError
from trello2jira.exporter import TrelloToJiraExporter
from trello2jira.logging_config import setup_logging
from trello2jira.trello_client import TrelloReader

logger = logging.getLogger("trello2jira.cli")

# Module docstring for --help
__doc__ = """
trello2jira - Export a Trello board as a JIRA JSON import file

Usage:
    trello2jira [options] <board-id-or-url>

    # Configuration files are read from the current directory:
    #   trello-settings.yaml  api_key, token
    #   users.yaml            trello username -> JIRA user name
    #   status.yaml           trello list name -> JIRA status
    #   jira.yaml             project, key, path

    # Export board Bm0nnz1R to <path>/Bm0nnz1R_export.json
    python3 -m trello2jira Bm0nnz1R

    # Read configuration from another directory
    python3 -m trello2jira --config-dir ./config Bm0nnz1R

    # Write the export somewhere other than jira.yaml's path
    python3 -m trello2jira --output-dir ./out Bm0nnz1R

Options:
    -h, --help             Show this help
    -v, --verbose          Debug logging
    -q, --quiet            Errors and export progress only
    --log-level LEVEL      DEBUG, INFO, WARNING or ERROR
    --log-file PATH        Also log to PATH (with timestamps)
    --config-dir DIR       Directory holding the YAML configuration files
    --output-dir DIR       Override jira.yaml's path
    --skip-validation      Skip the credential pre-flight check
"""

# Flags that consume the following argument
VALUE_FLAGS = {"--log-level", "--log-file", "--config-dir", "--output-dir"}


def _flag_value(argv: list[str], flag: str) -> str | None:
    if flag in argv:
        idx = argv.index(flag)
        if idx + 1 < len(argv):
            return argv[idx + 1]
    return None


def _positional_args(argv: list[str]) -> list[str]:
    positional = []
    skip_next = False
    for arg in argv:
        if skip_next:
            skip_next = False
            continue
        if arg in VALUE_FLAGS:
            skip_next = True
            continue
        if arg.startswith("-"):
            continue
        positional.append(arg)
    return positional


def main() -> None:
    argv = sys.argv[1:]

    if "--help" in argv or "-h" in argv:
        print(__doc__)
        sys.exit(0)

    log_level = "INFO"
    if "--verbose" in argv or "-v" in argv:
        log_level = "DEBUG"
    elif "--quiet" in argv or "-q" in argv:
        log_level = "ERROR"
    elif "--log-level" in argv:
        log_level = (_flag_value(argv, "--log-level") or log_level).upper()

    setup_logging(log_level, _flag_value(argv, "--log-file"))

    # Board ID is checked before any configuration or network access
    positional = _positional_args(argv)
    if not positional:
        logger.error("❌ Error: No board id specified")
        logger.error("\nUsage: trello2jira [options] <board-id-or-url>")
        logger.error("Run 'trello2jira --help' for details")
        sys.exit(1)

    try:
        board_id = TrelloReader.normalize_board_id(positional[0])
    except ValueError as e:
        logger.error(f"❌ Error: {e}")
        sys.exit(1)

    config_dir = _flag_value(argv, "--config-dir") or os.getenv("TRELLO2JIRA_CONFIG_DIR", ".")
    try:
        config = load_config(config_dir, output_path=_flag_value(argv, "--output-dir"))
    except ConfigError as e:
        logger.error(f"❌ Configuration error: {e}")
        sys.exit(1)

    trello = TrelloReader(config.api_key, config.token)

    if "--skip-validation" not in argv:
        logger.info("🔍 Validating Trello credentials and board access...")
        try:
            trello.validate_credentials(board_id)
        except TrelloAPIError as e:
            logger.error(f"❌ Validation failed: {e}")
            sys.exit(1)

    exporter = TrelloToJiraExporter(trello, config)

    try:
        output_file = exporter.export(board_id)
    except (TrelloAPIError, ExportError) as e:
        logger.error(f"❌ Export failed: {e}")
        sys.exit(1)

    logger.info(f"✅ Export complete: {output_file}")


if __name__ == "__main__":
    main()
