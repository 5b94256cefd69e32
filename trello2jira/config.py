"""YAML configuration loading for trello2jira."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from trello2jira.exceptions import ConfigError

logger = logging.getLogger(__name__)

SETTINGS_FILE = "trello-settings.yaml"
USERS_FILE = "users.yaml"
STATUS_FILE = "status.yaml"
JIRA_FILE = "jira.yaml"


@dataclass
class TranslationTables:
    """Static name and status translation tables.

    Lookups return None on a miss; callers decide whether a miss drops
    the record or leaves a null field.
    """

    names: dict[str, str] = field(default_factory=dict)
    statuses: dict[str, str] = field(default_factory=dict)

    def member_name(self, username: str | None) -> str | None:
        """Translate a Trello username into the target display name."""
        if username is None:
            return None
        return self.names.get(username)

    def status(self, list_name: str | None) -> str | None:
        """Translate a Trello list name into the target status."""
        if list_name is None:
            return None
        return self.statuses.get(list_name)


@dataclass
class ExportConfig:
    """Everything one export run needs besides the board ID."""

    api_key: str
    token: str
    project_name: str
    project_key: str
    output_path: Path
    tables: TranslationTables = field(default_factory=TranslationTables)


def _load_yaml_mapping(path: Path, allow_empty: bool = False) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}", path=str(path))

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}", path=str(path)) from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}", path=str(path)) from e

    if data is None and allow_empty:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a YAML mapping", path=str(path))
    return data


def _require(data: dict[str, Any], key: str, path: Path) -> str:
    value = data.get(key)
    if value is None or str(value).strip() == "":
        raise ConfigError(f"Missing required key '{key}' in {path}", path=str(path), key=key)
    return str(value)


def _load_table(path: Path) -> dict[str, str]:
    data = _load_yaml_mapping(path, allow_empty=True)
    # YAML may parse keys/values such as "1" or "yes" into non-strings
    return {str(k): str(v) for k, v in data.items() if v is not None}


def load_config(config_dir: str | Path = ".", output_path: str | Path | None = None) -> ExportConfig:
    """Load the four configuration files from a directory.

    Args:
        config_dir: Directory holding trello-settings.yaml, users.yaml,
                    status.yaml and jira.yaml
        output_path: Optional override for jira.yaml's ``path``

    Returns:
        Populated ExportConfig

    Raises:
        ConfigError: If a file is missing or unreadable, or a required key is absent

    TRELLO_API_KEY and TRELLO_TOKEN environment variables take precedence
    over the values in trello-settings.yaml.
    """
    base = Path(config_dir)

    settings_path = base / SETTINGS_FILE
    settings = _load_yaml_mapping(settings_path)
    if os.getenv("TRELLO_API_KEY"):
        settings["api_key"] = os.environ["TRELLO_API_KEY"]
    if os.getenv("TRELLO_TOKEN"):
        settings["token"] = os.environ["TRELLO_TOKEN"]

    jira_path = base / JIRA_FILE
    jira = _load_yaml_mapping(jira_path)
    if output_path is not None:
        jira["path"] = str(output_path)

    tables = TranslationTables(
        names=_load_table(base / USERS_FILE),
        statuses=_load_table(base / STATUS_FILE),
    )
    logger.debug(
        "Loaded %d name and %d status translations from %s",
        len(tables.names),
        len(tables.statuses),
        base,
    )

    return ExportConfig(
        api_key=_require(settings, "api_key", settings_path),
        token=_require(settings, "token", settings_path),
        project_name=_require(jira, "project", jira_path),
        project_key=_require(jira, "key", jira_path),
        output_path=Path(_require(jira, "path", jira_path)),
        tables=tables,
    )
