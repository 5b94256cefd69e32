"""
Shared pytest fixtures for trello2jira tests
"""
import json
import logging
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import yaml

# Add parent directory to path to import trello2jira module
sys.path.insert(0, str(Path(__file__).parent.parent))

from trello2jira import ExportConfig, TranslationTables, TrelloReader  # noqa: E402

NAMES = {"alice": "Alice Smith", "bob": "Bob Jones"}
STATUSES = {"To Do": "Open", "Doing": "In Progress", "Done": "Closed"}


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() so caplog sees records in every test"""
    yield
    logger = logging.getLogger("trello2jira")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    logging.getLogger("trello2jira.exporter").setLevel(logging.NOTSET)


@pytest.fixture
def fixtures_dir():
    """Return path to test fixtures directory"""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def simple_board_fixture(fixtures_dir):
    """Load simple board test fixture"""
    with open(fixtures_dir / "simple_board.json") as f:
        return json.load(f)


@pytest.fixture
def translation_tables():
    return TranslationTables(names=dict(NAMES), statuses=dict(STATUSES))


@pytest.fixture
def export_config(tmp_path, translation_tables):
    """ExportConfig writing into a temporary directory"""
    return ExportConfig(
        api_key="fake-api-key",
        token="fake-token",
        project_name="Team Project",
        project_key="TEAM",
        output_path=tmp_path / "out",
        tables=translation_tables,
    )


@pytest.fixture
def config_dir(tmp_path):
    """Directory holding a complete set of YAML configuration files"""
    directory = tmp_path / "config"
    directory.mkdir()
    files = {
        "trello-settings.yaml": {"api_key": "yaml-key", "token": "yaml-token"},
        "users.yaml": NAMES,
        "status.yaml": STATUSES,
        "jira.yaml": {"project": "Team Project", "key": "TEAM", "path": str(tmp_path / "out")},
    }
    for name, content in files.items():
        (directory / name).write_text(yaml.safe_dump(content), encoding="utf-8")
    return directory


@pytest.fixture
def mock_trello(simple_board_fixture):
    """TrelloReader mock serving the simple board fixture"""
    board = simple_board_fixture
    trello = MagicMock(spec=TrelloReader)
    trello.get_board.return_value = board["board"]
    trello.get_cards.return_value = board["cards"]
    trello.get_card_actions.side_effect = lambda card_id, action_filter: list(
        board["actions"].get(card_id, {}).get(action_filter, [])
    )
    trello.get_member_username.side_effect = lambda member_id: board["members"][member_id][
        "username"
    ]
    return trello
