"""Trello board to JIRA import document export."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from trello2jira import transform
from trello2jira.config import ExportConfig
from trello2jira.exceptions import ExportError
from trello2jira.models import Comment, Issue, Project, User, to_import_document
from trello2jira.trello_client import TrelloReader

logger = logging.getLogger(__name__)

LIST_MOVE = "updateCard:idList"
CREATE_CARD = "createCard"
COPY_CARD = "copyCard"
MOVE_CARD_TO_BOARD = "moveCardToBoard"
COMMENT_CARD = "commentCard"

# Action types tried, in order, when looking for who created a card
CREATOR_ACTIONS = (CREATE_CARD, MOVE_CARD_TO_BOARD, COPY_CARD)

# Action types tried, in order, when looking for a card's current list
LIST_ACTIONS = (LIST_MOVE, CREATE_CARD, COPY_CARD)


class TrelloToJiraExporter:
    """Export a Trello board as a JIRA JSON import document"""

    def __init__(self, trello: TrelloReader, config: ExportConfig):
        self.trello = trello
        self.config = config
        self.tables = config.tables

        # Per-run state, reset by build_document()
        self.users: dict[User, None] = {}  # ordered set
        self._actions: dict[tuple[str, str], list[dict]] = {}  # (card ID, filter) -> actions

    def _reset(self) -> None:
        self.users = {}
        self._actions = {}

    def card_actions(self, card: dict, action_filter: str) -> list[dict]:
        """Actions of one type on a card, newest first (fetched once per run)"""
        cache_key = (card["id"], action_filter)
        if cache_key not in self._actions:
            self._actions[cache_key] = self.trello.get_card_actions(card["id"], action_filter)
        return self._actions[cache_key]

    def translate_member_name(self, name: str | None) -> str | None:
        mapped = self.tables.member_name(name)
        if mapped is None:
            logger.debug("No name translation for %r", name)
        return mapped

    def translate_status(self, status: str | None) -> str | None:
        mapped = self.tables.status(status)
        if mapped is None:
            logger.debug("No status translation for %r", status)
        return mapped

    def get_creator(self, card: dict) -> str:
        """Username of whoever created the card, or "" when unknown"""
        for action_type in CREATOR_ACTIONS:
            actions = self.card_actions(card, action_type)
            if actions:
                creator_id = actions[0].get("idMemberCreator")
                if not creator_id:
                    return ""
                return self.trello.get_member_username(creator_id)
        return ""

    def find_list_action(self, card: dict) -> dict | None:
        """The action that tells which list the card is in now.

        The most recent list move wins. A card that never moved is still in
        the list it was created (or copied) into.
        """
        for action_type in LIST_ACTIONS:
            actions = self.card_actions(card, action_type)
            if actions:
                return actions[0]
        return None

    def find_status(self, card: dict) -> str | None:
        """Raw (untranslated) name of the card's current list"""
        action = self.find_list_action(card)
        if action is None:
            return None

        data = action.get("data", {})
        if action.get("type") == "updateCard" or "listAfter" in data:
            return data.get("listAfter", {}).get("name")
        return data.get("list", {}).get("name")

    def find_last_update(self, card: dict) -> str | None:
        action = self.find_list_action(card)
        if action is None:
            return None
        return action.get("date")

    def parse_comments(self, card: dict) -> list[Comment]:
        comments = []
        for action in self.card_actions(card, COMMENT_CARD):
            creator_id = action.get("idMemberCreator")
            username = self.trello.get_member_username(creator_id) if creator_id else None
            author = self.translate_member_name(username)

            self.users.setdefault(User(name=author, active=True), None)

            comments.append(
                Comment(
                    body=action.get("data", {}).get("text", ""),
                    created=action.get("date"),
                    author=author,
                )
            )
        return comments

    def build_issue(self, card: dict, board_name: str) -> Issue:
        """Derive one issue from a card; status may come back None"""
        return Issue(
            summary=card["name"],
            status=self.translate_status(self.find_status(card)),
            reporter=self.translate_member_name(self.get_creator(card)),
            created=transform.created_from_id(card["id"]).isoformat(),
            updated=self.find_last_update(card),
            description=transform.build_description(card.get("desc"), card.get("checklists")),
            comments=self.parse_comments(card),
            labels=transform.build_labels(board_name, card),
        )

    def parse_cards(self, board: dict, cards: list[dict]) -> list[Issue]:
        """Derive issues for all cards, dropping those without a mapped status"""
        logger.info(
            "Exporting board %s containing %d cards as JSON",
            board.get("url", board.get("id")),
            len(cards),
        )

        issues = []
        for i, card in enumerate(cards, 1):
            logger.info("%d: Exporting %s '%s'", i, card.get("shortUrl", card["id"]), card["name"])
            issue = self.build_issue(card, board.get("name", ""))

            if issue.status is None:
                logger.warning(
                    "Couldn't find status for %s '%s' (list: %s), skipping: %s",
                    card.get("shortUrl", card["id"]),
                    card["name"],
                    self.find_status(card),
                    json.dumps(issue.to_dict(), ensure_ascii=False),
                )
                continue

            issues.append(issue)

        return issues

    def build_document(self, board_id: str) -> dict[str, Any]:
        """Fetch the board and build the import document without writing it"""
        if not board_id:
            raise ValueError("board_id is required")

        self._reset()

        board = self.trello.get_board(board_id)
        cards = self.trello.get_cards(board_id)

        project = Project(name=self.config.project_name, key=self.config.project_key)
        project.issues = self.parse_cards(board, cards)

        logger.info(
            "Exported %d of %d cards (%d dropped), %d users",
            len(project.issues),
            len(cards),
            len(cards) - len(project.issues),
            len(self.users),
        )
        return to_import_document(project, list(self.users))

    def output_file(self, board_id: str) -> Path:
        return self.config.output_path / f"{board_id}_export.json"

    def export(self, board_id: str) -> Path:
        """Export a board and write ``<path>/<board_id>_export.json``

        Returns:
            Path of the written file

        Raises:
            TrelloAPIError: If fetching from Trello fails
            ExportError: If the file cannot be written
        """
        document = self.build_document(board_id)
        output_file = self.output_file(board_id)

        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            with open(output_file, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ExportError(f"Cannot write {output_file}: {e}", path=str(output_file)) from e

        logger.info("Saved export: %s", output_file)
        return output_file
