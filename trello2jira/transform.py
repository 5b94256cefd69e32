"""Pure card-to-issue derivation helpers.

Nothing in here talks to the Trello API; every function takes card data
and returns the derived value.
"""

from __future__ import annotations

from datetime import datetime, timezone

ISSUE_LABEL_PREFIX = "import_from_"


def created_from_id(card_id: str) -> datetime:
    """Decode the creation time embedded in a Trello object ID.

    The first 8 hex characters of the ID are a big-endian Unix timestamp
    in seconds.

    Raises:
        ValueError: If the ID is shorter than 8 characters or not hex
    """
    if not card_id or len(card_id) < 8:
        raise ValueError(f"Card ID too short to hold a timestamp: {card_id!r}")
    seconds = int(card_id[:8], 16)
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def convert_headings(text: str) -> str:
    """Rewrite markdown heading runs into JIRA heading markers.

    ``####`` must be replaced before ``###``; otherwise a four-hash run
    would turn into ``h2.#``.
    """
    return text.replace("####", "h3.").replace("###", "h2.")


def format_check_item(item: dict) -> str:
    state = "DONE" if item.get("state") == "complete" else "OPEN"
    return f"* [{state}] {item.get('name', '')}\n"


def build_description(desc: str | None, checklists: list[dict] | None) -> str:
    """Build the issue description from the card text and its checklists.

    Each checklist becomes an ``h2.`` section with one bullet per item:

        h2. Release

        * [DONE] Tag version
        * [OPEN] Publish notes
    """
    parts = [f"{desc or ''}\n\n"]

    for checklist in checklists or []:
        parts.append(f"\n\nh2. {checklist.get('name', '')}\n\n")
        for item in checklist.get("checkItems", []):
            parts.append(format_check_item(item))

    return convert_headings("".join(parts))


def board_label(board_name: str) -> str:
    """Label marking every issue imported from a board."""
    return f"{ISSUE_LABEL_PREFIX}{board_name.replace(' ', '_')}"


def card_label_names(card: dict) -> list[str]:
    return [label.get("name", "") for label in card.get("labels") or []]


def build_labels(board_name: str, card: dict) -> list[str]:
    return [board_label(board_name), *card_label_names(card)]
