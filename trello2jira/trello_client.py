"""Trello API client with request pacing and error mapping."""

from __future__ import annotations

import re
from typing import Any, cast

import requests

from trello2jira.exceptions import (
    TrelloAPIError,
    TrelloAuthenticationError,
    TrelloNotFoundError,
    TrelloRateLimitError,
    TrelloServerError,
)
from trello2jira.rate_limiter import RateLimiter

# Maximum page size accepted by Trello list endpoints
PAGE_LIMIT = 1000


class TrelloReader:
    """Read board, card, action and member data from the Trello API

    Trello API rate limits (per token):
    - 100 requests per 10 seconds = 10 req/sec sustained

    Requests are paced at 10 req/sec with a burst allowance of 10. Failed
    requests are not retried; errors are mapped to TrelloAPIError subclasses
    and propagate to the caller.
    """

    def __init__(self, api_key: str, token: str, timeout: float = 30.0):
        self.api_key = api_key
        self.token = token
        self.timeout = timeout
        self.base_url = "https://api.trello.com/1"
        self.rate_limiter = RateLimiter(requests_per_second=10.0, burst_allowance=10)

        # Member ID -> username, filled lazily by get_member_username()
        self._usernames: dict[str, str] = {}

    @staticmethod
    def parse_board_url(url: str) -> str:
        """Extract board ID from a Trello board URL

        Supports formats:
        - https://trello.com/b/Bm0nnz1R/board-name
        - https://trello.com/b/Bm0nnz1R
        - trello.com/b/Bm0nnz1R/board-name

        Args:
            url: Trello board URL

        Returns:
            Board ID (short link)

        Raises:
            ValueError: If URL format is invalid or board ID cannot be extracted
        """
        if not url:
            raise ValueError("URL cannot be empty")

        match = re.search(r"trello\.com/b/([a-zA-Z0-9]+)", url)
        if match:
            return match.group(1)

        raise ValueError(f"Could not extract board ID from URL: {url}")

    @classmethod
    def normalize_board_id(cls, board_ref: str) -> str:
        """Accept either a bare board ID or a board URL and return the ID"""
        if "trello.com/" in board_ref:
            return cls.parse_board_url(board_ref)
        return board_ref.strip()

    def _request(self, endpoint: str, params: dict | None = None) -> Any:
        """Make one authenticated GET request to the Trello API"""
        self.rate_limiter.wait()

        url = f"{self.base_url}/{endpoint}"
        auth_params = {"key": self.api_key, "token": self.token}
        if params:
            auth_params.update(params)

        try:
            response = requests.get(url, params=auth_params, timeout=self.timeout)
            response.raise_for_status()
            return cast(Any, response.json())

        except requests.HTTPError as e:
            # Response objects are falsy for error statuses, compare against None
            status_code = e.response.status_code if e.response is not None else 0
            response_text = e.response.text if e.response is not None else ""

            if status_code == 401:
                raise TrelloAuthenticationError(
                    "Invalid API credentials. Check api_key and token in trello-settings.yaml.\n"
                    "Get credentials at: https://trello.com/power-ups/admin",
                    status_code=status_code,
                    response_text=response_text,
                ) from e
            elif status_code == 403:
                raise TrelloAuthenticationError(
                    f"Access forbidden to resource: {endpoint}\n"
                    "Your API token may not have permission to access this board.",
                    status_code=status_code,
                    response_text=response_text,
                ) from e
            elif status_code == 404:
                raise TrelloNotFoundError(
                    f"Resource not found: {endpoint}\n"
                    "Check that your board ID is correct and the board exists.",
                    status_code=status_code,
                    response_text=response_text,
                ) from e
            elif status_code == 429:
                raise TrelloRateLimitError(
                    f"Rate limit exceeded for {endpoint}.\n"
                    "Trello's API rate limit: 100 requests per 10 seconds.\n"
                    "Wait a few minutes and run the export again.",
                    status_code=status_code,
                    response_text=response_text,
                ) from e
            elif status_code in {500, 502, 503, 504}:
                raise TrelloServerError(
                    f"Trello server error (HTTP {status_code}) for {endpoint}.\n"
                    "Trello's servers may be experiencing issues. Try again later.",
                    status_code=status_code,
                    response_text=response_text,
                ) from e
            raise TrelloAPIError(
                f"HTTP {status_code} error for {endpoint}: {response_text[:200]}",
                status_code=status_code,
                response_text=response_text,
            ) from e

        except requests.RequestException as e:
            # Network errors, timeouts, etc.
            raise TrelloAPIError(
                f"Network error for {endpoint}: {str(e)}\n"
                "Check your internet connection and try again.",
                status_code=None,
                response_text=None,
            ) from e

    def _paginated_request(self, endpoint: str, params: dict | None = None) -> list[dict]:
        """Make paginated requests to handle Trello's 1000-item limit

        Trello API limits responses to 1000 items. This method automatically
        paginates using the 'before' parameter to fetch all results.

        Args:
            endpoint: API endpoint to request
            params: Query parameters (will add limit=1000 and before as needed)

        Returns:
            Complete list of all items across all pages
        """
        all_items: list[dict] = []
        request_params = params.copy() if params else {}
        request_params["limit"] = PAGE_LIMIT

        while True:
            page_items = self._request(endpoint, request_params)

            if not isinstance(page_items, list):
                raise TrelloAPIError(
                    f"Expected a list from {endpoint}, got {type(page_items).__name__}"
                )

            if not page_items:
                break

            all_items.extend(page_items)

            if len(page_items) < PAGE_LIMIT:
                break

            # Trello accepts IDs for 'before' (converts to timestamp internally)
            last_item_id = page_items[-1].get("id")
            if not last_item_id:
                break

            request_params["before"] = last_item_id

        return all_items

    def validate_credentials(self, board_id: str | None = None) -> None:
        """Verify credentials work and, optionally, that a board is accessible.

        Raises:
            TrelloAuthenticationError: If API credentials are invalid
            TrelloNotFoundError: If the board doesn't exist or isn't accessible
            TrelloAPIError: If other API errors occur
        """
        self._request("members/me", params={"fields": "id,username"})

        if board_id:
            try:
                self._request(f"boards/{board_id}", params={"fields": "id"})
            except TrelloNotFoundError as e:
                raise TrelloNotFoundError(
                    f"Board '{board_id}' not found or you don't have access to it.\n"
                    f"Possible causes:\n"
                    f"  1. Board ID is incorrect\n"
                    f"  2. Board is private and your token doesn't have access\n"
                    f"  3. Board has been deleted\n"
                    f"Check your board URL and privacy settings.",
                    status_code=404,
                    response_text=f"Board {board_id} not found",
                ) from e

    def get_board(self, board_id: str) -> dict:
        """Get board info (id, name, url)"""
        return cast(dict, self._request(f"boards/{board_id}", {"fields": "name,url"}))

    def get_cards(self, board_id: str) -> list[dict]:
        """Get the board's open cards with their checklists and labels

        Cards come back in the board's native order.
        """
        return self._paginated_request(
            f"boards/{board_id}/cards",
            {
                "filter": "open",
                "checklists": "all",
                "fields": "name,desc,labels,shortUrl,shortLink,idList",
            },
        )

    def get_card_actions(self, card_id: str, action_filter: str) -> list[dict]:
        """Get a card's actions of the given type, newest first

        Trello returns actions newest first by default. The result is
        explicitly sorted by date (descending, stable) so callers can rely
        on ``actions[0]`` being the most recent one.

        Args:
            card_id: Trello card ID
            action_filter: Action type filter, e.g. "commentCard" or "updateCard:idList"
        """
        actions = self._paginated_request(f"cards/{card_id}/actions", {"filter": action_filter})
        return sorted(actions, key=lambda action: action.get("date") or "", reverse=True)

    def get_member_username(self, member_id: str) -> str:
        """Resolve a member ID to its username (cached per reader)"""
        if member_id not in self._usernames:
            member = self._request(f"members/{member_id}", {"fields": "username"})
            self._usernames[member_id] = member["username"]
        return self._usernames[member_id]
