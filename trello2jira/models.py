"""Output records for the JIRA JSON import document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class User:
    """A user entry; hashable so a run can deduplicate by value."""

    name: str | None
    active: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "active": self.active}


@dataclass
class Comment:
    body: str
    created: str | None
    author: str | None

    def to_dict(self) -> dict[str, Any]:
        return {"body": self.body, "created": self.created, "author": self.author}


@dataclass
class Issue:
    """One exported card.

    ``created`` is an ISO 8601 string derived from the card ID; ``updated``
    is the date of the action that determined ``status``.
    """

    summary: str
    status: str | None
    reporter: str | None
    created: str
    updated: str | None
    description: str
    comments: list[Comment] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    issue_type: str = "Story"

    def to_dict(self) -> dict[str, Any]:
        return {
            "issueType": self.issue_type,
            "summary": self.summary,
            "status": self.status,
            "reporter": self.reporter,
            "created": self.created,
            "description": self.description,
            "comments": [comment.to_dict() for comment in self.comments],
            "updated": self.updated,
            "labels": list(self.labels),
        }


@dataclass
class Project:
    name: str
    key: str
    issues: list[Issue] = field(default_factory=list)
    components: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "key": self.key,
            "components": list(self.components),
            "issues": [issue.to_dict() for issue in self.issues],
        }


def to_import_document(project: Project, users: list[User]) -> dict[str, Any]:
    """Assemble the top-level import document."""
    return {
        "users": [user.to_dict() for user in users],
        "links": [],
        "projects": [project.to_dict()],
    }
