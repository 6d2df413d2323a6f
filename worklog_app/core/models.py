"""Domain data models for credentials, assigned issues, and worklogs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Credentials:
    base_url: str
    email: str
    access_token: str = field(repr=False)

    def __post_init__(self):
        object.__setattr__(self, "base_url", self.base_url.strip().rstrip("/"))


@dataclass(slots=True)
class AssigneeModel:
    display_name: str | None
    email: str | None


@dataclass(slots=True)
class IssueModel:
    key: str
    summary: str
    status_name: str
    assignee: AssigneeModel | None = None


@dataclass(slots=True)
class SearchResult:
    issues: list[IssueModel] = field(default_factory=list)
    total: int = 0
    start_at: int = 0
    max_results: int = 0

    @property
    def has_more(self) -> bool:
        return self.start_at + len(self.issues) < self.total


@dataclass(slots=True)
class WorklogVisibility:
    type: str
    identifier: str


@dataclass(slots=True)
class WorklogRequest:
    comment: dict[str, Any]
    started: str
    time_spent_seconds: int
    visibility: WorklogVisibility | None = None


@dataclass(slots=True)
class WorklogResponse:
    id: str
    issue_id: str
    started: str
    time_spent_seconds: int
