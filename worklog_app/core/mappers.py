"""Mapping between raw Jira JSON payloads and the dataclass models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

import pytz

from .config import COMMENT_DOC_VERSION, WORKLOG_STARTED_FORMAT
from .errors import DecodeError
from .models import (
    AssigneeModel,
    IssueModel,
    SearchResult,
    WorklogRequest,
    WorklogResponse,
    WorklogVisibility,
)


def _require(data: Any, key: str, context: str) -> Any:
    if not isinstance(data, dict) or key not in data or data[key] is None:
        raise DecodeError(f"Malformed {context} payload: missing '{key}'")
    return data[key]


def _as_int(value: Any, key: str, context: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"Malformed {context} payload: '{key}' is not an integer") from exc


def map_assignee(raw: Any) -> AssigneeModel | None:
    if not isinstance(raw, dict):
        return None
    return AssigneeModel(
        display_name=raw.get("displayName"),
        # Cloud hides emailAddress unless the profile makes it public
        email=raw.get("emailAddress"),
    )


def map_issue(raw: dict[str, Any]) -> IssueModel:
    key = _require(raw, "key", "issue")
    fields = _require(raw, "fields", "issue")
    status = fields.get("status") if isinstance(fields, dict) else None
    return IssueModel(
        key=str(key),
        summary=str(_require(fields, "summary", "issue fields")),
        status_name=str(_require(status, "name", "issue status")),
        assignee=map_assignee(fields.get("assignee")),
    )


def map_search_result(raw: Any) -> SearchResult:
    issues_raw = _require(raw, "issues", "search")
    if not isinstance(issues_raw, list):
        raise DecodeError("Malformed search payload: 'issues' is not a list")
    issues = [map_issue(item) for item in issues_raw]
    return SearchResult(
        issues=issues,
        total=_as_int(raw.get("total", len(issues)), "total", "search"),
        start_at=_as_int(raw.get("startAt", 0), "startAt", "search"),
        max_results=_as_int(raw.get("maxResults", len(issues)), "maxResults", "search"),
    )


def map_worklog_response(raw: Any) -> WorklogResponse:
    return WorklogResponse(
        id=str(_require(raw, "id", "worklog")),
        issue_id=str(_require(raw, "issueId", "worklog")),
        started=str(_require(raw, "started", "worklog")),
        time_spent_seconds=_as_int(
            _require(raw, "timeSpentSeconds", "worklog"), "timeSpentSeconds", "worklog"
        ),
    )


def build_comment_document(text: str) -> dict[str, Any]:
    """Wrap plain text as a single-paragraph Atlassian document."""
    return {
        "type": "doc",
        "version": COMMENT_DOC_VERSION,
        "content": [
            {
                "type": "paragraph",
                "content": [{"type": "text", "text": text}],
            }
        ],
    }


def worklog_request_payload(request: WorklogRequest) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "comment": request.comment,
        "started": request.started,
        "timeSpentSeconds": request.time_spent_seconds,
    }
    if request.visibility is not None:
        payload["visibility"] = visibility_payload(request.visibility)
    return payload


def visibility_payload(visibility: WorklogVisibility) -> dict[str, str]:
    return {"type": visibility.type, "identifier": visibility.identifier}


def format_started(value: datetime, tz: pytz.BaseTzInfo | None = None) -> str:
    """Render a datetime in the ``started`` format Jira accepts for worklogs.

    Naive datetimes are localized to ``tz`` (UTC when not given).
    """
    if value.tzinfo is None:
        value = (tz or pytz.UTC).localize(value)
    return value.strftime(WORKLOG_STARTED_FORMAT)
