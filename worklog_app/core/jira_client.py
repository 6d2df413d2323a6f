"""Jira API client wrapper (REST v3: probe, assigned-issue search, worklog creation)."""

from __future__ import annotations

import json
import logging
from typing import Any

import requests
from jira import JIRA, JIRAError

from .config import (
    ASSIGNED_ISSUE_FIELDS,
    ASSIGNED_ISSUES_JQL,
    DEFAULT_TIMEOUT_SECONDS,
    REST_API_PREFIX,
)
from .errors import DecodeError, RemoteError, TransportError
from .mappers import (
    build_comment_document,
    map_search_result,
    map_worklog_response,
    worklog_request_payload,
)
from .models import (
    Credentials,
    IssueModel,
    SearchResult,
    WorklogRequest,
    WorklogResponse,
    WorklogVisibility,
)

logger = logging.getLogger(__name__)

JSON_ACCEPT = {"Accept": "application/json"}
JSON_BODY = {"Accept": "application/json", "Content-Type": "application/json"}


class JiraAPI:
    """Authenticated handle on one Jira instance.

    Nothing is mutated after ``__init__``, so a single instance may be shared by
    any number of threads; each call performs its own request on the underlying
    ``requests`` session.

    Parameters
    ----------
    credentials : Credentials
        Base URL plus the email / API token pair used for HTTP basic auth.
    verify_ssl : bool
        Validate the server certificate. Turning this off is an explicit opt-in
        for instances behind intercepting proxies or self-signed certificates.
    timeout : float | None
        Per-request timeout in seconds; ``None`` waits forever.
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        verify_ssl: bool = True,
        timeout: float | None = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.credentials = credentials
        self.server = credentials.base_url
        self.verify_ssl = verify_ssl
        self.timeout = timeout
        if not verify_ssl:
            logger.warning("Certificate verification disabled for %s", self.server)
        self.client = JIRA(
            basic_auth=(credentials.email, credentials.access_token),
            options={"server": self.server, "rest_api_version": "3", "verify": verify_ssl},
            get_server_info=False,
            max_retries=0,
            timeout=timeout,
        )
        self._session = self.client._session

    def _url(self, path: str) -> str:
        return f"{self.server}{REST_API_PREFIX}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = self._url(path)
        kwargs.setdefault("headers", dict(JSON_ACCEPT))
        logger.debug("%s %s", method, url)
        try:
            resp = self._session.request(method, url, **kwargs)
        except JIRAError as exc:
            raise RemoteError(exc.status_code, exc.text or "") from exc
        except requests.RequestException as exc:
            raise TransportError(f"Request to {url} failed: {exc}") from exc
        if not 200 <= resp.status_code < 300:
            raise RemoteError(resp.status_code, (resp.text or "")[:200])
        return resp

    @staticmethod
    def _decode(resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise DecodeError(f"Invalid JSON in response ({resp.status_code})") from exc

    # ------------------ Probe ------------------
    def test_connection(self) -> bool:
        """Return True iff ``/myself`` answers 2xx; transport failures still raise."""
        try:
            self._request("GET", "myself")
        except RemoteError as exc:
            logger.info("Connection probe to %s rejected with status %s", self.server, exc.status_code)
            return False
        return True

    # ------------------ Issues ------------------
    def search_assigned(self) -> SearchResult:
        """First page of issues assigned to the authenticated user (no auto-paging)."""
        params = {"jql": ASSIGNED_ISSUES_JQL, "fields": ",".join(ASSIGNED_ISSUE_FIELDS)}
        resp = self._request("GET", "search", params=params)
        result = map_search_result(self._decode(resp))
        if result.has_more:
            logger.debug(
                "Assigned issue search returned %s of %s issues", len(result.issues), result.total
            )
        return result

    def get_assigned_issues(self) -> list[IssueModel]:
        return self.search_assigned().issues

    # ------------------ Worklogs ------------------
    def create_worklog(
        self,
        issue_key: str,
        description: str,
        started: str,
        time_spent_seconds: int,
        visibility: WorklogVisibility | None = None,
    ) -> WorklogResponse:
        request = WorklogRequest(
            comment=build_comment_document(description),
            started=started,
            time_spent_seconds=time_spent_seconds,
            visibility=visibility,
        )
        resp = self._request(
            "POST",
            f"issue/{issue_key}/worklog",
            headers=dict(JSON_BODY),
            data=json.dumps(worklog_request_payload(request)),
        )
        worklog = map_worklog_response(self._decode(resp))
        logger.info("Logged %ss on %s (worklog %s)", worklog.time_spent_seconds, issue_key, worklog.id)
        return worklog
