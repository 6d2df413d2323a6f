"""WorklogService: the operations the presentation layer calls."""

from __future__ import annotations

import logging

from .duration import format_duration, parse_duration
from .errors import ConnectionFailed, LockError, NotConnected, WorklogAppError
from .jira_client import JiraAPI
from .models import Credentials, IssueModel, WorklogResponse, WorklogVisibility
from .session import SessionStore

logger = logging.getLogger(__name__)


class WorklogService:
    def __init__(self, sessions: SessionStore):
        self.sessions = sessions

    def _client(self) -> JiraAPI:
        client = self.sessions.current()
        if client is None:
            raise NotConnected()
        return client

    def connect(self, base_url: str, email: str, token: str) -> bool:
        """Authenticate and make the new client the active session.

        The user only ever sees "Failed to connect to JIRA"; the real cause
        (bad token, DNS, TLS) is logged and chained on ``__cause__``.
        """
        credentials = Credentials(base_url=base_url, email=email, access_token=token)
        try:
            return self.sessions.connect(credentials)
        except ConnectionFailed:
            logger.warning("Jira rejected credentials for %s at %s", email, credentials.base_url)
            raise
        except LockError:
            raise
        except WorklogAppError as exc:
            logger.warning("Connection to %s failed: %s", credentials.base_url, exc)
            raise ConnectionFailed() from exc

    def list_assigned_issues(self) -> list[IssueModel]:
        return self._client().get_assigned_issues()

    def create_worklog(
        self,
        issue_key: str,
        description: str,
        started: str,
        duration: str,
        visibility: WorklogVisibility | None = None,
    ) -> WorklogResponse:
        client = self._client()
        seconds = parse_duration(duration)
        logger.debug("Creating worklog on %s for %s", issue_key, format_duration(seconds))
        return client.create_worklog(issue_key, description, started, seconds, visibility)

    def disconnect(self) -> None:
        self.sessions.disconnect()

    @property
    def is_connected(self) -> bool:
        return self.sessions.is_connected
