"""Application composition root: wires settings, session, service and reminder."""

from __future__ import annotations

import logging
from functools import partial

from worklog_app.core.config import AppSettings
from worklog_app.core.jira_client import JiraAPI
from worklog_app.core.models import IssueModel, WorklogResponse, WorklogVisibility
from worklog_app.core.reminder import Clock, ReminderCallback, ReminderScheduler, local_clock
from worklog_app.core.service import WorklogService
from worklog_app.core.session import ClientFactory, SessionStore
from worklog_app.core.settings import load_settings

logger = logging.getLogger(__name__)


class WorklogApp:
    """Everything a presentation layer needs, owned by one object.

    Exposes connect / list_assigned_issues / create_worklog / disconnect and
    ``on_reminder`` for the daily nudge. There is no module-level session: two
    ``WorklogApp`` instances are fully independent.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client_factory: ClientFactory | None = None,
        clock: Clock | None = None,
    ):
        self.settings = settings or load_settings()
        factory = client_factory or partial(
            JiraAPI, verify_ssl=self.settings.verify_ssl, timeout=self.settings.timeout
        )
        self.sessions = SessionStore(factory)
        self.service = WorklogService(self.sessions)
        self.reminder = ReminderScheduler(
            hour=self.settings.reminder_hour,
            minute=self.settings.reminder_minute,
            interval=self.settings.reminder_interval,
            clock=clock or local_clock(self.settings.timezone),
        )

    def connect(self, base_url: str, email: str, token: str) -> bool:
        return self.service.connect(base_url, email, token)

    def list_assigned_issues(self) -> list[IssueModel]:
        return self.service.list_assigned_issues()

    def create_worklog(
        self,
        issue_key: str,
        description: str,
        started: str,
        duration: str,
        visibility: WorklogVisibility | None = None,
    ) -> WorklogResponse:
        return self.service.create_worklog(issue_key, description, started, duration, visibility)

    def disconnect(self) -> None:
        self.service.disconnect()

    def on_reminder(self, callback: ReminderCallback) -> ReminderCallback:
        """Subscribe ``callback(message)``; usable as a decorator."""
        return self.reminder.subscribe(callback)

    def start(self) -> None:
        self.reminder.start()

    def shutdown(self) -> None:
        self.reminder.stop(timeout=1.0)
        self.service.disconnect()
