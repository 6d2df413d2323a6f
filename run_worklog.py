"""Console launcher for the worklog companion.

Usage:
  JIRA_SERVER=... JIRA_EMAIL=... JIRA_API_TOKEN=... python run_worklog.py

Connects with credentials from the environment (if present), logs the issues
assigned to you, then keeps the daily reminder running until interrupted.
Credentials are only read, never stored.
"""

from __future__ import annotations

import logging
import threading

from worklog_app.app import WorklogApp
from worklog_app.core.errors import WorklogAppError
from worklog_app.core.settings import credentials_from_env

logger = logging.getLogger("worklog_app")


def _auto_connect(app: WorklogApp) -> None:
    """Connect from environment credentials if available."""
    creds = credentials_from_env()
    if creds is None:
        logger.warning("JIRA_SERVER / JIRA_EMAIL / JIRA_API_TOKEN not set; running reminder only")
        return
    try:
        app.connect(creds.base_url, creds.email, creds.access_token)
        issues = app.list_assigned_issues()
    except WorklogAppError as exc:
        logger.error("Jira startup failed: %s", exc)
        return
    logger.info("%s issue(s) assigned to you", len(issues))
    for issue in issues:
        logger.info("  %s [%s] %s", issue.key, issue.status_name, issue.summary)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = WorklogApp()

    @app.on_reminder
    def _log_reminder(message: str) -> None:
        logger.info("%s", message)

    _auto_connect(app)
    app.start()
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        pass
    finally:
        app.shutdown()


if __name__ == "__main__":
    main()
