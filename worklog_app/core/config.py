"""Central configuration, constants, and runtime settings."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# Jira Connection Settings
# =============================================================================
REST_API_PREFIX = "/rest/api/3"
DEFAULT_TIMEOUT_SECONDS: float = 30.0

# Waiting longer than this on the session lock means something is badly wrong
SESSION_LOCK_TIMEOUT_SECONDS: float = 5.0

# =============================================================================
# Assigned Issue Query
# =============================================================================
ASSIGNED_ISSUES_JQL = "assignee=currentUser()"
ASSIGNED_ISSUE_FIELDS: Sequence[str] = ("summary", "status", "assignee")

# =============================================================================
# Worklog Settings
# =============================================================================
# A "day" in a duration string is a working day, not 24 hours
WORKDAY_HOURS: int = 8

# Atlassian Document Format version used for worklog comments
COMMENT_DOC_VERSION: int = 1

# Jira wants millisecond precision and a numeric UTC offset
WORKLOG_STARTED_FORMAT = "%Y-%m-%dT%H:%M:%S.000%z"

# =============================================================================
# Daily Reminder
# =============================================================================
REMINDER_HOUR: int = 17
REMINDER_MINUTE: int = 0
REMINDER_INTERVAL_SECONDS: float = 60.0
REMINDER_MESSAGE = "Time to log your work"

SETTINGS_FILENAME = "worklog.yaml"


@dataclass(slots=True)
class AppSettings:
    verify_ssl: bool = True
    timeout: float | None = DEFAULT_TIMEOUT_SECONDS
    reminder_hour: int = REMINDER_HOUR
    reminder_minute: int = REMINDER_MINUTE
    reminder_interval: float = REMINDER_INTERVAL_SECONDS
    # None means the machine's local zone
    timezone: str | None = None

