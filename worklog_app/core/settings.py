"""Load runtime settings from ``worklog.yaml`` and the environment (with fallbacks)."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import fields
from pathlib import Path

import pytz
import yaml

from .config import SETTINGS_FILENAME, AppSettings
from .models import Credentials

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "y", "on"}


def _str2bool(val, default=False) -> bool:
    if val is None:
        return default
    if isinstance(val, bool):
        return val
    return str(val).strip().lower() in _TRUTHY


def _timeout(value) -> float | None:
    """Seconds as float; None, "none" and anything <= 0 mean no timeout."""
    if value is None or str(value).strip().lower() == "none":
        return None
    seconds = float(value)
    return seconds if seconds > 0 else None


def _read_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: top level is not a mapping", path)
        return {}
    return data


def load_settings(
    path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> AppSettings:
    """Build ``AppSettings`` from defaults, then the YAML file, then env overrides.

    The YAML file may carry ``verify_ssl``, ``timeout``, ``timezone`` and a
    ``reminder`` block with ``hour``, ``minute`` and ``interval``. Unknown keys
    are ignored. Recognised environment overrides are ``JIRA_INSECURE``,
    ``JIRA_TIMEOUT`` and ``WORKLOG_TIMEZONE``.
    """
    env = os.environ if env is None else env
    yaml_path = Path(path) if path is not None else Path.cwd() / SETTINGS_FILENAME
    data = _read_yaml(yaml_path)

    settings = AppSettings()
    known = {f.name for f in fields(AppSettings)}
    reminder = data.get("reminder") or {}
    if isinstance(reminder, dict):
        for key in ("hour", "minute", "interval"):
            if key in reminder:
                data[f"reminder_{key}"] = reminder[key]

    try:
        for name in known:
            if name not in data:
                continue
            value = data[name]
            if name == "verify_ssl":
                value = _str2bool(value, default=True)
            elif name == "timeout":
                value = _timeout(value)
            elif name in ("reminder_hour", "reminder_minute"):
                value = int(value)
            elif name == "reminder_interval":
                value = float(value)
            elif name == "timezone":
                value = None if value is None else str(value)
            setattr(settings, name, value)
    except (TypeError, ValueError) as exc:
        logger.warning("Invalid value in %s (%s); using defaults", yaml_path, exc)
        settings = AppSettings()

    if _str2bool(env.get("JIRA_INSECURE")):
        settings.verify_ssl = False
    if env.get("JIRA_TIMEOUT"):
        try:
            settings.timeout = _timeout(env["JIRA_TIMEOUT"])
        except ValueError:
            logger.warning("Ignoring invalid JIRA_TIMEOUT=%r", env["JIRA_TIMEOUT"])
    if env.get("WORKLOG_TIMEZONE"):
        settings.timezone = env["WORKLOG_TIMEZONE"]

    if not (0 <= settings.reminder_hour <= 23 and 0 <= settings.reminder_minute <= 59):
        logger.warning(
            "Reminder time %s:%s out of range; using defaults",
            settings.reminder_hour,
            settings.reminder_minute,
        )
        defaults = AppSettings()
        settings.reminder_hour = defaults.reminder_hour
        settings.reminder_minute = defaults.reminder_minute
    if settings.reminder_interval <= 0:
        logger.warning("Reminder interval %s must be positive; using default", settings.reminder_interval)
        settings.reminder_interval = AppSettings().reminder_interval
    if settings.timezone is not None:
        try:
            pytz.timezone(settings.timezone)
        except pytz.UnknownTimeZoneError:
            logger.warning("Unknown timezone %r; using the local zone", settings.timezone)
            settings.timezone = None
    return settings


def credentials_from_env(env: Mapping[str, str] | None = None) -> Credentials | None:
    """Read credentials from the environment; never writes them anywhere."""
    env = os.environ if env is None else env
    server = env.get("JIRA_SERVER")
    email = env.get("JIRA_EMAIL")
    token = env.get("JIRA_API_TOKEN") or env.get("JIRA_TOKEN")
    if server and email and token:
        return Credentials(base_url=server, email=email, access_token=token)
    return None
