"""Background loop that tells subscribers once a day that it is time to log work."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import date, datetime

import pytz

from .config import REMINDER_HOUR, REMINDER_INTERVAL_SECONDS, REMINDER_MINUTE, REMINDER_MESSAGE

logger = logging.getLogger(__name__)

ReminderCallback = Callable[[str], None]
Clock = Callable[[], datetime]


def local_clock(timezone: str | None = None) -> Clock:
    """Wall-clock source in ``timezone`` (pytz name) or the machine's local zone."""
    if timezone is None:
        return datetime.now
    tz = pytz.timezone(timezone)
    return lambda: datetime.now(tz)


class ReminderScheduler:
    """Wake every ``interval`` seconds and fire when local time hits ``hour:minute``.

    The check is a plain minute-equality test, so a tick skipped during the
    target minute (suspend, heavy load) means no reminder that day. Firing is
    additionally limited to once per calendar date in case two ticks land in
    the same minute.
    """

    def __init__(
        self,
        *,
        hour: int = REMINDER_HOUR,
        minute: int = REMINDER_MINUTE,
        interval: float = REMINDER_INTERVAL_SECONDS,
        clock: Clock | None = None,
        message: str = REMINDER_MESSAGE,
    ):
        self.hour = hour
        self.minute = minute
        self.interval = interval
        self.message = message
        self._clock = clock or local_clock()
        self._callbacks: list[ReminderCallback] = []
        self._callbacks_lock = threading.Lock()
        self._last_fired: date | None = None
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    # ------------------ Subscription ------------------
    def subscribe(self, callback: ReminderCallback) -> ReminderCallback:
        with self._callbacks_lock:
            self._callbacks.append(callback)
        return callback

    def unsubscribe(self, callback: ReminderCallback) -> None:
        with self._callbacks_lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    # ------------------ Loop ------------------
    def is_due(self, now: datetime) -> bool:
        if now.hour != self.hour or now.minute != self.minute:
            return False
        return self._last_fired != now.date()

    def tick(self, now: datetime | None = None) -> bool:
        """Run one check; return True when the reminder fired."""
        now = now or self._clock()
        if not self.is_due(now):
            return False
        self._last_fired = now.date()
        logger.info("Daily reminder due at %s", now.strftime("%Y-%m-%d %H:%M"))
        self._emit()
        return True

    def _emit(self) -> None:
        with self._callbacks_lock:
            callbacks = list(self._callbacks)
        if not callbacks:
            logger.warning("Daily reminder fired with no subscriber to show it")
            return
        for callback in callbacks:
            try:
                callback(self.message)
            except Exception as exc:
                logger.warning("Reminder callback %r failed: %s", callback, exc)

    def _run(self) -> None:
        logger.debug("Reminder loop started (%02d:%02d every %ss)", self.hour, self.minute, self.interval)
        while not self._stop.wait(self.interval):
            try:
                self.tick()
            except Exception:
                logger.exception("Reminder tick failed")

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="worklog-reminder", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
