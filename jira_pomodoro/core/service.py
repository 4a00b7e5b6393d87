"""PomodoroService: fetches the issue list and turns finished timers into worklogs."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import MIN_LOGGABLE_SECONDS
from .models import IssueModel
from .proxy_client import ApiError, ProxyClient
from .timer import TimerResult

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Notice:
    level: str  # "success", "info" or "error"
    message: str


def describe_fetch_error(exc: ApiError) -> str:
    if exc.status is not None:
        return f"Failed to fetch issues. Status: {exc.status}. Please check credentials and connection."
    return "An unexpected error occurred."


class PomodoroService:
    def __init__(self, api: ProxyClient):
        self.api = api

    def fetch_issues(self) -> list[IssueModel]:
        issues = self.api.get_issues()
        logger.info("Loaded %s issues", len(issues))
        return issues

    def submit(self, result: TimerResult) -> Notice:
        """Log the elapsed time of a finished timer against its issue.

        Anything under one minute is skipped, since Jira rejects it; the
        caller is told either way and always returns to the issue list.
        """
        key = result.issue.key
        seconds = result.elapsed_seconds
        if seconds < MIN_LOGGABLE_SECONDS:
            logger.info("Skipping worklog for %s: only %ss elapsed", key, seconds)
            return Notice("info", "Less than one minute elapsed; nothing was logged to Jira.")
        try:
            self.api.add_worklog(key, seconds)
        except ApiError as exc:
            logger.error("Failed to log work on %s: status=%s %s", key, exc.status, exc.message)
            return Notice("error", f"Failed to log work.\nError: {exc.message or 'Server error'}")
        minutes = round(seconds / 60)
        return Notice("success", f"Worklog of {minutes} minutes added to {key}.")
