"""Central configuration, constants, and environment-driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

# =============================================================================
# Jira Connection Settings
# =============================================================================
JIRA_REST_API_VERSION = os.environ.get("JIRA_REST_API_VERSION", "3")

# Request headers carrying the user's credentials from the frontend to the proxy
HEADER_DOMAIN = "x-jira-domain"
HEADER_EMAIL = "x-jira-email"
HEADER_TOKEN = "x-jira-token"
AUTH_HEADERS: tuple[str, str, str] = (HEADER_DOMAIN, HEADER_EMAIL, HEADER_TOKEN)

# Open issues assigned to the authenticated user, most recently touched first
MY_OPEN_ISSUES_JQL = "assignee = currentUser() AND statusCategory != Done ORDER BY updated DESC"
ISSUE_FIELDS: tuple[str, ...] = ("summary", "status", "timetracking")
SEARCH_MAX_RESULTS = 100

API_TOKEN_URL = "https://id.atlassian.com/manage-profile/security/api-tokens"

# =============================================================================
# Pomodoro Defaults
# =============================================================================
DEFAULT_POMODORO_MINUTES: int = 25
MIN_POMODORO_MINUTES: int = 1
MAX_POMODORO_MINUTES: int = 60
# Jira rejects worklogs shorter than one minute
MIN_LOGGABLE_SECONDS: int = 60
TICK_INTERVAL_SECONDS: float = 1.0

APP_TITLE = "Jira Pomodoro Timer"

# =============================================================================
# Local settings storage
# =============================================================================
DEFAULT_SETTINGS_PATH = Path.home() / ".jira_pomodoro" / "settings.json"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(slots=True)
class ServerSettings:
    host: str = "0.0.0.0"
    port: int = field(default_factory=lambda: _env_int("PORT", 3001))
    api_version: str = JIRA_REST_API_VERSION


@dataclass(slots=True)
class ClientSettings:
    api_url: str = field(
        default_factory=lambda: os.environ.get("JIRA_POMODORO_API_URL", "http://localhost:3001/api")
    )
    settings_path: Path = field(
        default_factory=lambda: Path(os.environ.get("JIRA_POMODORO_SETTINGS") or DEFAULT_SETTINGS_PATH)
    )
    request_timeout: float = 30.0


def clamp_minutes(value: int | float | str | None) -> int:
    """Coerce a pomodoro length to whole minutes within the allowed bounds."""
    try:
        minutes = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return DEFAULT_POMODORO_MINUTES
    return max(MIN_POMODORO_MINUTES, min(MAX_POMODORO_MINUTES, minutes))
