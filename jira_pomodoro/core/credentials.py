"""Local credential and preference store backed by a JSON settings file."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from .config import DEFAULT_POMODORO_MINUTES, clamp_minutes
from .models import Credentials

logger = logging.getLogger(__name__)

_PROTOCOL_RE = re.compile(r"^(https?://)?", flags=re.IGNORECASE)
_TRAILING_SLASHES_RE = re.compile(r"/+$")


def clean_domain(domain: str) -> str:
    """Strip a leading ``http://``/``https://`` and any trailing slashes.

    >>> clean_domain("https://acme.atlassian.net//")
    'acme.atlassian.net'
    """
    text = domain.strip()
    text = _PROTOCOL_RE.sub("", text, count=1)
    return _TRAILING_SLASHES_RE.sub("", text)


def build_credentials(domain: str, email: str, token: str) -> Credentials:
    """Validate raw form values and return cleaned credentials.

    Raises ``ValueError`` when any field is empty.
    """
    domain = (domain or "").strip()
    email = (email or "").strip()
    token = (token or "").strip()
    if not (domain and email and token):
        raise ValueError("Please fill in all fields.")
    cleaned = clean_domain(domain)
    if not cleaned:
        raise ValueError("Please fill in all fields.")
    return Credentials(domain=cleaned, email=email, token=token)


class CredentialStore:
    """Process-wide settings: Jira credentials plus the pomodoro length.

    Loaded once with :meth:`load`; every mutation is written straight back to
    the settings file.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._credentials: Credentials | None = None
        self._pomodoro_minutes: int = DEFAULT_POMODORO_MINUTES

    @property
    def credentials(self) -> Credentials | None:
        return self._credentials

    @property
    def pomodoro_minutes(self) -> int:
        return self._pomodoro_minutes

    def load(self) -> CredentialStore:
        data = self._read()
        auth = data.get("auth")
        creds = Credentials.from_json(auth) if isinstance(auth, dict) else None
        self._credentials = creds if creds is not None and creds.is_complete else None
        self._pomodoro_minutes = clamp_minutes(data.get("pomodoroMinutes", DEFAULT_POMODORO_MINUTES))
        return self

    def save_credentials(self, credentials: Credentials) -> None:
        if not credentials.is_complete:
            raise ValueError("Please fill in all fields.")
        self._credentials = credentials
        self._write()

    def set_pomodoro_minutes(self, minutes: int) -> int:
        self._pomodoro_minutes = clamp_minutes(minutes)
        self._write()
        return self._pomodoro_minutes

    def clear(self) -> None:
        """Forget the stored credentials; the pomodoro length is kept."""
        self._credentials = None
        self._write()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable settings file %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self) -> None:
        payload = {
            "auth": self._credentials.to_json() if self._credentials else None,
            "pomodoroMinutes": self._pomodoro_minutes,
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
