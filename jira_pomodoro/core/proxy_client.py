"""HTTP client the UI uses to reach the backend proxy."""

from __future__ import annotations

from typing import Any

import requests

from .config import HEADER_DOMAIN, HEADER_EMAIL, HEADER_TOKEN, ClientSettings
from .models import Credentials, IssueModel


class ApiError(RuntimeError):
    """A proxy call failed; ``status`` is None when no response came back."""

    def __init__(self, message: str, status: int | None = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload


def extract_error_message(payload: Any) -> str | None:
    """Pick a human readable message out of a proxy or Jira error body."""
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message:
            return message
        messages = [m for m in payload.get("errorMessages") or [] if isinstance(m, str) and m]
        errors = payload.get("errors")
        if isinstance(errors, dict):
            messages.extend(str(v) for v in errors.values() if v)
        if messages:
            return "; ".join(messages)
    elif isinstance(payload, str) and payload.strip():
        return payload.strip()
    return None


class ProxyClient:
    def __init__(self, settings: ClientSettings | None = None, session: requests.Session | None = None):
        self.settings = settings or ClientSettings()
        self.base_url = self.settings.api_url.rstrip("/")
        self.session = session or requests.Session()

    def set_auth(self, credentials: Credentials | None) -> None:
        """Attach credentials to every later request, or drop them when None."""
        headers = self.session.headers
        if credentials is not None:
            headers[HEADER_DOMAIN] = credentials.domain
            headers[HEADER_EMAIL] = credentials.email
            headers[HEADER_TOKEN] = credentials.token
        else:
            for name in (HEADER_DOMAIN, HEADER_EMAIL, HEADER_TOKEN):
                headers.pop(name, None)

    def _call(self, method: str, path: str, **kwargs) -> requests.Response:
        try:
            resp = self.session.request(
                method, f"{self.base_url}{path}", timeout=self.settings.request_timeout, **kwargs
            )
        except requests.RequestException as exc:
            raise ApiError(f"Could not reach the backend: {exc}") from exc
        if resp.status_code >= 400:
            try:
                payload = resp.json()
            except ValueError:
                payload = resp.text
            message = extract_error_message(payload) or "Server error"
            raise ApiError(message, status=resp.status_code, payload=payload)
        return resp

    def get_issues(self) -> list[IssueModel]:
        resp = self._call("GET", "/issues")
        return [IssueModel.from_json(item) for item in resp.json()]

    def add_worklog(self, issue_key: str, time_spent_seconds: int) -> None:
        self._call("POST", f"/issues/{issue_key}/worklog", json={"timeSpentSeconds": time_spent_seconds})
