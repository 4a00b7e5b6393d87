"""Jira API client wrapper (REST v3), built fresh for every proxied request."""

from __future__ import annotations

import json
from typing import Any

import requests
from jira import JIRA, JIRAError

from .config import ISSUE_FIELDS, JIRA_REST_API_VERSION, MY_OPEN_ISSUES_JQL, SEARCH_MAX_RESULTS
from .mappers import map_issues
from .models import Credentials, IssueModel


class JiraUpstreamError(RuntimeError):
    """Jira answered with an error status; carries the response for relaying."""

    def __init__(self, status_code: int, body: bytes, content_type: str | None = None):
        super().__init__(f"Jira responded {status_code}")
        self.status_code = status_code
        self.body = body
        self.content_type = content_type or "application/json"

    @classmethod
    def from_response(cls, resp: requests.Response) -> JiraUpstreamError:
        return cls(resp.status_code, resp.content or b"", resp.headers.get("Content-Type"))


class JiraTransportError(RuntimeError):
    """No usable response came back from Jira."""


class JiraAPI:
    def __init__(self, credentials: Credentials, api_version: str = JIRA_REST_API_VERSION):
        self.server = credentials.base_url
        self.api_version = api_version
        self.client = JIRA(
            basic_auth=(credentials.email, credentials.token),
            options={"server": self.server, "rest_api_version": api_version},
            get_server_info=False,
            max_retries=0,
        )

    @property
    def base_url(self) -> str:
        return f"{self.server}/rest/api/{self.api_version}"

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        session = getattr(self.client, "_session", None)
        if session is None:
            raise JiraTransportError("JIRA session unavailable")
        url = f"{self.base_url}{path}"
        try:
            resp = session.request(method, url, **kwargs)
        except JIRAError as exc:
            if exc.response is not None and exc.status_code:
                raise JiraUpstreamError.from_response(exc.response) from exc
            raise JiraTransportError(str(exc)) from exc
        except requests.RequestException as exc:
            raise JiraTransportError(str(exc)) from exc
        if resp.status_code >= 400:
            raise JiraUpstreamError.from_response(resp)
        return resp

    def search_my_open_issues(self) -> list[dict[str, Any]]:
        params = {
            "jql": MY_OPEN_ISSUES_JQL,
            "fields": ",".join(ISSUE_FIELDS),
            "maxResults": SEARCH_MAX_RESULTS,
        }
        resp = self._request("GET", "/search/jql", params=params)
        try:
            data = resp.json()
        except ValueError as exc:
            raise JiraTransportError(f"Unreadable search response: {exc}") from exc
        if not isinstance(data, dict):
            raise JiraTransportError(f"Unexpected search payload: {type(data).__name__}")
        issues = data.get("issues") or []
        if not isinstance(issues, list):
            raise JiraTransportError(f"Unexpected issues payload: {type(issues).__name__}")
        return issues

    def list_issues(self) -> list[IssueModel]:
        return map_issues(self.search_my_open_issues())

    def add_worklog(self, issue_key: str, time_spent_seconds: int) -> None:
        self._request(
            "POST",
            f"/issue/{issue_key}/worklog",
            data=json.dumps({"timeSpentSeconds": time_spent_seconds}),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )
