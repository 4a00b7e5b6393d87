import pytest
import requests
from requests.structures import CaseInsensitiveDict

from jira_pomodoro.core.config import ClientSettings
from jira_pomodoro.core.models import Credentials
from jira_pomodoro.core.proxy_client import ApiError, ProxyClient, extract_error_message


class FakeResponse:
    def __init__(self, status_code, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, outcome):
        self.headers = CaseInsensitiveDict()
        self.outcome = outcome
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, dict(self.headers), kwargs))
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


def _client(outcome):
    session = FakeSession(outcome)
    client = ProxyClient(ClientSettings(api_url="http://backend:3001/api/"), session=session)
    client.set_auth(Credentials("acme.atlassian.net", "me@example.com", "t0k"))
    return client, session


def test_get_issues_sends_auth_headers():
    payload = [{"id": "1", "key": "POM-1", "summary": "A", "status": "To Do", "timeSpentSeconds": 120}]
    client, session = _client(FakeResponse(200, payload))
    issues = client.get_issues()

    assert issues[0].key == "POM-1"
    assert issues[0].time_spent_seconds == 120
    method, url, headers, _ = session.calls[0]
    assert (method, url) == ("GET", "http://backend:3001/api/issues")
    assert headers["x-jira-domain"] == "acme.atlassian.net"
    assert headers["x-jira-email"] == "me@example.com"
    assert headers["x-jira-token"] == "t0k"


def test_add_worklog_body():
    client, session = _client(FakeResponse(201, {"message": "Worklog added successfully"}))
    client.add_worklog("POM-1", 600)
    method, url, _, kwargs = session.calls[0]
    assert (method, url) == ("POST", "http://backend:3001/api/issues/POM-1/worklog")
    assert kwargs["json"] == {"timeSpentSeconds": 600}


def test_clearing_auth_drops_headers():
    client, session = _client(FakeResponse(200, []))
    client.set_auth(None)
    client.get_issues()
    assert "x-jira-token" not in session.calls[0][2]


def test_error_status_surfaces():
    client, _ = _client(FakeResponse(401, {"errorMessages": ["Client must be authenticated"]}))
    with pytest.raises(ApiError) as info:
        client.get_issues()
    assert info.value.status == 401
    assert info.value.message == "Client must be authenticated"


def test_non_json_error_body():
    client, _ = _client(FakeResponse(502, None, text=""))
    with pytest.raises(ApiError) as info:
        client.add_worklog("POM-1", 600)
    assert info.value.status == 502
    assert info.value.message == "Server error"


def test_transport_failure_has_no_status():
    client, _ = _client(requests.ConnectionError("refused"))
    with pytest.raises(ApiError) as info:
        client.get_issues()
    assert info.value.status is None


def test_extract_error_message():
    assert extract_error_message({"message": "missing"}) == "missing"
    assert extract_error_message({"errorMessages": ["a", "b"]}) == "a; b"
    assert extract_error_message({"errorMessages": [], "errors": {"timeSpent": "bad"}}) == "bad"
    assert extract_error_message({}) is None
    assert extract_error_message(" plain ") == "plain"
