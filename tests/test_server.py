import pytest
import responses

from jira_pomodoro.core.jira_client import JiraAPI, JiraTransportError, JiraUpstreamError
from jira_pomodoro.core.models import IssueModel
from jira_pomodoro.server.app import create_app, parse_time_spent

HEADERS = {
    "x-jira-domain": "acme.atlassian.net",
    "x-jira-email": "me@example.com",
    "x-jira-token": "t0k",
}


class DummyAPI(JiraAPI):
    def __init__(self, credentials, fail=None, issues=None):
        self.credentials = credentials
        self.fail = fail
        self.issues = issues or []
        self.worklogs = []

    def list_issues(self):
        if self.fail:
            raise self.fail
        return self.issues

    def add_worklog(self, issue_key, time_spent_seconds):
        if self.fail:
            raise self.fail
        self.worklogs.append((issue_key, time_spent_seconds))


class Factory:
    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.built = []

    def __call__(self, credentials):
        api = DummyAPI(credentials, **self.kwargs)
        self.built.append(api)
        return api


def _client(factory):
    app = create_app(client_factory=factory)
    app.testing = True
    return app.test_client()


@pytest.mark.parametrize("missing", list(HEADERS))
def test_missing_header_is_rejected_without_upstream_call(missing):
    factory = Factory()
    client = _client(factory)
    headers = {k: v for k, v in HEADERS.items() if k != missing}

    resp = client.get("/api/issues", headers=headers)
    assert resp.status_code == 400
    assert resp.get_json() == {"message": "Jira authentication headers are missing."}

    resp = client.post("/api/issues/POM-1/worklog", headers=headers, json={"timeSpentSeconds": 120})
    assert resp.status_code == 400
    assert factory.built == []


def test_list_issues():
    issue = IssueModel("10001", "POM-1", "Fix login", "In Progress", 600)
    factory = Factory(issues=[issue])
    resp = _client(factory).get("/api/issues", headers=HEADERS)
    assert resp.status_code == 200
    assert resp.get_json() == [
        {"id": "10001", "key": "POM-1", "summary": "Fix login", "status": "In Progress", "timeSpentSeconds": 600}
    ]
    creds = factory.built[0].credentials
    assert (creds.domain, creds.email, creds.token) == ("acme.atlassian.net", "me@example.com", "t0k")


def test_empty_issue_list_is_ok():
    resp = _client(Factory()).get("/api/issues", headers=HEADERS)
    assert resp.status_code == 200
    assert resp.get_json() == []


@pytest.mark.parametrize("status", [401, 403, 404])
def test_upstream_error_is_relayed(status):
    body = b'{"errorMessages":["Nope"],"errors":{}}'
    factory = Factory(fail=JiraUpstreamError(status, body, "application/json;charset=UTF-8"))
    client = _client(factory)

    resp = client.get("/api/issues", headers=HEADERS)
    assert resp.status_code == status
    assert resp.data == body

    resp = client.post("/api/issues/POM-1/worklog", headers=HEADERS, json={"timeSpentSeconds": 120})
    assert resp.status_code == status
    assert resp.data == body


def test_transport_failure_is_500():
    factory = Factory(fail=JiraTransportError("connection refused"))
    resp = _client(factory).get("/api/issues", headers=HEADERS)
    assert resp.status_code == 500
    assert resp.get_json() == {"message": "An unexpected error occurred."}


def test_add_worklog():
    factory = Factory()
    resp = _client(factory).post("/api/issues/POM-7/worklog", headers=HEADERS, json={"timeSpentSeconds": 1500})
    assert resp.status_code == 201
    assert resp.get_json() == {"message": "Worklog added successfully"}
    assert factory.built[0].worklogs == [("POM-7", 1500)]


@pytest.mark.parametrize(
    "body",
    [{}, {"timeSpentSeconds": "60"}, {"timeSpentSeconds": 0}, {"timeSpentSeconds": True}, {"timeSpentSeconds": -5}],
)
def test_add_worklog_rejects_bad_body(body):
    factory = Factory()
    resp = _client(factory).post("/api/issues/POM-7/worklog", headers=HEADERS, json=body)
    assert resp.status_code == 400
    assert resp.get_json() == {"message": "timeSpentSeconds (number) is required."}
    assert all(not api.worklogs for api in factory.built)


def test_parse_time_spent():
    assert parse_time_spent({"timeSpentSeconds": 90}) == 90
    assert parse_time_spent({"timeSpentSeconds": 90.0}) == 90
    assert parse_time_spent({"timeSpentSeconds": 90.5}) is None
    assert parse_time_spent(None) is None
    assert parse_time_spent([90]) is None


@responses.activate
def test_html_login_page_from_jira_is_json_500():
    responses.add(
        responses.GET,
        "https://acme.atlassian.net/rest/api/3/search/jql",
        body="<html>login</html>",
        status=200,
        content_type="text/html",
    )
    client = create_app().test_client()
    resp = client.get("/api/issues", headers=HEADERS)
    assert resp.status_code == 500
    assert resp.get_json() == {"message": "An unexpected error occurred."}


@responses.activate
def test_unauthorized_from_jira_is_relayed_end_to_end():
    responses.add(
        responses.GET,
        "https://acme.atlassian.net/rest/api/3/search/jql",
        json={"errorMessages": ["Client must be authenticated"]},
        status=401,
    )
    resp = create_app().test_client().get("/api/issues", headers=HEADERS)
    assert resp.status_code == 401
    assert resp.get_json() == {"errorMessages": ["Client must be authenticated"]}
