from jira_pomodoro.core.mappers import (
    format_time_spent,
    issues_to_dataframe,
    map_issue,
    map_issues,
    total_time_spent,
)
from jira_pomodoro.core.models import IssueModel


def _raw(key="POM-1", timetracking=None):
    fields = {"summary": "Fix login", "status": {"name": "In Progress"}}
    if timetracking is not None:
        fields["timetracking"] = timetracking
    return {"id": "10001", "key": key, "fields": fields}


def test_map_issue():
    issue = map_issue(_raw(timetracking={"timeSpentSeconds": 5400}))
    assert issue == IssueModel("10001", "POM-1", "Fix login", "In Progress", 5400)
    assert issue.to_json()["timeSpentSeconds"] == 5400


def test_map_issue_without_timetracking():
    assert map_issue(_raw()).time_spent_seconds == 0
    assert map_issue(_raw(timetracking={})).time_spent_seconds == 0


def test_format_time_spent():
    assert format_time_spent(0) == "0m"
    assert format_time_spent(None) == "0m"
    assert format_time_spent(45 * 60) == "45m"
    assert format_time_spent(3600) == "1h"
    assert format_time_spent(5400) == "1h 30m"


def test_totals_and_dataframe():
    issues = map_issues([_raw("A-1", {"timeSpentSeconds": 600}), _raw("A-2", {"timeSpentSeconds": 1200})])
    assert total_time_spent(issues) == 1800
    df = issues_to_dataframe(issues)
    assert list(df["key"]) == ["A-1", "A-2"]
    assert list(df["time_spent"]) == ["10m", "20m"]


def test_empty_dataframe_has_columns():
    df = issues_to_dataframe([])
    assert df.empty
    assert "time_spent" in df.columns
