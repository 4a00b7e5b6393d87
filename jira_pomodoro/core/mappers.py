"""Mapping raw Jira search JSON into IssueModel instances and display rows."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import pandas as pd

from .models import IssueModel

ISSUE_TABLE_COLUMNS: tuple[str, ...] = ("key", "summary", "status", "time_spent")


def map_issue(raw: dict[str, Any]) -> IssueModel:
    fields = raw.get("fields") or {}
    status = fields.get("status") or {}
    timetracking = fields.get("timetracking") or {}
    return IssueModel(
        id=str(raw.get("id") or ""),
        key=str(raw.get("key") or ""),
        summary=str(fields.get("summary") or ""),
        status=str(status.get("name") or "") if isinstance(status, dict) else str(status),
        time_spent_seconds=int(timetracking.get("timeSpentSeconds") or 0),
    )


def map_issues(raw_issues: Iterable[dict[str, Any]]) -> list[IssueModel]:
    return [map_issue(r) for r in raw_issues]


def format_time_spent(seconds: int | float | None) -> str:
    """Render seconds as ``"1h 30m"``, ``"45m"``, ``"2h"`` or ``"0m"``."""
    if not seconds:
        return "0m"
    total = int(seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60

    parts: list[str] = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0 or hours == 0:
        parts.append(f"{minutes}m")
    return " ".join(parts)


def total_time_spent(issues: Iterable[IssueModel]) -> int:
    return sum(i.time_spent_seconds for i in issues)


def issues_to_dataframe(issues: Iterable[IssueModel]) -> pd.DataFrame:
    rows = [
        {
            "key": i.key,
            "summary": i.summary,
            "status": i.status,
            "time_spent_seconds": i.time_spent_seconds,
            "time_spent": format_time_spent(i.time_spent_seconds),
        }
        for i in issues
    ]
    if not rows:
        return pd.DataFrame(columns=[*ISSUE_TABLE_COLUMNS, "time_spent_seconds"])
    return pd.DataFrame(rows)
