"""Issue list rendering helpers for Streamlit."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import pandas as pd
import streamlit as st

from jira_pomodoro.core.mappers import format_time_spent, issues_to_dataframe
from jira_pomodoro.core.models import IssueModel


def add_ticket_link(df: pd.DataFrame, server: str, key_col: str = "key", label: str = "Ticket"):
    if df.empty or key_col not in df.columns:
        return df, {}
    out = df.copy()
    base = server.rstrip("/")
    out[label] = out[key_col].astype(str).apply(lambda k: f"{base}/browse/{k}" if k and k != "nan" else "")
    cfg = {
        label: st.column_config.LinkColumn(
            label,
            display_text=r"browse/(.*)$",
            help="Open in Jira",
            width="small",
        )
    }
    return out, cfg


def render_issue_table(issues: Sequence[IssueModel], server: str) -> None:
    table, cfg = add_ticket_link(issues_to_dataframe(issues), server)
    cols = [c for c in ("Ticket", "summary", "status", "time_spent") if c in table.columns]
    st.dataframe(table[cols], hide_index=True, column_config=cfg)


def render_issue_cards(
    issues: Sequence[IssueModel],
    on_start: Callable[[IssueModel], None],
    *,
    disabled: bool = False,
) -> None:
    st.subheader(f"Your Issues ({len(issues)})")
    if not issues:
        st.info("No issues found. Make sure you have issues assigned to you in Jira.")
        return
    for issue in issues:
        with st.container(border=True):
            info, action = st.columns([5, 1], vertical_alignment="center")
            info.markdown(f"**{issue.key}: {issue.summary}**")
            info.caption(f"Status: {issue.status} | Total Time: **{format_time_spent(issue.time_spent_seconds)}**")
            action.button(
                "Start Pomodoro",
                key=f"start-{issue.key}",
                on_click=on_start,
                args=(issue,),
                disabled=disabled,
            )
