"""Issue list page: the user's open issues and the entry point for a pomodoro."""

from __future__ import annotations

import logging

import streamlit as st

from jira_pomodoro.app import (
    ISSUES_PAGE,
    get_service,
    get_store,
    get_timer,
    pop_notice,
    register_page,
)
from jira_pomodoro.core.config import APP_TITLE
from jira_pomodoro.core.mappers import format_time_spent, total_time_spent
from jira_pomodoro.core.models import IssueModel
from jira_pomodoro.core.proxy_client import ApiError
from jira_pomodoro.core.service import describe_fetch_error
from jira_pomodoro.visual.tables import render_issue_cards, render_issue_table

logger = logging.getLogger(__name__)

NOTICE_RENDERERS = {"success": st.success, "info": st.info, "error": st.error}


def request_reload() -> None:
    st.session_state["loading"] = True


def load_issues() -> None:
    st.session_state["fetch_error"] = None
    try:
        with st.spinner("Loading issues..."):
            st.session_state["issues"] = get_service().fetch_issues()
    except ApiError as exc:
        logger.error("Failed to fetch issues: status=%s %s", exc.status, exc.message)
        st.session_state["fetch_error"] = describe_fetch_error(exc)
        st.session_state.setdefault("issues", [])
    finally:
        st.session_state["loading"] = False


def start_pomodoro(issue: IssueModel) -> None:
    get_timer().start(issue, get_store().pomodoro_minutes)


@register_page(ISSUES_PAGE)
def issues_page():
    st.title(APP_TITLE)

    if "issues" not in st.session_state:
        st.session_state["loading"] = True
    loading = bool(st.session_state.get("loading"))

    # kept until the post-load rerun so it survives the refresh
    notice = st.session_state.get("notice") if loading else pop_notice()
    if notice is not None:
        NOTICE_RENDERERS.get(notice.level, st.info)(notice.message)

    st.button(
        "Reload issues",
        key="reload-issues",
        on_click=request_reload,
        disabled=loading,
        help="Fetch your open issues from Jira again",
    )

    error = st.session_state.get("fetch_error")
    if error and not loading:
        st.error(error)

    issues: list[IssueModel] = st.session_state.get("issues") or []
    if issues:
        st.metric("Total logged time", format_time_spent(total_time_spent(issues)))
    st.divider()
    render_issue_cards(issues, start_pomodoro, disabled=loading)

    credentials = get_store().credentials
    if issues and credentials is not None:
        with st.expander("Table view"):
            render_issue_table(issues, credentials.base_url)

    # controls above are drawn disabled; fetch last, then redraw them enabled
    if loading:
        load_issues()
        st.rerun()
