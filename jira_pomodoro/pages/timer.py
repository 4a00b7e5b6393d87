"""Focus page: the running countdown with digital and analog displays."""

from __future__ import annotations

import streamlit as st

from jira_pomodoro.app import TIMER_PAGE, get_service, get_timer, push_notice, register_page
from jira_pomodoro.core.config import TICK_INTERVAL_SECONDS
from jira_pomodoro.core.timer import TimerResult
from jira_pomodoro.visual.clock import clock_figure


def finish(result: TimerResult | None) -> None:
    """Submit the worklog for a finished countdown and return to the issue list."""
    timer = get_timer()
    if result is not None:
        push_notice(get_service().submit(result))
        # totals changed; refetch when the list is shown again
        st.session_state.pop("issues", None)
    timer.cancel()


@st.fragment(run_every=TICK_INTERVAL_SECONDS)
def countdown(token: int):
    timer = get_timer()
    result = timer.tick(token)
    if result is not None:
        finish(result)
        st.rerun()
        return
    if token != timer.token:
        return
    st.plotly_chart(
        clock_figure(timer.minute_hand_angle, timer.second_hand_angle),
        config={"displayModeBar": False, "staticPlot": True},
    )
    st.header(timer.display)
    st.caption(timer.caption)


@register_page(TIMER_PAGE)
def timer_page():
    timer = get_timer()
    issue = timer.issue
    if issue is None:
        return
    st.subheader(f"🍅 {issue.key}: {issue.summary}")
    countdown(timer.token)
    if st.button("Stop Timer & Log Work", type="primary"):
        finish(timer.stop())
        st.rerun()
