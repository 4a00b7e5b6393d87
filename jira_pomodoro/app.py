"""Application entry point: page registry, session wiring, and router."""

from __future__ import annotations

import streamlit as st

from jira_pomodoro.core.config import (
    APP_TITLE,
    MAX_POMODORO_MINUTES,
    MIN_POMODORO_MINUTES,
    ClientSettings,
)
from jira_pomodoro.core.credentials import CredentialStore
from jira_pomodoro.core.models import Credentials
from jira_pomodoro.core.proxy_client import ProxyClient
from jira_pomodoro.core.service import Notice, PomodoroService
from jira_pomodoro.core.timer import CountdownTimer

PAGES = {}

SETUP_PAGE = "Setup / Connection"
ISSUES_PAGE = "Issues"
TIMER_PAGE = "Timer"


def register_page(label):
    def decorator(func):
        PAGES[label] = func
        return func

    return decorator


def resolve_page(has_credentials: bool, timer_running: bool) -> str:
    """The view is driven by state: no credentials, then settings; a running timer wins otherwise."""
    if not has_credentials:
        return SETUP_PAGE
    if timer_running:
        return TIMER_PAGE
    return ISSUES_PAGE


# ------------------ Session wiring ------------------
def get_store() -> CredentialStore:
    if "store" not in st.session_state:
        settings = ClientSettings()
        st.session_state["client_settings"] = settings
        st.session_state["store"] = CredentialStore(settings.settings_path).load()
    return st.session_state["store"]


def get_service() -> PomodoroService:
    if "service" not in st.session_state:
        store = get_store()
        client = ProxyClient(st.session_state.get("client_settings"))
        client.set_auth(store.credentials)
        st.session_state["service"] = PomodoroService(client)
    return st.session_state["service"]


def get_timer() -> CountdownTimer:
    if "timer" not in st.session_state:
        st.session_state["timer"] = CountdownTimer()
    return st.session_state["timer"]


def push_notice(notice: Notice) -> None:
    st.session_state["notice"] = notice


def pop_notice() -> Notice | None:
    return st.session_state.pop("notice", None)


def save_credentials(credentials: Credentials) -> None:
    get_store().save_credentials(credentials)
    get_service().api.set_auth(credentials)
    st.session_state.pop("issues", None)
    st.session_state.pop("fetch_error", None)


def clear_settings() -> None:
    get_store().clear()
    get_service().api.set_auth(None)
    get_timer().cancel()
    for key in ("issues", "fetch_error", "notice"):
        st.session_state.pop(key, None)


def render_sidebar() -> None:
    store = get_store()
    st.sidebar.title(APP_TITLE)
    minutes = st.sidebar.number_input(
        "Pomodoro length (minutes)",
        min_value=MIN_POMODORO_MINUTES,
        max_value=MAX_POMODORO_MINUTES,
        value=store.pomodoro_minutes,
        step=1,
        disabled=get_timer().is_running,
    )
    if int(minutes) != store.pomodoro_minutes:
        store.set_pomodoro_minutes(int(minutes))
    if store.credentials is not None:
        st.sidebar.caption(f"Connected to {store.credentials.domain} as {store.credentials.email}")
        if st.sidebar.button("Clear settings", help="Forget the stored Jira credentials"):
            clear_settings()
            st.rerun()


def main():
    if not PAGES:
        st.write("No pages registered yet.")
        return
    store = get_store()
    render_sidebar()
    page = resolve_page(store.credentials is not None, get_timer().is_running)
    PAGES[page]()


if __name__ == "__main__":
    main()
