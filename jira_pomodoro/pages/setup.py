"""Connection setup page: collect Jira credentials and store them locally."""

from __future__ import annotations

from contextlib import suppress

import streamlit as st

from jira_pomodoro.app import SETUP_PAGE, get_store, register_page, save_credentials
from jira_pomodoro.core.config import API_TOKEN_URL
from jira_pomodoro.core.credentials import build_credentials


def _secret_defaults() -> dict[str, str]:
    """Pre-fill values from Streamlit secrets (``[jira]`` section or top level)."""
    top: dict = {}
    jira_secrets: dict = {}
    with suppress(FileNotFoundError):
        top = dict(st.secrets)
        jira_secrets = dict(top.get("jira") or {})

    def pick(*names: str) -> str:
        for name in names:
            value = jira_secrets.get(name) or top.get(name)
            if value:
                return str(value)
        return ""

    return {
        "domain": pick("JIRA_DOMAIN", "JIRA_SERVER"),
        "email": pick("JIRA_EMAIL"),
        "token": pick("JIRA_API_TOKEN", "JIRA_TOKEN"),
    }


@register_page(SETUP_PAGE)
def setup_page():
    st.title("Jira Configuration")
    st.caption("Please provide your Jira credentials to connect.")

    stored = get_store().credentials
    defaults = stored.to_json() if stored else _secret_defaults()

    with st.form("jira-settings"):
        domain = st.text_input("Jira Domain", value=defaults["domain"], placeholder="your-company.atlassian.net")
        email = st.text_input("Jira Login Email", value=defaults["email"], placeholder="you@example.com")
        token = st.text_input(
            "Jira API Token",
            type="password",
            value=defaults["token"],
            placeholder="Your Jira API Token",
        )
        st.markdown(f"[Create API Token]({API_TOKEN_URL})")
        submitted = st.form_submit_button("Save and Connect", type="primary")

    if not submitted:
        return
    try:
        credentials = build_credentials(domain, email, token)
    except ValueError as exc:
        st.error(str(exc))
        return
    save_credentials(credentials)
    st.rerun()
