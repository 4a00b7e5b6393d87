"""Convenience launcher for the Streamlit timer UI.

Usage:
  streamlit run run_app.py

Automatically imports every module in ``jira_pomodoro/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
The backend proxy must be running as well (``python run_server.py``).
"""

import logging
from importlib import import_module
from pathlib import Path

import streamlit as st

from jira_pomodoro.app import main
from jira_pomodoro.core.config import APP_TITLE

st.set_page_config(page_title=APP_TITLE, page_icon="🍅", layout="centered")

logger = logging.getLogger(__name__)

PAGES_DIR = Path(__file__).parent / "jira_pomodoro" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    mod_name = f"jira_pomodoro.pages.{py.stem}"
    try:
        import_module(mod_name)
    except ImportError as e:  # pragma: no cover
        logger.error("Failed importing page %s: %s", mod_name, e)

if __name__ == "__main__":
    main()
