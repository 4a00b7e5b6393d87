"""Launcher for the Jira proxy backend.

Usage:
  python run_server.py            # listens on $PORT (default 3001)
"""

from jira_pomodoro.server.app import main

if __name__ == "__main__":
    main()
