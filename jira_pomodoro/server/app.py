"""Stateless Flask proxy between the timer UI and the Jira REST API.

Every request carries its own credentials in ``x-jira-*`` headers; a new
:class:`JiraAPI` is built for it and discarded afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from flask import Flask, Response, jsonify, request

from jira_pomodoro.core.config import HEADER_DOMAIN, HEADER_EMAIL, HEADER_TOKEN, ServerSettings
from jira_pomodoro.core.jira_client import JiraAPI, JiraTransportError, JiraUpstreamError
from jira_pomodoro.core.models import Credentials

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Credentials], JiraAPI]

MISSING_HEADERS_MESSAGE = "Jira authentication headers are missing."
BAD_WORKLOG_MESSAGE = "timeSpentSeconds (number) is required."
UNEXPECTED_MESSAGE = "An unexpected error occurred."


def credentials_from_headers(headers) -> Credentials | None:
    creds = Credentials(
        domain=(headers.get(HEADER_DOMAIN) or "").strip(),
        email=(headers.get(HEADER_EMAIL) or "").strip(),
        token=(headers.get(HEADER_TOKEN) or "").strip(),
    )
    return creds if creds.is_complete else None


def parse_time_spent(payload) -> int | None:
    """Return a positive whole number of seconds, or None if the body is unusable."""
    if not isinstance(payload, dict):
        return None
    value = payload.get("timeSpentSeconds")
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    seconds = int(value)
    return seconds if seconds > 0 else None


def _relay(exc: JiraUpstreamError) -> Response:
    return Response(exc.body, status=exc.status_code, content_type=exc.content_type)


def _unexpected():
    return jsonify({"message": UNEXPECTED_MESSAGE}), 500


def create_app(client_factory: ClientFactory | None = None, settings: ServerSettings | None = None) -> Flask:
    settings = settings or ServerSettings()
    if client_factory is None:

        def client_factory(creds: Credentials) -> JiraAPI:
            return JiraAPI(creds, api_version=settings.api_version)

    app = Flask(__name__)
    app.config["SERVER_SETTINGS"] = settings

    def _client_for_request() -> JiraAPI | None:
        creds = credentials_from_headers(request.headers)
        if creds is None:
            return None
        return client_factory(creds)

    @app.get("/api/issues")
    def list_issues():
        api = _client_for_request()
        if api is None:
            return jsonify({"message": MISSING_HEADERS_MESSAGE}), 400

        logger.info("Fetching issues from Jira...")
        try:
            issues = api.list_issues()
        except JiraUpstreamError as exc:
            logger.error("Error fetching Jira issues: status=%s body=%s", exc.status_code, exc.body[:500])
            return _relay(exc)
        except JiraTransportError as exc:
            logger.error("Error fetching Jira issues: %s", exc)
            return _unexpected()
        logger.info("Found %s issues.", len(issues))
        return jsonify([i.to_json() for i in issues])

    @app.post("/api/issues/<issue_key>/worklog")
    def add_worklog(issue_key: str):
        api = _client_for_request()
        if api is None:
            return jsonify({"message": MISSING_HEADERS_MESSAGE}), 400

        seconds = parse_time_spent(request.get_json(silent=True))
        if seconds is None:
            return jsonify({"message": BAD_WORKLOG_MESSAGE}), 400

        logger.info("Adding worklog to issue %s...", issue_key)
        try:
            api.add_worklog(issue_key, seconds)
        except JiraUpstreamError as exc:
            logger.error(
                "Error adding worklog to %s: status=%s body=%s", issue_key, exc.status_code, exc.body[:500]
            )
            return _relay(exc)
        except JiraTransportError as exc:
            logger.error("Error adding worklog to %s: %s", issue_key, exc)
            return _unexpected()
        return jsonify({"message": "Worklog added successfully"}), 201

    return app


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = ServerSettings()
    app = create_app(settings=settings)
    logger.info("Backend server is running on http://localhost:%s", settings.port)
    app.run(host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
