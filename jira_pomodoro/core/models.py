"""Domain data models for issues, credentials, and the countdown timer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class IssueModel:
    id: str
    key: str
    summary: str
    status: str
    time_spent_seconds: int = 0

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "key": self.key,
            "summary": self.summary,
            "status": self.status,
            "timeSpentSeconds": self.time_spent_seconds,
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> IssueModel:
        return cls(
            id=str(data.get("id") or ""),
            key=str(data.get("key") or ""),
            summary=str(data.get("summary") or ""),
            status=str(data.get("status") or ""),
            time_spent_seconds=int(data.get("timeSpentSeconds") or 0),
        )


@dataclass(slots=True, frozen=True)
class Credentials:
    domain: str
    email: str
    token: str

    @property
    def is_complete(self) -> bool:
        return bool(self.domain and self.email and self.token)

    @property
    def base_url(self) -> str:
        return f"https://{self.domain}"

    def to_json(self) -> dict[str, str]:
        return {"domain": self.domain, "email": self.email, "token": self.token}

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Credentials:
        return cls(
            domain=str(data.get("domain") or ""),
            email=str(data.get("email") or ""),
            token=str(data.get("token") or ""),
        )

    def __repr__(self) -> str:  # keep the token out of logs and tracebacks
        return f"Credentials(domain={self.domain!r}, email={self.email!r}, token='***')"


@dataclass(slots=True)
class TimerState:
    remaining_seconds: int
    is_running: bool
