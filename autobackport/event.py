"""The ``pull_request`` webhook payload that triggers a backport."""

import json
import os
from dataclasses import dataclass, field
from typing import Any

from autobackport.errors import ConfigurationError


@dataclass(frozen=True)
class PullRequestEvent:
    action: str | None
    number: int
    title: str
    merged: bool
    merge_commit_sha: str | None
    owner: str
    repo: str
    label: str | None = None
    labels: list[str] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "PullRequestEvent":
        if "pull_request" not in payload:
            raise ConfigurationError("Event does not contain pull_request data")
        pull_request = payload["pull_request"]
        repository = payload["repository"]
        label = payload.get("label") or {}
        return cls(
            action=payload.get("action"),
            number=pull_request["number"],
            title=pull_request.get("title") or "",
            merged=bool(pull_request.get("merged")),
            merge_commit_sha=pull_request.get("merge_commit_sha"),
            owner=repository["owner"]["login"],
            repo=repository["name"],
            label=label.get("name"),
            labels=[item["name"] for item in pull_request.get("labels") or []],
        )


def load_payload(event_path: str | None) -> dict[str, Any]:
    """Read the webhook payload JSON written by the Actions runner."""
    if not event_path:
        raise ConfigurationError("GITHUB_EVENT_PATH environment variable is not set")
    if not os.path.exists(event_path):
        raise ConfigurationError(f"Event file not found: {event_path}")
    with open(event_path, "r") as f:
        return json.load(f)
