"""Event context schemas"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from gh_notify.log import get_logger

log = get_logger(__name__)

DEFAULT_SERVER_URL = "https://github.com"


def dig(data: Any, path: Sequence[str]) -> Any:
    """Walk nested mappings, returning None as soon as a key is missing."""
    current = data
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


class EventContext(BaseModel):
    """
    Read-only view of the workflow run that triggered the notification.

    ``payload`` is the raw webhook body; its shape depends on the event and
    is never validated. ``ref`` and ``repository`` come from the runner, not
    the payload.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    event_name: str = ""
    ref: Optional[str] = None
    repository: Optional[str] = None
    server_url: str = DEFAULT_SERVER_URL
    payload: dict[str, Any] = Field(default_factory=dict)

    @property
    def action(self) -> Optional[str]:
        value = self.payload.get("action")
        return str(value) if value is not None else None

    @property
    def sender_login(self) -> Optional[str]:
        return dig(self.payload, ("sender", "login"))

    @property
    def sender_url(self) -> Optional[str]:
        return dig(self.payload, ("sender", "html_url"))

    @property
    def owner(self) -> Optional[str]:
        if self.repository and "/" in self.repository:
            return self.repository.split("/", 1)[0]
        return dig(self.payload, ("repository", "owner", "login"))

    @property
    def repo(self) -> Optional[str]:
        if self.repository and "/" in self.repository:
            return self.repository.split("/", 1)[1]
        return dig(self.payload, ("repository", "name"))

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "EventContext":
        """Build the context from the ``GITHUB_*`` runner variables."""
        env = os.environ if env is None else env
        return cls(
            event_name=env.get("GITHUB_EVENT_NAME") or "",
            ref=env.get("GITHUB_REF") or None,
            repository=env.get("GITHUB_REPOSITORY") or None,
            server_url=(env.get("GITHUB_SERVER_URL") or DEFAULT_SERVER_URL).rstrip("/"),
            payload=load_payload(env.get("GITHUB_EVENT_PATH")),
        )


def load_payload(path: str | None) -> dict[str, Any]:
    """Read the webhook JSON written by the runner; ``{}`` when unusable."""
    if not path:
        return {}
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        log.warning("event_payload_unreadable", path=path, error=str(exc))
        return {}
    if not isinstance(data, dict):
        log.warning("event_payload_unreadable", path=path, error="not a JSON object")
        return {}
    return data
