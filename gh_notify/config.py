"""Action inputs and runtime settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from gh_notify.errors import MissingInputError
from gh_notify.utils import parse_flag, parse_thread_id


def get_input(name: str, env: Mapping[str, str] | None = None) -> str:
    """
    Read an action input the way the runner exposes it.

    ``thread_id`` is looked up as ``INPUT_THREAD_ID``; surrounding
    whitespace is stripped and an absent input reads as ``""``.
    """
    env = os.environ if env is None else env
    key = "INPUT_" + name.replace(" ", "_").upper()
    return (env.get(key) or "").strip()


def _require(value: str, message: str) -> str:
    if not value:
        raise MissingInputError(message)
    return value


@dataclass(frozen=True)
class Settings:
    """Resolved inputs for one run"""

    token: str
    chat_id: str
    thread_id: Optional[int] = None
    disable_web_page_preview: bool = False
    disable_notification: bool = False
    status: str = ""
    event: str = ""
    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """
        Build settings from ``INPUT_*`` variables.

        Raises
        ------
        MissingInputError
            When ``token`` or ``to`` is empty.
        """
        if env is None:
            load_dotenv()
            env = os.environ

        token = _require(get_input("token", env), "Token is not valid")
        chat_id = _require(get_input("to", env), "to address is not valid")

        return cls(
            token=token,
            chat_id=chat_id,
            thread_id=parse_thread_id(get_input("thread_id", env)),
            disable_web_page_preview=parse_flag(
                get_input("disable_web_page_preview", env)
            ),
            disable_notification=parse_flag(get_input("disable_notification", env)),
            status=get_input("status", env),
            event=get_input("event", env) or (env.get("GITHUB_EVENT_NAME") or ""),
            log_level=(env.get("LOG_LEVEL") or "INFO").strip().upper(),
            log_json=parse_flag(env.get("LOG_JSON")),
        )
