"""
GitHub → Telegram workflow notifier

Runs once per workflow step: resolve the action inputs, render the triggering
event as a Markdown message and hand it to the Bot API.

Exit status
-----------
- 0 : message sent, skipped, or delivery failed (delivery never fails the job)
- 1 : ``token`` or ``to`` input missing; nothing is composed or sent
"""

from __future__ import annotations

import asyncio
import sys
from typing import Mapping, Optional

from gh_notify.config import Settings
from gh_notify.errors import MissingInputError
from gh_notify.log import get_logger, setup_logging
from gh_notify.schemas import EventContext
from gh_notify.services.composer import actor_suffix, compose_body
from gh_notify.services.telegram import notify

log = get_logger(__name__)


def set_failed(message: str) -> None:
    """Emit the workflow command that marks the step as failed."""
    sys.stdout.write(f"::error::{message}\n")
    sys.stdout.flush()


async def run(settings: Settings, ctx: EventContext, **notify_kwargs) -> Optional[str]:
    """Compose and deliver one notification. Returns the text, or None if skipped."""
    body = compose_body(settings.event, ctx)
    if body is None:
        log.info("event_skipped", gh_event=settings.event, action=ctx.action)
        return None

    text = body + actor_suffix(ctx, settings.status)
    log.info("event_composed", gh_event=settings.event, action=ctx.action, length=len(text))
    await notify(
        settings.token,
        settings.chat_id,
        text,
        settings.thread_id,
        disable_web_page_preview=settings.disable_web_page_preview,
        disable_notification=settings.disable_notification,
        **notify_kwargs,
    )
    return text


def main(env: Mapping[str, str] | None = None) -> int:
    try:
        settings = Settings.from_env(env)
    except MissingInputError as exc:
        setup_logging()
        log.error("missing_input", error=str(exc))
        set_failed(str(exc))
        return 1

    setup_logging(settings.log_level, json_output=settings.log_json)
    ctx = EventContext.from_env(env)
    asyncio.run(run(settings, ctx))
    return 0
