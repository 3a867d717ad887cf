"""Yet another tele services"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from gh_notify.errors import TelegramError
from gh_notify.log import get_logger

TELEGRAM_API_BASE = "https://api.telegram.org"
HTTP_TIMEOUT_SECONDS = 15

JSONDict = dict[str, Any]

log = get_logger(__name__)


def _normalize_newlines(s: str) -> str:
    return (s or "").replace("\r\n", "\n").replace("\r", "\n")


def build_params(
    chat_id: int | str,
    text: str,
    thread_id: Optional[int] = None,
    *,
    disable_web_page_preview: bool = False,
    disable_notification: bool = False,
) -> JSONDict:
    """Query parameters for sendMessage; optional flags only when set."""
    params: JSONDict = {"chat_id": chat_id}
    if thread_id:
        params["message_thread_id"] = thread_id
    if disable_web_page_preview:
        params["disable_web_page_preview"] = "true"
    if disable_notification:
        params["disable_notification"] = "true"
    params["text"] = _normalize_newlines(text)
    params["parse_mode"] = "Markdown"
    return params


async def send_message(
    token: str,
    chat_id: int | str,
    text: str,
    thread_id: Optional[int] = None,
    *,
    disable_web_page_preview: bool = False,
    disable_notification: bool = False,
    client: Optional[httpx.AsyncClient] = None,
) -> JSONDict:
    """Send a Markdown message, raising TelegramError on rejection."""
    api = f"{TELEGRAM_API_BASE}/bot{token}/sendMessage"
    params = build_params(
        chat_id,
        text,
        thread_id,
        disable_web_page_preview=disable_web_page_preview,
        disable_notification=disable_notification,
    )

    if client is None:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS) as owned:
            resp = await owned.get(api, params=params)
    else:
        resp = await client.get(api, params=params)

    try:
        data = resp.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}
    if resp.status_code >= 300 or not data.get("ok", False):
        raise TelegramError(resp.status_code, resp.text)
    return data


async def notify(
    token: str,
    chat_id: int | str,
    text: str,
    thread_id: Optional[int] = None,
    *,
    disable_web_page_preview: bool = False,
    disable_notification: bool = False,
    client: Optional[httpx.AsyncClient] = None,
) -> bool:
    """
    Fire-and-forget delivery.

    Any delivery failure is logged and swallowed so a broken
    notification never fails the workflow. Returns whether it was delivered.
    """
    try:
        data = await send_message(
            token,
            chat_id,
            text,
            thread_id,
            disable_web_page_preview=disable_web_page_preview,
            disable_notification=disable_notification,
            client=client,
        )
    except Exception as exc:  # delivery must never fail the workflow
        log.error(
            "telegram_delivery_failed",
            chat_id=str(chat_id),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return False

    log.info(
        "telegram_delivered",
        chat_id=str(chat_id),
        message_id=(data.get("result") or {}).get("message_id"),
    )
    return True
