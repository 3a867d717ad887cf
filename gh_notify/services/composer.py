"""Notification text for GitHub workflow events."""

from __future__ import annotations

from typing import Any, Callable, Optional

from gh_notify.log import get_logger
from gh_notify.schemas import EventContext, dig
from gh_notify.utils import collapse_newlines, last_segment

log = get_logger(__name__)

Handler = Callable[[EventContext], Optional[str]]

UNKNOWN = "unknown"

STATUS_ICONS: dict[str, str] = {
    "failure": "❗️",
    "cancelled": "❕",
    "success": "✅",
}


def _v(value: Any) -> str:
    if value is None or value == "":
        return UNKNOWN
    return str(value)


_LABEL_BRACKETS = str.maketrans("[]", "()")


def _link(text: Any, url: Any) -> str:
    # legacy Markdown has no escape for brackets; a stray "]" ends a label early
    label = _v(text).translate(_LABEL_BRACKETS)
    # A bare label beats a broken Markdown entity, which Telegram rejects.
    if not url:
        return label
    return f"[{label}]({url})"


def _repo_pair(ctx: EventContext) -> tuple[str, str]:
    owner = dig(ctx.payload, ("repository", "owner", "login")) or ctx.owner
    name = dig(ctx.payload, ("repository", "name")) or ctx.repo
    return _v(owner), _v(name)


def _pr_link(ctx: EventContext) -> str:
    owner, name = _repo_pair(ctx)
    number = dig(ctx.payload, ("pull_request", "number"))
    url = dig(ctx.payload, ("pull_request", "html_url"))
    return _link(f"{owner}/{name} #{_v(number)}", url)


def _issue_link(ctx: EventContext) -> str:
    number = dig(ctx.payload, ("issue", "number"))
    url = dig(ctx.payload, ("issue", "html_url"))
    return _link(f"#{_v(number)}", url)


def _on_issue_comment(ctx: EventContext) -> Optional[str]:
    if ctx.action != "created":
        return None
    return f"💬 new comment on {_issue_link(ctx)}"


def _on_issues(ctx: EventContext) -> str:
    issue = _issue_link(ctx)
    action = ctx.action
    if action == "assigned":
        assignee = _link(
            dig(ctx.payload, ("assignee", "login")),
            dig(ctx.payload, ("assignee", "html_url")),
        )
        return f"📝 issue {issue} has been assigned to {assignee}"
    if action == "labeled":
        label = _link(
            dig(ctx.payload, ("label", "name")),
            dig(ctx.payload, ("label", "url")),
        )
        return f"🏷️ issue {issue} has been labeled as {label}"
    return f"🏷️ issue {issue} has been {_v(action)}"


def _on_pull_request(ctx: EventContext) -> str:
    pr = _pr_link(ctx)
    action = ctx.action
    if action == "create":
        return f"📦 PR {pr} has been created"
    if action == "ready_for_review":
        return f"📦 PR {pr} is now ready for review"
    if action == "review_requested":
        return f"📦 review is requested on PR {pr}"
    return f"📦 PR {pr} has been {_v(action)}"


def _on_pull_request_review_comment(ctx: EventContext) -> str:
    return f"📦  PR review comment on {_pr_link(ctx)} has been {_v(ctx.action)}"


def _format_commit(index: int, commit: Any, server_url: str) -> str:
    message = dig(commit, ("message",))
    if isinstance(message, str):
        message = collapse_newlines(message)
    username = dig(commit, ("committer", "username"))
    profile = f"{server_url}/{username}" if username else None
    return (
        f"\n {index}- {_link(message, dig(commit, ('url',)))}"
        f" by {_link(dig(commit, ('committer', 'name')), profile)}"
    )


def _on_push(ctx: EventContext) -> str:
    owner, name = _repo_pair(ctx)
    branch = last_segment(ctx.payload.get("ref") or ctx.ref)
    repo_url = dig(ctx.payload, ("repository", "html_url"))
    branch_url = f"{repo_url}/tree/{branch}" if repo_url and branch else None
    commits = ctx.payload.get("commits")
    if not isinstance(commits, list):
        commits = []

    commit_list = "".join(
        _format_commit(index, commit, ctx.server_url)
        for index, commit in enumerate(commits, start=1)
    )
    head = _link(f"{owner}/{name} {_v(branch)}", branch_url)
    return f"🆕 new changes pushed to {head} \n total commits: {len(commits)} {commit_list}"


def _on_release(ctx: EventContext) -> str:
    owner, name = _v(ctx.owner), _v(ctx.repo)
    tag = last_segment(ctx.ref or dig(ctx.payload, ("release", "tag_name")))
    url = f"{ctx.server_url}/{owner}/{name}/tree/{tag}" if tag else None
    return f"🆕 new release {_link(f'{owner}/{name} {_v(tag)}', url)}"


EVENT_HANDLERS: dict[str, Handler] = {
    "issue_comment": _on_issue_comment,
    "issues": _on_issues,
    "pull_request": _on_pull_request,
    "pull_request_review_comment": _on_pull_request_review_comment,
    "push": _on_push,
    "release": _on_release,
}


def _unknown_event(event: str) -> str:
    return f"something went wrong! I couldn't find the event {event}!"


def compose_body(event: str, ctx: EventContext) -> Optional[str]:
    """
    Render the event specific part of the notification.

    Returns None when the event is recognised but the action is one that
    should not be announced (e.g. an edited comment).
    """
    handler = EVENT_HANDLERS.get(event)
    if handler is None:
        return _unknown_event(event)
    try:
        return handler(ctx)
    except Exception:  # never crash on a payload we did not expect
        log.exception("event_render_failed", gh_event=event)
        return _unknown_event(event)


def status_line(status: str) -> str:
    icon = STATUS_ICONS.get(status)
    if icon is None:
        return f"Action status: {status}"
    return f"Action status: {icon} {status}"


def actor_suffix(ctx: EventContext, status: str) -> str:
    actor = _link(ctx.sender_login, ctx.sender_url)
    return f"\n Action by {actor} \n {status_line(status)}"


def compose(event: str, status: str, ctx: EventContext) -> str:
    """
    Full notification text: event body, then who triggered it and how the
    job ended.

    Never raises; missing payload fields show up as ``unknown``.
    """
    body = compose_body(event, ctx) or ""
    return body + actor_suffix(ctx, status)
