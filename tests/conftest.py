"""Shared fixtures: event payloads shaped like the ones GitHub sends."""

import logging

import pytest
import structlog

from gh_notify.schemas import EventContext

SENDER = {"login": "octocat", "html_url": "https://github.com/octocat"}
REPOSITORY = {
    "name": "hello-world",
    "full_name": "octo-org/hello-world",
    "html_url": "https://github.com/octo-org/hello-world",
    "owner": {"login": "octo-org"},
}


def make_ctx(event_name="", payload=None, **kwargs):
    return EventContext(event_name=event_name, payload=payload or {}, **kwargs)


@pytest.fixture
def issue_payload():
    return {
        "action": "opened",
        "issue": {
            "number": 42,
            "html_url": "https://github.com/octo-org/hello-world/issues/42",
        },
        "repository": REPOSITORY,
        "sender": SENDER,
    }


@pytest.fixture
def pr_payload():
    return {
        "action": "opened",
        "pull_request": {
            "number": 7,
            "html_url": "https://github.com/octo-org/hello-world/pull/7",
        },
        "repository": REPOSITORY,
        "sender": SENDER,
    }


@pytest.fixture
def push_payload():
    return {
        "ref": "refs/heads/main",
        "repository": REPOSITORY,
        "sender": SENDER,
        "commits": [
            {
                "url": "https://github.com/octo-org/hello-world/commit/aaa111",
                "message": "fix: handle empty input\r\n\r\nCloses #3",
                "committer": {"name": "Mona Lisa", "username": "mona"},
            },
            {
                "url": "https://github.com/octo-org/hello-world/commit/bbb222",
                "message": "docs: readme",
                "committer": {"name": "Hubot", "username": "hubot"},
            },
        ],
    }


@pytest.fixture(autouse=True)
def _restore_logging():
    # main() reconfigures the root logger onto the captured stderr of the test
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()
