"""Shared test fixtures."""

from unittest.mock import MagicMock, patch

import pytest

from neo_reviewer import log
from neo_reviewer.github.types import PrRef, PullRequest, ReviewComment


PR_URL = "https://github.com/octocat/hello-world/pull/42"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """keep the real ~/.neo-reviewer and env out of every test."""
    for key in ("NEO_REVIEWER_API_URL", "NEO_REVIEWER_TIMEOUT", "NEO_REVIEWER_GIT_TIMEOUT",
                "NEO_REVIEWER_LOG_LEVEL", "NEO_REVIEWER_DIFF_BASE"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    with patch("neo_reviewer.paths.GLOBAL_CONFIG", tmp_path / "home" / "config.json"):
        yield tmp_path


@pytest.fixture(autouse=True)
def reset_log_level():
    log.set_level("info")
    yield
    log.set_level("info")


@pytest.fixture
def pr():
    return PullRequest(
        number=42, title="Add greeting", url=PR_URL, head_sha="head123", base_sha="base456",
        base_ref="main", head_ref="feature", author="octocat", state="open",
        description="says hello",
    )


@pytest.fixture
def fake_client(pr):
    """a GitHubClient stand-in with canned answers."""
    client = MagicMock()
    client.get_pr.return_value = pr
    client.get_viewer.return_value = "reviewer"
    client.get_review_comments.return_value = [
        ReviewComment(id=1, path="a.py", line=2, side="RIGHT", body="nice", author="octocat",
                      created_at="2024-01-01T00:00:00Z", html_url="https://github.com/c/1"),
    ]
    client.add_review_comment.return_value = ReviewComment(
        id=7, path="a.py", line=2, side="RIGHT", body="nit", author="reviewer",
        created_at="2024-01-02T00:00:00Z", html_url="https://github.com/c/7",
    )
    client.reply_to_comment.return_value = ReviewComment(
        id=8, path="a.py", line=2, side="RIGHT", body="done", author="reviewer",
        created_at="2024-01-02T00:00:00Z", html_url="https://github.com/c/8", in_reply_to_id=7,
    )
    client.edit_review_comment.return_value = ReviewComment(
        id=7, path="a.py", line=2, side="RIGHT", body="reworded", author="reviewer",
        created_at="2024-01-02T00:00:00Z", html_url="https://github.com/c/7",
    )
    return client


@pytest.fixture
def pr_ref():
    return PrRef(owner="octocat", repo="hello-world", number=42)
