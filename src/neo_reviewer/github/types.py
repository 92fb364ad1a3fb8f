"""types.py - GitHub-side shapes and the JSON envelopes built from them."""

import re
from dataclasses import dataclass, field, asdict
from typing import Optional

from neo_reviewer.diff.types import FileStatus, ReviewFile


PR_URL_RE = re.compile(r"github\.com/([^/]+)/([^/]+)/pull/(\d+)(?:[/?#]|$)")


class InvalidPrUrl(ValueError):
    """the string doesn't point at a GitHub pull request."""


class GitHubError(Exception):
    """GitHub answered with a non-2xx status."""

    def __init__(self, status: int, message: str):
        super().__init__(f"{message} ({status})")
        self.status = status
        self.message = message


@dataclass
class PrRef:
    """owner/repo/number of a pull request."""
    owner: str
    repo: str
    number: int

    def url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}/pull/{self.number}"


def parse_pr_url(url: str) -> PrRef:
    """parse https://github.com/<owner>/<repo>/pull/<n>[/...][?...][#...]."""
    match = PR_URL_RE.search(url or "")
    if not match:
        raise InvalidPrUrl(f"Invalid GitHub PR URL: {url}")
    return PrRef(owner=match.group(1), repo=match.group(2), number=int(match.group(3)))


@dataclass
class PullRequest:
    number: int
    title: str
    url: str
    head_sha: str
    base_sha: str
    base_ref: str
    head_ref: str
    author: str
    state: str
    description: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict, pr_ref: PrRef) -> "PullRequest":
        head = data.get("head") or {}
        base = data.get("base") or {}
        return cls(
            number=data.get("number", pr_ref.number),
            title=data.get("title") or "",
            url=pr_ref.url(),
            head_sha=head.get("sha", ""),
            base_sha=base.get("sha", ""),
            base_ref=base.get("ref", ""),
            head_ref=head.get("ref", ""),
            author=(data.get("user") or {}).get("login", ""),
            state=(data.get("state") or "unknown").lower(),
            description=data.get("body"),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ReviewComment:
    id: int
    path: str
    line: Optional[int]
    side: str
    body: str
    author: str
    created_at: str
    html_url: str
    start_line: Optional[int] = None
    start_side: Optional[str] = None
    in_reply_to_id: Optional[int] = None

    @classmethod
    def from_api(cls, data: dict) -> "ReviewComment":
        return cls(
            id=data["id"],
            path=data.get("path") or "",
            line=data.get("line"),
            side=data.get("side") or "",
            body=data.get("body") or "",
            author=(data.get("user") or {}).get("login", ""),
            created_at=data.get("created_at") or "",
            html_url=data.get("html_url") or "",
            start_line=data.get("start_line"),
            start_side=data.get("start_side"),
            in_reply_to_id=data.get("in_reply_to_id"),
        )

    def to_dict(self) -> dict:
        return asdict(self)


# ============================================================
# ENVELOPES
# ============================================================

@dataclass
class FetchResponse:
    pr: PullRequest
    files: list[ReviewFile] = field(default_factory=list)
    comments: list[ReviewComment] = field(default_factory=list)
    viewer: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "pr": self.pr.to_dict(),
            "files": [f.to_dict() for f in self.files],
            "comments": [c.to_dict() for c in self.comments],
            "viewer": self.viewer,
        }


@dataclass
class CommentResponse:
    success: bool
    comment_id: Optional[int] = None
    html_url: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, comment_id: int, html_url: Optional[str] = None) -> "CommentResponse":
        return cls(success=True, comment_id=comment_id, html_url=html_url)

    @classmethod
    def failed(cls, error: str) -> "CommentResponse":
        return cls(success=False, error=error)

    def to_dict(self) -> dict:
        return asdict(self)


__all__ = [
    "FileStatus", "ReviewFile", "InvalidPrUrl", "GitHubError", "PrRef", "parse_pr_url",
    "PullRequest", "ReviewComment", "FetchResponse", "CommentResponse",
]
