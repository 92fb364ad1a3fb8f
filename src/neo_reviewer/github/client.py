"""client.py - the GitHub REST calls a review needs.

one requests.Session per client, bearer token, GitHub's JSON media type.
anything outside 2xx becomes a GitHubError carrying status and body.
list endpoints follow the Link header until the last page.
"""

import base64
import binascii
from typing import Optional

import requests

from neo_reviewer.config import DEFAULTS
from neo_reviewer.diff import FileStatus, ReviewFile, parse_patch
from neo_reviewer.github.auth import get_token
from neo_reviewer.github.types import GitHubError, PrRef, PullRequest, ReviewComment
from neo_reviewer.log import debug, span


API_VERSION = "2022-11-28"
REVIEW_EVENTS = ("APPROVE", "REQUEST_CHANGES", "COMMENT")


def decode_base64_content(encoded: str) -> str:
    """decode the contents API's base64 (it wraps lines). raises ValueError."""
    cleaned = "".join(encoded.split())
    try:
        raw = base64.b64decode(cleaned, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64 content: {exc}") from exc
    return raw.decode("utf-8")


class GitHubClient:
    """authenticated GitHub API client."""

    def __init__(self, token: Optional[str] = None, api_url: str = DEFAULTS["api_url"],
                 timeout: int = DEFAULTS["timeout"], user_agent: str = DEFAULTS["user_agent"],
                 per_page: int = DEFAULTS["per_page"]):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.per_page = per_page
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token or get_token()}",
            "Accept": "application/vnd.github+json",
            "User-Agent": user_agent,
            "X-GitHub-Api-Version": API_VERSION,
        })

    @classmethod
    def from_config(cls, config, token: Optional[str] = None) -> "GitHubClient":
        return cls(
            token=token,
            api_url=config.get("api_url"),
            timeout=config.get("timeout"),
            user_agent=config.get("user_agent"),
            per_page=config.get("per_page"),
        )

    # ============================================================
    # TRANSPORT
    # ============================================================

    def _request(self, method: str, path: str, what: str, **kwargs) -> requests.Response:
        url = path if path.startswith("http") else f"{self.api_url}/{path.lstrip('/')}"
        with span(what.replace(" ", "_"), subsystem="github", method=method, url=url):
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            debug("github", f"{method} {url} -> {response.status_code}")
        if not response.ok:
            raise GitHubError(response.status_code, f"Failed to {what}: {response.text.strip()}")
        return response

    def _get_json(self, path: str, what: str, **kwargs):
        return self._request("GET", path, what, **kwargs).json()

    def _get_paginated(self, path: str, what: str) -> list:
        items = []
        url = path
        params = {"per_page": self.per_page}
        while url:
            response = self._request("GET", url, what, params=params)
            items.extend(response.json())
            url = response.links.get("next", {}).get("url")
            params = None  # the next link already carries them
        return items

    @staticmethod
    def _repo_path(pr_ref: PrRef) -> str:
        return f"repos/{pr_ref.owner}/{pr_ref.repo}"

    # ============================================================
    # READS
    # ============================================================

    def get_viewer(self) -> str:
        """login of the token's owner."""
        return self._get_json("user", "get current user").get("login", "")

    def get_pr(self, pr_ref: PrRef) -> PullRequest:
        data = self._get_json(f"{self._repo_path(pr_ref)}/pulls/{pr_ref.number}", "get pull request")
        return PullRequest.from_api(data, pr_ref)

    def get_pr_files(self, pr_ref: PrRef, head_sha: str,
                     include_content: bool = True) -> list[ReviewFile]:
        """changed files from the API, patches parsed into change blocks."""
        raw_files = self._get_paginated(
            f"{self._repo_path(pr_ref)}/pulls/{pr_ref.number}/files", "list pull request files",
        )
        files = []
        for raw in raw_files:
            status = FileStatus.from_api(raw.get("status", ""))
            content = None
            if include_content and status != FileStatus.DELETED:
                try:
                    content = self.get_file_content(pr_ref, raw["filename"], head_sha)
                except (GitHubError, ValueError) as exc:
                    debug("github", f"no content for {raw['filename']}: {exc}")
            files.append(ReviewFile(
                path=raw["filename"],
                status=status,
                additions=raw.get("additions", 0),
                deletions=raw.get("deletions", 0),
                content=content,
                change_blocks=parse_patch(raw.get("patch") or ""),
            ))
        return files

    def get_file_content(self, pr_ref: PrRef, path: str, sha: str) -> str:
        data = self._get_json(f"{self._repo_path(pr_ref)}/contents/{path}", "get file content",
                              params={"ref": sha})
        if isinstance(data, list) or not data.get("content"):
            raise ValueError(f"no file content for {path}")
        return decode_base64_content(data["content"])

    def get_review_comments(self, pr_ref: PrRef) -> list[ReviewComment]:
        raw = self._get_paginated(
            f"{self._repo_path(pr_ref)}/pulls/{pr_ref.number}/comments", "list review comments",
        )
        return [ReviewComment.from_api(c) for c in raw]

    # ============================================================
    # WRITES
    # ============================================================

    def add_review_comment(self, pr_ref: PrRef, head_sha: str, path: str, line: int,
                           side: str, body: str, start_line: Optional[int] = None,
                           start_side: Optional[str] = None) -> ReviewComment:
        """comment on a line (or a line range when start_line is given)."""
        payload = {
            "body": body,
            "commit_id": head_sha,
            "path": path,
            "line": line,
            "side": side.upper(),
        }
        if start_line is not None:
            payload["start_line"] = start_line
            payload["start_side"] = (start_side or side).upper()
        data = self._request("POST", f"{self._repo_path(pr_ref)}/pulls/{pr_ref.number}/comments",
                             "create comment", json=payload).json()
        return ReviewComment.from_api(data)

    def reply_to_comment(self, pr_ref: PrRef, comment_id: int, body: str) -> ReviewComment:
        data = self._request(
            "POST", f"{self._repo_path(pr_ref)}/pulls/{pr_ref.number}/comments/{comment_id}/replies",
            "reply to comment", json={"body": body},
        ).json()
        return ReviewComment.from_api(data)

    def edit_review_comment(self, pr_ref: PrRef, comment_id: int, body: str) -> ReviewComment:
        data = self._request("PATCH", f"{self._repo_path(pr_ref)}/pulls/comments/{comment_id}",
                             "edit comment", json={"body": body}).json()
        return ReviewComment.from_api(data)

    def delete_review_comment(self, pr_ref: PrRef, comment_id: int):
        self._request("DELETE", f"{self._repo_path(pr_ref)}/pulls/comments/{comment_id}",
                      "delete comment")

    def submit_review(self, pr_ref: PrRef, event: str, body: Optional[str] = None):
        """submit a review. event is APPROVE, REQUEST_CHANGES or COMMENT."""
        event = event.upper()
        if event not in REVIEW_EVENTS:
            raise ValueError(f"unknown review event {event!r}, expected one of {', '.join(REVIEW_EVENTS)}")
        payload = {"event": event}
        if body is not None:
            payload["body"] = body
        self._request("POST", f"{self._repo_path(pr_ref)}/pulls/{pr_ref.number}/reviews",
                      "submit review", json=payload)
