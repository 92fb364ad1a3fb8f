"""comment - add, edit and delete review comments.

API failures land in the envelope ({success: false, error}) so the
editor can show them next to the comment it tried to post.
"""

from typing import Optional

import requests

from neo_reviewer.commands import resolve
from neo_reviewer.config import Config
from neo_reviewer.github.client import GitHubClient
from neo_reviewer.github.types import CommentResponse, GitHubError, parse_pr_url
from neo_reviewer.log import span, warn


def run(url: str, path: str, line: int, side: str, body: str,
        start_line: Optional[int] = None, start_side: Optional[str] = None,
        config: Optional[Config] = None, client: Optional[GitHubClient] = None) -> dict:
    pr_ref = parse_pr_url(url)
    config, client = resolve(config, client)

    with span("comment", subsystem="commands", path=path, line=line, side=side):
        try:
            pr = client.get_pr(pr_ref)
            comment = client.add_review_comment(
                pr_ref, pr.head_sha, path, line, side, body,
                start_line=start_line, start_side=start_side,
            )
        except (GitHubError, requests.RequestException) as exc:
            warn("comment", f"comment on {path}:{line} failed: {exc}")
            return CommentResponse.failed(str(exc)).to_dict()
        return CommentResponse.ok(comment.id, comment.html_url).to_dict()


def run_edit(url: str, comment_id: int, body: str, config: Optional[Config] = None,
             client: Optional[GitHubClient] = None) -> dict:
    pr_ref = parse_pr_url(url)
    config, client = resolve(config, client)

    with span("edit", subsystem="commands", comment_id=comment_id):
        try:
            comment = client.edit_review_comment(pr_ref, comment_id, body)
        except (GitHubError, requests.RequestException) as exc:
            warn("comment", f"edit of {comment_id} failed: {exc}")
            return CommentResponse.failed(str(exc)).to_dict()
        return CommentResponse.ok(comment.id, comment.html_url).to_dict()


def run_delete(url: str, comment_id: int, config: Optional[Config] = None,
               client: Optional[GitHubClient] = None) -> dict:
    pr_ref = parse_pr_url(url)
    config, client = resolve(config, client)

    with span("delete", subsystem="commands", comment_id=comment_id):
        try:
            client.delete_review_comment(pr_ref, comment_id)
        except (GitHubError, requests.RequestException) as exc:
            warn("comment", f"delete of {comment_id} failed: {exc}")
            return CommentResponse.failed(str(exc)).to_dict()
        return CommentResponse.ok(comment_id).to_dict()
