"""reply - answer an existing review comment thread."""

from typing import Optional

import requests

from neo_reviewer.commands import resolve
from neo_reviewer.config import Config
from neo_reviewer.github.client import GitHubClient
from neo_reviewer.github.types import CommentResponse, GitHubError, parse_pr_url
from neo_reviewer.log import span, warn


def run(url: str, comment_id: int, body: str, config: Optional[Config] = None,
        client: Optional[GitHubClient] = None) -> dict:
    pr_ref = parse_pr_url(url)
    config, client = resolve(config, client)

    with span("reply", subsystem="commands", comment_id=comment_id):
        try:
            comment = client.reply_to_comment(pr_ref, comment_id, body)
        except (GitHubError, requests.RequestException) as exc:
            warn("reply", f"reply to {comment_id} failed: {exc}")
            return CommentResponse.failed(str(exc)).to_dict()
        return CommentResponse.ok(comment.id, comment.html_url).to_dict()
