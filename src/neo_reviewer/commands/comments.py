"""comments - existing review comments on a pull request."""

from typing import Optional

from neo_reviewer.commands import resolve
from neo_reviewer.config import Config
from neo_reviewer.github.client import GitHubClient
from neo_reviewer.github.types import parse_pr_url
from neo_reviewer.log import span


def run(url: str, config: Optional[Config] = None,
        client: Optional[GitHubClient] = None) -> dict:
    pr_ref = parse_pr_url(url)
    config, client = resolve(config, client)
    with span("comments", subsystem="commands", url=url):
        comments = client.get_review_comments(pr_ref)
    return {"comments": [c.to_dict() for c in comments]}
