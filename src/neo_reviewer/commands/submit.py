"""submit - approve, request changes, or leave a review comment."""

from typing import Optional

from neo_reviewer.commands import resolve
from neo_reviewer.config import Config
from neo_reviewer.github.client import GitHubClient
from neo_reviewer.github.types import parse_pr_url
from neo_reviewer.log import info, span


def run(url: str, event: str, body: Optional[str] = None, config: Optional[Config] = None,
        client: Optional[GitHubClient] = None) -> dict:
    pr_ref = parse_pr_url(url)
    config, client = resolve(config, client)
    event = event.upper()

    with span("submit", subsystem="commands", event=event):
        client.submit_review(pr_ref, event, body)
    info("submit", f"submitted {event} on PR #{pr_ref.number}")
    return {"success": True, "event": event}
