"""fetch - everything the editor needs to review a pull request.

PR metadata, the viewer, existing comments, and the changed files. by
default the files come from the local clone (both PR commits must be
present); remote=True reads them from the API instead.
"""

from typing import Optional

from neo_reviewer import git
from neo_reviewer.commands import resolve
from neo_reviewer.config import Config
from neo_reviewer.github.client import GitHubClient
from neo_reviewer.github.types import FetchResponse, parse_pr_url
from neo_reviewer.log import info, span
from neo_reviewer.review import get_pr_review_files


def _require_commits(pr, cwd: Optional[str], timeout: int):
    try:
        git.ensure_commit(pr.base_sha, cwd=cwd, timeout=timeout)
    except git.GitError as exc:
        raise git.GitError(
            f"Missing PR base commit {pr.base_sha} locally (base branch '{pr.base_ref}'). "
            f"Run `git fetch origin {pr.base_ref}` and retry. {exc}"
        ) from exc
    try:
        git.ensure_commit(pr.head_sha, cwd=cwd, timeout=timeout)
    except git.GitError as exc:
        raise git.GitError(
            f"Missing PR head commit {pr.head_sha} locally. "
            f"Run `gh pr checkout {pr.number}` and retry. {exc}"
        ) from exc


def fetch_review(url: str, remote: bool = False, cwd: Optional[str] = None,
                 config: Optional[Config] = None,
                 client: Optional[GitHubClient] = None) -> FetchResponse:
    pr_ref = parse_pr_url(url)
    config, client = resolve(config, client)

    pr = client.get_pr(pr_ref)
    viewer = client.get_viewer()

    if remote:
        files = client.get_pr_files(pr_ref, pr.head_sha)
    else:
        timeout = config.get("git_timeout")
        _require_commits(pr, cwd, timeout)
        files = get_pr_review_files(pr.base_sha, pr.head_sha, include_content=True,
                                    cwd=cwd, timeout=timeout)

    comments = client.get_review_comments(pr_ref)
    info("fetch", f"PR #{pr.number}: {len(files)} files, {len(comments)} comments")
    return FetchResponse(pr=pr, files=files, comments=comments, viewer=viewer)


def run(url: str, remote: bool = False, cwd: Optional[str] = None,
        config: Optional[Config] = None, client: Optional[GitHubClient] = None) -> dict:
    with span("fetch", subsystem="commands", url=url, remote=remote):
        return fetch_review(url, remote=remote, cwd=cwd, config=config, client=client).to_dict()
