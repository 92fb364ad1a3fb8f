"""github - pull request metadata, comments and reviews over the REST API."""

from neo_reviewer.github.auth import AuthError, AuthStatus, check_auth, get_token
from neo_reviewer.github.client import GitHubClient, decode_base64_content
from neo_reviewer.github.types import (
    CommentResponse, FetchResponse, GitHubError, InvalidPrUrl, PrRef, PullRequest,
    ReviewComment, parse_pr_url,
)
