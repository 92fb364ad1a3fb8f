"""auth.py - find a GitHub token and check that it works.

`gh auth token` first (it follows SSO authorizations), then the
GITHUB_TOKEN environment variable.
"""

import os
import subprocess
from dataclasses import dataclass
from typing import Callable, Optional

import requests

from neo_reviewer.github.types import GitHubError
from neo_reviewer.log import debug


TOKEN_ENV = "GITHUB_TOKEN"


class AuthError(Exception):
    """no usable GitHub token."""


def _gh_token(timeout: int = 10) -> Optional[str]:
    try:
        proc = subprocess.run(
            ["gh", "auth", "token"], capture_output=True, text=True, timeout=timeout,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired, OSError) as exc:
        debug("auth", f"gh auth token unavailable: {exc}")
        return None
    if proc.returncode != 0:
        return None
    token = (proc.stdout or "").strip()
    return token or None


def get_token_with_source() -> tuple[str, str]:
    """(token, where it came from). raises AuthError if there is none."""
    token = _gh_token()
    if token:
        return token, "gh auth token"
    token = os.environ.get(TOKEN_ENV, "").strip()
    if token:
        return token, TOKEN_ENV
    raise AuthError(
        "No GitHub token found.\n"
        f"Either run `gh auth login` or set the {TOKEN_ENV} environment variable."
    )


def get_token() -> str:
    return get_token_with_source()[0]


# ============================================================
# STATUS
# ============================================================

AUTHENTICATED = "authenticated"
INVALID_TOKEN = "invalid_token"
NO_TOKEN = "no_token"


@dataclass
class AuthStatus:
    state: str
    username: str = ""
    source: str = ""
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.state == AUTHENTICATED

    def __str__(self) -> str:
        if self.state == AUTHENTICATED:
            return f"Authenticated as {self.username} (via {self.source})"
        if self.state == INVALID_TOKEN:
            return f"Invalid token: {self.error}"
        return f"No token: {self.error}"


def check_auth(client_factory: Callable) -> AuthStatus:
    """resolve a token and ask GitHub who it belongs to.

    client_factory(token) must return something with get_viewer().
    """
    try:
        token, source = get_token_with_source()
    except AuthError as exc:
        return AuthStatus(state=NO_TOKEN, error=str(exc))

    try:
        username = client_factory(token).get_viewer()
    except (GitHubError, requests.RequestException) as exc:
        return AuthStatus(state=INVALID_TOKEN, source=source, error=str(exc))
    return AuthStatus(state=AUTHENTICATED, username=username, source=source)
