"""auth - report whether a working GitHub token is available."""

from typing import Optional

from neo_reviewer.config import Config, load_config
from neo_reviewer.github.auth import AuthStatus, check_auth
from neo_reviewer.github.client import GitHubClient


def run(config: Optional[Config] = None) -> AuthStatus:
    config = config or load_config()
    return check_auth(lambda token: GitHubClient.from_config(config, token=token))
