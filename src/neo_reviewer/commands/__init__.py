"""commands - one module per CLI command.

each run() returns the JSON-ready dict the editor reads. expected
failures raise (GitError, GitHubError, AuthError, InvalidPrUrl) and the
CLI turns them into an error line; comment-style commands report API
errors inside their envelope instead.
"""

from typing import Optional

from neo_reviewer.config import Config, load_config
from neo_reviewer.github.client import GitHubClient


def resolve(config: Optional[Config] = None, client: Optional[GitHubClient] = None):
    """(config, client), loading or building whichever wasn't given."""
    config = config or load_config()
    return config, client or GitHubClient.from_config(config)
