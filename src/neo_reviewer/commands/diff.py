"""diff - review the working tree against a base revision."""

from typing import Optional

from neo_reviewer.config import Config, load_config
from neo_reviewer.log import span
from neo_reviewer.review import DiffResponse, get_local_review


def get_local_diff(base: Optional[str] = None, cwd: Optional[str] = None,
                   config: Optional[Config] = None) -> DiffResponse:
    config = config or load_config()
    return get_local_review(base or config.get("diff_base"), cwd=cwd,
                            timeout=config.get("git_timeout"))


def run(base: Optional[str] = None, cwd: Optional[str] = None,
        config: Optional[Config] = None) -> dict:
    with span("diff", subsystem="commands"):
        return get_local_diff(base, cwd=cwd, config=config).to_dict()
