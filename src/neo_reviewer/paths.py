"""paths.py - one place for all neo-reviewer paths."""

from pathlib import Path


def neo_reviewer_home() -> Path:
    """~/.neo-reviewer/ - the root of all neo-reviewer state."""
    return Path.home() / ".neo-reviewer"


GLOBAL_CONFIG = neo_reviewer_home() / "config.json"
PROJECT_CONFIG_NAME = ".neo-reviewer.json"
