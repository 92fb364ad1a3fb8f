"""config.py - configuration management.

layered config: defaults -> global (~/.neo-reviewer/config.json) ->
project (.neo-reviewer.json) -> environment.
covers the GitHub endpoint, request and git timeouts, log level, and
which revision `diff` compares against.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from neo_reviewer import paths


# ============================================================
# DEFAULTS
# ============================================================

DEFAULTS = {
    "api_url": "https://api.github.com",
    "user_agent": "neo-reviewer-cli",
    "timeout": 30,
    "git_timeout": 60,
    "per_page": 100,
    "log_level": "warn",
    "diff_base": "HEAD",
}

_ENV_MAP = {
    "NEO_REVIEWER_API_URL": "api_url",
    "NEO_REVIEWER_TIMEOUT": "timeout",
    "NEO_REVIEWER_GIT_TIMEOUT": "git_timeout",
    "NEO_REVIEWER_LOG_LEVEL": "log_level",
    "NEO_REVIEWER_DIFF_BASE": "diff_base",
}

_INT_KEYS = ("timeout", "git_timeout", "per_page")


@dataclass
class Config:
    """merged configuration from all layers."""
    values: dict = field(default_factory=dict)
    source: str = ""  # which layer provided the final values

    def get(self, key: str, default=None):
        return self.values.get(key, DEFAULTS.get(key, default))

    def set(self, key: str, value):
        self.values[key] = value

    def __getitem__(self, key: str):
        return self.get(key)

    def __contains__(self, key: str):
        return key in self.values or key in DEFAULTS

    def to_dict(self) -> dict:
        merged = dict(DEFAULTS)
        merged.update(self.values)
        return merged


# ============================================================
# CONFIG LOADING
# ============================================================

def _read(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


def load_global() -> dict:
    """load global config from ~/.neo-reviewer/config.json."""
    return _read(paths.GLOBAL_CONFIG)


def load_project(root: str = ".") -> dict:
    """load project config from .neo-reviewer.json in root."""
    return _read(Path(root) / paths.PROJECT_CONFIG_NAME)


def load_config(root: str = ".") -> Config:
    """load merged config: defaults -> global -> project -> env."""
    merged = dict(DEFAULTS)

    global_config = load_global()
    merged.update(global_config)

    project_config = load_project(root)
    merged.update(project_config)

    env_overrides = _env_overrides()
    merged.update(env_overrides)

    source = "defaults"
    if env_overrides:
        source = "env"
    elif project_config:
        source = "project"
    elif global_config:
        source = "global"

    return Config(values=merged, source=source)


def _env_overrides() -> dict:
    """extract config overrides from environment variables."""
    overrides = {}

    for env_key, config_key in _ENV_MAP.items():
        value = os.environ.get(env_key)
        if value is None:
            continue
        if config_key in _INT_KEYS:
            try:
                overrides[config_key] = int(value)
            except ValueError:
                pass
        else:
            overrides[config_key] = value

    return overrides


def list_config(root: str = ".") -> dict:
    """list all config values with their sources."""
    global_config = load_global()
    project_config = load_project(root)
    env = _env_overrides()

    result = {}
    for key in DEFAULTS:
        source = "default"
        value = DEFAULTS[key]

        if key in global_config:
            source = "global"
            value = global_config[key]
        if key in project_config:
            source = "project"
            value = project_config[key]
        if key in env:
            source = "env"
            value = env[key]

        result[key] = {"value": value, "source": source}

    return result
