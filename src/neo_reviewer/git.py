"""git.py - the few git commands a review needs.

repo root, working-tree diff, PR range diff, commit presence, file at a
revision. every call goes through _git, which returns a RunResult and
never raises on its own; the public helpers raise GitError when git
says no.
"""

import subprocess
import time
from dataclasses import dataclass
from typing import Optional

from neo_reviewer.log import debug, span


DEFAULT_TIMEOUT = 60
DIFF_ARGS = ("diff", "--no-color", "--no-ext-diff")
# paths come back as plain UTF-8 instead of "caf\303\251.txt"
GIT_CONFIG = ("-c", "core.quotePath=false")


class GitError(Exception):
    """a git command failed. message carries git's stderr."""


@dataclass
class RunResult:
    """result of a git invocation."""

    command: list
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    elapsed_ms: float = 0.0
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        """true if returncode is 0 and no timeout."""
        return self.returncode == 0 and not self.timed_out

    def error_text(self) -> str:
        return self.stderr.strip() or self.stdout.strip() or f"exit code {self.returncode}"


def _git(*args, cwd: Optional[str] = None, timeout: int = DEFAULT_TIMEOUT) -> RunResult:
    """run git with args, capture output, handle timeout and missing binary."""
    cmd = ["git", *GIT_CONFIG, *args]
    start = time.monotonic()

    with span(args[0], subsystem="git", command=" ".join(cmd)):
        try:
            proc = subprocess.run(
                cmd, capture_output=True, text=True, timeout=timeout, cwd=cwd,
                encoding="utf-8", errors="replace",
            )
            result = RunResult(
                command=cmd,
                returncode=proc.returncode,
                stdout=proc.stdout or "",
                stderr=proc.stderr or "",
            )
        except subprocess.TimeoutExpired:
            result = RunResult(
                command=cmd, returncode=-1,
                stderr=f"git {args[0]} timed out after {timeout}s", timed_out=True,
            )
        except FileNotFoundError:
            result = RunResult(command=cmd, returncode=127, stderr="git not found")
        except OSError as exc:
            result = RunResult(command=cmd, returncode=1, stderr=str(exc))

    result.elapsed_ms = round((time.monotonic() - start) * 1000, 2)
    debug("git", f"{' '.join(cmd)} -> {result.returncode} ({result.elapsed_ms}ms)")
    return result


def _check(result: RunResult, what: str) -> str:
    if not result.ok:
        raise GitError(f"Failed to {what}: {result.error_text()}")
    return result.stdout


# ============================================================
# PUBLIC API
# ============================================================

def git_root(cwd: Optional[str] = None, timeout: int = DEFAULT_TIMEOUT) -> str:
    """absolute path of the repository's top level."""
    out = _check(_git("rev-parse", "--show-toplevel", cwd=cwd, timeout=timeout),
                 "get git root")
    return out.strip()


def local_diff(base: str = "HEAD", cwd: Optional[str] = None,
               timeout: int = DEFAULT_TIMEOUT) -> str:
    """working tree (staged and unstaged) against base."""
    return _check(_git(*DIFF_ARGS, base, cwd=cwd, timeout=timeout), "get git diff")


def range_diff(base_sha: str, head_sha: str, cwd: Optional[str] = None,
               timeout: int = DEFAULT_TIMEOUT) -> str:
    """what head adds on top of its merge base with base, like a PR shows it."""
    return _check(_git(*DIFF_ARGS, f"{base_sha}...{head_sha}", cwd=cwd, timeout=timeout),
                  f"diff {base_sha}...{head_sha}")


def ensure_commit(sha: str, cwd: Optional[str] = None, timeout: int = DEFAULT_TIMEOUT):
    """raise GitError unless sha names a commit in the local object store."""
    result = _git("cat-file", "-e", f"{sha}^{{commit}}", cwd=cwd, timeout=timeout)
    _check(result, f"find commit {sha}")


def show_file(rev: str, path: str, cwd: Optional[str] = None,
              timeout: int = DEFAULT_TIMEOUT) -> Optional[str]:
    """file content at rev, None if the path doesn't exist there."""
    result = _git("show", f"{rev}:{path}", cwd=cwd, timeout=timeout)
    if not result.ok:
        debug("git", f"no {path} at {rev}: {result.error_text()}")
        return None
    return result.stdout
