"""review.py - build review file lists from the local repository.

local review: working tree against a base revision.
PR review: the PR's commit range, with each file's head content attached.
plus aggregate stats and a one-screen summary for humans.
"""

from dataclasses import dataclass, field
from typing import Optional

from neo_reviewer import git
from neo_reviewer.diff import FileStatus, ReviewFile, parse_git_diff
from neo_reviewer.log import info, span


@dataclass
class DiffResponse:
    """what `diff` hands to the editor."""
    files: list[ReviewFile] = field(default_factory=list)
    git_root: str = ""

    def to_dict(self) -> dict:
        return {
            "files": [f.to_dict() for f in self.files],
            "git_root": self.git_root,
        }


@dataclass
class DiffStats:
    """aggregate statistics for a set of review files."""
    files_changed: int = 0
    additions: int = 0
    deletions: int = 0
    change_blocks: int = 0
    files_added: int = 0
    files_deleted: int = 0
    files_modified: int = 0
    files_renamed: int = 0

    def summary(self) -> str:
        parts = [f"{self.files_changed} files changed"]
        if self.additions:
            parts.append(f"{self.additions} insertions(+)")
        if self.deletions:
            parts.append(f"{self.deletions} deletions(-)")
        return ", ".join(parts)


# ============================================================
# ASSEMBLY
# ============================================================

def get_local_review(base: str = "HEAD", cwd: Optional[str] = None,
                     timeout: int = git.DEFAULT_TIMEOUT) -> DiffResponse:
    """uncommitted changes against base, ready to serialize."""
    with span("local", subsystem="review", base=base):
        root = git.git_root(cwd=cwd, timeout=timeout)
        diff_output = git.local_diff(base, cwd=cwd, timeout=timeout)
        if not diff_output:
            return DiffResponse(files=[], git_root=root)
        files = parse_git_diff(diff_output)
        info("review", f"{len(files)} changed files against {base}")
        return DiffResponse(files=files, git_root=root)


def get_pr_review_files(base_sha: str, head_sha: str, include_content: bool = True,
                        cwd: Optional[str] = None,
                        timeout: int = git.DEFAULT_TIMEOUT) -> list[ReviewFile]:
    """files changed between base and head, with head content when asked."""
    with span("range", subsystem="review", base=base_sha, head=head_sha):
        files = parse_git_diff(git.range_diff(base_sha, head_sha, cwd=cwd, timeout=timeout))
        if include_content:
            for f in files:
                if f.status != FileStatus.DELETED:
                    f.content = git.show_file(head_sha, f.path, cwd=cwd, timeout=timeout)
        return files


# ============================================================
# STATS
# ============================================================

def diff_stats(files: list[ReviewFile]) -> DiffStats:
    """compute aggregate statistics from review files."""
    stats = DiffStats(files_changed=len(files))

    for f in files:
        stats.additions += f.additions
        stats.deletions += f.deletions
        stats.change_blocks += len(f.change_blocks)

        if f.status == FileStatus.ADDED:
            stats.files_added += 1
        elif f.status == FileStatus.DELETED:
            stats.files_deleted += 1
        elif f.status == FileStatus.RENAMED:
            stats.files_renamed += 1
        else:
            stats.files_modified += 1

    return stats


_ICONS = {
    FileStatus.ADDED: "+",
    FileStatus.DELETED: "-",
    FileStatus.MODIFIED: "M",
    FileStatus.RENAMED: "R",
}


def format_diff_summary(files: list[ReviewFile]) -> str:
    """human-readable summary, one line per file."""
    stats = diff_stats(files)
    lines = [stats.summary(), ""]

    for f in files:
        icon = _ICONS.get(f.status, "?")
        blocks = len(f.change_blocks)
        lines.append(f"  [{icon}] {f.path} (+{f.additions}/-{f.deletions}) "
                     f"{blocks} block{'s' if blocks != 1 else ''}")

    return "\n".join(lines)
