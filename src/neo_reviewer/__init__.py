"""neo_reviewer: review diffs and pull requests from the editor."""

__version__ = "0.1.0"

from neo_reviewer.diff import (
    ChangeBlock, ChangeKind, DeletionGroup, FileStatus, OldToNewMap, ReviewFile,
    parse_git_diff, parse_patch,
)

__all__ = [
    "__version__",
    "ChangeBlock", "ChangeKind", "DeletionGroup", "FileStatus", "OldToNewMap", "ReviewFile",
    "parse_git_diff", "parse_patch",
]
