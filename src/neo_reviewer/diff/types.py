"""types.py - the shapes a parsed diff comes out as.

ChangeBlock, DeletionGroup, OldToNewMap, ReviewFile. plain dataclasses,
each with a to_dict() that keeps the wire field names exactly as the
editor side reads them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ChangeKind(str, Enum):
    ADD = "add"
    DELETE = "delete"
    CHANGE = "change"


class FileStatus(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"

    @classmethod
    def from_api(cls, value: str) -> "FileStatus":
        """map a status string (git or GitHub flavored) to a FileStatus."""
        value = (value or "").lower()
        if value == "added":
            return cls.ADDED
        if value in ("removed", "deleted"):
            return cls.DELETED
        if value == "renamed":
            return cls.RENAMED
        return cls.MODIFIED


@dataclass
class OldToNewMap:
    """one deleted old-file line and the new-file line it hangs off."""
    old_line: int
    new_line: int

    def to_dict(self) -> dict:
        return {"old_line": self.old_line, "new_line": self.new_line}


@dataclass
class DeletionGroup:
    """a run of deleted lines that all render at the same anchor."""
    anchor_line: int
    old_lines: list[str] = field(default_factory=list)
    old_line_numbers: list[int] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "anchor_line": self.anchor_line,
            "old_lines": list(self.old_lines),
            "old_line_numbers": list(self.old_line_numbers),
        }


@dataclass
class ChangeBlock:
    """a contiguous run of added/deleted lines, no context in between.

    start_line and end_line are new-file coordinates (1-indexed).
    changed_lines is the part of added_lines that replaces deletions.
    """
    start_line: int
    end_line: int
    kind: ChangeKind
    added_lines: list[int] = field(default_factory=list)
    changed_lines: list[int] = field(default_factory=list)
    deletion_groups: list[DeletionGroup] = field(default_factory=list)
    old_to_new: list[OldToNewMap] = field(default_factory=list)

    def anchor_for_old_line(self, old_line: int) -> Optional[int]:
        """new-file anchor for a deleted old-file line, None if not in this block."""
        for entry in self.old_to_new:
            if entry.old_line == old_line:
                return entry.new_line
        return None

    def to_dict(self) -> dict:
        return {
            "start_line": self.start_line,
            "end_line": self.end_line,
            "kind": self.kind.value,
            "added_lines": list(self.added_lines),
            "changed_lines": list(self.changed_lines),
            "deletion_groups": [g.to_dict() for g in self.deletion_groups],
            "old_to_new": [m.to_dict() for m in self.old_to_new],
        }


@dataclass
class ReviewFile:
    """one file in a review: where it lives, how it changed, its blocks."""
    path: str
    status: FileStatus = FileStatus.MODIFIED
    additions: int = 0
    deletions: int = 0
    content: Optional[str] = None
    change_blocks: list[ChangeBlock] = field(default_factory=list)

    def anchor_for_old_line(self, old_line: int) -> Optional[int]:
        for block in self.change_blocks:
            anchor = block.anchor_for_old_line(old_line)
            if anchor is not None:
                return anchor
        return None

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "status": self.status.value,
            "additions": self.additions,
            "deletions": self.deletions,
            "content": self.content,
            "change_blocks": [b.to_dict() for b in self.change_blocks],
        }
