"""parser.py - turn one file's hunks into change blocks.

walks the hunk bodies line by line with two counters (old-file line,
new-file line). added and deleted lines accumulate into a BlockBuilder;
a context line, a new hunk, or the end of input flushes it.

deletions have no place in the new file, so each one is anchored at the
new-file line it would sit in front of. consecutive deletions with the
same anchor form one DeletionGroup; every deletion also gets a flat
old -> new entry so comments on the old side can be placed.

in the world: the surveyor. two measuring tapes, one per file, and a
stake in the ground wherever something disappeared.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from neo_reviewer.diff.lines import LineKind, classify_line, iter_lines
from neo_reviewer.diff.types import ChangeBlock, ChangeKind, DeletionGroup, OldToNewMap


# ============================================================
# BLOCK BUILDER
# ============================================================

@dataclass
class BlockBuilder:
    """the block being accumulated. replaced with a fresh one on flush."""
    start_line: int = 0
    end_line: int = 0
    added_lines: list[int] = field(default_factory=list)
    changed_lines: list[int] = field(default_factory=list)
    deletion_groups: list[DeletionGroup] = field(default_factory=list)
    old_to_new: list[OldToNewMap] = field(default_factory=list)
    is_open: bool = False

    def touch(self, new_line: int):
        """open the block at new_line, or stretch its end to it."""
        if not self.is_open:
            self.start_line = new_line
            self.is_open = True
        self.end_line = new_line

    def push_addition(self, new_line: int, replaces_deletion: bool):
        self.touch(new_line)
        self.added_lines.append(new_line)
        if replaces_deletion:
            self.changed_lines.append(new_line)

    def push_deletion(self, anchor_line: int, old_line: str, old_line_number: int):
        """group the deletion under its anchor and log the old -> new fact."""
        self.touch(anchor_line)
        last = self.deletion_groups[-1] if self.deletion_groups else None
        if last is not None and last.anchor_line == anchor_line:
            last.old_lines.append(old_line)
            last.old_line_numbers.append(old_line_number)
        else:
            self.deletion_groups.append(DeletionGroup(
                anchor_line=anchor_line,
                old_lines=[old_line],
                old_line_numbers=[old_line_number],
            ))
        self.old_to_new.append(OldToNewMap(old_line=old_line_number, new_line=anchor_line))

    def kind(self) -> Optional[ChangeKind]:
        has_additions = bool(self.added_lines)
        has_deletions = bool(self.deletion_groups)
        if has_additions and has_deletions:
            return ChangeKind.CHANGE
        if has_additions:
            return ChangeKind.ADD
        if has_deletions:
            return ChangeKind.DELETE
        return None

    def build(self) -> Optional[ChangeBlock]:
        """the finished block, or None if nothing was added or deleted."""
        kind = self.kind()
        if not self.is_open or kind is None:
            return None
        return ChangeBlock(
            start_line=self.start_line,
            end_line=self.end_line,
            kind=kind,
            added_lines=self.added_lines,
            changed_lines=self.changed_lines,
            deletion_groups=self.deletion_groups,
            old_to_new=self.old_to_new,
        )


# ============================================================
# HUNK WALK
# ============================================================

@dataclass
class ParsedPatch:
    """blocks plus the raw +/- tallies of the hunk bodies."""
    blocks: list[ChangeBlock] = field(default_factory=list)
    additions: int = 0
    deletions: int = 0
    hunks: int = 0

    def flush(self, builder: BlockBuilder) -> BlockBuilder:
        block = builder.build()
        if block is not None:
            self.blocks.append(block)
        return BlockBuilder()


def parse_patch_lines(lines: Iterable[str]) -> ParsedPatch:
    """walk already-split patch lines. see parse_patch."""
    result = ParsedPatch()
    builder = BlockBuilder()
    in_hunk = False
    in_change_run = False
    old_line = 0
    new_line = 0

    for raw in lines:
        line = classify_line(raw, in_hunk=in_hunk)

        if line.kind == LineKind.HUNK_HEADER:
            builder = result.flush(builder)
            in_hunk = True
            in_change_run = False
            old_line = line.hunk.old_start
            new_line = line.hunk.new_start
            result.hunks += 1
            continue

        if not in_hunk:
            continue

        if line.ends_hunk:
            builder = result.flush(builder)
            in_hunk = False
            in_change_run = False
            continue

        if line.kind == LineKind.DELETION:
            builder.push_deletion(new_line, line.content, old_line)
            result.deletions += 1
            in_change_run = True
            old_line += 1
        elif line.kind == LineKind.ADDITION:
            builder.push_addition(new_line, replaces_deletion=in_change_run)
            result.additions += 1
            new_line += 1
        elif line.kind in (LineKind.CONTEXT, LineKind.BLANK):
            builder = result.flush(builder)
            in_change_run = False
            old_line += 1
            new_line += 1
        # no-newline markers and anything unrecognized are inert

    result.flush(builder)
    return result


def parse_patch(patch: str) -> list[ChangeBlock]:
    """parse a unified diff patch into change blocks (no context lines).

    lines before the first @@ header are ignored, so this takes either a
    bare patch (as the GitHub files API returns it) or a full single-file
    git diff. never raises: anything it can't read is skipped.
    """
    return parse_patch_lines(iter_lines(patch)).blocks
