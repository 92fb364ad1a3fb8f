"""diff - unified diff text in, change blocks out. pure, no I/O."""

from neo_reviewer.diff.lines import DiffLine, HunkHeader, LineKind, classify_line, parse_hunk_header
from neo_reviewer.diff.parser import BlockBuilder, ParsedPatch, parse_patch, parse_patch_lines
from neo_reviewer.diff.split import parse_git_diff, split_sections
from neo_reviewer.diff.types import (
    ChangeBlock, ChangeKind, DeletionGroup, FileStatus, OldToNewMap, ReviewFile,
)
