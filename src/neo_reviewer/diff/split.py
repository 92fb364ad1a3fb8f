"""split.py - cut a multi-file git diff into per-file review entries.

each `diff --git a/x b/y` header opens a section. status markers before
the first hunk decide added/deleted/renamed (modified otherwise). the
section's lines go through the hunk parser; files that come out with no
change blocks (pure renames, mode changes, binaries) are left out.
"""

from typing import Optional

from neo_reviewer.diff.lines import LineKind, classify_line, iter_lines, parse_path_line
from neo_reviewer.diff.parser import parse_patch_lines
from neo_reviewer.diff.types import FileStatus, ReviewFile
from neo_reviewer.log import debug


def _section_status(lines: list[str]) -> FileStatus:
    """first status marker before the first hunk header wins."""
    for raw in lines:
        line = classify_line(raw)
        if line.kind == LineKind.HUNK_HEADER:
            break
        if line.kind == LineKind.STATUS_MARKER:
            return line.status
    return FileStatus.MODIFIED


def _post_image_path(lines: list[str]) -> Optional[str]:
    """path from the `+++ b/...` line before the first hunk, if any."""
    for raw in lines:
        if raw.startswith("@@"):
            break
        if raw.startswith("+++ "):
            return parse_path_line(raw)
    return None


def _build_file(path: str, lines: list[str]) -> Optional[ReviewFile]:
    parsed = parse_patch_lines(lines)
    if not parsed.blocks:
        debug("diff", f"skipping {path}: no content changes")
        return None
    debug("diff", f"{path}: {parsed.hunks} hunks, {len(parsed.blocks)} blocks")
    return ReviewFile(
        path=path,
        status=_section_status(lines),
        additions=parsed.additions,
        deletions=parsed.deletions,
        content=None,
        change_blocks=parsed.blocks,
    )


def split_sections(diff_text: str) -> list[tuple[str, list[str]]]:
    """(path, body lines) for every `diff --git` section, in order.

    the path is the `+++ b/...` line's when the section has one, the
    header's otherwise. a `diff` line that isn't `diff --git` ends the
    open section without starting a new one; its lines are dropped until
    the next git header.
    """
    raw_sections = []
    current: Optional[tuple[Optional[str], list[str]]] = None

    for raw in iter_lines(diff_text):
        if raw.startswith("diff "):
            current = None
            if raw.startswith("diff --git "):
                current = (classify_line(raw).path, [])
                raw_sections.append(current)
            continue
        if current is not None:
            current[1].append(raw)

    sections = []
    for header_path, lines in raw_sections:
        path = _post_image_path(lines) or header_path
        if path is None:
            debug("diff", "skipping a section whose path can't be read")
            continue
        sections.append((path, lines))
    return sections


def parse_git_diff(diff_text: str) -> list[ReviewFile]:
    """parse `git diff` output into ReviewFiles with change blocks.

    additions/deletions count the raw +/- lines of the hunk bodies. the
    `+++`/`---` path lines are never counted. content is left None,
    callers that have file contents fill it in.
    """
    files = []
    for path, lines in split_sections(diff_text):
        review_file = _build_file(path, lines)
        if review_file is not None:
            files.append(review_file)
    return files
