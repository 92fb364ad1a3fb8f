"""lines.py - classify raw unified-diff lines.

one line in, one DiffLine out. the kind comes from the leading
character or token. no state: the caller says whether it is inside a
hunk body, because `---`/`+++` only mean "path header" outside one.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from neo_reviewer.diff.types import FileStatus


HUNK_HEADER_RE = re.compile(r"^@@\s*-(\d+)(?:,(\d+))?\s*\+(\d+)(?:,(\d+))?\s*@@(.*)")
FILE_HEADER_RE = re.compile(r"^diff --git a/(.+) b/(.+)$")
NO_NEWLINE_PREFIX = "\\ No newline"

_STATUS_PREFIXES = (
    ("new file", FileStatus.ADDED),
    ("deleted file", FileStatus.DELETED),
    ("renamed", FileStatus.RENAMED),
    ("rename from", FileStatus.RENAMED),
    ("rename to", FileStatus.RENAMED),
)


class LineKind(str, Enum):
    ADDITION = "addition"
    DELETION = "deletion"
    CONTEXT = "context"
    BLANK = "blank"
    HUNK_HEADER = "hunk_header"
    FILE_HEADER = "file_header"
    STATUS_MARKER = "status_marker"
    NO_NEWLINE = "no_newline"
    OTHER = "other"


@dataclass(frozen=True)
class HunkHeader:
    """the four numbers of an @@ line. counts default to 1."""
    old_start: int
    old_count: int
    new_start: int
    new_count: int


@dataclass(frozen=True)
class DiffLine:
    """a classified line.

    content is the text after the +/- marker for additions and
    deletions. path is set on file headers, status on status markers,
    hunk on hunk headers.
    """
    kind: LineKind
    raw: str
    content: str = ""
    path: Optional[str] = None
    status: Optional[FileStatus] = None
    hunk: Optional[HunkHeader] = None

    @property
    def ends_hunk(self) -> bool:
        """true for lines that close the current hunk body.

        a malformed @@ line is OTHER but still ends the body, the scan
        then waits for the next valid header.
        """
        if self.kind in (LineKind.HUNK_HEADER, LineKind.FILE_HEADER):
            return True
        return self.kind == LineKind.OTHER and self.raw.startswith("@@")


def parse_hunk_header(line: str) -> Optional[HunkHeader]:
    """parse `@@ -a[,b] +c[,d] @@`. None if it doesn't match."""
    match = HUNK_HEADER_RE.match(line)
    if not match:
        return None
    return HunkHeader(
        old_start=int(match.group(1)),
        old_count=int(match.group(2)) if match.group(2) is not None else 1,
        new_start=int(match.group(3)),
        new_count=int(match.group(4)) if match.group(4) is not None else 1,
    )


# ============================================================
# PATHS
# ============================================================

_C_ESCAPES = {
    "a": "\a", "b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t", "v": "\v",
    '"': '"', "\\": "\\",
}


def unquote_path(text: str) -> Optional[tuple[str, str]]:
    """read one C-quoted path from the start of text.

    git quotes paths with unusual bytes as "caf\\303\\251.txt": octal
    escapes are raw UTF-8 bytes. returns (path, rest after the closing
    quote), None if text doesn't start with a complete quoted string.
    """
    if not text.startswith('"'):
        return None
    buf = bytearray()
    i = 1
    while i < len(text):
        ch = text[i]
        if ch == '"':
            return buf.decode("utf-8", errors="replace"), text[i + 1:]
        if ch == "\\" and i + 1 < len(text):
            nxt = text[i + 1]
            octal = text[i + 1:i + 4]
            if len(octal) == 3 and all(c in "01234567" for c in octal):
                buf.append(int(octal, 8) & 0xFF)
                i += 4
                continue
            buf.extend(_C_ESCAPES.get(nxt, nxt).encode("utf-8"))
            i += 2
            continue
        buf.extend(ch.encode("utf-8"))
        i += 1
    return None


def _header_sides(rest: str) -> Optional[tuple[str, str]]:
    """(a side, b side) of what follows `diff --git `."""
    if rest.startswith('"'):
        quoted = unquote_path(rest)
        if quoted is None:
            return None
        a_side, tail = quoted
        tail = tail.lstrip(" ")
        if tail.startswith('"'):
            quoted = unquote_path(tail)
            return (a_side, quoted[0]) if quoted else None
        return a_side, tail

    if rest.endswith('"'):
        split_at = rest.find(' "b/')
        if split_at < 0:
            return None
        quoted = unquote_path(rest[split_at + 1:])
        return (rest[:split_at], quoted[0]) if quoted else None

    # unquoted and unchanged: `a/P b/P`, so both halves must agree
    half = (len(rest) - 1) // 2
    if len(rest) % 2 == 1 and rest[half] == " " and rest[:half][2:] == rest[half + 1:][2:]:
        return rest[:half], rest[half + 1:]

    match = FILE_HEADER_RE.match("diff --git " + rest)
    return ("a/" + match.group(1), "b/" + match.group(2)) if match else None


def parse_file_header(line: str) -> Optional[str]:
    """post-image path of a `diff --git a/x b/y` line, quoted or not."""
    if not line.startswith("diff --git "):
        return None
    sides = _header_sides(line[len("diff --git "):])
    if sides is None:
        return None
    a_side, b_side = sides
    if not (a_side.startswith("a/") and b_side.startswith("b/")):
        return None
    return b_side[2:]


def parse_path_line(line: str) -> Optional[str]:
    """post-image path of a `+++ b/x` line. None for /dev/null."""
    if not line.startswith("+++ "):
        return None
    text = line[4:]
    if text.endswith("\t"):
        text = text[:-1]
    if text.startswith('"'):
        quoted = unquote_path(text)
        if quoted is None:
            return None
        text = quoted[0]
    if not text.startswith("b/"):
        return None
    return text[2:]


def status_marker(line: str) -> Optional[FileStatus]:
    for prefix, status in _STATUS_PREFIXES:
        if line.startswith(prefix):
            return status
    return None


def classify_line(line: str, in_hunk: bool = False) -> DiffLine:
    """classify one diff line (no trailing newline)."""
    if line.startswith("diff "):
        return DiffLine(LineKind.FILE_HEADER, line, path=parse_file_header(line))

    if line.startswith("@@"):
        header = parse_hunk_header(line)
        if header is None:
            return DiffLine(LineKind.OTHER, line)
        return DiffLine(LineKind.HUNK_HEADER, line, hunk=header)

    if line.startswith(NO_NEWLINE_PREFIX):
        return DiffLine(LineKind.NO_NEWLINE, line)

    if not in_hunk:
        status = status_marker(line)
        if status is not None:
            return DiffLine(LineKind.STATUS_MARKER, line, status=status)
        # path lines of the file header
        if line.startswith("--") or line.startswith("++"):
            return DiffLine(LineKind.OTHER, line)

    if line.startswith("-"):
        return DiffLine(LineKind.DELETION, line, content=line[1:])
    if line.startswith("+"):
        return DiffLine(LineKind.ADDITION, line, content=line[1:])
    if line.startswith(" "):
        return DiffLine(LineKind.CONTEXT, line, content=line[1:])
    if line == "":
        return DiffLine(LineKind.BLANK, line)
    return DiffLine(LineKind.OTHER, line)


def iter_lines(text: str) -> Iterator[str]:
    """split text into lines the way diff tools write them.

    splits on \\n only (other unicode line breaks can live inside a
    line's content), drops one trailing \\r, and does not yield an empty
    line for the final newline.
    """
    if not text:
        return
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    for part in parts:
        if part.endswith("\r"):
            part = part[:-1]
        yield part
