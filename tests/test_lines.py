"""tests for diff line classification and hunk headers."""

from neo_reviewer.diff.lines import (
    LineKind, classify_line, iter_lines, parse_file_header, parse_hunk_header, parse_path_line,
    unquote_path,
)
from neo_reviewer.diff.types import FileStatus


class TestHunkHeader:

    def test_full(self):
        h = parse_hunk_header("@@ -10,7 +12,9 @@ def main():")
        assert (h.old_start, h.old_count, h.new_start, h.new_count) == (10, 7, 12, 9)

    def test_counts_default_to_one(self):
        h = parse_hunk_header("@@ -3 +4 @@")
        assert (h.old_start, h.old_count, h.new_start, h.new_count) == (3, 1, 4, 1)

    def test_zero_count_is_kept(self):
        h = parse_hunk_header("@@ -0,0 +1,3 @@")
        assert h.old_count == 0
        assert h.new_count == 3

    def test_malformed(self):
        assert parse_hunk_header("@@ garbage @@") is None
        assert parse_hunk_header("@@ -a,b +c,d @@") is None
        assert parse_hunk_header("not a header") is None


class TestFileHeader:

    def test_post_image_path(self):
        assert parse_file_header("diff --git a/old/name.py b/new/name.py") == "new/name.py"

    def test_not_git(self):
        assert parse_file_header("diff -r a b") is None

    def test_quoted_paths(self):
        line = 'diff --git "a/caf\\303\\251.txt" "b/caf\\303\\251.txt"'
        assert parse_file_header(line) == "caf\u00e9.txt"

    def test_one_side_quoted(self):
        line = 'diff --git a/plain.txt "b/tab\\there.txt"'
        assert parse_file_header(line) == "tab\there.txt"

    def test_space_b_slash_inside_unchanged_path(self):
        assert parse_file_header("diff --git a/x b/y.txt b/x b/y.txt") == "x b/y.txt"

    def test_unterminated_quote(self):
        assert parse_file_header('diff --git "a/x b/x') is None


class TestPathLine:

    def test_plain(self):
        assert parse_path_line("+++ b/src/a.py") == "src/a.py"

    def test_dev_null(self):
        assert parse_path_line("+++ /dev/null") is None

    def test_trailing_tab_for_names_with_spaces(self):
        assert parse_path_line("+++ b/my file.txt\t") == "my file.txt"

    def test_quoted(self):
        assert parse_path_line('+++ "b/caf\\303\\251.txt"') == "caf\u00e9.txt"

    def test_escaped_quote_and_backslash(self):
        assert unquote_path('"a\\"b\\\\c" rest') == ('a"b\\c', " rest")


class TestClassify:

    def test_file_header(self):
        line = classify_line("diff --git a/x.lua b/x.lua")
        assert line.kind == LineKind.FILE_HEADER
        assert line.path == "x.lua"
        assert line.ends_hunk

    def test_unreadable_file_header(self):
        line = classify_line("diff --cc merged.txt")
        assert line.kind == LineKind.FILE_HEADER
        assert line.path is None

    def test_hunk_header(self):
        line = classify_line("@@ -1,3 +1,4 @@")
        assert line.kind == LineKind.HUNK_HEADER
        assert line.hunk.new_start == 1

    def test_malformed_hunk_header_is_other_but_ends_hunk(self):
        line = classify_line("@@ broken", in_hunk=True)
        assert line.kind == LineKind.OTHER
        assert line.ends_hunk

    def test_no_newline(self):
        assert classify_line("\\ No newline at end of file").kind == LineKind.NO_NEWLINE
        assert classify_line("\\ No newline at end of file", in_hunk=True).kind == LineKind.NO_NEWLINE

    def test_status_markers(self):
        assert classify_line("new file mode 100644").status == FileStatus.ADDED
        assert classify_line("deleted file mode 100644").status == FileStatus.DELETED
        assert classify_line("rename from a.py").status == FileStatus.RENAMED
        assert classify_line("renamed").status == FileStatus.RENAMED

    def test_status_markers_only_outside_hunks(self):
        assert classify_line("new file", in_hunk=True).kind == LineKind.OTHER

    def test_path_lines_outside_hunk(self):
        assert classify_line("--- a/x.py").kind == LineKind.OTHER
        assert classify_line("+++ b/x.py").kind == LineKind.OTHER

    def test_double_marker_inside_hunk_is_content(self):
        line = classify_line("--- comment", in_hunk=True)
        assert line.kind == LineKind.DELETION
        assert line.content == "-- comment"
        line = classify_line("++i;", in_hunk=True)
        assert line.kind == LineKind.ADDITION
        assert line.content == "+i;"

    def test_addition_and_deletion(self):
        assert classify_line("+x = 1", in_hunk=True).content == "x = 1"
        assert classify_line("-x = 1", in_hunk=True).kind == LineKind.DELETION
        assert classify_line("+", in_hunk=True).content == ""

    def test_context_and_blank(self):
        assert classify_line(" same").kind == LineKind.CONTEXT
        assert classify_line("").kind == LineKind.BLANK

    def test_other(self):
        assert classify_line("index abc123..def456 100644").kind == LineKind.OTHER
        assert classify_line("similarity index 90%").kind == LineKind.OTHER
        assert not classify_line("index abc").ends_hunk


class TestIterLines:

    def test_trailing_newline_dropped(self):
        assert list(iter_lines("a\nb\n")) == ["a", "b"]

    def test_blank_lines_kept(self):
        assert list(iter_lines("a\n\nb")) == ["a", "", "b"]

    def test_carriage_returns_stripped(self):
        assert list(iter_lines("a\r\nb\r\n")) == ["a", "b"]

    def test_other_line_breaks_stay_in_content(self):
        assert list(iter_lines("+a\u2028b\n")) == ["+a\u2028b"]

    def test_empty(self):
        assert list(iter_lines("")) == []
