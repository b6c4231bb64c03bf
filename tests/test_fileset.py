"""Tests for File, FileSet and line directives."""

import pytest

from srcspan.errors import OutOfRangeError
from srcspan.fileset import NO_POS, FilePosition, FileSet, LineDirective, is_valid


def make_file(content: bytes, name: str = "/src/a.go"):
    fset = FileSet()
    f = fset.add_file(name, size=len(content))
    f.set_lines_for_content(content)
    return fset, f


class TestFileSet:
    """Handle allocation and lookup."""

    def test_first_base_is_one(self) -> None:
        """The zero handle is never issued."""
        fset = FileSet()
        f = fset.add_file("a", size=10)
        assert f.base == 1
        assert f.pos(0) != NO_POS

    def test_bases_leave_room_for_eof(self) -> None:
        fset = FileSet()
        a = fset.add_file("a", size=10)
        b = fset.add_file("b", size=3)
        assert b.base == a.base + a.size + 1
        assert fset.base == b.base + b.size + 1

    def test_explicit_base(self) -> None:
        fset = FileSet()
        f = fset.add_file("a", base=100, size=5)
        assert f.base == 100
        assert fset.base == 106

    def test_base_below_next_free(self) -> None:
        fset = FileSet()
        fset.add_file("a", size=10)
        with pytest.raises(ValueError, match="invalid base"):
            fset.add_file("b", base=5, size=1)

    def test_lookup(self) -> None:
        fset = FileSet()
        a = fset.add_file("a", size=10)
        b = fset.add_file("b", size=3)
        assert fset.file(a.pos(0)) is a
        assert fset.file(a.pos(10)) is a  # end-of-file handle
        assert fset.file(b.pos(0)) is b
        assert fset.file(b.pos(3)) is b

    def test_lookup_misses(self) -> None:
        fset = FileSet()
        f = fset.add_file("a", base=10, size=3)
        assert fset.file(NO_POS) is None
        assert fset.file(5) is None
        assert fset.file(f.base + f.size + 1) is None

    def test_files(self) -> None:
        fset = FileSet()
        a = fset.add_file("a", size=1)
        b = fset.add_file("b", size=1)
        assert fset.files() == (a, b)

    def test_is_valid(self) -> None:
        assert not is_valid(NO_POS)
        assert is_valid(1)


class TestLineTable:
    """Line-start tables built from content or by hand."""

    def test_lines_for_content(self) -> None:
        _, f = make_file(b"ab\ncd")
        assert f.lines == (0, 3)
        assert f.line_count == 2

    def test_trailing_newline_adds_no_line(self) -> None:
        _, f = make_file(b"ab\n")
        assert f.lines == (0,)
        assert f.line_count == 1

    def test_blank_lines(self) -> None:
        _, f = make_file(b"\n\n\nx")
        assert f.lines == (0, 1, 2, 3)

    def test_empty_content_has_no_lines(self) -> None:
        _, f = make_file(b"")
        assert f.line_count == 0

    def test_new_file_has_one_line(self) -> None:
        fset = FileSet()
        f = fset.add_file("a", size=4)
        assert f.lines == (0,)

    def test_set_lines(self) -> None:
        _, f = make_file(b"abcdef")
        f.set_lines([0, 2, 4])
        assert f.line_count == 3

    @pytest.mark.parametrize(
        "lines",
        [[1, 2], [0, 2, 2], [0, 3, 1], [0, 6]],
    )
    def test_set_lines_rejects_bad_tables(self, lines: list[int]) -> None:
        _, f = make_file(b"abcdef")
        with pytest.raises(ValueError):
            f.set_lines(lines)

    def test_add_line(self) -> None:
        fset = FileSet()
        f = fset.add_file("a", size=6)
        f.add_line(3)
        assert f.lines == (0, 3)
        with pytest.raises(ValueError):
            f.add_line(3)
        with pytest.raises(ValueError):
            f.add_line(6)

    def test_line_start(self) -> None:
        _, f = make_file(b"ab\ncd")
        assert f.line_start(1) == f.pos(0)
        assert f.line_start(2) == f.pos(3)
        assert f.line_start(0) == NO_POS
        assert f.line_start(3) == NO_POS

    def test_negative_size(self) -> None:
        fset = FileSet()
        with pytest.raises(ValueError, match="invalid size"):
            fset.add_file("a", size=-1)


class TestHandles:
    """pos() and offset() are inverses inside the file."""

    def test_round_trip(self) -> None:
        _, f = make_file(b"hello")
        for offset in range(f.size + 1):
            assert f.offset(f.pos(offset)) == offset

    def test_pos_out_of_range(self) -> None:
        _, f = make_file(b"hello")
        with pytest.raises(OutOfRangeError):
            f.pos(6)
        with pytest.raises(OutOfRangeError):
            f.pos(-1)

    def test_offset_of_foreign_handle(self) -> None:
        fset = FileSet()
        a = fset.add_file("a", size=3)
        b = fset.add_file("b", size=3)
        with pytest.raises(OutOfRangeError, match="invalid pos"):
            a.offset(b.pos(1))


class TestPosition:
    """Resolving handles, with and without line directives."""

    def test_plain(self) -> None:
        _, f = make_file(b"ab\ncd")
        assert f.position(f.pos(4)) == FilePosition("/src/a.go", 4, 2, 2)
        assert f.position(f.pos(0)) == FilePosition("/src/a.go", 0, 1, 1)

    def test_no_pos(self) -> None:
        _, f = make_file(b"ab")
        assert f.position(NO_POS) == FilePosition("", 0, 0, 0)

    def test_directive_without_column(self) -> None:
        """A directive with no column leaves columns unknown until the next one."""
        _, f = make_file(b"aa\nbb\ncc\ndd\n")
        f.add_line_directive(3, "gen.tmpl", 10)
        assert f.position(f.pos(1)) == FilePosition("/src/a.go", 1, 1, 2)
        assert f.position(f.pos(4)) == FilePosition("gen.tmpl", 4, 10, 0)
        assert f.position(f.pos(7)) == FilePosition("gen.tmpl", 7, 11, 0)

    def test_directive_with_column(self) -> None:
        _, f = make_file(b"aa\nbb\ncc\ndd\n")
        f.add_line_directive(4, "t.tmpl", 5, 7)
        # same line as the directive: column counts from the directive column
        assert f.position(f.pos(5)) == FilePosition("t.tmpl", 5, 5, 8)
        # later lines keep their own column
        assert f.position(f.pos(6)) == FilePosition("t.tmpl", 6, 6, 1)

    def test_successive_directives(self) -> None:
        _, f = make_file(b"aa\nbb\ncc\ndd\n")
        f.add_line_directive(3, "one.tmpl", 20, 1)
        f.add_line_directive(9, "two.tmpl", 1, 1)
        assert f.position(f.pos(6)).filename == "one.tmpl"
        assert f.position(f.pos(6)).line == 21
        assert f.position(f.pos(10)) == FilePosition("two.tmpl", 10, 1, 2)

    def test_unadjusted(self) -> None:
        _, f = make_file(b"aa\nbb\n")
        f.add_line_directive(3, "gen.tmpl", 10)
        assert f.position(f.pos(4), adjusted=False) == FilePosition("/src/a.go", 4, 2, 2)

    def test_directives_property(self) -> None:
        _, f = make_file(b"aa\nbb\n")
        f.add_line_directive(3, "gen.tmpl", 10)
        assert f.directives == (LineDirective(3, "gen.tmpl", 10, 0),)

    def test_directive_order_enforced(self) -> None:
        _, f = make_file(b"aa\nbb\n")
        f.add_line_directive(3, "gen.tmpl", 10)
        with pytest.raises(ValueError, match="does not follow"):
            f.add_line_directive(3, "other.tmpl", 1)

    def test_directive_inside_file(self) -> None:
        _, f = make_file(b"aa\nbb\n")
        with pytest.raises(ValueError, match="not inside file"):
            f.add_line_directive(6, "gen.tmpl", 1)


class TestFilePositionFormatting:
    def test_full(self) -> None:
        assert str(FilePosition("a.go", 0, 1, 2)) == "a.go:1:2"

    def test_unknown_column(self) -> None:
        assert str(FilePosition("a.go", 0, 3, 0)) == "a.go:3"

    def test_unknown(self) -> None:
        assert str(FilePosition("", 0, 0, 0)) == "-"
