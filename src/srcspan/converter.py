"""Conversion between byte offsets and line/column pairs for one File.

Lines and columns are 1-based, columns count bytes. Offsets are 0-based.

End of file:
    The offset equal to the file size reports ``(line + 1, 1)``, one line
    past the line the last byte sits on, the way an editor places the cursor
    after the final character. Conversely ``line_count + 1`` is accepted as
    a line, with column 1 (or less), and maps to the file size.

Example:
    >>> conv = new_content_converter("a.txt", b"ab\\ncd")
    >>> conv.offset_to_line_column(4)
    (2, 2)
    >>> conv.line_column_to_offset(2, 1)
    3
    >>> conv.offset_to_line_column(5)
    (3, 1)

"""

from __future__ import annotations

from typing import Protocol

from srcspan import bug
from srcspan.errors import (
    ColumnOutOfRangeError,
    InvalidLineError,
    MissingFileAssociationError,
    OutOfRangeError,
)
from srcspan.fileset import File, FileSet, Pos, is_valid


class Converter(Protocol):
    """Anything that can fill in offsets or positions of a Span."""

    @property
    def name(self) -> str | None: ...

    def offset_to_line_column(self, offset: int) -> tuple[int, int]: ...

    def line_column_to_offset(self, line: int, column: int) -> int: ...


class PositionConverter:
    """Converts offsets and line/column pairs using a File's line table.

    Holds nothing but the File and never changes it, so one converter can
    serve any number of conversions.
    """

    __slots__ = ("file",)

    def __init__(self, file: File | None) -> None:
        # None only for a converter created in error; see new_position_converter
        self.file = file

    def __repr__(self) -> str:
        return f"PositionConverter({self.file!r})"

    @property
    def name(self) -> str | None:
        """Name of the underlying file."""
        return self.file.name if self.file is not None else None

    def _require_file(self) -> File:
        if self.file is None:
            raise bug.error("converter has no file", MissingFileAssociationError)
        return self.file

    def offset_to_line_column(self, offset: int) -> tuple[int, int]:
        """Line and column for ``offset``, honoring line directives.

        Raises:
            OutOfRangeError: if offset is outside ``[0, size]``
        """
        _, line, column = position_from_offset(self._require_file(), offset)
        return line, column

    def line_column_to_offset(self, line: int, column: int) -> int:
        """Byte offset of ``line``/``column`` in the file's own numbering.

        Raises:
            OutOfRangeError: if the line is below 1 or past ``line_count + 1``,
                or the column runs outside the file
            ColumnOutOfRangeError: for a column past 1 on ``line_count + 1``
            InvalidLineError: if the line table has no entry for the line
        """
        f = self._require_file()
        if line < 1:
            msg = f"line {line} is not valid"
            raise OutOfRangeError(msg)
        max_line = f.line_count + 1
        if line > max_line:
            msg = f"line {line} is beyond end of file {max_line}"
            raise OutOfRangeError(msg)
        if line == max_line:
            if column > 1:
                msg = f"column {column} is beyond end of file"
                raise ColumnOutOfRangeError(msg)
            # the implicit line after a trailing newline
            return f.size
        pos = f.line_start(line)
        if not is_valid(pos):
            msg = f"line {line} is not in file {f.name!r}"
            raise InvalidLineError(msg)
        # columns are bytes and the first byte of a line is column 1
        return f.offset(pos + column - 1)


def new_position_converter(file: File | None) -> PositionConverter:
    """Return a converter backed by ``file``.

    A missing file is a caller bug: it is reported and the returned
    converter raises MissingFileAssociationError when used.
    """
    if file is None:
        bug.report("nil file", stacklevel=2)
    return PositionConverter(file)


def new_content_converter(name: str, content: bytes) -> PositionConverter:
    """Return a converter for raw content that no parser has seen yet."""
    fset = FileSet()
    f = fset.add_file(name, -1, len(content))
    f.set_lines_for_content(content)
    return new_position_converter(f)


def position_from_offset(file: File, offset: int) -> tuple[str, int, int]:
    """Filename, line and column for ``offset`` with line directives applied.

    The end-of-file offset reports the line after the last one, column 1.

    Raises:
        OutOfRangeError: if offset is outside ``[0, size]``
    """
    if offset < 0:
        msg = f"offset {offset} is negative"
        raise OutOfRangeError(msg)
    if offset > file.size:
        msg = f"offset {offset} is past the end of the file {file.size}"
        raise OutOfRangeError(msg)
    p = file.position(file.pos(offset))
    if offset == file.size:
        return p.filename, p.line + 1, 1
    return p.filename, p.line, p.column


def position(file: File, pos: Pos) -> tuple[str, int, int]:
    """Filename, line and column for a handle issued by ``file``.

    Raises:
        OutOfRangeError: if pos is not one of the file's handles
    """
    return position_from_offset(file, file.offset(pos))


__all__ = [
    "Converter",
    "PositionConverter",
    "new_content_converter",
    "new_position_converter",
    "position",
    "position_from_offset",
]
