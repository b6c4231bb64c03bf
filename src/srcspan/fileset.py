"""File descriptors and the global position handle space.

A FileSet hands out contiguous blocks of integer handles, one block per
File. A handle (``Pos``) only means something together with the File that
issued it: ``file.offset(pos)`` turns it back into a byte offset.

A File records its size, the offsets at which its lines start and any line
directives. A line directive makes the text from its offset onwards report
a different filename and line numbering, e.g. generated code pointing back
at its template.

Thread Safety:
    Files are built once by the parsing layer and then only read. Nothing
    here locks; callers must not mutate a File while others read it.

Example:
    >>> fset = FileSet()
    >>> f = fset.add_file("a.go", size=5)
    >>> f.set_lines_for_content(b"ab\\ncd")
    >>> f.position(f.pos(4))
    FilePosition(filename='a.go', offset=4, line=2, column=2)

"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import NewType

from srcspan.errors import OutOfRangeError

Pos = NewType("Pos", int)

# The zero handle is never issued; it stands for "no position".
NO_POS: Pos = Pos(0)


def is_valid(pos: int) -> bool:
    """Return True for any handle other than NO_POS."""
    return pos != NO_POS


@dataclass(frozen=True, slots=True)
class LineDirective:
    """Alternate filename and numbering from ``offset`` onwards.

    A column of 0 means the directive gave no column; positions it covers
    then have an unknown column.
    """

    offset: int
    filename: str
    line: int
    column: int = 0


@dataclass(frozen=True, slots=True)
class FilePosition:
    """A resolved handle: filename, byte offset and 1-based line/column.

    ``line`` and ``column`` are 0 when unknown.
    """

    filename: str
    offset: int
    line: int
    column: int

    def __str__(self) -> str:
        s = self.filename
        if self.line > 0:
            s = f"{s}:{self.line}" if s else str(self.line)
            if self.column > 0:
                s += f":{self.column}"
        return s or "-"


class File:
    """Descriptor for one parsed unit.

    Owns the handles ``[base, base + size]``; the last one is the
    end-of-file position.
    """

    __slots__ = ("_base", "_directives", "_lines", "_name", "_size")

    def __init__(self, name: str, base: int, size: int) -> None:
        if size < 0:
            msg = f"invalid size {size} for file {name!r}"
            raise ValueError(msg)
        self._name = name
        self._base = base
        self._size = size
        self._lines: list[int] = [0]
        self._directives: list[LineDirective] = []

    def __repr__(self) -> str:
        return f"File(name={self._name!r}, base={self._base}, size={self._size})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def base(self) -> int:
        return self._base

    @property
    def size(self) -> int:
        return self._size

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> tuple[int, ...]:
        """Line-start offsets, in order."""
        return tuple(self._lines)

    @property
    def directives(self) -> tuple[LineDirective, ...]:
        return tuple(self._directives)

    def add_line(self, offset: int) -> None:
        """Record a line starting at ``offset``.

        The offset must be past the previous line start and inside the file.
        """
        if self._lines and self._lines[-1] >= offset:
            msg = f"line offset {offset} does not follow {self._lines[-1]}"
            raise ValueError(msg)
        if offset >= self._size:
            msg = f"line offset {offset} is not inside file of size {self._size}"
            raise ValueError(msg)
        self._lines.append(offset)

    def set_lines(self, lines: list[int]) -> None:
        """Replace the line table.

        An empty table leaves the file with no lines at all.

        Raises:
            ValueError: unless ``lines`` starts at 0, strictly increases and
                stays below the file size.
        """
        for i, offset in enumerate(lines):
            if (i == 0 and offset != 0) or (i > 0 and offset <= lines[i - 1]):
                msg = f"invalid line table {lines!r}"
                raise ValueError(msg)
            if offset >= self._size and offset != 0:
                msg = f"line offset {offset} is not inside file of size {self._size}"
                raise ValueError(msg)
        self._lines = list(lines)

    def set_lines_for_content(self, content: bytes) -> None:
        """Build the line table from raw content.

        A newline as the very last byte does not start a new line, and
        empty content has no lines.
        """
        lines: list[int] = []
        line = 0
        for offset, byte in enumerate(content):
            if line >= 0:
                lines.append(line)
            line = -1
            if byte == 0x0A:
                line = offset + 1
        self._lines = lines

    def add_line_directive(
        self,
        offset: int,
        filename: str,
        line: int,
        column: int = 0,
    ) -> None:
        """Make positions from ``offset`` on report ``filename:line[:column]``.

        Directives must be added in increasing offset order.
        """
        if self._directives and self._directives[-1].offset >= offset:
            msg = (
                f"line directive at offset {offset} does not follow "
                f"{self._directives[-1].offset}"
            )
            raise ValueError(msg)
        if not 0 <= offset < self._size:
            msg = f"line directive offset {offset} is not inside file of size {self._size}"
            raise ValueError(msg)
        self._directives.append(LineDirective(offset, filename, line, column))

    def line_start(self, line: int) -> Pos:
        """Handle of the first byte of ``line``, or NO_POS if there is no such line."""
        if not 1 <= line <= len(self._lines):
            return NO_POS
        return Pos(self._base + self._lines[line - 1])

    def pos(self, offset: int) -> Pos:
        """Handle for ``offset``.

        Raises:
            OutOfRangeError: if offset is outside ``[0, size]``
        """
        if not 0 <= offset <= self._size:
            msg = f"offset {offset} is not in [0, {self._size}] for file {self._name!r}"
            raise OutOfRangeError(msg)
        return Pos(self._base + offset)

    def offset(self, pos: int) -> int:
        """Byte offset for a handle this file issued.

        Raises:
            OutOfRangeError: if pos is outside ``[base, base + size]``
        """
        if not self._base <= pos <= self._base + self._size:
            msg = f"invalid pos: {pos} not in [{self._base}, {self._base + self._size}]"
            raise OutOfRangeError(msg)
        return pos - self._base

    def position(self, pos: int, *, adjusted: bool = True) -> FilePosition:
        """Resolve a handle to filename, line and column.

        With ``adjusted`` the active line directive, if any, replaces the
        filename and renumbers the line (and column, on the directive's
        own line).
        """
        if not is_valid(pos):
            return FilePosition("", 0, 0, 0)
        offset = self.offset(pos)
        return self._unpack(offset, adjusted)

    def _unpack(self, offset: int, adjusted: bool) -> FilePosition:
        filename = self._name
        line = column = 0
        i = bisect_right(self._lines, offset) - 1
        if i >= 0:
            line, column = i + 1, offset - self._lines[i] + 1
        if adjusted and self._directives:
            j = bisect_right(self._directives, offset, key=lambda d: d.offset) - 1
            if j >= 0:
                alt = self._directives[j]
                filename = alt.filename
                base_line = bisect_right(self._lines, alt.offset)
                if base_line > 0:
                    delta = line - base_line
                    line = alt.line + delta
                    if alt.column == 0:
                        # unknown until the next directive, not just this line
                        column = 0
                    elif delta == 0:
                        column = alt.column + (offset - alt.offset)
        return FilePosition(filename, offset, line, column)


class FileSet:
    """A sequence of Files sharing one handle space.

    Bases are assigned in increasing order starting at 1, so the zero
    handle is never issued.
    """

    __slots__ = ("_base", "_files")

    def __init__(self) -> None:
        self._base = 1
        self._files: list[File] = []

    @property
    def base(self) -> int:
        """The next free base."""
        return self._base

    def add_file(self, name: str, base: int = -1, size: int = 0) -> File:
        """Add a File of ``size`` bytes at ``base`` (next free base when -1)."""
        if base < 0:
            base = self._base
        if base < self._base:
            msg = f"invalid base {base} (should be >= {self._base})"
            raise ValueError(msg)
        f = File(name, base, size)
        self._files.append(f)
        # +1 leaves room for the end-of-file handle
        self._base = base + size + 1
        return f

    def file(self, pos: int) -> File | None:
        """The File that issued ``pos``, or None."""
        if not is_valid(pos):
            return None
        i = bisect_right(self._files, pos, key=lambda f: f.base) - 1
        if i >= 0:
            f = self._files[i]
            if pos <= f.base + f.size:
                return f
        return None

    def files(self) -> tuple[File, ...]:
        return tuple(self._files)


__all__ = [
    "NO_POS",
    "File",
    "FilePosition",
    "FileSet",
    "LineDirective",
    "Pos",
    "is_valid",
]
