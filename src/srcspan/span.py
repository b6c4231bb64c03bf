"""Resolved, portable source spans.

A Span names its file by URI and carries line, column and offset for both
ends. Unlike a Range it holds no reference to a File and can be sent to an
editor or stored. Offsets only mean something for one specific content, so
filling them in takes the converter for that content.

Any field of a Point may be unknown (None). ``clean()`` normalizes what is
known; ``with_offset``/``with_position`` compute the missing half.

Thread Safety:
    Point and Span are frozen and safe to share.

Example:
    >>> conv = new_content_converter("/src/a.txt", b"ab\\ncd")
    >>> span = new_span("file:///src/a.txt", new_point(2, 1)).with_offset(conv)
    >>> span.start.offset
    3
    >>> str(span)
    '/src/a.txt:2:1'

"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from srcspan.errors import InvalidPositionError, SrcspanError
from srcspan.uri import is_uri, uri_from_path, uri_to_path

if TYPE_CHECKING:
    from srcspan.converter import Converter, PositionConverter
    from srcspan.ranges import Range


@dataclass(frozen=True, slots=True)
class Point:
    """One end of a Span.

    Attributes:
        line: 1-based line, None when unknown
        column: 1-based byte column, None when unknown
        offset: 0-based byte offset, None when unknown

    """

    line: int | None = None
    column: int | None = None
    offset: int | None = None

    def has_position(self) -> bool:
        return self.line is not None and self.line > 0

    def has_offset(self) -> bool:
        return self.offset is not None and self.offset >= 0

    def is_valid(self) -> bool:
        return self.has_position() or self.has_offset()

    def clean(self) -> Point:
        """Normalize the known fields.

        A non-positive line is dropped. A missing column becomes 1 when the
        line is known. An offset of 0 cannot belong to a position past 1:1,
        so it is dropped in that case.
        """
        line, column, offset = self.line, self.column, self.offset
        if line is not None and line <= 0:
            line = None
        if column is None or column <= 0:
            column = 1 if line is not None else None
        if offset is not None and offset < 0:
            offset = None
        if offset == 0 and ((line or 0) > 1 or (column or 0) > 1):
            offset = None
        return Point(line, column, offset)

    def with_offset(self, converter: Converter) -> Point:
        """Copy with the offset computed from line and column."""
        if not self.has_position():
            msg = f"point {self} has no line to compute an offset from"
            raise InvalidPositionError(msg)
        offset = converter.line_column_to_offset(self.line, self.column or 1)
        return replace(self, offset=offset)

    def with_position(self, converter: Converter) -> Point:
        """Copy with line and column computed from the offset."""
        if not self.has_offset():
            msg = f"point {self} has no offset to compute a position from"
            raise InvalidPositionError(msg)
        line, column = converter.offset_to_line_column(self.offset)
        return replace(self, line=line, column=column)

    def __str__(self) -> str:
        if self.has_position():
            return f"{self.line}:{self.column or 1}"
        if self.has_offset():
            return f"#{self.offset}"
        return "-"


@dataclass(frozen=True, slots=True)
class Span:
    """A location in a file identified by URI.

    An ``end`` of None is a point span; ``clean()`` replaces it with
    ``start``.
    """

    uri: str
    start: Point
    end: Point | None = None

    def clean(self) -> Span:
        """Clean both points and make an unset end equal to the start."""
        start = self.start.clean()
        end = self.end.clean() if self.end is not None else None
        if end is None or not end.is_valid():
            end = start
        return Span(self.uri, start, end)

    @property
    def filename(self) -> str:
        """Path decoded from the URI."""
        return uri_to_path(self.uri)

    def is_valid(self) -> bool:
        return self.start.is_valid()

    def is_point(self) -> bool:
        return self.start == (self.end if self.end is not None else self.start)

    def has_position(self) -> bool:
        return self.start.has_position()

    def has_offset(self) -> bool:
        return self.start.has_offset()

    def with_offset(self, converter: Converter) -> Span:
        """Copy with both offsets filled in from line/column.

        Raises:
            InvalidPositionError: if the span start is not valid
            SrcspanError: whatever the converter raises for this file
        """
        try:
            return self._update(converter, with_position=False, with_offset=True)
        except SrcspanError as err:
            err.add_note(f"cannot add offset to span {self}")
            raise

    def with_position(self, converter: Converter) -> Span:
        """Copy with both line/column pairs filled in from offsets."""
        try:
            return self._update(converter, with_position=True, with_offset=False)
        except SrcspanError as err:
            err.add_note(f"cannot add position to span {self}")
            raise

    def with_all(self, converter: Converter) -> Span:
        """Copy with every field of both points filled in."""
        try:
            return self._update(converter, with_position=True, with_offset=True)
        except SrcspanError as err:
            err.add_note(f"cannot add information to span {self}")
            raise

    def _update(
        self,
        converter: Converter,
        *,
        with_position: bool,
        with_offset: bool,
    ) -> Span:
        span = self.clean()
        if not span.is_valid():
            msg = "cannot add information to an invalid span"
            raise InvalidPositionError(msg)
        start, end = span.start, span.end
        assert end is not None

        if with_position and not start.has_position():
            end_is_start = end.offset == start.offset
            start = start.with_position(converter)
            if end_is_start:
                end = start
            elif not end.has_position():
                end = end.with_position(converter)

        if with_offset and (
            not start.has_offset() or (end.has_position() and not end.has_offset())
        ):
            if not start.has_offset():
                start = start.with_offset(converter)
            if end.has_position() and (end.line, end.column) == (start.line, start.column):
                end = replace(end, offset=start.offset)
            elif not end.has_offset():
                end = end.with_offset(converter)

        return Span(span.uri, start, end)

    def to_range(self, converter: PositionConverter) -> Range:
        """Handle-space Range for this span in the converter's file."""
        from srcspan.ranges import span_to_range

        return span_to_range(self, converter)

    def __str__(self) -> str:
        span = self.clean()
        name = span.filename if is_uri(span.uri) else (span.uri or "-")
        start, end = span.start, span.end
        assert end is not None
        if not start.is_valid():
            return name
        if not start.has_position():
            s = f"{name}:#{start.offset}"
            if not span.is_point() and end.has_offset():
                s += f"-#{end.offset}"
            return s
        s = f"{name}:{start.line}:{start.column}"
        if span.is_point() or not end.has_position():
            return s
        if end.line == start.line:
            return f"{s}-{end.column}"
        return f"{s}-{end.line}:{end.column}"


def new_point(
    line: int | None = None,
    column: int | None = None,
    offset: int | None = None,
) -> Point:
    """Return a cleaned Point."""
    return Point(line, column, offset).clean()


def new_span(uri: str, start: Point, end: Point | None = None) -> Span:
    """Return a cleaned Span; a missing end makes a point span."""
    return Span(uri, start, end).clean()


_SPAN_RE = re.compile(
    r"""
    ^(?P<path>.*?)
    (?:
        :\#(?P<start_offset>\d+)
        (?:-\#(?P<end_offset>\d+))?
      |
        :(?P<start_line>\d+)
        (?::(?P<start_column>\d+))?
        (?:-(?:(?P<end_line>\d+):)?(?P<end_column>\d+))?
    )?$
    """,
    re.VERBOSE,
)


def parse_span(text: str) -> Span:
    """Parse the ``str(span)`` form back into a Span.

    Accepted forms::

        path
        path:line
        path:line:col
        path:line:col-col          (end on the same line)
        path:line:col-line:col
        path:line-line
        path:#offset
        path:#offset-#offset

    Raises:
        ValueError: if no path is given

    Example:
        >>> parse_span("/src/a.txt:1:2-3:4").end
        Point(line=3, column=4, offset=None)

    """
    m = _SPAN_RE.match(text)
    if m is None or not m["path"]:
        msg = f"cannot parse span {text!r}: missing file"
        raise ValueError(msg)
    uri = uri_from_path(m["path"])

    if m["start_offset"] is not None:
        start = new_point(offset=int(m["start_offset"]))
        end = None
        if m["end_offset"] is not None:
            end = new_point(offset=int(m["end_offset"]))
        return new_span(uri, start, end)

    if m["start_line"] is None:
        return new_span(uri, Point())

    start_line = int(m["start_line"])
    start_column = int(m["start_column"]) if m["start_column"] else None
    start = new_point(start_line, start_column)
    end = None
    if m["end_column"] is not None:
        end_number = int(m["end_column"])
        if m["end_line"] is not None:
            end = new_point(int(m["end_line"]), end_number)
        elif start_column is not None:
            end = new_point(start_line, end_number)
        else:
            # "path:3-5" is a line range
            end = new_point(end_number)
    return new_span(uri, start, end)


__all__ = [
    "Point",
    "Span",
    "new_point",
    "new_span",
    "parse_span",
]
