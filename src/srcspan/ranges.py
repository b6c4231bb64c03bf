"""Handle-space ranges and their conversion to and from Spans.

A Range is what a parser produces: two handles plus the File that issued
them. It is cheap but only meaningful while that File is around. To report
a location it is resolved to a Span (``file_span``); a Span coming back
from an editor is turned into a Range against a converter
(``span_to_range``).

Line directives:
    A File may report several filenames across its extent. A Span must lie
    within one of them, and its offsets are computed with a converter for
    the reported filename, which must be supplied when it differs from the
    File's own name.

"""

from __future__ import annotations

from dataclasses import dataclass

from srcspan import bug
from srcspan.converter import Converter, PositionConverter, position
from srcspan.errors import (
    ConverterMismatchError,
    CrossFileSpanError,
    InvalidPositionError,
    MissingFileAssociationError,
    OutOfRangeError,
)
from srcspan.fileset import NO_POS, File, FileSet, Pos, is_valid
from srcspan.span import Point, Span
from srcspan.uri import uri_from_path


@dataclass(frozen=True, slots=True)
class Range:
    """Two handles and the File that issued them.

    ``file`` is None only when the range was built from a handle no file
    owns; resolving such a range fails.
    """

    start: Pos
    end: Pos
    file: File | None

    def is_point(self) -> bool:
        return self.start == self.end

    def to_span(self) -> Span:
        """Resolve to a Span with line, column and offset filled in."""
        return file_span(self.file, None, self.start, self.end)


def new_range(fileset: FileSet, start: Pos, end: Pos = NO_POS) -> Range:
    """Create a Range from two handles; pass NO_POS as end for a point.

    A start that no file in ``fileset`` owns is a caller bug. It is
    reported, and the Range is still returned with no file so that
    resolving it fails cleanly later.
    """
    file = fileset.file(start)
    if file is None:
        bug.report("nil file", stacklevel=2)
    return Range(start, end, file)


def file_span(
    file: File | None,
    converter: Converter | None,
    start: Pos,
    end: Pos = NO_POS,
) -> Span:
    """Resolve handles issued by ``file`` to a Span.

    ``converter``, when given, must be a converter for the filename
    ``start`` resolves to after line directives; it computes the span's
    offsets. When None, a converter over ``file`` itself is used.

    Raises:
        InvalidPositionError: if start is not a valid handle
        MissingFileAssociationError: if file is None
        OutOfRangeError: if a handle is not one of the file's
        CrossFileSpanError: if start and end resolve to different filenames
        ConverterMismatchError: if converter is for another filename
    """
    if not is_valid(start):
        msg = "start pos is not valid"
        raise InvalidPositionError(msg)
    if file is None:
        raise bug.error("missing file association", MissingFileAssociationError)

    start_filename, start_line, start_column = position(file, start)
    start_point = Point(start_line, start_column)
    end_point = None
    if is_valid(end):
        end_filename, end_line, end_column = position(file, end)
        # with line directives one File holds text from several filenames
        if end_filename != start_filename:
            raise CrossFileSpanError(start_filename, end_filename)
        end_point = Point(end_line, end_column)

    span = Span(uri_from_path(start_filename), start_point, end_point).clean()

    if converter is None:
        converter = PositionConverter(file)
    if converter.name != start_filename:
        raise bug.error(
            f"must supply converter for file {file.name!r} "
            f"containing lines from {start_filename!r}",
            ConverterMismatchError,
        )
    return span.with_offset(converter)


def span_to_range(span: Span, converter: PositionConverter) -> Range:
    """Range in ``converter``'s file covering ``span``.

    Raises:
        OutOfRangeError: if an offset lies past the end of the file
        MissingFileAssociationError: if the converter has no file
    """
    span = span.with_offset(converter)
    file = converter.file
    if file is None:
        raise bug.error("converter has no file", MissingFileAssociationError)
    assert span.end is not None
    if span.start.offset > file.size:
        msg = f"start offset {span.start.offset} is past the end of the file {file.size}"
        raise OutOfRangeError(msg)
    if span.end.offset > file.size:
        msg = f"end offset {span.end.offset} is past the end of the file {file.size}"
        raise OutOfRangeError(msg)
    return Range(file.pos(span.start.offset), file.pos(span.end.offset), file)


__all__ = [
    "Range",
    "file_span",
    "new_range",
    "span_to_range",
]
