"""
srcspan: source positions, ranges and spans for language tooling

Translates between the three ways tools describe a place in a file:
opaque position handles (cheap, parser-facing), 1-based line/column pairs
(human-facing) and 0-based byte offsets (for slicing content). Line
directives, which make part of a file report another filename and
numbering, are honored throughout.

Quick Start:
    >>> from srcspan import FileSet, new_position_converter, new_range
    >>> fset = FileSet()
    >>> f = fset.add_file("/src/a.txt", size=5)
    >>> f.set_lines_for_content(b"ab\\ncd")
    >>> span = new_range(fset, f.pos(3), f.pos(5)).to_span()
    >>> str(span)
    '/src/a.txt:2:1-3:1'
    >>> span.to_range(new_position_converter(f)).start == f.pos(3)
    True

    >>> # Converting raw content no parser has seen
    >>> from srcspan import new_content_converter
    >>> conv = new_content_converter("a.txt", b"0123456789")
    >>> conv.offset_to_line_column(10)
    (2, 1)

Installation:
    pip install srcspan              # zero runtime dependencies
"""

from srcspan.config import (
    SpanConfig,
    get_span_config,
    reset_span_config,
    set_span_config,
    span_config_context,
)
from srcspan.converter import (
    Converter,
    PositionConverter,
    new_content_converter,
    new_position_converter,
)
from srcspan.errors import (
    ColumnOutOfRangeError,
    ConverterMismatchError,
    CrossFileSpanError,
    InternalInconsistencyError,
    InvalidLineError,
    InvalidPositionError,
    MissingFileAssociationError,
    OutOfRangeError,
    SrcspanError,
)
from srcspan.fileset import NO_POS, File, FilePosition, FileSet, LineDirective, Pos
from srcspan.ranges import Range, file_span, new_range, span_to_range
from srcspan.span import Point, Span, new_point, new_span, parse_span
from srcspan.uri import uri_from_path, uri_to_path

__version__ = "0.1.0"

__all__ = [
    "NO_POS",
    "ColumnOutOfRangeError",
    "Converter",
    "ConverterMismatchError",
    "CrossFileSpanError",
    "File",
    "FilePosition",
    "FileSet",
    "InternalInconsistencyError",
    "InvalidLineError",
    "InvalidPositionError",
    "LineDirective",
    "MissingFileAssociationError",
    "OutOfRangeError",
    "Point",
    "Pos",
    "PositionConverter",
    "Range",
    "Span",
    "SpanConfig",
    "SrcspanError",
    "__version__",
    "file_span",
    "get_span_config",
    "new_content_converter",
    "new_point",
    "new_position_converter",
    "new_range",
    "new_span",
    "parse_span",
    "reset_span_config",
    "set_span_config",
    "span_config_context",
    "span_to_range",
    "uri_from_path",
    "uri_to_path",
]
