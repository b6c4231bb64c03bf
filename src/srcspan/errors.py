"""Exception classes for srcspan.

Every failure of a conversion is raised as a SrcspanError subclass. Errors that
signal a defect in the calling layer rather than bad input carry
``is_bug = True`` and are also sent through :mod:`srcspan.bug`.
"""

from __future__ import annotations


class SrcspanError(Exception):
    """Base exception for all srcspan errors.

    Subclass this for specific error categories.
    """

    is_bug: bool = False


class InvalidPositionError(SrcspanError):
    """A position handle or span start is not valid.

    Raised for the zero handle and for spans with neither a line nor an
    offset on their start point.
    """


class OutOfRangeError(SrcspanError):
    """An offset, handle or line lies outside the bounds of a file."""


class ColumnOutOfRangeError(OutOfRangeError):
    """A column past 1 was requested on the implicit line after the last."""


class InvalidLineError(OutOfRangeError):
    """A line has no entry in the file's line-start table."""


class CrossFileSpanError(SrcspanError):
    """Start and end resolve to different filenames through line directives."""

    def __init__(self, start_filename: str, end_filename: str) -> None:
        """Initialize cross-file error.

        Args:
            start_filename: Filename the start handle resolves to
            end_filename: Filename the end handle resolves to
        """
        self.start_filename = start_filename
        self.end_filename = end_filename
        super().__init__(
            f"span begins in file {start_filename!r} but ends in {end_filename!r}"
        )


class InternalInconsistencyError(SrcspanError):
    """A structurally impossible state was reached.

    Indicates a bug in the caller (for example a range built without a
    file). Raised like any other error so callers cannot crash.
    """

    is_bug = True


class MissingFileAssociationError(InternalInconsistencyError):
    """A range or converter carries no file."""


class ConverterMismatchError(InternalInconsistencyError):
    """The supplied converter is bound to a different file name."""


__all__ = [
    "ColumnOutOfRangeError",
    "ConverterMismatchError",
    "CrossFileSpanError",
    "InternalInconsistencyError",
    "InvalidLineError",
    "InvalidPositionError",
    "MissingFileAssociationError",
    "OutOfRangeError",
    "SrcspanError",
]
