"""Error hierarchy and messages.

Ordinary bad input and caller bugs are told apart by ``is_bug`` rather than
by a separate raising mechanism.
"""

import pytest

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


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls",
        [
            InvalidPositionError,
            OutOfRangeError,
            ColumnOutOfRangeError,
            InvalidLineError,
            InternalInconsistencyError,
            MissingFileAssociationError,
            ConverterMismatchError,
        ],
    )
    def test_is_srcspan_error(self, cls: type[SrcspanError]) -> None:
        assert issubclass(cls, SrcspanError)

    def test_cross_file_is_srcspan_error(self) -> None:
        assert isinstance(CrossFileSpanError("a", "b"), SrcspanError)

    def test_out_of_range_family(self) -> None:
        assert issubclass(ColumnOutOfRangeError, OutOfRangeError)
        assert issubclass(InvalidLineError, OutOfRangeError)


class TestBugMarker:
    """Only internal inconsistencies are marked as caller bugs."""

    @pytest.mark.parametrize(
        "cls",
        [InternalInconsistencyError, MissingFileAssociationError, ConverterMismatchError],
    )
    def test_bugs(self, cls: type[SrcspanError]) -> None:
        assert cls("x").is_bug

    @pytest.mark.parametrize(
        "cls",
        [InvalidPositionError, OutOfRangeError, ColumnOutOfRangeError, InvalidLineError],
    )
    def test_input_errors(self, cls: type[SrcspanError]) -> None:
        assert not cls("x").is_bug

    def test_cross_file_not_a_bug(self) -> None:
        assert not CrossFileSpanError("a", "b").is_bug


class TestCrossFileSpanError:
    def test_message(self) -> None:
        err = CrossFileSpanError("a.go", "gen.tmpl")
        assert str(err) == "span begins in file 'a.go' but ends in 'gen.tmpl'"

    def test_attributes(self) -> None:
        err = CrossFileSpanError("a.go", "gen.tmpl")
        assert err.start_filename == "a.go"
        assert err.end_filename == "gen.tmpl"
