"""Exceptions for the tzif_decoder library."""

from __future__ import annotations


class TZifError(ValueError):
    """Base exception for all errors decoding a TZif file.

    The 'message' attribute contains a human-readable message about the
    error that occurred. The 'field' and 'offset' attributes, when known,
    name the field being decoded and the byte offset in the stream where
    that field starts, useful for diagnosing a corrupt file.
    """

    def __init__(
        self, message: str, *, field: str | None = None, offset: int | None = None
    ) -> None:
        """Initialize the TZifError with a message and location."""
        self.message = message
        self.field = field
        self.offset = offset
        super().__init__(self._format())

    def _format(self) -> str:
        if self.field is None and self.offset is None:
            return self.message
        location = []
        if self.field is not None:
            location.append(f"field={self.field}")
        if self.offset is not None:
            location.append(f"offset={self.offset}")
        return f"{self.message} ({', '.join(location)})"


class BadMagicError(TZifError):
    """Exception raised when the stream does not start with the TZif magic."""


class UnsupportedVersionError(TZifError):
    """Exception raised when the version byte is not a known TZif version."""


class TruncatedInputError(TZifError):
    """Exception raised when the stream ends before a field is complete."""


class InvalidCountError(TZifError):
    """Exception raised when a header count can't describe a valid data block."""


class InvalidTypeCountError(InvalidCountError):
    """Exception raised when a data block declares zero local time types."""


class InvalidFooterError(TZifError):
    """Exception raised when the v2+ footer is not newline delimited."""


class InvalidDataError(TZifError):
    """Exception raised by strict validation when fields are inconsistent.

    These checks cross reference fields that were each decoded
    successfully on their own, e.g. an index into another table.
    """


class AbbrevIndexOutOfRangeError(InvalidDataError):
    """Exception raised when a ttinfo designation index is past the designations."""


class TransitionTypeOutOfRangeError(InvalidDataError):
    """Exception raised when a transition refers to a missing local time type."""


class UnsortedTransitionsError(InvalidDataError):
    """Exception raised when transition or leap second times are out of order."""


class IndicatorCountError(InvalidDataError):
    """Exception raised when standard/wall or UT/local indicators are inconsistent."""


class VersionMismatchError(InvalidDataError):
    """Exception raised when the v2+ header version differs from the v1 header."""
