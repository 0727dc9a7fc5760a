"""A decoder for TZif timezone information files.

See rfc8536 for the TZif file format.
"""

from .exceptions import TZifError
from .model import DecodedFile, Header, LeapSecond, LocalTimeType, Section, TZifVersion
from .tzif import decode, read_tzif

__all__ = [
    "decode",
    "read_tzif",
    "DecodedFile",
    "Header",
    "LeapSecond",
    "LocalTimeType",
    "Section",
    "TZifError",
    "TZifVersion",
    "designations",
    "exceptions",
    "model",
    "reader",
    "timezoneinfo",
    "tzif",
]
