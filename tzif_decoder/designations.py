"""Time zone designation (abbreviation) octets in a TZif data block.

The designations are a single buffer of NUL-terminated strings. A local
time type refers to its designation by a byte offset into this buffer and
designations may share storage, e.g. "EST" can be referenced as the suffix
of "AEST" by pointing into the middle of it. Resolving a designation must
therefore scan the raw buffer from the offset and not index the strings
produced by splitting it.
"""

from __future__ import annotations

from .exceptions import AbbrevIndexOutOfRangeError

__all__ = [
    "decode_abbrevs",
    "abbreviation_at",
]

_NUL = b"\x00"


def _decode(value: bytes) -> str:
    return value.decode("ascii", errors="backslashreplace")


def decode_abbrevs(buffer: bytes) -> tuple[str, ...]:
    """Split the designation octets into strings in the order they appear."""
    abbrevs: list[str] = []
    remaining = buffer
    while remaining:
        value, _, remaining = remaining.partition(_NUL)
        abbrevs.append(_decode(value))
    return tuple(abbrevs)


def abbreviation_at(buffer: bytes, offset: int) -> str:
    """Find the NUL-terminated string starting at the byte offset."""
    if offset < 0 or offset >= len(buffer):
        raise AbbrevIndexOutOfRangeError(
            f"Designation index {offset} is outside {len(buffer)} designation octets",
            field="abbrev_index",
        )
    end = buffer.find(_NUL, offset)
    if end == -1:
        end = len(buffer)
    return _decode(buffer[offset:end])
