"""Primitives for reading fixed width big-endian fields from a TZif stream.

All multi-byte values in a TZif file are stored in network (big-endian)
byte order. Counts and 32-bit times are signed "long" values and v2+ data
blocks use signed 64-bit "quad" values for times. These helpers compose a
raw byte read, an unsigned decode and a two's-complement reinterpretation
so that every field read reports where it failed on a truncated stream.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import IO, TypeVar

from .exceptions import TruncatedInputError

__all__ = [
    "ByteReader",
    "decode_uint",
    "to_signed",
    "read_byte",
    "read_long",
    "read_quad",
    "read_time",
    "read_line",
]

_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T")

LONG_SIZE = 4
QUAD_SIZE = 8

# Largest positive value for a signed integer of each supported byte width
_SIGNED_MAX = {width: 2 ** (8 * width - 1) - 1 for width in (1, 2, 4, 8)}


class ByteReader:
    """A forward only reader over a binary stream that tracks its offset."""

    def __init__(self, stream: IO[bytes]) -> None:
        """Initialize ByteReader."""
        self._stream = stream
        self._offset = 0

    @property
    def offset(self) -> int:
        """Return the number of bytes consumed so far."""
        return self._offset

    def read(
        self, size: int, field: str, convert: Callable[[bytes], _T] | None = None
    ) -> bytes | _T:
        """Read exactly size bytes, optionally mapped through convert."""
        start = self._offset
        data = self._stream.read(size) if size else b""
        if len(data) < size:
            raise TruncatedInputError(
                f"Expected {size} bytes but only {len(data)} remain",
                field=field,
                offset=start,
            )
        self._offset += size
        if convert is not None:
            return convert(data)
        return data


def decode_uint(data: bytes) -> int:
    """Decode bytes as an unsigned integer, most significant byte first."""
    return int.from_bytes(data, "big", signed=False)


def to_signed(value: int, width: int) -> int:
    """Reinterpret an unsigned value of width bytes as two's-complement."""
    if (signed_max := _SIGNED_MAX.get(width)) is None:
        signed_max = 2 ** (8 * width - 1) - 1
    if value > signed_max:
        return value - 2 ** (8 * width)
    return value


def read_byte(reader: ByteReader, field: str) -> int:
    """Read a single unsigned byte."""
    return reader.read(1, field, decode_uint)  # type: ignore[return-value]


def read_long(reader: ByteReader, field: str) -> int:
    """Read a signed 32-bit big-endian value."""
    return to_signed(reader.read(LONG_SIZE, field, decode_uint), LONG_SIZE)  # type: ignore[arg-type]


def read_quad(reader: ByteReader, field: str) -> int:
    """Read a signed 64-bit big-endian value."""
    return to_signed(reader.read(QUAD_SIZE, field, decode_uint), QUAD_SIZE)  # type: ignore[arg-type]


def read_time(reader: ByteReader, width: int, field: str) -> int:
    """Read a signed time value of the data block's time width."""
    if width == LONG_SIZE:
        return read_long(reader, field)
    if width == QUAD_SIZE:
        return read_quad(reader, field)
    raise ValueError(f"Unsupported time width: {width}")


def read_line(reader: ByteReader, field: str) -> bytes:
    """Read bytes up to the next newline, consuming and dropping the newline."""
    start = reader.offset
    line = bytearray()
    while True:
        try:
            char = reader.read(1, field)
        except TruncatedInputError as err:
            raise TruncatedInputError(
                "Stream ended before newline terminator", field=field, offset=start
            ) from err
        if char == b"\n":
            break
        line += char  # type: ignore[operator]
    _LOGGER.debug("Read %d byte line for %s at offset %d", len(line), field, start)
    return bytes(line)
