"""Library for decoding TZif files.

A TZif file is the compiled form of an IANA time zone database entry as
consumed by the POSIX localtime and tzset functions. See rfc8536 for the
TZif file format.

The file starts with a v1 header and data block using 32-bit times. Version
2+ files follow that with a second header and data block using 64-bit times,
then a footer containing a POSIX TZ string:

    v1 header | v1 data block | v2+ header | v2+ data block | \\n TZ string \\n

Every header and data block is decoded with the same logic, parametrized
by the size of the time values. The decoded fields are returned as is and
are not interpreted (e.g. the TZ string is not evaluated).

Note: This implementation is more verbose than the zoneinfo implementation
and contains more documentation and references to the file format to serve
as a resource for understanding the format.
"""

from __future__ import annotations

import io
import logging
from typing import IO

from .designations import decode_abbrevs
from .exceptions import (
    AbbrevIndexOutOfRangeError,
    BadMagicError,
    IndicatorCountError,
    InvalidCountError,
    InvalidDataError,
    InvalidFooterError,
    InvalidTypeCountError,
    TransitionTypeOutOfRangeError,
    UnsortedTransitionsError,
    UnsupportedVersionError,
    VersionMismatchError,
)
from .model import DecodedFile, Header, LeapSecond, LocalTimeType, Section, TZifVersion
from .reader import (
    LONG_SIZE,
    QUAD_SIZE,
    ByteReader,
    read_byte,
    read_line,
    read_long,
    read_time,
)

__all__ = [
    "read_header",
    "read_ttinfo",
    "read_section",
    "read_tzif",
    "decode",
]

_LOGGER = logging.getLogger(__name__)

_RESERVED_SIZE = 15

# The six counts that follow the reserved bytes, in file order
_HEADER_COUNTS = ("isutcnt", "isstdcnt", "leapcnt", "timecnt", "typecnt", "charcnt")


def read_header(reader: ByteReader) -> Header:
    """Read a 44 byte TZif header."""
    magic_offset = reader.offset
    magic = reader.read(4, "magic")
    if magic != Header.MAGIC:
        raise BadMagicError(
            f"TZif file did not contain magic header, found {magic!r}",
            field="magic",
            offset=magic_offset,
        )
    version_offset = reader.offset
    version_byte = reader.read(1, "version")
    try:
        version = TZifVersion(version_byte)
    except ValueError as err:
        raise UnsupportedVersionError(
            f"Unsupported TZif version {version_byte!r}",
            field="version",
            offset=version_offset,
        ) from err
    reader.read(_RESERVED_SIZE, "reserved")
    counts: dict[str, int] = {}
    for name in _HEADER_COUNTS:
        count_offset = reader.offset
        if (count := read_long(reader, name)) < 0:
            raise InvalidCountError(
                f"Header count must not be negative, was {count}",
                field=name,
                offset=count_offset,
            )
        counts[name] = count
    return Header(magic=magic, version=version, **counts)  # type: ignore[arg-type]


def read_ttinfo(reader: ByteReader) -> LocalTimeType:
    """Read a six byte local time type record.

    The record contains:
      - utoff (4 bytes): Number of seconds to add to UTC to determine local time
      - dst (1 byte): Indicates the time is DST (1) or standard (0)
      - idx (1 byte): Offset index into the time zone designation octets
    """
    utoff = read_long(reader, "utoff")
    is_dst = read_byte(reader, "dst") != 0
    abbrev_index = read_byte(reader, "idx")
    return LocalTimeType(utoff=utoff, is_dst=is_dst, abbrev_index=abbrev_index)


def read_section(reader: ByteReader, time_width: int) -> Section:
    """Read a header and the data block that follows it."""
    if time_width not in (LONG_SIZE, QUAD_SIZE):
        raise ValueError(f"Unsupported time width: {time_width}")

    header_offset = reader.offset
    header = read_header(reader)
    if header.typecnt == 0:
        raise InvalidTypeCountError(
            "Local time records in block is zero",
            field="typecnt",
            offset=header_offset + Header.SIZE - 8,
        )
    _LOGGER.debug(
        "Reading %d-byte time data block at offset %d: %s",
        time_width,
        reader.offset,
        header,
    )

    # A series of transition times in ascending order
    transition_times = tuple(
        read_time(reader, time_width, "transition_time")
        for _ in range(header.timecnt)
    )

    # A series of integers specifying the type of local time of the corresponding
    # transition time. These are zero-based indices into the array of local
    # time type records. (from 0 to typecnt-1)
    transition_types = tuple(
        read_byte(reader, "transition_type") for _ in range(header.timecnt)
    )

    local_time_types = tuple(read_ttinfo(reader) for _ in range(header.typecnt))

    # An array of NUL-terminated time zone designation strings
    designations: bytes = reader.read(header.charcnt, "designations")  # type: ignore[assignment]

    # Pairs of the time of the leap second and the total correction after it. The
    # correction is always a 32-bit value, even in the 64-bit data block.
    leap_seconds = tuple(
        LeapSecond(
            occurrence=read_time(reader, time_width, "leap_occurrence"),
            correction=read_long(reader, "leap_correction"),
        )
        for _ in range(header.leapcnt)
    )

    # Standard/wall indicators determine if the transition times are standard time (1)
    # or wall clock time (0).
    std_indicators = tuple(
        read_byte(reader, "std_indicator") for _ in range(header.isstdcnt)
    )

    # UTC/local indicators determine if the transition times are UTC (1) or local time (0).
    ut_indicators = tuple(
        read_byte(reader, "ut_indicator") for _ in range(header.isutcnt)
    )

    return Section(
        header=header,
        time_width=time_width,
        transition_times=transition_times,
        transition_types=transition_types,
        local_time_types=local_time_types,
        designations=designations,
        abbreviations=decode_abbrevs(designations),
        leap_seconds=leap_seconds,
        std_indicators=std_indicators,
        ut_indicators=ut_indicators,
    )


def _read_footer(reader: ByteReader) -> str:
    """Read the newline enclosed POSIX TZ string that ends a v2+ file."""
    footer_offset = reader.offset
    if reader.read(1, "footer") != b"\n":
        raise InvalidFooterError(
            "TZ string footer did not start with a newline",
            field="footer",
            offset=footer_offset,
        )
    tz_string = read_line(reader, "footer")
    try:
        return tz_string.decode("ascii")
    except UnicodeDecodeError as err:
        raise InvalidFooterError(
            f"TZ string footer is not ASCII: {tz_string!r}",
            field="footer",
            offset=footer_offset + 1,
        ) from err


def _validate_section(section: Section, block: str) -> None:
    """Check references and ordering within a single data block.

    The block label (v1 or v2+) is included in error messages since both data
    blocks are checked the same way.
    """
    header = section.header
    prefix = f"{block} data block: "
    if header.charcnt == 0:
        raise InvalidDataError(
            prefix + "Total number of octets is zero", field="charcnt"
        )
    if header.isutcnt not in (0, header.typecnt):
        raise IndicatorCountError(
            prefix
            + f"UTC/local indicators in datablock mismatched ({header.isutcnt}, {header.typecnt})",
            field="isutcnt",
        )
    if header.isstdcnt not in (0, header.typecnt):
        raise IndicatorCountError(
            prefix
            + f"standard/wall indicators in datablock mismatched ({header.isstdcnt}, {header.typecnt})",
            field="isstdcnt",
        )
    for index, (isut, isstd) in enumerate(
        zip(section.ut_indicators, section.std_indicators)
    ):
        if isut and not isstd:
            raise IndicatorCountError(
                prefix
                + f"Local time type {index} has UT indicator set but standard indicator clear",
                field="ut_indicator",
            )
    for index, local_time_type in enumerate(section.local_time_types):
        if local_time_type.abbrev_index >= header.charcnt:
            raise AbbrevIndexOutOfRangeError(
                prefix
                + f"Local time type {index} designation index {local_time_type.abbrev_index} "
                f"is outside {header.charcnt} designation octets",
                field="idx",
            )
    for position, index in enumerate(section.transition_types):
        if index >= header.typecnt:
            raise TransitionTypeOutOfRangeError(
                prefix
                + f"transition_type out of bounds {index} >= {header.typecnt} at transition {position}",
                field="transition_type",
            )
    for position in range(1, len(section.transition_times)):
        if section.transition_times[position] < section.transition_times[position - 1]:
            raise UnsortedTransitionsError(
                prefix
                + f"Transition time {position} is before the previous transition",
                field="transition_time",
            )
    for position in range(1, len(section.leap_seconds)):
        if (
            section.leap_seconds[position].occurrence
            <= section.leap_seconds[position - 1].occurrence
        ):
            raise UnsortedTransitionsError(
                prefix
                + f"Leap second {position} does not occur after the previous leap second",
                field="leap_occurrence",
            )


def _validate(result: DecodedFile) -> None:
    """Run strict checks across every data block in the file."""
    _validate_section(result.legacy, "v1")
    if result.extended is not None:
        if result.extended.header.version != result.legacy.header.version:
            raise VersionMismatchError(
                f"Version mismatch between v1 header ({result.legacy.header.version.value!r}) "
                f"and v2+ header ({result.extended.header.version.value!r})",
                field="version",
            )
        _validate_section(result.extended, "v2+")


def read_tzif(stream: IO[bytes], *, strict: bool = False) -> DecodedFile:
    """Decode the TZif file read from the binary stream.

    When strict is set, cross references between fields are checked and an
    InvalidDataError is raised for an inconsistent file.
    """
    reader = ByteReader(stream)

    # V1 header and block
    legacy = read_section(reader, LONG_SIZE)
    version = legacy.header.version
    if not version.is_extended:
        result = DecodedFile(magic=legacy.header.magic, version=version, legacy=legacy)
    else:
        # V2+ header, block and footer
        _LOGGER.debug("Version %d file, reading 64-bit data block", version.number)
        extended = read_section(reader, QUAD_SIZE)
        posix_tz_string = _read_footer(reader)
        result = DecodedFile(
            magic=legacy.header.magic,
            version=version,
            legacy=legacy,
            extended=extended,
            posix_tz_string=posix_tz_string,
        )

    if strict:
        _validate(result)
    return result


def decode(content: bytes, *, strict: bool = False) -> DecodedFile:
    """Decode the TZif file contents."""
    buf = io.BytesIO(content)
    result = read_tzif(buf, strict=strict)
    if trailing := len(content) - buf.tell():
        _LOGGER.debug("Ignoring %d trailing bytes after TZif data", trailing)
    return result
