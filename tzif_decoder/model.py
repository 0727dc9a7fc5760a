"""Data model for the tzif_decoder library.

See rfc8536 (and its update rfc9636) for the TZif file format. These
records hold the raw decoded fields of the file and are not interpreted,
e.g. transition times are seconds since the epoch as stored in the file.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar

from .designations import abbreviation_at
from .exceptions import TransitionTypeOutOfRangeError

__all__ = [
    "TZifVersion",
    "Header",
    "LocalTimeType",
    "LeapSecond",
    "Section",
    "DecodedFile",
]


class TZifVersion(enum.Enum):
    """Defines the known values of the TZif version byte."""

    V1 = b"\x00"
    V2 = b"2"
    V3 = b"3"
    V4 = b"4"

    @property
    def number(self) -> int:
        """Return the version as an integer, where the NUL byte is version 1."""
        if self is TZifVersion.V1:
            return 1
        return int(self.value.decode("ascii"))

    @property
    def is_extended(self) -> bool:
        """Return True if the file has a 64-bit data block and a footer."""
        return self is not TZifVersion.V1


@dataclass(frozen=True)
class Header:
    """TZif header information for a single data block."""

    SIZE: ClassVar[int] = 44
    MAGIC: ClassVar[bytes] = b"TZif"

    magic: bytes
    """The four byte magic sequence identifying the file."""

    version: TZifVersion
    """The version of the file format."""

    isutcnt: int
    """The number of UT/local indicators in the data block."""

    isstdcnt: int
    """The number of standard/wall indicators in the data block."""

    leapcnt: int
    """The number of leap second records in the data block."""

    timecnt: int
    """The number of transition times in the data block."""

    typecnt: int
    """The number of local time type records in the data block."""

    charcnt: int
    """The number of octets of time zone designations in the data block."""


@dataclass(frozen=True)
class LocalTimeType:
    """A ttinfo record describing a local time type."""

    utoff: int
    """Number of seconds added to UTC to determine local time."""

    is_dst: bool
    """Determines if local time is Daylight Savings Time (else Standard time)."""

    abbrev_index: int
    """Byte offset into the time zone designation octets (0 to charcnt-1)."""


@dataclass(frozen=True)
class LeapSecond:
    """A correction that needs to be applied to UTC in order to determine TAI.

    The occurrence is the time at which the leap-second correction occurs.
    The correction is the total correction in effect on or after the occurrence.
    """

    occurrence: int
    correction: int


@dataclass(frozen=True)
class Section:
    """A header and data block, with either 32-bit or 64-bit times."""

    header: Header

    time_width: int
    """The size in bytes of transition and leap second times (4 or 8)."""

    transition_times: tuple[int, ...]
    """Times at which the rules for computing local time change, in file order."""

    transition_types: tuple[int, ...]
    """Index into local_time_types for each of the transition_times."""

    local_time_types: tuple[LocalTimeType, ...]

    designations: bytes
    """The raw NUL delimited time zone designation octets."""

    abbreviations: tuple[str, ...]
    """The designation octets split on NUL, in order.

    These are not addressable by LocalTimeType.abbrev_index, which is a byte
    offset into designations; use abbreviation() instead.
    """

    leap_seconds: tuple[LeapSecond, ...]

    std_indicators: tuple[int, ...]
    """Standard/wall indicators, one per local time type when present."""

    ut_indicators: tuple[int, ...]
    """UT/local indicators, one per local time type when present."""

    def abbreviation(self, local_time_type: LocalTimeType) -> str:
        """Return the designation referenced by the local time type."""
        return abbreviation_at(self.designations, local_time_type.abbrev_index)

    def transition_types_for(self) -> tuple[LocalTimeType, ...]:
        """Return the local time type in effect after each transition."""
        result = []
        for position, index in enumerate(self.transition_types):
            if index >= len(self.local_time_types):
                raise TransitionTypeOutOfRangeError(
                    f"Transition {position} refers to local time type {index} "
                    f"but only {len(self.local_time_types)} exist",
                    field="transition_types",
                )
            result.append(self.local_time_types[index])
        return tuple(result)

    @property
    def leap_second_expiration(self) -> int | None:
        """Return the expiration time of the leap second table, if present.

        Version 4 files may mark the leap second table expiration with a
        final record that repeats the previous correction.
        """
        if self.header.version.number < 4 or len(self.leap_seconds) < 2:
            return None
        last, previous = self.leap_seconds[-1], self.leap_seconds[-2]
        if last.correction != previous.correction:
            return None
        return last.occurrence


@dataclass(frozen=True)
class DecodedFile:
    """The results of decoding a TZif file."""

    magic: bytes

    version: TZifVersion

    legacy: Section
    """The version 1 data block with 32-bit times, always present."""

    extended: Section | None = None
    """The version 2+ data block with 64-bit times."""

    posix_tz_string: str | None = None
    """The POSIX TZ string from the version 2+ footer, empty when there is none."""

    @property
    def data(self) -> Section:
        """Return the most complete data block in the file."""
        if self.extended is not None:
            return self.extended
        return self.legacy
