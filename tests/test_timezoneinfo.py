"""Tests for locating and reading TZif files for a timezone."""

from collections.abc import Callable
import pathlib

import pytest

from tzif_decoder import timezoneinfo
from tzif_decoder.exceptions import BadMagicError, UnsortedTransitionsError
from tzif_decoder.model import TZifVersion


def test_invalid_zoneinfo() -> None:
    """Verify exception handling for an invalid timezone."""

    with pytest.raises(timezoneinfo.TimezoneInfoError, match="Unable to find timezone"):
        timezoneinfo.read("invalid")


def test_read_timezones() -> None:
    """Test the set of known timezone keys."""
    keys = timezoneinfo.read_timezones()
    assert "America/Los_Angeles" in keys
    assert "UTC" in keys
    assert "invalid" not in keys


@pytest.mark.parametrize(
    "key,tz_string,abbrevs",
    [
        ("America/Los_Angeles", "PST8PDT,M3.2.0,M11.1.0", {"PST", "PDT"}),
        ("Europe/Warsaw", "CET-1CEST,M3.5.0,M10.5.0/3", {"CET", "CEST"}),
        ("Asia/Tokyo", "JST-9", {"JST"}),
        ("UTC", "UTC0", {"UTC"}),
    ],
)
def test_read(key: str, tz_string: str, abbrevs: set[str]) -> None:
    """Test reading timezones from the tzdata package."""
    result = timezoneinfo.read(key)
    assert result.magic == b"TZif"
    assert result.version.is_extended
    assert result.extended is not None
    assert result.posix_tz_string == tz_string

    section = result.extended
    assert list(section.transition_times) == sorted(section.transition_times)
    names = {section.abbreviation(ltt) for ltt in section.local_time_types}
    assert abbrevs <= names


def test_read_is_cached() -> None:
    """Test repeated reads of the same key return the same result."""
    assert timezoneinfo.read("Asia/Tokyo") is timezoneinfo.read("Asia/Tokyo")


def test_read_file(tmp_path: pathlib.Path, tzif_factory: Callable[..., bytes]) -> None:
    """Test reading a TZif file from a path."""
    path = tmp_path / "Example"
    path.write_bytes(tzif_factory(version=b"3", footer=b"\n<+00>0\n"))
    result = timezoneinfo.read_file(path)
    assert result.version == TZifVersion.V3
    assert result.posix_tz_string == "<+00>0"


def test_read_file_missing(tmp_path: pathlib.Path) -> None:
    """Test reading a path that does not exist."""
    with pytest.raises(timezoneinfo.TimezoneInfoError, match="Unable to open"):
        timezoneinfo.read_file(tmp_path / "missing")


def test_read_file_invalid(tmp_path: pathlib.Path) -> None:
    """Test reading a file that is not a TZif file."""
    path = tmp_path / "invalid"
    path.write_bytes(b"ZZZZ" + b"\x00" * 100)
    with pytest.raises(
        timezoneinfo.TimezoneInfoError, match="Unable to decode"
    ) as exc_info:
        timezoneinfo.read_file(path)
    assert isinstance(exc_info.value.__cause__, BadMagicError)


def test_read_file_strict(
    tmp_path: pathlib.Path, tzif_factory: Callable[..., bytes]
) -> None:
    """Test that strict validation errors are reported from the loader."""
    path = tmp_path / "unsorted"
    path.write_bytes(
        tzif_factory(
            version=b"2",
            extended={"transition_times": (10, 0), "transition_types": (0, 0)},
        )
    )
    assert timezoneinfo.read_file(path).extended is not None
    with pytest.raises(timezoneinfo.TimezoneInfoError) as exc_info:
        timezoneinfo.read_file(path, strict=True)
    assert isinstance(exc_info.value.__cause__, UnsortedTransitionsError)
