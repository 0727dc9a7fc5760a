"""Library for locating and decoding TZif files for a timezone.

This package follows the same approach as zoneinfo for finding timezone
data, using both the system TZPATH and the tzdata python package. The
tzdata package is preferred so that results are the same across systems.
"""

from __future__ import annotations

import logging
import os
import zoneinfo
from functools import cache
from importlib import resources

from .exceptions import TZifError
from .model import DecodedFile
from .tzif import read_tzif

__all__ = [
    "TimezoneInfoError",
    "read",
    "read_file",
    "read_timezones",
]

_LOGGER = logging.getLogger(__name__)


class TimezoneInfoError(Exception):
    """Raised on error finding or reading timezone information."""


@cache
def _read_system_timezones() -> frozenset[str]:
    """Read and cache the set of system and tzdata timezones."""
    return frozenset(zoneinfo.available_timezones())


@cache
def _read_tzdata_timezones() -> frozenset[str]:
    """Returns the set of valid timezones from tzdata only."""
    try:
        with resources.files("tzdata").joinpath("zones").open(
            "r", encoding="utf-8"
        ) as zones_file:
            return frozenset(line.strip() for line in zones_file.readlines())
    except ModuleNotFoundError:
        return frozenset()


def read_timezones() -> set[str]:
    """Returns the set of timezone keys that can be read."""
    return set(_read_system_timezones() | _read_tzdata_timezones())


def _find_tzfile(key: str) -> str | None:
    """Retrieve the path to a TZif file from a key."""
    for search_path in zoneinfo.TZPATH:
        filepath = os.path.join(search_path, key)
        if os.path.isfile(filepath):
            return filepath

    return None


def _iana_key_to_resource(key: str) -> tuple[str, str]:
    """Returns the package and resource file for the specified timezone."""
    if "/" not in key:
        return "tzdata.zoneinfo", key
    package_loc, resource = key.rsplit("/", 1)
    package = "tzdata.zoneinfo." + package_loc.replace("/", ".")
    return package, resource


def read_file(path: str | os.PathLike[str], *, strict: bool = False) -> DecodedFile:
    """Decode the TZif file at the specified path e.g. /etc/localtime."""
    _LOGGER.debug("Reading TZif file: %s", path)
    try:
        with open(path, "rb") as tzfile:
            return read_tzif(tzfile, strict=strict)
    except OSError as err:
        raise TimezoneInfoError(f"Unable to open TZif file: {path}") from err
    except TZifError as err:
        raise TimezoneInfoError(f"Unable to decode TZif file {path}: {err}") from err


def read(key: str, *, strict: bool = False) -> DecodedFile:
    """Find the TZif file for the timezone key and decode it."""
    _LOGGER.debug("Reading timezone: %s", key)
    return _read_cache(key, strict)


@cache
def _read_cache(key: str, strict: bool) -> DecodedFile:
    if key not in _read_system_timezones() and key not in _read_tzdata_timezones():
        raise TimezoneInfoError(f"Unable to find timezone in system timezones: {key}")

    # Prefer tzdata package
    (package, resource) = _iana_key_to_resource(key)
    try:
        with resources.files(package).joinpath(resource).open("rb") as tzdata_file:
            _LOGGER.debug("Using tzdata package for timezone: %s", key)
            return read_tzif(tzdata_file, strict=strict)
    except ModuleNotFoundError:
        # Key is only present in the system timezones
        pass
    except FileNotFoundError:
        pass
    except TZifError as err:
        raise TimezoneInfoError(f"Unable to load tzdata module: {key}: {err}") from err

    # Fallback to zoneinfo file on local disk
    tzfile = _find_tzfile(key)
    if tzfile is not None:
        return read_file(tzfile, strict=strict)

    raise TimezoneInfoError(f"Unable to find timezone data for {key}")
