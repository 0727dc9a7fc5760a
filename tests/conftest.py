"""Test fixtures."""

from collections.abc import Callable, Sequence
import dataclasses
import json
import struct
from typing import Any

from pydantic_core import to_jsonable_python
import pytest

UTC_DESIGNATIONS = b"UTC\x00"

LocalTimeTypeTuple = tuple[int, bool, int]


def encode_section(
    *,
    version: bytes = b"\x00",
    time_width: int = 4,
    transition_times: Sequence[int] = (),
    transition_types: Sequence[int] = (),
    local_time_types: Sequence[LocalTimeTypeTuple] = ((0, False, 0),),
    designations: bytes = UTC_DESIGNATIONS,
    leap_seconds: Sequence[tuple[int, int]] = (),
    std_indicators: Sequence[int] = (),
    ut_indicators: Sequence[int] = (),
    magic: bytes = b"TZif",
    typecnt: int | None = None,
) -> bytes:
    """Encode a TZif header and data block, used to build test files."""
    time_format = "l" if time_width == 4 else "q"
    header = struct.pack(
        ">4sc15x6l",
        magic,
        version,
        len(ut_indicators),
        len(std_indicators),
        len(leap_seconds),
        len(transition_times),
        len(local_time_types) if typecnt is None else typecnt,
        len(designations),
    )
    return b"".join(
        [
            header,
            struct.pack(f">{len(transition_times)}{time_format}", *transition_times),
            bytes(transition_types),
            b"".join(struct.pack(">l?B", *ttinfo) for ttinfo in local_time_types),
            designations,
            b"".join(
                struct.pack(f">{time_format}l", *leap) for leap in leap_seconds
            ),
            bytes(std_indicators),
            bytes(ut_indicators),
        ]
    )


def encode_tzif(
    version: bytes = b"2",
    footer: bytes = b"\nUTC0\n",
    legacy: dict[str, Any] | None = None,
    extended: dict[str, Any] | None = None,
) -> bytes:
    """Encode a complete TZif file with a v1 block and, for v2+, a v2+ block."""
    content = encode_section(version=version, time_width=4, **(legacy or {}))
    if version == b"\x00":
        return content
    return (
        content
        + encode_section(version=version, time_width=8, **(extended or {}))
        + footer
    )


@pytest.fixture
def section_factory() -> Callable[..., bytes]:
    """Fixture that encodes a single header and data block."""
    return encode_section


@pytest.fixture
def tzif_factory() -> Callable[..., bytes]:
    """Fixture that encodes a complete TZif file."""
    return encode_tzif


class DataclassEncoder(json.JSONEncoder):
    """Class that can dump data classes as dict for comparison to golden."""

    def default(self, o: Any) -> Any:
        if dataclasses.is_dataclass(o) and not isinstance(o, type):
            # Omit empty
            return {k: v for (k, v) in dataclasses.asdict(o).items() if v}
        if isinstance(o, dict):
            return {k: v for (k, v) in o.items() if v}
        return to_jsonable_python(o, bytes_mode="hex")


@pytest.fixture
def json_encoder() -> json.JSONEncoder:
    """Fixture that creates a json encoder."""
    return DataclassEncoder()
